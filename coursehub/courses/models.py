from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any, Union
from datetime import datetime
from enum import Enum

# A relation field holds the referenced id, or the referenced document once expanded
Ref = Union[Dict[str, Any], str, None]

# ==================== ENUMS ====================

class UserRole(str, Enum):
    STUDENT = "student"
    INSTRUCTOR = "instructor"

# ==================== USER MODELS ====================

class UserCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, examples=["John Doe"])
    email: str = Field(..., min_length=1, examples=["john@example.com"])
    role: UserRole = Field(..., examples=["student"])

class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str

# ==================== COURSE MODELS ====================

class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1, examples=["Introduction to Node.js"])
    instructor: str = Field(..., min_length=1, description="Instructor user id")
    description: Optional[str] = Field(None, examples=["Learn Node.js fundamentals"])
    lessons: List[str] = Field(default_factory=list, description="Lesson ids")

class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    instructor: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    lessons: Optional[List[str]] = None

class CourseResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    instructor: Ref = None
    lessons: List[Union[Dict[str, Any], str]] = []

# ==================== LESSON MODELS ====================

class LessonCreate(BaseModel):
    title: str = Field(..., min_length=1)
    course: str = Field(..., min_length=1, description="Course id")
    content: Optional[str] = None

class LessonUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    course: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None

class LessonResponse(BaseModel):
    id: str
    title: str
    content: Optional[str] = None
    course: Ref = None

# ==================== QUIZ MODELS ====================

class QuizCreate(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    lesson: str = Field(..., min_length=1, description="Lesson id")
    options: List[str] = Field(default_factory=list)

class QuizUpdate(BaseModel):
    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    lesson: Optional[str] = Field(None, min_length=1)
    options: Optional[List[str]] = None

class QuizResponse(BaseModel):
    id: str
    question: str
    options: List[str] = []
    answer: str
    lesson: Ref = None

# ==================== SUBMISSION MODELS ====================

class SubmissionCreate(BaseModel):
    student: str = Field(..., min_length=1, description="Student user id")
    quiz: str = Field(..., min_length=1, description="Quiz id")
    answer: str = Field(..., min_length=1)

class SubmissionUpdate(BaseModel):
    student: Optional[str] = Field(None, min_length=1)
    quiz: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)

class SubmissionResponse(BaseModel):
    id: str
    student: Ref = None
    quiz: Ref = None
    answer: str

# ==================== ENROLLMENT MODELS ====================

class EnrollmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student: str = Field(..., min_length=1, description="Student user id")
    course: str = Field(..., min_length=1, description="Course id")
    enrollment_date: Optional[datetime] = Field(
        None, alias="enrollmentDate", description="Defaults to the time of enrollment"
    )

class EnrollmentUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student: Optional[str] = Field(None, min_length=1)
    course: Optional[str] = Field(None, min_length=1)
    enrollment_date: Optional[datetime] = Field(None, alias="enrollmentDate")

class EnrollmentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    student: Ref = None
    course: Ref = None
    enrollment_date: Optional[datetime] = Field(None, alias="enrollmentDate")

# ==================== COMMON RESPONSES ====================

class MessageResponse(BaseModel):
    message: str

class FieldError(BaseModel):
    field: str
    message: str

class ValidationErrorResponse(BaseModel):
    message: str = Field(..., examples=["Missing required fields"])
    errors: List[FieldError] = []

class ServerErrorResponse(BaseModel):
    message: str = Field(..., examples=["Server error"])
    error: Optional[str] = None

# ==================== OPENAPI ERROR RESPONSES ====================

CREATE_RESPONSES = {
    400: {"model": ValidationErrorResponse, "description": "Missing fields or duplicate"},
    500: {"model": ServerErrorResponse, "description": "Server error"},
}

LIST_RESPONSES = {
    500: {"model": ServerErrorResponse, "description": "Server error"},
}

UPDATE_RESPONSES = {
    400: {"model": ValidationErrorResponse, "description": "Invalid body"},
    404: {"model": MessageResponse, "description": "Not found"},
    500: {"model": ServerErrorResponse, "description": "Server error"},
}

DELETE_RESPONSES = {
    404: {"model": MessageResponse, "description": "Not found"},
    500: {"model": ServerErrorResponse, "description": "Server error"},
}
