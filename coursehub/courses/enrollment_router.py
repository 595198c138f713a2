"""
ENROLLMENT ROUTER
File: coursehub/courses/enrollment_router.py

Links a student to a course. `enrollmentDate` defaults to the time the
enrollment is created.
"""

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional

from coursehub.courses.models import (
    EnrollmentCreate, EnrollmentUpdate, EnrollmentResponse, MessageResponse,
    CREATE_RESPONSES, LIST_RESPONSES, UPDATE_RESPONSES, DELETE_RESPONSES
)
from coursehub.courses.database import (
    create_enrollment, list_enrollments, update_enrollment, delete_enrollment
)
from coursehub.courses.dependencies import get_db

router = APIRouter(tags=["Enrollments"])

# ==================== ENROLLMENT ENDPOINTS ====================

@router.post("", status_code=201, response_model=EnrollmentResponse, responses=CREATE_RESPONSES)
async def enroll_endpoint(
    enrollment: EnrollmentCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Enroll a student in a course"""
    return await create_enrollment(db, enrollment.model_dump(by_alias=True))


@router.get("", response_model=List[EnrollmentResponse], responses=LIST_RESPONSES)
async def list_enrollments_endpoint(
    student: Optional[str] = Query(None, description="Filter by student ID"),
    course: Optional[str] = Query(None, description="Filter by course ID"),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Get enrollments with student and course expanded"""
    return await list_enrollments(db, student=student, course=course)


@router.put("/{enrollment_id}", response_model=EnrollmentResponse, responses=UPDATE_RESPONSES)
async def update_enrollment_endpoint(
    enrollment_id: str,
    updates: EnrollmentUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Update an enrollment"""
    return await update_enrollment(
        db,
        enrollment_id,
        {k: v for k, v in updates.model_dump(by_alias=True).items() if v is not None}
    )


@router.delete("/{enrollment_id}", response_model=MessageResponse, responses=DELETE_RESPONSES)
async def delete_enrollment_endpoint(
    enrollment_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Delete an enrollment"""
    return await delete_enrollment(db, enrollment_id)
