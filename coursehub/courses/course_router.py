from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional

from coursehub.courses.models import (
    CourseCreate, CourseUpdate, CourseResponse, MessageResponse,
    CREATE_RESPONSES, LIST_RESPONSES, UPDATE_RESPONSES, DELETE_RESPONSES
)
from coursehub.courses.database import (
    create_course, list_courses, update_course, delete_course
)
from coursehub.courses.dependencies import get_db

router = APIRouter(tags=["Courses"])

# ==================== COURSE CRUD ====================

@router.post("", status_code=201, response_model=CourseResponse, responses=CREATE_RESPONSES)
async def create_course_endpoint(
    course: CourseCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Create a new course"""
    return await create_course(db, course.model_dump())


@router.get("", response_model=List[CourseResponse], responses=LIST_RESPONSES)
async def list_courses_endpoint(
    title: Optional[str] = Query(None, description="Filter by course title (partial match, case-insensitive)"),
    instructor: Optional[str] = Query(None, description="Filter by instructor ID"),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Get all courses with optional filtering; instructor and lessons are expanded"""
    return await list_courses(db, title=title, instructor=instructor)


@router.put("/{course_id}", response_model=CourseResponse, responses=UPDATE_RESPONSES)
async def update_course_endpoint(
    course_id: str,
    updates: CourseUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Update a course"""
    return await update_course(db, course_id, {k: v for k, v in updates.model_dump().items() if v is not None})


@router.delete("/{course_id}", response_model=MessageResponse, responses=DELETE_RESPONSES)
async def delete_course_endpoint(
    course_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Delete a course

    Lessons and enrollments pointing at the course are left in place.
    """
    return await delete_course(db, course_id)
