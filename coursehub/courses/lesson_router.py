from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional

from coursehub.courses.models import (
    LessonCreate, LessonUpdate, LessonResponse, MessageResponse,
    CREATE_RESPONSES, LIST_RESPONSES, UPDATE_RESPONSES, DELETE_RESPONSES
)
from coursehub.courses.database import (
    create_lesson, list_lessons, update_lesson, delete_lesson
)
from coursehub.courses.dependencies import get_db

router = APIRouter(tags=["Lessons"])


@router.post("", status_code=201, response_model=LessonResponse, responses=CREATE_RESPONSES)
async def create_lesson_endpoint(
    lesson: LessonCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Create a new lesson"""
    return await create_lesson(db, lesson.model_dump())


@router.get("", response_model=List[LessonResponse], responses=LIST_RESPONSES)
async def list_lessons_endpoint(
    course: Optional[str] = Query(None, description="Filter by course ID"),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Get all lessons, optionally for one course"""
    return await list_lessons(db, course=course)


@router.put("/{lesson_id}", response_model=LessonResponse, responses=UPDATE_RESPONSES)
async def update_lesson_endpoint(
    lesson_id: str,
    updates: LessonUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return await update_lesson(db, lesson_id, {k: v for k, v in updates.model_dump().items() if v is not None})


@router.delete("/{lesson_id}", response_model=MessageResponse, responses=DELETE_RESPONSES)
async def delete_lesson_endpoint(
    lesson_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    return await delete_lesson(db, lesson_id)
