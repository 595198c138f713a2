from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional

from coursehub.courses.models import (
    QuizCreate, QuizUpdate, QuizResponse, MessageResponse,
    CREATE_RESPONSES, LIST_RESPONSES, UPDATE_RESPONSES, DELETE_RESPONSES
)
from coursehub.courses.database import (
    create_quiz, list_quizzes, update_quiz, delete_quiz
)
from coursehub.courses.dependencies import get_db

router = APIRouter(tags=["Quizzes"])

# ==================== QUIZ CRUD ====================

@router.post("", status_code=201, response_model=QuizResponse, responses=CREATE_RESPONSES)
async def create_quiz_endpoint(
    quiz: QuizCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Create a new quiz"""
    return await create_quiz(db, quiz.model_dump())


@router.get("", response_model=List[QuizResponse], responses=LIST_RESPONSES)
async def list_quizzes_endpoint(
    lesson: Optional[str] = Query(None, description="Filter by lesson ID"),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Get all quizzes with the lesson expanded"""
    return await list_quizzes(db, lesson=lesson)


@router.put("/{quiz_id}", response_model=QuizResponse, responses=UPDATE_RESPONSES)
async def update_quiz_endpoint(
    quiz_id: str,
    updates: QuizUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Update a quiz"""
    return await update_quiz(db, quiz_id, {k: v for k, v in updates.model_dump().items() if v is not None})


@router.delete("/{quiz_id}", response_model=MessageResponse, responses=DELETE_RESPONSES)
async def delete_quiz_endpoint(
    quiz_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Delete a quiz"""
    return await delete_quiz(db, quiz_id)
