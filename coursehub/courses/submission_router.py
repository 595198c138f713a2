"""
SUBMISSION ROUTER
File: coursehub/courses/submission_router.py

Stores a student's answer to a quiz. Listing supports filtering by
student and/or quiz; both filters combine as AND.
"""

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional

from coursehub.courses.models import (
    SubmissionCreate, SubmissionUpdate, SubmissionResponse, MessageResponse,
    CREATE_RESPONSES, LIST_RESPONSES, UPDATE_RESPONSES, DELETE_RESPONSES
)
from coursehub.courses.database import (
    create_submission, list_submissions, update_submission, delete_submission
)
from coursehub.courses.dependencies import get_db

router = APIRouter(tags=["Submissions"])

# ==================== SUBMISSION ENDPOINTS ====================

@router.post("", status_code=201, response_model=SubmissionResponse, responses=CREATE_RESPONSES)
async def submit_answer(
    submission: SubmissionCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Submit an answer to a quiz"""
    return await create_submission(db, submission.model_dump())


@router.get("", response_model=List[SubmissionResponse], responses=LIST_RESPONSES)
async def list_submissions_endpoint(
    student: Optional[str] = Query(None, description="Filter by student ID"),
    quiz: Optional[str] = Query(None, description="Filter by quiz ID"),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Get submissions with student and quiz expanded"""
    return await list_submissions(db, student=student, quiz=quiz)


@router.put("/{submission_id}", response_model=SubmissionResponse, responses=UPDATE_RESPONSES)
async def update_submission_endpoint(
    submission_id: str,
    updates: SubmissionUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Update a submission"""
    return await update_submission(db, submission_id, {k: v for k, v in updates.model_dump().items() if v is not None})


@router.delete("/{submission_id}", response_model=MessageResponse, responses=DELETE_RESPONSES)
async def delete_submission_endpoint(
    submission_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """Delete a submission"""
    return await delete_submission(db, submission_id)
