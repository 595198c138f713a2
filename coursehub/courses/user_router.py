from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List

from coursehub.courses.models import (
    UserCreate, UserResponse, CREATE_RESPONSES, LIST_RESPONSES
)
from coursehub.courses.database import create_user, list_users
from coursehub.courses.dependencies import get_db

router = APIRouter(tags=["Users"])

# ==================== USER ENDPOINTS ====================

@router.post("", status_code=201, response_model=UserResponse, responses=CREATE_RESPONSES)
async def create_user_endpoint(
    user: UserCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Create a new user

    Returns 400 "User already exists" when the email is taken.
    """
    return await create_user(db, user.model_dump())


@router.get("", response_model=List[UserResponse], responses=LIST_RESPONSES)
async def list_users_endpoint(db: AsyncIOMotorDatabase = Depends(get_db)):
    """Get all users"""
    return await list_users(db)
