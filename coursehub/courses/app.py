"""
Online Course API - Course System Wiring
Registers the entity routers and prepares collections on startup
"""

import logging

from fastapi import FastAPI
from motor.motor_asyncio import AsyncIOMotorDatabase

from coursehub.courses import config
from coursehub.courses.schemas import COLLECTION_INDEXES, COLLECTION_SCHEMAS

# Import routers
from coursehub.courses.user_router import router as user_router
from coursehub.courses.course_router import router as course_router
from coursehub.courses.lesson_router import router as lesson_router
from coursehub.courses.quiz_router import router as quiz_router
from coursehub.courses.submission_router import router as submission_router
from coursehub.courses.enrollment_router import router as enrollment_router

logger = logging.getLogger(__name__)

# ==================== DATABASE INDEXES ====================

async def create_course_indexes(db: AsyncIOMotorDatabase):
    """Create MongoDB indexes on every filterable field"""
    for collection, fields in COLLECTION_INDEXES.items():
        for field in fields:
            await db[collection].create_index(field)
    logger.info("Course system indexes created")


async def apply_schema_validators(db: AsyncIOMotorDatabase):
    """Attach the $jsonSchema validators, creating collections as needed"""
    existing = set(await db.list_collection_names())
    for collection, schema in COLLECTION_SCHEMAS.items():
        if collection in existing:
            await db.command("collMod", collection, validator=schema["validator"])
        else:
            await db.create_collection(collection, validator=schema["validator"])
    logger.info("Schema validators applied to %d collections", len(COLLECTION_SCHEMAS))

# ==================== ROUTER SETUP ====================

def setup_course_routes(app: FastAPI):
    """Register all course-related routers"""
    prefix = config.API_PREFIX

    app.include_router(user_router, prefix=f"{prefix}/users")
    app.include_router(course_router, prefix=f"{prefix}/courses")
    app.include_router(lesson_router, prefix=f"{prefix}/lessons")
    app.include_router(quiz_router, prefix=f"{prefix}/quizzes")
    app.include_router(submission_router, prefix=f"{prefix}/submissions")
    app.include_router(enrollment_router, prefix=f"{prefix}/enrollments")

    logger.debug("Course routes registered under %s", prefix)

# ==================== STARTUP ====================

async def startup_course_system(db: AsyncIOMotorDatabase):
    """Initialize course system on app startup"""
    await create_course_indexes(db)
    if config.APPLY_SCHEMA_VALIDATORS:
        await apply_schema_validators(db)
    logger.info("Course system initialized")
