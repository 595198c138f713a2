import logging
import re
import secrets
from datetime import datetime, timezone
from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from coursehub.courses.errors import ConflictError, NotFoundError
from coursehub.courses.schemas import (
    USERS, COURSES, LESSONS, QUIZZES, SUBMISSIONS, ENROLLMENTS, RELATIONS
)

logger = logging.getLogger(__name__)

ID_PREFIXES = {
    USERS: "USR",
    COURSES: "CRS",
    LESSONS: "LSN",
    QUIZZES: "QZ",
    SUBMISSIONS: "SUB",
    ENROLLMENTS: "ENR",
}

ENTITY_LABELS = {
    USERS: "User",
    COURSES: "Course",
    LESSONS: "Lesson",
    QUIZZES: "Quiz",
    SUBMISSIONS: "Submission",
    ENROLLMENTS: "Enrollment",
}

# ==================== HELPERS ====================

def generate_id(prefix: str) -> str:
    """Generate unique ID with prefix"""
    return f"{prefix}_{secrets.token_hex(8).upper()}"


def serialize_mongo(doc: Optional[dict]) -> Optional[dict]:
    """Expose `_id` as `id` and drop version metadata"""
    if doc is None:
        return None
    d = dict(doc)
    d.pop("__v", None)
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    return d


def serialize_many(docs: List[dict]) -> List[dict]:
    return [serialize_mongo(doc) for doc in docs]


def exact_match_query(**filters) -> dict:
    """AND together the supplied filters; None or an empty value means no constraint"""
    return {field: value for field, value in filters.items() if value}


def store_datetime(value: datetime) -> datetime:
    """Naive UTC at millisecond precision, the form MongoDB keeps"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def title_match_query(title: Optional[str]) -> dict:
    """Case-insensitive literal substring match on title"""
    if not title:
        return {}
    return {"title": {"$regex": re.escape(title), "$options": "i"}}


async def expand_relations(db: AsyncIOMotorDatabase, collection: str, docs: List[dict]) -> List[dict]:
    """
    Replace reference ids with the referenced documents, in place.

    One $in lookup per relation field. Missing targets expand to None for
    single references and are dropped from list references.
    """
    for field, (target, is_list) in RELATIONS.get(collection, {}).items():
        ids = set()
        for doc in docs:
            value = doc.get(field)
            if is_list:
                ids.update(v for v in value or [] if isinstance(v, str))
            elif isinstance(value, str):
                ids.add(value)

        found: Dict[str, dict] = {}
        if ids:
            cursor = db[target].find({"_id": {"$in": list(ids)}})
            for ref in await cursor.to_list(length=None):
                found[ref["_id"]] = serialize_mongo(ref)

        for doc in docs:
            value = doc.get(field)
            if is_list:
                doc[field] = [found[v] for v in value or [] if isinstance(v, str) and v in found]
            elif isinstance(value, str):
                doc[field] = found.get(value)
    return docs

# ==================== GENERIC CRUD ====================

async def insert_document(db: AsyncIOMotorDatabase, collection: str, document: dict) -> dict:
    """Assign an id, persist and return the serialized document"""
    document["_id"] = generate_id(ID_PREFIXES[collection])
    await db[collection].insert_one(document)
    logger.info("Created %s %s", ENTITY_LABELS[collection], document["_id"])
    return serialize_mongo(document)


async def find_documents(db: AsyncIOMotorDatabase, collection: str, query: dict) -> List[dict]:
    """Find matching documents with their relations expanded"""
    cursor = db[collection].find(query)
    docs = serialize_many(await cursor.to_list(length=None))
    return await expand_relations(db, collection, docs)


async def update_document(db: AsyncIOMotorDatabase, collection: str, doc_id: str, updates: dict) -> dict:
    """
    Apply a partial update ($set of the supplied fields).
    Raises NotFoundError if no document has this id.
    """
    if updates:
        doc = await db[collection].find_one_and_update(
            {"_id": doc_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
    else:
        doc = await db[collection].find_one({"_id": doc_id})

    if doc is None:
        raise NotFoundError(f"{ENTITY_LABELS[collection]} not found")
    return serialize_mongo(doc)


async def delete_document(db: AsyncIOMotorDatabase, collection: str, doc_id: str) -> dict:
    """Delete by id. Raises NotFoundError if absent. No cascade."""
    result = await db[collection].delete_one({"_id": doc_id})
    label = ENTITY_LABELS[collection]
    if result.deleted_count == 0:
        raise NotFoundError(f"{label} not found")
    logger.info("Deleted %s %s", label, doc_id)
    return {"message": f"{label} deleted"}

# ==================== USER CRUD ====================

async def get_user_by_email(db: AsyncIOMotorDatabase, email: str) -> Optional[dict]:
    return await db[USERS].find_one({"email": email})


async def create_user(db: AsyncIOMotorDatabase, user_data: dict) -> dict:
    """
    Create new user.
    Email uniqueness is a pre-check, not a storage constraint: two
    concurrent creates with the same email can both succeed.
    """
    if await get_user_by_email(db, user_data["email"]):
        raise ConflictError("User already exists")

    user = {
        "name": user_data["name"],
        "email": user_data["email"],
        "role": user_data["role"],
    }
    return await insert_document(db, USERS, user)


async def list_users(db: AsyncIOMotorDatabase) -> List[dict]:
    """List all users"""
    return await find_documents(db, USERS, {})

# ==================== COURSE CRUD ====================

async def create_course(db: AsyncIOMotorDatabase, course_data: dict) -> dict:
    """Create new course"""
    course = {
        "title": course_data["title"],
        "description": course_data.get("description"),
        "instructor": course_data["instructor"],
        "lessons": course_data.get("lessons") or [],
    }
    return await insert_document(db, COURSES, course)


async def list_courses(db: AsyncIOMotorDatabase, title: Optional[str] = None, instructor: Optional[str] = None) -> List[dict]:
    """List courses, instructor and lessons expanded"""
    query = title_match_query(title)
    query.update(exact_match_query(instructor=instructor))
    return await find_documents(db, COURSES, query)


async def update_course(db: AsyncIOMotorDatabase, course_id: str, updates: dict) -> dict:
    return await update_document(db, COURSES, course_id, updates)


async def delete_course(db: AsyncIOMotorDatabase, course_id: str) -> dict:
    return await delete_document(db, COURSES, course_id)

# ==================== LESSON CRUD ====================

async def create_lesson(db: AsyncIOMotorDatabase, lesson_data: dict) -> dict:
    """Create lesson. The course's `lessons` list is not touched."""
    lesson = {
        "title": lesson_data["title"],
        "content": lesson_data.get("content"),
        "course": lesson_data["course"],
    }
    return await insert_document(db, LESSONS, lesson)


async def list_lessons(db: AsyncIOMotorDatabase, course: Optional[str] = None) -> List[dict]:
    return await find_documents(db, LESSONS, exact_match_query(course=course))


async def update_lesson(db: AsyncIOMotorDatabase, lesson_id: str, updates: dict) -> dict:
    return await update_document(db, LESSONS, lesson_id, updates)


async def delete_lesson(db: AsyncIOMotorDatabase, lesson_id: str) -> dict:
    return await delete_document(db, LESSONS, lesson_id)

# ==================== QUIZ CRUD ====================

async def create_quiz(db: AsyncIOMotorDatabase, quiz_data: dict) -> dict:
    quiz = {
        "question": quiz_data["question"],
        "options": quiz_data.get("options") or [],
        "answer": quiz_data["answer"],
        "lesson": quiz_data["lesson"],
    }
    return await insert_document(db, QUIZZES, quiz)


async def list_quizzes(db: AsyncIOMotorDatabase, lesson: Optional[str] = None) -> List[dict]:
    return await find_documents(db, QUIZZES, exact_match_query(lesson=lesson))


async def update_quiz(db: AsyncIOMotorDatabase, quiz_id: str, updates: dict) -> dict:
    return await update_document(db, QUIZZES, quiz_id, updates)


async def delete_quiz(db: AsyncIOMotorDatabase, quiz_id: str) -> dict:
    return await delete_document(db, QUIZZES, quiz_id)

# ==================== SUBMISSION CRUD ====================

async def create_submission(db: AsyncIOMotorDatabase, submission_data: dict) -> dict:
    """Create submission record"""
    submission = {
        "student": submission_data["student"],
        "quiz": submission_data["quiz"],
        "answer": submission_data["answer"],
    }
    return await insert_document(db, SUBMISSIONS, submission)


async def list_submissions(db: AsyncIOMotorDatabase, student: Optional[str] = None, quiz: Optional[str] = None) -> List[dict]:
    return await find_documents(db, SUBMISSIONS, exact_match_query(student=student, quiz=quiz))


async def update_submission(db: AsyncIOMotorDatabase, submission_id: str, updates: dict) -> dict:
    return await update_document(db, SUBMISSIONS, submission_id, updates)


async def delete_submission(db: AsyncIOMotorDatabase, submission_id: str) -> dict:
    return await delete_document(db, SUBMISSIONS, submission_id)

# ==================== ENROLLMENT CRUD ====================

async def create_enrollment(db: AsyncIOMotorDatabase, enrollment_data: dict) -> dict:
    """Enroll student in course; enrollmentDate defaults to now"""
    enrollment = {
        "student": enrollment_data["student"],
        "course": enrollment_data["course"],
        "enrollmentDate": store_datetime(enrollment_data.get("enrollmentDate") or datetime.utcnow()),
    }
    return await insert_document(db, ENROLLMENTS, enrollment)


async def list_enrollments(db: AsyncIOMotorDatabase, student: Optional[str] = None, course: Optional[str] = None) -> List[dict]:
    return await find_documents(db, ENROLLMENTS, exact_match_query(student=student, course=course))


async def update_enrollment(db: AsyncIOMotorDatabase, enrollment_id: str, updates: dict) -> dict:
    if updates.get("enrollmentDate"):
        updates = dict(updates, enrollmentDate=store_datetime(updates["enrollmentDate"]))
    return await update_document(db, ENROLLMENTS, enrollment_id, updates)


async def delete_enrollment(db: AsyncIOMotorDatabase, enrollment_id: str) -> dict:
    return await delete_document(db, ENROLLMENTS, enrollment_id)
