"""
MongoDB Collection Schemas
File: coursehub/courses/schemas.py

Each collection has a $jsonSchema validator that only checks the presence
and BSON type of required fields, and an entry in RELATIONS describing
which fields reference documents in other collections.
"""

# ==================== COLLECTION NAMES ====================

USERS = "users"
COURSES = "courses"
LESSONS = "lessons"
QUIZZES = "quizzes"
SUBMISSIONS = "submissions"
ENROLLMENTS = "enrollments"

# ==================== USERS ====================

USERS_SCHEMA = {
    "validator": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["name", "email", "role"],
            "properties": {
                "name": {"bsonType": "string"},
                "email": {"bsonType": "string"},
                "role": {"enum": ["student", "instructor"]}
            }
        }
    }
}

# ==================== COURSES ====================

COURSES_SCHEMA = {
    "validator": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["title", "instructor"],
            "properties": {
                "title": {"bsonType": "string"},
                "description": {"bsonType": ["string", "null"]},
                "instructor": {"bsonType": "string"},  # users._id
                "lessons": {"bsonType": "array", "items": {"bsonType": "string"}}  # lessons._id
            }
        }
    }
}

# ==================== LESSONS ====================

LESSONS_SCHEMA = {
    "validator": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["title", "course"],
            "properties": {
                "title": {"bsonType": "string"},
                "content": {"bsonType": ["string", "null"]},
                "course": {"bsonType": "string"}  # courses._id
            }
        }
    }
}

# ==================== QUIZZES ====================

QUIZZES_SCHEMA = {
    "validator": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["question", "answer", "lesson"],
            "properties": {
                "question": {"bsonType": "string"},
                "options": {"bsonType": "array", "items": {"bsonType": "string"}},
                "answer": {"bsonType": "string"},
                "lesson": {"bsonType": "string"}  # lessons._id
            }
        }
    }
}

# ==================== SUBMISSIONS ====================

SUBMISSIONS_SCHEMA = {
    "validator": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["student", "quiz", "answer"],
            "properties": {
                "student": {"bsonType": "string"},  # users._id
                "quiz": {"bsonType": "string"},  # quizzes._id
                "answer": {"bsonType": "string"}
            }
        }
    }
}

# ==================== ENROLLMENTS ====================

ENROLLMENTS_SCHEMA = {
    "validator": {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["student", "course"],
            "properties": {
                "student": {"bsonType": "string"},  # users._id
                "course": {"bsonType": "string"},  # courses._id
                "enrollmentDate": {"bsonType": "date"}
            }
        }
    }
}

COLLECTION_SCHEMAS = {
    USERS: USERS_SCHEMA,
    COURSES: COURSES_SCHEMA,
    LESSONS: LESSONS_SCHEMA,
    QUIZZES: QUIZZES_SCHEMA,
    SUBMISSIONS: SUBMISSIONS_SCHEMA,
    ENROLLMENTS: ENROLLMENTS_SCHEMA,
}

# ==================== RELATIONS ====================

# collection -> {field: (target collection, is_list)}
# The store keeps no referential integrity: a dangling single reference
# expands to None, dangling list entries are dropped.
RELATIONS = {
    USERS: {},
    COURSES: {
        "instructor": (USERS, False),
        "lessons": (LESSONS, True),
    },
    LESSONS: {
        "course": (COURSES, False),
    },
    QUIZZES: {
        "lesson": (LESSONS, False),
    },
    SUBMISSIONS: {
        "student": (USERS, False),
        "quiz": (QUIZZES, False),
    },
    ENROLLMENTS: {
        "student": (USERS, False),
        "course": (COURSES, False),
    },
}

# Secondary indexes created on startup: one per filterable field
COLLECTION_INDEXES = {
    USERS: ["email"],
    COURSES: ["instructor", "title"],
    LESSONS: ["course"],
    QUIZZES: ["lesson"],
    SUBMISSIONS: ["student", "quiz"],
    ENROLLMENTS: ["student", "course"],
}
