"""
Course API Configuration
Database connection, server and logging settings
"""

import os

# MongoDB
MONGO_URL = os.getenv("MONGO_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME", "online_course")
MONGO_SERVER_SELECTION_TIMEOUT_MS = int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))

# Apply $jsonSchema validators to collections on startup
APPLY_SCHEMA_VALIDATORS = os.getenv("APPLY_SCHEMA_VALIDATORS", "false").lower() == "true"

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# API
API_PREFIX = "/api"
API_TITLE = "Online Course API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Comprehensive API for online course management system"
DOCS_URL = "/api-docs"
