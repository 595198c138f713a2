# coursehub/courses/dependencies.py

import logging
from typing import Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from coursehub.courses import config

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages MongoDB connection lifecycle"""

    def __init__(self, mongo_url: Optional[str] = None, database_name: Optional[str] = None):
        self.mongo_url = mongo_url
        self.database_name = database_name or config.DATABASE_NAME
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """Initialize MongoDB connection and verify the server answers"""
        if not self.mongo_url:
            raise RuntimeError("FATAL: MONGO_URL environment variable required")

        self.client = AsyncIOMotorClient(
            self.mongo_url,
            serverSelectionTimeoutMS=config.MONGO_SERVER_SELECTION_TIMEOUT_MS
        )
        self.db = self.client[self.database_name]
        await self.client.admin.command("ping")
        logger.info("MongoDB connected (database=%s)", self.database_name)

    def disconnect(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("MongoDB disconnected")

    def get_database(self) -> AsyncIOMotorDatabase:
        """Get database instance for dependency injection"""
        if self.db is None:
            raise RuntimeError("Database not initialized. Call connect() first.")
        return self.db

# ==================== DEPENDENCY FUNCTIONS ====================

def get_db(request: Request) -> AsyncIOMotorDatabase:
    """Database dependency"""
    return request.app.state.db_manager.get_database()
