import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from coursehub.courses.dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check(db: AsyncIOMotorDatabase = Depends(get_db)):
    """
    Ping the database and report its status.
    Always answers 200 so load balancers can poll it.
    """
    record = {
        "timestamp": datetime.utcnow(),
        "status": {"api": "UP"},
        "latency_ms": {},
        "collections": []
    }

    try:
        start = datetime.utcnow()
        await db.command("ping")
        record["status"]["database"] = "UP"
        record["latency_ms"]["database"] = (datetime.utcnow() - start).total_seconds() * 1000
        collections = await db.list_collection_names()
        record["collections"] = sorted(collections)[:10]
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        record["status"]["database"] = "DOWN"

    return record
