import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coursehub.courses import config
from coursehub.courses.app import setup_course_routes, startup_course_system
from coursehub.courses.dependencies import DatabaseManager
from coursehub.courses.errors import register_error_handlers
from coursehub.system.health_router import router as health_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger("coursehub")

app = FastAPI(
    title=config.API_TITLE,
    version=config.API_VERSION,
    description=config.API_DESCRIPTION,
    docs_url=config.DOCS_URL,
)

# MongoDB connection owned by the application
app.state.db_manager = DatabaseManager(config.MONGO_URL, config.DATABASE_NAME)


@app.on_event("startup")
async def startup_event():
    try:
        await app.state.db_manager.connect()
    except Exception:
        logger.exception("Database connection failed")
        raise
    await startup_course_system(app.state.db_manager.get_database())
    logger.info("Swagger docs available at %s", config.DOCS_URL)


@app.on_event("shutdown")
async def shutdown_event():
    app.state.db_manager.disconnect()


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# ==================== ROUTER REGISTRATION ====================
setup_course_routes(app)
app.include_router(health_router)


@app.get("/")
async def root():
    return {"message": "Online Course API running", "docs": config.DOCS_URL}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
