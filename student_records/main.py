from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from student_records.core.config import settings
from student_records.core.database import MongoDatabase
from student_records.core.handlers import register_exception_handlers
from student_records.core.logging import logger, setup_logging
from student_records.api.v1.router import api_router
from student_records.services.student.store import StudentStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    database = MongoDatabase().connect()
    store = StudentStore(database.get_collection(settings.MONGODB_STUDENTS_COLLECTION))
    store.ensure_indexes()
    app.state.database = database
    app.state.student_store = store
    logger.info(f"{settings.PROJECT_NAME} started")
    try:
        yield
    finally:
        database.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """
    Health check endpoint
    """
    return {
        "message": "Welcome to Student Records API",
        "docs": "/docs",
        "version": settings.APP_VERSION
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
