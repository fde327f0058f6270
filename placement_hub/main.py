"""
Placement Hub - Main Application

FastAPI backend with:
- MongoDB for content, quiz questions, subjects and users
- Moderation queue for student submissions
- Quiz scoring and progress tracking
- JWT authentication (student / moderator)

Run: uvicorn placement_hub.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import os

from placement_hub import __version__
from placement_hub.api.routes import api_router
from placement_hub.core.config import get_settings
from placement_hub.core.errors import setup_exception_handlers
from placement_hub.core.logging import get_logger, setup_logging
from placement_hub.db.mongodb import init_mongo_indexes, test_mongo_connection
from placement_hub.services.user_service import UserService

settings = get_settings()
setup_logging()
logger = get_logger("main")

# Create FastAPI app
app = FastAPI(
    title="Placement Hub",
    description="""
    Placement preparation portal backend.

    ## Features
    - **Content**: study notes, videos, DSA problems and PDFs per topic
    - **Moderation**: student submissions wait in a queue until approved
    - **Quizzes**: 4-option MCQs per topic with best-score tracking
    - **Progress**: solved DSA problems and watched videos per student
    - **Subjects**: moderator-managed topic list
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

setup_exception_handlers(app)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")

# Serve uploaded PDFs and profile pictures
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes and the configured moderator account."""
    try:
        init_mongo_indexes()
        moderator = UserService().ensure_moderator(
            settings.default_moderator_username, settings.default_moderator_password
        )
        if moderator:
            logger.info("Moderator account '%s' ready", moderator["username"])
    except Exception as e:
        logger.error("MongoDB initialization failed: %s", e)


@app.get("/", tags=["Root"])
async def root():
    return {"status": "healthy", "app": "Placement Hub", "version": __version__, "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    connected = test_mongo_connection()
    return {
        "status": "healthy" if connected else "degraded",
        "mongodb": "connected" if connected else "disconnected"
    }
