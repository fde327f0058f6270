"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from placement_hub.api.routes.auth_routes import router as auth_router
from placement_hub.api.routes.content_routes import router as content_router
from placement_hub.api.routes.quiz_routes import router as quiz_router
from placement_hub.api.routes.progress_routes import router as progress_router
from placement_hub.api.routes.subject_routes import router as subject_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(content_router)
api_router.include_router(quiz_router)
api_router.include_router(progress_router)
api_router.include_router(subject_router)
