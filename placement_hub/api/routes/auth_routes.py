"""
Authentication & Profile Routes

POST /auth/register - Register new student account
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user's profile
PUT /auth/profile - Update profile fields
POST /auth/profile/dp - Upload profile picture
GET /auth/profile/{user_id} - Get a user's public profile (moderators)
"""

from fastapi import APIRouter, Depends, File, UploadFile

from placement_hub.core.auth import get_current_moderator, get_current_user
from placement_hub.services.user_service import UserService
from placement_hub.utils.file_upload import save_upload
from placement_hub.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserProfile, ProfileUpdate
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new student account and log in straight away.

    Moderator accounts are provisioned by configuration, never by signup.
    """
    service = UserService()
    user = service.create(request.username, request.password)
    return service.issue_token(user)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    service = UserService()
    user = service.authenticate(request.username, request.password)
    return service.issue_token(user)


@router.get("/me", response_model=UserProfile)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current user's profile including scores and progress sets."""
    return UserService().get_profile(user["user_id"])


@router.put("/profile", response_model=UserProfile)
async def update_profile(data: ProfileUpdate, user: dict = Depends(get_current_user)):
    """Update profile. Only provided fields are updated."""
    return UserService().update_profile(user["user_id"], data.model_dump(exclude_unset=True))


@router.post("/profile/dp", response_model=UserProfile)
async def upload_dp(
    file: UploadFile = File(..., description="Profile picture (PNG, JPG or WEBP)"),
    user: dict = Depends(get_current_user)
):
    """Upload a profile picture; the stored path is returned as `dp`."""
    path = await save_upload(file, "dp")
    return UserService().set_avatar(user["user_id"], path)


@router.get("/profile/{user_id}", response_model=UserProfile)
async def get_profile(user_id: str, moderator: dict = Depends(get_current_moderator)):
    """Look up any user's profile."""
    return UserService().get_profile(user_id)
