"""
Subject Routes

GET /subjects - All subjects, with the "All" filter option first
POST /subjects - Add a subject (moderator)
DELETE /subjects/{subject_id} - Remove a subject (moderator, no cascade)
"""

from typing import List

from fastapi import APIRouter, Depends

from placement_hub.core.auth import get_current_moderator
from placement_hub.services.subject_service import SubjectService
from placement_hub.schemas.schemas import SubjectCreate, SubjectResponse, MessageResponse

router = APIRouter(prefix="/subjects", tags=["Subjects"])


@router.get("", response_model=List[SubjectResponse])
async def list_subjects():
    return SubjectService().list()


@router.post("", response_model=SubjectResponse, status_code=201)
async def add_subject(data: SubjectCreate, moderator: dict = Depends(get_current_moderator)):
    return SubjectService().add(data.name)


@router.delete("/{subject_id}", response_model=MessageResponse)
async def delete_subject(subject_id: str, moderator: dict = Depends(get_current_moderator)):
    """Content and quizzes using this subject keep their topic (orphaned)."""
    SubjectService().delete(subject_id)
    return MessageResponse(message="Subject successfully deleted.")
