"""
Quiz Routes

Students:
POST /quiz/submit - Submit a question (pending; moderators may publish directly)
GET /quiz/topic/{topic} - Approved questions of a topic, answers hidden
POST /quiz/attempt - Score an attempt and update the dashboard

Moderators:
GET /quiz/pending - Moderation queue, oldest first
GET /quiz/all - Every question with answers, newest first
PUT /quiz/{quiz_id}/approve - Approve
PUT /quiz/{quiz_id}/reject - Reject
PUT /quiz/{quiz_id}/status - Force any status
PUT /quiz/{quiz_id} - Edit question/options/answer/topic
DELETE /quiz/{quiz_id} - Delete permanently
"""

from typing import List

from fastapi import APIRouter, Depends

from placement_hub.core.auth import get_current_moderator, get_current_user
from placement_hub.core.errors import NotFoundError
from placement_hub.services.progress_service import ProgressService
from placement_hub.services.quiz_service import QuizService
from placement_hub.schemas.schemas import (
    QuizSubmit, QuizEdit, QuizResponse, QuizQuestionPublic, QuizMessageResponse,
    QuizAttemptRequest, QuizAttemptResponse, StatusUpdate, MessageResponse, UserRole
)

router = APIRouter(prefix="/quiz", tags=["Quiz"])


@router.post("/submit", response_model=QuizMessageResponse, status_code=201)
async def submit_quiz(data: QuizSubmit, user: dict = Depends(get_current_user)):
    """
    Add a quiz question.

    Students always land in the moderation queue. A moderator with
    `official: true` publishes the question as approved immediately.
    """
    service = QuizService()
    fields = data.model_dump(exclude={"official"})
    if data.official and user["role"] == UserRole.moderator.value:
        quiz = service.publish_official(fields, submitted_by=user["user_id"])
        return QuizMessageResponse(message="Official quiz question is live.", quiz=quiz)
    quiz = service.submit(fields, submitted_by=user["user_id"])
    return QuizMessageResponse(message="Quiz question submitted for review.", quiz=quiz)


@router.get("/topic/{topic}", response_model=List[QuizQuestionPublic])
async def list_quiz_by_topic(topic: str):
    """Approved questions for a quiz attempt. The answer key is not sent."""
    return QuizService().list_by_topic(topic)


@router.post("/attempt", response_model=QuizAttemptResponse)
async def submit_attempt(attempt: QuizAttemptRequest, user: dict = Depends(get_current_user)):
    """Score the answers against approved questions and keep the best score."""
    result = ProgressService().submit_quiz_attempt(attempt.topic, attempt.answers, user["user_id"])
    if result is None:
        raise NotFoundError(f"No approved quiz questions for topic '{attempt.topic}'.")
    return result


@router.get("/pending", response_model=List[QuizResponse])
async def list_pending_quiz(moderator: dict = Depends(get_current_moderator)):
    return QuizService().list_pending()


@router.get("/all", response_model=List[QuizResponse])
async def list_all_quiz(moderator: dict = Depends(get_current_moderator)):
    return QuizService().list_all()


@router.put("/{quiz_id}/approve", response_model=QuizMessageResponse)
async def approve_quiz(quiz_id: str, moderator: dict = Depends(get_current_moderator)):
    return QuizMessageResponse(message="Quiz approved.", quiz=QuizService().approve(quiz_id))


@router.put("/{quiz_id}/reject", response_model=QuizMessageResponse)
async def reject_quiz(quiz_id: str, moderator: dict = Depends(get_current_moderator)):
    return QuizMessageResponse(message="Quiz rejected.", quiz=QuizService().reject(quiz_id))


@router.put("/{quiz_id}/status", response_model=QuizMessageResponse)
async def force_quiz_status(quiz_id: str, update: StatusUpdate, moderator: dict = Depends(get_current_moderator)):
    quiz = QuizService().force_set_status(quiz_id, update.status)
    return QuizMessageResponse(message=f"Quiz status set to {update.status.value}.", quiz=quiz)


@router.put("/{quiz_id}", response_model=QuizMessageResponse)
async def edit_quiz(quiz_id: str, update: QuizEdit, moderator: dict = Depends(get_current_moderator)):
    quiz = QuizService().edit(quiz_id, update.model_dump(exclude_unset=True))
    return QuizMessageResponse(message="Quiz updated successfully.", quiz=quiz)


@router.delete("/{quiz_id}", response_model=MessageResponse)
async def delete_quiz(quiz_id: str, moderator: dict = Depends(get_current_moderator)):
    QuizService().delete(quiz_id)
    return MessageResponse(message="Quiz successfully deleted.")
