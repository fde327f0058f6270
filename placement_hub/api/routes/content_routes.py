"""
Content Routes

Students:
POST /content/submit - Submit content for review (pending)
GET /content/approved - Approved content, newest first
GET /content/grouped - Approved content grouped by topic
GET /content/topic/{topic} - Approved content of a topic split into study/videos/dsa
GET /content/dsa - Every approved DSA problem
GET /content/timed-quiz - Random approved items, explanations hidden

Moderators:
POST /content/official - Publish approved content directly
GET /content/pending - Moderation queue, oldest first
GET /content/all - Every item in every status, newest first
PUT /content/{content_id}/approve - Approve
PUT /content/{content_id}/reject - Reject
PUT /content/{content_id}/status - Force any status
PUT /content/{content_id} - Edit allow-listed fields
POST /content/{content_id}/pdf - Attach a PDF
DELETE /content/{content_id} - Delete permanently
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from placement_hub.core.auth import get_current_moderator, get_current_user
from placement_hub.services.content_service import ContentService
from placement_hub.utils.file_upload import save_upload
from placement_hub.schemas.schemas import (
    ContentSubmit, ContentOfficial, ContentEdit, ContentResponse, ContentMessageResponse,
    StatusUpdate, TopicBuckets, MessageResponse
)

router = APIRouter(prefix="/content", tags=["Content"])


# ============================================================
# STUDENT ENDPOINTS
# ============================================================

@router.post("/submit", response_model=ContentMessageResponse, status_code=201)
async def submit_content(data: ContentSubmit, user: dict = Depends(get_current_user)):
    """Submit content. It stays hidden until a moderator approves it."""
    content = ContentService().submit(data.model_dump(exclude_none=True), submitted_by=user["user_id"])
    return ContentMessageResponse(
        message="Content submitted for review! Thank you for contributing.", content=content
    )


@router.get("/approved", response_model=List[ContentResponse])
async def list_approved(topic: Optional[str] = Query(None, description="Filter by topic")):
    """Approved content only, latest first."""
    service = ContentService()
    if topic:
        return service.list_by_topic(topic)
    return service.list_approved()


@router.get("/grouped", response_model=Dict[str, List[ContentResponse]])
async def list_grouped():
    """Approved content as {topic: [items]} for dashboard counts."""
    return ContentService().grouped_by_topic()


@router.get("/topic/{topic}", response_model=TopicBuckets)
async def topic_page(topic: str):
    """Approved content of one topic split into study material, videos and DSA."""
    return ContentService().topic_buckets(topic)


@router.get("/dsa", response_model=List[ContentResponse])
async def list_dsa():
    """All approved DSA problems across topics."""
    return ContentService().list_dsa()


@router.get("/timed-quiz", response_model=List[ContentResponse])
async def timed_quiz(size: Optional[int] = Query(None, ge=1, le=50)):
    """Random sample of approved items with explanations stripped."""
    return ContentService().sample_timed_quiz(size)


# ============================================================
# MODERATOR ENDPOINTS
# ============================================================

@router.post("/official", response_model=ContentMessageResponse, status_code=201)
async def add_official(data: ContentOfficial, moderator: dict = Depends(get_current_moderator)):
    """Publish content directly as approved, bypassing the queue."""
    content = ContentService().publish_official(
        data.model_dump(exclude_none=True), submitted_by=moderator["user_id"]
    )
    return ContentMessageResponse(message="Official content added and is immediately live!", content=content)


@router.get("/pending", response_model=List[ContentResponse])
async def list_pending(moderator: dict = Depends(get_current_moderator)):
    """Moderation queue in review order (oldest first)."""
    return ContentService().list_pending()


@router.get("/all", response_model=List[ContentResponse])
async def list_all(moderator: dict = Depends(get_current_moderator)):
    """Full audit listing: approved, pending and rejected, newest first."""
    return ContentService().list_all()


@router.put("/{content_id}/approve", response_model=ContentMessageResponse)
async def approve_content(content_id: str, moderator: dict = Depends(get_current_moderator)):
    content = ContentService().approve(content_id)
    return ContentMessageResponse(message="Content approved! Now live for students.", content=content)


@router.put("/{content_id}/reject", response_model=ContentMessageResponse)
async def reject_content(content_id: str, moderator: dict = Depends(get_current_moderator)):
    content = ContentService().reject(content_id)
    return ContentMessageResponse(message="Content rejected.", content=content)


@router.put("/{content_id}/status", response_model=ContentMessageResponse)
async def force_content_status(
    content_id: str, update: StatusUpdate, moderator: dict = Depends(get_current_moderator)
):
    """Override the status directly, whatever the current one is."""
    content = ContentService().force_set_status(content_id, update.status)
    return ContentMessageResponse(message=f"Content status set to {update.status.value}.", content=content)


@router.put("/{content_id}", response_model=ContentMessageResponse)
async def edit_content(content_id: str, update: ContentEdit, moderator: dict = Depends(get_current_moderator)):
    """Edit content. Only provided fields are updated; status is not editable here."""
    content = ContentService().edit(content_id, update.model_dump(exclude_unset=True))
    return ContentMessageResponse(message="Content updated.", content=content)


@router.post("/{content_id}/pdf", response_model=ContentMessageResponse)
async def attach_pdf(
    content_id: str,
    file: UploadFile = File(..., description="PDF notes"),
    moderator: dict = Depends(get_current_moderator)
):
    service = ContentService()
    service.get(content_id)
    path = await save_upload(file, "pdf")
    content = service.attach_pdf(content_id, path)
    return ContentMessageResponse(message="PDF attached.", content=content)


@router.delete("/{content_id}", response_model=MessageResponse)
async def delete_content(content_id: str, moderator: dict = Depends(get_current_moderator)):
    ContentService().delete(content_id)
    return MessageResponse(message="Content deleted.")
