"""
Content Service - the Content Record Store and its moderation workflow.

A content item is one unit of study material: theory text, a YouTube video,
a DSA problem link or a PDF. Students submit into the moderation queue,
moderators may publish "official" content straight to approved.
"""

from typing import List, Optional

from placement_hub.core.config import get_settings
from placement_hub.core.errors import ValidationError
from placement_hub.db.mongodb import COLLECTIONS, serialize_docs
from placement_hub.schemas.schemas import ContentType, ModerationStatus
from placement_hub.services.classifier import classify, group_by_topic, normalize_youtube_id
from placement_hub.services.moderation import ModeratedCollectionService

CONTENT_FIELDS = (
    "topic",
    "question_text",
    "explanation",
    "source_url",
    "dsa_problem_link",
    "youtube_solution_link",
    "youtube_embed_link",
    "video_title",
    "pdf_url",
    "content_type",
)

# At least one of these must be present for official content
BODY_FIELDS = (
    "question_text",
    "explanation",
    "dsa_problem_link",
    "youtube_solution_link",
    "youtube_embed_link",
    "pdf_url",
)


def _clean(data: dict) -> dict:
    """Keep known fields, strip strings, normalize the YouTube embed."""
    fields = {}
    for key in CONTENT_FIELDS:
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, ContentType):
            value = value.value
        if isinstance(value, str):
            value = value.strip()
        fields[key] = value
    if fields.get("youtube_embed_link"):
        fields["youtube_embed_link"] = normalize_youtube_id(fields["youtube_embed_link"])
    return fields


def _infer_content_type(fields: dict) -> str:
    if fields.get("content_type"):
        return fields["content_type"]
    if fields.get("pdf_url"):
        return ContentType.pdf.value
    if fields.get("youtube_embed_link"):
        return ContentType.video.value
    return ContentType.text.value


class ContentService(ModeratedCollectionService):
    collection_name = COLLECTIONS["contents"]
    label = "Content"

    def submit(self, data: dict, submitted_by: Optional[str] = None) -> dict:
        """Student submission: goes to the moderation queue as pending."""
        fields = _clean(data)
        if not fields.get("topic") or not fields.get("question_text"):
            raise ValidationError("Topic and question text are required.")
        fields["content_type"] = _infer_content_type(fields)
        return self._insert(fields, ModerationStatus.pending, submitted_by)

    def publish_official(self, data: dict, submitted_by: Optional[str] = None) -> dict:
        """Moderator insert: immediately approved and live."""
        fields = _clean(data)
        if not fields.get("topic"):
            raise ValidationError("Topic is required for official content.")
        if not any(fields.get(key) for key in BODY_FIELDS):
            raise ValidationError("Content body missing. Add an explanation or at least one link.")
        if fields.get("youtube_embed_link") and not fields.get("video_title"):
            raise ValidationError("Video title is required when adding a video embed.")
        fields["content_type"] = _infer_content_type(fields)
        return self._insert(fields, ModerationStatus.approved, submitted_by)

    def edit(self, content_id: str, changes: dict) -> dict:
        """Rewrite allow-listed fields. Status is never touched here."""
        fields = _clean(changes)
        if not fields:
            raise ValidationError("No fields to update")
        if "topic" in fields and not fields["topic"]:
            raise ValidationError("Topic cannot be empty.")

        merged = {**self.get(content_id), **fields}
        if fields.get("youtube_embed_link") and not merged.get("video_title"):
            raise ValidationError("Video title is required when adding a video embed.")
        if "content_type" not in fields and ("pdf_url" in fields or "youtube_embed_link" in fields):
            merged.pop("content_type", None)
            fields["content_type"] = _infer_content_type(merged)
        return self._update(content_id, fields)

    def attach_pdf(self, content_id: str, pdf_path: str) -> dict:
        return self._update(content_id, {"pdf_url": pdf_path, "content_type": ContentType.pdf.value})

    # ------------------------------------------------------------
    # Student-facing reads (approved only)
    # ------------------------------------------------------------

    def list_by_topic(self, topic: str) -> List[dict]:
        return self.list_approved(topic=topic)

    def topic_buckets(self, topic: str) -> dict:
        return {"topic": topic, **classify(self.list_by_topic(topic))}

    def grouped_by_topic(self) -> dict:
        return group_by_topic(self.list_approved())

    def list_dsa(self) -> List[dict]:
        """Every approved item carrying a DSA problem link (the DSA hub)."""
        return self.list_approved(dsa_problem_link={"$exists": True, "$nin": [None, ""]})

    def sample_timed_quiz(self, size: int = None) -> List[dict]:
        """Random approved items for the timed quiz, with explanations stripped."""
        size = size or get_settings().timed_quiz_size
        docs = self.collection.aggregate([
            {"$match": {"status": ModerationStatus.approved.value}},
            {"$sample": {"size": size}},
            {"$project": {"explanation": 0}},
        ])
        return serialize_docs(docs)
