"""
Quiz Service - the Quiz Record Store.

Every question has exactly four options and a correct answer index in 0..3.
Those invariants are checked on submit and again on every edit, against the
merged document, so an edit can never leave a broken question behind.
"""

from typing import List, Optional

from placement_hub.core.config import get_settings
from placement_hub.core.errors import ValidationError
from placement_hub.db.mongodb import COLLECTIONS, get_collection, serialize_docs
from placement_hub.schemas.schemas import ModerationStatus
from placement_hub.services.moderation import OLDEST_FIRST, ModeratedCollectionService

OPTION_COUNT = 4
QUIZ_FIELDS = ("topic", "question_text", "options", "correct_answer")


def known_quiz_topics() -> set:
    """Configured quiz topics plus every subject moderators have added."""
    subjects = get_collection(COLLECTIONS["subjects"]).distinct("name")
    return set(get_settings().quiz_topics) | set(subjects)


def validate_question(fields: dict, check_topic: bool = True) -> dict:
    """
    Check a complete question document. Returns a cleaned copy.

    `check_topic=False` skips the known-topic lookup, for edits that keep a
    topic whose subject has since been deleted.
    """
    topic = (fields.get("topic") or "").strip()
    question_text = (fields.get("question_text") or "").strip()
    options = fields.get("options")
    correct_answer = fields.get("correct_answer")

    if not topic:
        raise ValidationError("Topic is required.")
    if check_topic and topic not in known_quiz_topics():
        raise ValidationError(f"Unknown quiz topic '{topic}'.")
    if not question_text:
        raise ValidationError("Question text is required.")
    if not isinstance(options, list) or len(options) != OPTION_COUNT:
        raise ValidationError("Quiz must have exactly 4 options.")
    options = [str(option).strip() if option is not None else "" for option in options]
    if not all(options):
        raise ValidationError("Quiz options cannot be empty.")
    if isinstance(correct_answer, bool) or not isinstance(correct_answer, int) \
            or not 0 <= correct_answer < OPTION_COUNT:
        raise ValidationError("Correct answer index must be between 0 and 3.")

    return {
        "topic": topic,
        "question_text": question_text,
        "options": options,
        "correct_answer": correct_answer,
    }


class QuizService(ModeratedCollectionService):
    collection_name = COLLECTIONS["quiz_questions"]
    label = "Quiz question"

    def submit(self, data: dict, submitted_by: Optional[str] = None) -> dict:
        """Student submission: pending until a moderator reviews it."""
        return self._insert(validate_question(data), ModerationStatus.pending, submitted_by)

    def publish_official(self, data: dict, submitted_by: Optional[str] = None) -> dict:
        """Moderator insert with the "official" box ticked: approved at once."""
        return self._insert(validate_question(data), ModerationStatus.approved, submitted_by)

    def edit(self, quiz_id: str, changes: dict) -> dict:
        changes = {key: value for key, value in changes.items() if key in QUIZ_FIELDS}
        if not changes:
            raise ValidationError("No fields to update")
        current = self.get(quiz_id)
        merged = validate_question({**current, **changes}, check_topic="topic" in changes)
        return self._update(quiz_id, {key: merged[key] for key in changes})

    def list_by_topic(self, topic: str) -> List[dict]:
        """Approved questions of one topic, oldest first (stable quiz order)."""
        docs = self.collection.find(
            {"topic": topic, "status": ModerationStatus.approved.value},
            sort=OLDEST_FIRST,
        )
        return serialize_docs(docs)
