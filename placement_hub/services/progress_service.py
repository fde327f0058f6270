"""
Progress Service - the Score Aggregator.

Writes the progress fields embedded on a user document:
- scores: one {topic, high_score, last_score, last_attempt} entry per topic
- solved_dsa: set of content ids the student marked solved
- watched_content: set of content ids the student watched

Every write is a single-document atomic update ($addToSet, $pull, $max), so
two requests racing on the same user cannot lose each other's change.
"""

from datetime import datetime
from typing import Dict, Optional

from pymongo.collection import Collection

from placement_hub.core.config import get_settings
from placement_hub.core.errors import NotFoundError
from placement_hub.core.logging import get_logger
from placement_hub.db.mongodb import COLLECTIONS, get_collection, to_object_id
from placement_hub.services.classifier import video_progress
from placement_hub.services.content_service import ContentService
from placement_hub.services.quiz_service import QuizService

logger = get_logger("progress")


def score_answers(questions, answers: Dict[str, int]) -> int:
    """Count exact matches; an unanswered question is simply wrong."""
    return sum(
        1 for question in questions
        if question["id"] in answers and answers[question["id"]] == question["correct_answer"]
    )


class ProgressService:

    def __init__(self):
        self.users: Collection = get_collection(COLLECTIONS["users"])

    def _require_user(self, user_id: str):
        oid = to_object_id(user_id, "User")
        if not self.users.count_documents({"_id": oid}, limit=1):
            raise NotFoundError("User not found")
        return oid

    # ------------------------------------------------------------
    # Quiz attempts
    # ------------------------------------------------------------

    def submit_quiz_attempt(self, topic: str, answers: Dict[str, int], user_id: str) -> Optional[dict]:
        """
        Score an attempt against the approved questions of `topic` and record
        it on the user.

        Returns None when the topic has no approved questions: the quiz is
        unavailable, which is not the same thing as scoring zero.
        """
        oid = self._require_user(user_id)
        questions = QuizService().list_by_topic(topic)
        if not questions:
            return None

        score = score_answers(questions, answers)
        now = datetime.utcnow()

        # First attempt on this topic: append a fresh entry
        created = self.users.update_one(
            {"_id": oid, "scores.topic": {"$ne": topic}},
            {"$push": {"scores": {
                "topic": topic,
                "high_score": score,
                "last_score": score,
                "last_attempt": now,
            }}},
        )
        if not created.modified_count:
            self.users.update_one(
                {"_id": oid, "scores.topic": topic},
                {
                    "$set": {"scores.$.last_score": score, "scores.$.last_attempt": now},
                    "$max": {"scores.$.high_score": score},
                },
            )

        entry = self.get_score(user_id, topic)
        logger.info("User %s scored %d/%d on %s", user_id, score, len(questions), topic)
        return {
            "topic": topic,
            "score": score,
            "total_questions": len(questions),
            "high_score": entry["high_score"],
        }

    def get_score(self, user_id: str, topic: str) -> Optional[dict]:
        doc = self.users.find_one({"_id": to_object_id(user_id, "User")}, {"scores": 1})
        if not doc:
            raise NotFoundError("User not found")
        for entry in doc.get("scores", []):
            if entry["topic"] == topic:
                return entry
        return None

    # ------------------------------------------------------------
    # Solved DSA / watched content
    # ------------------------------------------------------------

    def _members(self, oid, field: str) -> list:
        return self.users.find_one({"_id": oid}, {field: 1}).get(field, [])

    def set_dsa_solved(self, user_id: str, problem_id: str, solved: bool) -> list:
        """Make `problem_id` solved or unsolved. Setting the current state is a no-op."""
        oid = self._require_user(user_id)
        op = "$addToSet" if solved else "$pull"
        self.users.update_one({"_id": oid}, {op: {"solved_dsa": problem_id}})
        return self._members(oid, "solved_dsa")

    def mark_watched(self, user_id: str, content_id: str) -> list:
        oid = self._require_user(user_id)
        self.users.update_one({"_id": oid}, {"$addToSet": {"watched_content": content_id}})
        return self._members(oid, "watched_content")

    # ------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------

    def dashboard(self, user_id: str) -> dict:
        doc = self.users.find_one({"_id": self._require_user(user_id)})
        contents = ContentService()
        approved = contents.list_approved()

        topics = list(get_settings().quiz_topics)
        for item in approved:
            if item["topic"] not in topics:
                topics.append(item["topic"])

        dsa_ids = {item["id"] for item in approved if item.get("dsa_problem_link")}
        solved = set(doc.get("solved_dsa", []))
        return {
            "scores": doc.get("scores", []),
            "video_progress": video_progress(approved, doc.get("watched_content", []), topics),
            "solved_dsa_count": len(solved & dsa_ids),
            "total_dsa_count": len(dsa_ids),
        }
