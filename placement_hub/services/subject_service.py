"""
Subject Service - the topic list moderators maintain.

"All" is a filter option for the UI, added when listing and never stored.
Deleting a subject leaves content and quiz questions that reference its
name untouched; those records simply keep an orphaned topic.
"""

from datetime import datetime
from typing import List

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from placement_hub.core.errors import ConflictError, NotFoundError, ValidationError
from placement_hub.core.logging import get_logger
from placement_hub.db.mongodb import COLLECTIONS, get_collection, serialize_docs, to_object_id

ALL_SUBJECTS = "All"

logger = get_logger("subjects")


class SubjectService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["subjects"])

    def list(self, include_all: bool = True) -> List[dict]:
        subjects = serialize_docs(self.collection.find({}, sort=[("name", 1)]))
        if include_all:
            return [{"id": None, "name": ALL_SUBJECTS}] + subjects
        return subjects

    def add(self, name: str) -> dict:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Subject name is required.")
        if name == ALL_SUBJECTS:
            raise ValidationError(f"'{ALL_SUBJECTS}' is reserved.")
        if self.collection.find_one({"name": name}):
            raise ConflictError(f"Subject '{name}' already exists.")

        doc = {"name": name, "created_at": datetime.utcnow()}
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError(f"Subject '{name}' already exists.")
        logger.info("Subject '%s' added", name)
        return {"id": str(result.inserted_id), "name": name}

    def delete(self, subject_id: str) -> None:
        result = self.collection.delete_one({"_id": to_object_id(subject_id, "Subject")})
        if result.deleted_count == 0:
            raise NotFoundError("Subject not found.")
        logger.info("Subject %s deleted", subject_id)
