"""
Moderation State Machine - the status lifecycle shared by content and quizzes.

    submit            : (none)  -> pending
    publish_official  : (none)  -> approved      moderator, skips the queue
    approve(id)       : *       -> approved      re-approval is accepted
    reject(id)        : *       -> rejected
    force_set_status  : *       -> any           explicit administrative override
    delete(id)        : *       -> (none)        hard delete

Only approved records are ever shown to students. The pending queue is read
oldest-first (FIFO review order); the audit listing is newest-first.
"""

from datetime import datetime
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection

from placement_hub.core.errors import NotFoundError
from placement_hub.core.logging import get_logger
from placement_hub.db.mongodb import get_collection, serialize_doc, serialize_docs, to_object_id
from placement_hub.schemas.schemas import ModerationStatus

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]
OLDEST_FIRST = [("created_at", ASCENDING), ("_id", ASCENDING)]


class ModeratedCollectionService:
    """
    Base class for a collection whose documents carry a moderation `status`.
    Subclasses set `collection_name` and `label`, and own their validation.
    """

    collection_name: str = None
    label: str = "Record"

    def __init__(self):
        self.collection: Collection = get_collection(self.collection_name)
        self.logger = get_logger(self.collection_name)

    # ------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------

    def _insert(self, fields: dict, status: ModerationStatus, submitted_by: Optional[str] = None) -> dict:
        now = datetime.utcnow()
        doc = {
            **fields,
            "status": status.value,
            "submitted_by": submitted_by,
            "created_at": now,
            "updated_at": now,
        }
        result = self.collection.insert_one(doc)
        self.logger.info("%s %s created as %s", self.label, result.inserted_id, status.value)
        return serialize_doc(doc)

    # ------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------

    def _update(self, record_id: str, changes: dict) -> dict:
        changes = {**changes, "updated_at": datetime.utcnow()}
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(record_id, self.label)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError(f"{self.label} not found")
        return serialize_doc(doc)

    def _set_status(self, record_id: str, status: ModerationStatus) -> dict:
        doc = self._update(record_id, {"status": status.value})
        self.logger.info("%s %s -> %s", self.label, record_id, status.value)
        return doc

    def approve(self, record_id: str) -> dict:
        return self._set_status(record_id, ModerationStatus.approved)

    def reject(self, record_id: str) -> dict:
        return self._set_status(record_id, ModerationStatus.rejected)

    def force_set_status(self, record_id: str, status: ModerationStatus) -> dict:
        """Moderator override: move a record to any status from any status."""
        self.logger.warning("%s %s status forced to %s", self.label, record_id, status.value)
        return self._set_status(record_id, status)

    def delete(self, record_id: str) -> None:
        result = self.collection.delete_one({"_id": to_object_id(record_id, self.label)})
        if result.deleted_count == 0:
            raise NotFoundError(f"{self.label} not found")
        self.logger.info("%s %s deleted", self.label, record_id)

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def get(self, record_id: str) -> dict:
        doc = self.collection.find_one({"_id": to_object_id(record_id, self.label)})
        if doc is None:
            raise NotFoundError(f"{self.label} not found")
        return serialize_doc(doc)

    def list_approved(self, **filters) -> List[dict]:
        query = {**filters, "status": ModerationStatus.approved.value}
        return serialize_docs(self.collection.find(query, sort=NEWEST_FIRST))

    def list_pending(self) -> List[dict]:
        query = {"status": ModerationStatus.pending.value}
        return serialize_docs(self.collection.find(query, sort=OLDEST_FIRST))

    def list_all(self) -> List[dict]:
        return serialize_docs(self.collection.find({}, sort=NEWEST_FIRST))
