"""
User Service - accounts and profiles.

Progress fields (scores, solved_dsa, watched_content) live on the same
document but are written by ProgressService only.
"""

from datetime import datetime
from typing import Optional

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError
from pymongo import ReturnDocument

from placement_hub.core.auth import create_access_token, hash_password, verify_password
from placement_hub.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from placement_hub.core.logging import get_logger
from placement_hub.db.mongodb import COLLECTIONS, get_collection, serialize_doc, to_object_id
from placement_hub.schemas.schemas import UserRole

PROFILE_FIELDS = ("dob", "college", "branch", "leetcode_id")

logger = get_logger("users")


def _public(doc: dict) -> dict:
    doc = serialize_doc(doc)
    doc.pop("password_hash", None)
    return doc


class UserService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["users"])

    def create(self, username: str, password: str, role: UserRole = UserRole.student) -> dict:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required.")
        if self.collection.find_one({"username": username}):
            raise ConflictError("User already exists")

        now = datetime.utcnow()
        doc = {
            "username": username,
            "password_hash": hash_password(password),
            "role": role.value,
            "scores": [],
            "solved_dsa": [],
            "watched_content": [],
            "created_at": now,
            "updated_at": now,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("User already exists")
        logger.info("Registered %s '%s'", role.value, username)
        return _public(doc)

    def authenticate(self, username: str, password: str) -> dict:
        doc = self.collection.find_one({"username": (username or "").strip()})
        if not doc or not verify_password(password, doc["password_hash"]):
            raise AuthError("Invalid username or password")
        return _public(doc)

    def issue_token(self, user: dict) -> dict:
        token = create_access_token(data={"sub": user["id"], "role": user["role"]})
        return {
            "access_token": token,
            "user_id": user["id"],
            "username": user["username"],
            "role": user["role"],
        }

    def get_profile(self, user_id: str) -> dict:
        doc = self.collection.find_one({"_id": to_object_id(user_id, "User")})
        if not doc:
            raise NotFoundError("User not found")
        return _public(doc)

    def _update(self, user_id: str, changes: dict) -> dict:
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(user_id, "User")},
            {"$set": {**changes, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise NotFoundError("User not found")
        return _public(doc)

    def update_profile(self, user_id: str, changes: dict) -> dict:
        changes = {key: value for key, value in changes.items() if key in PROFILE_FIELDS}
        if not changes:
            raise ValidationError("No fields to update")
        return self._update(user_id, changes)

    def set_avatar(self, user_id: str, path: str) -> dict:
        return self._update(user_id, {"dp": path})

    def ensure_moderator(self, username: Optional[str], password: Optional[str]) -> Optional[dict]:
        """Create the configured moderator account if it does not exist yet."""
        username = (username or "").strip()
        if not username or not password:
            return None
        existing = self.collection.find_one({"username": username})
        if existing:
            return _public(existing)
        return self.create(username, password, role=UserRole.moderator)
