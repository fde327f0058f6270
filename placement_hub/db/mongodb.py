"""
MongoDB Connection Utility

MongoDB stores everything the portal knows:
- contents: study material, video embeds, DSA links, PDF notes
- quiz_questions: multiple-choice questions
- users: accounts plus embedded progress (scores, solved DSA, watched content)
- subjects: the topic list moderators maintain
"""
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from placement_hub.core.config import get_settings
from placement_hub.core.errors import NotFoundError
from placement_hub.core.logging import get_logger

logger = get_logger("db")

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        settings = get_settings()
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        )
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by its name in COLLECTIONS."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "contents": "contents",
    "quiz_questions": "quiz_questions",
    "users": "users",
    "subjects": "subjects",
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Unique identity fields
    db[COLLECTIONS["users"]].create_index("username", unique=True)
    db[COLLECTIONS["subjects"]].create_index("name", unique=True)

    # Moderation queues: filter by status, order by submission time
    for name in ("contents", "quiz_questions"):
        db[COLLECTIONS[name]].create_index([("status", ASCENDING), ("created_at", DESCENDING)])
        db[COLLECTIONS[name]].create_index("topic")

    logger.info("MongoDB indexes created")


# ============================================================
# HELPERS: ObjectId parsing and JSON-friendly documents
# ============================================================

def to_object_id(value: str, label: str = "Record") -> ObjectId:
    """Parse an id string; a malformed id can never match, so it is NotFound."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(f"{label} not found")


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict with an `id` key."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs) -> list:
    """Convert MongoDB documents (list or cursor) to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]
