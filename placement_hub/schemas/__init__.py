"""
Schemas module - Request/Response schemas for API endpoints.
"""

from placement_hub.schemas.schemas import ContentType, ModerationStatus, UserRole

__all__ = ["ContentType", "ModerationStatus", "UserRole"]
