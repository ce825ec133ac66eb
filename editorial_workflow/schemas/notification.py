"""Pydantic schemas for workflow notifications."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    """Response schema for a workflow notification."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content_id: UUID
    content_type: str
    content_title: str | None = None
    actor_id: str
    category: str
    message: str
    is_read: bool
    created_at: datetime


class NotificationListResponse(BaseModel):
    items: list[NotificationResponse]
    total: int
