"""Pydantic schemas for content endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateContentRequest(BaseModel):
    """Request schema for creating a content item."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v


class ContentResponse(BaseModel):
    """Response schema for a content item and its workflow fields."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content_type: str
    title: str
    owner_id: str | None = None
    workflow_state: str
    last_reviewer_id: str | None = None
    last_reviewed_on: datetime | None = None
    review_comment: str | None = None
    published: datetime | None = None
    published_artifact_id: UUID | None = None
    created_at: datetime
    updated_at: datetime
