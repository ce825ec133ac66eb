"""Pydantic schemas for transition evaluation and execution."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from editorial_workflow.core.errors import ErrorCategory
from editorial_workflow.schemas.workflow import WorkflowRoleSchema, WorkflowTransitionSchema


class TransitionRequest(BaseModel):
    """Request schema for applying a transition to content."""

    model_config = ConfigDict(extra="forbid")

    target_state: str = Field(..., min_length=1, max_length=64)
    comment: str | None = Field(None, max_length=5000)
    current_state: str | None = Field(
        None,
        max_length=64,
        description="State the caller last saw; rejected if the content has moved on",
    )

    @field_validator("target_state")
    @classmethod
    def strip_target(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("target_state cannot be empty")
        return v

    @field_validator("comment")
    @classmethod
    def strip_comment(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class TransitionResultResponse(BaseModel):
    """Outcome of a transition attempt."""

    model_config = ConfigDict(from_attributes=True)

    success: bool
    message: str
    category: ErrorCategory | None = None
    state: str | None = None


class AvailableTransitionsResponse(BaseModel):
    items: list[WorkflowTransitionSchema]
    total: int


class EffectiveRolesResponse(BaseModel):
    items: list[WorkflowRoleSchema]
    total: int


class PermissionCheckResponse(BaseModel):
    """Boolean answer to a permission or visibility check."""

    allowed: bool
    transition_id: UUID | None = None
    workflow_id: UUID | None = None
