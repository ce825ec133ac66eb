"""Pydantic schemas for workflow definitions.

These models double as the in-memory representation the workflow engine
evaluates: repositories load ORM rows into them and the default-workflow
factory builds them directly.
"""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _split_csv(v):
    if v is None:
        return []
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return [str(item).strip() for item in v if str(item).strip()]


class RolePermissionSchema(BaseModel):
    """Grant of execute rights on one transition to one role."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    role_id: UUID
    can_execute: bool = True
    requires_approval: bool = False
    approval_role_id: UUID | None = None
    conditions: str | None = Field(None, max_length=1024)


class WorkflowStateSchema(BaseModel):
    """A named position a content item can occupy."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    key: str = Field(..., max_length=64)
    name: str = Field(..., max_length=128)
    description: str | None = Field(None, max_length=512)
    color: str = Field("#6c757d", max_length=16)
    icon: str = Field("fas fa-circle", max_length=64)
    sort_order: int = 0
    is_initial: bool = False
    is_published: bool = False
    is_final: bool = False


class WorkflowTransitionSchema(BaseModel):
    """A directed, permission-gated edge between two states."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    from_state_key: str = Field(..., max_length=64)
    to_state_key: str = Field(..., max_length=64)
    name: str = Field("", max_length=128)
    description: str | None = Field(None, max_length=512)
    required_permission: str | None = Field(None, max_length=128)
    css_class: str = Field("btn-primary", max_length=64)
    icon: str = Field("fas fa-arrow-right", max_length=64)
    sort_order: int = 0
    requires_comment: bool = False
    send_notification: bool = True
    notification_template: str | None = Field(None, max_length=1024)
    role_permissions: list[RolePermissionSchema] = Field(default_factory=list)


class WorkflowRoleSchema(BaseModel):
    """A workflow role mapped onto an external identity role name."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    role_key: str = Field(..., max_length=64)
    display_name: str = Field(..., max_length=128)
    description: str | None = Field(None, max_length=512)
    priority: int = 0
    can_create: bool = True
    can_edit: bool = True
    can_delete: bool = False
    can_view_all: bool = False
    allowed_from_states: list[str] = Field(default_factory=list)
    allowed_to_states: list[str] = Field(default_factory=list)

    @field_validator("allowed_from_states", "allowed_to_states", mode="before")
    @classmethod
    def _parse_states(cls, v):
        return _split_csv(v)


class WorkflowDefinitionSchema(BaseModel):
    """Declarative workflow graph governing one or more content types."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    name: str = Field("", max_length=128)
    description: str | None = Field(None, max_length=512)
    content_types: list[str] = Field(default_factory=list)
    is_default: bool = False
    is_active: bool = True
    initial_state: str = Field("", max_length=64)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    states: list[WorkflowStateSchema] = Field(default_factory=list)
    transitions: list[WorkflowTransitionSchema] = Field(default_factory=list)
    roles: list[WorkflowRoleSchema] = Field(default_factory=list)

    @field_validator("content_types", mode="before")
    @classmethod
    def _parse_content_types(cls, v):
        return _split_csv(v)

    def get_state(self, key: str) -> WorkflowStateSchema | None:
        return next((s for s in self.states if s.key == key), None)

    def get_transition(self, transition_id: UUID) -> WorkflowTransitionSchema | None:
        return next((t for t in self.transitions if t.id == transition_id), None)

    def governs(self, content_type: str) -> bool:
        return content_type in self.content_types


class WorkflowSummary(BaseModel):
    """Compact listing entry for workflow definitions."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    content_types: list[str]
    is_default: bool
    is_active: bool
    initial_state: str
    state_count: int
    transition_count: int
    role_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class WorkflowListResponse(BaseModel):
    items: list[WorkflowSummary]
    total: int


class CreateDefaultWorkflowRequest(BaseModel):
    """Request schema for bootstrapping the canonical workflow."""

    model_config = ConfigDict(extra="forbid")

    content_type: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=128)

    @field_validator("content_type", "name")
    @classmethod
    def strip_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty")
        return v


class ValidationResultResponse(BaseModel):
    """Result of static definition checks."""

    is_valid: bool
    errors: list[str]
