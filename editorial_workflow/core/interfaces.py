"""Collaborator contracts consumed by the workflow engine.

The engine never talks to identity storage, content tables or notification
delivery directly; it goes through these protocols so each surrounding
application can plug in its own implementation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from editorial_workflow.schemas.workflow import (
    WorkflowDefinitionSchema,
    WorkflowTransitionSchema,
)


class ContentStateStore(Protocol):
    """Read and write the workflow fields of one content type's records."""

    async def get_state(self, content_id: UUID) -> str | None:
        """Return the stored state key, or None when the content is missing."""
        ...

    async def get_title(self, content_id: UUID) -> str | None:
        ...

    async def set_state(
        self,
        content_id: UUID,
        state: str,
        reviewer_id: str,
        reviewed_on: datetime,
        comment: str | None,
    ) -> None:
        ...

    async def set_published(self, content_id: UUID, timestamp: datetime | None) -> None:
        ...


class RoleNameResolver(Protocol):
    """Map an actor onto the external role names it holds."""

    async def get_role_names(self, actor_id: str) -> set[str]:
        ...


class NotificationSink(Protocol):
    """Deliver workflow notification events."""

    async def emit(
        self,
        content_id: UUID,
        content_type: str,
        title: str | None,
        actor_id: str,
        category: str,
        message: str,
    ) -> None:
        ...


class PublishHook(Protocol):
    """Create the downstream published artifact for content if it is missing."""

    async def ensure_published_artifact(self, content_id: UUID, content_type: str) -> None:
        ...


class WorkflowDefinitionRepository(Protocol):
    """Persistence for whole workflow definitions."""

    async def get_all(self) -> list[WorkflowDefinitionSchema]:
        ...

    async def get_by_id(self, workflow_id: UUID) -> WorkflowDefinitionSchema | None:
        ...

    async def get_transition(
        self, transition_id: UUID
    ) -> tuple[WorkflowDefinitionSchema, WorkflowTransitionSchema] | None:
        ...

    async def get_by_content_type(self, content_type: str) -> list[WorkflowDefinitionSchema]:
        ...

    async def get_default_by_content_type(
        self, content_type: str
    ) -> WorkflowDefinitionSchema | None:
        ...

    async def save(self, definition: WorkflowDefinitionSchema) -> WorkflowDefinitionSchema:
        ...

    async def delete(self, workflow_id: UUID) -> bool:
        ...
