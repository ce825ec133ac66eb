"""Audit service for recording workflow changes."""
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.models.audit_event import AuditEvent
from editorial_workflow.models.enums import AuditAction


class AuditService:
    """Service for creating and reading audit trail entries."""

    def __init__(self, db: AsyncSession):
        """Initialize audit service.

        Args:
            db: Database session
        """
        self.db = db

    async def log(
        self,
        action: AuditAction,
        entity_type: str,
        entity_id: UUID,
        actor_id: str | None = None,
        diff_json: dict[str, Any] | None = None,
    ) -> AuditEvent:
        """Create an audit log entry.

        Args:
            action: Action being performed
            entity_type: Type of entity being acted upon
            entity_id: ID of entity being acted upon
            actor_id: Actor performing the action (None for system actions)
            diff_json: Before/after details for the action

        Returns:
            Created AuditEvent instance
        """
        audit_event = AuditEvent(
            actor_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            diff_json=diff_json,
        )
        self.db.add(audit_event)
        await self.db.flush()
        return audit_event

    async def list_for_entity(self, entity_id: UUID) -> list[AuditEvent]:
        """List audit events for one entity, oldest first."""
        result = await self.db.execute(
            select(AuditEvent)
            .where(AuditEvent.entity_id == entity_id)
            .order_by(AuditEvent.created_at)
        )
        return list(result.scalars().all())
