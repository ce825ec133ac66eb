"""Notification service persisting workflow notifications."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.core.errors import NotFoundError
from editorial_workflow.models.notification import WorkflowNotification


class NotificationService:
    """Notification sink backed by the ``workflow_notifications`` table."""

    def __init__(self, db: AsyncSession):
        """Initialize notification service.

        Args:
            db: Database session
        """
        self.db = db

    async def emit(
        self,
        content_id: UUID,
        content_type: str,
        title: str | None,
        actor_id: str,
        category: str,
        message: str,
    ) -> None:
        notification = WorkflowNotification(
            content_id=content_id,
            content_type=content_type,
            content_title=title,
            actor_id=actor_id,
            category=category,
            message=message,
            is_read=False,
        )
        self.db.add(notification)
        await self.db.flush()

    async def list_unread(self, limit: int = 50) -> list[WorkflowNotification]:
        """List unread notifications, newest first.

        Args:
            limit: Maximum number of notifications to return
        """
        result = await self.db.execute(
            select(WorkflowNotification)
            .where(WorkflowNotification.is_read.is_(False))
            .order_by(WorkflowNotification.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def mark_as_read(self, notification_id: UUID) -> WorkflowNotification:
        """Mark a notification as read.

        Raises:
            NotFoundError: If the notification does not exist
        """
        notification = await self.db.get(WorkflowNotification, notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        notification.is_read = True
        await self.db.flush()
        await self.db.refresh(notification)
        return notification
