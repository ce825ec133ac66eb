"""API routes for the workflow notification inbox."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.api.deps import Actor, get_current_actor
from editorial_workflow.core.database import get_db
from editorial_workflow.schemas.notification import NotificationListResponse, NotificationResponse
from editorial_workflow.services.notification_service import NotificationService

router = APIRouter()


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List unread notifications",
)
async def list_notifications(
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationListResponse:
    """List unread workflow notifications, newest first."""
    notifications = await NotificationService(db).list_unread(limit=limit)
    return NotificationListResponse(
        items=[NotificationResponse.model_validate(n) for n in notifications],
        total=len(notifications),
    )


@router.post(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    summary="Mark notification as read",
)
async def mark_notification_read(
    notification_id: UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> NotificationResponse:
    notification = await NotificationService(db).mark_as_read(notification_id)
    response = NotificationResponse.model_validate(notification)
    await db.commit()
    return response
