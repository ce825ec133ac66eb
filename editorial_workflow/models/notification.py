"""Workflow notification model."""

from sqlalchemy import Boolean, Column, String, Text, Uuid

from editorial_workflow.models.base import BaseModel


class WorkflowNotification(BaseModel):
    """Notification emitted when a transition is applied."""

    __tablename__ = "workflow_notifications"

    content_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    content_type = Column(String(64), nullable=False)
    content_title = Column(String(255), nullable=True)
    actor_id = Column(String(128), nullable=False)
    category = Column(String(32), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False, index=True)

    def __repr__(self) -> str:
        return f"<WorkflowNotification(id={self.id}, content_id={self.content_id}, read={self.is_read})>"
