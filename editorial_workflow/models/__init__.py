"""SQLAlchemy models."""

from editorial_workflow.models.audit_event import AuditEvent
from editorial_workflow.models.base import Base, BaseModel
from editorial_workflow.models.content_item import ContentItem
from editorial_workflow.models.enums import AuditAction
from editorial_workflow.models.notification import WorkflowNotification
from editorial_workflow.models.workflow_definition import WorkflowDefinition
from editorial_workflow.models.workflow_role import WorkflowRole
from editorial_workflow.models.workflow_state import WorkflowState
from editorial_workflow.models.workflow_transition import (
    WorkflowRolePermission,
    WorkflowTransition,
)

__all__ = [
    "Base",
    "BaseModel",
    "AuditAction",
    "AuditEvent",
    "ContentItem",
    "WorkflowNotification",
    "WorkflowDefinition",
    "WorkflowState",
    "WorkflowTransition",
    "WorkflowRole",
    "WorkflowRolePermission",
]
