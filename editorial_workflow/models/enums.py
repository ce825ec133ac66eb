"""Enumerations for audit actions."""

from enum import Enum


class AuditAction(str, Enum):
    """Audit action enumeration for tracking workflow changes."""

    # Workflow definition
    WORKFLOW_CREATE = "workflow.create"
    WORKFLOW_UPDATE = "workflow.update"
    WORKFLOW_DELETE = "workflow.delete"

    # Content
    CONTENT_CREATE = "content.create"
    CONTENT_TRANSITION = "content.transition"
