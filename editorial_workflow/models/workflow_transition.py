"""Workflow transition and role-permission models."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from editorial_workflow.models.base import BaseModel


class WorkflowTransition(BaseModel):
    """Directed, permission-gated edge between two states."""

    __tablename__ = "workflow_transitions"

    workflow_definition_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("workflow_definitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    from_state_key = Column(String(64), nullable=False, index=True)
    to_state_key = Column(String(64), nullable=False)
    name = Column(String(128), nullable=False)
    description = Column(String(512), nullable=True)
    # Legacy single-role gate, consulted only without role permissions
    required_permission = Column(String(128), nullable=True)
    css_class = Column(String(64), nullable=False, default="btn-primary")
    icon = Column(String(64), nullable=False, default="fas fa-arrow-right")
    sort_order = Column(Integer, nullable=False, default=0)
    requires_comment = Column(Boolean, nullable=False, default=False)
    send_notification = Column(Boolean, nullable=False, default=True)
    notification_template = Column(String(1024), nullable=True)
    position = Column(Integer, nullable=False, default=0)

    workflow_definition = relationship("WorkflowDefinition", back_populates="transitions")
    role_permissions = relationship(
        "WorkflowRolePermission",
        back_populates="transition",
        cascade="all, delete-orphan",
        order_by="WorkflowRolePermission.position",
    )

    def __repr__(self) -> str:
        return (
            f"<WorkflowTransition(name={self.name}, "
            f"{self.from_state_key}->{self.to_state_key})>"
        )


class WorkflowRolePermission(BaseModel):
    """Grant of execute rights on a transition to a workflow role."""

    __tablename__ = "workflow_role_permissions"

    transition_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("workflow_transitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("workflow_roles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    can_execute = Column(Boolean, nullable=False, default=True)
    requires_approval = Column(Boolean, nullable=False, default=False)
    approval_role_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("workflow_roles.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Opaque; evaluated through the condition extension point
    conditions = Column(String(1024), nullable=True)
    position = Column(Integer, nullable=False, default=0)

    transition = relationship("WorkflowTransition", back_populates="role_permissions")
    role = relationship("WorkflowRole", foreign_keys=[role_id])
    approval_role = relationship("WorkflowRole", foreign_keys=[approval_role_id])

    def __repr__(self) -> str:
        return f"<WorkflowRolePermission(role_id={self.role_id}, can_execute={self.can_execute})>"
