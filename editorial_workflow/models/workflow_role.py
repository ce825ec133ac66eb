"""Workflow role model."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import relationship

from editorial_workflow.models.base import BaseModel
from editorial_workflow.models.workflow_definition import JSONType


class WorkflowRole(BaseModel):
    """Workflow role bound to an external identity role name.

    Higher ``priority`` roles inherit every lower-priority role of the same
    definition.
    """

    __tablename__ = "workflow_roles"

    workflow_definition_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("workflow_definitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role_key = Column(String(64), nullable=False)
    display_name = Column(String(128), nullable=False)
    description = Column(String(512), nullable=True)
    priority = Column(Integer, nullable=False, default=0)
    can_create = Column(Boolean, nullable=False, default=True)
    can_edit = Column(Boolean, nullable=False, default=True)
    can_delete = Column(Boolean, nullable=False, default=False)
    can_view_all = Column(Boolean, nullable=False, default=False)
    allowed_from_states = Column(JSONType, nullable=False, default=list)
    allowed_to_states = Column(JSONType, nullable=False, default=list)
    position = Column(Integer, nullable=False, default=0)

    workflow_definition = relationship("WorkflowDefinition", back_populates="roles")

    __table_args__ = (
        Index("idx_workflow_roles_definition_key", "workflow_definition_id", "role_key", unique=True),
    )

    def __repr__(self) -> str:
        return f"<WorkflowRole(role_key={self.role_key}, priority={self.priority})>"
