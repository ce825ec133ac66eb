"""Workflow definition model."""

from sqlalchemy import JSON, Boolean, Column, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from editorial_workflow.models.base import BaseModel

JSONType = JSON().with_variant(JSONB(), "postgresql")


class WorkflowDefinition(BaseModel):
    """Declarative workflow graph for one or more content types.

    States, transitions and roles are owned children and are only ever
    replaced as part of a whole-definition save.
    """

    __tablename__ = "workflow_definitions"

    name = Column(String(128), nullable=False)
    description = Column(String(512), nullable=True)
    content_types = Column(JSONType, nullable=False, default=list)
    is_default = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    initial_state = Column(String(64), nullable=False)

    # Relationships
    states = relationship(
        "WorkflowState",
        back_populates="workflow_definition",
        cascade="all, delete-orphan",
        order_by="WorkflowState.position",
    )
    transitions = relationship(
        "WorkflowTransition",
        back_populates="workflow_definition",
        cascade="all, delete-orphan",
        order_by="WorkflowTransition.position",
    )
    roles = relationship(
        "WorkflowRole",
        back_populates="workflow_definition",
        cascade="all, delete-orphan",
        order_by="WorkflowRole.position",
    )

    def __repr__(self) -> str:
        return f"<WorkflowDefinition(id={self.id}, name={self.name}, is_default={self.is_default})>"
