"""Workflow state model."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import relationship

from editorial_workflow.models.base import BaseModel


class WorkflowState(BaseModel):
    """Named position a content item can occupy within a workflow."""

    __tablename__ = "workflow_states"

    workflow_definition_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("workflow_definitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    key = Column(String(64), nullable=False)
    name = Column(String(128), nullable=False)
    description = Column(String(512), nullable=True)
    color = Column(String(16), nullable=False, default="#6c757d")
    icon = Column(String(64), nullable=False, default="fas fa-circle")
    sort_order = Column(Integer, nullable=False, default=0)
    is_initial = Column(Boolean, nullable=False, default=False)
    is_published = Column(Boolean, nullable=False, default=False)
    is_final = Column(Boolean, nullable=False, default=False)
    # Declaration order inside the owning definition
    position = Column(Integer, nullable=False, default=0)

    workflow_definition = relationship("WorkflowDefinition", back_populates="states")

    __table_args__ = (
        Index("idx_workflow_states_definition_key", "workflow_definition_id", "key", unique=True),
    )

    def __repr__(self) -> str:
        return f"<WorkflowState(key={self.key}, published={self.is_published})>"
