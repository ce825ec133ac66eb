"""Content item model carrying workflow state fields."""

from sqlalchemy import Column, DateTime, Index, String, Text, Uuid

from editorial_workflow.models.base import BaseModel


class ContentItem(BaseModel):
    """Content record whose workflow fields are driven by transitions.

    ``workflow_state`` holds a state key of the governing definition. The
    review fields describe the last applied transition; ``published`` is set
    and cleared by publish/unpublish side effects.
    """

    __tablename__ = "content_items"

    content_type = Column(String(64), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    owner_id = Column(String(128), nullable=True)
    workflow_state = Column(String(64), nullable=False, index=True)
    last_reviewer_id = Column(String(128), nullable=True)
    last_reviewed_on = Column(DateTime(timezone=True), nullable=True)
    review_comment = Column(Text, nullable=True)
    published = Column(DateTime(timezone=True), nullable=True)
    # Downstream artifact created on first publish
    published_artifact_id = Column(Uuid(as_uuid=True), nullable=True)

    __table_args__ = (
        Index("idx_content_items_type_state", "content_type", "workflow_state"),
    )

    def __repr__(self) -> str:
        return f"<ContentItem(id={self.id}, type={self.content_type}, state={self.workflow_state})>"
