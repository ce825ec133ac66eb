"""AuditEvent model."""

from sqlalchemy import Column, String, Uuid
from sqlalchemy import Enum as SQLEnum

from editorial_workflow.models.base import BaseModel
from editorial_workflow.models.enums import AuditAction
from editorial_workflow.models.workflow_definition import JSONType


class AuditEvent(BaseModel):
    """Append-only audit trail for definition changes and applied transitions."""

    __tablename__ = "audit_events"

    actor_id = Column(String(128), nullable=True, index=True)
    action = Column(
        SQLEnum(
            AuditAction,
            name="audit_action",
            native_enum=False,
            length=32,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    diff_json = Column(JSONType, nullable=True)

    def __repr__(self) -> str:
        return f"<AuditEvent(id={self.id}, action={self.action}, entity_type={self.entity_type})>"
