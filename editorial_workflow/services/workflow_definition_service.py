"""Workflow definition service: validated saves, deletes and lookups."""
import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from editorial_workflow.core.default_workflow import create_default_workflow
from editorial_workflow.core.definition_validator import validate_definition
from editorial_workflow.core.errors import NotFoundError, PersistenceError, ValidationFailedError
from editorial_workflow.core.interfaces import WorkflowDefinitionRepository
from editorial_workflow.core.structured_logging import log_json
from editorial_workflow.models.enums import AuditAction
from editorial_workflow.schemas.workflow import WorkflowDefinitionSchema
from editorial_workflow.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class WorkflowDefinitionService:
    """Service for managing workflow definitions."""

    def __init__(
        self,
        repository: WorkflowDefinitionRepository,
        audit: AuditService | None = None,
    ):
        """Initialize workflow definition service.

        Args:
            repository: Definition persistence
            audit: Audit trail writer (None disables auditing)
        """
        self.repository = repository
        self.audit = audit

    def validate(self, definition: WorkflowDefinitionSchema) -> list[str]:
        """Run static consistency checks without saving."""
        return validate_definition(definition)

    async def list_all(self) -> list[WorkflowDefinitionSchema]:
        return await self.repository.get_all()

    async def get(self, workflow_id: UUID) -> WorkflowDefinitionSchema:
        """Get a workflow definition by ID.

        Raises:
            NotFoundError: If the definition does not exist
        """
        definition = await self.repository.get_by_id(workflow_id)
        if definition is None:
            raise NotFoundError("Workflow not found")
        return definition

    async def get_for_content_type(self, content_type: str) -> list[WorkflowDefinitionSchema]:
        return await self.repository.get_by_content_type(content_type)

    async def get_default(self, content_type: str) -> WorkflowDefinitionSchema:
        """Get the governing definition for a content type.

        Raises:
            NotFoundError: If no active definition governs the content type
        """
        definition = await self.repository.get_default_by_content_type(content_type)
        if definition is None:
            raise NotFoundError(f"No active workflow for content type '{content_type}'")
        return definition

    async def save(
        self,
        definition: WorkflowDefinitionSchema,
        actor_id: str | None = None,
    ) -> WorkflowDefinitionSchema:
        """Validate and store a whole workflow definition.

        Args:
            definition: Definition to insert or replace
            actor_id: Actor performing the save (for the audit trail)

        Returns:
            Stored definition

        Raises:
            ValidationFailedError: If the definition fails validation
            PersistenceError: If the store rejects the write
        """
        errors = validate_definition(definition)
        if errors:
            raise ValidationFailedError(errors)

        try:
            existing = await self.repository.get_by_id(definition.id)
            stored = await self.repository.save(definition)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to save workflow: {exc}") from exc

        if self.audit is not None:
            await self.audit.log(
                action=AuditAction.WORKFLOW_UPDATE if existing else AuditAction.WORKFLOW_CREATE,
                entity_type="workflow_definition",
                entity_id=stored.id,
                actor_id=actor_id,
                diff_json={
                    "name": stored.name,
                    "content_types": stored.content_types,
                    "is_default": stored.is_default,
                    "states": len(stored.states),
                    "transitions": len(stored.transitions),
                    "roles": len(stored.roles),
                },
            )

        log_json(
            logger,
            logging.INFO,
            "workflow_definition_saved",
            workflow_id=str(stored.id),
            name=stored.name,
            content_types=stored.content_types,
            created=existing is None,
            actor_id=actor_id,
        )
        return stored

    async def delete(self, workflow_id: UUID, actor_id: str | None = None) -> None:
        """Delete a workflow definition and its children.

        Raises:
            NotFoundError: If the definition does not exist
            PersistenceError: If the store rejects the delete
        """
        try:
            deleted = await self.repository.delete(workflow_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to delete workflow: {exc}") from exc
        if not deleted:
            raise NotFoundError("Workflow not found")

        if self.audit is not None:
            await self.audit.log(
                action=AuditAction.WORKFLOW_DELETE,
                entity_type="workflow_definition",
                entity_id=workflow_id,
                actor_id=actor_id,
            )

        log_json(
            logger,
            logging.INFO,
            "workflow_definition_deleted",
            workflow_id=str(workflow_id),
            actor_id=actor_id,
        )

    async def create_default(
        self,
        content_type: str,
        name: str,
        actor_id: str | None = None,
    ) -> WorkflowDefinitionSchema:
        """Create and store the canonical editorial workflow for a content type."""
        return await self.save(create_default_workflow(content_type, name), actor_id=actor_id)
