"""Content service for creating and reading workflow-managed content."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.core.errors import NotFoundError
from editorial_workflow.models.content_item import ContentItem
from editorial_workflow.models.enums import AuditAction
from editorial_workflow.schemas.content import CreateContentRequest
from editorial_workflow.services.audit_service import AuditService
from editorial_workflow.services.workflow_repository import SqlWorkflowDefinitionRepository


class ContentService:
    """Service for managing content items."""

    def __init__(self, db: AsyncSession, content_types: list[str]):
        """Initialize content service.

        Args:
            db: Database session
            content_types: Content types with a registered state store
        """
        self.db = db
        self.content_types = content_types
        self.repository = SqlWorkflowDefinitionRepository(db)
        self.audit_service = AuditService(db)

    def _check_managed(self, content_type: str) -> None:
        if content_type not in self.content_types:
            raise NotFoundError(f"Content type '{content_type}' is not managed by a workflow")

    async def create(
        self,
        content_type: str,
        request: CreateContentRequest,
        actor_id: str,
    ) -> ContentItem:
        """Create a content item in its workflow's initial state.

        Args:
            content_type: Content type tag
            request: Content creation data
            actor_id: Creating actor, recorded as owner

        Returns:
            Created ContentItem instance

        Raises:
            NotFoundError: If the type is unmanaged or has no active workflow
        """
        self._check_managed(content_type)
        definition = await self.repository.get_default_by_content_type(content_type)
        if definition is None:
            raise NotFoundError(f"No active workflow for content type '{content_type}'")

        item = ContentItem(
            content_type=content_type,
            title=request.title,
            owner_id=actor_id,
            workflow_state=definition.initial_state,
        )
        self.db.add(item)
        await self.db.flush()

        await self.audit_service.log(
            action=AuditAction.CONTENT_CREATE,
            entity_type=content_type,
            entity_id=item.id,
            actor_id=actor_id,
            diff_json={
                "title": item.title,
                "workflow_id": str(definition.id),
                "workflow_state": item.workflow_state,
            },
        )

        await self.db.refresh(item)
        return item

    async def get(self, content_type: str, content_id: UUID) -> ContentItem:
        """Get a content item by type and ID.

        Raises:
            NotFoundError: If the content item does not exist
        """
        self._check_managed(content_type)
        item = await self._find(content_type, content_id)
        if item is None:
            raise NotFoundError("Content not found")
        return item

    async def _find(self, content_type: str, content_id: UUID) -> ContentItem | None:
        result = await self.db.execute(
            select(ContentItem).where(
                ContentItem.id == content_id,
                ContentItem.content_type == content_type,
            )
        )
        return result.scalar_one_or_none()
