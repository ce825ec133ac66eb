"""Workflow service: the surface callers use to evaluate and run workflows."""
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.core import transition_rules
from editorial_workflow.core.config import Settings, get_settings
from editorial_workflow.core.errors import NotFoundError, TransitionResult
from editorial_workflow.core.interfaces import (
    NotificationSink,
    PublishHook,
    RoleNameResolver,
    WorkflowDefinitionRepository,
)
from editorial_workflow.core.role_resolution import effective_roles
from editorial_workflow.core.transition_rules import ConditionEvaluator, always_pass
from editorial_workflow.schemas.workflow import (
    WorkflowDefinitionSchema,
    WorkflowRoleSchema,
    WorkflowTransitionSchema,
)
from editorial_workflow.services.audit_service import AuditService
from editorial_workflow.services.content_state_store import (
    ContentStateStoreRegistry,
    SqlPublishHook,
)
from editorial_workflow.services.notification_service import NotificationService
from editorial_workflow.services.role_resolver import resolve_role_names
from editorial_workflow.services.transition_executor import TransitionExecutor
from editorial_workflow.services.workflow_definition_service import WorkflowDefinitionService
from editorial_workflow.services.workflow_repository import SqlWorkflowDefinitionRepository


class WorkflowService:
    """Evaluate, execute and manage editorial workflows.

    Content operations resolve the actor's role names through the
    ``RoleNameResolver``. The evaluation helpers take role names directly
    for callers that already hold them.
    """

    def __init__(
        self,
        repository: WorkflowDefinitionRepository,
        stores: ContentStateStoreRegistry,
        role_resolver: RoleNameResolver,
        notifications: NotificationSink | None = None,
        publish_hook: PublishHook | None = None,
        audit: AuditService | None = None,
        conditions: ConditionEvaluator = always_pass,
        notification_category: str = "workflow",
    ):
        self.repository = repository
        self.stores = stores
        self.role_resolver = role_resolver
        self.conditions = conditions
        self.definitions = WorkflowDefinitionService(repository, audit=audit)
        self.executor = TransitionExecutor(
            repository,
            stores,
            role_resolver,
            notifications=notifications,
            publish_hook=publish_hook,
            audit=audit,
            conditions=conditions,
            notification_category=notification_category,
        )

    @classmethod
    def for_session(
        cls,
        db: AsyncSession,
        role_resolver: RoleNameResolver,
        settings: Settings | None = None,
    ) -> "WorkflowService":
        """Wire the service to the SQL-backed collaborators of one session."""
        settings = settings or get_settings()
        return cls(
            repository=SqlWorkflowDefinitionRepository(db),
            stores=ContentStateStoreRegistry.for_session(db, settings.content_types),
            role_resolver=role_resolver,
            notifications=NotificationService(db),
            publish_hook=SqlPublishHook(db),
            audit=AuditService(db),
            notification_category=settings.notification_category,
        )

    # Evaluation

    async def effective_roles(
        self,
        workflow_id: UUID,
        user_role_names: Iterable[str],
    ) -> list[WorkflowRoleSchema]:
        """Effective roles for a workflow; empty for an unknown workflow."""
        definition = await self.repository.get_by_id(workflow_id)
        if definition is None:
            return []
        return effective_roles(definition, user_role_names)

    async def list_available(
        self,
        workflow_id: UUID,
        current_state: str,
        user_role_names: Iterable[str],
        content_id: UUID | None = None,
        actor_id: str | None = None,
    ) -> list[WorkflowTransitionSchema]:
        definition = await self.repository.get_by_id(workflow_id)
        return transition_rules.list_available(
            definition,
            current_state,
            user_role_names,
            content_id=content_id,
            actor_id=actor_id,
            conditions=self.conditions,
        )

    async def can_execute(
        self,
        transition_id: UUID,
        user_role_names: Iterable[str],
        content_id: UUID | None = None,
        actor_id: str | None = None,
    ) -> bool:
        """Check a single transition; False when it cannot be resolved."""
        resolved = await self.repository.get_transition(transition_id)
        if resolved is None:
            return False
        definition, _ = resolved
        return transition_rules.can_execute(
            definition,
            transition_id,
            user_role_names,
            content_id=content_id,
            actor_id=actor_id,
            conditions=self.conditions,
        )

    async def can_view_content(
        self,
        workflow_id: UUID,
        content_state: str,
        user_role_names: Iterable[str],
        content_owner_id: str | None,
        actor_id: str | None,
    ) -> bool:
        definition = await self.repository.get_by_id(workflow_id)
        return transition_rules.can_view_content(
            definition, content_state, user_role_names, content_owner_id, actor_id
        )

    # Content operations

    async def list_transitions(
        self,
        content_type: str,
        content_id: UUID,
        actor_id: str,
    ) -> list[WorkflowTransitionSchema]:
        """List the transitions the actor may apply to a content item.

        Raises:
            NotFoundError: If the content type is unmanaged or the item is missing
        """
        store = self.stores.get(content_type)
        if store is None:
            raise NotFoundError(f"Content type '{content_type}' is not managed by a workflow")
        current_state = await store.get_state(content_id)
        if current_state is None:
            raise NotFoundError("Content not found")

        definition = await self.repository.get_default_by_content_type(content_type)
        role_names = await resolve_role_names(self.role_resolver, actor_id)
        return transition_rules.list_available(
            definition,
            current_state,
            role_names,
            content_id=content_id,
            actor_id=actor_id,
            conditions=self.conditions,
        )

    async def perform_transition(
        self,
        content_type: str,
        content_id: UUID,
        target_state: str,
        comment: str | None,
        actor_id: str,
        current_state: str | None = None,
    ) -> TransitionResult:
        return await self.executor.execute(
            content_id, content_type, current_state, target_state, comment, actor_id
        )

    # Definition management

    async def save_definition(
        self,
        definition: WorkflowDefinitionSchema,
        actor_id: str | None = None,
    ) -> WorkflowDefinitionSchema:
        return await self.definitions.save(definition, actor_id=actor_id)

    async def delete_definition(self, workflow_id: UUID, actor_id: str | None = None) -> None:
        await self.definitions.delete(workflow_id, actor_id=actor_id)

    async def create_default(
        self,
        content_type: str,
        name: str,
        actor_id: str | None = None,
    ) -> WorkflowDefinitionSchema:
        return await self.definitions.create_default(content_type, name, actor_id=actor_id)

    def validate(self, definition: WorkflowDefinitionSchema) -> list[str]:
        return self.definitions.validate(definition)
