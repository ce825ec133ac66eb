"""Transition executor applying permitted workflow transitions to content."""
import logging
from datetime import UTC, datetime
from uuid import UUID

from editorial_workflow.core.errors import ErrorCategory, TransitionResult
from editorial_workflow.core.interfaces import (
    NotificationSink,
    PublishHook,
    RoleNameResolver,
    WorkflowDefinitionRepository,
)
from editorial_workflow.core.metrics import observe_transition
from editorial_workflow.core.structured_logging import log_json
from editorial_workflow.core.transition_rules import (
    ConditionEvaluator,
    always_pass,
    find_transition,
)
from editorial_workflow.models.enums import AuditAction
from editorial_workflow.schemas.workflow import WorkflowDefinitionSchema
from editorial_workflow.services.audit_service import AuditService
from editorial_workflow.services.content_state_store import ContentStateStoreRegistry
from editorial_workflow.services.role_resolver import resolve_role_names

logger = logging.getLogger(__name__)

PUBLISHED_STATE_NAME = "published"


def content_type_label(content_type: str) -> str:
    return content_type.replace("_", " ").capitalize()


def _is_publishing(definition: WorkflowDefinitionSchema, state_key: str) -> bool:
    state = definition.get_state(state_key)
    if state is None:
        return state_key.lower() == PUBLISHED_STATE_NAME
    return state.is_published or state.is_final


def _is_published(definition: WorkflowDefinitionSchema, state_key: str) -> bool:
    state = definition.get_state(state_key)
    if state is None:
        return state_key.lower() == PUBLISHED_STATE_NAME
    return state.is_published


class TransitionExecutor:
    """Apply one transition to one content item.

    Every check (store, content, definition, permission, comment) runs before
    the first write, so a rejected attempt leaves the content untouched.
    Expected denials and unexpected failures are both returned as a
    ``TransitionResult``; ``execute`` never raises.
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
        self.notifications = notifications
        self.publish_hook = publish_hook
        self.audit = audit
        self.conditions = conditions
        self.notification_category = notification_category

    def _reject(
        self,
        category: ErrorCategory,
        message: str,
        *,
        content_id: UUID,
        content_type: str,
        actor_id: str,
        target_state: str,
    ) -> TransitionResult:
        log_json(
            logger,
            logging.INFO,
            "workflow_transition_rejected",
            content_id=str(content_id),
            content_type=content_type,
            actor_id=actor_id,
            target_state=target_state,
            category=category.value,
            reason=message,
        )
        observe_transition(content_type=content_type, outcome=category.value)
        return TransitionResult.error(category, message)

    async def execute(
        self,
        content_id: UUID,
        content_type: str,
        current_state: str | None,
        target_state: str,
        comment: str | None,
        actor_id: str,
    ) -> TransitionResult:
        """Execute the transition leading from the content's state to ``target_state``.

        Args:
            content_id: Content item to transition
            content_type: Content type tag selecting the state store and workflow
            current_state: State the caller believes the content is in, or
                None to use the stored state
            target_state: Destination state key
            comment: Reviewer comment (required by some transitions)
            actor_id: Actor requesting the transition

        Returns:
            TransitionResult with the new state on success, or the failure
            category and message
        """
        try:
            return await self._execute(
                content_id, content_type, current_state, target_state, comment, actor_id
            )
        except Exception as exc:
            log_json(
                logger,
                logging.ERROR,
                "workflow_transition_failed",
                content_id=str(content_id),
                content_type=content_type,
                actor_id=actor_id,
                target_state=target_state,
                error=str(exc),
            )
            observe_transition(
                content_type=content_type,
                outcome=ErrorCategory.PERSISTENCE_ERROR.value,
            )
            return TransitionResult.error(ErrorCategory.PERSISTENCE_ERROR, str(exc))

    async def _execute(
        self,
        content_id: UUID,
        content_type: str,
        current_state: str | None,
        target_state: str,
        comment: str | None,
        actor_id: str,
    ) -> TransitionResult:
        context = {
            "content_id": content_id,
            "content_type": content_type,
            "actor_id": actor_id,
            "target_state": target_state,
        }
        label = content_type_label(content_type)

        store = self.stores.get(content_type)
        if store is None:
            return self._reject(
                ErrorCategory.NOT_FOUND,
                f"Content type '{content_type}' is not managed by a workflow",
                **context,
            )

        stored_state = await store.get_state(content_id)
        if stored_state is None:
            return self._reject(
                ErrorCategory.NOT_FOUND, f"{label} {content_id} not found", **context
            )
        if current_state is not None and current_state != stored_state:
            return self._reject(
                ErrorCategory.INVALID_TRANSITION,
                f"{label} is in state '{stored_state}', not '{current_state}'",
                **context,
            )

        definition = await self.repository.get_default_by_content_type(content_type)
        if definition is None:
            return self._reject(
                ErrorCategory.NOT_FOUND,
                f"No active workflow for content type '{content_type}'",
                **context,
            )

        role_names = await resolve_role_names(self.role_resolver, actor_id)
        transition = find_transition(
            definition,
            stored_state,
            target_state,
            role_names,
            content_id=content_id,
            actor_id=actor_id,
            conditions=self.conditions,
        )
        if transition is None:
            return self._reject(
                ErrorCategory.INVALID_TRANSITION,
                f"Transition from '{stored_state}' to '{target_state}' is not permitted",
                **context,
            )

        if transition.requires_comment and not (comment and comment.strip()):
            return self._reject(
                ErrorCategory.COMMENT_REQUIRED,
                f"A comment is required for '{transition.name}'",
                **context,
            )

        now = datetime.now(UTC)
        await store.set_state(content_id, target_state, actor_id, now, comment)

        if _is_publishing(definition, target_state):
            await store.set_published(content_id, now)
            if self.publish_hook is not None:
                await self.publish_hook.ensure_published_artifact(content_id, content_type)
        elif _is_published(definition, stored_state):
            await store.set_published(content_id, None)

        target = definition.get_state(target_state)
        state_name = target.name if target is not None else target_state

        if transition.send_notification and self.notifications is not None:
            title = await store.get_title(content_id)
            message = (
                transition.notification_template
                or f"{label} workflow state updated to {state_name}"
            )
            await self.notifications.emit(
                content_id,
                content_type,
                title,
                actor_id,
                self.notification_category,
                message,
            )

        if self.audit is not None:
            await self.audit.log(
                action=AuditAction.CONTENT_TRANSITION,
                entity_type=content_type,
                entity_id=content_id,
                actor_id=actor_id,
                diff_json={
                    "transition_id": str(transition.id),
                    "transition": transition.name,
                    "from": stored_state,
                    "to": target_state,
                    "comment": comment,
                },
            )

        log_json(
            logger,
            logging.INFO,
            "workflow_transition_applied",
            content_id=str(content_id),
            content_type=content_type,
            actor_id=actor_id,
            transition_id=str(transition.id),
            from_state=stored_state,
            to_state=target_state,
            workflow_id=str(definition.id),
        )
        observe_transition(content_type=content_type, outcome="applied")
        return TransitionResult.ok(f"{label} workflow state updated to {state_name}.", target_state)
