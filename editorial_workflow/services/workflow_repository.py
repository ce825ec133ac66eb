"""SQLAlchemy-backed workflow definition repository."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from editorial_workflow.core.errors import PersistenceError
from editorial_workflow.models.workflow_definition import WorkflowDefinition
from editorial_workflow.models.workflow_role import WorkflowRole
from editorial_workflow.models.workflow_state import WorkflowState
from editorial_workflow.models.workflow_transition import (
    WorkflowRolePermission,
    WorkflowTransition,
)
from editorial_workflow.schemas.workflow import (
    WorkflowDefinitionSchema,
    WorkflowTransitionSchema,
)

_STATE_FIELDS = {"id", "position"}
_ROLE_FIELDS = {"id", "position"}
_TRANSITION_FIELDS = {"id", "position", "role_permissions"}


def _with_children():
    return (
        selectinload(WorkflowDefinition.states),
        selectinload(WorkflowDefinition.roles),
        selectinload(WorkflowDefinition.transitions).selectinload(
            WorkflowTransition.role_permissions
        ),
    )


class SqlWorkflowDefinitionRepository:
    """Load and store whole workflow definitions.

    Definitions are returned as ``WorkflowDefinitionSchema`` instances so the
    workflow engine never touches ORM state. A save replaces the stored
    definition and all of its states, transitions and roles.
    """

    def __init__(self, db: AsyncSession):
        """Initialize repository.

        Args:
            db: Database session
        """
        self.db = db

    async def _load(self, workflow_id: UUID) -> WorkflowDefinition | None:
        result = await self.db.execute(
            select(WorkflowDefinition)
            .where(WorkflowDefinition.id == workflow_id)
            .options(*_with_children())
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[WorkflowDefinitionSchema]:
        """Get all workflow definitions ordered by name."""
        result = await self.db.execute(
            select(WorkflowDefinition)
            .options(*_with_children())
            .order_by(WorkflowDefinition.name)
        )
        return [WorkflowDefinitionSchema.model_validate(w) for w in result.scalars().all()]

    async def get_by_id(self, workflow_id: UUID) -> WorkflowDefinitionSchema | None:
        """Get a workflow definition with all children, or None."""
        record = await self._load(workflow_id)
        if record is None:
            return None
        return WorkflowDefinitionSchema.model_validate(record)

    async def get_transition(
        self, transition_id: UUID
    ) -> tuple[WorkflowDefinitionSchema, WorkflowTransitionSchema] | None:
        """Resolve a transition together with its owning definition."""
        result = await self.db.execute(
            select(WorkflowTransition.workflow_definition_id).where(
                WorkflowTransition.id == transition_id
            )
        )
        workflow_id = result.scalar_one_or_none()
        if workflow_id is None:
            return None

        definition = await self.get_by_id(workflow_id)
        if definition is None:
            return None
        transition = definition.get_transition(transition_id)
        if transition is None:
            return None
        return definition, transition

    async def get_by_content_type(self, content_type: str) -> list[WorkflowDefinitionSchema]:
        """Get active workflow definitions governing a content type."""
        definitions = await self.get_all()
        return [d for d in definitions if d.is_active and d.governs(content_type)]

    async def get_default_by_content_type(
        self, content_type: str
    ) -> WorkflowDefinitionSchema | None:
        """Get the default definition for a content type.

        Falls back to the first active definition governing the type when
        none is flagged as default.
        """
        definitions = await self.get_by_content_type(content_type)
        default = next((d for d in definitions if d.is_default), None)
        if default is not None:
            return default
        return definitions[0] if definitions else None

    async def _unset_other_defaults(self, definition: WorkflowDefinitionSchema) -> None:
        result = await self.db.execute(
            select(WorkflowDefinition).where(
                WorkflowDefinition.is_default.is_(True),
                WorkflowDefinition.id != definition.id,
            )
        )
        content_types = set(definition.content_types)
        for other in result.scalars().all():
            if content_types.intersection(other.content_types or []):
                other.is_default = False
        await self.db.flush()

    async def save(self, definition: WorkflowDefinitionSchema) -> WorkflowDefinitionSchema:
        """Insert or replace a workflow definition.

        Saving an active default clears the default flag on every other
        definition sharing one of its content types.

        Args:
            definition: Definition to store (already validated)

        Returns:
            The stored definition as reloaded from the database
        """
        if definition.is_default and definition.is_active:
            await self._unset_other_defaults(definition)

        existing = await self._load(definition.id)
        created_at = None
        if existing is not None:
            created_at = existing.created_at
            await self.db.delete(existing)
            await self.db.flush()

        record = WorkflowDefinition(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            content_types=list(definition.content_types),
            is_default=definition.is_default,
            is_active=definition.is_active,
            initial_state=definition.initial_state,
        )
        if created_at is not None:
            record.created_at = created_at

        record.states = [
            WorkflowState(id=s.id, position=i, **s.model_dump(exclude=_STATE_FIELDS))
            for i, s in enumerate(definition.states)
        ]
        record.roles = [
            WorkflowRole(id=r.id, position=i, **r.model_dump(exclude=_ROLE_FIELDS))
            for i, r in enumerate(definition.roles)
        ]
        self.db.add(record)
        # Roles must exist before role permissions reference them
        await self.db.flush()

        for i, t in enumerate(definition.transitions):
            transition = WorkflowTransition(
                id=t.id,
                workflow_definition_id=record.id,
                position=i,
                **t.model_dump(exclude=_TRANSITION_FIELDS),
            )
            transition.role_permissions = [
                WorkflowRolePermission(id=p.id, position=j, **p.model_dump(exclude={"id"}))
                for j, p in enumerate(t.role_permissions)
            ]
            self.db.add(transition)
        await self.db.flush()

        workflow_id = record.id
        self.db.expire(record)
        stored = await self.get_by_id(workflow_id)
        if stored is None:
            raise PersistenceError(f"Workflow {workflow_id} was not stored")
        return stored

    async def delete(self, workflow_id: UUID) -> bool:
        """Delete a definition and its children.

        Returns:
            True if a definition was deleted, False if none existed
        """
        existing = await self._load(workflow_id)
        if existing is None:
            return False
        await self.db.delete(existing)
        await self.db.flush()
        return True
