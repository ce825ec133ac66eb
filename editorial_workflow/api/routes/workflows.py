"""API routes for workflow definitions and permission checks."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.api.deps import (
    Actor,
    get_current_actor,
    get_workflow_service,
    require_admin,
)
from editorial_workflow.core.database import get_db
from editorial_workflow.schemas.transition import (
    AvailableTransitionsResponse,
    EffectiveRolesResponse,
    PermissionCheckResponse,
)
from editorial_workflow.schemas.workflow import (
    CreateDefaultWorkflowRequest,
    ValidationResultResponse,
    WorkflowDefinitionSchema,
    WorkflowListResponse,
    WorkflowSummary,
)
from editorial_workflow.services.workflow_service import WorkflowService

router = APIRouter()


def _definition_to_summary(definition: WorkflowDefinitionSchema) -> WorkflowSummary:
    """Convert a workflow definition to its listing entry."""
    return WorkflowSummary(
        id=definition.id,
        name=definition.name,
        description=definition.description,
        content_types=definition.content_types,
        is_default=definition.is_default,
        is_active=definition.is_active,
        initial_state=definition.initial_state,
        state_count=len(definition.states),
        transition_count=len(definition.transitions),
        role_count=len(definition.roles),
        created_at=definition.created_at,
        updated_at=definition.updated_at,
    )


@router.get(
    "",
    response_model=WorkflowListResponse,
    summary="List workflow definitions",
)
async def list_workflows(
    service: WorkflowService = Depends(get_workflow_service),
) -> WorkflowListResponse:
    definitions = await service.definitions.list_all()
    return WorkflowListResponse(
        items=[_definition_to_summary(d) for d in definitions],
        total=len(definitions),
    )


@router.post(
    "",
    response_model=WorkflowDefinitionSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create workflow definition",
)
async def create_workflow(
    definition: WorkflowDefinitionSchema,
    db: AsyncSession = Depends(get_db),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(require_admin),
) -> WorkflowDefinitionSchema:
    """Create a workflow definition.

    The definition is validated before it is stored; every failing check is
    returned in ``details.errors``.
    """
    stored = await service.save_definition(definition, actor_id=actor.actor_id)
    await db.commit()
    return stored


@router.post(
    "/default",
    response_model=WorkflowDefinitionSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create default workflow for a content type",
)
async def create_default_workflow(
    request: CreateDefaultWorkflowRequest,
    db: AsyncSession = Depends(get_db),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(require_admin),
) -> WorkflowDefinitionSchema:
    """Create the canonical draft/review/approve/publish workflow.

    The new workflow becomes the default for the content type.
    """
    stored = await service.create_default(
        request.content_type, request.name, actor_id=actor.actor_id
    )
    await db.commit()
    return stored


@router.post(
    "/validate",
    response_model=ValidationResultResponse,
    summary="Validate workflow definition",
)
async def validate_workflow(
    definition: WorkflowDefinitionSchema,
    service: WorkflowService = Depends(get_workflow_service),
) -> ValidationResultResponse:
    """Run the definition checks without saving."""
    errors = service.validate(definition)
    return ValidationResultResponse(is_valid=not errors, errors=errors)


@router.get(
    "/content-type/{content_type}",
    response_model=WorkflowListResponse,
    summary="List workflows for a content type",
)
async def list_workflows_for_content_type(
    content_type: str,
    service: WorkflowService = Depends(get_workflow_service),
) -> WorkflowListResponse:
    definitions = await service.definitions.get_for_content_type(content_type)
    return WorkflowListResponse(
        items=[_definition_to_summary(d) for d in definitions],
        total=len(definitions),
    )


@router.get(
    "/content-type/{content_type}/default",
    response_model=WorkflowDefinitionSchema,
    summary="Get governing workflow for a content type",
)
async def get_default_workflow(
    content_type: str,
    service: WorkflowService = Depends(get_workflow_service),
) -> WorkflowDefinitionSchema:
    return await service.definitions.get_default(content_type)


@router.get(
    "/transitions/{transition_id}/can-execute",
    response_model=PermissionCheckResponse,
    summary="Check transition permission",
)
async def can_execute_transition(
    transition_id: UUID,
    content_id: UUID | None = Query(None),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(get_current_actor),
) -> PermissionCheckResponse:
    """Check whether the caller may execute a transition.

    Unknown transitions are reported as not allowed.
    """
    allowed = await service.can_execute(
        transition_id, actor.roles, content_id=content_id, actor_id=actor.actor_id
    )
    return PermissionCheckResponse(allowed=allowed, transition_id=transition_id)


@router.get(
    "/{workflow_id}",
    response_model=WorkflowDefinitionSchema,
    summary="Get workflow definition",
)
async def get_workflow(
    workflow_id: UUID,
    service: WorkflowService = Depends(get_workflow_service),
) -> WorkflowDefinitionSchema:
    return await service.definitions.get(workflow_id)


@router.put(
    "/{workflow_id}",
    response_model=WorkflowDefinitionSchema,
    summary="Replace workflow definition",
)
async def update_workflow(
    workflow_id: UUID,
    definition: WorkflowDefinitionSchema,
    db: AsyncSession = Depends(get_db),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(require_admin),
) -> WorkflowDefinitionSchema:
    """Replace a workflow definition with its states, transitions and roles."""
    await service.definitions.get(workflow_id)
    stored = await service.save_definition(
        definition.model_copy(update={"id": workflow_id}),
        actor_id=actor.actor_id,
    )
    await db.commit()
    return stored


@router.delete(
    "/{workflow_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete workflow definition",
)
async def delete_workflow(
    workflow_id: UUID,
    db: AsyncSession = Depends(get_db),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(require_admin),
) -> None:
    await service.delete_definition(workflow_id, actor_id=actor.actor_id)
    await db.commit()


@router.get(
    "/{workflow_id}/effective-roles",
    response_model=EffectiveRolesResponse,
    summary="Resolve caller's effective roles",
)
async def get_effective_roles(
    workflow_id: UUID,
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(get_current_actor),
) -> EffectiveRolesResponse:
    roles = await service.effective_roles(workflow_id, actor.roles)
    return EffectiveRolesResponse(items=roles, total=len(roles))


@router.get(
    "/{workflow_id}/transitions",
    response_model=AvailableTransitionsResponse,
    summary="List transitions available from a state",
)
async def list_available_transitions(
    workflow_id: UUID,
    current_state: str = Query(..., min_length=1, max_length=64),
    content_id: UUID | None = Query(None),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(get_current_actor),
) -> AvailableTransitionsResponse:
    """List the transitions out of ``current_state`` the caller may execute.

    Ordered by sort order, ties in declaration order.
    """
    transitions = await service.list_available(
        workflow_id,
        current_state,
        actor.roles,
        content_id=content_id,
        actor_id=actor.actor_id,
    )
    return AvailableTransitionsResponse(items=transitions, total=len(transitions))


@router.get(
    "/{workflow_id}/can-view",
    response_model=PermissionCheckResponse,
    summary="Check content visibility",
)
async def can_view_content(
    workflow_id: UUID,
    content_state: str = Query(..., min_length=1, max_length=64),
    content_owner_id: str | None = Query(None),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(get_current_actor),
) -> PermissionCheckResponse:
    allowed = await service.can_view_content(
        workflow_id, content_state, actor.roles, content_owner_id, actor.actor_id
    )
    return PermissionCheckResponse(allowed=allowed, workflow_id=workflow_id)
