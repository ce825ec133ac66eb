"""API routes for workflow-managed content."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.api.deps import Actor, get_current_actor, get_workflow_service
from editorial_workflow.api.errors import error_response
from editorial_workflow.core.config import get_settings
from editorial_workflow.core.database import get_db
from editorial_workflow.core.transition_rules import can_view_content
from editorial_workflow.schemas.content import ContentResponse, CreateContentRequest
from editorial_workflow.schemas.errors import ErrorResponse
from editorial_workflow.schemas.transition import (
    AvailableTransitionsResponse,
    TransitionRequest,
    TransitionResultResponse,
)
from editorial_workflow.services.content_service import ContentService
from editorial_workflow.services.workflow_service import WorkflowService

router = APIRouter()


def _content_service(db: AsyncSession) -> ContentService:
    return ContentService(db, get_settings().content_types)


@router.post(
    "/{content_type}",
    response_model=ContentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create content item",
)
async def create_content(
    content_type: str,
    request: CreateContentRequest,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> ContentResponse:
    """Create a content item owned by the caller.

    The item starts in the initial state of the content type's governing
    workflow.
    """
    item = await _content_service(db).create(content_type, request, actor.actor_id)
    # Build response before commit to avoid lazy loading issues
    response = ContentResponse.model_validate(item)
    await db.commit()
    return response


@router.get(
    "/{content_type}/{content_id}",
    response_model=ContentResponse,
    summary="Get content item",
)
async def get_content(
    content_type: str,
    content_id: UUID,
    db: AsyncSession = Depends(get_db),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(get_current_actor),
) -> ContentResponse:
    """Get a content item if the caller may view it in its current state."""
    item = await _content_service(db).get(content_type, content_id)
    definition = await service.definitions.get_default(content_type)
    if not can_view_content(
        definition, item.workflow_state, actor.roles, item.owner_id, actor.actor_id
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions to view this content",
        )
    return ContentResponse.model_validate(item)


@router.get(
    "/{content_type}/{content_id}/transitions",
    response_model=AvailableTransitionsResponse,
    summary="List transitions available for content",
)
async def list_content_transitions(
    content_type: str,
    content_id: UUID,
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(get_current_actor),
) -> AvailableTransitionsResponse:
    transitions = await service.list_transitions(content_type, content_id, actor.actor_id)
    return AvailableTransitionsResponse(items=transitions, total=len(transitions))


@router.post(
    "/{content_type}/{content_id}/transition",
    response_model=TransitionResultResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Apply workflow transition",
)
async def perform_transition(
    content_type: str,
    content_id: UUID,
    request: TransitionRequest,
    db: AsyncSession = Depends(get_db),
    service: WorkflowService = Depends(get_workflow_service),
    actor: Actor = Depends(get_current_actor),
) -> TransitionResultResponse | JSONResponse:
    """Move content to ``target_state`` through a permitted transition.

    Denied attempts leave the content unchanged and return the failure
    category as ``error``.
    """
    result = await service.perform_transition(
        content_type,
        content_id,
        request.target_state,
        request.comment,
        actor.actor_id,
        current_state=request.current_state,
    )
    if not result.success:
        await db.rollback()
        return error_response(result.category, result.message)

    await db.commit()
    return TransitionResultResponse.model_validate(result)
