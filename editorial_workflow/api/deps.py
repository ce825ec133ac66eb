"""FastAPI dependencies for authentication and authorization."""
from dataclasses import dataclass, field

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.core.config import get_settings
from editorial_workflow.core.database import get_db
from editorial_workflow.core.security import decode_token, roles_from_claims
from editorial_workflow.services.role_resolver import StaticRoleNameResolver
from editorial_workflow.services.workflow_service import WorkflowService

# HTTP Bearer token security scheme; missing credentials are reported as 401
security = HTTPBearer(auto_error=False)


@dataclass
class Actor:
    """Authenticated caller: external actor ID plus external role names."""

    actor_id: str
    roles: set[str] = field(default_factory=set)


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Actor:
    """Get the current actor from the bearer token.

    Args:
        credentials: HTTP Bearer credentials from request

    Returns:
        Actor with the token's subject and role names

    Raises:
        HTTPException: 401 if the token is missing, invalid or has no subject
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    actor_id = payload.get("sub")
    if not actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    return Actor(actor_id=str(actor_id), roles=roles_from_claims(payload))


async def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Require the configured admin role for workflow definition management.

    Raises:
        HTTPException: 403 if the actor lacks the admin role
    """
    admin_role = get_settings().admin_role_key
    if admin_role not in actor.roles:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permissions. Requires {admin_role}.",
        )
    return actor


async def get_workflow_service(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> WorkflowService:
    """Workflow service bound to the request session and the caller's roles."""
    resolver = StaticRoleNameResolver.for_actor(actor.actor_id, actor.roles)
    return WorkflowService.for_session(db, resolver)
