"""Role name resolvers."""
import logging
from collections.abc import Iterable

from editorial_workflow.core.interfaces import RoleNameResolver
from editorial_workflow.core.structured_logging import log_json

logger = logging.getLogger(__name__)


class StaticRoleNameResolver:
    """Resolve role names from a fixed actor-to-roles mapping.

    The HTTP layer builds one per request from the bearer token's roles claim,
    so only the authenticated actor resolves to a non-empty set.
    """

    def __init__(self, assignments: dict[str, Iterable[str]] | None = None):
        self._assignments = {
            actor_id: set(roles) for actor_id, roles in (assignments or {}).items()
        }

    @classmethod
    def for_actor(cls, actor_id: str, roles: Iterable[str]) -> "StaticRoleNameResolver":
        return cls({actor_id: roles})

    async def get_role_names(self, actor_id: str) -> set[str]:
        return set(self._assignments.get(actor_id, set()))


async def resolve_role_names(resolver: RoleNameResolver, actor_id: str) -> set[str]:
    """Resolve an actor's role names, degrading to no roles on failure.

    An empty role set denies every permission-gated transition, so a failing
    resolver can never widen access.
    """
    try:
        return set(await resolver.get_role_names(actor_id))
    except Exception as exc:
        log_json(
            logger,
            logging.WARNING,
            "role_resolution_failed",
            actor_id=actor_id,
            error=str(exc),
        )
        return set()
