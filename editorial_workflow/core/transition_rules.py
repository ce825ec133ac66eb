"""Transition evaluation rules.

Pure functions over a loaded workflow definition: which transitions an actor
may execute from a state, whether one specific transition is permitted, and
whether a content item is visible to the actor. Nothing here performs I/O.

Permission checks run through an ordered list of tiers:

1. ``ROLE_PERMISSION``: when a transition carries any role-permission
   bindings, they are authoritative and exclusive.
2. ``LEGACY_PERMISSION``: otherwise a single ``required_permission`` role
   name is compared against the actor's raw role names.
3. ``DENY``: a transition with no permission data is executable by nobody.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Protocol
from uuid import UUID

from editorial_workflow.core.role_resolution import effective_roles
from editorial_workflow.schemas.workflow import (
    RolePermissionSchema,
    WorkflowDefinitionSchema,
    WorkflowRoleSchema,
    WorkflowTransitionSchema,
)


class PermissionTier(str, Enum):
    """Permission model applied to a transition, in precedence order."""

    ROLE_PERMISSION = "role_permission"
    LEGACY_PERMISSION = "legacy_permission"
    DENY = "deny"


class ConditionEvaluator(Protocol):
    """Extension point for role-permission ``conditions``."""

    def __call__(
        self,
        permission: RolePermissionSchema,
        content_id: UUID | None,
        actor_id: str | None,
    ) -> bool:
        ...


def always_pass(
    permission: RolePermissionSchema,
    content_id: UUID | None,
    actor_id: str | None,
) -> bool:
    """Default condition evaluator: conditions are stored but never restrict."""
    return True


def permission_tier(transition: WorkflowTransitionSchema) -> PermissionTier:
    """Select the tier that decides who may execute a transition."""
    if transition.role_permissions:
        return PermissionTier.ROLE_PERMISSION
    if transition.required_permission:
        return PermissionTier.LEGACY_PERMISSION
    return PermissionTier.DENY


def _role_permission_allows(
    transition: WorkflowTransitionSchema,
    roles: list[WorkflowRoleSchema],
    content_id: UUID | None,
    actor_id: str | None,
    conditions: ConditionEvaluator,
) -> bool:
    for role in roles:
        permission = next(
            (rp for rp in transition.role_permissions if rp.role_id == role.id),
            None,
        )
        if permission is not None and permission.can_execute:
            if conditions(permission, content_id, actor_id):
                return True
    return False


def is_transition_allowed(
    transition: WorkflowTransitionSchema,
    user_role_names: set[str],
    roles: list[WorkflowRoleSchema],
    content_id: UUID | None = None,
    actor_id: str | None = None,
    conditions: ConditionEvaluator = always_pass,
) -> bool:
    """Decide a transition for already-resolved effective roles.

    Args:
        transition: Transition to check
        user_role_names: Raw role names (consulted only by the legacy tier)
        roles: Effective roles, descending priority
        content_id: Content item the transition would apply to
        actor_id: Requesting actor
        conditions: Evaluator for role-permission conditions
    """
    tier = permission_tier(transition)
    if tier is PermissionTier.ROLE_PERMISSION:
        return _role_permission_allows(transition, roles, content_id, actor_id, conditions)
    if tier is PermissionTier.LEGACY_PERMISSION:
        return transition.required_permission in user_role_names
    return False


def can_execute(
    definition: WorkflowDefinitionSchema | None,
    transition_id: UUID,
    user_role_names: Iterable[str],
    content_id: UUID | None = None,
    actor_id: str | None = None,
    conditions: ConditionEvaluator = always_pass,
) -> bool:
    """Check whether the actor may execute the transition with the given ID.

    Fails closed when the definition or the transition cannot be resolved.
    """
    if definition is None:
        return False
    transition = definition.get_transition(transition_id)
    if transition is None:
        return False

    names = set(user_role_names)
    roles = effective_roles(definition, names)
    return is_transition_allowed(transition, names, roles, content_id, actor_id, conditions)


def list_available(
    definition: WorkflowDefinitionSchema | None,
    current_state: str,
    user_role_names: Iterable[str],
    content_id: UUID | None = None,
    actor_id: str | None = None,
    conditions: ConditionEvaluator = always_pass,
) -> list[WorkflowTransitionSchema]:
    """List transitions out of ``current_state`` the actor may execute.

    Returns:
        Transitions ordered by ``sort_order``; equal sort orders keep their
        declaration order.
    """
    if definition is None:
        return []

    names = set(user_role_names)
    roles = effective_roles(definition, names)
    available = [
        t for t in definition.transitions
        if t.from_state_key == current_state
        and is_transition_allowed(t, names, roles, content_id, actor_id, conditions)
    ]
    return sorted(available, key=lambda t: t.sort_order)


def find_transition(
    definition: WorkflowDefinitionSchema | None,
    current_state: str,
    target_state: str,
    user_role_names: Iterable[str],
    content_id: UUID | None = None,
    actor_id: str | None = None,
    conditions: ConditionEvaluator = always_pass,
) -> WorkflowTransitionSchema | None:
    """Return the first permitted transition from ``current_state`` to ``target_state``."""
    for transition in list_available(
        definition, current_state, user_role_names, content_id, actor_id, conditions
    ):
        if transition.to_state_key == target_state:
            return transition
    return None


def can_view_content(
    definition: WorkflowDefinitionSchema | None,
    content_state: str,
    user_role_names: Iterable[str],
    content_owner_id: str | None,
    actor_id: str | None,
) -> bool:
    """Check whether the actor may view content sitting in ``content_state``."""
    if definition is None:
        return False

    if content_owner_id is not None and content_owner_id == actor_id:
        return True

    roles = effective_roles(definition, user_role_names)
    if any(r.can_view_all for r in roles):
        return True

    state = definition.get_state(content_state)
    if state is not None and state.is_published:
        return True

    for role in roles:
        if not role.allowed_from_states or content_state in role.allowed_from_states:
            return True

    return False
