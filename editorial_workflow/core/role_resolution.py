"""Effective role resolution with priority-based inheritance."""

from collections.abc import Iterable

from editorial_workflow.schemas.workflow import WorkflowDefinitionSchema, WorkflowRoleSchema


def effective_roles(
    definition: WorkflowDefinitionSchema,
    user_role_names: Iterable[str],
) -> list[WorkflowRoleSchema]:
    """Resolve the workflow roles an actor effectively holds.

    Direct roles are the definition roles whose ``role_key`` appears in the
    actor's role names. Senior roles inherit every junior role: all roles with
    a priority strictly below the highest direct priority are added.

    Args:
        definition: Workflow definition owning the roles
        user_role_names: External role names assigned to the actor

    Returns:
        Roles sorted by descending priority (declaration order among equals)

    Examples:
        An actor holding only ``Editor`` (priority 2) in the default workflow
        resolves to ``[Editor, Writer]``; an actor holding only ``Writer``
        resolves to ``[Writer]``.
    """
    names = set(user_role_names)
    if not names:
        return []

    direct = [r for r in definition.roles if r.role_key in names]
    if not direct:
        return []

    max_priority = max(r.priority for r in direct)
    direct_ids = {r.id for r in direct}
    inherited = [
        r for r in definition.roles
        if r.priority < max_priority and r.id not in direct_ids
    ]

    return sorted(direct + inherited, key=lambda r: r.priority, reverse=True)
