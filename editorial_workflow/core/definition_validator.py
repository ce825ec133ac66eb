"""Static consistency checks for workflow definitions."""

from collections import Counter

from editorial_workflow.schemas.workflow import WorkflowDefinitionSchema


def validate_definition(definition: WorkflowDefinitionSchema) -> list[str]:
    """Validate a workflow definition before it is saved.

    Every check runs; errors are collected rather than short-circuited.

    Args:
        definition: Workflow definition to check

    Returns:
        List of error messages, empty when the definition is valid
    """
    errors: list[str] = []

    if not definition.name or not definition.name.strip():
        errors.append("Workflow name is required")

    if not definition.content_types:
        errors.append("At least one content type must be specified")

    if not definition.initial_state or not definition.initial_state.strip():
        errors.append("Initial state is required")

    state_keys = {s.key for s in definition.states}

    if not definition.states:
        errors.append("At least one workflow state is required")
    else:
        if definition.initial_state and definition.initial_state not in state_keys:
            errors.append(
                f"Initial state '{definition.initial_state}' not found in workflow states"
            )

        state_counts = Counter(s.key for s in definition.states)
        for key, count in state_counts.items():
            if count > 1:
                errors.append(f"Duplicate state key: {key}")

    for index, transition in enumerate(definition.transitions, start=1):
        label = transition.name.strip() if transition.name else ""
        if not label:
            errors.append(f"Transition #{index} must have a name")
            label = f"#{index}"

        if transition.from_state_key not in state_keys:
            errors.append(
                f"Transition '{label}' references unknown from state: {transition.from_state_key}"
            )
        if transition.to_state_key not in state_keys:
            errors.append(
                f"Transition '{label}' references unknown to state: {transition.to_state_key}"
            )

    role_counts = Counter(r.role_key for r in definition.roles)
    for key, count in role_counts.items():
        if count > 1:
            errors.append(f"Duplicate role key: {key}")

    role_ids = {r.id for r in definition.roles}
    for transition in definition.transitions:
        for permission in transition.role_permissions:
            if permission.role_id not in role_ids:
                errors.append(
                    f"Transition '{transition.name}' grants permission to unknown role: {permission.role_id}"
                )

    return errors
