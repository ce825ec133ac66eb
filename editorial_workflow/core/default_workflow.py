"""Canonical editorial workflow used to bootstrap new content types."""

from datetime import UTC, datetime

from editorial_workflow.schemas.workflow import (
    RolePermissionSchema,
    WorkflowDefinitionSchema,
    WorkflowRoleSchema,
    WorkflowStateSchema,
    WorkflowTransitionSchema,
)

WRITER = "Writer"
EDITOR = "Editor"
APPROVER = "Approver"
SYSADMIN = "SysAdmin"


def _default_states() -> list[WorkflowStateSchema]:
    return [
        WorkflowStateSchema(
            key="draft",
            name="Draft",
            description="Content is being written",
            color="#6c757d",
            icon="fas fa-edit",
            sort_order=1,
            is_initial=True,
        ),
        WorkflowStateSchema(
            key="in_review",
            name="In Review",
            description="Content is under review",
            color="#0dcaf0",
            icon="fas fa-search",
            sort_order=2,
        ),
        WorkflowStateSchema(
            key="approved",
            name="Approved",
            description="Content has been approved",
            color="#198754",
            icon="fas fa-check-circle",
            sort_order=3,
        ),
        WorkflowStateSchema(
            key="published",
            name="Published",
            description="Content is live",
            color="#198754",
            icon="fas fa-globe",
            sort_order=4,
            is_published=True,
            is_final=True,
        ),
        WorkflowStateSchema(
            key="rejected",
            name="Rejected",
            description="Content has been rejected",
            color="#dc3545",
            icon="fas fa-times-circle",
            sort_order=5,
        ),
    ]


def _default_roles() -> list[WorkflowRoleSchema]:
    return [
        WorkflowRoleSchema(
            role_key=WRITER,
            display_name="Content Writer",
            description="Can create and edit draft content",
            priority=1,
            can_delete=False,
            allowed_from_states=["draft"],
            allowed_to_states=["in_review"],
        ),
        WorkflowRoleSchema(
            role_key=EDITOR,
            display_name="Content Editor",
            description="Can review and approve content",
            priority=2,
            can_view_all=True,
            allowed_from_states=["in_review", "draft"],
            allowed_to_states=["approved", "rejected", "draft"],
        ),
        WorkflowRoleSchema(
            role_key=APPROVER,
            display_name="Content Approver",
            description="Can publish approved content",
            priority=3,
            can_delete=True,
            can_view_all=True,
            allowed_from_states=["approved", "published"],
            allowed_to_states=["published", "rejected"],
        ),
        WorkflowRoleSchema(
            role_key=SYSADMIN,
            display_name="System Administrator",
            description="Full workflow access",
            priority=10,
            can_delete=True,
            can_view_all=True,
        ),
    ]


def _transition(
    from_state: str,
    to_state: str,
    name: str,
    owner: WorkflowRoleSchema,
    **fields,
) -> WorkflowTransitionSchema:
    # The legacy field mirrors the owning role; bindings take precedence.
    return WorkflowTransitionSchema(
        from_state_key=from_state,
        to_state_key=to_state,
        name=name,
        required_permission=owner.role_key,
        role_permissions=[RolePermissionSchema(role_id=owner.id)],
        **fields,
    )


def create_default_workflow(content_type: str, name: str) -> WorkflowDefinitionSchema:
    """Build the canonical five-state editorial workflow.

    draft -> in_review -> approved -> published, with in_review -> rejected,
    rejected -> draft and published -> draft (unpublish). Writers submit and
    revise, Editors approve or reject, Approvers publish and unpublish.

    Args:
        content_type: Content type tag the workflow governs
        name: Workflow display name

    Returns:
        Unsaved workflow definition flagged as the active default
    """
    roles = _default_roles()
    by_key = {r.role_key: r for r in roles}
    writer, editor, approver = by_key[WRITER], by_key[EDITOR], by_key[APPROVER]

    transitions = [
        _transition(
            "draft", "in_review", "Submit for Review", writer,
            description="Submit content for editorial review",
            css_class="btn-primary",
            icon="fas fa-paper-plane",
            sort_order=1,
        ),
        _transition(
            "in_review", "approved", "Approve", editor,
            description="Approve content for publication",
            css_class="btn-success",
            icon="fas fa-check",
            sort_order=1,
        ),
        _transition(
            "in_review", "rejected", "Reject", editor,
            description="Reject content and return it to the writer",
            css_class="btn-danger",
            icon="fas fa-times",
            sort_order=2,
            requires_comment=True,
        ),
        _transition(
            "approved", "published", "Publish", approver,
            description="Publish content to the website",
            css_class="btn-success",
            icon="fas fa-globe",
            sort_order=1,
        ),
        _transition(
            "rejected", "draft", "Revise", writer,
            description="Return to draft for revision",
            css_class="btn-secondary",
            icon="fas fa-edit",
            sort_order=1,
            send_notification=False,
        ),
        _transition(
            "published", "draft", "Unpublish", approver,
            description="Unpublish content and return to draft",
            css_class="btn-outline-danger",
            icon="fas fa-undo",
            sort_order=1,
            requires_comment=True,
        ),
    ]

    now = datetime.now(UTC)
    return WorkflowDefinitionSchema(
        name=name,
        description=f"Default workflow for {content_type}",
        content_types=[content_type],
        is_default=True,
        is_active=True,
        initial_state="draft",
        created_at=now,
        updated_at=now,
        states=_default_states(),
        transitions=transitions,
        roles=roles,
    )
