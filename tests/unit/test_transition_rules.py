"""Unit tests for transition evaluation rules."""

from uuid import uuid4

import pytest

from editorial_workflow.core.default_workflow import (
    APPROVER,
    EDITOR,
    SYSADMIN,
    WRITER,
    create_default_workflow,
)
from editorial_workflow.core.transition_rules import (
    PermissionTier,
    can_execute,
    can_view_content,
    find_transition,
    list_available,
    permission_tier,
)
from editorial_workflow.schemas.workflow import (
    RolePermissionSchema,
    WorkflowDefinitionSchema,
    WorkflowRoleSchema,
    WorkflowStateSchema,
    WorkflowTransitionSchema,
)


@pytest.fixture()
def workflow():
    return create_default_workflow("post", "Post Workflow")


def _names(transitions):
    return [t.name for t in transitions]


def _role(workflow, key):
    return next(r for r in workflow.roles if r.role_key == key)


def _transition(workflow, name):
    return next(t for t in workflow.transitions if t.name == name)


def _two_state_workflow(*transitions, roles=None):
    return WorkflowDefinitionSchema(
        name="Test",
        content_types=["post"],
        initial_state="a",
        states=[
            WorkflowStateSchema(key="a", name="A", is_initial=True),
            WorkflowStateSchema(key="b", name="B"),
        ],
        transitions=list(transitions),
        roles=roles or [],
    )


class TestListAvailable:
    """Tests for listing permitted transitions."""

    def test_editor_in_review_sees_approve_then_reject(self, workflow):
        transitions = list_available(workflow, "in_review", {EDITOR})

        assert _names(transitions) == ["Approve", "Reject"]

    def test_writer_in_draft_sees_submit(self, workflow):
        assert _names(list_available(workflow, "draft", {WRITER})) == ["Submit for Review"]

    def test_writer_in_review_sees_nothing(self, workflow):
        assert list_available(workflow, "in_review", {WRITER}) == []

    def test_approver_inherits_editor_transitions(self, workflow):
        """Test a senior role executes bindings granted to a junior role."""
        assert _names(list_available(workflow, "in_review", {APPROVER})) == ["Approve", "Reject"]

    def test_no_roles_sees_nothing(self, workflow):
        assert list_available(workflow, "draft", set()) == []

    def test_unknown_definition_lists_nothing(self):
        assert list_available(None, "draft", {SYSADMIN}) == []

    def test_listing_is_ordered_and_idempotent(self):
        """Test sort order wins and equal sort orders keep declaration order."""
        role = WorkflowRoleSchema(role_key="R", display_name="R", priority=1)
        granted = [RolePermissionSchema(role_id=role.id)]
        workflow = _two_state_workflow(
            WorkflowTransitionSchema(from_state_key="a", to_state_key="b", name="third", sort_order=2, role_permissions=granted),
            WorkflowTransitionSchema(from_state_key="a", to_state_key="b", name="first", sort_order=1, role_permissions=granted),
            WorkflowTransitionSchema(from_state_key="a", to_state_key="a", name="second", sort_order=1, role_permissions=granted),
            roles=[role],
        )

        first = _names(list_available(workflow, "a", {"R"}))
        second = _names(list_available(workflow, "a", {"R"}))

        assert first == ["first", "second", "third"]
        assert first == second


class TestCanExecute:
    """Tests for single transition permission checks."""

    def test_binding_grants_owner_role(self, workflow):
        submit = _transition(workflow, "Submit for Review")

        assert can_execute(workflow, submit.id, {WRITER}) is True
        assert can_execute(workflow, submit.id, {EDITOR}) is True

    def test_binding_denies_junior_role(self, workflow):
        publish = _transition(workflow, "Publish")

        assert can_execute(workflow, publish.id, {EDITOR}) is False

    def test_unknown_transition_fails_closed(self, workflow):
        assert can_execute(workflow, uuid4(), {SYSADMIN}) is False

    def test_unknown_definition_fails_closed(self, workflow):
        submit = _transition(workflow, "Submit for Review")

        assert can_execute(None, submit.id, {SYSADMIN}) is False

    def test_transition_without_permission_data_is_denied(self):
        """Test deny-by-default for any role set."""
        role = WorkflowRoleSchema(role_key="R", display_name="R", priority=100)
        open_transition = WorkflowTransitionSchema(from_state_key="a", to_state_key="b", name="Open")
        workflow = _two_state_workflow(open_transition, roles=[role])

        assert permission_tier(open_transition) is PermissionTier.DENY
        for role_names in (set(), {"R"}, {"R", "SysAdmin", "Editor"}):
            assert can_execute(workflow, open_transition.id, role_names) is False

    def test_role_permissions_are_exclusive_over_legacy_field(self):
        """Test the legacy field is ignored once bindings exist."""
        bound = WorkflowRoleSchema(role_key="Bound", display_name="Bound", priority=1)
        legacy = WorkflowRoleSchema(role_key="Legacy", display_name="Legacy", priority=1)
        transition = WorkflowTransitionSchema(
            from_state_key="a",
            to_state_key="b",
            name="Move",
            required_permission="Legacy",
            role_permissions=[RolePermissionSchema(role_id=bound.id)],
        )
        workflow = _two_state_workflow(transition, roles=[bound, legacy])

        assert permission_tier(transition) is PermissionTier.ROLE_PERMISSION
        assert can_execute(workflow, transition.id, {"Legacy"}) is False
        assert can_execute(workflow, transition.id, {"Bound"}) is True

    def test_legacy_field_matches_raw_role_names(self):
        """Test the legacy tier ignores inherited roles."""
        junior = WorkflowRoleSchema(role_key="Junior", display_name="Junior", priority=1)
        senior = WorkflowRoleSchema(role_key="Senior", display_name="Senior", priority=2)
        transition = WorkflowTransitionSchema(
            from_state_key="a", to_state_key="b", name="Move", required_permission="Junior"
        )
        workflow = _two_state_workflow(transition, roles=[junior, senior])

        assert permission_tier(transition) is PermissionTier.LEGACY_PERMISSION
        assert can_execute(workflow, transition.id, {"Junior"}) is True
        assert can_execute(workflow, transition.id, {"Senior"}) is False

    def test_binding_without_execute_right_is_denied(self):
        role = WorkflowRoleSchema(role_key="R", display_name="R", priority=1)
        transition = WorkflowTransitionSchema(
            from_state_key="a",
            to_state_key="b",
            name="Move",
            role_permissions=[RolePermissionSchema(role_id=role.id, can_execute=False)],
        )
        workflow = _two_state_workflow(transition, roles=[role])

        assert can_execute(workflow, transition.id, {"R"}) is False

    def test_condition_evaluator_can_deny(self, workflow):
        """Test a failing condition denies an otherwise granted binding."""
        submit = _transition(workflow, "Submit for Review")
        seen = []

        def deny(permission, content_id, actor_id):
            seen.append((permission.role_id, content_id, actor_id))
            return False

        content_id = uuid4()
        allowed = can_execute(
            workflow, submit.id, {WRITER}, content_id=content_id, actor_id="w1", conditions=deny
        )

        assert allowed is False
        assert seen == [(_role(workflow, WRITER).id, content_id, "w1")]


class TestFindTransition:
    """Tests for resolving a transition by target state."""

    def test_finds_permitted_transition(self, workflow):
        found = find_transition(workflow, "in_review", "rejected", {EDITOR})

        assert found is not None
        assert found.name == "Reject"

    def test_editor_cannot_publish_from_review(self, workflow):
        assert find_transition(workflow, "in_review", "published", {EDITOR}) is None


class TestCanViewContent:
    """Tests for content visibility."""

    def test_owner_can_always_view(self, workflow):
        assert can_view_content(workflow, "in_review", set(), "w1", "w1") is True

    def test_missing_owner_does_not_match_missing_actor(self, workflow):
        assert can_view_content(workflow, "in_review", set(), None, None) is False

    def test_view_all_role_can_view(self, workflow):
        assert can_view_content(workflow, "approved", {EDITOR}, "w1", "e1") is True

    def test_published_content_is_visible_to_everyone(self, workflow):
        assert can_view_content(workflow, "published", set(), "w1", "reader") is True

    def test_allowed_from_states_limits_visibility(self, workflow):
        """Test a Writer sees other writers' drafts but not content in review."""
        assert can_view_content(workflow, "draft", {WRITER}, "w1", "w2") is True
        assert can_view_content(workflow, "in_review", {WRITER}, "w1", "w2") is False

    def test_unknown_definition_hides_content(self):
        assert can_view_content(None, "published", {SYSADMIN}, "w1", "w1") is False
