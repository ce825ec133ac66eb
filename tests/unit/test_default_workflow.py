"""Unit tests for the default workflow factory."""

from editorial_workflow.core.default_workflow import (
    APPROVER,
    EDITOR,
    SYSADMIN,
    WRITER,
    create_default_workflow,
)


def test_default_workflow_metadata():
    workflow = create_default_workflow("post", "Post Workflow")

    assert workflow.name == "Post Workflow"
    assert workflow.description == "Default workflow for post"
    assert workflow.content_types == ["post"]
    assert workflow.is_default is True
    assert workflow.is_active is True
    assert workflow.initial_state == "draft"


def test_default_workflow_states():
    """Test the five states and their flags."""
    workflow = create_default_workflow("post", "Post Workflow")

    assert [s.key for s in workflow.states] == [
        "draft",
        "in_review",
        "approved",
        "published",
        "rejected",
    ]
    assert [s.key for s in workflow.states if s.is_initial] == ["draft"]
    published = workflow.get_state("published")
    assert published.is_published is True
    assert published.is_final is True


def test_default_workflow_roles_form_a_priority_ladder():
    workflow = create_default_workflow("post", "Post Workflow")

    priorities = {r.role_key: r.priority for r in workflow.roles}
    assert priorities == {WRITER: 1, EDITOR: 2, APPROVER: 3, SYSADMIN: 10}


def test_default_workflow_transitions():
    """Test each transition's edge, owning role and comment rule."""
    workflow = create_default_workflow("post", "Post Workflow")
    role_keys = {r.id: r.role_key for r in workflow.roles}

    edges = {
        t.name: (
            t.from_state_key,
            t.to_state_key,
            [role_keys[p.role_id] for p in t.role_permissions],
            t.requires_comment,
        )
        for t in workflow.transitions
    }

    assert edges == {
        "Submit for Review": ("draft", "in_review", [WRITER], False),
        "Approve": ("in_review", "approved", [EDITOR], False),
        "Reject": ("in_review", "rejected", [EDITOR], True),
        "Publish": ("approved", "published", [APPROVER], False),
        "Revise": ("rejected", "draft", [WRITER], False),
        "Unpublish": ("published", "draft", [APPROVER], True),
    }


def test_revise_does_not_notify():
    workflow = create_default_workflow("post", "Post Workflow")

    silent = [t.name for t in workflow.transitions if not t.send_notification]
    assert silent == ["Revise"]


def test_each_call_builds_fresh_identifiers():
    first = create_default_workflow("post", "A")
    second = create_default_workflow("post", "A")

    assert first.id != second.id
    assert {s.id for s in first.states}.isdisjoint({s.id for s in second.states})
