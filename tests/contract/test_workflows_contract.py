"""Contract tests for /workflows endpoints."""

import pytest
from httpx import AsyncClient

from editorial_workflow.core.default_workflow import create_default_workflow
from editorial_workflow.schemas.workflow import WorkflowDefinitionSchema


@pytest.mark.asyncio
async def test_create_default_workflow_returns_201(client: AsyncClient, admin_headers):
    """POST /workflows/default returns the stored canonical workflow."""
    response = await client.post(
        "/api/workflows/default",
        json={"content_type": "post", "name": "Post Workflow"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Post Workflow"
    assert data["content_types"] == ["post"]
    assert data["is_default"] is True
    assert data["initial_state"] == "draft"
    assert len(data["states"]) == 5
    assert len(data["transitions"]) == 6
    assert len(data["roles"]) == 4


@pytest.mark.asyncio
async def test_workflow_endpoints_require_token(client: AsyncClient):
    response = await client.get("/api/workflows")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token_returns_401(client: AsyncClient):
    response = await client.get(
        "/api/workflows",
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_non_admin_cannot_manage_definitions(client: AsyncClient, editor_headers):
    response = await client.post(
        "/api/workflows/default",
        json={"content_type": "post", "name": "Post Workflow"},
        headers=editor_headers,
    )

    assert response.status_code == 403
    assert "Insufficient permissions" in response.json()["detail"]


@pytest.mark.asyncio
async def test_list_workflows_returns_summaries(
    client: AsyncClient,
    writer_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    response = await client.get("/api/workflows", headers=writer_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    item = data["items"][0]
    assert item["id"] == str(post_workflow.id)
    assert item["state_count"] == 5
    assert item["transition_count"] == 6
    assert item["role_count"] == 4


@pytest.mark.asyncio
async def test_create_workflow_from_full_definition(client: AsyncClient, admin_headers):
    """POST /workflows stores a client-supplied definition verbatim."""
    definition = create_default_workflow("page", "Page Workflow")

    response = await client.post(
        "/api/workflows",
        json=definition.model_dump(mode="json"),
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == str(definition.id)
    assert [s["key"] for s in data["states"]] == [s.key for s in definition.states]


@pytest.mark.asyncio
async def test_create_invalid_workflow_returns_422_with_all_errors(
    client: AsyncClient,
    admin_headers,
):
    definition = create_default_workflow("page", "Page Workflow")
    definition.content_types = []
    definition.transitions[0].to_state_key = "nowhere"

    response = await client.post(
        "/api/workflows",
        json=definition.model_dump(mode="json"),
        headers=admin_headers,
    )

    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "validation_failed"
    assert data["details"]["errors"] == [
        "At least one content type must be specified",
        "Transition 'Submit for Review' references unknown to state: nowhere",
    ]


@pytest.mark.asyncio
async def test_get_workflow_returns_definition(
    client: AsyncClient,
    writer_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    response = await client.get(f"/api/workflows/{post_workflow.id}", headers=writer_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Post Workflow"


@pytest.mark.asyncio
async def test_get_unknown_workflow_returns_404_error_body(client: AsyncClient, writer_headers):
    response = await client.get(
        "/api/workflows/00000000-0000-0000-0000-000000000000",
        headers=writer_headers,
    )

    assert response.status_code == 404
    assert response.json() == {"error": "not_found", "message": "Workflow not found"}


@pytest.mark.asyncio
async def test_update_workflow_replaces_definition(
    client: AsyncClient,
    admin_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    body = post_workflow.model_dump(mode="json")
    body["name"] = "Renamed Workflow"
    body["transitions"] = [t for t in body["transitions"] if t["name"] != "Unpublish"]

    response = await client.put(
        f"/api/workflows/{post_workflow.id}",
        json=body,
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Renamed Workflow"
    assert len(data["transitions"]) == 5


@pytest.mark.asyncio
async def test_update_unknown_workflow_returns_404(client: AsyncClient, admin_headers):
    definition = create_default_workflow("post", "Ghost")

    response = await client.put(
        f"/api/workflows/{definition.id}",
        json=definition.model_dump(mode="json"),
        headers=admin_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_workflow_returns_204(
    client: AsyncClient,
    admin_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    response = await client.delete(f"/api/workflows/{post_workflow.id}", headers=admin_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/workflows/{post_workflow.id}", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_validate_endpoint_does_not_save(client: AsyncClient, writer_headers):
    definition = create_default_workflow("post", "")

    response = await client.post(
        "/api/workflows/validate",
        json=definition.model_dump(mode="json"),
        headers=writer_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"is_valid": False, "errors": ["Workflow name is required"]}

    listing = await client.get("/api/workflows", headers=writer_headers)
    assert listing.json()["total"] == 0


@pytest.mark.asyncio
async def test_content_type_lookups(
    client: AsyncClient,
    writer_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    listing = await client.get("/api/workflows/content-type/post", headers=writer_headers)
    assert listing.status_code == 200
    assert [i["id"] for i in listing.json()["items"]] == [str(post_workflow.id)]

    default = await client.get("/api/workflows/content-type/post/default", headers=writer_headers)
    assert default.status_code == 200
    assert default.json()["id"] == str(post_workflow.id)

    missing = await client.get("/api/workflows/content-type/page/default", headers=writer_headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_effective_roles_for_caller(
    client: AsyncClient,
    editor_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    response = await client.get(
        f"/api/workflows/{post_workflow.id}/effective-roles",
        headers=editor_headers,
    )

    assert response.status_code == 200
    assert [r["role_key"] for r in response.json()["items"]] == ["Editor", "Writer"]


@pytest.mark.asyncio
async def test_available_transitions_for_state(
    client: AsyncClient,
    editor_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    response = await client.get(
        f"/api/workflows/{post_workflow.id}/transitions",
        params={"current_state": "in_review"},
        headers=editor_headers,
    )

    assert response.status_code == 200
    assert [t["name"] for t in response.json()["items"]] == ["Approve", "Reject"]


@pytest.mark.asyncio
async def test_can_execute_transition(
    client: AsyncClient,
    writer_headers,
    approver_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    publish = next(t for t in post_workflow.transitions if t.name == "Publish")
    url = f"/api/workflows/transitions/{publish.id}/can-execute"

    writer = await client.get(url, headers=writer_headers)
    approver = await client.get(url, headers=approver_headers)

    assert writer.json()["allowed"] is False
    assert approver.json()["allowed"] is True


@pytest.mark.asyncio
async def test_can_execute_unknown_transition_is_false(client: AsyncClient, admin_headers):
    response = await client.get(
        "/api/workflows/transitions/00000000-0000-0000-0000-000000000000/can-execute",
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["allowed"] is False


@pytest.mark.asyncio
async def test_can_view_content(
    client: AsyncClient,
    writer_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    url = f"/api/workflows/{post_workflow.id}/can-view"

    in_review = await client.get(
        url,
        params={"content_state": "in_review", "content_owner_id": "someone-else"},
        headers=writer_headers,
    )
    own = await client.get(
        url,
        params={"content_state": "in_review", "content_owner_id": "writer-1"},
        headers=writer_headers,
    )

    assert in_review.json()["allowed"] is False
    assert own.json()["allowed"] is True
