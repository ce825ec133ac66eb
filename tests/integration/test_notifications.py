"""Integration tests for the workflow notification inbox."""

import pytest
from httpx import AsyncClient

from editorial_workflow.schemas.workflow import WorkflowDefinitionSchema
from tests.conftest import create_content, transition


@pytest.mark.asyncio
async def test_transition_creates_unread_notification(
    client: AsyncClient,
    writer_headers,
    editor_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    content = await create_content(client, writer_headers, title="Launch post")
    await transition(client, writer_headers, content["id"], "in_review")

    response = await client.get("/api/notifications", headers=editor_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    item = data["items"][0]
    assert item["content_id"] == content["id"]
    assert item["content_type"] == "post"
    assert item["content_title"] == "Launch post"
    assert item["actor_id"] == "writer-1"
    assert item["category"] == "workflow"
    assert item["message"] == "Post workflow state updated to In Review"
    assert item["is_read"] is False


@pytest.mark.asyncio
async def test_mark_notification_read_removes_it_from_inbox(
    client: AsyncClient,
    writer_headers,
    editor_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    content = await create_content(client, writer_headers)
    await transition(client, writer_headers, content["id"], "in_review")
    listing = await client.get("/api/notifications", headers=editor_headers)
    notification_id = listing.json()["items"][0]["id"]

    response = await client.post(
        f"/api/notifications/{notification_id}/read",
        headers=editor_headers,
    )

    assert response.status_code == 200
    assert response.json()["is_read"] is True
    listing = await client.get("/api/notifications", headers=editor_headers)
    assert listing.json() == {"items": [], "total": 0}


@pytest.mark.asyncio
async def test_denied_transition_sends_no_notification(
    client: AsyncClient,
    writer_headers,
    post_workflow: WorkflowDefinitionSchema,
):
    content = await create_content(client, writer_headers)
    await transition(client, writer_headers, content["id"], "approved")

    response = await client.get("/api/notifications", headers=writer_headers)

    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_mark_unknown_notification_returns_404(client: AsyncClient, editor_headers):
    response = await client.post(
        "/api/notifications/00000000-0000-0000-0000-000000000000/read",
        headers=editor_headers,
    )

    assert response.status_code == 404
    assert response.json() == {"error": "not_found", "message": "Notification not found"}


@pytest.mark.asyncio
async def test_notifications_require_token(client: AsyncClient):
    response = await client.get("/api/notifications")

    assert response.status_code == 401
