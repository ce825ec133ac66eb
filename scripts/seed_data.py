"""Seed script for default editorial workflows.

Creates the canonical draft/review/approve/publish workflow for every
configured content type (``CONTENT_TYPES``) that has no active workflow yet.

Can be run multiple times safely (skips content types that already have one).
"""
import asyncio
import os

from editorial_workflow.core.config import get_settings
from editorial_workflow.core.database import get_db
from editorial_workflow.core.errors import WorkflowError
from editorial_workflow.services.audit_service import AuditService
from editorial_workflow.services.workflow_definition_service import WorkflowDefinitionService
from editorial_workflow.services.workflow_repository import SqlWorkflowDefinitionRepository


async def seed_data():
    """Seed default workflows."""
    print("Starting workflow seeding...")

    settings = get_settings()
    actor_id = os.environ.get("SEED_ACTOR_ID", "system")

    async for db in get_db():
        service = WorkflowDefinitionService(
            SqlWorkflowDefinitionRepository(db),
            audit=AuditService(db),
        )

        for content_type in settings.content_types:
            existing = await service.get_for_content_type(content_type)
            if existing:
                print(f"✓ '{content_type}' already governed by '{existing[0].name}' (ID: {existing[0].id})")
                continue

            name = f"{content_type.replace('_', ' ').title()} Workflow"
            try:
                definition = await service.create_default(content_type, name, actor_id=actor_id)
            except WorkflowError as e:
                print(f"✗ Failed to create workflow for '{content_type}': {e.message}")
                raise
            print(f"✓ Created workflow '{definition.name}' for '{content_type}' (ID: {definition.id})")

    print("Seeding complete.")


if __name__ == "__main__":
    asyncio.run(seed_data())
