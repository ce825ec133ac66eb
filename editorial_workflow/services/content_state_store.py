"""SQL implementations of the content-side collaborators."""
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from editorial_workflow.core.interfaces import ContentStateStore
from editorial_workflow.models.content_item import ContentItem


class SqlContentStateStore:
    """Workflow fields of ``content_items`` rows for one content type."""

    def __init__(self, db: AsyncSession, content_type: str):
        """Initialize store.

        Args:
            db: Database session
            content_type: Content type tag the store is scoped to
        """
        self.db = db
        self.content_type = content_type

    async def _get(self, content_id: UUID) -> ContentItem | None:
        result = await self.db.execute(
            select(ContentItem).where(
                ContentItem.id == content_id,
                ContentItem.content_type == self.content_type,
            )
        )
        return result.scalar_one_or_none()

    async def get_state(self, content_id: UUID) -> str | None:
        item = await self._get(content_id)
        return item.workflow_state if item else None

    async def get_title(self, content_id: UUID) -> str | None:
        item = await self._get(content_id)
        return item.title if item else None

    async def set_state(
        self,
        content_id: UUID,
        state: str,
        reviewer_id: str,
        reviewed_on: datetime,
        comment: str | None,
    ) -> None:
        item = await self._get(content_id)
        if item is None:
            raise LookupError(f"{self.content_type} {content_id} not found")
        item.workflow_state = state
        item.last_reviewer_id = reviewer_id
        item.last_reviewed_on = reviewed_on
        item.review_comment = comment
        await self.db.flush()

    async def set_published(self, content_id: UUID, timestamp: datetime | None) -> None:
        item = await self._get(content_id)
        if item is None:
            raise LookupError(f"{self.content_type} {content_id} not found")
        item.published = timestamp
        await self.db.flush()


class SqlPublishHook:
    """Assign a published artifact to content on its first publish."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def ensure_published_artifact(self, content_id: UUID, content_type: str) -> None:
        result = await self.db.execute(
            select(ContentItem).where(
                ContentItem.id == content_id,
                ContentItem.content_type == content_type,
            )
        )
        item = result.scalar_one_or_none()
        if item is None or item.published_artifact_id is not None:
            return
        item.published_artifact_id = uuid4()
        await self.db.flush()


class ContentStateStoreRegistry:
    """Content-type keyed lookup of state stores.

    Example:
        registry = ContentStateStoreRegistry()
        registry.register("post", SqlContentStateStore(db, "post"))
        store = registry.get("post")
    """

    def __init__(self) -> None:
        self._stores: dict[str, ContentStateStore] = {}

    def register(self, content_type: str, store: ContentStateStore) -> None:
        self._stores[content_type] = store

    def get(self, content_type: str) -> ContentStateStore | None:
        return self._stores.get(content_type)

    def __contains__(self, content_type: str) -> bool:
        return content_type in self._stores

    @property
    def content_types(self) -> list[str]:
        return list(self._stores)

    @classmethod
    def for_session(cls, db: AsyncSession, content_types: list[str]) -> "ContentStateStoreRegistry":
        """Build a registry with one SQL store per configured content type."""
        registry = cls()
        for content_type in content_types:
            registry.register(content_type, SqlContentStateStore(db, content_type))
        return registry
