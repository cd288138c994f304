"""Summary repository for database operations.

Every query is scoped to the owning user; a row belonging to somebody else is
indistinguishable from a missing one.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blogsummarizer.domain.errors import NotFoundError
from blogsummarizer.domain.summary import SummaryRecord
from blogsummarizer.infrastructure.models import SummaryModel

logger = logging.getLogger(__name__)

SortOrder = Literal["newest", "oldest", "title", "reading_time"]

# Fields a user may edit after creation
EDITABLE_FIELDS = ("title", "summary", "key_points", "tags")


@dataclass
class SummaryFilter:
    """Dashboard filter: free-text search plus an exact tag match."""

    search: str | None = None
    tag: str | None = None

    def is_empty(self) -> bool:
        """Check if no filters are set."""
        return not self.search and not self.tag

    def matches(self, model: SummaryModel) -> bool:
        """Check a row against the filter.

        ``search`` is a case-insensitive substring of the title, the summary
        or any tag. ``tag`` must equal one of the row's tags.
        """
        if self.search:
            needle = self.search.lower()
            in_text = needle in model.title.lower() or needle in model.summary.lower()
            in_tags = any(needle in tag.lower() for tag in model.tags)
            if not (in_text or in_tags):
                return False
        if self.tag and self.tag not in model.tags:
            return False
        return True


@dataclass
class SummaryStats:
    """Aggregate numbers shown on the dashboard."""

    total_summaries: int = 0
    total_reading_time: int = 0
    average_reading_time: int = 0
    unique_tags: int = 0
    top_tags: list[str] = field(default_factory=list)


class SummaryRepository:
    """Repository for Summary Record CRUD operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, record: SummaryRecord) -> SummaryModel:
        """Insert a new record and return the stored row."""
        model = SummaryModel(
            user_id=record.user_id,
            title=record.title,
            original_url=record.original_url,
            original_content=record.original_content,
            summary=record.summary,
            key_points=list(record.key_points),
            tags=list(record.tags),
            reading_time=record.reading_time,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        logger.info(f"Created summary {model.id} for user {record.user_id}")
        return model

    async def get_by_id(self, summary_id: UUID, user_id: str) -> SummaryModel | None:
        """Get a record by id if it belongs to ``user_id``."""
        stmt = select(SummaryModel).where(
            SummaryModel.id == summary_id,
            SummaryModel.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: str,
        filters: SummaryFilter | None = None,
        sort: SortOrder = "newest",
    ) -> list[SummaryModel]:
        """List a user's records, filtered and sorted.

        Tags are stored as JSON, so the filter runs in Python after the
        owner-scoped, ordered query.
        """
        order_by = {
            "newest": SummaryModel.created_at.desc(),
            "oldest": SummaryModel.created_at.asc(),
            "title": func.lower(SummaryModel.title).asc(),
            "reading_time": SummaryModel.reading_time.desc(),
        }[sort]
        stmt = (
            select(SummaryModel)
            .where(SummaryModel.user_id == user_id)
            .order_by(order_by, SummaryModel.id)
        )
        result = await self.session.execute(stmt)
        models = list(result.scalars().all())

        if filters is None or filters.is_empty():
            return models
        return [m for m in models if filters.matches(m)]

    async def update(
        self,
        summary_id: UUID,
        user_id: str,
        patch: dict[str, Any],
    ) -> SummaryModel:
        """Apply an edit to the editable fields of an owned record.

        Values are stored as given: empty strings and lists are accepted and
        tags are not de-duplicated. ``updated_at`` is always refreshed.

        Raises:
            NotFoundError: if no such record is owned by ``user_id``
        """
        model = await self.get_by_id(summary_id, user_id)
        if model is None:
            raise NotFoundError("Failed to update summary")

        for name, value in patch.items():
            if name not in EDITABLE_FIELDS:
                raise ValueError(f"Field {name!r} is not editable")
            setattr(model, name, list(value) if isinstance(value, list) else value)
        model.updated_at = datetime.now(UTC)

        await self.session.flush()
        await self.session.refresh(model)
        logger.info(f"Updated summary {summary_id}: {sorted(patch)}")
        return model

    async def delete(self, summary_id: UUID, user_id: str) -> int:
        """Delete one owned record. Returns rows affected (0 or 1)."""
        stmt = delete(SummaryModel).where(
            SummaryModel.id == summary_id,
            SummaryModel.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        logger.info(f"Deleted summary {summary_id}: {result.rowcount} row(s)")
        return result.rowcount

    async def delete_many(self, summary_ids: Iterable[UUID], user_id: str) -> int:
        """Delete every owned record among ``summary_ids``.

        Ids that do not exist or belong to someone else are skipped silently.
        """
        ids = list(dict.fromkeys(summary_ids))
        if not ids:
            return 0
        stmt = delete(SummaryModel).where(
            SummaryModel.id.in_(ids),
            SummaryModel.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        logger.info(f"Bulk deleted {result.rowcount}/{len(ids)} summaries for user {user_id}")
        return result.rowcount

    async def stats(self, user_id: str) -> SummaryStats:
        """Compute dashboard analytics for a user."""
        models = await self.list_for_user(user_id)
        if not models:
            return SummaryStats()

        total_reading_time = sum(m.reading_time for m in models)
        unique_tags = list(dict.fromkeys(tag for m in models for tag in m.tags))
        return SummaryStats(
            total_summaries=len(models),
            total_reading_time=total_reading_time,
            average_reading_time=math.floor(total_reading_time / len(models) + 0.5),
            unique_tags=len(unique_tags),
            top_tags=unique_tags[:5],
        )
