"""Pydantic schemas for API request/response models."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from blogsummarizer.domain.summary import MAX_TITLE_LENGTH


class SummarizeRequest(BaseModel):
    """Request body for a summarize call."""

    type: Literal["url", "content"]
    url: str | None = None
    content: str | None = None


class SummarizeResponse(BaseModel):
    """Result of a summarize call."""

    id: UUID
    title: str
    summary: str
    keyPoints: list[str]
    tags: list[str]
    readingTime: int


class SummaryResponse(BaseModel):
    """A stored summary record, keyed by its column names."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    title: str
    original_url: str | None
    original_content: str
    summary: str
    key_points: list[str]
    tags: list[str]
    reading_time: int
    created_at: datetime
    updated_at: datetime


class SummaryUpdateRequest(BaseModel):
    """Partial edit; only fields present in the body are changed."""

    title: str | None = Field(default=None, max_length=MAX_TITLE_LENGTH)
    summary: str | None = None
    key_points: list[str] | None = None
    tags: list[str] | None = None


class BulkDeleteRequest(BaseModel):
    """Ids to delete in one call."""

    ids: list[UUID] = Field(default_factory=list)


class SuccessResponse(BaseModel):
    """Acknowledgement for delete operations."""

    success: bool = True


class ShareResponse(BaseModel):
    """Share link for a summary."""

    shareUrl: str


class SummaryStatsResponse(BaseModel):
    """Dashboard analytics."""

    model_config = ConfigDict(from_attributes=True)

    total_summaries: int
    total_reading_time: int
    average_reading_time: int
    unique_tags: int
    top_tags: list[str]
