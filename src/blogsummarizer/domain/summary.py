"""Summary domain entities."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urlparse
from uuid import UUID

# Width of the stored title column
MAX_TITLE_LENGTH = 500


@dataclass
class UrlInput:
    """Content to be fetched from the web."""

    url: str

    @property
    def source_url(self) -> str | None:
        return self.url


@dataclass
class ContentInput:
    """Content pasted by the user."""

    text: str

    @property
    def source_url(self) -> str | None:
        return None


SummarizeInput = UrlInput | ContentInput


@dataclass
class ExtractedSummary:
    """Structured result recovered from the model output."""

    title: str
    summary: str
    key_points: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass
class SummaryRecord:
    """Represents a stored summary owned by one user."""

    id: UUID | None
    user_id: str
    title: str
    original_url: str | None
    original_content: str
    summary: str
    key_points: list[str]
    tags: list[str]
    reading_time: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @staticmethod
    def _sanitize_url(url: str | None) -> str | None:
        """Reject non-HTTP(S) URLs so they never end up in a rendered link."""
        if not url:
            return None
        scheme = urlparse(url).scheme.lower()
        if scheme in ("http", "https"):
            return url
        return None

    @classmethod
    def from_extraction(
        cls,
        user_id: str,
        source: SummarizeInput,
        content: str,
        extracted: ExtractedSummary,
        words_per_minute: int = 200,
    ) -> "SummaryRecord":
        """Create a new, not yet persisted record from an extraction result."""
        return cls(
            id=None,
            user_id=user_id,
            title=extracted.title[:MAX_TITLE_LENGTH],
            original_url=cls._sanitize_url(source.source_url),
            original_content=content,
            summary=extracted.summary,
            key_points=list(extracted.key_points),
            tags=list(extracted.tags),
            reading_time=estimate_reading_time(content, words_per_minute),
        )


def estimate_reading_time(text: str, words_per_minute: int = 200) -> int:
    """Minutes needed to read ``text``, never less than one."""
    word_count = len(text.split())
    return max(1, math.ceil(word_count / words_per_minute))
