"""Content acquisition: turns a URL or pasted text into plain text."""

import logging

from blogsummarizer.config import get_settings
from blogsummarizer.domain.errors import ValidationError
from blogsummarizer.domain.summary import ContentInput, SummarizeInput, UrlInput
from blogsummarizer.infrastructure.page_client import PageClient

logger = logging.getLogger(__name__)
settings = get_settings()


class ContentAcquirer:
    """Service that resolves a summarize input to the text to summarize."""

    def __init__(
        self,
        page_client: PageClient | None = None,
        min_content_chars: int | None = None,
    ) -> None:
        """Initialize the acquirer."""
        self.page_client = page_client or PageClient()
        self.min_content_chars = (
            min_content_chars if min_content_chars is not None else settings.min_content_chars
        )

    async def acquire(self, source: SummarizeInput) -> str:
        """Return plain text for ``source``.

        Raises:
            ValidationError: missing URL or pasted content that is too short
            FetchError: the URL could not be fetched
        """
        if isinstance(source, UrlInput):
            if not source.url:
                raise ValidationError("URL is required")
            try:
                return await self.page_client.fetch_text(source.url)
            finally:
                await self.page_client.close()

        if isinstance(source, ContentInput):
            if len((source.text or "").strip()) < self.min_content_chars:
                raise ValidationError(
                    f"Content must be at least {self.min_content_chars} characters"
                )
            return source.text

        raise ValidationError("Invalid type")
