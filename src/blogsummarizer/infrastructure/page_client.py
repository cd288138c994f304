"""HTTP client that fetches web pages and reduces them to plain text."""

import logging
import re

import aiohttp
from aiohttp import ClientTimeout

from blogsummarizer.config import get_settings
from blogsummarizer.domain.errors import FetchError

logger = logging.getLogger(__name__)
settings = get_settings()

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def html_to_text(html: str) -> str:
    """Strip script/style blocks and markup, collapse whitespace."""
    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


class PageClient:
    """Async client for fetching a single web page.

    One best-effort GET per call: no retries, redirects and timeouts are left
    to aiohttp's defaults unless ``timeout_seconds`` is given.
    """

    def __init__(
        self,
        user_agent: str | None = None,
        timeout_seconds: int | None = None,
    ) -> None:
        """Initialize page client.

        Args:
            user_agent: Value for the User-Agent header (defaults to config)
            timeout_seconds: Total request timeout, aiohttp default when None
        """
        self.user_agent = user_agent or settings.fetch_user_agent
        self.timeout = (
            ClientTimeout(total=timeout_seconds) if timeout_seconds else None
        )
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            kwargs = {"headers": {"User-Agent": self.user_agent}}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._session = aiohttp.ClientSession(**kwargs)
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_html(self, url: str) -> str:
        """Fetch raw page body.

        Raises:
            FetchError: on a non-2xx status or any transport failure
        """
        session = await self._get_session()
        try:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    logger.error(f"HTTP {response.status} for {url}")
                    raise FetchError(f"Failed to fetch URL: {response.status}")
                return await response.text(errors="replace")
        except TimeoutError as e:
            logger.warning(f"Timeout fetching {url}")
            raise FetchError(f"Failed to fetch content from URL: {url} timed out") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Client error fetching {url}: {e}")
            raise FetchError(f"Failed to fetch content from URL: {e}") from e

    async def fetch_text(self, url: str) -> str:
        """Fetch a page and return its plain-text content."""
        html = await self.fetch_html(url)
        text = html_to_text(html)
        logger.info(f"Fetched {url}: {len(html)} bytes of HTML, {len(text)} chars of text")
        return text
