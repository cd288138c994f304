"""Structured summary extraction from a text-completion provider.

The model is asked for a JSON object but routinely wraps it in a markdown
fence or surrounds it with prose. Recovery runs as an ordered list of parse
attempts; the first one that yields a JSON object wins.
"""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from blogsummarizer.config import get_settings
from blogsummarizer.domain.errors import ExtractionError
from blogsummarizer.domain.summary import ExtractedSummary
from blogsummarizer.infrastructure.completion import CompletionClient, select_provider

logger = logging.getLogger(__name__)
settings = get_settings()


class SummaryAnalysis(BaseModel):
    """Shape the model must answer with."""

    title: str = Field(min_length=1, description="Concise title, max 100 characters")
    summary: str = Field(min_length=1, description="2-3 paragraph summary")
    keyPoints: list[str] = Field(description="4-6 key takeaways")
    tags: list[str] = Field(description="3-8 topic tags")


SUMMARIZATION_PROMPT = """Please analyze the following blog post/article and provide a structured response in JSON format with the following fields:

1. "title": A concise, descriptive title for this content (max 100 characters)
2. "summary": A comprehensive summary of the main content (2-3 paragraphs, 150-300 words)
3. "keyPoints": An array of 4-6 key takeaways or main points (each 15-30 words)
4. "tags": An array of 3-8 relevant tags/topics covered in the content

Content to analyze:
{content}

Respond only with valid JSON, no additional text or formatting."""

_FENCE_OPEN_RE = re.compile(r"^```[\w-]*\s*")
_FENCE_CLOSE_RE = re.compile(r"\s*```$")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


@dataclass
class ParseResult:
    """Outcome of one parse attempt."""

    ok: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, value: Any) -> "ParseResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(ok=False, error=error)


def build_prompt(content: str, max_chars: int | None = None) -> str:
    """Fill the instruction template, truncating the content."""
    limit = max_chars if max_chars is not None else settings.max_prompt_chars
    return SUMMARIZATION_PROMPT.format(content=content[:limit])


def strip_code_fence(text: str) -> str:
    """Trim and remove a surrounding markdown fence, tagged or not."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN_RE.sub("", cleaned)
        cleaned = _FENCE_CLOSE_RE.sub("", cleaned)
    return cleaned


def parse_direct(text: str) -> ParseResult:
    """Parse the whole text as JSON."""
    try:
        return ParseResult.success(json.loads(text))
    except json.JSONDecodeError as e:
        return ParseResult.failure(f"direct parse failed: {e}")


def parse_embedded_object(text: str) -> ParseResult:
    """Parse the widest ``{...}`` span found in the text."""
    match = _OBJECT_RE.search(text)
    if not match:
        return ParseResult.failure("no valid JSON found")
    try:
        return ParseResult.success(json.loads(match.group(0)))
    except json.JSONDecodeError as e:
        return ParseResult.failure(f"invalid AI response format: {e}")


PARSE_ATTEMPTS: tuple[Callable[[str], ParseResult], ...] = (
    parse_direct,
    parse_embedded_object,
)


def parse_completion(raw: str) -> ExtractedSummary:
    """Recover a complete summary from raw model output.

    Raises:
        ExtractionError: no attempt produced JSON, or fields are missing
    """
    cleaned = strip_code_fence(raw)
    logger.debug(f"Cleaned response: {cleaned}")

    result = ParseResult.failure("no parse attempted")
    for attempt in PARSE_ATTEMPTS:
        result = attempt(cleaned)
        if result.ok:
            break
        logger.warning(f"{attempt.__name__}: {result.error}")

    if not result.ok:
        logger.error(f"Response that failed to parse: {cleaned}")
        raise ExtractionError(f"Failed to generate summary - {result.error.split(':')[0]}")

    if not isinstance(result.value, dict):
        logger.error(f"Invalid response structure: {result.value!r}")
        raise ExtractionError("Failed to generate summary - incomplete response")

    try:
        analysis = SummaryAnalysis.model_validate(result.value)
    except PydanticValidationError as e:
        logger.error(f"Invalid response structure: {result.value!r} ({e.error_count()} errors)")
        raise ExtractionError("Failed to generate summary - incomplete response") from e

    return ExtractedSummary(
        title=analysis.title,
        summary=analysis.summary,
        key_points=analysis.keyPoints,
        tags=analysis.tags,
    )


class StructuredExtractor:
    """Service that turns plain text into a structured summary."""

    def __init__(self, client: CompletionClient | None = None) -> None:
        """Initialize the extractor.

        The provider is resolved lazily so a missing configuration surfaces
        as a ConfigurationError on first use, not at construction.
        """
        self._client = client

    @property
    def client(self) -> CompletionClient:
        if self._client is None:
            self._client = CompletionClient(select_provider())
        return self._client

    async def extract(self, content: str) -> ExtractedSummary:
        """Summarize ``content`` through the configured provider."""
        prompt = build_prompt(content)
        raw = await self.client.complete(prompt)
        logger.debug(f"Raw AI response: {raw}")
        return parse_completion(raw)
