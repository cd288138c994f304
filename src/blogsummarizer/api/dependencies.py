"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from blogsummarizer.domain.errors import AuthenticationError
from blogsummarizer.infrastructure.database import get_session
from blogsummarizer.repositories.summary_repo import SummaryRepository
from blogsummarizer.services.acquirer import ContentAcquirer
from blogsummarizer.services.extractor import StructuredExtractor
from blogsummarizer.services.summarizer import SummarizerService

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]

# --- Caller identity ---

# Set by the upstream auth gateway after it has validated the session
_user_id_header = APIKeyHeader(name="X-User-Id", auto_error=False)


async def require_user(
    user_id: str | None = Security(_user_id_header),
) -> str:
    """Return the authenticated caller's id.

    Raises:
        AuthenticationError: if the gateway did not forward a user id
    """
    if not user_id or not user_id.strip():
        raise AuthenticationError("Unauthorized")
    return user_id.strip()


CurrentUserDep = Annotated[str, Depends(require_user)]


async def get_summary_repository(
    session: SessionDep,
) -> AsyncGenerator[SummaryRepository, None]:
    """Provide SummaryRepository instance."""
    yield SummaryRepository(session)


def get_content_acquirer() -> ContentAcquirer:
    """Provide ContentAcquirer instance."""
    return ContentAcquirer()


def get_structured_extractor() -> StructuredExtractor:
    """Provide StructuredExtractor instance."""
    return StructuredExtractor()


SummaryRepoDep = Annotated[SummaryRepository, Depends(get_summary_repository)]
AcquirerDep = Annotated[ContentAcquirer, Depends(get_content_acquirer)]
ExtractorDep = Annotated[StructuredExtractor, Depends(get_structured_extractor)]


async def get_summarizer_service(
    summary_repo: SummaryRepoDep,
    acquirer: AcquirerDep,
    extractor: ExtractorDep,
) -> AsyncGenerator[SummarizerService, None]:
    """Provide a per-request SummarizerService."""
    yield SummarizerService(summary_repo, acquirer, extractor)


SummarizerDep = Annotated[SummarizerService, Depends(get_summarizer_service)]
