"""Summary API endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from blogsummarizer.api.dependencies import CurrentUserDep, SummarizerDep, SummaryRepoDep
from blogsummarizer.api.v1.schemas import (
    BulkDeleteRequest,
    ShareResponse,
    SuccessResponse,
    SummarizeRequest,
    SummarizeResponse,
    SummaryResponse,
    SummaryStatsResponse,
    SummaryUpdateRequest,
)
from blogsummarizer.domain.summary import ContentInput, UrlInput
from blogsummarizer.repositories.summary_repo import SortOrder, SummaryFilter
from blogsummarizer.services.sharing import build_share_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summaries"])


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def summarize(
    body: SummarizeRequest,
    user_id: CurrentUserDep,
    summarizer: SummarizerDep,
) -> SummarizeResponse:
    """Summarize a URL or pasted content and store the result."""
    if body.type == "url":
        source = UrlInput(url=body.url or "")
    else:
        source = ContentInput(text=body.content or "")

    model, extracted = await summarizer.summarize(user_id, source)

    return SummarizeResponse(
        id=model.id,
        title=model.title,
        summary=extracted.summary,
        keyPoints=extracted.key_points,
        tags=extracted.tags,
        readingTime=model.reading_time,
    )


@router.get("/summaries", response_model=list[SummaryResponse])
async def list_summaries(
    user_id: CurrentUserDep,
    summary_repo: SummaryRepoDep,
    q: str | None = Query(None, max_length=200),
    tag: str | None = Query(None, max_length=100),
    sort: SortOrder = Query("newest"),
) -> list[SummaryResponse]:
    """List the caller's summaries, newest first by default."""
    models = await summary_repo.list_for_user(
        user_id, SummaryFilter(search=q, tag=tag), sort=sort
    )
    return [SummaryResponse.model_validate(m) for m in models]


@router.get("/summaries/stats", response_model=SummaryStatsResponse)
async def summary_stats(
    user_id: CurrentUserDep,
    summary_repo: SummaryRepoDep,
) -> SummaryStatsResponse:
    """Reading-time and tag analytics for the caller's summaries."""
    stats = await summary_repo.stats(user_id)
    return SummaryStatsResponse.model_validate(stats)


@router.delete("/summaries/bulk", response_model=SuccessResponse)
async def bulk_delete_summaries(
    body: BulkDeleteRequest,
    user_id: CurrentUserDep,
    summary_repo: SummaryRepoDep,
) -> SuccessResponse:
    """Delete several of the caller's summaries; unknown ids are ignored."""
    await summary_repo.delete_many(body.ids, user_id)
    return SuccessResponse()


@router.get("/summaries/{summary_id}", response_model=SummaryResponse)
async def get_summary(
    summary_id: UUID,
    user_id: CurrentUserDep,
    summary_repo: SummaryRepoDep,
) -> SummaryResponse:
    """Get a single summary owned by the caller."""
    model = await summary_repo.get_by_id(summary_id, user_id)
    if not model:
        raise HTTPException(status_code=404, detail="Summary not found")
    return SummaryResponse.model_validate(model)


@router.patch("/summaries/{summary_id}", response_model=SummaryResponse)
async def update_summary(
    summary_id: UUID,
    body: SummaryUpdateRequest,
    user_id: CurrentUserDep,
    summary_repo: SummaryRepoDep,
) -> SummaryResponse:
    """Edit title, summary, key points or tags."""
    patch = body.model_dump(exclude_unset=True, exclude_none=True)
    model = await summary_repo.update(summary_id, user_id, patch)
    return SummaryResponse.model_validate(model)


@router.delete("/summaries/{summary_id}", response_model=SuccessResponse)
async def delete_summary(
    summary_id: UUID,
    user_id: CurrentUserDep,
    summary_repo: SummaryRepoDep,
) -> SuccessResponse:
    """Delete one summary; succeeds even when nothing matched."""
    await summary_repo.delete(summary_id, user_id)
    return SuccessResponse()


@router.post("/summaries/{summary_id}/share", response_model=ShareResponse)
async def share_summary(
    summary_id: UUID,
    user_id: CurrentUserDep,
) -> ShareResponse:
    """Produce a share link. The embedded token is not stored."""
    share_url = build_share_url(summary_id)
    logger.info(f"User {user_id} created share link for {summary_id}")
    return ShareResponse(shareUrl=share_url)
