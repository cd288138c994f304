"""Summarize pipeline - acquire, extract, persist."""

import logging
import time
from enum import StrEnum

from blogsummarizer.config import get_settings
from blogsummarizer.domain.summary import ExtractedSummary, SummarizeInput, SummaryRecord
from blogsummarizer.infrastructure.csv_logger import get_timing_logger
from blogsummarizer.infrastructure.models import SummaryModel
from blogsummarizer.repositories.summary_repo import SummaryRepository
from blogsummarizer.services.acquirer import ContentAcquirer
from blogsummarizer.services.extractor import StructuredExtractor

logger = logging.getLogger(__name__)
settings = get_settings()


class SummarizeStage(StrEnum):
    """Progress of a single summarize call."""

    IDLE = "idle"
    ACQUIRING = "acquiring"
    EXTRACTING = "extracting"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class SummarizerService:
    """Runs one summarize call end to end.

    A record is written only after extraction succeeds; any failure leaves the
    service in FAILED with ``failed_stage`` set and nothing persisted by it.
    Instances are per request and not reusable after a call.
    """

    def __init__(
        self,
        repository: SummaryRepository,
        acquirer: ContentAcquirer | None = None,
        extractor: StructuredExtractor | None = None,
    ) -> None:
        """Initialize the pipeline with its collaborators."""
        self.repository = repository
        self.acquirer = acquirer or ContentAcquirer()
        self.extractor = extractor or StructuredExtractor()
        self.stage = SummarizeStage.IDLE
        self.failed_stage: SummarizeStage | None = None
        self.timing = get_timing_logger()

    async def summarize(
        self, user_id: str, source: SummarizeInput
    ) -> tuple[SummaryModel, ExtractedSummary]:
        """Acquire, extract and store a summary for ``user_id``."""
        if self.stage is not SummarizeStage.IDLE:
            raise RuntimeError(f"Summarize already ran (stage: {self.stage})")

        start_time = time.perf_counter()
        try:
            self.stage = SummarizeStage.ACQUIRING
            stage_start = time.perf_counter()
            content = await self.acquirer.acquire(source)
            self._log_stage("acquire", stage_start, chars=len(content))

            self.stage = SummarizeStage.EXTRACTING
            stage_start = time.perf_counter()
            extracted = await self.extractor.extract(content)
            self._log_stage("extract", stage_start, chars=len(content))

            self.stage = SummarizeStage.PERSISTING
            stage_start = time.perf_counter()
            record = SummaryRecord.from_extraction(
                user_id, source, content, extracted, settings.words_per_minute
            )
            model = await self.repository.create(record)
            self._log_stage("persist", stage_start, item_count=1)

        except Exception as e:
            self.failed_stage = self.stage
            self.stage = SummarizeStage.FAILED
            logger.error(f"Summarize failed while {self.failed_stage}: {e}")
            raise

        self.stage = SummarizeStage.DONE
        self._log_stage("summarize_total", start_time, item_count=1, chars=len(content))
        logger.info(f"Summarized {len(content)} chars into {model.id} ({model.reading_time} min)")
        return model, extracted

    def _log_stage(
        self, operation: str, started: float, item_count: int = 0, chars: int = 0
    ) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        self.timing.log(operation, duration_ms, item_count, chars)
