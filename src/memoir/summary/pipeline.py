"""Daily summary pipeline: categorize, enrich, persist."""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import date as date_cls
from enum import StrEnum
from typing import Sequence

from memoir.browser.models import CategorizedPage, VisitedPage
from memoir.browser.parser import parse_visited_page
from memoir.exceptions import (
    EmptyInputError,
    MemoirError,
    ModelTimeoutError,
    PersistenceError,
)
from memoir.llm.base import BaseChatModel
from memoir.summary.categorizer import Categorizer
from memoir.summary.models import (
    DailyActivityStats,
    DailySummaryRecord,
    DailySummaryResult,
    NarrativeResult,
)
from memoir.summary.narrative import NarrativeWriter
from memoir.summary.stats import aggregate_stats
from memoir.summary.store import BaseSummaryStore, SQLiteSummaryStore

logger = logging.getLogger(__name__)

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Upper bound for both model stages together, in seconds.
DEFAULT_RUN_TIMEOUT = 120.0


class PipelineStage(StrEnum):
    VALIDATE = "validate"
    CATEGORIZE = "categorize"
    ENRICH = "enrich"
    PERSIST = "persist"
    COMPLETED = "completed"
    FAILED = "failed"


class SummaryPipeline:
    """Turns one day of visited pages into a persisted daily summary.

    A run either returns a result whose record was saved, or raises a
    ``MemoirError`` and saves nothing.

    Args:
        model: Chat backend shared by the categorizer and narrative writer.
        store: Where finished summaries are saved.
        categorizer: Override for the categorization client.
        narrative_writer: Override for the narrative client.
        run_timeout: Seconds allowed for the two model stages, ``None`` for no limit.
    """

    def __init__(
        self,
        model: BaseChatModel | None = None,
        store: BaseSummaryStore | None = None,
        categorizer: Categorizer | None = None,
        narrative_writer: NarrativeWriter | None = None,
        run_timeout: float | None = DEFAULT_RUN_TIMEOUT,
    ):
        if model is None and (categorizer is None or narrative_writer is None):
            raise ValueError("model is required unless both clients are given")
        self.categorizer = categorizer or Categorizer(model)
        self.narrative_writer = narrative_writer or NarrativeWriter(model)
        self.store = store or SQLiteSummaryStore()
        self.run_timeout = run_timeout

    async def summarize_day(
        self,
        date: str,
        pages: Sequence[VisitedPage | dict],
    ) -> DailySummaryResult:
        """Summarize ``pages`` for ISO ``date`` and persist the result."""
        stage = PipelineStage.VALIDATE
        try:
            day, visited = _validate(date, pages)

            try:
                async with asyncio.timeout(self.run_timeout):
                    stage = PipelineStage.CATEGORIZE
                    categorized = await self.categorizer.categorize(visited)
                    logger.info("Categorized %d pages for %s", len(categorized), day)

                    stage = PipelineStage.ENRICH
                    stats, narrative = await self._enrich(day, categorized)
            except ModelTimeoutError:
                raise
            except TimeoutError as e:
                raise ModelTimeoutError(
                    f"Summary for {day} exceeded {self.run_timeout}s"
                ) from e

            stage = PipelineStage.PERSIST
            result = DailySummaryResult(
                date=day,
                top_keywords=narrative.top_keywords,
                timeline=narrative.timeline,
                summary_text=narrative.summary_text,
                activity_stats=stats,
            )
            await self._persist(result)
        except PersistenceError as e:
            logger.error("Summary for %s was generated but not saved: %s", date, e)
            raise
        except MemoirError as e:
            logger.error("Summary for %s failed at %s: %s", date, stage, e)
            raise
        except asyncio.CancelledError:
            logger.info("Summary for %s cancelled at %s", date, stage)
            raise

        logger.info(
            "Summary for %s %s (%d min, %d categories)",
            day,
            PipelineStage.COMPLETED,
            stats.total_usage_minutes,
            len(stats.category_percentages),
        )
        return result

    def summarize_day_sync(
        self,
        date: str,
        pages: Sequence[VisitedPage | dict],
    ) -> DailySummaryResult:
        """Blocking wrapper around :meth:`summarize_day`."""
        return asyncio.run(self.summarize_day(date, pages))

    async def _enrich(
        self, day: str, pages: list[CategorizedPage]
    ) -> tuple[DailyActivityStats, NarrativeResult]:
        """Run aggregation and the narrative call side by side."""
        try:
            async with asyncio.TaskGroup() as tg:
                stats_task = tg.create_task(asyncio.to_thread(aggregate_stats, pages))
                narrative_task = tg.create_task(self.narrative_writer.write(day, pages))
        except ExceptionGroup as eg:
            # Surface the first typed failure, not the group.
            raise eg.exceptions[0]
        return stats_task.result(), narrative_task.result()

    async def _persist(self, result: DailySummaryResult) -> None:
        try:
            record = DailySummaryRecord.from_result(result)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to serialize summary for {result.date}: {e}") from e
        # A started write cannot be recalled. On cancellation, wait for it to
        # land before unwinding so the caller's CancelledError never races it.
        save = asyncio.ensure_future(asyncio.to_thread(self.store.save, record))
        try:
            await asyncio.shield(save)
        except asyncio.CancelledError:
            await asyncio.wait({save})
            if save.exception() is not None:
                logger.error("Save for %s failed after cancellation: %s", result.date, save.exception())
            else:
                logger.warning("Summary for %s was saved although the run was cancelled", result.date)
            raise
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to save summary for {result.date}: {e}") from e


def _validate(date: str, pages: Sequence[VisitedPage | dict]) -> tuple[str, list[VisitedPage]]:
    if not pages:
        raise EmptyInputError("No visited pages to summarize")
    if not isinstance(date, str) or not _ISO_DATE_RE.match(date):
        raise EmptyInputError(f"Not a calendar date (YYYY-MM-DD): {date!r}")
    try:
        day = date_cls.fromisoformat(date)
    except ValueError as e:
        raise EmptyInputError(f"Not a calendar date (YYYY-MM-DD): {date!r}") from e

    visited: list[VisitedPage] = []
    for index, page in enumerate(pages):
        if isinstance(page, dict):
            page = parse_visited_page(page)
        if not isinstance(page, VisitedPage) or page.duration_seconds < 0:
            raise EmptyInputError(f"Visited page #{index} is invalid")
        visited.append(page)
    return day.isoformat(), visited


def build_pipeline(
    model: BaseChatModel | None = None,
    store: BaseSummaryStore | None = None,
) -> SummaryPipeline:
    """Pipeline wired from environment configuration.

    Uses ``ChatCompletionClient`` (``OPENAI_API_KEY``, ``MEMOIR_LLM_MODEL``,
    ``OPENAI_BASE_URL``) and ``SQLiteSummaryStore`` (``MEMOIR_DB_PATH``)
    unless overrides are passed.
    """
    if model is None:
        from memoir.llm.client import ChatCompletionClient

        model = ChatCompletionClient()
    return SummaryPipeline(model=model, store=store or SQLiteSummaryStore())
