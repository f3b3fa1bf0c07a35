"""Daily browsing summary generation and storage."""

from memoir.summary.categorizer import Categorizer
from memoir.summary.models import (
    CATEGORIES,
    FALLBACK_CATEGORY,
    DailyActivityStats,
    DailySummaryRecord,
    DailySummaryResult,
    NarrativeResult,
    TimelineEntry,
    TopKeyword,
)
from memoir.summary.narrative import NarrativeWriter
from memoir.summary.pipeline import PipelineStage, SummaryPipeline, build_pipeline
from memoir.summary.stats import aggregate_stats
from memoir.summary.store import BaseSummaryStore, SQLiteSummaryStore

__all__ = [
    "CATEGORIES",
    "FALLBACK_CATEGORY",
    "Categorizer",
    "NarrativeWriter",
    "aggregate_stats",
    "SummaryPipeline",
    "PipelineStage",
    "build_pipeline",
    "BaseSummaryStore",
    "SQLiteSummaryStore",
    "DailyActivityStats",
    "DailySummaryRecord",
    "DailySummaryResult",
    "NarrativeResult",
    "TimelineEntry",
    "TopKeyword",
]
