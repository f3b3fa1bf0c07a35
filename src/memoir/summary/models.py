"""Data models for daily summaries."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date


# Fixed activity taxonomy, in prompt order.
CATEGORIES = (
    "공부, 학습",
    "뉴스, 정보 탐색",
    "콘텐츠 소비",
    "쇼핑",
    "업무, 프로젝트",
)
# Assigned when the model leaves a page's category missing or blank.
FALLBACK_CATEGORY = "분류불가"
# Keywords kept from the narrative reply.
MAX_KEYWORDS = 3


@dataclass(frozen=True)
class TopKeyword:
    keyword: str
    frequency: int


@dataclass(frozen=True)
class TimelineEntry:
    time: str
    description: str


@dataclass(frozen=True)
class DailyActivityStats:
    """Usage totals for one day.

    Percentages are rounded per category against the total, so they need
    not add up to 100.
    """

    total_usage_minutes: int
    category_percentages: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class NarrativeResult:
    top_keywords: tuple[TopKeyword, ...] = ()
    timeline: tuple[TimelineEntry, ...] = ()
    summary_text: tuple[str, ...] = ()


@dataclass(frozen=True)
class DailySummaryResult:
    """The pipeline's output for one date."""

    date: str
    top_keywords: tuple[TopKeyword, ...]
    timeline: tuple[TimelineEntry, ...]
    summary_text: tuple[str, ...]
    activity_stats: DailyActivityStats

    def to_dict(self) -> dict:
        """Camel-cased JSON shape returned to API consumers."""
        return {
            "date": self.date,
            "topKeywords": _keywords_to_list(self.top_keywords),
            "dailyTimeline": _timeline_to_list(self.timeline),
            "summaryText": list(self.summary_text),
            "activityStats": {
                "totalUsageTimeMinutes": self.activity_stats.total_usage_minutes,
                "activityProportions": _proportions_to_list(
                    self.activity_stats.category_percentages
                ),
            },
        }


@dataclass
class DailySummaryRecord:
    """Persisted, denormalized summary row. ``date`` is the natural key."""

    date: date
    top_keywords_json: str
    timeline_json: str
    summary_text_json: str
    total_usage_minutes: int
    category_percentages_json: str

    @classmethod
    def from_result(cls, result: DailySummaryResult) -> DailySummaryRecord:
        """Serialize a result. Raises ``TypeError``/``ValueError`` on bad data."""
        return cls(
            date=date.fromisoformat(result.date),
            top_keywords_json=_dumps(_keywords_to_list(result.top_keywords)),
            timeline_json=_dumps(_timeline_to_list(result.timeline)),
            summary_text_json=_dumps(list(result.summary_text)),
            total_usage_minutes=result.activity_stats.total_usage_minutes,
            category_percentages_json=_dumps(
                _proportions_to_list(result.activity_stats.category_percentages)
            ),
        )

    def to_result(self) -> DailySummaryResult:
        """Re-parse the JSON columns. Raises ``ValueError`` on corrupt rows."""
        keywords = json.loads(self.top_keywords_json)
        timeline = json.loads(self.timeline_json)
        proportions = json.loads(self.category_percentages_json)
        return DailySummaryResult(
            date=self.date.isoformat(),
            top_keywords=tuple(
                TopKeyword(k["keyword"], int(k["frequency"])) for k in keywords
            ),
            timeline=tuple(TimelineEntry(t["time"], t["description"]) for t in timeline),
            summary_text=tuple(json.loads(self.summary_text_json)),
            activity_stats=DailyActivityStats(
                total_usage_minutes=self.total_usage_minutes,
                category_percentages={
                    p["category"]: int(p["percentage"]) for p in proportions
                },
            ),
        )


def _dumps(value) -> str:
    return json.dumps(value, ensure_ascii=False)


def _keywords_to_list(keywords) -> list[dict]:
    return [{"keyword": k.keyword, "frequency": k.frequency} for k in keywords]


def _timeline_to_list(timeline) -> list[dict]:
    return [{"time": t.time, "description": t.description} for t in timeline]


def _proportions_to_list(percentages: dict[str, int]) -> list[dict]:
    return [{"category": c, "percentage": p} for c, p in percentages.items()]
