"""Per-day usage totals from categorized pages."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from memoir.browser.models import CategorizedPage
from memoir.summary.models import DailyActivityStats


def aggregate_stats(pages: Iterable[CategorizedPage]) -> DailyActivityStats:
    """Total minutes and per-category percentage of those minutes.

    Each category is rounded half-up on its own, so the percentages may sum
    to 99 or 101. An empty or all-zero day yields no percentages.
    """
    total_seconds = 0
    category_seconds: dict[str, int] = {}
    for page in pages:
        total_seconds += page.duration_seconds
        category_seconds[page.category] = (
            category_seconds.get(page.category, 0) + page.duration_seconds
        )

    total_minutes = total_seconds // 60
    if total_minutes == 0:
        return DailyActivityStats(total_usage_minutes=0, category_percentages={})

    percentages = {
        category: _percent(seconds, total_minutes)
        for category, seconds in category_seconds.items()
    }
    return DailyActivityStats(total_usage_minutes=total_minutes, category_percentages=percentages)


def _percent(category_seconds: int, total_minutes: int) -> int:
    # seconds/60*100/minutes == seconds*5/(3*minutes), kept exact before rounding
    ratio = Decimal(category_seconds * 5) / Decimal(total_minutes * 3)
    # Total minutes are floored, so a single category can overshoot.
    return min(100, int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP)))
