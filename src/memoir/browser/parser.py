"""Parse raw visited-page payloads into normalized records."""

from __future__ import annotations

from memoir.browser.models import VisitedPage


def parse_visited_page(raw: dict) -> VisitedPage | None:
    """Normalize one raw page dict; returns None for invalid rows.

    Title and URL are kept as given (any scheme, any length). Accepts both
    ``durationSeconds`` (extension payload) and ``duration_seconds`` keys;
    a missing duration counts as zero.
    """
    title = str(raw.get("title") or "").strip()
    url = str(raw.get("url") or "").strip()

    duration = raw.get("durationSeconds", raw.get("duration_seconds", 0))
    if isinstance(duration, bool):
        return None
    try:
        duration_seconds = int(duration or 0)
    except (TypeError, ValueError):
        return None
    if duration_seconds < 0:
        return None

    return VisitedPage(title=title, url=url, duration_seconds=duration_seconds)
