"""Data models for visited pages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VisitedPage:
    """One page view from the browser extension."""

    title: str
    url: str
    duration_seconds: int = 0

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "durationSeconds": self.duration_seconds,
        }


@dataclass(frozen=True)
class CategorizedPage:
    """A visited page tagged with an activity category."""

    page: VisitedPage
    category: str

    @property
    def title(self) -> str:
        return self.page.title

    @property
    def duration_seconds(self) -> int:
        return self.page.duration_seconds
