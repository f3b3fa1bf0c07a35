"""Visited-page records sent by the browser extension."""

from memoir.browser.parser import parse_visited_page
from memoir.browser.models import VisitedPage, CategorizedPage

__all__ = [
    "parse_visited_page",
    "VisitedPage",
    "CategorizedPage",
]
