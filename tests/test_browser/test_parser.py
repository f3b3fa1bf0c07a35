"""Tests for visited-page parser."""

import pytest

from memoir.browser.parser import parse_visited_page
from memoir.browser.models import VisitedPage


def test_parse_extension_payload():
    raw = {
        "title": "  Tech news  ",
        "url": "https://news.example.com/today",
        "durationSeconds": 1800,
    }
    result = parse_visited_page(raw)
    assert isinstance(result, VisitedPage)
    assert result.title == "Tech news"
    assert result.duration_seconds == 1800


def test_parse_snake_case_duration():
    raw = {"title": "Docs", "url": "https://docs.python.org/3/", "duration_seconds": "90"}
    result = parse_visited_page(raw)
    assert result is not None
    assert result.duration_seconds == 90


def test_parse_missing_duration_defaults_to_zero():
    result = parse_visited_page({"title": "x", "url": "https://example.com"})
    assert result is not None
    assert result.duration_seconds == 0


@pytest.mark.parametrize("url", [
    "chrome://newtab/",
    "about:blank",
    "file:///Users/test/file.html",
    "...",
])
def test_parse_keeps_any_url(url):
    result = parse_visited_page({"title": "New tab", "url": url, "durationSeconds": 10})
    assert result is not None
    assert result.url == url


def test_parse_missing_url_is_empty_text():
    result = parse_visited_page({"title": "x", "durationSeconds": 1})
    assert result is not None
    assert result.url == ""


def test_parse_keeps_long_title_and_url():
    raw = {"title": "a" * 500, "url": "https://example.com/" + "p" * 3000}
    result = parse_visited_page(raw)
    assert result is not None
    assert len(result.title) == 500
    assert result.url == raw["url"]


@pytest.mark.parametrize("duration", [-5, "long", [30], True])
def test_parse_rejects_bad_duration(duration):
    raw = {"title": "x", "url": "https://example.com", "durationSeconds": duration}
    assert parse_visited_page(raw) is None
