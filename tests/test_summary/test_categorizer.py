"""Tests for the categorization client."""

import asyncio
import json

import pytest

from memoir.exceptions import (
    ClassificationParseError,
    ClassificationSizeMismatch,
    ExternalServiceError,
    ModelResponseError,
)
from memoir.summary.categorizer import Categorizer, parse_categories
from memoir.summary.models import CATEGORIES, FALLBACK_CATEGORY

from conftest import ScriptedModel, classification_reply


def test_categorize_keeps_input_order(pages):
    model = ScriptedModel(classification_reply(pages, ["뉴스, 정보 탐색", "쇼핑"]))
    result = asyncio.run(Categorizer(model).categorize(pages))

    assert [cp.category for cp in result] == ["뉴스, 정보 탐색", "쇼핑"]
    assert [cp.page for cp in result] == pages


def test_request_uses_taxonomy_and_low_temperature(pages):
    model = ScriptedModel(classification_reply(pages, ["쇼핑", "쇼핑"]))
    asyncio.run(Categorizer(model).categorize(pages))

    call = model.calls[0]
    assert call["temperature"] == 0.2
    assert "분류 전문가" in call["system"]
    for category in CATEGORIES:
        assert category in call["user"]
    assert "https://shop.example.com/cart" in call["user"]
    assert '"durationSeconds": 600' in call["user"]


def test_size_mismatch(pages):
    model = ScriptedModel(classification_reply(pages[:1], ["쇼핑"]))
    with pytest.raises(ClassificationSizeMismatch) as exc_info:
        asyncio.run(Categorizer(model).categorize(pages))
    assert exc_info.value.expected == 2
    assert exc_info.value.actual == 1


def test_size_mismatch_wins_over_bad_items():
    with pytest.raises(ClassificationSizeMismatch):
        parse_categories('["not", "objects", "at all"]', expected=2)


def test_missing_category_uses_fallback():
    content = json.dumps([
        {"title": "a", "url": "https://a.example.com", "category": "쇼핑"},
        {"title": "b", "url": "https://b.example.com"},
        {"title": "c", "url": "https://c.example.com", "category": "  "},
        {"title": "d", "url": "https://d.example.com", "category": None},
    ])
    assert parse_categories(content, expected=4) == [
        "쇼핑", FALLBACK_CATEGORY, FALLBACK_CATEGORY, FALLBACK_CATEGORY,
    ]


def test_fenced_reply_is_accepted():
    content = '```json\n[{"title": "a", "url": "u", "category": "쇼핑"}]\n```'
    assert parse_categories(content, expected=1) == ["쇼핑"]


@pytest.mark.parametrize("content", [
    "Sorry, I can't help with that.",
    '{"title": "a", "category": "쇼핑"}',
    "",
])
def test_parse_error_keeps_raw_content(content):
    with pytest.raises(ClassificationParseError) as exc_info:
        parse_categories(content, expected=1)
    assert exc_info.value.raw_content == content


def test_non_object_items_are_parse_errors():
    with pytest.raises(ClassificationParseError):
        parse_categories('["쇼핑"]', expected=1)


def test_transport_failure_propagates(pages):
    model = ScriptedModel(ExternalServiceError("connection refused"))
    with pytest.raises(ExternalServiceError):
        asyncio.run(Categorizer(model).categorize(pages))


def test_bad_completion_shape_is_parse_error(pages):
    model = ScriptedModel(ModelResponseError("no choices", raw_content="{}"))
    with pytest.raises(ClassificationParseError) as exc_info:
        asyncio.run(Categorizer(model).categorize(pages))
    assert exc_info.value.raw_content == "{}"
