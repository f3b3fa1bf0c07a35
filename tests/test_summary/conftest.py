"""Shared fakes for summary tests."""

import json

import pytest

from memoir.browser.models import VisitedPage
from memoir.llm.base import BaseChatModel


class ScriptedModel(BaseChatModel):
    """Chat model that replays canned replies and records each call."""

    model = "scripted"

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: list[dict] = []

    async def complete(self, system_prompt, user_prompt, temperature=0.3):
        self.calls.append({
            "system": system_prompt,
            "user": user_prompt,
            "temperature": temperature,
        })
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


def classification_reply(pages, categories):
    return json.dumps(
        [
            {"title": p.title, "url": p.url, "category": c}
            for p, c in zip(pages, categories)
        ],
        ensure_ascii=False,
    )


NARRATIVE_REPLY = json.dumps(
    {
        "topKeywords": [
            {"keyword": "기술", "frequency": 3},
            {"keyword": "쇼핑", "frequency": 2.0},
            {"keyword": "뉴스", "frequency": "1"},
        ],
        "dailyTimeline": [
            {"time": "09:00", "description": "기술 뉴스 읽기"},
            {"time": "13:00", "description": "온라인 쇼핑"},
        ],
        "summaryText": ["문장1", "문장2", "문장3"],
    },
    ensure_ascii=False,
)


@pytest.fixture
def pages():
    return [
        VisitedPage(title="Tech news", url="https://news.example.com/tech", duration_seconds=1800),
        VisitedPage(title="Shopping", url="https://shop.example.com/cart", duration_seconds=600),
    ]
