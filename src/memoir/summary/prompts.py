"""Prompt templates for categorization and the daily narrative."""

from __future__ import annotations

import json
from typing import Sequence

from memoir.browser.models import CategorizedPage, VisitedPage
from memoir.summary.models import CATEGORIES

CATEGORIZATION_SYSTEM_PROMPT = "당신은 인터넷 기록 분류 전문가입니다."
CATEGORIZATION_TEMPERATURE = 0.2

NARRATIVE_SYSTEM_PROMPT = "당신은 친절한 일일 활동 요약 전문가입니다."
NARRATIVE_TEMPERATURE = 0.3

_CATEGORIZATION_TEMPLATE = """\
아래는 사용자의 방문 기록입니다. 각 페이지의 제목과 URL을 참고하여 해당 페이지의 카테고리를 분류하세요.
카테고리는 다음 중 하나로만 정하세요:
{categories}

다음 형식으로만 응답하세요 (JSON strict array, 방문 기록과 같은 순서와 개수):
[
  {{ "title": "...", "url": "...", "category": "..." }},
  ...
]

방문 기록:
{pages}
"""

_NARRATIVE_TEMPLATE = """\
당신은 디지털 활동 요약 전문가입니다.
사용자가 {date} 하루 동안 다음과 같은 인터넷 방문 기록과 카테고리 정보를 보냈습니다:

{digest}

위 데이터를 참고해 다음을 작성해주세요.
1) 오늘의 키워드 상위 3개 (내림차순, {{ "keyword": "...", "frequency": 숫자 }} JSON 배열 형식)
2) 시간대별 활동 타임라인 (ex: "09:00 - 뉴스 읽기")
3) 3줄짜리 전체 활동 요약 문장 (한국어)

JSON 형식으로 아래 필드를 포함하여 응답하세요:
{{
  "topKeywords": [ {{ "keyword": "...", "frequency": 숫자 }}, ... ],
  "dailyTimeline": [ {{ "time": "HH:mm", "description": "..." }}, ... ],
  "summaryText": [ "문장1", "문장2", "문장3" ]
}}
"""


def build_categorization_prompt(pages: Sequence[VisitedPage]) -> str:
    categories = ", ".join(f"'{c}'" for c in CATEGORIES)
    pages_json = json.dumps([p.to_dict() for p in pages], ensure_ascii=False)
    return _CATEGORIZATION_TEMPLATE.format(categories=categories, pages=pages_json)


def build_narrative_prompt(date: str, pages: Sequence[CategorizedPage]) -> str:
    digest = "\n".join(f"- 제목: {cp.title}, 카테고리: {cp.category}" for cp in pages)
    return _NARRATIVE_TEMPLATE.format(date=date, digest=digest)
