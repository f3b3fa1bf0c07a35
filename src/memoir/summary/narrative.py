"""Keywords, timeline and a three-sentence narrative for one day."""

from __future__ import annotations

import logging
from typing import Sequence

from pydantic import ValidationError

from memoir.browser.models import CategorizedPage
from memoir.exceptions import ModelResponseError, NarrativeParseError
from memoir.llm.base import BaseChatModel
from memoir.llm.parsing import decode_json
from memoir.summary.models import MAX_KEYWORDS, NarrativeResult, TimelineEntry, TopKeyword
from memoir.summary.prompts import (
    NARRATIVE_SYSTEM_PROMPT,
    NARRATIVE_TEMPERATURE,
    build_narrative_prompt,
)
from memoir.summary.schemas import NarrativePayload

logger = logging.getLogger(__name__)


class NarrativeWriter:
    """Asks the chat model for the narrative parts of a daily summary."""

    def __init__(self, model: BaseChatModel):
        self.model = model

    async def write(self, date: str, pages: Sequence[CategorizedPage]) -> NarrativeResult:
        prompt = build_narrative_prompt(date, pages)
        try:
            content = await self.model.complete(
                NARRATIVE_SYSTEM_PROMPT,
                prompt,
                temperature=NARRATIVE_TEMPERATURE,
            )
        except ModelResponseError as e:
            raise NarrativeParseError(str(e), raw_content=e.raw_content) from e
        return parse_narrative(content)


def parse_narrative(content: str) -> NarrativeResult:
    """Validate the model's JSON object into a ``NarrativeResult``."""
    try:
        data = decode_json(content)
    except ValueError as e:
        raise NarrativeParseError(
            f"Narrative reply is not valid JSON: {e}", raw_content=content
        ) from e
    if not isinstance(data, dict):
        raise NarrativeParseError(
            f"Narrative reply is a {type(data).__name__}, expected an object",
            raw_content=content,
        )

    try:
        payload = NarrativePayload.model_validate(data)
    except ValidationError as e:
        raise NarrativeParseError(
            f"Narrative reply is malformed: {e.error_count()} error(s)",
            raw_content=content,
        ) from e

    if len(payload.top_keywords) > MAX_KEYWORDS:
        logger.info("Narrative returned %d keywords, keeping %d", len(payload.top_keywords), MAX_KEYWORDS)
    if len(payload.summary_text) != 3:
        logger.warning("Narrative returned %d summary sentences, expected 3", len(payload.summary_text))

    return NarrativeResult(
        top_keywords=tuple(
            TopKeyword(keyword=k.keyword, frequency=k.frequency)
            for k in payload.top_keywords[:MAX_KEYWORDS]
        ),
        timeline=tuple(
            TimelineEntry(time=t.time, description=t.description)
            for t in payload.daily_timeline
        ),
        summary_text=tuple(payload.summary_text),
    )
