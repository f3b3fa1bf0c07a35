"""Assign an activity category to each visited page via the chat model."""

from __future__ import annotations

import logging
from typing import Sequence

from pydantic import ValidationError

from memoir.browser.models import CategorizedPage, VisitedPage
from memoir.exceptions import (
    ClassificationParseError,
    ClassificationSizeMismatch,
    ModelResponseError,
)
from memoir.llm.base import BaseChatModel
from memoir.llm.parsing import decode_json
from memoir.summary.models import FALLBACK_CATEGORY
from memoir.summary.prompts import (
    CATEGORIZATION_SYSTEM_PROMPT,
    CATEGORIZATION_TEMPERATURE,
    build_categorization_prompt,
)
from memoir.summary.schemas import CLASSIFICATION_ADAPTER

logger = logging.getLogger(__name__)


class Categorizer:
    """One-shot page classifier.

    Args:
        model: Chat backend used for the request.
    """

    def __init__(self, model: BaseChatModel):
        self.model = model

    async def categorize(self, pages: Sequence[VisitedPage]) -> list[CategorizedPage]:
        """Categorize ``pages``, returning them in the same order.

        Callers must not pass an empty sequence.
        """
        prompt = build_categorization_prompt(pages)
        try:
            content = await self.model.complete(
                CATEGORIZATION_SYSTEM_PROMPT,
                prompt,
                temperature=CATEGORIZATION_TEMPERATURE,
            )
        except ModelResponseError as e:
            raise ClassificationParseError(str(e), raw_content=e.raw_content) from e

        categories = parse_categories(content, expected=len(pages))
        return [CategorizedPage(page=page, category=c) for page, c in zip(pages, categories)]


def parse_categories(content: str, expected: int) -> list[str]:
    """Parse the model's JSON array into one label per page."""
    try:
        data = decode_json(content)
    except ValueError as e:
        raise ClassificationParseError(
            f"Categorization reply is not valid JSON: {e}", raw_content=content
        ) from e
    if not isinstance(data, list):
        raise ClassificationParseError(
            f"Categorization reply is a {type(data).__name__}, expected an array",
            raw_content=content,
        )
    if len(data) != expected:
        raise ClassificationSizeMismatch(expected=expected, actual=len(data))

    try:
        items = CLASSIFICATION_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ClassificationParseError(
            f"Categorization items are malformed: {e.error_count()} error(s)",
            raw_content=content,
        ) from e

    missing = sum(1 for item in items if item.category == FALLBACK_CATEGORY)
    if missing:
        logger.warning("%d of %d pages had no category, using %r", missing, expected, FALLBACK_CATEGORY)
    return [item.category for item in items]
