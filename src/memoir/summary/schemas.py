"""Pydantic schemas for the JSON the model is asked to return.

Each schema repairs individual malformed fields with the documented
defaults; anything structurally wrong raises ``ValidationError``.

Field defaults:
    ClassifiedItem.category   missing/blank/non-text -> ``FALLBACK_CATEGORY``
    TimelineItem.time         missing/null -> ``""``
    TimelineItem.description  missing/null -> ``""``
    NarrativePayload.summary_text  missing/null -> ``[]``
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from memoir.summary.models import FALLBACK_CATEGORY


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class ClassifiedItem(BaseModel):
    """One element of the categorization array."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    url: str = ""
    category: str = FALLBACK_CATEGORY

    @field_validator("title", "url", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return FALLBACK_CATEGORY
        return value.strip()


CLASSIFICATION_ADAPTER = TypeAdapter(list[ClassifiedItem])


class KeywordItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    keyword: str = ""
    frequency: int

    @field_validator("keyword", mode="before")
    @classmethod
    def _coerce_keyword(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("frequency", mode="before")
    @classmethod
    def _coerce_frequency(cls, value: Any) -> int:
        # bool is an int subclass but never a count
        if isinstance(value, bool):
            raise ValueError("frequency must be a number")
        if isinstance(value, str):
            value = value.strip()
        if isinstance(value, (int, float, str)):
            try:
                return int(float(value)) if isinstance(value, str) else int(value)
            except (ValueError, OverflowError):
                raise ValueError(f"frequency is not a finite number: {value!r}")
        raise ValueError("frequency must be a number")


class TimelineItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: str = ""
    description: str = ""

    @field_validator("time", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class NarrativePayload(BaseModel):
    """The narrative reply object."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    top_keywords: list[KeywordItem] = Field(alias="topKeywords")
    daily_timeline: list[TimelineItem] = Field(alias="dailyTimeline")
    summary_text: list[str] = Field(default_factory=list, alias="summaryText")

    @field_validator("summary_text", mode="before")
    @classmethod
    def _coerce_sentences(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, list):
            return [_as_text(sentence) for sentence in value]
        raise ValueError("summaryText must be a list")
