"""Unified exception hierarchy for memoir."""

from __future__ import annotations


class MemoirError(Exception):
    """Base exception for all memoir errors."""


# Input
class EmptyInputError(MemoirError):
    """No visited pages, or the date is not a calendar date."""


# Model provider
class ExternalServiceError(MemoirError):
    """Transport or HTTP failure while contacting the model provider."""


class ModelTimeoutError(ExternalServiceError, TimeoutError):
    """The model provider did not answer within the configured timeout."""


class ModelResponseError(MemoirError):
    """The provider answered, but not with a chat completion shape."""

    def __init__(self, message: str, raw_content: str = ""):
        super().__init__(message)
        self.raw_content = raw_content


# Categorization
class ClassificationError(MemoirError):
    """Base exception for page categorization."""


class ClassificationSizeMismatch(ClassificationError):
    """The model classified a different number of pages than it was sent."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Classification returned {actual} items for {expected} pages"
        )
        self.expected = expected
        self.actual = actual


class ClassificationParseError(ClassificationError):
    """Categorization output was not a JSON array of objects."""

    def __init__(self, message: str, raw_content: str = ""):
        super().__init__(message)
        self.raw_content = raw_content


# Narrative
class NarrativeParseError(MemoirError):
    """Narrative output was not the expected JSON object."""

    def __init__(self, message: str, raw_content: str = ""):
        super().__init__(message)
        self.raw_content = raw_content


# Storage
class PersistenceError(MemoirError):
    """Serializing or saving a summary failed after both model calls succeeded."""


# Status codes for consuming HTTP layers. Most specific class wins.
ERROR_STATUS: dict[type[MemoirError], int] = {
    EmptyInputError: 400,
    ModelTimeoutError: 504,
    ExternalServiceError: 502,
    ModelResponseError: 502,
    ClassificationError: 502,
    NarrativeParseError: 502,
    PersistenceError: 500,
}


def status_for(error: BaseException) -> int:
    """Map an error to the HTTP status a consuming layer should return."""
    for exc_class in type(error).__mro__:
        if exc_class in ERROR_STATUS:
            return ERROR_STATUS[exc_class]
    return 500
