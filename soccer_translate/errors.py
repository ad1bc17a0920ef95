"""Error taxonomy for the coding handlers.

Each error carries the HTTP status the API layer answers with. Anything that
is not a ``CodingError`` is treated as an internal failure (500).
"""

from __future__ import annotations

from typing import Optional


class CodingError(Exception):
    """Base class for errors raised while coding an occupation."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RequestValidationError(CodingError):
    """The request payload is empty or misses a required field."""

    status_code = 400


class UnsupportedLanguageError(CodingError):
    """A language was requested that has no code table.

    Reported as 500 alongside upstream failures, not as a client error.
    """

    status_code = 500

    def __init__(self, language: Optional[str] = None) -> None:
        super().__init__("Unsupported language.")
        self.language = language


class ClassificationError(CodingError):
    """SOCcer answered with a non-success HTTP status."""

    status_code = 500

    def __init__(self, upstream_status: int) -> None:
        super().__init__(f"Error running SOCcer: {upstream_status}")
        self.upstream_status = upstream_status


class TranslationError(CodingError):
    """The translation provider failed."""

    status_code = 500
