# soccer_translate/pipeline/validation.py
from __future__ import annotations

from typing import Any, Optional

from soccer_translate.errors import RequestValidationError


def ensure_body(data: Any) -> None:
    """Ensure the request body is a non-empty JSON object.

    Raises:
        RequestValidationError: If the body is absent, not an object, or ``{}``.
    """
    if not isinstance(data, dict) or len(data) == 0:
        raise RequestValidationError("Request body is empty.")


def ensure_title_or_task(title: Optional[str], task: Optional[str]) -> None:
    """At least one of title/task must be a non-empty string."""
    if not title and not task:
        raise RequestValidationError("Title or Task is required.")


def ensure_translation_fields(
    target: Optional[str],
    url: Optional[str],
    title: Optional[str],
    task: Optional[str],
) -> None:
    """Validate the fields of a translation request.

    Checked in order: target language, URL, then title/task, so the first
    missing field decides the message.
    """
    if not target:
        raise RequestValidationError("Target language is required.")
    if not url:
        raise RequestValidationError("URL is required.")
    ensure_title_or_task(title, task)
