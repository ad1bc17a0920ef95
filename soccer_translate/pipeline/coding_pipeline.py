from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from soccer_translate.clients.soccer import SoccerClient
from soccer_translate.clients.translation import Translator
from soccer_translate.config import AppConfig
from soccer_translate.errors import UnsupportedLanguageError
from soccer_translate.lookup.code_table import CodeTable
from soccer_translate.pipeline.validation import (
    ensure_title_or_task,
    ensure_translation_fields,
)
from soccer_translate.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class CodingServices:
    """Dependencies shared by both coding flows, built once per process."""

    app_cfg: AppConfig
    translator: Translator
    soccer: SoccerClient
    code_table: CodeTable


async def _translate_optional(
    translator: Translator,
    text: Optional[str],
    target_language: str,
) -> Optional[str]:
    # Absent or empty fields are passed through untranslated.
    if not text:
        return text
    return await translator.translate(text, target_language)


async def run_soccer_pipeline(
    services: CodingServices,
    title: Optional[str] = None,
    task: Optional[str] = None,
    language: Optional[str] = None,
) -> List[Any]:
    """Code a job title/task with SOCcer, optionally going through translation.

    Steps:
        1. When ``language`` is given, translate title and task concurrently
           into the language SOCcer understands.
        2. Classify against the configured production SOCcer endpoint.
        3. When ``language`` matches the code table language, replace each
           result with its code table record, dropping results without one.
           Any other language raises ``UnsupportedLanguageError``.

    Returns:
        The SOCcer results, or the matching code table records.
    """
    ensure_title_or_task(title, task)
    cfg = services.app_cfg

    if language:
        soccer_language = cfg.translation.soccer_language
        title, task = await asyncio.gather(
            _translate_optional(services.translator, title, soccer_language),
            _translate_optional(services.translator, task, soccer_language),
        )

    results = await services.soccer.classify(
        title,
        task,
        code_length=cfg.soccer.code_length,
        endpoint=cfg.soccer.endpoint,
    )

    if language and language == services.code_table.language:
        matched = services.code_table.match_codes(results)
        logger.info(
            "Mapped SOCcer results through code table.",
            extra={"language": language, "results": len(results), "matched": len(matched)},
        )
        return matched
    if language:
        raise UnsupportedLanguageError(language)

    return results


async def run_translation_pipeline(
    services: CodingServices,
    target: Optional[str],
    url: Optional[str],
    title: Optional[str] = None,
    task: Optional[str] = None,
    n: Optional[int] = None,
) -> List[Optional[Dict[str, Any]]]:
    """Translate title/task into ``target``, code them at ``url``, map every result.

    Title and task are translated one after the other. Every SOCcer result is
    mapped through the code table; results without a record become None, so
    the output has the same length as the SOCcer response.
    """
    ensure_translation_fields(target, url, title, task)

    title_translated = await _translate_optional(services.translator, title, target)
    task_translated = await _translate_optional(services.translator, task, target)

    code_length = n or services.app_cfg.soccer.code_length
    results = await services.soccer.classify(
        title_translated or None,
        task_translated or None,
        code_length=code_length,
        endpoint=url,
    )

    return services.code_table.map_codes(results)
