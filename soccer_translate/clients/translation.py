# soccer_translate/clients/translation.py
from __future__ import annotations

from typing import Optional

from fastapi.concurrency import run_in_threadpool
from google.api_core.exceptions import GoogleAPICallError
from google.cloud import translate_v2

from soccer_translate.errors import TranslationError
from soccer_translate.utils.logger import setup_logger

logger = setup_logger(__name__)


class Translator:
    """Interface of the translation step used by the coding pipeline.

    Implementations translate a single piece of text into ``target_language``
    and return the translated text. One remote round trip per call; no retries.
    """

    async def translate(self, text: str, target_language: str) -> str:
        raise NotImplementedError


class GoogleTranslator(Translator):
    """Translator backed by the Google Cloud Translation API (v2).

    Credentials are resolved process-wide by the Google client library
    (``GOOGLE_APPLICATION_CREDENTIALS`` or the runtime's service account).
    The underlying client is created on first use.
    """

    def __init__(self, client: Optional[translate_v2.Client] = None) -> None:
        self._client = client

    @property
    def client(self) -> translate_v2.Client:
        if self._client is None:
            self._client = translate_v2.Client()
        return self._client

    def _translate_sync(self, text: str, target_language: str) -> str:
        response = self.client.translate(
            text,
            target_language=target_language,
            format_="text",
        )
        return response["translatedText"]

    async def translate(self, text: str, target_language: str) -> str:
        logger.debug(
            "Translating text.",
            extra={"target_language": target_language, "chars": len(text)},
        )
        try:
            # The Google client is blocking; keep it off the event loop.
            return await run_in_threadpool(self._translate_sync, text, target_language)
        except GoogleAPICallError as exc:
            raise TranslationError(exc.message or str(exc)) from exc
