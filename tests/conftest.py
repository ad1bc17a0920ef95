# tests/conftest.py
from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from soccer_translate.clients.soccer import SoccerClient
from soccer_translate.clients.translation import Translator
from soccer_translate.config import AppConfig
from soccer_translate.errors import TranslationError
from soccer_translate.lookup.code_table import CodeRecord, CodeTable
from soccer_translate.pipeline.coding_pipeline import CodingServices

SOCCER_RESULTS: List[Dict[str, Any]] = [
    {"code": "17-2051", "label": "Civil Engineers", "score": 0.91},
    {"code": "17-2199", "label": "Engineers, All Other", "score": 0.42},
    {"code": "99-9999", "label": "Not in table", "score": 0.10},
]


class FakeTranslator(Translator):
    """Deterministic translator that records every call in order."""

    def __init__(self, translations: Optional[Dict[Tuple[str, str], str]] = None) -> None:
        self.translations = translations or {}
        self.calls: List[Tuple[str, str]] = []
        self.events: List[str] = []

    async def translate(self, text: str, target_language: str) -> str:
        self.calls.append((text, target_language))
        self.events.append(f"start:{text}")
        await asyncio.sleep(0)
        self.events.append(f"end:{text}")
        return self.translations.get((text, target_language), f"{text} ({target_language})")


class FailingTranslator(Translator):
    async def translate(self, text: str, target_language: str) -> str:
        raise TranslationError("Translation quota exceeded")


class SoccerRecorder:
    """httpx.MockTransport handler standing in for the SOCcer endpoint."""

    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self.payload = SOCCER_RESULTS if payload is None else payload
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_params(self) -> Dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def code_table() -> CodeTable:
    records = [
        CodeRecord(code="17-2051", title="Ingenieros civiles"),
        CodeRecord(code="17-2199", title="Ingenieros, todos los demás"),
        CodeRecord(code="29-1141", title="Enfermeros registrados"),
    ]
    return CodeTable(records, language="es")


@pytest.fixture
def soccer_recorder() -> SoccerRecorder:
    return SoccerRecorder()


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator(
        {
            ("ingeniero", "en"): "engineer",
            ("diseña puentes", "en"): "designs bridges",
            ("engineer", "es"): "ingeniero",
        }
    )


@pytest.fixture
def make_services(
    code_table: CodeTable,
) -> Callable[..., CodingServices]:
    def _make(
        translator: Translator,
        handler: Callable[[httpx.Request], httpx.Response],
        app_cfg: Optional[AppConfig] = None,
    ) -> CodingServices:
        return CodingServices(
            app_cfg=app_cfg or AppConfig(),
            translator=translator,
            soccer=SoccerClient(transport=httpx.MockTransport(handler)),
            code_table=code_table,
        )

    return _make


@pytest.fixture
def services(
    make_services: Callable[..., CodingServices],
    translator: FakeTranslator,
    soccer_recorder: SoccerRecorder,
) -> CodingServices:
    return make_services(translator, soccer_recorder)
