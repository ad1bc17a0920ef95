# api/app.py

from __future__ import annotations

import json
from typing import Any, Optional, Type, TypeVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.schemas import (
    ErrorResponse,
    HealthResponse,
    SoccerRequest,
    SoccerResponse,
    TranslationRequest,
    TranslationResponse,
)
from soccer_translate.clients.soccer import SoccerClient
from soccer_translate.clients.translation import GoogleTranslator, Translator
from soccer_translate.config import AppConfig, get_app_config
from soccer_translate.errors import CodingError, RequestValidationError
from soccer_translate.lookup.code_table import CodeTable
from soccer_translate.pipeline.coding_pipeline import (
    CodingServices,
    run_soccer_pipeline,
    run_translation_pipeline,
)
from soccer_translate.pipeline.validation import ensure_body
from soccer_translate.utils.logger import setup_logger

logger = setup_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# Both handlers apply their own method gate.
HANDLER_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
METHOD_NOT_ALLOWED_MESSAGE = "Only POST requests are accepted."

RequestT = TypeVar("RequestT", bound=BaseModel)


def _json(status_code: int, body: dict[str, Any]) -> JSONResponse:
    return JSONResponse(content=body, status_code=status_code, headers=CORS_HEADERS)


def _error(status_code: int, message: str) -> JSONResponse:
    return _json(status_code, ErrorResponse(message=message, code=status_code).model_dump())


def _count(results: Any) -> Optional[int]:
    return len(results) if isinstance(results, list) else None


def _method_gate(request: Request) -> Optional[JSONResponse]:
    """Answer pre-flight and non-POST requests; None means carry on."""
    if request.method == "OPTIONS":
        return _json(200, {"code": 200})
    if request.method != "POST":
        return _error(405, METHOD_NOT_ALLOWED_MESSAGE)
    return None


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError("Request body is not valid JSON.") from exc


def _parse_payload(model: Type[RequestT], data: Any) -> RequestT:
    """Validate a JSON payload against a request schema.

    Raises:
        RequestValidationError: For empty bodies and wrongly-typed fields.
    """
    ensure_body(data)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise RequestValidationError(f"Invalid field '{field}': {first['msg']}") from exc


def _failure(handler: str, exc: Exception) -> JSONResponse:
    if isinstance(exc, CodingError):
        status_code, message = exc.status_code, exc.message
    else:
        status_code, message = 500, str(exc) or type(exc).__name__

    if status_code >= 500:
        logger.exception(
            "Request failed.",
            extra={"handler": handler, "status_code": status_code},
        )
    else:
        logger.info(
            "Request rejected.",
            extra={"handler": handler, "status_code": status_code, "reason": message},
        )
    return _error(status_code, message)


def build_services(
    app_cfg: AppConfig,
    translator: Optional[Translator] = None,
    soccer_client: Optional[SoccerClient] = None,
    code_table: Optional[CodeTable] = None,
) -> CodingServices:
    """Build the process-wide dependencies, keeping any that were injected."""
    if code_table is None:
        code_table = CodeTable.from_json(
            app_cfg.code_table.path,
            language=app_cfg.code_table.language,
        )
    return CodingServices(
        app_cfg=app_cfg,
        translator=translator or GoogleTranslator(),
        soccer=soccer_client or SoccerClient(timeout_seconds=app_cfg.soccer.timeout_seconds),
        code_table=code_table,
    )


def create_app(
    app_cfg: Optional[AppConfig] = None,
    translator: Optional[Translator] = None,
    soccer_client: Optional[SoccerClient] = None,
    code_table: Optional[CodeTable] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Dependencies left as None are built from configuration. The code table
    is loaded here, once per process.
    """
    app = FastAPI(title="SOCcer Translation API", version="0.1.0")

    services = build_services(
        app_cfg or get_app_config(),
        translator=translator,
        soccer_client=soccer_client,
        code_table=code_table,
    )
    app.state.services = services

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 405:
            return _error(405, METHOD_NOT_ALLOWED_MESSAGE)
        return _error(exc.status_code, str(exc.detail))

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            endpoint=services.app_cfg.soccer.endpoint,
            code_table_size=len(services.code_table),
            code_table_path=str(services.app_cfg.code_table.path),
        )

    @app.api_route("/soccer", methods=HANDLER_METHODS)
    async def soccer(request: Request) -> JSONResponse:
        early = _method_gate(request)
        if early is not None:
            return early

        try:
            payload = _parse_payload(SoccerRequest, await _read_json(request))
            results = await run_soccer_pipeline(
                services,
                title=payload.title,
                task=payload.task,
                language=payload.language,
            )
            body = SoccerResponse(results=results).model_dump()
            logger.info(
                "Request completed.",
                extra={"handler": "soccer", "status_code": 200, "results": _count(results)},
            )
        except Exception as exc:
            return _failure("soccer", exc)

        return _json(200, body)

    @app.api_route("/translation", methods=HANDLER_METHODS)
    async def translation(request: Request) -> JSONResponse:
        early = _method_gate(request)
        if early is not None:
            return early

        try:
            payload = _parse_payload(TranslationRequest, await _read_json(request))
            translated_results = await run_translation_pipeline(
                services,
                target=payload.target,
                url=payload.url,
                title=payload.title,
                task=payload.task,
                n=payload.n,
            )
            body = TranslationResponse(translated_results=translated_results).model_dump(
                by_alias=True
            )
            logger.info(
                "Request completed.",
                extra={
                    "handler": "translation",
                    "status_code": 200,
                    "results": len(translated_results),
                },
            )
        except Exception as exc:
            return _failure("translation", exc)

        return _json(200, body)

    return app


app = create_app()
