# api/schemas.py

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SoccerRequest(BaseModel):
    """Request body of the /soccer handler."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, description="Job title, in any language.")
    task: Optional[str] = Field(None, description="Job task description, in any language.")
    language: Optional[str] = Field(
        None, description="Language of title/task. When set, inputs are translated first."
    )


class TranslationRequest(BaseModel):
    """Request body of the /translation handler."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, description="Job title to translate.")
    task: Optional[str] = Field(None, description="Job task description to translate.")
    target: Optional[str] = Field(None, description="Language to translate title/task into.")
    n: Optional[int] = Field(None, description="Number of candidate codes to request.")
    url: Optional[str] = Field(None, description="SOCcer endpoint to call.")


class SoccerResponse(BaseModel):
    """Response schema of the /soccer handler."""
    results: Any
    code: int = 200


class TranslationResponse(BaseModel):
    """Response schema of the /translation handler."""
    model_config = ConfigDict(populate_by_name=True)

    translated_results: list[Optional[dict[str, Any]]] = Field(..., alias="translatedResults")
    code: int = 200


class ErrorResponse(BaseModel):
    """Body of every non-200 answer."""
    message: str
    code: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    endpoint: str
    code_table_size: int
    code_table_path: str
