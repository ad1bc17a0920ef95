from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CODE_TABLE_PATH = PACKAGE_DIR / "resources" / "soc2010_6digit_es.json"
DEFAULT_SOCCER_ENDPOINT = "https://soccer-myconnect.cancer.gov/soccer/code"


# ============================
# Service Config (loaded from YAML)
# ============================


class SoccerConfig(BaseModel):
    """Settings for the remote SOCcer classification endpoint."""

    endpoint: str = Field(
        DEFAULT_SOCCER_ENDPOINT,
        description="Production SOCcer endpoint used by the /soccer handler.",
    )
    code_length: int = Field(
        6,
        ge=1,
        description="Default value of the 'n' query parameter sent to SOCcer.",
    )
    timeout_seconds: Optional[float] = Field(
        None,
        gt=0.0,
        description="Timeout for SOCcer calls. None waits indefinitely.",
    )


class TranslationConfig(BaseModel):
    """Settings for the translation step of the /soccer handler."""

    soccer_language: str = Field(
        "en",
        description="Language SOCcer understands; inputs are translated into it.",
    )


class CodeTableConfig(BaseModel):
    """Location and language of the bundled occupation code table."""

    language: str = Field(
        "es",
        description="Language of the descriptive records in the table.",
    )
    path: Path = Field(
        DEFAULT_CODE_TABLE_PATH,
        description="Path to a JSON array of records with a 'code' field.",
    )


class AppConfig(BaseModel):
    """Top-level service configuration."""

    soccer: SoccerConfig = Field(default_factory=SoccerConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    code_table: CodeTableConfig = Field(default_factory=CodeTableConfig)


# ============================
# Settings (paths, env)
# ============================


class Settings(BaseSettings):
    """Environment-level settings: logging level and file locations."""

    log_level: str = "INFO"

    project_root: Path = PACKAGE_DIR.parent

    configs_dir: Path = project_root / "configs"
    resources_dir: Path = PACKAGE_DIR / "resources"
    config_path: Path = configs_dir / "local.yaml"

    model_config = SettingsConfigDict(
        env_prefix="SOCCER_TRANSLATE_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


# ============================
# Loader
# ============================


def load_app_config(config_path: str | Path) -> AppConfig:
    """Load service configuration from a YAML file.

    Recognised sections (all optional, defaults are used when missing):
        - soccer
        - translation
        - code_table

    A relative ``code_table.path`` is resolved against the YAML file's directory.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    soccer_cfg = SoccerConfig(**(raw.get("soccer") or {}))
    translation_cfg = TranslationConfig(**(raw.get("translation") or {}))
    code_table_cfg = CodeTableConfig(**(raw.get("code_table") or {}))

    if not code_table_cfg.path.is_absolute():
        code_table_cfg = code_table_cfg.model_copy(
            update={"path": (path.parent / code_table_cfg.path).resolve()},
        )

    return AppConfig(
        soccer=soccer_cfg,
        translation=translation_cfg,
        code_table=code_table_cfg,
    )


def get_app_config() -> AppConfig:
    """Load the configured YAML file, or fall back to defaults when it is absent."""
    settings = get_settings()
    if settings.config_path.exists():
        return load_app_config(settings.config_path)
    return AppConfig()
