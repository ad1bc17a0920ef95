# tests/unit/test_config.py
from __future__ import annotations

from pathlib import Path

import pytest

from soccer_translate.config import (
    DEFAULT_CODE_TABLE_PATH,
    DEFAULT_SOCCER_ENDPOINT,
    AppConfig,
    get_settings,
    load_app_config,
)


def test_default_app_config_points_to_production_soccer() -> None:
    cfg = AppConfig()

    assert cfg.soccer.endpoint == DEFAULT_SOCCER_ENDPOINT
    assert cfg.soccer.code_length == 6
    assert cfg.soccer.timeout_seconds is None
    assert cfg.translation.soccer_language == "en"
    assert cfg.code_table.language == "es"
    assert cfg.code_table.path == DEFAULT_CODE_TABLE_PATH


def test_load_app_config_reads_sections_and_resolves_relative_path(tmp_path: Path) -> None:
    config_file = tmp_path / "service.yaml"
    config_file.write_text(
        "soccer:\n"
        "  endpoint: http://localhost:9000/soccer/code\n"
        "  code_length: 10\n"
        "translation:\n"
        "  soccer_language: de\n"
        "code_table:\n"
        "  path: tables/codes.json\n",
        encoding="utf-8",
    )

    cfg = load_app_config(config_file)

    assert cfg.soccer.endpoint == "http://localhost:9000/soccer/code"
    assert cfg.soccer.code_length == 10
    assert cfg.translation.soccer_language == "de"
    assert cfg.code_table.path == (tmp_path / "tables" / "codes.json").resolve()


def test_load_app_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("", encoding="utf-8")

    assert load_app_config(config_file) == AppConfig()


def test_load_app_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError) as exc:
        load_app_config(tmp_path / "nope.yaml")

    assert "Config file not found" in str(exc.value)


def test_local_yaml_matches_bundled_defaults() -> None:
    settings = get_settings()

    cfg = load_app_config(settings.configs_dir / "local.yaml")

    assert cfg.soccer.endpoint == DEFAULT_SOCCER_ENDPOINT
    assert cfg.code_table.path == DEFAULT_CODE_TABLE_PATH
