from __future__ import annotations

import logging
from textwrap import dedent
from typing import TYPE_CHECKING

import pytest

from config.loader import (
    ConfigFileNotFoundError,
    ConfigFormatError,
    ConfigLoader,
    ConfigTypeError,
    ConfigValueError,
)

if TYPE_CHECKING:
    from pathlib import Path


def _write_ini(tmp_path: Path, content: str) -> Path:
    ini_path: Path = tmp_path / "pivotchat.ini"
    ini_path.write_text(dedent(content), encoding="utf-8")
    return ini_path


def test_config_loader_raises_for_missing_file(tmp_path: Path) -> None:
    ini_path: Path = tmp_path / "missing.ini"
    with pytest.raises(ConfigFileNotFoundError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "")

    config = ConfigLoader(config_filename=ini_path, script_name="test").config

    assert config.GENERAL.SCRIPT_NAME == "test"
    assert config.TRANSLATION.BACKEND == "local"
    assert config.CACHE.MAX_TRANSLATIONS == 2000
    assert config.CACHE.MAX_CORRECTIONS == 1000
    assert config.CACHE.POLICY == "fifo"
    assert config.INPUT.VOICE_BURST_CHARS == 15
    assert config.PREVIEW.DEBOUNCE_SEC == pytest.approx(0.5)


def test_config_loader_parses_typed_values_and_overrides(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = False

        [TRANSLATION]
        BACKEND = "google"
        TIMEOUT = 5

        [CACHE]
        MAX_TRANSLATIONS = 50
        POLICY = "lru"

        [CORRECTION]
        ENABLED = no

        [INPUT]
        ENGLISH_RATIO = 0.5

        [REGISTRY]
        ALIASES = {"tenglish": "telugu"}
        """,
    )

    loader = ConfigLoader(
        config_filename=str(ini_path),
        script_name="test",
        debug=True,
        backend="http",
        endpoint="https://example.invalid/translate",
    )

    assert loader.config.GENERAL.DEBUG is True
    assert loader.config.TRANSLATION.BACKEND == "http"
    assert loader.config.BACKEND.ENDPOINT == "https://example.invalid/translate"
    assert loader.config.TRANSLATION.TIMEOUT == pytest.approx(5.0)
    assert loader.config.CACHE.MAX_TRANSLATIONS == 50
    assert loader.config.CACHE.POLICY == "lru"
    assert loader.config.CORRECTION.ENABLED is False
    assert loader.config.INPUT.ENGLISH_RATIO == pytest.approx(0.5)
    assert loader.config.REGISTRY.ALIASES == {"tenglish": "telugu"}


def test_lowercase_keys_are_matched(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [CACHE]
        max_translations = 10
        """,
    )

    assert ConfigLoader(config_filename=ini_path, script_name="test").config.CACHE.MAX_TRANSLATIONS == 10


def test_invalid_backend_type_raises_type_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        BACKEND = 1
        """,
    )

    with pytest.raises(ConfigTypeError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_unquoted_string_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        BACKEND = local backend
        """,
    )

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_invalid_boolean_value_raises_config_value_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [CORRECTION]
        ENABLED = maybe
        """,
    )

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


@pytest.mark.parametrize(
    ("section", "key", "value"),
    [
        ("CACHE", "MAX_TRANSLATIONS", "0"),
        ("CACHE", "TEXT_PREFIX", "-1"),
        ("CACHE", "INFLIGHT_TIMEOUT", "0"),
        ("INPUT", "ENGLISH_RATIO", "1.5"),
        ("PREVIEW", "DEBOUNCE_SEC", "-0.1"),
    ],
)
def test_out_of_range_values_raise_config_value_error(tmp_path: Path, section: str, key: str, value: str) -> None:
    ini_path: Path = _write_ini(tmp_path, f"[{section}]\n{key} = {value}\n")

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_pivot_language_must_be_english(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        PIVOT_LANGUAGE = "french"
        """,
    )

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_http_backend_requires_endpoint(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        BACKEND = "http"
        """,
    )

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_aliases_must_be_a_mapping(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [REGISTRY]
        ALIASES = ["telugu"]
        """,
    )

    with pytest.raises(ConfigTypeError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_unknown_backend_and_section_only_warn(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        BACKEND = "carrier-pigeon"

        [DISPLAY]
        THEME = "dark"
        """,
    )

    with caplog.at_level(logging.WARNING):
        config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.BACKEND == "carrier-pigeon"
    assert "carrier-pigeon" in caplog.text
    assert "DISPLAY" in caplog.text


def test_broken_file_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(tmp_path, "this is not an ini file\n")

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")
