from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

import pivotchat

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def ini_path(tmp_path: Path) -> Path:
    path: Path = tmp_path / "pivotchat.ini"
    path.write_text('[TRANSLATION]\nBACKEND = "local"\n', encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pivotchat, "setup_logging", lambda config: None)


def test_parse_process_arguments() -> None:
    args = pivotchat.parse_arguments(["--debug", "process", "bagunnava", "--from", "telugu", "--to", "english"])

    assert args.command == "process"
    assert args.text == "bagunnava"
    assert args.sender == "telugu"
    assert args.receiver == "english"
    assert args.debug is True
    assert args.config == pivotchat.CFG_FILE


def test_parse_correct_arguments() -> None:
    args = pivotchat.parse_arguments(["correct", "bagunava", "--lang", "telugu", "--suggest", "3"])

    assert args.command == "correct"
    assert args.language == "telugu"
    assert args.suggest == 3


def test_parse_without_command() -> None:
    args = pivotchat.parse_arguments([])

    assert args.command is None
    assert args.backend is None


def test_process_missing_required_option_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        pivotchat.parse_arguments(["process", "hello", "--from", "english"])

    assert exc_info.value.code == 2
    assert "--to" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_main_reports_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code: int = await pivotchat.main(["--config", str(tmp_path / "absent.ini"), "analyze", "hello"])

    assert code == 1
    assert "Failed to load configuration file" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_main_process_prints_views(ini_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code: int = await pivotchat.main(
        ["--config", str(ini_path), "process", "bagunnava", "--from", "telugu", "--to", "english"]
    )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["receiver"]["main"] == "how are you"
    assert payload["metadata"]["originalText"] == "bagunnava"
    assert payload["metadata"]["wasTranslated"] is True


@pytest.mark.asyncio
async def test_main_analyze_prints_description(ini_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code: int = await pivotchat.main(["--config", str(ini_path), "analyze", "bagunnava", "--lang", "telugu"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["method"] == "transliteration"
    assert payload["description"] == "Romanized Text"


@pytest.mark.asyncio
async def test_main_correct_with_suggestions(ini_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code: int = await pivotchat.main(["--config", str(ini_path), "correct", "namastey", "--suggest", "2"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["text"] == "namaste"
    assert len(payload["suggestions"]["namastey"]) <= 2


@pytest.mark.asyncio
async def test_interactive_loop(
    ini_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    lines = iter(["/from klingon", "/from telugu", "bagunnava", "/quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    code: int = await pivotchat.main(["--config", str(ini_path), "chat"])

    assert code == 0
    captured = capsys.readouterr()
    assert "Unknown language: klingon" in captured.err
    assert "(telugu -> english)" in captured.out
    assert "them: how are you" in captured.out
