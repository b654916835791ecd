"""Unit tests for the Google web translation client."""

from __future__ import annotations

import json
from typing import Any

import pytest

from core.backend.engines import async_google_translate as agt


class DummySession:
    def __init__(self, *args, **kwargs) -> None:
        _ = args, kwargs
        self.closed = False

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def patch_session(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(agt.aiohttp, "ClientSession", DummySession)


def _make_response(decoded_data: list[Any]) -> str:
    line: str = json.dumps([["MkEWBc", None, json.dumps(decoded_data)]])
    return f"ignored\n{line}"


def test_unknown_url_suffix_falls_back_to_com() -> None:
    translator = agt.AsyncTranslator(url_suffix="invalid")

    assert translator.url_suffix == "com"
    assert translator.url.startswith("https://translate.google.com/")


def test_check_langcode_accepts_known_code() -> None:
    assert agt.AsyncTranslator.check_langcode("TE") == "te"
    assert agt.AsyncTranslator.check_langcode("auto", sensitive=True) == "auto"


def test_check_langcode_unknown_code() -> None:
    assert agt.AsyncTranslator.check_langcode("zz") == "auto"
    with pytest.raises(agt.InvalidLanguageCodeError):
        agt.AsyncTranslator.check_langcode("zz", sensitive=True)


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "a" * 5000])
async def test_translate_rejects_text_length(text: str) -> None:
    translator = agt.AsyncTranslator()

    with pytest.raises(agt.GoogleError):
        await translator.translate(text, lang_tgt="en")


@pytest.mark.asyncio
async def test_translate_posts_rpc_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    translator = agt.AsyncTranslator(code_sensitive=True)
    posted: list[str] = []
    decoded_data = [["src", None], [[["Hello", "te"], ["friend", "te"]], None, None, "te"]]

    async def fake_post(data: str) -> str:
        posted.append(data)
        return _make_response(decoded_data)

    monkeypatch.setattr(translator, "_post", fake_post)

    result: agt.TextResult = await translator.translate("namaskaram mitrama", lang_tgt="en", lang_src="te")

    assert str(result) == "Hello friend"
    assert posted[0].startswith("f.req=")
    assert "MkEWBc" in posted[0]


def test_process_response_single_translation() -> None:
    translator = agt.AsyncTranslator()
    decoded_data = [
        ["src", None],
        [
            [[None, "te", None, None, None, [["How", None], ["are you", None]]]],
            None,
            None,
            "te",
        ],
    ]

    result: agt.TextResult = translator._process_response(_make_response(decoded_data))  # noqa: SLF001

    assert result.text == "How are you"
    assert result.detected_source_lang == "te"
    assert result.metadata == {"engine": "google", "type": "single"}


def test_process_response_url_recognition() -> None:
    translator = agt.AsyncTranslator()
    decoded_data = [["src", None], [[["https://example.com"]], None, None, "en"]]

    result: agt.TextResult = translator._process_response(_make_response(decoded_data))  # noqa: SLF001

    assert result.text == "https://example.com"
    assert result.detected_source_lang == "und"


def test_process_response_raises_on_missing_marker() -> None:
    translator = agt.AsyncTranslator()

    with pytest.raises(agt.ResponseFormatError):
        translator._process_response("no marker here")  # noqa: SLF001


def test_process_response_raises_on_broken_payload() -> None:
    translator = agt.AsyncTranslator()

    with pytest.raises(agt.ResponseFormatError):
        translator._process_response(_make_response([["src"]]))  # noqa: SLF001


@pytest.mark.asyncio
async def test_close_releases_session() -> None:
    translator = agt.AsyncTranslator()
    session = translator._session  # noqa: SLF001

    await translator.close()

    assert isinstance(session, DummySession)
    assert session.closed is True
