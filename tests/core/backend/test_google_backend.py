from __future__ import annotations

from types import SimpleNamespace

import pytest

from core.backend.engines import google_backend as google_backend_module
from core.backend.engines.async_google_translate import (
    GoogleError,
    HTTPConnectionError,
    HTTPTimeoutError,
    HTTPTooManyRequests,
    InvalidLanguageCodeError,
)
from core.backend.interface import (
    BackendUnavailableError,
    NotSupportedLanguagesError,
    TranslateExceptionError,
    TranslationRateLimitError,
)
from core.registry import LanguageRegistry
from models.config_models import Config


class DummyTranslator:
    result_text: str = "translated"
    error: Exception | None = None

    def __init__(self, url_suffix: str = "com", timeout: float = 10.0, *, code_sensitive: bool = False) -> None:
        self.url_suffix: str = url_suffix
        self.timeout: float = timeout
        self.code_sensitive: bool = code_sensitive
        self.calls: list[tuple[str, str, str | None]] = []
        self.closed: bool = False

    async def translate(self, text: str, lang_tgt: str = "auto", lang_src: str | None = "auto") -> SimpleNamespace:
        self.calls.append((text, lang_tgt, lang_src))
        if type(self).error is not None:
            raise type(self).error
        return SimpleNamespace(text=type(self).result_text, detected_source_lang=lang_src)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def setup_google_module(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(google_backend_module, "AsyncTranslator", DummyTranslator)
    DummyTranslator.result_text = "translated"
    DummyTranslator.error = None


@pytest.fixture(scope="module")
def registry() -> LanguageRegistry:
    return LanguageRegistry.from_json()


@pytest.fixture
def backend(registry: LanguageRegistry) -> google_backend_module.GoogleBackend:
    config = Config()
    config.TRANSLATION.GOOGLE_SUFFIX = "co.jp"
    config.TRANSLATION.TIMEOUT = 5.0
    backend = google_backend_module.GoogleBackend()
    backend.initialize(config, registry)
    return backend


def _client(backend: google_backend_module.GoogleBackend) -> DummyTranslator:
    client = backend._inst  # noqa: SLF001
    assert isinstance(client, DummyTranslator)
    return client


def test_initialize_creates_code_sensitive_client(backend: google_backend_module.GoogleBackend) -> None:
    client: DummyTranslator = _client(backend)

    assert client.url_suffix == "co.jp"
    assert client.timeout == 5.0
    assert client.code_sensitive is True
    assert backend.backend_name == "google"


@pytest.mark.parametrize(
    ("language", "expected"),
    [("telugu", "te"), ("hebrew", "iw"), ("chinese", "zh-cn"), ("EN", "en")],
)
def test_google_code(backend: google_backend_module.GoogleBackend, language: str, expected: str) -> None:
    assert backend.google_code(language) == expected


def test_google_code_unknown_language(backend: google_backend_module.GoogleBackend) -> None:
    with pytest.raises(NotSupportedLanguagesError):
        backend.google_code("klingon")


@pytest.mark.asyncio
async def test_translate_text(backend: google_backend_module.GoogleBackend) -> None:
    DummyTranslator.result_text = "how are you"

    result: str = await backend.translate_text("bagunnava", "telugu", "english")

    assert result == "how are you"
    assert _client(backend).calls == [("bagunnava", "en", "te")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (HTTPTooManyRequests("429"), TranslationRateLimitError),
        (InvalidLanguageCodeError("xx"), NotSupportedLanguagesError),
        (HTTPTimeoutError("slow"), TimeoutError),
        (HTTPConnectionError("reset"), TranslateExceptionError),
        (GoogleError("unknown error"), TranslateExceptionError),
    ],
)
async def test_translate_text_maps_errors(
    backend: google_backend_module.GoogleBackend, error: Exception, expected: type[Exception]
) -> None:
    DummyTranslator.error = error

    with pytest.raises(expected):
        await backend.translate_text("hola", "spanish", "english")


@pytest.mark.asyncio
async def test_translate_without_initialize() -> None:
    backend = google_backend_module.GoogleBackend()
    backend._registry = LanguageRegistry.from_json()  # noqa: SLF001

    with pytest.raises(BackendUnavailableError):
        await backend.translate_text("hola", "spanish", "english")


@pytest.mark.asyncio
async def test_close(backend: google_backend_module.GoogleBackend) -> None:
    client: DummyTranslator = _client(backend)

    await backend.close()

    assert client.closed is True
    with pytest.raises(BackendUnavailableError):
        _ = backend._inst  # noqa: SLF001
