from __future__ import annotations

import pytest
from deepl.exceptions import (
    AuthorizationException,
    ConnectionException,
    QuotaExceededException,
    TooManyRequestsException,
)

from core.backend.engines import deepl_backend as deepl_backend_module
from core.backend.interface import (
    BackendUnavailableError,
    NotSupportedLanguagesError,
    TranslateExceptionError,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
)
from core.registry import LanguageRegistry
from models.config_models import Config


class DummyLanguage:
    EN: str = "en"
    EN_US: str = "en-US"
    DE: str = "de"
    JA: str = "ja"
    PT_BR: str = "pt-BR"


class DummyTextResult:
    def __init__(self, text: str, detected_source_lang: str) -> None:
        self.text: str = text
        self.detected_source_lang: str = detected_source_lang


class DummyClient:
    translate_result: DummyTextResult | list[DummyTextResult] = DummyTextResult("ok", "EN")
    translate_error: Exception | None = None

    def __init__(self, auth_key: str) -> None:
        self.auth_key: str = auth_key
        self.calls: list[tuple[str, str | None, str]] = []

    def translate_text(self, content: str, source_lang: str | None, target_lang: str) -> DummyTextResult:
        self.calls.append((content, source_lang, target_lang))
        err: Exception | None = type(self).translate_error
        if err is not None:
            raise err
        result: DummyTextResult | list[DummyTextResult] = type(self).translate_result
        if isinstance(result, list):
            return result[0]
        return result


@pytest.fixture(autouse=True)
def setup_deepl_module(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(deepl_backend_module, "Language", DummyLanguage)
    monkeypatch.setattr(deepl_backend_module, "DeepLClient", DummyClient)
    monkeypatch.setattr(deepl_backend_module.DeeplBackend, "_source_codes", {})
    monkeypatch.setattr(deepl_backend_module.DeeplBackend, "_target_codes", {})
    monkeypatch.setenv("DEEPL_API_KEY", "test-key")

    DummyClient.translate_result = DummyTextResult("ok", "EN")
    DummyClient.translate_error = None


@pytest.fixture(scope="module")
def registry() -> LanguageRegistry:
    return LanguageRegistry.from_json()


@pytest.fixture
def backend(registry: LanguageRegistry) -> deepl_backend_module.DeeplBackend:
    backend = deepl_backend_module.DeeplBackend()
    backend.initialize(Config(), registry)
    return backend


def _client(backend: deepl_backend_module.DeeplBackend) -> DummyClient:
    client = backend._inst  # noqa: SLF001
    assert isinstance(client, DummyClient)
    return client


def test_langcode_mappings() -> None:
    deepl_backend_module.DeeplBackend()

    assert deepl_backend_module.DeeplBackend._source_codes == {  # noqa: SLF001
        "en": "EN",
        "de": "DE",
        "ja": "JA",
        "pt": "PT",
    }
    assert deepl_backend_module.DeeplBackend._target_codes == {  # noqa: SLF001
        "en": "EN-US",
        "de": "DE",
        "ja": "JA",
        "pt": "PT-BR",
    }


def test_initialize_requires_api_key(monkeypatch: pytest.MonkeyPatch, registry: LanguageRegistry) -> None:
    monkeypatch.delenv("DEEPL_API_KEY")
    backend = deepl_backend_module.DeeplBackend()

    with pytest.raises(BackendUnavailableError, match="DEEPL_API_KEY"):
        backend.initialize(Config(), registry)


def test_initialize_creates_client(backend: deepl_backend_module.DeeplBackend) -> None:
    assert _client(backend).auth_key == "test-key"
    assert backend.backend_name == "deepl"
    assert backend.supports_bidirectional is False


@pytest.mark.asyncio
async def test_translate_text_uses_deepl_codes(backend: deepl_backend_module.DeeplBackend) -> None:
    DummyClient.translate_result = [DummyTextResult("Guten Tag", "EN")]

    result: str = await backend.translate_text("good day", "english", "german")

    assert result == "Guten Tag"
    assert _client(backend).calls == [("good day", "EN", "DE")]


@pytest.mark.asyncio
async def test_translate_text_to_english_uses_regional_variant(backend: deepl_backend_module.DeeplBackend) -> None:
    await backend.translate_text("Guten Tag", "german", "english")

    assert _client(backend).calls == [("Guten Tag", "DE", "EN-US")]


@pytest.mark.asyncio
async def test_translate_text_unsupported_language(backend: deepl_backend_module.DeeplBackend) -> None:
    with pytest.raises(NotSupportedLanguagesError):
        await backend.translate_text("bagunnava", "telugu", "english")
    assert _client(backend).calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (QuotaExceededException("quota"), TranslationQuotaExceededError),
        (TooManyRequestsException("slow down"), TranslationRateLimitError),
        (AuthorizationException("denied"), TranslateExceptionError),
        (ConnectionException("offline"), TranslateExceptionError),
        (ValueError("bad"), TranslateExceptionError),
    ],
)
async def test_translate_text_maps_errors(
    backend: deepl_backend_module.DeeplBackend, error: Exception, expected: type[Exception]
) -> None:
    DummyClient.translate_error = error

    with pytest.raises(expected):
        await backend.translate_text("hello", "english", "german")


@pytest.mark.asyncio
async def test_close_drops_client(backend: deepl_backend_module.DeeplBackend) -> None:
    await backend.close()

    with pytest.raises(BackendUnavailableError):
        _ = backend._inst  # noqa: SLF001
