from __future__ import annotations

import pytest

from core.backend import LocalBackend
from core.backend.interface import BackendUnavailableError
from core.registry import LanguageRegistry
from models.backend_models import BackendFailure, TranslateRequest
from models.config_models import Config


@pytest.fixture(scope="module")
def registry() -> LanguageRegistry:
    return LanguageRegistry.from_json()


@pytest.fixture
def backend(registry: LanguageRegistry) -> LocalBackend:
    backend = LocalBackend()
    backend.initialize(Config(), registry)
    return backend


def test_attributes(backend: LocalBackend) -> None:
    assert LocalBackend.fetch_backend_name() == "local"
    assert backend.backend_name == "local"
    assert backend.supports_bidirectional is False


@pytest.mark.asyncio
async def test_phrase_to_english(backend: LocalBackend) -> None:
    assert await backend.translate_text("baagunnava", "telugu", "english") == "how are you"


@pytest.mark.asyncio
async def test_phrase_from_english_uses_rendering(backend: LocalBackend) -> None:
    assert await backend.translate_text("how are you", "english", "hindi") == "kaise ho"


@pytest.mark.asyncio
async def test_rendering_of_another_language_is_recognized(backend: LocalBackend) -> None:
    assert await backend.translate_text("gracias", "spanish", "english") == "thank you"


@pytest.mark.asyncio
async def test_unknown_tokens_are_kept(backend: LocalBackend) -> None:
    assert await backend.translate_text("hello zzqx", "english", "telugu") == "namaskaram zzqx"


@pytest.mark.asyncio
async def test_native_script_input_is_romanized_first(backend: LocalBackend) -> None:
    assert await backend.translate_text("నమస్తే", "telugu", "english") == "hello"


@pytest.mark.asyncio
async def test_target_without_rendering_keeps_token(backend: LocalBackend) -> None:
    assert await backend.translate_text("namaste", "hindi", "klingon") == "namaste"


@pytest.mark.asyncio
async def test_uninitialized_backend_reports_failure() -> None:
    backend = LocalBackend()

    with pytest.raises(BackendUnavailableError):
        await backend.translate_text("hello", "english", "hindi")

    response = await backend.invoke(TranslateRequest(text="hello", source_language="english", target_language="hindi"))
    assert isinstance(response, BackendFailure)
    assert "not initialised" in response.error


@pytest.mark.asyncio
async def test_close_clears_correction_cache(backend: LocalBackend) -> None:
    backend.corrector.correct_word("namastey", "hindi")
    assert backend.corrector.cache_stats().size == 1

    await backend.close()

    assert backend.corrector.cache_stats().size == 0
