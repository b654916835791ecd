from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from core.backend import LocalBackend
from core.backend.interface import BackendUnavailableError, TranslationBackend
from core.cache.bounded_cache import BoundedCache
from core.correction import PhoneticCorrector
from core.input import InputNormalizer
from core.pipeline import MessagePipeline
from core.registry import LanguageRegistry
from core.trans.engine import SemanticTranslationEngine
from handlers.transliterator import Transliterator
from models.config_models import Config
from models.message_models import MessageViews
from models.re_models import LATIN_LETTER_PATTERN, SCRIPT_PATTERNS

if TYPE_CHECKING:
    from models.backend_models import BidirectionalRequest, BidirectionalResponse


class FailingBackend(TranslationBackend):
    @staticmethod
    def fetch_backend_name() -> str:
        return ""

    def initialize(self, config: Config, registry: LanguageRegistry) -> None:
        _ = config, registry

    async def translate_text(self, text: str, source_language: str, target_language: str) -> str:
        msg = "backend offline"
        raise BackendUnavailableError(msg)

    async def bidirectional(self, request: BidirectionalRequest) -> BidirectionalResponse:
        msg = "backend offline"
        raise BackendUnavailableError(msg)

    async def close(self) -> None:
        pass


@pytest.fixture(scope="module")
def registry() -> LanguageRegistry:
    return LanguageRegistry.from_json()


def make_pipeline(registry: LanguageRegistry, backend: TranslationBackend | None = None) -> MessagePipeline:
    corrector = PhoneticCorrector()
    if backend is None:
        backend = LocalBackend()
        backend.initialize(Config(), registry)
    engine = SemanticTranslationEngine(registry, backend, Transliterator(registry), BoundedCache(100))
    return MessagePipeline(InputNormalizer(registry, corrector), corrector, engine, registry)


@pytest.fixture
def pipeline(registry: LanguageRegistry) -> MessagePipeline:
    return make_pipeline(registry)


def _is_telugu(text: str) -> bool:
    return SCRIPT_PATTERNS["Telugu"].search(text) is not None and LATIN_LETTER_PATTERN.search(text) is None


@pytest.mark.asyncio
async def test_romanized_telugu_to_english(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("bagunnava", "telugu", "english")

    assert _is_telugu(views.sender.main)
    assert views.sender.english == "how are you"
    assert views.receiver.main == "how are you"
    assert views.receiver.english == "how are you"
    assert views.metadata.original_text == "bagunnava"
    assert views.metadata.was_transliterated is True
    assert views.metadata.was_translated is True
    assert views.metadata.sender_language == "telugu"
    assert views.metadata.receiver_language == "english"


@pytest.mark.asyncio
async def test_languages_are_resolved_by_code(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("bagunnava", "te", "en")

    assert views.receiver.main == "how are you"
    assert views.metadata.sender_language == "telugu"


@pytest.mark.asyncio
async def test_correction_can_be_disabled(registry: LanguageRegistry) -> None:
    pipeline: MessagePipeline = make_pipeline(registry)
    pipeline.correction_enabled = False

    views: MessageViews = await pipeline.process("bagunnava", "telugu", "english")

    # Uncorrected spelling is still a catalog spelling
    assert views.receiver.main == "how are you"


@pytest.mark.asyncio
async def test_mixed_code_message(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("Bagunnava bro?", "telugu", "english")

    assert views.receiver.main == "how are you bro?"
    assert views.sender.english == "how are you bro?"
    assert views.metadata.original_text == "Bagunnava bro?"


@pytest.mark.asyncio
async def test_empty_input_gives_empty_views(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("  \u200b ", "telugu", "english")

    assert views == MessageViews.empty("telugu", "english")
    assert pipeline.engine.backend_calls == 0


@pytest.mark.asyncio
async def test_same_language_english(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("hello", "english", "en")

    assert views.sender.main == views.receiver.main == "hello"
    assert views.sender.english == "hello"
    assert views.metadata.was_translated is False
    assert views.metadata.was_transliterated is False


@pytest.mark.asyncio
async def test_same_language_non_english_has_no_gloss(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("namaste", "hindi", "hindi")

    assert views.sender.main == views.receiver.main == "namaste"
    assert views.sender.english == ""


@pytest.mark.asyncio
async def test_emoji_message_gets_description(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("👍", "telugu", "english")

    assert views.sender.main == views.receiver.main == "👍"
    assert views.sender.english == "thumbs up"
    assert views.metadata.was_translated is False


@pytest.mark.asyncio
async def test_backend_failure_echoes_input(registry: LanguageRegistry, caplog: pytest.LogCaptureFixture) -> None:
    pipeline: MessagePipeline = make_pipeline(registry, FailingBackend())

    with caplog.at_level("WARNING"):
        views: MessageViews = await pipeline.process("hola amigo", "spanish", "english")

    assert views.sender.main == views.receiver.main == views.sender.english == "hola amigo"
    assert views.metadata.was_translated is False
    assert "Message sent in original language" in caplog.text


@pytest.mark.asyncio
async def test_unexpected_error_echoes_input(pipeline: MessagePipeline, monkeypatch: pytest.MonkeyPatch) -> None:
    async def broken(*args, **kwargs) -> None:
        _ = args, kwargs
        msg = "boom"
        raise RuntimeError(msg)

    monkeypatch.setattr(pipeline.engine, "translate_bidirectional", broken)

    views: MessageViews = await pipeline.process("hola", "spanish", "english")

    assert views.receiver.main == "hola"
    assert views.receiver.english == "hola"


@pytest.mark.asyncio
async def test_preview(pipeline: MessagePipeline) -> None:
    preview = await pipeline.preview("bagunnava", "telugu", "english")

    assert _is_telugu(preview.preview)
    assert preview.english == "how are you"


@pytest.mark.asyncio
async def test_view_for_selects_half_and_direction(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("hello", "english", "arabic")

    reader = pipeline.view_for(views, "arabic")
    writer = pipeline.view_for(views, "english")

    assert reader.main == "marhaba"
    assert reader.english == "hello"
    assert reader.is_own_message is False
    assert reader.direction == "rtl"
    assert writer.main == "hello"
    assert writer.is_own_message is True
    assert writer.direction == "ltr"


@pytest.mark.asyncio
async def test_view_for_explicit_sender_flag(pipeline: MessagePipeline) -> None:
    views: MessageViews = await pipeline.process("hello", "english", "english")

    assert pipeline.view_for(views, "english", is_sender=False).is_own_message is False


def test_needs_translation(pipeline: MessagePipeline) -> None:
    assert pipeline.needs_translation("telugu", "english") is True
    assert pipeline.needs_translation("te", "Telugu") is False


@pytest.mark.asyncio
async def test_process_batch_preserves_order(pipeline: MessagePipeline) -> None:
    results: list[MessageViews] = await pipeline.process_batch(
        [("hello", "english", "hindi"), ("", "telugu", "english"), ("bagunnava", "telugu", "english")]
    )

    assert [views.metadata.original_text for views in results] == ["hello", "", "bagunnava"]
    assert results[0].receiver.main == "नमस्ते"
    assert results[1].receiver.main == ""
    assert results[2].receiver.main == "how are you"
