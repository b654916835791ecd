"""Semantic translation engine.

Resolves a route for each language pair (passthrough, direct hop, or a pivot through English),
executes it against the configured backend and caches every hop independently.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, ClassVar, Final

from core.backend.interface import TranslateExceptionError
from models.backend_models import (
    BackendFailure,
    BidirectionalRequest,
    BidirectionalResponse,
    TranslateRequest,
    TranslateResponse,
)
from models.re_models import LATIN_LETTER_PATTERN
from models.translation_models import BidirectionalResult, TranslationResult
from utils.logger_utils import LoggerUtils
from utils.string_utils import DEFAULT_PREFIX_LENGTH, StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable

    from core.backend.interface import TranslationBackend
    from core.cache.bounded_cache import BoundedCache
    from core.cache.inflight_manager import InFlightManager
    from core.registry.registry import LanguageRegistry
    from handlers.transliterator import Transliterator
    from models.backend_models import BackendResponse
    from models.language_models import Language
    from models.translation_models import RouteKind

__all__: list[str] = ["SemanticTranslationEngine", "Translator"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

CONFIDENCE_TRANSLATED: Final[float] = 0.85
CONFIDENCE_PASSTHROUGH: Final[float] = 1.0
CONFIDENCE_FAILED: Final[float] = 0.0


def _has_native_letters(text: str) -> bool:
    return any(ch.isalpha() and not LATIN_LETTER_PATTERN.match(ch) for ch in text)


class Translator:
    """Executes the route of one language pair.

    Attributes:
        source (Language): Source language.
        target (Language): Target language.
        route (RouteKind): 'passthrough', 'from-english', 'to-english', 'direct' or 'pivot'.
    """

    def __init__(
        self, engine: SemanticTranslationEngine, source: Language, target: Language, route: RouteKind
    ) -> None:
        self._engine: SemanticTranslationEngine = engine
        self.source: Language = source
        self.target: Language = target
        self.route: RouteKind = route

    def __repr__(self) -> str:
        return f"<Translator {self.source.code}->{self.target.code} route={self.route}>"

    async def translate_meaning(self, text: str) -> str:
        """Translate the meaning of ``text``.

        Raises:
            TranslateExceptionError: If a backend hop fails.
        """
        translated, _english = await self.run(text)
        return translated

    async def run(self, text: str) -> tuple[str, str | None]:
        """Execute the route and return the output with its English form, when the route has one.

        Raises:
            TranslateExceptionError: If a backend hop fails.
        """
        engine: SemanticTranslationEngine = self._engine
        if self.route == "passthrough":
            output: str = engine.render_native(text, self.target)
            return output, text if self.source.name == engine.pivot_language else None
        if self.route == "from-english":
            return await engine.hop(text, self.source, self.target), text
        if self.route == "to-english":
            english: str = await engine.hop(text, self.source, self.target)
            return english, english
        if self.route == "direct":
            return await engine.hop(text, self.source, self.target), None

        # Pivot hops are strictly sequential
        english = await engine.hop(text, self.source, engine.english)
        return await engine.hop(english, engine.english, self.target), english


class SemanticTranslationEngine:
    """Routes and caches meaning translation between registered languages.

    Args:
        registry (LanguageRegistry): Supported languages; must contain English.
        backend (TranslationBackend): Backend answering the hops.
        transliterator (Transliterator): Renders Latin output in native scripts.
        cache (BoundedCache[str] | None): Hop cache; None disables caching.
        text_prefix (int): Number of leading characters of the text used in cache keys.
        inflight (InFlightManager[str] | None): Coalesces identical concurrent hops.

    Attributes:
        BATCH_CONCURRENCY (int): Default number of concurrent translations in ``translate_batch``.
    """

    BATCH_CONCURRENCY: ClassVar[int] = 4

    def __init__(
        self,
        registry: LanguageRegistry,
        backend: TranslationBackend,
        transliterator: Transliterator,
        cache: BoundedCache[str] | None = None,
        *,
        text_prefix: int = DEFAULT_PREFIX_LENGTH,
        inflight: InFlightManager[str] | None = None,
        pivot_language: str = "english",
    ) -> None:
        self.registry: LanguageRegistry = registry
        self.backend: TranslationBackend = backend
        self.transliterator: Transliterator = transliterator
        self.cache: BoundedCache[str] | None = cache
        self.text_prefix: int = text_prefix
        self.inflight: InFlightManager[str] | None = inflight
        self.pivot_language: str = pivot_language
        self.backend_calls: int = 0

        english: Language | None = registry.get(pivot_language)
        if english is None:
            msg: str = f"The language registry does not contain the pivot language '{pivot_language}'"
            raise ValueError(msg)
        self.english: Language = english

    def resolve_route(self, source: Language, target: Language) -> RouteKind:
        """Pick the route for a language pair; the first matching rule wins."""
        if source.code == target.code:
            return "passthrough"
        if source.code == self.english.code:
            return "from-english"
        if target.code == self.english.code:
            return "to-english"
        if source.is_latin and target.is_latin:
            return "direct"
        return "pivot"

    def get_translator(self, source_code: str, target_code: str) -> Translator | None:
        """Return a translator for the pair, or None when either language is unknown."""
        source: Language | None = self.registry.get(source_code)
        target: Language | None = self.registry.get(target_code)
        if source is None or target is None:
            return None
        return Translator(self, source, target, self.resolve_route(source, target))

    def cache_key(self, text: str, source: Language, target: Language) -> str:
        return f"{source.code}:{target.code}:{StringUtils.text_prefix(text, self.text_prefix)}"

    def render_native(self, text: str, target: Language) -> str:
        """Transliterate Latin-only text into the target's native script; other text is unchanged."""
        if target.is_latin or not LATIN_LETTER_PATTERN.search(text) or _has_native_letters(text):
            return text
        return self.transliterator.to_native_script(text, target.name)

    async def hop(self, text: str, source: Language, target: Language) -> str:
        """One cached backend translation.

        Raises:
            TranslateExceptionError: If the backend reports a failure.
        """
        key: str = self.cache_key(text, source, target)
        if self.cache is not None and (cached := self.cache.get(key)) is not None:
            logger.debug("Hop cache hit: %s", key[:32])
            return cached

        producer: bool = False
        if self.inflight is not None:
            try:
                shared: str | None = await self.inflight.mark_inflight_start(key)
            except TimeoutError as err:
                logger.debug("Computing hop after in-flight wait failed: %s", err)
            else:
                if shared is not None:
                    return shared
                producer = self.inflight.is_initialized

        try:
            result: str = await self._call_backend(text, source, target)
        except Exception as err:
            if producer and self.inflight is not None:
                await self.inflight.store_inflight_exception(key, err)
            raise

        if self.cache is not None:
            self.cache.set(key, result)
        if producer and self.inflight is not None:
            await self.inflight.store_inflight_result(key, result)
        return result

    async def _call_backend(self, text: str, source: Language, target: Language) -> str:
        self.backend_calls += 1
        response: BackendResponse = await self.backend.invoke(
            TranslateRequest(text=text, source_language=source.name, target_language=target.name)
        )
        if isinstance(response, BackendFailure):
            raise TranslateExceptionError(response.error)
        if not isinstance(response, TranslateResponse):
            msg: str = f"Unexpected backend response: {type(response).__name__}"
            raise TranslateExceptionError(msg)
        if text.strip() and not response.translated_text.strip():
            msg = "Backend returned an empty translation"
            raise TranslateExceptionError(msg)

        logger.debug("Hop %s -> %s: '%s' -> '%s'", source.name, target.name, text, response.translated_text)
        return self.render_native(response.translated_text, target)

    async def translate(self, text: str, source: str, target: str) -> TranslationResult:
        """Translate the meaning of ``text``; never raises.

        Args:
            text (str): Text to translate.
            source (str): Source language code, name or alias.
            target (str): Target language code, name or alias.

        Returns:
            TranslationResult: The result; on failure the original text with ``error`` set.
        """
        text = StringUtils.ensure_str(text)
        source_lang: Language | None = self.registry.get(source)
        if source_lang is None:
            return TranslationResult.failed(text, source, target, f"Source language not supported: {source}")
        target_lang: Language | None = self.registry.get(target)
        if target_lang is None:
            return TranslationResult.failed(text, source, target, f"Target language not supported: {target}")

        translator = Translator(self, source_lang, target_lang, self.resolve_route(source_lang, target_lang))
        if not text.strip():
            return TranslationResult(
                text=text,
                original_text=text,
                is_translated=False,
                source_language=source_lang.name,
                target_language=target_lang.name,
                confidence=CONFIDENCE_PASSTHROUGH,
                route="passthrough",
            )

        try:
            output, english = await translator.run(text)
        except Exception as err:  # noqa: BLE001
            if isinstance(err, TranslateExceptionError):
                logger.warning("Translation %s -> %s failed: %s", source_lang.name, target_lang.name, err)
            else:
                logger.error("Unexpected error in translation %s -> %s: %s", source_lang.name, target_lang.name, err)
            return TranslationResult(
                text=text,
                original_text=text,
                is_translated=False,
                source_language=source_lang.name,
                target_language=target_lang.name,
                confidence=CONFIDENCE_FAILED,
                error=str(err) or type(err).__name__,
                route=translator.route,
            )

        route: RouteKind = translator.route
        if route == "passthrough":
            if output != text:
                route = "transliterate"
            confidence: float = CONFIDENCE_PASSTHROUGH
        else:
            confidence = CONFIDENCE_TRANSLATED

        return TranslationResult(
            text=output,
            original_text=text,
            is_translated=output != text,
            source_language=source_lang.name,
            target_language=target_lang.name,
            english_pivot=english,
            confidence=confidence,
            route=route,
        )

    async def translate_bidirectional(self, text: str, sender: str, receiver: str) -> BidirectionalResult:
        """Build the sender view, receiver view and shared English core of one message.

        Backends with a native bidirectional mode answer in one round trip; otherwise the views are
        composed from hops. Any failure echoes the input. Never raises.
        """
        text = StringUtils.ensure_str(text)
        sender_lang: Language | None = self.registry.get(sender)
        receiver_lang: Language | None = self.registry.get(receiver)
        if sender_lang is None:
            return BidirectionalResult.echo(text, f"Source language not supported: {sender}")
        if receiver_lang is None:
            return BidirectionalResult.echo(text, f"Target language not supported: {receiver}")
        if not text.strip():
            return BidirectionalResult.echo(text)

        if self.backend.supports_bidirectional:
            return await self._remote_bidirectional(text, sender_lang, receiver_lang)
        return await self._composed_bidirectional(text, sender_lang, receiver_lang)

    async def _remote_bidirectional(self, text: str, sender: Language, receiver: Language) -> BidirectionalResult:
        self.backend_calls += 1
        response: BackendResponse = await self.backend.invoke(
            BidirectionalRequest(text=text, sender_language=sender.name, receiver_language=receiver.name)
        )
        if isinstance(response, BidirectionalResponse):
            return BidirectionalResult(
                sender_view=response.sender_view,
                receiver_view=response.receiver_view,
                english_core=response.english_core,
                was_transliterated=response.was_transliterated,
                was_translated=response.was_translated,
            )
        error: str = response.error if isinstance(response, BackendFailure) else "Unexpected backend response"
        logger.warning("Bidirectional request %s -> %s failed: %s", sender.name, receiver.name, error)
        return BidirectionalResult.echo(text, error)

    async def _composed_bidirectional(self, text: str, sender: Language, receiver: Language) -> BidirectionalResult:
        sender_view: str = self.render_native(text, sender)

        english_core: str = text
        if sender.code != self.english.code:
            to_english: TranslationResult = await self.translate(text, sender.code, self.english.code)
            if to_english.error:
                return BidirectionalResult.echo(text, to_english.error)
            english_core = to_english.text

        if receiver.code == self.english.code:
            receiver_view: str = english_core
        elif receiver.code == sender.code:
            receiver_view = sender_view
        else:
            to_receiver: TranslationResult = await self.translate(text, sender.code, receiver.code)
            if to_receiver.error:
                return BidirectionalResult.echo(text, to_receiver.error)
            receiver_view = to_receiver.text

        return BidirectionalResult(
            sender_view=sender_view,
            receiver_view=receiver_view,
            english_core=english_core,
            was_transliterated=sender_view != text,
            was_translated=receiver_view != text,
        )

    async def translate_batch(
        self, items: Iterable[tuple[str, str, str]], *, concurrency: int | None = None
    ) -> list[TranslationResult]:
        """Translate ``(text, source, target)`` items with bounded concurrency, preserving order."""
        semaphore = asyncio.Semaphore(max(1, concurrency or self.BATCH_CONCURRENCY))

        async def _run(item: tuple[str, str, str]) -> TranslationResult:
            async with semaphore:
                return await self.translate(*item)

        return list(await asyncio.gather(*(_run(item) for item in items)))

    def cache_stats(self) -> dict[str, int]:
        """Return ``size``, ``max_size``, ``hits`` and ``misses`` of the hop cache."""
        if self.cache is None:
            return {"size": 0, "max_size": 0, "hits": 0, "misses": 0}
        stats = self.cache.stats()
        return {"size": stats.size, "max_size": stats.max_size, "hits": stats.hits, "misses": stats.misses}

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()
            logger.info("Translation cache cleared")
