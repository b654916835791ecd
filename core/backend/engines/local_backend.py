"""Offline translation backend.

Recognizes greetings, well-being questions, thanks and approval in any supported language through
the phonetic pattern catalog, and renders them in the target language. Text outside the catalog is
passed through (romanized when it came in a native script).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.backend.interface import BackendAttributes, BackendUnavailableError, TranslationBackend
from core.correction.corrector import PhoneticCorrector
from core.correction.phonetic_rules import PATTERN_CATALOG
from core.registry.registry import ENGLISH
from handlers.transliterator import Transliterator
from models.re_models import LATIN_LETTER_PATTERN, TOKEN_SPLIT_PATTERN
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.correction.phonetic_rules import PatternClass
    from core.registry.registry import LanguageRegistry
    from models.config_models import Config
    from models.correction_models import PatternMatch

__all__: list[str] = ["LocalBackend"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class LocalBackend(TranslationBackend):
    """Catalog-based backend that needs no network access."""

    def __init__(self) -> None:
        super().__init__()
        self._corrector: PhoneticCorrector | None = None
        self._transliterator: Transliterator | None = None
        self._patterns: dict[str, PatternClass] = {pattern.name: pattern for pattern in PATTERN_CATALOG}

    @staticmethod
    def fetch_backend_name() -> str:
        return "local"

    def initialize(self, config: Config, registry: LanguageRegistry) -> None:
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.backend_attributes = BackendAttributes(name="local", supports_bidirectional=False)
        self._corrector = PhoneticCorrector(
            max_distance=config.CORRECTION.MAX_DISTANCE,
            max_variant_distance=config.CORRECTION.MAX_VARIANT_DISTANCE,
            cache_size=config.CACHE.MAX_CORRECTIONS,
            cache_policy=config.CACHE.POLICY,
        )
        self._transliterator = Transliterator(registry)

    @property
    def corrector(self) -> PhoneticCorrector:
        if self._corrector is None:
            msg = "The local backend is not initialised"
            raise BackendUnavailableError(msg)
        return self._corrector

    @property
    def transliterator(self) -> Transliterator:
        if self._transliterator is None:
            msg = "The local backend is not initialised"
            raise BackendUnavailableError(msg)
        return self._transliterator

    def _romanize(self, text: str, language: str) -> str:
        if language == ENGLISH or not any(ch.isalpha() and not LATIN_LETTER_PATTERN.match(ch) for ch in text):
            return text
        return self.transliterator.reverse_to_latin(text, language)

    def _render(self, match: PatternMatch, target_language: str) -> str | None:
        if target_language == ENGLISH:
            return match.english
        pattern: PatternClass | None = self._patterns.get(match.pattern)
        if pattern is None:
            return None
        return pattern.renderings.get(target_language)

    async def translate_text(self, text: str, source_language: str, target_language: str) -> str:
        """Render catalog phrases in the target language, whole phrase first, then word by word."""
        romanized: str = self._romanize(text, source_language)

        whole: PatternMatch | None = self.corrector.match_pattern(romanized, source_language, include_renderings=True)
        if whole is not None and (rendered := self._render(whole, target_language)) is not None:
            logger.debug("Local phrase match: '%s' -> '%s' (%s)", text, rendered, whole.pattern)
            return rendered

        parts: list[str] = []
        for token in TOKEN_SPLIT_PATTERN.split(romanized):
            if not token or TOKEN_SPLIT_PATTERN.fullmatch(token):
                parts.append(token)
                continue
            match: PatternMatch | None = self.corrector.match_pattern(token, source_language, include_renderings=True)
            rendered_token: str | None = self._render(match, target_language) if match else None
            parts.append(rendered_token if rendered_token is not None else token)
        return "".join(parts)

    async def close(self) -> None:
        logger.debug("'%s': 'termination process'", self.__class__.__name__)
        if self._corrector is not None:
            self._corrector.clear_cache()
