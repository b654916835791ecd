"""Dictionary-free spelling correction for romanized chat input.

A word is compared, after phonetic normalization, against the known spellings of a small catalog
of semantic classes (greeting, how-are-you, thanks, good) and replaced by the closest spelling
when it is close enough. Per-language overrides fix well-known misspellings before the catalog
is consulted. Results are memoized per ``word:language`` in a bounded cache.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from core.cache.bounded_cache import BoundedCache
from core.correction.edit_distance import edit_distance
from core.correction.phonetic_rules import (
    ENGLISH_WORDS,
    LANGUAGE_OVERRIDES,
    LANGUAGE_PHONETIC_RULES,
    PATTERN_CATALOG,
    PHONETIC_VARIATIONS,
    UNIVERSAL_DIGRAPH_RULES,
    PatternClass,
)
from models.correction_models import PatternMatch, Suggestion, TextCorrection, WordCorrection
from models.re_models import LATIN_LETTER_PATTERN, TOKEN_SPLIT_PATTERN
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from models.cache_models import CachePolicy, CacheStatistics

__all__: list[str] = ["PhoneticCorrector", "generate_variants", "phonetic_normalize"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_LANGUAGE_KEY: Final[str] = "default"
MIN_WORD_LENGTH: Final[int] = 2
MAX_VARIANTS: Final[int] = 10

_REPEAT_PATTERN: Final[re.Pattern[str]] = re.compile(r"(.)\1{2,}")


def phonetic_normalize(text: str, language: str | None = None) -> str:
    """Map a romanized word onto a coarse phonetic form.

    Language rules run first, then runs of three or more identical characters are cut to two,
    then the universal digraph rules apply.

    Args:
        text (str): Word to normalize.
        language (str | None): Language name selecting extra rules.

    Returns:
        str: The normalized form, lowercase.
    """
    normalized: str = StringUtils.ensure_str(text).lower().strip()
    for source, target in LANGUAGE_PHONETIC_RULES.get(_language_key(language), {}).items():
        normalized = normalized.replace(source, target)
    normalized = _REPEAT_PATTERN.sub(r"\1\1", normalized)
    for source, target in UNIVERSAL_DIGRAPH_RULES:
        normalized = normalized.replace(source, target)
    return normalized


def generate_variants(word: str, max_variants: int = MAX_VARIANTS) -> list[str]:
    """Return spellings reachable by swapping one commonly confused letter group.

    For each group both the all-occurrences and the first-occurrence replacement are produced.
    """
    word = StringUtils.ensure_str(word).lower()
    variants: list[str] = []
    for source, replacements in PHONETIC_VARIATIONS.items():
        if source not in word:
            continue
        for replacement in replacements:
            for candidate in (word.replace(source, replacement), word.replace(source, replacement, 1)):
                if candidate and candidate != word and candidate not in variants:
                    variants.append(candidate)
                    if len(variants) >= max_variants:
                        return variants
    return variants


def _language_key(language: str | None) -> str:
    if not language:
        return DEFAULT_LANGUAGE_KEY
    return language.strip().lower() or DEFAULT_LANGUAGE_KEY


def _compact(text: str) -> str:
    return "".join(StringUtils.strip_punctuation(part) for part in text.lower().split())


def _match_case(template: str, word: str) -> str:
    """Give ``word`` the capitalization style of ``template``."""
    if len(template) > 1 and template.isupper():
        return word.upper()
    if template[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


class PhoneticCorrector:
    """Heuristic corrector for romanized words.

    Every word of two or more letters is matched within ``max_distance`` phonetic edits. Common
    English words are known spellings and stay unchanged.

    Attributes:
        max_distance (int): Largest distance accepted for a single word.
        max_variant_distance (int): Largest distance accepted when matching generated variants.
    """

    def __init__(
        self,
        max_distance: int = 2,
        max_variant_distance: int = 3,
        cache_size: int = 1000,
        cache_policy: CachePolicy = "fifo",
    ) -> None:
        self.max_distance: int = max(0, max_distance)
        self.max_variant_distance: int = max(0, max_variant_distance)
        self._cache: BoundedCache[WordCorrection] = BoundedCache(cache_size, cache_policy, name="CorrectionCache")
        self._catalog_forms: dict[str, list[tuple[PatternClass, str, str]]] = {}

    def _catalog(self, language: str | None) -> list[tuple[PatternClass, str, str]]:
        """Return (class, spelling, normalized spelling) triples for one language, built lazily."""
        key: str = _language_key(language)
        forms: list[tuple[PatternClass, str, str]] | None = self._catalog_forms.get(key)
        if forms is None:
            forms = [
                (pattern, spelling, phonetic_normalize(spelling, key))
                for pattern in PATTERN_CATALOG
                for spelling in pattern.spellings
            ]
            self._catalog_forms[key] = forms
        return forms

    def _closest(self, word: str, language: str | None, bound: int) -> tuple[PatternClass, str, int] | None:
        """Find the first catalog spelling with the smallest phonetic distance within ``bound``."""
        normalized: str = phonetic_normalize(word, language)
        best: tuple[PatternClass, str, int] | None = None
        for pattern, spelling, form in self._catalog(language):
            distance: int = edit_distance(normalized, form)
            if distance > bound:
                continue
            if best is None or distance < best[2]:
                best = (pattern, spelling, distance)
                if distance == 0:
                    break
        return best

    def correct_word(self, word: str, language: str | None = None) -> WordCorrection:
        """Correct a single romanized word.

        Args:
            word (str): Word as typed.
            language (str | None): Sender language name, selects rules and overrides.

        Returns:
            WordCorrection: The suggestion; unchanged words have confidence 1.0 and distance 0.
        """
        word = StringUtils.ensure_str(word)
        if len(word) < MIN_WORD_LENGTH or not LATIN_LETTER_PATTERN.search(word):
            return WordCorrection(original=word, corrected=word)

        lowered: str = word.lower()
        cache_key: str = f"{lowered}:{_language_key(language)}"
        cached: WordCorrection | None = self._cache.get(cache_key)
        if cached is None:
            cached = self._compute(lowered, language)
            self._cache.set(cache_key, cached)

        if not cached.changed:
            return WordCorrection(original=word, corrected=word)
        return WordCorrection(
            original=word, corrected=cached.corrected, confidence=cached.confidence, distance=cached.distance
        )

    def _compute(self, word: str, language: str | None) -> WordCorrection:
        override: str | None = LANGUAGE_OVERRIDES.get(_language_key(language), {}).get(word)
        if override is not None:
            distance: int = edit_distance(word, override)
            logger.debug("Override correction: '%s' -> '%s' (%s)", word, override, language)
            return WordCorrection(
                original=word, corrected=override, confidence=self._confidence(distance), distance=distance
            )

        if word in ENGLISH_WORDS:
            return WordCorrection(original=word, corrected=word)

        best: tuple[PatternClass, str, int] | None = self._closest(word, language, self.max_distance)
        if best is None or best[1] == word:
            return WordCorrection(original=word, corrected=word)

        spelling: str = best[1]
        distance = edit_distance(word, spelling, max_length_delta=-1)
        logger.debug("Catalog correction: '%s' -> '%s' [%s, distance %d]", word, spelling, best[0].name, distance)
        return WordCorrection(
            original=word, corrected=spelling, confidence=self._confidence(distance), distance=distance
        )

    @staticmethod
    def _confidence(distance: int) -> float:
        if distance <= 0:
            return 1.0
        return max(0.5, 1.0 - 0.15 * distance)

    def correct_text(self, text: str, language: str | None = None) -> TextCorrection:
        """Correct every word of a text, keeping whitespace and punctuation runs in place.

        Args:
            text (str): Input text.
            language (str | None): Sender language name.

        Returns:
            TextCorrection: Corrected text and the corrections that changed something.
        """
        parts: list[str] = []
        corrections: list[WordCorrection] = []
        for token in TOKEN_SPLIT_PATTERN.split(StringUtils.ensure_str(text)):
            if not token or TOKEN_SPLIT_PATTERN.fullmatch(token):
                parts.append(token)
                continue
            correction: WordCorrection = self.correct_word(token, language)
            if not correction.changed:
                parts.append(token)
                continue
            corrected: str = _match_case(token, correction.corrected)
            parts.append(corrected)
            corrections.append(
                WordCorrection(
                    original=token, corrected=corrected, confidence=correction.confidence, distance=correction.distance
                )
            )
        return TextCorrection(text="".join(parts), corrections=tuple(corrections))

    def match_pattern(
        self, word: str, language: str | None = None, *, include_renderings: bool = False
    ) -> PatternMatch | None:
        """Recognize a word or short phrase as a member of a semantic class.

        Spaces and punctuation are ignored, so 'kaise ho' matches the spelling 'kaiseho'.

        Args:
            word (str): Word or phrase.
            language (str | None): Language name selecting phonetic rules.
            include_renderings (bool): Also accept the per-language renderings of each class.

        Returns:
            PatternMatch | None: The match, or None when nothing is close enough.
        """
        compact: str = _compact(StringUtils.ensure_str(word))
        if len(compact) < MIN_WORD_LENGTH:
            return None

        best: tuple[PatternClass, str, int] | None = self._closest(compact, language, self.max_distance)
        if include_renderings and (best is None or best[2] > 0):
            normalized: str = phonetic_normalize(compact, language)
            for pattern in PATTERN_CATALOG:
                for rendering in (pattern.english, *pattern.renderings.values()):
                    if phonetic_normalize(_compact(rendering), language) == normalized:
                        return PatternMatch(pattern=pattern.name, spelling=rendering, english=pattern.english)
        if best is None:
            return None
        return PatternMatch(pattern=best[0].name, spelling=best[1], english=best[0].english, distance=best[2])

    def get_suggestions(self, word: str, language: str | None = None, limit: int = 5) -> list[Suggestion]:
        """Rank catalog spellings close to the word or to one of its phonetic variants.

        Args:
            word (str): Word to look up.
            language (str | None): Language name selecting phonetic rules.
            limit (int): Maximum number of suggestions.

        Returns:
            list[Suggestion]: Suggestions sorted by distance, then catalog order, without duplicates.
        """
        lowered: str = StringUtils.ensure_str(word).lower().strip()
        if len(lowered) < MIN_WORD_LENGTH:
            return []

        scored: dict[str, Suggestion] = {}
        candidates: list[tuple[str, int]] = [(phonetic_normalize(lowered, language), self.max_distance)]
        candidates += [
            (phonetic_normalize(variant, language), self.max_variant_distance)
            for variant in generate_variants(lowered)
        ]
        for candidate, bound in candidates:
            for pattern, spelling, form in self._catalog(language):
                distance: int = edit_distance(candidate, form)
                if distance > bound:
                    continue
                current: Suggestion | None = scored.get(spelling)
                if current is None or distance < current.distance:
                    scored[spelling] = Suggestion(word=spelling, distance=distance, pattern=pattern.name)

        order: dict[str, int] = {spelling: index for index, (_, spelling, _) in enumerate(self._catalog(language))}
        ranked: list[Suggestion] = sorted(scored.values(), key=lambda s: (s.distance, order[s.word]))
        return ranked[: max(0, limit)]

    def apply_language_phonetics(self, text: str, language: str | None) -> str:
        """Apply the whole-word and phrase overrides of a language to free text."""
        text = StringUtils.ensure_str(text)
        overrides: dict[str, str] = LANGUAGE_OVERRIDES.get(_language_key(language), {})
        for wrong, right in overrides.items():
            pattern: re.Pattern[str] = re.compile(rf"\b{re.escape(wrong)}\b", re.IGNORECASE)
            text = pattern.sub(lambda m, r=right: _match_case(m.group(0), r), text)
        return text

    def correct_for_chat(self, text: str, language: str | None = None) -> str:
        """Apply language overrides, then word correction, and return the resulting text."""
        return self.correct_text(self.apply_language_phonetics(text, language), language).text

    def cache_stats(self) -> CacheStatistics:
        return self._cache.stats()

    def clear_cache(self) -> None:
        self._cache.clear()
