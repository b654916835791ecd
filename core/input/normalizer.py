"""Input normalization and input-method classification.

Every raw input event is canonicalized (NFC, zero-width artifacts removed, blanks collapsed) and
classified into one of the 12 input methods. Classification is heuristic; it only decides how the
text is routed and never rejects input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Final

from core.correction.corrector import PhoneticCorrector
from core.correction.phonetic_rules import ENGLISH_WORDS
from handlers.emoji import EmojiHandler
from models.input_models import InputAnalysis, InputMethod
from models.re_models import (
    LATIN_LETTER_PATTERN,
    PRIVATE_USE_PATTERN,
    REPLACEMENT_CHAR_PATTERN,
    SCRIPT_PATTERNS,
)
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from core.registry.registry import LanguageRegistry
    from models.language_models import Language

__all__: list[str] = ["ENGLISH_WORDS", "InputNormalizer", "needs_transliteration"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Script name -> candidate languages, in preference order
SCRIPT_LANGUAGES: Final[dict[str, tuple[str, ...]]] = {
    "Devanagari": ("hindi", "marathi", "nepali"),
    "Telugu": ("telugu",),
    "Tamil": ("tamil",),
    "Kannada": ("kannada",),
    "Malayalam": ("malayalam",),
    "Bengali": ("bengali", "assamese"),
    "Gujarati": ("gujarati",),
    "Gurmukhi": ("punjabi",),
    "Odia": ("odia",),
    "Arabic": ("arabic", "urdu", "persian"),
    "Hebrew": ("hebrew",),
    "Thai": ("thai",),
    "Han": ("chinese",),
    "Japanese": ("japanese",),
    "Hangul": ("korean",),
    "Cyrillic": ("russian", "ukrainian"),
    "Greek": ("greek",),
    "Myanmar": ("burmese",),
    "Lao": ("lao",),
    "Khmer": ("khmer",),
    "Sinhala": ("sinhala",),
    "Ethiopic": ("amharic", "tigrinya"),
    "Latin": ("english",),
}

CONFIDENCE_NATIVE: Final[float] = 0.95
CONFIDENCE_ENGLISH: Final[float] = 0.9
CONFIDENCE_MIXED: Final[float] = 0.7
CONFIDENCE_LEGACY: Final[float] = 0.5
CONFIDENCE_DEFAULT: Final[float] = 0.8


def needs_transliteration(analysis: InputAnalysis, target_language: str | None = None) -> bool:
    """Return True when romanized content must be rendered in a native script.

    Pure native text and pure English never need it; transliteration and code-mixed input do.
    """
    _ = target_language
    if analysis.has_native_chars and not analysis.has_latin_chars:
        return False
    return analysis.method in ("transliteration", "mixed-code", "voice-mixed")


class InputNormalizer:
    """Canonicalizes raw text and classifies how it was typed.

    Attributes:
        VOICE_BURST_CHARS (int): Characters added in one event above which input counts as dictated.
        ENGLISH_RATIO (float): Share of known English words from which Latin text counts as English.
    """

    VOICE_BURST_CHARS: ClassVar[int] = 15
    ENGLISH_RATIO: ClassVar[float] = 0.3

    def __init__(
        self,
        registry: LanguageRegistry | None = None,
        corrector: PhoneticCorrector | None = None,
        *,
        voice_burst_chars: int | None = None,
        english_ratio: float | None = None,
    ) -> None:
        self.registry: LanguageRegistry | None = registry
        self.corrector: PhoneticCorrector = corrector or PhoneticCorrector()
        self.voice_burst_chars: int = self.VOICE_BURST_CHARS if voice_burst_chars is None else voice_burst_chars
        self.english_ratio: float = self.ENGLISH_RATIO if english_ratio is None else english_ratio

    @staticmethod
    def normalize(text: str) -> str:
        """NFC-normalize, drop zero-width artifacts (keeping ZWJ / ZWNJ), collapse blanks and trim."""
        return StringUtils.compress_blanks(StringUtils.strip_invisible(StringUtils.normalize_text(text)))

    @staticmethod
    def detect_scripts(text: str) -> list[str]:
        """Return every script present in the text, in detection-table order."""
        return [name for name, pattern in SCRIPT_PATTERNS.items() if pattern.search(text)]

    @staticmethod
    def has_legacy_encoding(text: str) -> bool:
        """Private-use code points or two or more U+FFFD indicate a legacy font encoding."""
        return bool(PRIVATE_USE_PATTERN.search(text) or REPLACEMENT_CHAR_PATTERN.search(text))

    @staticmethod
    def _tokens(text: str) -> list[str]:
        return [token for token in (StringUtils.strip_punctuation(word) for word in text.lower().split()) if token]

    def english_word_ratio(self, text: str) -> float:
        """Fraction of whitespace-separated tokens found in the English word list; 1.0 for no tokens."""
        tokens: list[str] = self._tokens(text)
        if not tokens:
            return 1.0
        return sum(1 for token in tokens if token in ENGLISH_WORDS) / len(tokens)

    def is_english_text(self, text: str) -> bool:
        return self.english_word_ratio(text) >= self.english_ratio

    def is_code_switched(self, text: str) -> bool:
        """Latin text mixing an English word with a recognized romanized non-English word."""
        tokens: list[str] = self._tokens(text)
        if len(tokens) < 2:
            return False
        has_english: bool = any(token in ENGLISH_WORDS for token in tokens)
        has_romanized: bool = any(
            token not in ENGLISH_WORDS and self.corrector.match_pattern(token) is not None for token in tokens
        )
        return has_english and has_romanized

    def _is_burst(self, text: str, previous_text: str) -> bool:
        added: str = text[len(previous_text) :]
        return len(added) > self.voice_burst_chars and " " in added

    @staticmethod
    def _char_flags(text: str) -> tuple[bool, bool]:
        """Return (has_native, has_latin) for text with emoji already removed."""
        has_latin: bool = bool(LATIN_LETTER_PATTERN.search(text))
        has_native: bool = any(
            pattern.search(text) for name, pattern in SCRIPT_PATTERNS.items() if name != "Latin"
        ) or any(ch.isalpha() and not LATIN_LETTER_PATTERN.match(ch) for ch in text)
        return has_native, has_latin

    def detect_input_method(self, text: str, previous_text: str = "") -> InputMethod:
        """Classify already-normalized text.

        Args:
            text (str): Normalized text.
            previous_text (str): Content of the input box before this event.

        Returns:
            InputMethod: The detected input method.
        """
        if not text:
            return "pure-english"
        if self.has_legacy_encoding(text):
            return "font-based"

        has_native, has_latin = self._char_flags(EmojiHandler.strip_emoji(text))
        burst: bool = self._is_burst(text, previous_text)

        if has_native and not has_latin:
            return "voice-single" if burst else "native-script"
        if has_latin and not has_native:
            if self.is_code_switched(text):
                return "mixed-code"
            if self.is_english_text(text):
                return "voice-single" if burst else "pure-english"
            return "transliteration"
        if has_latin and has_native:
            return "voice-mixed" if burst else "mixed-code"
        return "pure-english"

    def _candidate_languages(self, scripts: list[str], user_language: str | None) -> tuple[str, ...]:
        languages: list[str] = []
        for script in scripts:
            for name in SCRIPT_LANGUAGES.get(script, ()):
                if name not in languages:
                    languages.append(name)

        user: Language | None = self.registry.get(user_language) if self.registry and user_language else None
        if user is not None and user.script_name in scripts:
            if user.name in languages:
                languages.remove(user.name)
            languages.insert(0, user.name)
        return tuple(languages) or ("unknown",)

    def analyze(self, text: str, user_language: str | None = None, previous_text: str = "") -> InputAnalysis:
        """Normalize and classify one input event.

        Args:
            text (str): Raw text.
            user_language (str | None): The typing user's language, used to order candidates.
            previous_text (str): Content of the input box before this event (burst detection).

        Returns:
            InputAnalysis: The analysis; never raises.
        """
        original: str = StringUtils.ensure_str(text)
        normalized: str = self.normalize(original)
        previous: str = self.normalize(StringUtils.ensure_str(previous_text))

        method: InputMethod = self.detect_input_method(normalized, previous)
        scripts: list[str] = self.detect_scripts(normalized)
        has_native, has_latin = self._char_flags(EmojiHandler.strip_emoji(normalized))
        is_legacy: bool = self.has_legacy_encoding(original)
        code_switched: bool = has_latin and not has_native and self.is_code_switched(normalized)

        confidence: float = CONFIDENCE_DEFAULT
        if method == "native-script":
            confidence = CONFIDENCE_NATIVE
        elif method == "pure-english" and self.is_english_text(normalized):
            confidence = CONFIDENCE_ENGLISH
        elif method == "mixed-code":
            confidence = CONFIDENCE_MIXED
        if is_legacy:
            confidence = CONFIDENCE_LEGACY

        analysis = InputAnalysis(
            method=method,
            original_text=original,
            normalized_text=normalized,
            detected_script=scripts[0] if scripts else "unknown",
            scripts=tuple(scripts),
            has_native_chars=has_native,
            has_latin_chars=has_latin,
            is_mixed=(has_native and has_latin) or code_switched,
            is_legacy_font=is_legacy,
            confidence=confidence,
            languages=self._candidate_languages(scripts, user_language),
        )
        logger.debug(
            "Input analyzed: method=%s script=%s confidence=%.2f", analysis.method, analysis.detected_script, confidence
        )
        return analysis
