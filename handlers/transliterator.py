"""Latin <-> native script transliteration.

Brahmic scripts go through ``indic_transliteration.sanscript`` (ITRANS in, IAST out), Cyrillic
and Greek through character tables, Japanese through the Romaji converter. The transliterator is
a best-effort adapter: any failure returns the input unchanged.

Examples:
    to_native_script("baagunnava", "telugu") -> "బాగున్నవ"
    to_native_script("privet", "russian") -> "привет"
    reverse_to_latin("నమస్కారం", "telugu") -> "namaskaram"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from indic_transliteration import sanscript

from handlers.katakana import Romaji
from models.re_models import LATIN_LETTER_PATTERN
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from core.registry.registry import LanguageRegistry

__all__: list[str] = ["Transliterator"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Language name -> sanscript scheme
BRAHMIC_SCHEMES: Final[dict[str, str]] = {
    "hindi": sanscript.DEVANAGARI,
    "marathi": sanscript.DEVANAGARI,
    "nepali": sanscript.DEVANAGARI,
    "sanskrit": sanscript.DEVANAGARI,
    "konkani": sanscript.DEVANAGARI,
    "maithili": sanscript.DEVANAGARI,
    "bhojpuri": sanscript.DEVANAGARI,
    "dogri": sanscript.DEVANAGARI,
    "bengali": sanscript.BENGALI,
    "assamese": sanscript.BENGALI,
    "telugu": sanscript.TELUGU,
    "tamil": sanscript.TAMIL,
    "kannada": sanscript.KANNADA,
    "malayalam": sanscript.MALAYALAM,
    "gujarati": sanscript.GUJARATI,
    "punjabi": sanscript.GURMUKHI,
    "odia": sanscript.ORIYA,
}

CYRILLIC_LANGUAGES: Final[frozenset[str]] = frozenset(
    {"russian", "ukrainian", "bulgarian", "serbian", "belarusian", "kazakh", "mongolian", "kyrgyz", "tajik"}
)
GREEK_LANGUAGES: Final[frozenset[str]] = frozenset({"greek"})
JAPANESE_LANGUAGES: Final[frozenset[str]] = frozenset({"japanese"})

_CYRILLIC_TO_LATIN: Final[dict[str, str]] = {
    "ё": "yo",
    "ж": "zh",
    "ц": "ts",
    "ч": "ch",
    "ш": "sh",
    "щ": "shch",
    "ъ": "",
    "ы": "y",
    "ь": "",
    "э": "e",
    "ю": "yu",
    "я": "ya",
    "а": "a",
    "б": "b",
    "в": "v",
    "г": "g",
    "д": "d",
    "е": "e",
    "з": "z",
    "и": "i",
    "й": "y",
    "к": "k",
    "л": "l",
    "м": "m",
    "н": "n",
    "о": "o",
    "п": "p",
    "р": "r",
    "с": "s",
    "т": "t",
    "у": "u",
    "ф": "f",
    "х": "kh",
    "і": "i",
    "ї": "yi",
    "є": "ye",
    "ґ": "g",
}

# Longest units first
_LATIN_TO_CYRILLIC: Final[dict[str, str]] = {
    "shch": "щ",
    "zh": "ж",
    "ts": "ц",
    "ch": "ч",
    "sh": "ш",
    "kh": "х",
    "yu": "ю",
    "ya": "я",
    "yo": "ё",
    "a": "а",
    "b": "б",
    "v": "в",
    "g": "г",
    "d": "д",
    "e": "е",
    "z": "з",
    "i": "и",
    "j": "й",
    "k": "к",
    "l": "л",
    "m": "м",
    "n": "н",
    "o": "о",
    "p": "п",
    "r": "р",
    "s": "с",
    "t": "т",
    "u": "у",
    "f": "ф",
    "h": "х",
    "c": "к",
    "w": "в",
    "x": "кс",
    "q": "к",
}

_GREEK_TO_LATIN: Final[dict[str, str]] = {
    "ου": "ou",
    "α": "a",
    "ά": "a",
    "β": "v",
    "γ": "g",
    "δ": "d",
    "ε": "e",
    "έ": "e",
    "ζ": "z",
    "η": "i",
    "ή": "i",
    "θ": "th",
    "ι": "i",
    "ί": "i",
    "κ": "k",
    "λ": "l",
    "μ": "m",
    "ν": "n",
    "ξ": "x",
    "ο": "o",
    "ό": "o",
    "π": "p",
    "ρ": "r",
    "σ": "s",
    "ς": "s",
    "τ": "t",
    "υ": "y",
    "ύ": "y",
    "φ": "f",
    "χ": "ch",
    "ψ": "ps",
    "ω": "o",
    "ώ": "o",
}

_LATIN_TO_GREEK: Final[dict[str, str]] = {
    "th": "θ",
    "ch": "χ",
    "ps": "ψ",
    "ou": "ου",
    "a": "α",
    "b": "β",
    "v": "β",
    "g": "γ",
    "d": "δ",
    "e": "ε",
    "z": "ζ",
    "h": "η",
    "i": "ι",
    "k": "κ",
    "c": "κ",
    "q": "κ",
    "l": "λ",
    "m": "μ",
    "n": "ν",
    "x": "ξ",
    "o": "ο",
    "p": "π",
    "r": "ρ",
    "s": "σ",
    "t": "τ",
    "y": "υ",
    "u": "υ",
    "f": "φ",
    "w": "ω",
    "j": "ι",
}


def _map_longest(text: str, table: dict[str, str]) -> str:
    """Replace table keys in ``text`` by longest match, keeping capitalization of the first letter."""
    max_len: int = max((len(k) for k in table), default=1)
    res: list[str] = []
    idx: int = 0
    while idx < len(text):
        for size in range(max_len, 0, -1):
            chunk: str = text[idx : idx + size]
            lowered: str = chunk.lower()
            if len(chunk) == size and lowered in table:
                mapped: str = table[lowered]
                res.append(mapped[:1].upper() + mapped[1:] if chunk[:1].isupper() else mapped)
                idx += size
                break
        else:
            res.append(text[idx])
            idx += 1
    return "".join(res)


class Transliterator:
    """Script conversion for the languages the pipeline can render natively.

    Attributes:
        registry (LanguageRegistry | None): Resolves codes and aliases to language names.
    """

    def __init__(self, registry: LanguageRegistry | None = None) -> None:
        self.registry: LanguageRegistry | None = registry

    def _resolve(self, language: str | None) -> str:
        if not language:
            return ""
        if self.registry is not None and (name := self.registry.canonical_name(language)) is not None:
            return name
        return language.strip().lower()

    def supports(self, language: str | None) -> bool:
        """Return True when a Latin <-> native mapping exists for the language."""
        name: str = self._resolve(language)
        groups = (BRAHMIC_SCHEMES, CYRILLIC_LANGUAGES, GREEK_LANGUAGES, JAPANESE_LANGUAGES)
        return any(name in group for group in groups)

    def to_native_script(self, latin_text: str, language_name: str | None) -> str:
        """Render Latin text in the native script of a language.

        Args:
            latin_text (str): Romanized text.
            language_name (str | None): Target language name, code or alias.

        Returns:
            str: Native-script text, or the input unchanged when no mapping applies.
        """
        text: str = StringUtils.ensure_str(latin_text)
        if not text.strip() or not LATIN_LETTER_PATTERN.search(text):
            return text
        name: str = self._resolve(language_name)
        try:
            if name in BRAHMIC_SCHEMES:
                return sanscript.transliterate(text.lower(), sanscript.ITRANS, BRAHMIC_SCHEMES[name])
            if name in CYRILLIC_LANGUAGES:
                return self._latin_to_cyrillic(text)
            if name in GREEK_LANGUAGES:
                return self._latin_to_greek(text)
            if name in JAPANESE_LANGUAGES:
                return Romaji.to_katakana(text)
        except (KeyError, ValueError, TypeError, IndexError, OSError, RuntimeError) as err:
            logger.warning("Transliteration to '%s' failed: %s", name, err)
            return text
        logger.debug("No native-script mapping for '%s'", name)
        return text

    def reverse_to_latin(self, native_text: str, language_name: str | None) -> str:
        """Romanize native-script text.

        Args:
            native_text (str): Text in a native script.
            language_name (str | None): Source language name, code or alias.

        Returns:
            str: Plain ASCII-leaning romanization, or the input unchanged when no mapping applies.
        """
        text: str = StringUtils.ensure_str(native_text)
        if not text.strip():
            return text
        name: str = self._resolve(language_name)
        try:
            if name in BRAHMIC_SCHEMES:
                iast: str = sanscript.transliterate(text, BRAHMIC_SCHEMES[name], sanscript.IAST)
                return StringUtils.strip_diacritics(iast).lower()
            if name in CYRILLIC_LANGUAGES:
                return _map_longest(text, _CYRILLIC_TO_LATIN)
            if name in GREEK_LANGUAGES:
                return _map_longest(StringUtils.normalize_text(text), _GREEK_TO_LATIN)
            if name in JAPANESE_LANGUAGES:
                return Romaji.to_romaji(text)
        except (KeyError, ValueError, TypeError, IndexError, OSError, RuntimeError) as err:
            logger.warning("Romanization from '%s' failed: %s", name, err)
            return text
        logger.debug("No romanization mapping for '%s'", name)
        return text

    @staticmethod
    def _latin_to_cyrillic(text: str) -> str:
        converted: str = _map_longest(text, _LATIN_TO_CYRILLIC)
        # 'y' is 'й' after a vowel and 'ы' elsewhere
        res: list[str] = []
        for idx, ch in enumerate(converted):
            if ch.lower() != "y":
                res.append(ch)
                continue
            prev: str = converted[idx - 1].lower() if idx else ""
            mapped: str = "й" if prev and prev in "аеёиоуыэюя" else "ы"
            res.append(mapped.upper() if ch.isupper() else mapped)
        return "".join(res)

    @staticmethod
    def _latin_to_greek(text: str) -> str:
        converted: str = _map_longest(text, _LATIN_TO_GREEK)
        # Final sigma at word ends
        return "".join(
            "ς" if ch == "σ" and (idx + 1 == len(converted) or not converted[idx + 1].isalpha()) else ch
            for idx, ch in enumerate(converted)
        )

