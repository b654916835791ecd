"""Language registry: the single source of truth for supported languages.

The registry is built once from static records and is read-only afterwards. Lookups accept a
code, an English name or a native name (case-insensitive) and resolve in a fixed priority:
exact code, exact name or native name, alias, then substring. A bad data source never raises;
it produces an empty (or partial) registry and lookups return None.
"""

from __future__ import annotations

import json
from json import JSONDecodeError
from pathlib import Path
from typing import TYPE_CHECKING, Final

from models.language_models import Language, LanguageRecord, ScriptFamily
from models.re_models import SCRIPT_PATTERNS
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Iterator

__all__: list[str] = ["DEFAULT_DATA_FILE", "ENGLISH", "LANGUAGE_ALIASES", "LanguageRegistry"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_DATA_FILE: Final[Path] = Path(__file__).with_name("languages.json")

ENGLISH: Final[str] = "english"

# Minimum query length for substring matching
_MIN_SUBSTRING_QUERY: Final[int] = 3

RTL_SCRIPTS: Final[frozenset[str]] = frozenset({"Arabic", "Hebrew", "Thaana", "Syriac", "Nko"})

LANGUAGE_ALIASES: Final[dict[str, str]] = {
    "bangla": "bengali",
    "oriya": "odia",
    "farsi": "persian",
    "mandarin": "chinese",
    "hindustani": "hindi",
    "filipino": "tagalog",
    "panjabi": "punjabi",
    "sinhalese": "sinhala",
    "myanmar": "burmese",
    "hangul": "korean",
    "nihongo": "japanese",
}

# Script name -> language assumed when only the script is known
SCRIPT_FALLBACK: Final[dict[str, str]] = {
    "Devanagari": "hindi",
    "Bengali": "bengali",
    "Telugu": "telugu",
    "Tamil": "tamil",
    "Kannada": "kannada",
    "Malayalam": "malayalam",
    "Gujarati": "gujarati",
    "Gurmukhi": "punjabi",
    "Odia": "odia",
    "Arabic": "arabic",
    "Hebrew": "hebrew",
    "Thai": "thai",
    "Han": "chinese",
    "Japanese": "japanese",
    "Hangul": "korean",
    "Cyrillic": "russian",
    "Greek": "greek",
    "Myanmar": "burmese",
    "Lao": "lao",
    "Khmer": "khmer",
    "Sinhala": "sinhala",
    "Ethiopic": "amharic",
    "Latin": "english",
}


class LanguageRegistry:
    """Immutable lookup tables over the supported languages.

    Attributes:
        _languages (list[Language]): Languages in source order.
        _by_code (dict[str, Language]): Lowercase code -> language.
        _by_name (dict[str, Language]): Lowercase English and native names -> language.
        _aliases (dict[str, str]): Alternative name -> canonical name.
    """

    def __init__(self, languages: Iterable[Language] = (), aliases: dict[str, str] | None = None) -> None:
        self._languages: list[Language] = []
        self._by_code: dict[str, Language] = {}
        self._by_name: dict[str, Language] = {}
        self._aliases: dict[str, str] = dict(LANGUAGE_ALIASES)
        if aliases:
            self._aliases.update({k.strip().lower(): v.strip().lower() for k, v in aliases.items()})

        for language in languages:
            if language.code in self._by_code:
                logger.warning("Duplicate language code '%s' ignored (kept '%s')", language.code, language.name)
                continue
            self._languages.append(language)
            self._by_code[language.code] = language
            # Name collisions resolve to the first record in source order.
            self._by_name.setdefault(language.name, language)
            if language.native_name:
                self._by_name.setdefault(language.native_name, language)

    @classmethod
    def initialize(
        cls, source: Iterable[LanguageRecord] | None, *, aliases: dict[str, str] | None = None
    ) -> LanguageRegistry:
        """Build a registry from raw records.

        Records missing a code or a name are skipped. A source that is not iterable yields an
        empty registry.

        Args:
            source (Iterable[LanguageRecord] | None): Records with 'code', 'name', 'nativeName' and
                optional 'script' and 'rtl' keys.
            aliases (dict[str, str] | None): Extra alias -> canonical name mappings.

        Returns:
            LanguageRegistry: The built registry.
        """
        languages: list[Language] = []
        try:
            records: list[LanguageRecord] = list(source or [])
        except TypeError:
            logger.error("Language source is not iterable: %s", type(source).__name__)
            return cls(aliases=aliases)

        for record in records:
            language: Language | None = cls._build_language(record)
            if language is None:
                logger.debug("Skipping malformed language record: %r", record)
                continue
            languages.append(language)

        registry = cls(languages, aliases)
        logger.info("Language registry initialized with %d languages", len(registry))
        return registry

    @classmethod
    def from_json(cls, path: Path | None = None, *, aliases: dict[str, str] | None = None) -> LanguageRegistry:
        """Build a registry from a JSON array of records.

        Args:
            path (Path | None): JSON file. None loads the bundled data file.
            aliases (dict[str, str] | None): Extra alias mappings.

        Returns:
            LanguageRegistry: The built registry; empty if the file is missing or invalid.
        """
        data_file: Path = path or DEFAULT_DATA_FILE
        try:
            with data_file.open(mode="r", encoding="utf-8") as fhdl:
                records = json.load(fhdl)
        except OSError as err:
            logger.error("Failed to read language data '%s': %s", data_file, err)
            return cls(aliases=aliases)
        except JSONDecodeError as err:
            logger.error("'%s' is an invalid JSON format: %s", data_file, err)
            return cls(aliases=aliases)

        if not isinstance(records, list):
            logger.error("'%s' must contain a JSON array of language records", data_file)
            return cls(aliases=aliases)
        return cls.initialize(records, aliases=aliases)

    @staticmethod
    def _build_language(record: LanguageRecord) -> Language | None:
        if not isinstance(record, dict):
            return None
        code = record.get("code")
        name = record.get("name")
        if not isinstance(code, str) or not isinstance(name, str) or not code.strip() or not name.strip():
            return None

        native_name: str = str(record.get("nativeName") or record.get("native_name") or "").strip()
        script_name = record.get("script")
        if not isinstance(script_name, str) or not script_name.strip():
            script_name = LanguageRegistry._infer_script(native_name)
        script_name = script_name.strip()
        family: ScriptFamily = "latin" if script_name.lower() == "latin" else "native"
        rtl = record.get("rtl")
        if not isinstance(rtl, bool):
            rtl = script_name in RTL_SCRIPTS

        return Language(
            code=code.strip().lower(),
            name=name.strip().lower(),
            native_name=native_name.lower(),
            script=family,
            script_name=script_name,
            rtl=rtl,
        )

    @staticmethod
    def _infer_script(native_name: str) -> str:
        """Guess the script from the characters of the native name; Latin when nothing matches."""
        for script_name, pattern in SCRIPT_PATTERNS.items():
            if pattern.search(native_name):
                return script_name
        return "Latin"

    def __len__(self) -> int:
        return len(self._languages)

    def __iter__(self) -> Iterator[Language]:
        return iter(self._languages)

    def __contains__(self, code_or_name: object) -> bool:
        return isinstance(code_or_name, str) and self.get(code_or_name) is not None

    def all(self) -> list[Language]:
        """Return every language in source order."""
        return list(self._languages)

    def get(self, code_or_name: str | None) -> Language | None:
        """Look up a language by code, name, native name or alias.

        Args:
            code_or_name (str | None): Query, case-insensitive.

        Returns:
            Language | None: The first match by priority, or None.
        """
        if not isinstance(code_or_name, str):
            return None
        key: str = code_or_name.strip().lower()
        if not key:
            return None

        if key in self._by_code:
            return self._by_code[key]
        if key in self._by_name:
            return self._by_name[key]

        alias: str | None = self._aliases.get(key)
        if alias is not None:
            aliased: Language | None = self._by_code.get(alias) or self._by_name.get(alias)
            if aliased is not None:
                return aliased

        if len(key) < _MIN_SUBSTRING_QUERY:
            return None
        for language in self._languages:
            if key in language.name or (language.native_name and key in language.native_name):
                return language
        return None

    def search(self, query: str | None) -> list[Language]:
        """Return every language whose code, name or native name contains the query."""
        if not isinstance(query, str):
            return []
        key: str = query.strip().lower()
        if not key:
            return []
        return [
            language
            for language in self._languages
            if key in language.code or key in language.name or key in language.native_name
        ]

    def canonical_name(self, code_or_name: str | None) -> str | None:
        """Return the lowercase registry name used on the backend boundary."""
        language: Language | None = self.get(code_or_name)
        return language.name if language else None

    def is_english(self, code_or_name: str | None) -> bool:
        language: Language | None = self.get(code_or_name)
        if language is None:
            return isinstance(code_or_name, str) and code_or_name.strip().lower() in (ENGLISH, "en")
        return language.name == ENGLISH

    def is_same_language(self, first: str | None, second: str | None) -> bool:
        """Compare two identifiers after resolving codes, names and aliases.

        Unknown identifiers fall back to a case-insensitive string comparison.
        """
        first_lang: Language | None = self.get(first)
        second_lang: Language | None = self.get(second)
        if first_lang is not None and second_lang is not None:
            return first_lang.code == second_lang.code
        return (first or "").strip().lower() == (second or "").strip().lower()

    def default_language_for_script(self, script_name: str) -> Language | None:
        """Return the language assumed for text written in ``script_name``."""
        fallback: str | None = SCRIPT_FALLBACK.get(script_name)
        if fallback is not None and (language := self.get(fallback)) is not None:
            return language
        return next((language for language in self._languages if language.script_name == script_name), None)

    def languages_for_script(self, script_name: str) -> list[Language]:
        return [language for language in self._languages if language.script_name == script_name]
