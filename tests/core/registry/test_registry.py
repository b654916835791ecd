from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from core.registry import ENGLISH, LanguageRegistry

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(scope="module")
def registry() -> LanguageRegistry:
    return LanguageRegistry.from_json()


def test_bundled_data_is_loaded(registry: LanguageRegistry) -> None:
    assert len(registry) > 80
    assert registry.all()[0].name == "hindi"
    assert all(language.name == language.name.lower() for language in registry)


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("te", "telugu"),
        ("TE", "telugu"),
        ("Telugu", "telugu"),
        ("  telugu ", "telugu"),
        ("తెలుగు", "telugu"),
        ("bangla", "bengali"),
        ("farsi", "persian"),
        ("nihongo", "japanese"),
        ("tel", "telugu"),
    ],
)
def test_get_resolves_codes_names_aliases_and_substrings(registry: LanguageRegistry, query: str, expected: str) -> None:
    language = registry.get(query)

    assert language is not None
    assert language.name == expected


@pytest.mark.parametrize("query", ["", "   ", "xx", "klingon", None])
def test_get_returns_none_for_unknown(registry: LanguageRegistry, query: str | None) -> None:
    assert registry.get(query) is None


def test_short_queries_do_not_use_substring_match(registry: LanguageRegistry) -> None:
    # 'ug' is part of 'telugu' but too short for a substring lookup
    assert registry.get("ug") is None


def test_language_attributes(registry: LanguageRegistry) -> None:
    telugu = registry.get("te")
    arabic = registry.get("arabic")
    english = registry.get(ENGLISH)

    assert telugu is not None
    assert telugu.script == "native"
    assert telugu.script_name == "Telugu"
    assert telugu.text_direction == "ltr"
    assert arabic is not None
    assert arabic.rtl is True
    assert arabic.text_direction == "rtl"
    assert english is not None
    assert english.is_latin is True


def test_english_and_same_language(registry: LanguageRegistry) -> None:
    assert registry.is_english("en") is True
    assert registry.is_english("English") is True
    assert registry.is_english("telugu") is False
    assert registry.is_same_language("te", "Telugu") is True
    assert registry.is_same_language("oriya", "or") is True
    assert registry.is_same_language("hindi", "telugu") is False
    assert registry.is_same_language("klingon", "Klingon") is True


def test_canonical_name_and_contains(registry: LanguageRegistry) -> None:
    assert registry.canonical_name("HI") == "hindi"
    assert registry.canonical_name("klingon") is None
    assert "ta" in registry
    assert 42 not in registry


def test_search_returns_every_match(registry: LanguageRegistry) -> None:
    names: list[str] = [language.name for language in registry.search("konkani")]

    assert names == ["konkani", "goan konkani"]
    assert registry.search("  ") == []


@pytest.mark.parametrize("query", [None, 42])
def test_search_ignores_non_string_queries(registry: LanguageRegistry, query: object) -> None:
    assert registry.search(query) == []  # type: ignore[arg-type]


def test_script_lookups(registry: LanguageRegistry) -> None:
    devanagari = registry.default_language_for_script("Devanagari")
    cyrillic = registry.default_language_for_script("Cyrillic")

    assert devanagari is not None
    assert devanagari.name == "hindi"
    assert cyrillic is not None
    assert cyrillic.name == "russian"
    assert {language.name for language in registry.languages_for_script("Devanagari")} >= {"hindi", "marathi"}
    assert registry.default_language_for_script("Runic") is None


def test_custom_aliases_are_resolved() -> None:
    registry = LanguageRegistry.from_json(aliases={"Tenglish": "Telugu"})

    language = registry.get("tenglish")
    assert language is not None
    assert language.name == "telugu"


def test_initialize_skips_malformed_records() -> None:
    registry = LanguageRegistry.initialize(
        [
            {"code": "te", "name": "Telugu", "nativeName": "తెలుగు"},
            {"code": "", "name": "Nameless"},
            {"name": "No code"},
            "not a record",
            {"code": "te", "name": "Duplicate"},
        ]
    )

    assert len(registry) == 1
    telugu = registry.get("te")
    assert telugu is not None
    # Script inferred from the native name
    assert telugu.script_name == "Telugu"


def test_initialize_with_non_iterable_source_is_empty() -> None:
    registry = LanguageRegistry.initialize(42)  # type: ignore[arg-type]

    assert len(registry) == 0
    assert registry.get("te") is None


def test_from_json_with_missing_or_invalid_file(tmp_path: Path) -> None:
    broken: Path = tmp_path / "languages.json"
    broken.write_text("{", encoding="utf-8")
    not_a_list: Path = tmp_path / "object.json"
    not_a_list.write_text(json.dumps({"code": "te"}), encoding="utf-8")

    assert len(LanguageRegistry.from_json(tmp_path / "missing.json")) == 0
    assert len(LanguageRegistry.from_json(broken)) == 0
    assert len(LanguageRegistry.from_json(not_a_list)) == 0
