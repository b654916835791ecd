import json
from pathlib import Path

import pytest

from handlers.katakana import DEFAULT_ROMAJI_FILE, Romaji


def _write_json(tmp_path: Path, obj, name="romaji.json") -> Path:
    p: Path = tmp_path / name
    p.write_text(json.dumps(obj, ensure_ascii=False), encoding="utf-8")
    return p


def teardown_function(_) -> None:
    # Clear state per test to avoid side effects.
    Romaji.tree.clear()
    Romaji.reverse_tree.clear()
    Romaji.max_unit_len = 0
    Romaji.max_kana_len = 0


def test_romaji_load_empty(tmp_path: Path) -> None:
    p: Path = _write_json(tmp_path, {})
    Romaji.load(p)
    assert Romaji.tree == {}
    assert Romaji.max_unit_len == 0
    assert Romaji.reverse_tree == {"ン": "n"}


def test_load_invalid_json_raises_runtime_error(tmp_path: Path) -> None:
    p: Path = tmp_path / "broken.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(RuntimeError):
        Romaji.load(p)


def test_load_missing_file_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(OSError, match="failed to load"):
        Romaji.load(tmp_path / "missing.json")


def test_get_kana_bounds() -> None:
    assert Romaji.get_kana("a", 1) == ""
    assert Romaji.get_kana("a", -1) == ""


def test_konnichiwa_and_kitte(tmp_path: Path) -> None:
    # Use a minimal dictionary to validate hatsuon and sokuon behavior.
    mapping: dict[str, str] = {
        "ko": "コ",
        "ni": "ニ",
        "chi": "チ",
        "wa": "ワ",
        "ki": "キ",
        "te": "テ",
    }
    p: Path = _write_json(tmp_path, mapping)
    Romaji.load(p)

    assert Romaji.get_kana("konnichiwa") == "コンニチワ"
    assert Romaji.get_kana("kitte") == "キッテ"


def test_hatsuon_and_sokuon_rules() -> None:
    # Hatsuon rules.
    assert Romaji.is_hatsuon("n", 0) is True  # Trailing n -> ン.
    assert Romaji.is_hatsuon("na", 0) is False  # n before a vowel is not hatsuon.
    assert Romaji.is_hatsuon("mb", 0) is True  # m before b -> ン.
    assert Romaji.is_hatsuon("ma", 0) is False
    # Sokuon rules.
    assert Romaji.is_sokuon("tt", 0) is True
    assert Romaji.is_sokuon("nn", 0) is False  # n is not sokuon.
    assert Romaji.is_sokuon("t", 0) is False


def test_unknown_characters_are_copied_through(tmp_path: Path) -> None:
    p: Path = _write_json(tmp_path, {"ka": "カ"})
    Romaji.load(p)

    assert Romaji.get_kana("ka!") == "カ!"


def test_default_dictionary_round_trip() -> None:
    Romaji.load(DEFAULT_ROMAJI_FILE)

    assert Romaji.to_katakana("Arigatou") == "アリガトウ"
    assert Romaji.to_romaji("コンニチワ") == "konnichiwa"
    assert Romaji.to_romaji("キッテ") == "kitte"


def test_to_romaji_folds_hiragana_and_long_vowels() -> None:
    Romaji.load(DEFAULT_ROMAJI_FILE)

    assert Romaji.fold_hiragana("ありがとう") == "アリガトウ"
    assert Romaji.to_romaji("ありがとう") == "arigatou"
    assert Romaji.to_romaji("カー") == "kaa"


def test_ensure_loaded_reads_default_dictionary() -> None:
    assert Romaji.tree == {}
    Romaji.ensure_loaded()
    assert Romaji.tree["ka"] == "カ"
