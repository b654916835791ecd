"""Romaji to Katakana conversion and back.

Forward conversion is a longest-match walk over a JSON dictionary of romanized units, with the
usual special cases for the moraic nasal ('ン') and gemination ('ッ'). Reverse conversion inverts
the same dictionary; Hiragana input is folded to Katakana first.

Examples:
    "konnichiwa" -> "コンニチワ"
    "arigatou" -> "アリガトウ"
    "kitte" -> "キッテ"
"""

from __future__ import annotations

import json
from json import JSONDecodeError
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Final

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["DEFAULT_ROMAJI_FILE", "Romaji"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_ROMAJI_FILE: Final[Path] = Path(__file__).with_name("romaji.json")

_HIRAGANA_START: Final[int] = 0x3041
_HIRAGANA_END: Final[int] = 0x3096
_KANA_OFFSET: Final[int] = 0x60


class _JSONLoader:
    @staticmethod
    def load(dic_name: Path) -> dict[str, str]:
        with dic_name.open(mode="r", encoding="utf-8") as fhdl:
            return json.load(fhdl)


class Romaji:
    """Convert romanized Japanese to Katakana and Katakana back to romaji.

    Attributes:
        tree (dict[str, str]): Romanized unit -> Katakana.
        reverse_tree (dict[str, str]): Katakana unit -> preferred romanization (first key wins).
        max_unit_len (int): Longest romanized unit.
        max_kana_len (int): Longest Katakana unit.
    """

    tree: ClassVar[dict[str, str]] = {}
    reverse_tree: ClassVar[dict[str, str]] = {}
    max_unit_len: ClassVar[int] = 0
    max_kana_len: ClassVar[int] = 0

    @classmethod
    def load(cls, dic_name: Path = DEFAULT_ROMAJI_FILE) -> None:
        """Load a romanization dictionary from a JSON file.

        Args:
            dic_name (Path): Path to the JSON dictionary file.

        Raises:
            OSError: If the dictionary file cannot be read.
            RuntimeError: If the dictionary file is not valid JSON format.
        """
        logger.info("file open '%s' as read-only", dic_name)
        msg: str
        try:
            tree: dict[str, str] = _JSONLoader.load(dic_name)
        except OSError as err:
            logger.debug(err)
            msg = f"failed to load '{dic_name}'"
            raise OSError(msg) from err
        except JSONDecodeError as err:
            logger.debug(err)
            msg = f"'{dic_name}' is an invalid JSON format"
            raise RuntimeError(msg) from err

        cls.tree = tree
        cls.max_unit_len = max((len(k) for k in tree), default=0)
        reverse: dict[str, str] = {}
        for romaji, kana in tree.items():
            if romaji.isalpha():
                reverse.setdefault(kana, romaji)
        reverse["ン"] = "n"
        cls.reverse_tree = reverse
        cls.max_kana_len = max((len(k) for k in reverse), default=0)
        logger.info("loaded dictionary '%s'", dic_name)

    @classmethod
    def ensure_loaded(cls) -> None:
        if not cls.tree:
            cls.load()

    @classmethod
    def is_unit(cls, tokens: str, s: int = 0) -> bool:
        return any(tokens[s : s + i] in cls.tree for i in range(cls.max_unit_len, 0, -1))

    @classmethod
    def get_unit(cls, tokens: str, s: int = 0) -> tuple[str, int]:
        """Convert the longest romanized unit at position ``s``.

        Returns:
            tuple[str, int]: (katakana, next_index); ('', s) when nothing matches.
        """
        for i in range(cls.max_unit_len, 0, -1):
            if tokens[s : s + i] in cls.tree:
                return cls.tree[tokens[s : s + i]], s + i
        return "", s

    @classmethod
    def is_hatsuon(cls, tokens: str, s: int = 0) -> bool:
        """Check whether the position is a moraic nasal.

        'n' converts at the end of the string or before a non-vowel; 'm' converts before b, m or p.
        """
        if s >= len(tokens):
            return False
        ch: str = tokens[s]
        if ch == "n":
            return s + 1 == len(tokens) or tokens[s + 1] not in "aeiouy" or tokens[s + 1] == "'"
        if ch == "m":
            return s + 1 < len(tokens) and tokens[s + 1] in "bmp"
        return False

    @classmethod
    def is_sokuon(cls, tokens: str, s: int = 0) -> bool:
        # 'n' and 'm' never geminate
        return s + 1 < len(tokens) and tokens[s].isalpha() and tokens[s] not in "nm" and tokens[s] == tokens[s + 1]

    @classmethod
    def get_kana(cls, tokens: str, s: int = 0) -> str:
        """Convert romanized text to Katakana starting from position ``s``.

        Characters that are not part of any unit are copied through unchanged.
        """
        if s >= len(tokens) or s < 0:
            return ""

        kana: str = ""
        res: list[str] = []
        idx: int = s
        while idx < len(tokens):
            if cls.is_unit(tokens, idx):
                kana, idx = cls.get_unit(tokens, idx)
            elif cls.is_hatsuon(tokens, idx):
                kana, idx = "ン", idx + 1
            elif cls.is_sokuon(tokens, idx):
                kana, idx = "ッ", idx + 1
            else:
                kana, idx = tokens[idx], idx + 1
            res.append(kana)
        return "".join(res)

    @classmethod
    def to_katakana(cls, text: str) -> str:
        """Convert a romanized string (case-insensitive) to Katakana."""
        cls.ensure_loaded()
        return cls.get_kana(text.lower(), 0)

    @staticmethod
    def fold_hiragana(text: str) -> str:
        """Map Hiragana code points onto their Katakana counterparts."""
        return "".join(
            chr(ord(ch) + _KANA_OFFSET) if _HIRAGANA_START <= ord(ch) <= _HIRAGANA_END else ch for ch in text
        )

    @classmethod
    def to_romaji(cls, text: str) -> str:
        """Convert Katakana (or Hiragana) to romaji.

        'ッ' doubles the first consonant of the next unit and 'ー' repeats the previous vowel.
        Anything that is not kana is copied through.
        """
        cls.ensure_loaded()
        tokens: str = cls.fold_hiragana(text)
        res: list[str] = []
        geminate: bool = False
        idx: int = 0
        while idx < len(tokens):
            ch: str = tokens[idx]
            if ch == "ッ":
                geminate = True
                idx += 1
                continue
            if ch == "ー":
                if res and res[-1][-1:] in "aeiou":
                    res.append(res[-1][-1])
                idx += 1
                continue
            romaji: str = ch
            step: int = 1
            for i in range(cls.max_kana_len, 0, -1):
                unit: str = tokens[idx : idx + i]
                if unit in cls.reverse_tree:
                    romaji, step = cls.reverse_tree[unit], i
                    break
            if geminate and romaji[:1].isalpha() and romaji[0] not in "aeiou":
                romaji = romaji[0] + romaji
            geminate = False
            res.append(romaji)
            idx += step
        return "".join(res)
