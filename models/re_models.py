"""Regular expressions for script detection and text tokenization.

Script ranges are ordered: the first matching entry of ``SCRIPT_PATTERNS`` is reported as the
detected script, so more specific blocks come before broad ones and Latin comes last.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Final

__all__: list[str] = [
    "LATIN_LETTER_PATTERN",
    "NON_WORD_PATTERN",
    "PRIVATE_USE_PATTERN",
    "REPLACEMENT_CHAR_PATTERN",
    "SCRIPT_PATTERNS",
    "TOKEN_SPLIT_PATTERN",
    "ZERO_WIDTH_PATTERN",
]

# Script name -> pattern matching any character of that script
SCRIPT_PATTERNS: Final[dict[str, Pattern[str]]] = {
    "Devanagari": re.compile(r"[\u0900-\u097F]"),
    "Telugu": re.compile(r"[\u0C00-\u0C7F]"),
    "Tamil": re.compile(r"[\u0B80-\u0BFF]"),
    "Kannada": re.compile(r"[\u0C80-\u0CFF]"),
    "Malayalam": re.compile(r"[\u0D00-\u0D7F]"),
    "Bengali": re.compile(r"[\u0980-\u09FF]"),
    "Gujarati": re.compile(r"[\u0A80-\u0AFF]"),
    "Gurmukhi": re.compile(r"[\u0A00-\u0A7F]"),
    "Odia": re.compile(r"[\u0B00-\u0B7F]"),
    "Arabic": re.compile(r"[\u0600-\u06FF\u0750-\u077F]"),
    "Hebrew": re.compile(r"[\u0590-\u05FF]"),
    "Thai": re.compile(r"[\u0E00-\u0E7F]"),
    "Han": re.compile(r"[\u4E00-\u9FFF\u3400-\u4DBF]"),
    "Japanese": re.compile(r"[\u3040-\u30FF]"),
    "Hangul": re.compile(r"[\uAC00-\uD7AF\u1100-\u11FF]"),
    "Cyrillic": re.compile(r"[\u0400-\u04FF]"),
    "Greek": re.compile(r"[\u0370-\u03FF]"),
    "Myanmar": re.compile(r"[\u1000-\u109F]"),
    "Lao": re.compile(r"[\u0E80-\u0EFF]"),
    "Khmer": re.compile(r"[\u1780-\u17FF]"),
    "Sinhala": re.compile(r"[\u0D80-\u0DFF]"),
    "Ethiopic": re.compile(r"[\u1200-\u137F]"),
    "Latin": re.compile(r"[A-Za-z\u00C0-\u024F\u1E00-\u1EFF]"),
}

# Latin letters including accented forms
LATIN_LETTER_PATTERN: Final[Pattern[str]] = SCRIPT_PATTERNS["Latin"]

# Zero-width space, word joiner, BOM and soft hyphen. ZWNJ (U+200C) and ZWJ (U+200D) are kept.
ZERO_WIDTH_PATTERN: Final[Pattern[str]] = re.compile(r"[\u200B\u2060\uFEFF\u00AD]")

# Private Use Area code points left behind by legacy (non-Unicode) font encodings
PRIVATE_USE_PATTERN: Final[Pattern[str]] = re.compile(r"[\uE000-\uF8FF]")

# Two or more replacement characters: a mis-decoded byte stream
REPLACEMENT_CHAR_PATTERN: Final[Pattern[str]] = re.compile(r"\uFFFD.*\uFFFD", re.DOTALL)

# Split keeping separators: whitespace runs and sentence punctuation are their own tokens
# Example: "Bagunnava bro?" -> ["Bagunnava", " ", "bro", "?", ""]
TOKEN_SPLIT_PATTERN: Final[Pattern[str]] = re.compile(r"(\s+|[.,!?;:])")

NON_WORD_PATTERN: Final[Pattern[str]] = re.compile(r"[^\w]")
