from __future__ import annotations

import unicodedata
from typing import Final

from models.re_models import NON_WORD_PATTERN, ZERO_WIDTH_PATTERN

__all__: list[str] = ["DEFAULT_PREFIX_LENGTH", "StringUtils"]

DEFAULT_PREFIX_LENGTH: Final[int] = 100


class StringUtils:
    """Static helpers for the text handling shared by the pipeline stages."""

    @staticmethod
    def ensure_str(value: str | None) -> str:
        """Return the value as a string; None becomes an empty string.

        Whitespace is preserved on purpose. Callers decide whether to trim.

        Args:
            value (str | None): Value to coerce.

        Returns:
            str: The value as a string.
        """
        if not isinstance(value, str):
            value = str(value) if value is not None else ""
        return value

    @staticmethod
    def compress_blanks(value: str) -> str:
        """Collapse whitespace runs into single spaces and trim both ends.

        Args:
            value (str): The string to compress.

        Returns:
            str: The compressed string.
        """
        value = StringUtils.ensure_str(value)
        return " ".join(value.split())

    @staticmethod
    def normalize_text(text: str) -> str:
        """Apply Unicode NFC normalization.

        Args:
            text (str): Text to normalize.

        Returns:
            str: Normalized text.
        """
        return unicodedata.normalize("NFC", StringUtils.ensure_str(text))

    @staticmethod
    def strip_invisible(text: str) -> str:
        """Remove zero-width artifacts while keeping ZWJ and ZWNJ.

        Joiners change glyph shaping in Indic and Arabic scripts, so they are content.

        Args:
            text (str): Text to clean.

        Returns:
            str: Text without zero-width spaces, word joiners, BOMs and soft hyphens.
        """
        return ZERO_WIDTH_PATTERN.sub("", StringUtils.ensure_str(text))

    @staticmethod
    def strip_diacritics(text: str) -> str:
        """Drop combining marks after NFD decomposition (e.g. 'bāgunnāvā' -> 'bagunnava')."""
        decomposed: str = unicodedata.normalize("NFD", StringUtils.ensure_str(text))
        return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    @staticmethod
    def strip_punctuation(token: str) -> str:
        """Remove every non-word character from a single token."""
        return NON_WORD_PATTERN.sub("", StringUtils.ensure_str(token))

    @staticmethod
    def text_prefix(text: str, length: int = DEFAULT_PREFIX_LENGTH) -> str:
        """Return the first ``length`` characters used in cache keys. Non-positive length means no limit."""
        text = StringUtils.ensure_str(text)
        if length <= 0:
            return text
        return text[:length]
