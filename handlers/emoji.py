"""Emoji handling for script detection and glossing.

Prior to version 2.14.1, the emoji module defined emoji-related data as variables.
From version 2.14.1 onwards, this data is stored in a separate data file and loaded as needed.
Therefore, when freezing the CLI into an executable, the ``emoji.unicode_codes`` JSON data files
must be bundled with it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import emoji
from packaging.version import Version

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging


__all__: list[str] = ["EmojiHandler"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

if Version(emoji.__version__) < Version("2.14.1"):
    logger.warning(
        "The version of the emoji module currently in use is %s. Version 2.14.1 or later is required.",
        emoji.__version__,
    )


class EmojiHandler:
    """Detects, removes and describes emoji.

    Emoji are not letters of any script, so they are stripped before the native / Latin character
    tests of the input normalizer.
    """

    @staticmethod
    def strip_emoji(text: str) -> str:
        """Return the text with every emoji removed."""
        return emoji.replace_emoji(text, replace="")

    @staticmethod
    def has_emoji(text: str) -> bool:
        return emoji.emoji_count(text) > 0

    @staticmethod
    def is_purely_emoji(text: str) -> bool:
        """Determine if the text consists only of emojis.

        Whitespace characters are ignored during the check. Empty text is not purely emoji.

        Args:
            text (str): The text to be evaluated.

        Returns:
            bool: True if the text consists only of emojis (excluding whitespace), False otherwise.
        """
        compact: str = "".join(text.split())
        return bool(compact) and emoji.purely_emoji(compact)

    @staticmethod
    def describe(text: str) -> str:
        """Replace each emoji by its English short name, e.g. '👍' -> 'thumbs up'.

        Used for the English gloss of messages that consist only of emoji.
        """
        return emoji.replace_emoji(
            text, replace=lambda _emoji_char, emj_data: emj_data["en"][1:-1].replace("_", " ")
        ).strip()
