"""Text handling adapters for the meaning-pivot pipeline.

This package provides script conversion (Brahmic, Cyrillic, Greek and Romaji/Katakana), emoji
handling and asynchronous HTTP communication.
"""

from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp
from handlers.emoji import EmojiHandler
from handlers.katakana import Romaji
from handlers.transliterator import Transliterator

__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
    "EmojiHandler",
    "Romaji",
    "Transliterator",
]
