"""Models for translation routing and results.

Defines TranslationResult returned by the semantic engine and BidirectionalResult used to build
message views.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__: list[str] = ["BidirectionalResult", "RouteKind", "TranslationResult"]

type RouteKind = Literal[
    "passthrough",
    "transliterate",
    "from-english",
    "to-english",
    "direct",
    "pivot",
    "unsupported",
]


@dataclass(frozen=True)
class TranslationResult:
    """Result of one meaning translation.

    The text is always usable: on failure it is the original text and ``error`` says why.
    A missing ``error`` does not imply that translation happened (same-language passthrough is a
    success with ``is_translated=False``).

    Attributes:
        text (str): Output text.
        original_text (str): Input text.
        is_translated (bool): True iff ``text`` differs from ``original_text``.
        source_language (str): Source language name.
        target_language (str): Target language name.
        english_pivot (str | None): English intermediate text, when the route produced one.
        confidence (float): 0.85 on translation, 1.0 on passthrough, 0.0 on failure.
        error (str | None): Failure description.
        route (RouteKind): Route that produced the result.
    """

    text: str
    original_text: str
    is_translated: bool
    source_language: str
    target_language: str
    english_pivot: str | None = None
    confidence: float = 0.0
    error: str | None = None
    route: RouteKind = "passthrough"

    @classmethod
    def failed(cls, text: str, source_language: str, target_language: str, error: str) -> TranslationResult:
        """Build a degraded result carrying the original text."""
        return cls(
            text=text,
            original_text=text,
            is_translated=False,
            source_language=source_language,
            target_language=target_language,
            confidence=0.0,
            error=error,
            route="unsupported",
        )


@dataclass(frozen=True)
class BidirectionalResult:
    """Both sides of one message plus the shared English core.

    Attributes:
        sender_view (str): Text shown to the sender, in the sender's language and script.
        receiver_view (str): Text shown to the receiver.
        english_core (str): Shared English meaning.
        was_transliterated (bool): The sender view was converted to native script.
        was_translated (bool): The receiver view differs from the input.
        error (str | None): Failure description when the route degraded.
    """

    sender_view: str
    receiver_view: str
    english_core: str
    was_transliterated: bool = False
    was_translated: bool = False
    error: str | None = None

    @classmethod
    def echo(cls, text: str, error: str | None = None) -> BidirectionalResult:
        """Fallback that repeats the input on every side with both flags false."""
        return cls(sender_view=text, receiver_view=text, english_core=text, error=error)
