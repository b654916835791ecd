"""Phonetic correction result models."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = ["PatternMatch", "Suggestion", "TextCorrection", "WordCorrection"]


@dataclass(frozen=True)
class WordCorrection:
    """Outcome of correcting a single word.

    Attributes:
        original (str): Word as typed.
        corrected (str): Suggested spelling; equal to ``original`` when nothing changed.
        confidence (float): ``max(0.5, 1 - 0.15 * distance)`` when corrected, else 1.0.
        distance (int): Edit distance between ``original`` and ``corrected``.
    """

    original: str
    corrected: str
    confidence: float = 1.0
    distance: int = 0

    @property
    def changed(self) -> bool:
        return self.corrected != self.original


@dataclass(frozen=True)
class TextCorrection:
    """Corrected text and the per-word corrections that were applied.

    Attributes:
        text (str): Text with corrections applied, separators preserved.
        corrections (tuple[WordCorrection, ...]): Only the words that changed.
    """

    text: str
    corrections: tuple[WordCorrection, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PatternMatch:
    """A word recognized as a spelling of a semantic pattern class.

    Attributes:
        pattern (str): Class name ('greeting', 'howareyou', 'thanks', 'good').
        spelling (str): The known spelling that matched.
        english (str): English gloss of the class.
        distance (int): Edit distance between the word and ``spelling``.
    """

    pattern: str
    spelling: str
    english: str
    distance: int = 0


@dataclass(frozen=True)
class Suggestion:
    word: str
    distance: int
    pattern: str
