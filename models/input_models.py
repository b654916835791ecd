"""Input analysis data models.

InputAnalysis is produced once per input event by the normalizer and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Literal

__all__: list[str] = ["INPUT_METHODS", "INPUT_METHOD_DESCRIPTIONS", "InputAnalysis", "InputMethod"]

type InputMethod = Literal[
    "pure-english",
    "native-script",
    "transliteration",
    "mixed-code",
    "gboard-ime",
    "keyboard-layout",
    "virtual-keyboard",
    "font-based",
    "voice-single",
    "voice-mixed",
    "ai-predictive",
    "accessibility",
]

INPUT_METHOD_DESCRIPTIONS: Final[dict[str, str]] = {
    "pure-english": "Pure English",
    "native-script": "Native Script (Gboard/IME)",
    "transliteration": "Romanized Text",
    "mixed-code": "Code-Mixed",
    "gboard-ime": "Gboard/IME",
    "keyboard-layout": "Keyboard Layout",
    "virtual-keyboard": "Virtual Keyboard",
    "font-based": "Legacy Font (Non-Unicode)",
    "voice-single": "Voice Input (Single Language)",
    "voice-mixed": "Voice Input (Mixed Language)",
    "ai-predictive": "AI-Assisted",
    "accessibility": "Accessibility Input",
}

INPUT_METHODS: Final[tuple[str, ...]] = tuple(INPUT_METHOD_DESCRIPTIONS)


@dataclass(frozen=True)
class InputAnalysis:
    """Classification of one piece of raw input.

    Attributes:
        method (InputMethod): Detected input method.
        original_text (str): Raw text as received.
        normalized_text (str): NFC text without zero-width artifacts and with collapsed blanks.
        detected_script (str): First script found, or 'unknown'.
        scripts (tuple[str, ...]): Every script found, in detection-table order.
        has_native_chars (bool): Contains letters of a non-Latin script.
        has_latin_chars (bool): Contains Latin letters.
        is_mixed (bool): Native and Latin letters together, or code-switched Latin text.
        is_legacy_font (bool): Private-use or replacement characters were found.
        confidence (float): Heuristic classification confidence in [0, 1].
        languages (tuple[str, ...]): Candidate language names derived from the scripts.
    """

    method: InputMethod
    original_text: str
    normalized_text: str
    detected_script: str = "unknown"
    scripts: tuple[str, ...] = field(default_factory=tuple)
    has_native_chars: bool = False
    has_latin_chars: bool = False
    is_mixed: bool = False
    is_legacy_font: bool = False
    confidence: float = 0.8
    languages: tuple[str, ...] = ("unknown",)

    @property
    def description(self) -> str:
        return INPUT_METHOD_DESCRIPTIONS.get(self.method, "Unknown")

    @property
    def is_romanized(self) -> bool:
        """True when the text is Latin-typed speech of a (possibly) non-English language."""
        return self.method in ("transliteration", "mixed-code", "voice-mixed") and self.has_latin_chars
