"""Input normalization and input-method classification."""

from core.input.normalizer import ENGLISH_WORDS, InputNormalizer, needs_transliteration

__all__: list[str] = ["ENGLISH_WORDS", "InputNormalizer", "needs_transliteration"]
