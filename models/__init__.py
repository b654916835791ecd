"""Data models for the meaning-pivot pipeline.

This package contains dataclass definitions for configuration, languages, input analysis,
phonetic corrections, translation results, message views, backend wire types, caches and the
regular expression patterns used throughout the application.
"""

from __future__ import annotations

from models.backend_models import (
    BackendFailure,
    BidirectionalRequest,
    BidirectionalResponse,
    TranslateRequest,
    TranslateResponse,
)
from models.cache_models import CacheEntry, CacheStatistics
from models.config_models import Config
from models.correction_models import PatternMatch, Suggestion, TextCorrection, WordCorrection
from models.input_models import INPUT_METHOD_DESCRIPTIONS, InputAnalysis
from models.language_models import Language
from models.message_models import MessageMetadata, MessageViews, PreviewResult, View, ViewerView
from models.re_models import SCRIPT_PATTERNS, TOKEN_SPLIT_PATTERN
from models.translation_models import BidirectionalResult, TranslationResult

__all__: list[str] = [
    "INPUT_METHOD_DESCRIPTIONS",
    "SCRIPT_PATTERNS",
    "TOKEN_SPLIT_PATTERN",
    "BackendFailure",
    "BidirectionalRequest",
    "BidirectionalResponse",
    "BidirectionalResult",
    "CacheEntry",
    "CacheStatistics",
    "Config",
    "InputAnalysis",
    "Language",
    "MessageMetadata",
    "MessageViews",
    "PatternMatch",
    "PreviewResult",
    "Suggestion",
    "TextCorrection",
    "TranslateRequest",
    "TranslateResponse",
    "TranslationResult",
    "View",
    "ViewerView",
    "WordCorrection",
]
