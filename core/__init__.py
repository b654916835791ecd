"""Core services of the meaning-pivot pipeline.

This package contains the language registry, input normalizer, phonetic corrector, translation
backends, semantic translation engine, message pipeline and preview debouncer.
"""

from core.pipeline import MessagePipeline, ServiceContainer
from core.registry import LanguageRegistry
from core.trans import SemanticTranslationEngine
from core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "LanguageRegistry",
    "MessagePipeline",
    "SemanticTranslationEngine",
    "ServiceContainer",
]
