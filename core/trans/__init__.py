"""Semantic translation engine.

Routes every language pair to a passthrough, a direct backend hop or a pivot through English, and
caches each hop.
"""

from core.trans.engine import SemanticTranslationEngine, Translator

__all__: list[str] = ["SemanticTranslationEngine", "Translator"]
