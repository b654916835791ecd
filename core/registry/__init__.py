"""Language registry built from the bundled language data."""

from core.registry.registry import DEFAULT_DATA_FILE, ENGLISH, LANGUAGE_ALIASES, LanguageRegistry

__all__: list[str] = ["DEFAULT_DATA_FILE", "ENGLISH", "LANGUAGE_ALIASES", "LanguageRegistry"]
