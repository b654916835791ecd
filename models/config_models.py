"""Configuration data models for the meaning-pivot pipeline.

Each dataclass mirrors one section of ``pivotchat.ini``. Field names are the INI keys, so the
loader can map sections and keys by reflection. Defaults are usable without any INI file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.cache_models import CachePolicy

__all__: list[str] = ["Config"]


@dataclass
class General:
    DEBUG: bool = False
    VERSION: str = ""
    LOG_FILE: str = ""
    SCRIPT_NAME: str = ""


@dataclass
class Translation:
    BACKEND: str = "local"
    TIMEOUT: float = 10.0
    GOOGLE_SUFFIX: str = "com"
    PIVOT_LANGUAGE: str = "english"


@dataclass
class Backend:
    ENDPOINT: str = ""
    API_KEY_ENV: str = "PIVOT_BACKEND_API_KEY"


@dataclass
class Cache:
    MAX_TRANSLATIONS: int = 2000
    MAX_CORRECTIONS: int = 1000
    POLICY: CachePolicy = "fifo"
    TEXT_PREFIX: int = 100
    INFLIGHT_TIMEOUT: float = 10.0


@dataclass
class Correction:
    ENABLED: bool = True
    MAX_DISTANCE: int = 2
    MAX_VARIANT_DISTANCE: int = 3


@dataclass
class Input:
    VOICE_BURST_CHARS: int = 15
    ENGLISH_RATIO: float = 0.3


@dataclass
class Preview:
    DEBOUNCE_SEC: float = 0.5


@dataclass
class Registry:
    DATA_FILE: str = ""
    ALIASES: dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    TRANSLATION: Translation = field(default_factory=Translation)
    BACKEND: Backend = field(default_factory=Backend)
    CACHE: Cache = field(default_factory=Cache)
    CORRECTION: Correction = field(default_factory=Correction)
    INPUT: Input = field(default_factory=Input)
    PREVIEW: Preview = field(default_factory=Preview)
    REGISTRY: Registry = field(default_factory=Registry)
