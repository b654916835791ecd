"""Translation backends behind the ``invoke(request) -> response`` boundary."""

from core.backend.engines import DeeplBackend, GoogleBackend, HttpBackend, LocalBackend
from core.backend.interface import (
    BackendAttributes,
    BackendUnavailableError,
    NotSupportedLanguagesError,
    TranslateExceptionError,
    TranslationBackend,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
)

__all__: list[str] = [
    "BackendAttributes",
    "BackendUnavailableError",
    "DeeplBackend",
    "GoogleBackend",
    "HttpBackend",
    "LocalBackend",
    "NotSupportedLanguagesError",
    "TranslateExceptionError",
    "TranslationBackend",
    "TranslationQuotaExceededError",
    "TranslationRateLimitError",
]
