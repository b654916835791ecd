"""Translation backend implementations.

Importing this package registers every backend with ``TranslationBackend.registered``.

Modules:
- LocalBackend: offline catalog glossing and rendering.
- HttpBackend: JSON edge-function endpoint.
- GoogleBackend: Google web translation on ``AsyncTranslator``.
- DeeplBackend: DeepL API.
"""

from core.backend.engines.async_google_translate import (
    AsyncTranslator,
    GoogleError,
    HTTPConnectionError,
    HTTPError,
    HTTPTimeoutError,
    HTTPTooManyRequests,
    InvalidLanguageCodeError,
    ResponseFormatError,
    TextResult,
)
from core.backend.engines.const_google import DEFAULT_SERVICE_URLS, LANGUAGES
from core.backend.engines.deepl_backend import DeeplBackend
from core.backend.engines.google_backend import GoogleBackend
from core.backend.engines.http_backend import HttpBackend
from core.backend.engines.local_backend import LocalBackend

__all__: list[str] = [
    "DEFAULT_SERVICE_URLS",
    "LANGUAGES",
    "AsyncTranslator",
    "DeeplBackend",
    "GoogleBackend",
    "GoogleError",
    "HTTPConnectionError",
    "HTTPError",
    "HTTPTimeoutError",
    "HTTPTooManyRequests",
    "HttpBackend",
    "InvalidLanguageCodeError",
    "LocalBackend",
    "ResponseFormatError",
    "TextResult",
]
