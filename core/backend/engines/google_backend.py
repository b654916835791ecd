"""Google Translate backend on the web ``batchexecute`` endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from core.backend.engines.async_google_translate import (
    AsyncTranslator,
    GoogleError,
    HTTPConnectionError,
    HTTPError,
    HTTPRedirection,
    HTTPTimeoutError,
    HTTPTooManyRequests,
    InvalidLanguageCodeError,
    ResponseFormatError,
)
from core.backend.engines.const_google import LANGUAGES
from core.backend.interface import (
    BackendAttributes,
    BackendUnavailableError,
    NotSupportedLanguagesError,
    TranslateExceptionError,
    TranslationBackend,
    TranslationRateLimitError,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.registry.registry import LanguageRegistry
    from models.config_models import Config
    from models.language_models import Language

__all__: list[str] = ["GoogleBackend"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Registry codes that Google spells differently
GOOGLE_CODE_OVERRIDES: Final[dict[str, str]] = {"he": "iw", "zh": "zh-cn", "jv": "jw"}


class GoogleBackend(TranslationBackend):
    def __init__(self) -> None:
        super().__init__()
        self.__inst: AsyncTranslator | None = None
        self._registry: LanguageRegistry | None = None

    @property
    def _inst(self) -> AsyncTranslator:
        if self.__inst is None:
            msg = "The google instance is not initialised"
            raise BackendUnavailableError(msg)
        return self.__inst

    @staticmethod
    def fetch_backend_name() -> str:
        return "google"

    def initialize(self, config: Config, registry: LanguageRegistry) -> None:
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.backend_attributes = BackendAttributes(name="google", supports_bidirectional=False)
        self._registry = registry
        self.__inst = AsyncTranslator(
            url_suffix=config.TRANSLATION.GOOGLE_SUFFIX, timeout=config.TRANSLATION.TIMEOUT, code_sensitive=True
        )

    def google_code(self, language: str) -> str:
        """Map a registry language name to the code used by the web endpoint.

        Raises:
            NotSupportedLanguagesError: If the language is unknown to the registry or to Google.
        """
        entry: Language | None = self._registry.get(language) if self._registry else None
        code: str = entry.code if entry else language.strip().lower()
        code = GOOGLE_CODE_OVERRIDES.get(code, code)
        if code not in LANGUAGES:
            msg: str = f"Language not supported by Google: '{language}'"
            raise NotSupportedLanguagesError(msg)
        return code

    async def translate_text(self, text: str, source_language: str, target_language: str) -> str:
        src: str = self.google_code(source_language)
        tgt: str = self.google_code(target_language)
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", text, src, tgt)
        try:
            result = await self._inst.translate(text, lang_tgt=tgt, lang_src=src)
        except HTTPTooManyRequests as err:
            msg = "Google rate limit reached"
            raise TranslationRateLimitError(msg) from err
        except InvalidLanguageCodeError as err:
            raise NotSupportedLanguagesError(err) from None
        except HTTPTimeoutError as err:
            msg = "Timeout while waiting for the Google server"
            raise TimeoutError(msg) from err
        except (HTTPConnectionError, HTTPError, HTTPRedirection) as err:
            msg = f"An error occurred when connecting to the Google server: {err}"
            raise TranslateExceptionError(msg) from None
        except (GoogleError, ResponseFormatError) as err:
            msg = f"An anomaly occurred during the translation process at Google: {err}"
            raise TranslateExceptionError(msg) from None

        logger.info("translation completed (%s > %s)", src, tgt)
        return result.text

    async def close(self) -> None:
        logger.debug("'%s': 'termination process'", self.__class__.__name__)
        if self.__inst is not None:
            await self.__inst.close()
        self.__inst = None
