"""DeepL translation backend on the official ``deepl`` client.

The client is synchronous, so every call runs in a worker thread.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, ClassVar

from deepl import DeepLClient, Language, TextResult
from deepl.exceptions import (
    AuthorizationException,
    ConnectionException,
    DeepLException,
    QuotaExceededException,
    TooManyRequestsException,
)

from core.backend.interface import (
    BackendAttributes,
    BackendUnavailableError,
    NotSupportedLanguagesError,
    TranslateExceptionError,
    TranslationBackend,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.registry.registry import LanguageRegistry
    from models.config_models import Config
    from models.language_models import Language as RegistryLanguage


__all__: list[str] = ["DeeplBackend"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class DeeplBackend(TranslationBackend):
    _source_codes: ClassVar[dict[str, str]] = {}  # Registry code -> DeepL source code
    _target_codes: ClassVar[dict[str, str]] = {}  # Registry code -> DeepL target code
    REGIONAL_TARGETS: ClassVar[dict[str, str]] = {"en": "EN-US", "pt": "PT-BR"}

    def __init__(self) -> None:
        super().__init__()
        self.__inst: DeepLClient | None = None
        self._registry: LanguageRegistry | None = None
        self._generate_langcode_mappings()

    @classmethod
    def _generate_langcode_mappings(cls) -> None:
        """Populate the code maps from the ``deepl.Language`` constants.

        Both maps use the upper-cased base code ('DE'); targets whose base form DeepL rejects use
        the regional variant from ``REGIONAL_TARGETS``.
        """
        if cls._target_codes:
            return
        constants: list[str] = [
            value for name, value in vars(Language).items() if isinstance(value, str) and name.isupper()
        ]
        for code in constants:
            base_code: str = code.split("-")[0].lower()
            cls._source_codes[base_code] = base_code.upper()
            cls._target_codes[base_code] = cls.REGIONAL_TARGETS.get(base_code, base_code.upper())
        logger.debug("Language code mapping generated for DeepL.")

    @property
    def _inst(self) -> DeepLClient:
        if self.__inst is None:
            msg = "The DeepL instance is not initialised"
            raise BackendUnavailableError(msg)
        return self.__inst

    @staticmethod
    def fetch_backend_name() -> str:
        return "deepl"

    def initialize(self, config: Config, registry: LanguageRegistry) -> None:
        """Create the DeepL client with the key from ``DEEPL_API_KEY``.

        Authentication occurs when the API is used, so an invalid key surfaces on the first call.

        Raises:
            BackendUnavailableError: If no key is set or the client cannot be created.
        """
        _ = config  # The key is read from the environment.
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.backend_attributes = BackendAttributes(name="deepl", supports_bidirectional=False)
        self._registry = registry

        auth_key: str = self.get_authentication_key()
        if not auth_key:
            msg = "Environment variable 'DEEPL_API_KEY' is not set"
            raise BackendUnavailableError(msg)
        try:
            self.__inst = DeepLClient(auth_key)
        except (AttributeError, ValueError) as err:
            logger.critical(err)
            msg = "An error occurred while creating the DeepL client instance"
            raise BackendUnavailableError(msg) from err

    def _code(self, language: str) -> str:
        entry: RegistryLanguage | None = self._registry.get(language) if self._registry else None
        return (entry.code if entry else language).strip().lower()

    async def translate_text(self, text: str, source_language: str, target_language: str) -> str:
        """Translate with DeepL.

        Raises:
            NotSupportedLanguagesError: If DeepL does not support either language.
            TranslationQuotaExceededError: If the translation quota has been exceeded.
            TranslationRateLimitError: If DeepL rate-limits the request.
            TranslateExceptionError: If an error occurs during the translation process.
        """
        try:
            src: str = DeeplBackend._source_codes[self._code(source_language)]
            tgt: str = DeeplBackend._target_codes[self._code(target_language)]
        except KeyError:
            msg: str = (
                f"Languages not supported by DeepL. Source language: '{source_language}'. "
                f"Target language: '{target_language}'."
            )
            raise NotSupportedLanguagesError(msg) from None

        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", text, src, tgt)
        try:
            results: TextResult | list[TextResult] = await asyncio.to_thread(
                self._inst.translate_text,
                text,
                source_lang=src,
                target_lang=tgt,
            )
        except QuotaExceededException as err:
            raise TranslationQuotaExceededError(err) from None
        except AuthorizationException:
            msg = "Authorisation failed. Please check your authentication key"
            raise TranslateExceptionError(msg) from None
        except TooManyRequestsException as err:
            msg = "DeepL rate limit reached"
            raise TranslationRateLimitError(msg) from err
        except ConnectionException:
            msg = "An error occurred when connecting to the DeepL server"
            raise TranslateExceptionError(msg) from None
        except (DeepLException, ValueError, TypeError):
            msg = "An anomaly occurred during the translation process at DeepL"
            raise TranslateExceptionError(msg) from None

        result: TextResult = results[0] if isinstance(results, list) else results
        logger.info("translation completed (%s > %s)", src, tgt)
        return result.text

    async def close(self) -> None:
        logger.debug("'%s': 'termination process'", self.__class__.__name__)
        self.__inst = None
