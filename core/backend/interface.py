"""This module defines the abstract base class for translation backends and related exceptions.

A backend answers ``TranslateRequest`` and ``BidirectionalRequest`` messages. Subclasses raise the
exceptions below; ``TranslationBackend.invoke`` converts every failure into a ``BackendFailure`` so
that callers never see an exception from the backend boundary.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError
from models.backend_models import (
    BackendFailure,
    BidirectionalRequest,
    BidirectionalResponse,
    TranslateRequest,
    TranslateResponse,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.registry.registry import LanguageRegistry
    from models.backend_models import BackendMode, BackendRequest, BackendResponse
    from models.config_models import Config

__all__: list[str] = [
    "BackendAttributes",
    "BackendUnavailableError",
    "NotSupportedLanguagesError",
    "TranslateExceptionError",
    "TranslationBackend",
    "TranslationQuotaExceededError",
    "TranslationRateLimitError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


@dataclass
class BackendAttributes:
    """Backend-specific capabilities.

    Attributes:
        name (str): Display name of the backend.
        supports_bidirectional (bool): Whether the backend answers BidirectionalRequest natively.
    """

    name: str
    supports_bidirectional: bool = False


class TranslateExceptionError(Exception):
    """An error occurred during the translation process."""


class NotSupportedLanguagesError(TranslateExceptionError):
    """An unsupported language was specified."""


class TranslationQuotaExceededError(TranslateExceptionError):
    """The translatable character quota has been exceeded."""


class TranslationRateLimitError(TranslateExceptionError):
    """The translation request was rate-limited by the API."""


class BackendUnavailableError(TranslateExceptionError):
    """The backend is not initialized, not configured, or cannot serve the request."""


class TranslationBackend(ABC):
    """Abstract base class for translation backends.

    Attributes:
        registered (ClassVar[dict[str, type[TranslationBackend]]]): Registered backend classes,
            keyed by their distinguished names.
    """

    registered: ClassVar[dict[str, type[TranslationBackend]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        """Register the subclass under its distinguished name.

        Raises:
            TypeError: If the subclass does not provide ``fetch_backend_name``.
            ValueError: If another backend is already registered under the same name.
        """
        super().__init_subclass__(**kwargs)
        if not hasattr(cls, "fetch_backend_name") or not callable(cls.fetch_backend_name):
            msg = "Subclasses of TranslationBackend must implement the static method fetch_backend_name()."
            raise TypeError(msg)

        if not isinstance(cls.fetch_backend_name(), str) or cls.fetch_backend_name() == "":
            return  # Abstract helpers with empty names are not registered.

        if cls.fetch_backend_name() in cls.registered:
            msg: str = f"A translation backend with the name '{cls.fetch_backend_name()}' is already registered."
            raise ValueError(msg)

        cls.registered[cls.fetch_backend_name()] = cls

    def __init__(self) -> None:
        self._backend_attributes: BackendAttributes | None = None

    @property
    def backend_attributes(self) -> BackendAttributes:
        if self._backend_attributes is None:
            msg = "Backend attributes have not been set."
            raise RuntimeError(msg)
        return self._backend_attributes

    @backend_attributes.setter
    def backend_attributes(self, attributes: BackendAttributes) -> None:
        if self._backend_attributes is not None:
            msg = "Backend attributes can only be set once during initialization."
            raise RuntimeError(msg)
        self._backend_attributes = attributes

    @property
    def backend_name(self) -> str:
        return self.backend_attributes.name

    @property
    def supports_bidirectional(self) -> bool:
        return self._backend_attributes is not None and self._backend_attributes.supports_bidirectional

    def is_retryable_error(self, err: Exception) -> bool:
        """Rate limits and timeouts are worth retrying; everything else is not."""
        return isinstance(err, TranslationRateLimitError | AsyncCommTimeoutError | TimeoutError)

    @staticmethod
    @abstractmethod
    def fetch_backend_name() -> str:
        """Fetch the distinguished name of the backend.

        Called during class registration in __init_subclass__, so the implementation must be
        available at subclass definition time.
        """
        raise NotImplementedError

    @abstractmethod
    def initialize(self, config: Config, registry: LanguageRegistry) -> None:
        """Prepare the backend with the given configuration.

        Args:
            config (Config): Application configuration.
            registry (LanguageRegistry): Registry used to map language names to backend codes.
        """
        raise NotImplementedError

    @abstractmethod
    async def translate_text(self, text: str, source_language: str, target_language: str) -> str:
        """Translate text between two registered languages.

        Args:
            text (str): Text to translate.
            source_language (str): Lowercase registry name of the source language.
            target_language (str): Lowercase registry name of the target language.

        Returns:
            str: Translated text.

        Raises:
            NotSupportedLanguagesError: If a language is not supported by the backend.
            TranslationQuotaExceededError: If the character quota has been exceeded.
            TranslationRateLimitError: If the request is rate-limited.
            TranslateExceptionError: If translation fails.
        """
        raise NotImplementedError

    async def bidirectional(self, request: BidirectionalRequest) -> BidirectionalResponse:
        """Answer a BidirectionalRequest in one round trip.

        Only backends with ``supports_bidirectional`` implement this.

        Raises:
            BackendUnavailableError: If the backend has no bidirectional mode.
        """
        msg: str = f"Backend '{self.fetch_backend_name()}' does not support bidirectional requests"
        raise BackendUnavailableError(msg)

    @abstractmethod
    async def close(self) -> None:
        """Release network sessions and worker resources."""
        raise NotImplementedError

    async def invoke(self, request: BackendRequest) -> BackendResponse:
        """Send one request to the backend.

        Args:
            request (BackendRequest): TranslateRequest or BidirectionalRequest.

        Returns:
            BackendResponse: The matching response, or BackendFailure. Never raises.
        """
        mode: BackendMode = request.mode
        try:
            if isinstance(request, TranslateRequest):
                translated: str = await self.translate_text(
                    request.text, request.source_language, request.target_language
                )
                return TranslateResponse(translated_text=translated)
            if isinstance(request, BidirectionalRequest):
                return await self.bidirectional(request)

            msg: str = f"Unsupported request type: {type(request).__name__}"
            return BackendFailure(mode=mode, error=msg)

        except (TranslateExceptionError, AsyncCommError, TimeoutError) as err:
            logger.warning("Backend '%s' %s request failed: %s", self.fetch_backend_name(), mode, err)
            return BackendFailure(
                mode=mode, error=str(err) or type(err).__name__, retryable=self.is_retryable_error(err)
            )
        except Exception as err:  # noqa: BLE001
            logger.error("Unexpected error in backend '%s': %s", self.fetch_backend_name(), err)
            return BackendFailure(mode=mode, error=f"{type(err).__name__}: {err}")

    def get_authentication_key(self, env_name: str | None = None) -> str:
        """Read the authentication key from the environment.

        Without ``env_name`` the variable is named after the backend with the suffix
        ``_API_KEY`` (e.g. ``DEEPL_API_KEY``).

        Returns:
            str: The key, or an empty string if the variable is not set.
        """
        return os.getenv(env_name or f"{self.fetch_backend_name().upper()}_API_KEY", "")
