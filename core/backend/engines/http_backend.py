"""Edge-function translation backend.

Posts camelCase JSON requests to ``BACKEND.ENDPOINT`` and decodes the matching camelCase JSON
response. A bearer token is read from the environment variable named by ``BACKEND.API_KEY_ENV``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from core.backend.interface import (
    BackendAttributes,
    BackendUnavailableError,
    TranslateExceptionError,
    TranslationBackend,
    TranslationRateLimitError,
)
from handlers.async_comm import AsyncCommError, AsyncHttp
from models.backend_models import (
    BidirectionalRequest,
    BidirectionalResponse,
    TranslateRequest,
    TranslateResponse,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.registry.registry import LanguageRegistry
    from models.config_models import Config

__all__: list[str] = ["HttpBackend"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTP_TOO_MANY_REQUESTS: Final[int] = 429


class HttpBackend(TranslationBackend):
    """Backend that delegates both request modes to a remote JSON endpoint.

    Attributes:
        endpoint (str): URL receiving the POST requests.
        timeout (float): Total request timeout in seconds.
    """

    def __init__(self) -> None:
        super().__init__()
        self.endpoint: str = ""
        self.timeout: float = 10.0
        self._http: AsyncHttp | None = None

    @staticmethod
    def fetch_backend_name() -> str:
        return "http"

    def initialize(self, config: Config, registry: LanguageRegistry) -> None:
        """Prepare the HTTP client.

        Raises:
            BackendUnavailableError: If no endpoint is configured.
        """
        _ = registry  # Language names cross the boundary unchanged.
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.backend_attributes = BackendAttributes(name="http", supports_bidirectional=True)

        self.endpoint = config.BACKEND.ENDPOINT.strip()
        if not self.endpoint:
            msg = "No endpoint is configured for the http backend"
            raise BackendUnavailableError(msg)
        self.timeout = config.TRANSLATION.TIMEOUT

        headers: dict[str, str] = {"Content-Type": "application/json"}
        if token := self.get_authentication_key(config.BACKEND.API_KEY_ENV):
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.info(
                "Environment variable '%s' is not set; requests are sent unauthenticated", config.BACKEND.API_KEY_ENV
            )
        self._http = AsyncHttp(default_headers=headers)

    @property
    def http(self) -> AsyncHttp:
        if self._http is None:
            msg = "The http backend is not initialised"
            raise BackendUnavailableError(msg)
        return self._http

    async def _post(self, body: dict[str, Any]) -> dict[str, Any]:
        try:
            data: Any = await self.http.post(url=self.endpoint, data=body, total_timeout=self.timeout)
        except AsyncCommError as err:
            if err.status == HTTP_TOO_MANY_REQUESTS:
                raise TranslationRateLimitError(err.msg) from err
            raise
        if not isinstance(data, dict):
            msg: str = f"Unexpected response body from the http backend: {type(data).__name__}"
            raise TranslateExceptionError(msg)
        if error := data.get("error"):
            msg = f"The http backend reported an error: {error}"
            raise TranslateExceptionError(msg)
        return data

    async def translate_text(self, text: str, source_language: str, target_language: str) -> str:
        request = TranslateRequest(text=text, source_language=source_language, target_language=target_language)
        data: dict[str, Any] = await self._post(request.to_dict())
        if "translatedText" not in data:
            msg = "Response of the http backend lacks 'translatedText'"
            raise TranslateExceptionError(msg)
        response: TranslateResponse = TranslateResponse.from_dict({"mode": "translate", **data})
        return response.translated_text

    async def bidirectional(self, request: BidirectionalRequest) -> BidirectionalResponse:
        """Send a BidirectionalRequest; missing view fields fall back to the input text."""
        data: dict[str, Any] = await self._post(request.to_dict())
        filled: dict[str, Any] = {
            "senderView": request.text,
            "receiverView": request.text,
            "englishCore": request.text,
            "wasTransliterated": False,
            "wasTranslated": False,
            **{key: value for key, value in data.items() if value is not None},
            "mode": "bidirectional",
        }
        return BidirectionalResponse.from_dict(filled)

    async def close(self) -> None:
        logger.debug("'%s': 'termination process'", self.__class__.__name__)
        if self._http is not None:
            await self._http.close()
