"""Minimal asynchronous client for the Google Translate web endpoint (``batchexecute`` RPC).

Based on async_google_trans_new (https://github.com/sevenc-nanashi/async-google-trans-new).

Note:
    The endpoint is undocumented; a ResponseFormatError on every call means its format changed.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from json import JSONDecodeError
from typing import TYPE_CHECKING, Any, Final
from urllib.parse import quote

import aiohttp

from core.backend.engines.const_google import DEFAULT_SERVICE_URLS, LANGUAGES
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = [
    "AsyncTranslator",
    "GoogleError",
    "HTTPConnectionError",
    "HTTPError",
    "HTTPRedirection",
    "HTTPTimeoutError",
    "HTTPTooManyRequests",
    "InvalidLanguageCodeError",
    "ResponseFormatError",
    "TextResult",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

RPC_ID: Final[str] = "MkEWBc"
MAX_TEXT_LENGTH: Final[int] = 5000
URL_SUFFIX_DEFAULT: Final[str] = "com"
URLS_SUFFIX: Final[list[str]] = [
    match.group(1) for url in DEFAULT_SERVICE_URLS if (match := re.search(r"translate\.google\.(.*)", url.strip()))
]


class GoogleException(Exception):  # noqa: N818
    """Base class of the web client errors."""


class GoogleError(GoogleException):
    """The request was rejected before or after the round trip."""


class ResponseFormatError(GoogleException):
    """The response does not have the expected batchexecute layout."""


class InvalidLanguageCodeError(GoogleException):
    """A language code that the endpoint does not list was passed with ``code_sensitive``."""


class HTTPException(GoogleException):
    pass


class HTTPConnectionError(HTTPException):
    pass


class HTTPTimeoutError(HTTPException):
    pass


class HTTPRedirection(HTTPException):
    """HTTP 3xx Redirection Exception"""


class HTTPError(HTTPException):
    """HTTP 4xx/5xx Error Exception"""


class HTTPTooManyRequests(HTTPException):
    """HTTP 429 Too Many Requests Exception"""


@dataclass(frozen=True)
class TextResult:
    """One translation returned by the endpoint.

    Attributes:
        text (str): Translated text.
        detected_source_lang (str | None): Language code detected by Google; 'und' when the input
            was recognized as a URL.
        metadata (dict[str, str]): Response type information.
    """

    text: str
    detected_source_lang: str | None
    metadata: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.text


class AsyncTranslator:
    """Google web translation client on a lazily created aiohttp session.

    Args:
        url_suffix (str): Top-level domain of the service host; unknown values fall back to 'com'.
        timeout (float): Total request timeout in seconds.
        code_sensitive (bool): Raise InvalidLanguageCodeError for unknown codes instead of using 'auto'.
    """

    def __init__(self, url_suffix: str = URL_SUFFIX_DEFAULT, timeout: float = 10.0, *, code_sensitive: bool = False):
        self.url_suffix: str = url_suffix if url_suffix in URLS_SUFFIX else URL_SUFFIX_DEFAULT
        self.url: str = f"https://translate.google.{self.url_suffix}/_/TranslateWebserverUi/data/batchexecute"
        self.timeout: float = timeout
        self.code_sensitive: bool = code_sensitive
        self.__session: aiohttp.ClientSession | None = None

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Return the current session, creating one if none exists or it was closed."""
        if self.__session is None or self.__session.closed:
            self.__session = aiohttp.ClientSession()
        return self.__session

    async def close(self) -> None:
        logger.debug("'%s': 'termination process'", self.__class__.__name__)
        if self.__session is not None and not self.__session.closed:
            await self.__session.close()
        self.__session = None

    @staticmethod
    def _package_rpc(text: str, lang_src: str = "auto", lang_tgt: str = "auto") -> str:
        parameter: list[Any] = [[text.strip(), lang_src, lang_tgt, True], [1]]
        rpc: list[Any] = [[[RPC_ID, json.dumps(parameter, separators=(",", ":")), None, "generic"]]]
        return f"f.req={quote(json.dumps(rpc, separators=(',', ':')))}&"

    @staticmethod
    def check_langcode(lang: str, *, sensitive: bool = False) -> str:
        """Return the endpoint's spelling of a language code, or 'auto' for unknown codes.

        Raises:
            InvalidLanguageCodeError: If ``sensitive`` is set and the code is unknown.
        """
        if lang.lower() == "auto":
            return "auto"
        for code in LANGUAGES:
            if lang.lower() == code:
                return code
        if sensitive:
            msg: str = f"Invalid language code passed ({lang})"
            raise InvalidLanguageCodeError(msg)
        return "auto"

    def _build_headers(self) -> dict[str, str]:
        return {
            "Referer": f"http://translate.google.{self.url_suffix}/",
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
            ),
            "Content-Type": "application/x-www-form-urlencoded;charset=utf-8",
        }

    async def _post(self, data: str) -> str:
        try:
            async with self._session.post(
                url=self.url,
                data=data,
                headers=self._build_headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                body: str = await response.text()
                status: int = response.status
                if status == 429:
                    msg = f"HTTP {status} {response.reason} from {self.url}"
                    raise HTTPTooManyRequests(msg)
                if status >= 400:
                    msg = f"HTTP {status} {response.reason} from {self.url}. Body: {body.strip()[:500]}"
                    raise HTTPError(msg)
                if status >= 300:
                    location: str | None = response.headers.get("Location")
                    msg = f"HTTP {status} {response.reason} from {self.url}. Location: {location}"
                    raise HTTPRedirection(msg)
                return body
        except TimeoutError:
            msg = "Timeout occurred for aiohttp.ClientSession"
            raise HTTPTimeoutError(msg) from None
        except ConnectionResetError:
            msg = "connection to host has been disconnected"
            raise HTTPConnectionError(msg) from None
        except aiohttp.ClientConnectorError as err:
            raise HTTPConnectionError(err) from None

    async def translate(self, text: str, lang_tgt: str = "auto", lang_src: str | None = "auto") -> TextResult:
        """Translate ``text`` into ``lang_tgt``.

        Raises:
            GoogleError: If the text is empty or too long.
            InvalidLanguageCodeError: If a code is unknown and ``code_sensitive`` is set.
            HTTPException: On transport failures and error status codes.
            ResponseFormatError: If the response cannot be decoded.
        """
        if not text:
            msg = "No characters to translate"
            raise GoogleError(msg)
        if len(text) >= MAX_TEXT_LENGTH:
            msg = f"Can only translate less than {MAX_TEXT_LENGTH} characters"
            raise GoogleError(msg)

        src: str = self.check_langcode(lang_src or "auto", sensitive=self.code_sensitive)
        tgt: str = self.check_langcode(lang_tgt, sensitive=self.code_sensitive)
        resp: str = await self._post(self._package_rpc(text, src, tgt))
        return self._process_response(resp)

    def _process_response(self, resp: str) -> TextResult:
        for line in resp.splitlines():
            if RPC_ID not in line:
                continue

            logger.debug(line)
            try:
                decoded_data: Any = json.loads(json.loads(line)[0][2])
                detect_lang: str | None = decoded_data[1][3]
                trans_info: Any = decoded_data[1][0]
            except JSONDecodeError as err:
                msg = "failed to decode response"
                raise ResponseFormatError(msg) from err
            except (IndexError, TypeError) as err:
                msg = "invalid response format"
                raise ResponseFormatError(msg) from err

            if len(trans_info) == 1 and len(trans_info[0]) > 5:
                return TextResult(
                    self._extract_translation(trans_info), detect_lang, {"engine": "google", "type": "single"}
                )
            if len(trans_info) == 1:
                # The text was recognized as a URL and is returned untranslated
                return TextResult(str(trans_info[0][0]), "und", {"engine": "google", "type": "url recognition"})
            if len(trans_info) == 2:
                sentences: list[str] = [str(item[0]) for item in trans_info]
                return TextResult(" ".join(sentences), detect_lang, {"engine": "google", "type": "multiple"})

            msg = "unknown error"
            raise GoogleError(msg)
        msg = "unknown response format"
        raise ResponseFormatError(msg)

    @staticmethod
    def _extract_translation(trans_info: list[Any]) -> str:
        try:
            sentences: list[Any] = trans_info[0][5]
            return " ".join(sentence[0].strip() for sentence in sentences).strip()
        except (IndexError, TypeError, AttributeError) as err:
            msg = "Invalid response format for sentences"
            raise ResponseFormatError(msg) from err
