"""Wire models for the external translation backend boundary.

Requests and responses are tagged by ``mode``. Every ``TranslationBackend.invoke`` call returns
exactly one of ``TranslateResponse``, ``BidirectionalResponse`` or ``BackendFailure``; it never
raises. JSON bodies use camelCase keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

__all__: list[str] = [
    "BackendFailure",
    "BackendMode",
    "BackendRequest",
    "BackendResponse",
    "BidirectionalRequest",
    "BidirectionalResponse",
    "TranslateRequest",
    "TranslateResponse",
]

type BackendMode = Literal["translate", "bidirectional"]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslateRequest(DataClassJsonMixin):
    """Translate ``text`` from one registered language to another.

    Attributes:
        text (str): Text to translate.
        source_language (str): Lowercase registry name of the source language.
        target_language (str): Lowercase registry name of the target language.
        mode (BackendMode): Always 'translate'.
    """

    text: str
    source_language: str
    target_language: str
    mode: Literal["translate"] = "translate"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class BidirectionalRequest(DataClassJsonMixin):
    """Produce both chat views for one message in a single backend round trip.

    Attributes:
        text (str): Sender's (corrected) text.
        sender_language (str): Lowercase registry name of the sender's language.
        receiver_language (str): Lowercase registry name of the receiver's language.
        mode (BackendMode): Always 'bidirectional'.
    """

    text: str
    sender_language: str
    receiver_language: str
    mode: Literal["bidirectional"] = "bidirectional"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslateResponse(DataClassJsonMixin):
    translated_text: str
    mode: Literal["translate"] = "translate"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class BidirectionalResponse(DataClassJsonMixin):
    """Backend answer to a BidirectionalRequest.

    Attributes:
        sender_view (str): Text for the sender, in the sender's script.
        receiver_view (str): Text for the receiver.
        english_core (str): Shared English meaning.
        was_transliterated (bool): Sender view was converted to native script.
        was_translated (bool): Receiver view differs from the input.
    """

    sender_view: str
    receiver_view: str
    english_core: str
    was_transliterated: bool = False
    was_translated: bool = False
    mode: Literal["bidirectional"] = "bidirectional"


@dataclass(frozen=True)
class BackendFailure:
    """Soft failure of a backend call.

    Attributes:
        mode (BackendMode): Mode of the failed request.
        error (str): Human-readable reason, suitable for logs and TranslationResult.error.
        retryable (bool): Whether the failure was a rate limit or timeout.
    """

    mode: BackendMode
    error: str
    retryable: bool = False


type BackendRequest = TranslateRequest | BidirectionalRequest
type BackendResponse = TranslateResponse | BidirectionalResponse | BackendFailure
