"""Message view models handed to the chat and persistence layers.

MessageViews is the terminal artifact of the pipeline: immutable and fully self-describing, so
it can be rendered without any further registry lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

__all__: list[str] = ["MessageMetadata", "MessageViews", "PreviewResult", "View", "ViewerView"]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class View(DataClassJsonMixin):
    """What one participant sees.

    Attributes:
        main (str): Text in the participant's own language.
        english (str): English gloss shared by both participants.
    """

    main: str = ""
    english: str = ""


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class MessageMetadata(DataClassJsonMixin):
    """Provenance of a processed message.

    Attributes:
        original_text (str): Raw text as typed by the sender.
        was_transliterated (bool): The sender view was rendered in native script.
        was_translated (bool): The receiver view differs from the sender's input.
        sender_language (str): Sender language name.
        receiver_language (str): Receiver language name.
    """

    original_text: str = ""
    was_transliterated: bool = False
    was_translated: bool = False
    sender_language: str = ""
    receiver_language: str = ""


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class MessageViews(DataClassJsonMixin):
    """Sender view, receiver view and provenance for one chat message."""

    sender: View = field(default_factory=View)
    receiver: View = field(default_factory=View)
    metadata: MessageMetadata = field(default_factory=MessageMetadata)

    @classmethod
    def empty(cls, sender_language: str = "", receiver_language: str = "") -> MessageViews:
        return cls(metadata=MessageMetadata(sender_language=sender_language, receiver_language=receiver_language))


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class PreviewResult(DataClassJsonMixin):
    """Sender-facing half of a message, shown while typing.

    Attributes:
        preview (str): Sender view of the text typed so far.
        english (str): English gloss of the text typed so far.
    """

    preview: str = ""
    english: str = ""


@dataclass(frozen=True)
class ViewerView:
    """A view selected for a specific reader, with its writing direction."""

    main: str
    english: str
    is_own_message: bool
    direction: Literal["rtl", "ltr"] = "ltr"
