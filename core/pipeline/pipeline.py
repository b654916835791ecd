"""Message pipeline: normalize, correct, translate and emit the dual chat views."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, ClassVar, Literal

from handlers.emoji import EmojiHandler
from models.message_models import MessageMetadata, MessageViews, PreviewResult, View, ViewerView
from models.translation_models import BidirectionalResult
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable

    from core.correction.corrector import PhoneticCorrector
    from core.input.normalizer import InputNormalizer
    from core.registry.registry import LanguageRegistry
    from core.trans.engine import SemanticTranslationEngine
    from models.input_models import InputAnalysis
    from models.language_models import Language

__all__: list[str] = ["MessagePipeline"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class MessagePipeline:
    """Turns one raw chat message into the sender's and the receiver's view.

    Attributes:
        BATCH_CONCURRENCY (int): Number of messages processed at once by ``process_batch``.
    """

    BATCH_CONCURRENCY: ClassVar[int] = 4

    def __init__(
        self,
        normalizer: InputNormalizer,
        corrector: PhoneticCorrector,
        engine: SemanticTranslationEngine,
        registry: LanguageRegistry,
        *,
        correction_enabled: bool = True,
    ) -> None:
        self.normalizer: InputNormalizer = normalizer
        self.corrector: PhoneticCorrector = corrector
        self.engine: SemanticTranslationEngine = engine
        self.registry: LanguageRegistry = registry
        self.correction_enabled: bool = correction_enabled

    def _language_name(self, language: str) -> str:
        return self.registry.canonical_name(language) or StringUtils.ensure_str(language).strip().lower()

    def needs_translation(self, sender_language: str, receiver_language: str) -> bool:
        return not self.registry.is_same_language(sender_language, receiver_language)

    def _correct(self, analysis: InputAnalysis, language: str) -> str:
        text: str = analysis.normalized_text
        if not self.correction_enabled or not analysis.is_romanized:
            return text
        corrected: str = self.corrector.correct_text(text, language).text
        if corrected != text:
            logger.debug("Corrected input: '%s' -> '%s'", text, corrected)
        return corrected

    async def process(
        self, raw_text: str, sender_language: str, receiver_language: str, previous_text: str = ""
    ) -> MessageViews:
        """Build the views of one message; never raises.

        Args:
            raw_text (str): Text as typed or dictated by the sender.
            sender_language (str): Sender language code, name or alias.
            receiver_language (str): Receiver language code, name or alias.
            previous_text (str): Input box content before this event, for voice burst detection.

        Returns:
            MessageViews: Both views; on failure every field echoes the input text.
        """
        raw: str = StringUtils.ensure_str(raw_text)
        sender: str = self._language_name(sender_language)
        receiver: str = self._language_name(receiver_language)

        analysis: InputAnalysis = self.normalizer.analyze(raw, sender, previous_text)
        text: str = analysis.normalized_text
        if not text:
            return MessageViews.empty(sender, receiver)

        if not self.needs_translation(sender, receiver):
            english: str = text if self.registry.is_english(sender) else ""
            return self._views(raw, sender, receiver, BidirectionalResult(text, text, english))

        if EmojiHandler.is_purely_emoji(text):
            description: str = EmojiHandler.describe(text)
            return self._views(raw, sender, receiver, BidirectionalResult(text, text, description or text))

        try:
            corrected: str = self._correct(analysis, sender)
            result: BidirectionalResult = await self.engine.translate_bidirectional(corrected, sender, receiver)
        except Exception as err:  # noqa: BLE001
            logger.error("Message processing failed (%s -> %s): %s", sender, receiver, err)
            result = BidirectionalResult.echo(text, str(err))

        if result.error:
            logger.warning("Message sent in original language (%s -> %s): %s", sender, receiver, result.error)
            result = BidirectionalResult.echo(text, result.error)
        return self._views(raw, sender, receiver, result)

    @staticmethod
    def _views(raw: str, sender: str, receiver: str, result: BidirectionalResult) -> MessageViews:
        return MessageViews(
            sender=View(main=result.sender_view, english=result.english_core),
            receiver=View(main=result.receiver_view, english=result.english_core),
            metadata=MessageMetadata(
                original_text=raw,
                was_transliterated=result.was_transliterated,
                was_translated=result.was_translated,
                sender_language=sender,
                receiver_language=receiver,
            ),
        )

    async def preview(
        self, raw_text: str, sender_language: str, receiver_language: str, previous_text: str = ""
    ) -> PreviewResult:
        """Sender-facing half of ``process``, for live previews while typing."""
        views: MessageViews = await self.process(raw_text, sender_language, receiver_language, previous_text)
        return PreviewResult(preview=views.sender.main, english=views.sender.english)

    def view_for(self, views: MessageViews, viewer_language: str, *, is_sender: bool | None = None) -> ViewerView:
        """Select the half of ``views`` that a reader sees.

        Args:
            views (MessageViews): Processed message.
            viewer_language (str): The reader's language.
            is_sender (bool | None): Whether the reader wrote the message; inferred from the
                languages when omitted.

        Returns:
            ViewerView: The selected view with the text direction of the reader's language.
        """
        own: bool = (
            self.registry.is_same_language(viewer_language, views.metadata.sender_language)
            if is_sender is None
            else is_sender
        )
        half: View = views.sender if own else views.receiver
        language: Language | None = self.registry.get(viewer_language)
        direction: Literal["rtl", "ltr"] = language.text_direction if language else "ltr"
        return ViewerView(main=half.main, english=half.english, is_own_message=own, direction=direction)

    async def process_batch(self, messages: Iterable[tuple[str, str, str]]) -> list[MessageViews]:
        """Process ``(text, sender_language, receiver_language)`` items, preserving order."""
        semaphore = asyncio.Semaphore(self.BATCH_CONCURRENCY)

        async def _run(message: tuple[str, str, str]) -> MessageViews:
            async with semaphore:
                return await self.process(*message)

        return list(await asyncio.gather(*(_run(message) for message in messages)))
