from __future__ import annotations

from models.backend_models import BidirectionalRequest, TranslateResponse
from models.input_models import InputAnalysis
from models.message_models import MessageMetadata, MessageViews, PreviewResult, View
from models.translation_models import BidirectionalResult, TranslationResult


def test_message_views_to_dict_uses_camel_case() -> None:
    views = MessageViews(
        sender=View(main="బాగున్నావా", english="how are you"),
        receiver=View(main="how are you", english="how are you"),
        metadata=MessageMetadata(
            original_text="bagunnava",
            was_transliterated=True,
            was_translated=True,
            sender_language="telugu",
            receiver_language="english",
        ),
    )

    payload = views.to_dict()

    assert payload["sender"] == {"main": "బాగున్నావా", "english": "how are you"}
    assert payload["metadata"] == {
        "originalText": "bagunnava",
        "wasTransliterated": True,
        "wasTranslated": True,
        "senderLanguage": "telugu",
        "receiverLanguage": "english",
    }
    assert MessageViews.from_dict(payload) == views


def test_message_views_empty() -> None:
    views = MessageViews.empty("telugu", "english")

    assert views.sender == View()
    assert views.receiver.main == ""
    assert views.metadata.original_text == ""
    assert views.metadata.sender_language == "telugu"
    assert views.metadata.receiver_language == "english"
    assert views.metadata.was_translated is False


def test_preview_result_to_json() -> None:
    assert PreviewResult(preview="నమస్తే", english="hello").to_json(ensure_ascii=False) == (
        '{"preview": "నమస్తే", "english": "hello"}'
    )


def test_backend_wire_models() -> None:
    request = BidirectionalRequest(text="hola", sender_language="spanish", receiver_language="english")

    assert request.to_dict() == {
        "text": "hola",
        "senderLanguage": "spanish",
        "receiverLanguage": "english",
        "mode": "bidirectional",
    }
    assert TranslateResponse.from_dict({"translatedText": "hello"}).translated_text == "hello"


def test_translation_result_failed() -> None:
    result = TranslationResult.failed("hola", "spanish", "klingon", "Target language not supported: klingon")

    assert result.text == result.original_text == "hola"
    assert result.is_translated is False
    assert result.confidence == 0.0
    assert result.route == "unsupported"


def test_bidirectional_result_echo() -> None:
    result = BidirectionalResult.echo("hola", "offline")

    assert result.sender_view == result.receiver_view == result.english_core == "hola"
    assert result.was_transliterated is False
    assert result.was_translated is False
    assert result.error == "offline"


def test_input_analysis_description_and_romanized_flag() -> None:
    analysis = InputAnalysis(
        method="mixed-code", original_text="Bagunnava bro?", normalized_text="Bagunnava bro?", has_latin_chars=True
    )

    assert analysis.description == "Code-Mixed"
    assert analysis.is_romanized is True
    assert InputAnalysis(method="native-script", original_text="", normalized_text="").is_romanized is False
