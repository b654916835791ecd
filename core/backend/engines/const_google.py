"""Constants for the Google web translation client.

``LANGUAGES`` maps the language codes accepted by the web endpoint to their English names.
``DEFAULT_SERVICE_URLS`` lists the regional service hosts; the top-level domain of each is accepted
as ``TRANSLATION.GOOGLE_SUFFIX``.
"""

from __future__ import annotations

from typing import Final

__all__: list[str] = ["DEFAULT_SERVICE_URLS", "LANGUAGES"]

DEFAULT_SERVICE_URLS: Final[tuple[str, ...]] = (
    "translate.google.com",
    "translate.google.ac",
    "translate.google.ae",
    "translate.google.at",
    "translate.google.be",
    "translate.google.bg",
    "translate.google.ca",
    "translate.google.ch",
    "translate.google.cl",
    "translate.google.co.id",
    "translate.google.co.il",
    "translate.google.co.in",
    "translate.google.co.jp",
    "translate.google.co.kr",
    "translate.google.co.th",
    "translate.google.co.uk",
    "translate.google.co.za",
    "translate.google.com.ar",
    "translate.google.com.au",
    "translate.google.com.br",
    "translate.google.com.eg",
    "translate.google.com.hk",
    "translate.google.com.mx",
    "translate.google.com.pk",
    "translate.google.com.sa",
    "translate.google.com.sg",
    "translate.google.com.tr",
    "translate.google.com.tw",
    "translate.google.com.ua",
    "translate.google.cz",
    "translate.google.de",
    "translate.google.dk",
    "translate.google.es",
    "translate.google.fi",
    "translate.google.fr",
    "translate.google.gr",
    "translate.google.hu",
    "translate.google.ie",
    "translate.google.it",
    "translate.google.lk",
    "translate.google.nl",
    "translate.google.no",
    "translate.google.pl",
    "translate.google.pt",
    "translate.google.ro",
    "translate.google.ru",
    "translate.google.se",
)

LANGUAGES: Final[dict[str, str]] = {
    "af": "afrikaans",
    "am": "amharic",
    "ar": "arabic",
    "as": "assamese",
    "az": "azerbaijani",
    "be": "belarusian",
    "bg": "bulgarian",
    "bho": "bhojpuri",
    "bn": "bengali",
    "bs": "bosnian",
    "ca": "catalan",
    "cs": "czech",
    "cy": "welsh",
    "da": "danish",
    "de": "german",
    "doi": "dogri",
    "dv": "dhivehi",
    "el": "greek",
    "en": "english",
    "eo": "esperanto",
    "es": "spanish",
    "et": "estonian",
    "eu": "basque",
    "fa": "persian",
    "fi": "finnish",
    "fr": "french",
    "ga": "irish",
    "gd": "scots gaelic",
    "gl": "galician",
    "gom": "konkani",
    "gu": "gujarati",
    "ha": "hausa",
    "haw": "hawaiian",
    "hi": "hindi",
    "hr": "croatian",
    "ht": "haitian creole",
    "hu": "hungarian",
    "hy": "armenian",
    "id": "indonesian",
    "ig": "igbo",
    "is": "icelandic",
    "it": "italian",
    "iw": "hebrew",
    "ja": "japanese",
    "jw": "javanese",
    "ka": "georgian",
    "kk": "kazakh",
    "km": "khmer",
    "kn": "kannada",
    "ko": "korean",
    "ku": "kurdish",
    "ky": "kyrgyz",
    "la": "latin",
    "lb": "luxembourgish",
    "lo": "lao",
    "lt": "lithuanian",
    "lv": "latvian",
    "mai": "maithili",
    "mg": "malagasy",
    "mi": "maori",
    "mk": "macedonian",
    "ml": "malayalam",
    "mn": "mongolian",
    "mr": "marathi",
    "ms": "malay",
    "mt": "maltese",
    "my": "burmese",
    "ne": "nepali",
    "nl": "dutch",
    "no": "norwegian",
    "or": "odia",
    "pa": "punjabi",
    "pl": "polish",
    "ps": "pashto",
    "pt": "portuguese",
    "ro": "romanian",
    "ru": "russian",
    "sa": "sanskrit",
    "sd": "sindhi",
    "si": "sinhala",
    "sk": "slovak",
    "sl": "slovenian",
    "sm": "samoan",
    "sn": "shona",
    "so": "somali",
    "sq": "albanian",
    "sr": "serbian",
    "st": "sesotho",
    "su": "sundanese",
    "sv": "swedish",
    "sw": "swahili",
    "ta": "tamil",
    "te": "telugu",
    "tg": "tajik",
    "th": "thai",
    "ti": "tigrinya",
    "tl": "filipino",
    "tr": "turkish",
    "tt": "tatar",
    "ug": "uyghur",
    "uk": "ukrainian",
    "ur": "urdu",
    "uz": "uzbek",
    "vi": "vietnamese",
    "xh": "xhosa",
    "yi": "yiddish",
    "yo": "yoruba",
    "zh-cn": "chinese (simplified)",
    "zh-tw": "chinese (traditional)",
    "zu": "zulu",
}
