"""Phonetic rule tables and the semantic pattern catalog.

Everything here is static data. Rules are applied in declaration order; dictionaries rely on
insertion order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

__all__: list[str] = [
    "ENGLISH_WORDS",
    "LANGUAGE_OVERRIDES",
    "LANGUAGE_PHONETIC_RULES",
    "PATTERN_CATALOG",
    "PHONETIC_VARIATIONS",
    "UNIVERSAL_DIGRAPH_RULES",
    "PatternClass",
]


@dataclass(frozen=True)
class PatternClass:
    """A semantic class with its known romanized spellings.

    Attributes:
        name (str): Class identifier.
        english (str): English gloss used as the pivot meaning.
        spellings (tuple[str, ...]): Known spellings, lowercase, without spaces.
        renderings (dict[str, str]): Language name -> romanized phrase expressing the class.
    """

    name: str
    english: str
    spellings: tuple[str, ...]
    renderings: dict[str, str] = field(default_factory=dict)


# Applied after the language rules, in this order
UNIVERSAL_DIGRAPH_RULES: Final[tuple[tuple[str, str], ...]] = (
    ("ph", "f"),
    ("ck", "k"),
    ("qu", "kw"),
    ("x", "ks"),
    ("wh", "w"),
)

LANGUAGE_PHONETIC_RULES: Final[dict[str, dict[str, str]]] = {
    "telugu": {"vu": "u", "nna": "na", "lla": "la", "rra": "ra", "avu": "aavu"},
    "hindi": {"aa": "a", "ee": "i", "oo": "u", "ai": "e", "au": "o"},
    "tamil": {"zh": "l", "ng": "n"},
    "bengali": {"w": "v", "v": "b"},
    "arabic": {"aa": "a", "kh": "x", "gh": "g"},
    "russian": {"yo": "e", "iy": "i"},
}

# Letter -> commonly confused spellings, used to generate candidate variants
PHONETIC_VARIATIONS: Final[dict[str, tuple[str, ...]]] = {
    "a": ("aa", "ah", "e", "u"),
    "e": ("ee", "i", "a", "ae"),
    "i": ("ee", "y", "ie", "e"),
    "o": ("oo", "ou", "u", "au"),
    "u": ("oo", "ou", "o", "w"),
    "b": ("p", "v", "bh"),
    "c": ("k", "s", "ch", "q"),
    "d": ("t", "dh", "th"),
    "f": ("ph", "v"),
    "g": ("j", "gh", "k"),
    "h": ("",),
    "j": ("g", "jh", "z"),
    "k": ("c", "q", "kh", "ck"),
    "l": ("ll", "r"),
    "m": ("n", "mm"),
    "n": ("m", "nn", "ng"),
    "p": ("b", "ph", "pp"),
    "q": ("k", "c", "qu"),
    "r": ("l", "rr"),
    "s": ("c", "z", "ss", "sh"),
    "t": ("d", "th", "tt"),
    "v": ("b", "w", "f"),
    "w": ("v", "u", "oo"),
    "x": ("ks", "z"),
    "y": ("i", "ee", "j"),
    "z": ("s", "j", "ts"),
    "ch": ("c", "sh", "tch", "chh"),
    "sh": ("s", "ch", "shh"),
    "th": ("t", "d", "dh"),
    "ph": ("f", "p"),
    "gh": ("g", "h"),
    "kh": ("k", "q"),
    "ng": ("n", "nk"),
    "ck": ("k", "c", "q"),
    "qu": ("kw", "k", "q"),
}

# Common English words; they count as known spellings and are never corrected
ENGLISH_WORDS: Final[frozenset[str]] = frozenset(
    {
        "the", "is", "are", "was", "were", "have", "has", "had", "do", "does", "did",
        "a", "an", "to", "for", "in", "on", "with", "at", "by", "from", "of",
        "hello", "hi", "hey", "yes", "no", "ok", "okay", "thanks", "thank",
        "you", "your", "me", "my", "we", "i", "am", "be", "and", "or", "but", "not",
        "what", "when", "where", "why", "how", "who", "which", "this", "that",
        "good", "morning", "evening", "night", "please", "sorry", "bye", "love",
        "like", "want", "need", "can", "will", "would", "could", "should",
        "bro", "dude", "buddy", "friend", "lol", "it", "so", "too", "very",
    }
)  # fmt: skip

# Whole-word fixes applied before catalog matching: language -> {misspelling: spelling}
LANGUAGE_OVERRIDES: Final[dict[str, dict[str, str]]] = {
    "telugu": {
        "bagunnava": "baagunnava",
        "elunnaru": "elaunnaru",
        "chala": "chaala",
    },
    "hindi": {
        "kaisey": "kaise",
        "theek": "thik",
        "kya hal": "kya haal",
    },
    "tamil": {
        "vanakam": "vanakkam",
    },
}

PATTERN_CATALOG: Final[tuple[PatternClass, ...]] = (
    PatternClass(
        name="greeting",
        english="hello",
        spellings=(
            "hello",
            "hi",
            "hey",
            "hola",
            "namaste",
            "namaskar",
            "namaskaram",
            "vanakkam",
            "salam",
            "shalom",
            "marhaba",
            "sawubona",
            "zdravo",
            "privet",
        ),
        renderings={
            "telugu": "namaskaram",
            "hindi": "namaste",
            "marathi": "namaskar",
            "nepali": "namaste",
            "tamil": "vanakkam",
            "kannada": "namaskara",
            "malayalam": "namaskaram",
            "bengali": "nomoshkar",
            "gujarati": "namaste",
            "punjabi": "sat sri akal",
            "odia": "namaskar",
            "urdu": "salaam",
            "arabic": "marhaba",
            "hebrew": "shalom",
            "russian": "privet",
            "ukrainian": "pryvit",
            "greek": "yia sou",
            "japanese": "konnichiwa",
            "spanish": "hola",
            "french": "bonjour",
            "german": "hallo",
            "italian": "ciao",
            "portuguese": "ola",
            "zulu": "sawubona",
            "swahili": "jambo",
        },
    ),
    PatternClass(
        name="howareyou",
        english="how are you",
        spellings=(
            "howareyou",
            "howru",
            "howreyou",
            "kemon",
            "kemonacho",
            "kaisaho",
            "kaiseho",
            "keisaho",
            "keiseho",
            "elaunnaru",
            "eppidiirukkireenga",
            "eppadiirukkeenga",
            "bagunnava",
            "baagunnava",
            "bagunnaava",
            "bagunnara",
            "baagunnara",
            "kakdela",
        ),
        renderings={
            "telugu": "baagunnava",
            "hindi": "kaise ho",
            "urdu": "kaise ho",
            "tamil": "eppadi irukkeenga",
            "bengali": "kemon acho",
            "kannada": "hegiddira",
            "malayalam": "sukhamano",
            "marathi": "kasa aahes",
            "russian": "kak dela",
            "japanese": "ogenki desu ka",
            "spanish": "como estas",
            "french": "comment ca va",
            "german": "wie geht es",
            "italian": "come stai",
            "portuguese": "como vai",
        },
    ),
    PatternClass(
        name="thanks",
        english="thank you",
        spellings=(
            "thanks",
            "thankyou",
            "thanku",
            "thx",
            "dhanyavad",
            "dhanyawad",
            "dhanyavaadaalu",
            "shukriya",
            "shukran",
            "nandri",
            "vandanalu",
            "dhonnobad",
            "spasibo",
        ),
        renderings={
            "telugu": "dhanyavaadaalu",
            "hindi": "dhanyavaad",
            "marathi": "dhanyavaad",
            "tamil": "nandri",
            "bengali": "dhonnobad",
            "kannada": "dhanyavaadagalu",
            "malayalam": "nanni",
            "urdu": "shukriya",
            "arabic": "shukran",
            "russian": "spasibo",
            "japanese": "arigatou",
            "spanish": "gracias",
            "french": "merci",
            "german": "danke",
            "italian": "grazie",
            "portuguese": "obrigado",
        },
    ),
    PatternClass(
        name="good",
        english="good",
        spellings=(
            "good",
            "great",
            "nice",
            "accha",
            "acha",
            "badhiya",
            "bagundi",
            "nalla",
            "thik",
            "mast",
            "super",
            "khorosho",
        ),
        renderings={
            "telugu": "bagundi",
            "hindi": "accha",
            "tamil": "nalla",
            "bengali": "bhalo",
            "russian": "khorosho",
            "spanish": "bueno",
            "french": "bien",
            "german": "gut",
        },
    ),
)
