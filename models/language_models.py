"""Language registry data models.

Defines the immutable Language record shared by every pipeline stage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

__all__: list[str] = ["Language", "LanguageRecord", "ScriptFamily"]

type ScriptFamily = Literal["latin", "native"]
type LanguageRecord = dict[str, Any]


@dataclass(frozen=True)
class Language:
    """One supported language.

    Attributes:
        code (str): ISO-style code, lowercase (e.g. 'te', 'kok').
        name (str): English name, lowercase (e.g. 'telugu').
        native_name (str): Endonym, lowercased where the script has case.
        script (ScriptFamily): 'latin' or 'native'.
        script_name (str): Script label such as 'Telugu', 'Devanagari' or 'Latin'.
        rtl (bool): Whether the script is written right to left.
    """

    code: str
    name: str
    native_name: str
    script: ScriptFamily
    script_name: str
    rtl: bool = False

    @property
    def is_latin(self) -> bool:
        return self.script == "latin"

    @property
    def text_direction(self) -> Literal["rtl", "ltr"]:
        return "rtl" if self.rtl else "ltr"
