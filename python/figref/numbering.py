import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Sequence


class ManualNumbering(Protocol):
    def __getitem__(self, num: int) -> str: ...


class BasicManualNumbering(ManualNumbering):
    lookup: Sequence[str]

    def __init__(self, lookup: Sequence[str]) -> None:
        self.lookup = lookup

    def __getitem__(self, num: int) -> str:
        if num < 0:
            raise ValueError(f"Can't represent number {num} - too small")
        if num >= len(self.lookup):
            raise ValueError(f"Can't represent number {num} - too large")
        return self.lookup[num]


# Roman numbering based on https://www.geeksforgeeks.org/python-program-to-convert-integer-to-roman/
ROMAN_NUMBER_LOWER = [
    (1000, "m"),
    (900, "cm"),
    (500, "d"),
    (400, "cd"),
    (100, "c"),
    (90, "xc"),
    (50, "l"),
    (40, "xl"),
    (10, "x"),
    (9, "ix"),
    (5, "v"),
    (4, "iv"),
    (1, "i"),
]


class RomanManualNumbering(ManualNumbering):
    upper: bool

    def __init__(self, upper: bool) -> None:
        self.upper = upper

    def __getitem__(self, num: int) -> str:
        if num < 0:
            raise ValueError(f"Can't represent {num} with roman numerals")
        if num == 0:
            return "0"

        s = ""
        for divisor, roman in ROMAN_NUMBER_LOWER:
            s += roman * (num // divisor)
            num = num % divisor
        if self.upper:
            s = s.upper()

        return s


class ArabicManualNumbering(ManualNumbering):
    def __getitem__(self, num: int) -> str:
        return str(num)


ARABIC_NUMBERING = ArabicManualNumbering()
LOWER_ROMAN_NUMBERING = RomanManualNumbering(upper=False)
UPPER_ROMAN_NUMBERING = RomanManualNumbering(upper=True)
LOWER_ALPH_NUMBERING = BasicManualNumbering("0" + string.ascii_lowercase)
UPPER_ALPH_NUMBERING = BasicManualNumbering("0" + string.ascii_uppercase)


class CounterStyle(Enum):
    """
    Possible numbering styles for the figure counter. This is only for the number itself, not the name in front of it.

    The alphabetic styles (alph, Alph) have one letter per number, so they stop at 26 figures.
    """

    Arabic = "arabic"
    AlphLower = "alph"
    AlphUpper = "Alph"
    RomanLower = "roman"
    RomanUpper = "Roman"

    def __getitem__(self, num: int) -> str:
        try:
            return COUNTER_STYLE_TO_MANUAL[self][num]
        except ValueError as e:
            raise ValueError(
                f"Figure {num} can't be written in the '{self.value}' numbering style: {e}"
            ) from e


COUNTER_STYLE_TO_MANUAL = {
    CounterStyle.Arabic: ARABIC_NUMBERING,
    CounterStyle.AlphLower: LOWER_ALPH_NUMBERING,
    CounterStyle.AlphUpper: UPPER_ALPH_NUMBERING,
    CounterStyle.RomanLower: LOWER_ROMAN_NUMBERING,
    CounterStyle.RomanUpper: UPPER_ROMAN_NUMBERING,
}


@dataclass(frozen=True)
class CaptionNumberFormat:
    """
    How a figure number is turned into text, both for captions and for references to them.
    """

    name: str = "Figure"
    """The name references use as a prefix e.g. 'Figure' to produce 'Figure 3'. May be empty."""

    style: CounterStyle = field(default=CounterStyle.Arabic)
    """The style of the number itself."""

    separator: str = ": "
    """What goes between the number and the caption text e.g. 'Figure 3: some text'"""

    def ref_text(self, num: int) -> str:
        if self.name:
            return f"{self.name} {self.style[num]}"
        return self.style[num]

    def caption_text(self, num: int, text: str) -> str:
        return f"{self.ref_text(num)}{self.separator}{text}"


DEFAULT_NUMBER_FORMAT = CaptionNumberFormat()
