from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Sequence, Set, Union

from figref.errors import DuplicateLabelError, UnknownLabelError
from figref.html import anchor_html, caption_text_html, reference_html
from figref.numbering import DEFAULT_NUMBER_FORMAT, CaptionNumberFormat
from figref.prescan import DEFAULT_CAPTION_FUNCTIONS, prescan_labels


@dataclass(frozen=True)
class CaptionMarkup:
    """The two pieces of a generated caption, for a figure renderer to place around the figure content.

    The anchor goes before the figure, the caption text goes in the <figcaption>.
    str() gives the same thing as an inline caption."""

    label: str
    number: int
    anchor: str
    caption_text: str

    def __str__(self) -> str:
        return self.anchor + self.caption_text


class CaptionRegistry:
    """Keeps track of the figure number for each caption label in a single document.

    Usually seeded with the output of the pre-scan, so that references which come before their caption
    in the document can be resolved.
    Without a pre-scan the registry numbers labels itself, in the order they're registered.

    Each label can only be registered once per document.
    """

    number_format: CaptionNumberFormat

    # label -> figure number
    _numbers: Dict[str, int]
    # Labels that have actually had their caption generated
    _registered: Set[str]
    _next_number: int
    _prescanned: bool

    def __init__(
        self,
        prescanned: Optional[Mapping[str, int]] = None,
        number_format: CaptionNumberFormat = DEFAULT_NUMBER_FORMAT,
    ) -> None:
        self.number_format = number_format
        self._numbers = dict(prescanned) if prescanned else {}
        for label, number in self._numbers.items():
            if number < 1:
                raise ValueError(
                    f"Figure numbers start at 1, but label '{label}' was given {number}"
                )
        self._registered = set()
        self._next_number = max(self._numbers.values(), default=0) + 1
        self._prescanned = prescanned is not None

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        caption_functions: Sequence[str] = DEFAULT_CAPTION_FUNCTIONS,
        number_format: CaptionNumberFormat = DEFAULT_NUMBER_FORMAT,
    ) -> "CaptionRegistry":
        return cls(prescan_labels(lines, caption_functions), number_format)

    def register_caption(
        self,
        label: str,
        text: str,
        center: bool = False,
        color: str = "black",
        inline: bool = False,
    ) -> Union[CaptionMarkup, str]:
        """
        Assign (or confirm) the figure number for `label` and generate the caption for it.

        If `inline` is set, returns the anchor and caption as a single string to be placed directly in the text.
        Otherwise returns a CaptionMarkup, to be passed to a figure.
        """
        if not isinstance(label, str) or not label:
            raise ValueError(f"Caption labels must be non-empty strings, got {label!r}")
        if label in self._registered:
            raise DuplicateLabelError(label, "registration")

        number = self._numbers.get(label)
        if number is None:
            number = self._next_number
            self._next_number += 1
            self._numbers[label] = number
            if self._prescanned:
                print(
                    f"Warning: caption label '{label}' wasn't found by the pre-scan, numbering it Figure {number}. "
                    "This may not match where it is in the document - use a literal label on the same line as the caption call."
                )
        self._registered.add(label)

        markup = CaptionMarkup(
            label=label,
            number=number,
            anchor=anchor_html(label),
            caption_text=caption_text_html(
                self.number_format.caption_text(number, text),
                center=center,
                color=color,
            ),
        )
        if inline:
            return str(markup)
        return markup

    def lookup_reference(
        self, label: str, hyperlink: bool = False, check_exists: bool = True
    ) -> str:
        """
        Return the reference text for the figure with the given label e.g. 'Figure 3', optionally linking to it.

        Raises UnknownLabelError if the label doesn't have a number, unless `check_exists` is disabled.
        """
        number = self._numbers.get(label)
        if number is None:
            if check_exists:
                raise UnknownLabelError(label, "reference")
            print(
                f"Warning: reference to unknown caption label '{label}' with check_exists=False"
            )
            ref_text = f"{self.number_format.name} ??".lstrip()
        else:
            ref_text = self.number_format.ref_text(number)
        return reference_html(label, ref_text, hyperlink=hyperlink)

    def number_of(self, label: str) -> Optional[int]:
        return self._numbers.get(label)

    def dump_all(self) -> Dict[str, int]:
        """A copy of the full label -> figure number table, for debugging"""
        return dict(self._numbers)
