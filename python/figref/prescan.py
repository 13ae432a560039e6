"""
The pre-scan: a single read-through of the raw document source that happens before anything is rendered.

Rendering evaluates the document top-to-bottom, so a reference like "see Figure 3" can be evaluated before
the caption that defines Figure 3.
The pre-scan finds every caption invocation up front and numbers the labels in order of first appearance,
which means the registry already knows every number by the time the render pass starts.

This is a textual scan, not a parse of the embedded Python. It will not see
- caption calls that are split across multiple lines before the label argument
- labels that are computed at runtime, e.g. `fig_cap("plot_" + name, ...)`
Those labels are numbered lazily by the registry when they're rendered instead.
It also doesn't know about fenced blocks, so a caption call quoted inside a non-evaluated code block still counts.
"""

import ast
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Pattern, Sequence

from figref.errors import DuplicateLabelError

DEFAULT_CAPTION_FUNCTIONS = ("fig_cap", "register_caption")

# A single- or double-quoted literal, with backslash escapes, optionally with a r/u prefix.
# The whole literal is captured so escapes can be decoded the same way Python will.
_STRING_LITERAL = r"""(?P<literal>[rRuU]?(?P<quote>["'])(?:\\.|(?!(?P=quote)).)*(?P=quote))"""
_FIRST_ARG_LITERAL_RX = re.compile(r"^\s*" + _STRING_LITERAL + r"\s*(?:,|$)")
_LABEL_KWARG_RX = re.compile(r"(?:^|[\s,])label\s*=\s*" + _STRING_LITERAL)


@dataclass(frozen=True)
class CaptionCall:
    label: str
    line: int  # 1-based
    column: int  # 0-based offset of the invocation name
    function: str


def _caption_call_regex(caption_functions: Sequence[str]) -> Pattern[str]:
    if not caption_functions:
        raise ValueError("Need at least one caption function name to scan for")
    names = "|".join(re.escape(f) for f in caption_functions)
    return re.compile(rf"\b({names})\s*\(")


def _call_arguments(line: str, start: int) -> str:
    """Return the text between an opening bracket (just before `start`) and its matching close bracket.

    If the call doesn't close on this line, returns everything up to the end of the line."""
    depth = 0
    quote: Optional[str] = None
    i = start
    while i < len(line):
        c = line[i]
        if quote:
            if c == "\\":
                i += 1
            elif c == quote:
                quote = None
        elif c in "\"'":
            quote = c
        elif c in "([{":
            depth += 1
        elif c in ")]}":
            if depth == 0:
                return line[start:i]
            depth -= 1
        i += 1
    return line[start:].rstrip("\r\n")


def extract_label(arguments: str) -> Optional[str]:
    """Given the argument text of a caption call, find the literal label if there is one.

    The label is either the first positional argument, if it is a plain string literal,
    or a `label=` keyword argument with a string literal value.
    Escape sequences are decoded, so the label matches the string the document code will pass at runtime."""
    match = _FIRST_ARG_LITERAL_RX.match(arguments)
    if match is None:
        match = _LABEL_KWARG_RX.search(arguments)
    if match is None:
        return None
    try:
        label = ast.literal_eval(match.group("literal"))
    except (SyntaxError, ValueError):
        # e.g. an invalid \N{...} escape
        return None
    return label or None


def scan_caption_calls(
    lines: Iterable[str],
    caption_functions: Sequence[str] = DEFAULT_CAPTION_FUNCTIONS,
) -> List[CaptionCall]:
    """Find every caption invocation with a literal label, in order of appearance.

    Duplicates are included, see prescan_labels() for the checked version."""
    call_rx = _caption_call_regex(caption_functions)
    calls = []
    for line_idx, line in enumerate(lines):
        for match in call_rx.finditer(line):
            label = extract_label(_call_arguments(line, match.end()))
            if label is None:
                continue
            calls.append(
                CaptionCall(
                    label=label,
                    line=line_idx + 1,
                    column=match.start(),
                    function=match.group(1),
                )
            )
    return calls


def prescan_labels(
    lines: Iterable[str],
    caption_functions: Sequence[str] = DEFAULT_CAPTION_FUNCTIONS,
) -> Dict[str, int]:
    """
    Number every caption label in the document 1..N in order of first appearance.

    Raises DuplicateLabelError if any label is declared twice.
    """
    first_seen: Dict[str, CaptionCall] = {}
    numbers: Dict[str, int] = {}
    for call in scan_caption_calls(lines, caption_functions):
        if call.label in first_seen:
            raise DuplicateLabelError(
                call.label,
                "pre-scan",
                first_line=first_seen[call.label].line,
                second_line=call.line,
            )
        first_seen[call.label] = call
        numbers[call.label] = len(numbers) + 1
    return numbers
