"""HTML fragments for captions and references. HTML is the only output format."""

import html
import re

# Named colours, hex colours, and rgb()/hsl() style functions.
_VALID_COLOR_REGEX = re.compile(r"[#\w(),.% -]+")

CENTER_STYLE = "text-align:center;display:inline-block;width:100%;"


def check_color(color: str) -> str:
    if not _VALID_COLOR_REGEX.fullmatch(color):
        raise ValueError(
            f"Can't use '{color}' as a caption color - it doesn't look like a CSS color"
        )
    return color


def anchor_html(label: str) -> str:
    """An empty named anchor that references can link to with #label"""
    return f'<a name="{html.escape(label)}"></a>'


def caption_text_html(caption: str, center: bool = False, color: str = "black") -> str:
    """Wrap the full caption, e.g. 'Figure 1: some text', in a styled span.

    The caption text is escaped."""
    style = ""
    if center:
        style += CENTER_STYLE
    style += f"color:{check_color(color)};"
    return f'<span style="{style}">{html.escape(caption, quote=False)}</span>'


def reference_html(label: str, ref_text: str, hyperlink: bool = False) -> str:
    if hyperlink:
        return f'<a href="#{html.escape(label)}">{html.escape(ref_text, quote=False)}</a>'
    return html.escape(ref_text, quote=False)
