import html
import io
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, Iterator, Optional, Protocol, Union

from figref.registry import CaptionMarkup

FIGURE_ALIGNMENTS = ("default", "left", "center", "right")


class Writable(Protocol):
    def write(self, s: str, /) -> int: ...


class HtmlWriter:
    write_to: Writable

    _indent: str = ""
    # After emitting a newline with emit_newline, this is set.
    # The next call to emit_raw will emit _indent.
    # If you emit a newline *then* change the indent, the next emitted item will have the new indent applied.
    _need_indent: bool = False

    def __init__(self, write_to: Writable) -> None:
        self.write_to = write_to

    def emit_raw(self, x: str) -> None:
        """
        The function on which all emitters are based.
        """
        if self._need_indent:
            self.write_to.write(self._indent)
            self._need_indent = False
        self.write_to.write(x)

    def emit_newline(self) -> None:
        self.write_to.write("\n")
        self._need_indent = True

    def push_indent(self, n: int) -> None:
        self._indent += " " * n

    def pop_indent(self, n: int) -> None:
        if len(self._indent) < n:
            raise ValueError()
        self._indent = self._indent[:-n]

    @contextmanager
    def indent(self, n: int) -> Iterator[None]:
        self.push_indent(n)
        try:
            yield
        finally:
            self.pop_indent(n)

    @contextmanager
    def emit_tag(
        self, tag: str, props: str | None = None, indent: int = 0
    ) -> Generator[None, None, None]:
        if props:
            self.emit_raw(f"<{tag} {props}>")
        else:
            self.emit_raw(f"<{tag}>")

        try:
            if indent:
                with self.indent(indent):
                    self.emit_newline()
                    yield
                self.emit_newline()
            else:
                yield
        finally:
            self.emit_raw(f"</{tag}>")

    def emit_void_tag(self, tag: str, props: str | None = None) -> None:
        if props:
            self.emit_raw(f"<{tag} {props}>")
        else:
            self.emit_raw(f"<{tag}>")


@dataclass(frozen=True)
class FigureBlock:
    """A figure to be wrapped in <figure>.

    The content is either an image path (src) or raw HTML (content), not both.
    The caption is either generated by the registry (CaptionMarkup), hard-coded text, or absent.
    Hard-coded captions don't get an anchor or a number."""

    src: Optional[str] = None
    content: Optional[str] = None
    caption: Union[CaptionMarkup, str, None] = None
    align: str = "default"
    alt: str = ""

    def __post_init__(self) -> None:
        if (self.src is None) == (self.content is None):
            raise ValueError("A figure needs exactly one of src= or content=")
        if self.align not in FIGURE_ALIGNMENTS:
            raise ValueError(
                f"Figure alignment must be one of {FIGURE_ALIGNMENTS}, got '{self.align}'"
            )

    def __str__(self) -> str:
        buf = io.StringIO()
        emit_figure(self, HtmlWriter(buf))
        return buf.getvalue()


def emit_figure(fig: FigureBlock, writer: HtmlWriter) -> None:
    props = None
    if fig.align != "default":
        props = f'style="text-align:{fig.align};"'

    with writer.emit_tag("figure", props, indent=2):
        if isinstance(fig.caption, CaptionMarkup):
            writer.emit_raw(fig.caption.anchor)
            writer.emit_newline()

        if fig.src is not None:
            writer.emit_void_tag(
                "img", f'src="{html.escape(fig.src)}" alt="{html.escape(fig.alt)}"'
            )
        else:
            assert fig.content is not None
            writer.emit_raw(fig.content)

        if isinstance(fig.caption, CaptionMarkup):
            writer.emit_newline()
            with writer.emit_tag("figcaption"):
                writer.emit_raw(fig.caption.caption_text)
        elif fig.caption:
            writer.emit_newline()
            with writer.emit_tag("figcaption"):
                writer.emit_raw(html.escape(fig.caption, quote=False))


def figure_html(
    src: Optional[str] = None,
    caption: Union[CaptionMarkup, str, None] = None,
    align: str = "default",
    alt: str = "",
    content: Optional[str] = None,
) -> str:
    return str(FigureBlock(src=src, content=content, caption=caption, align=align, alt=alt))
