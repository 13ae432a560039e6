"""
The render pass over a document.

Documents are Markdown/HTML text which is passed through untouched, apart from embedded Python:
- inline expressions `` `py EXPR` ``, which are replaced with str(EXPR)
- code chunks, fenced with ```py (or ```{py}) and ```, which are executed.
  If the last statement of a chunk is an expression, its value replaces the chunk.

Everything is evaluated top-to-bottom in a single namespace, so names defined in one chunk can be used later on.
Other fenced blocks are copied through without evaluating anything inside them.
"""

import ast
import io
import re
import traceback
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from figref.errors import CaptionLabelError, DocumentEvalError, DocumentSyntaxError

INLINE_CODE_RX = re.compile(r"`py\s+(.+?)`")
FENCE_RX = re.compile(r"^\s*(`{3,})\s*([^`]*?)\s*$")
CHUNK_INFO_STRINGS = ("py", "{py}")


@dataclass(frozen=True)
class DocumentSource:
    name: str
    contents: str

    @classmethod
    def from_string(cls, contents: str, name: str = "<string>") -> "DocumentSource":
        return cls(name=name, contents=contents)

    @classmethod
    def from_file(cls, path: str, encoding: str = "utf-8") -> "DocumentSource":
        with open(path, "r", encoding=encoding) as file:
            return cls(name=str(path), contents=file.read())

    def lines(self) -> List[str]:
        return self.contents.splitlines(keepends=True)


class DocumentRenderer:
    source: DocumentSource
    env: Dict[str, Any]

    def __init__(self, source: DocumentSource, env: Dict[str, Any]) -> None:
        self.source = source
        self.env = env

    def render(self) -> str:
        out = io.StringIO()
        lines = self.source.lines()

        i = 0
        while i < len(lines):
            fence = FENCE_RX.match(lines[i])
            if fence is None:
                out.write(self.render_inline(lines[i], line_no=i + 1))
                i += 1
                continue

            ticks, info = fence.groups()
            end = self._find_fence_end(lines, i + 1, ticks)
            if info in CHUNK_INFO_STRINGS:
                if end == len(lines):
                    raise DocumentSyntaxError(
                        self.source.name, i + 1, "code chunk is never closed with ```"
                    )
                result = self.run_chunk("".join(lines[i + 1 : end]), first_line=i + 2)
                if result is not None:
                    data = str(result)
                    out.write(data)
                    if not data.endswith("\n"):
                        out.write("\n")
            else:
                # Not ours, copy it through verbatim
                out.writelines(lines[i : end + 1])
            i = end + 1

        return out.getvalue()

    @staticmethod
    def _find_fence_end(lines: List[str], start: int, ticks: str) -> int:
        """Return the index of the line closing a fence opened with `ticks`, or len(lines) if it's never closed"""
        for j in range(start, len(lines)):
            close = FENCE_RX.match(lines[j])
            if close and not close.group(2) and len(close.group(1)) >= len(ticks):
                return j
        return len(lines)

    def render_inline(self, line: str, line_no: int) -> str:
        def replace(match: re.Match) -> str:
            code = match.group(1)
            try:
                tree = ast.increment_lineno(
                    ast.parse(code, filename=self.source.name, mode="eval"), line_no - 1
                )
                value = eval(compile(tree, self.source.name, "eval"), self.env)
            except CaptionLabelError:
                raise
            except Exception as e:
                raise DocumentEvalError(self.source.name, line_no, code) from e
            return "" if value is None else str(value)

        return INLINE_CODE_RX.sub(replace, line)

    def run_chunk(self, code: str, first_line: int) -> Optional[Any]:
        """Execute a code chunk, returning the value of the final statement if it's an expression."""
        try:
            tree = ast.parse(code, filename=self.source.name, mode="exec")
        except SyntaxError as e:
            raise DocumentEvalError(
                self.source.name, first_line + (e.lineno or 1) - 1, code
            ) from e
        # Line numbers in tracebacks should point into the document
        ast.increment_lineno(tree, first_line - 1)

        last_expr = None
        if tree.body and isinstance(tree.body[-1], ast.Expr):
            last_expr = ast.Expression(tree.body.pop().value)

        try:
            exec(compile(tree, self.source.name, "exec"), self.env)
            if last_expr is not None:
                return eval(compile(last_expr, self.source.name, "eval"), self.env)
            return None
        except CaptionLabelError:
            raise
        except Exception as e:
            raise DocumentEvalError(
                self.source.name, self._failing_line(e, first_line), code
            ) from e

    def _failing_line(self, e: BaseException, default: int) -> int:
        """The deepest document line in the traceback of `e`.

        Chunk code is compiled with the document's name and its line numbers shifted into the document,
        so frames from this document can be picked out of the traceback directly."""
        line = default
        for frame in traceback.extract_tb(e.__traceback__):
            if frame.filename == self.source.name and frame.lineno is not None:
                line = frame.lineno
        return line
