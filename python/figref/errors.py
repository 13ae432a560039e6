from typing import Optional


class FigrefError(Exception):
    """Base class for every error figref raises on purpose."""


class ConfigError(FigrefError, ValueError):
    """A setting or an input/output path is unusable. Raised before any document is rendered."""


class CaptionLabelError(FigrefError, ValueError):
    """A caption label was used in a way that breaks the numbering of the whole document.

    These errors are never recovered from: figure numbers are a whole-document property,
    so the only fix is to correct the document and process it again."""

    label: str
    operation: str

    def __init__(self, label: str, operation: str, message: str) -> None:
        super().__init__(message)
        self.label = label
        self.operation = operation


class DuplicateLabelError(CaptionLabelError):
    def __init__(
        self,
        label: str,
        operation: str,
        first_line: Optional[int] = None,
        second_line: Optional[int] = None,
    ) -> None:
        if first_line is not None and second_line is not None:
            where = f" (first on line {first_line}, again on line {second_line})"
        else:
            where = ""
        super().__init__(
            label,
            operation,
            f"Caption label '{label}' is used more than once{where} - "
            f"found during {operation}. Labels must be unique within a document.",
        )
        self.first_line = first_line
        self.second_line = second_line


class UnknownLabelError(CaptionLabelError):
    def __init__(self, label: str, operation: str = "reference") -> None:
        super().__init__(
            label,
            operation,
            f"Caption label '{label}' has no figure - found during {operation}. "
            "Check for a typo, or that the caption is declared with a literal label.",
        )


class DocumentEvalError(FigrefError):
    """Python code embedded in a document raised an exception.

    The original exception is kept as __cause__."""

    source_name: str
    line: int
    code: str

    def __init__(self, source_name: str, line: int, code: str) -> None:
        super().__init__(
            f"Error evaluating code at {source_name}:{line}: {code.strip()!r}"
        )
        self.source_name = source_name
        self.line = line
        self.code = code


class DocumentSyntaxError(FigrefError):
    """The document itself is malformed, e.g. a code chunk that is never closed."""

    def __init__(self, source_name: str, line: int, reason: str) -> None:
        super().__init__(f"{source_name}:{line}: {reason}")
        self.source_name = source_name
        self.line = line
