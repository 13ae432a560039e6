__all__ = [
    "CaptionMarkup",
    "CaptionRegistry",
    "CaptionCall",
    "CaptionNumberFormat",
    "CounterStyle",
    "DocumentSource",
    "FigrefConfig",
    "FigureBlock",
    "ProcessedDocument",
    "FigrefError",
    "ConfigError",
    "CaptionLabelError",
    "DuplicateLabelError",
    "UnknownLabelError",
    "DocumentEvalError",
    "DocumentSyntaxError",
    "prescan_labels",
    "scan_caption_calls",
    "process_document",
    "process_file",
    "open_document_source",
]

from figref.config import FigrefConfig
from figref.document import DocumentSource
from figref.errors import (
    CaptionLabelError,
    ConfigError,
    DocumentEvalError,
    DocumentSyntaxError,
    DuplicateLabelError,
    FigrefError,
    UnknownLabelError,
)
from figref.numbering import CaptionNumberFormat, CounterStyle
from figref.prescan import CaptionCall, prescan_labels, scan_caption_calls
from figref.registry import CaptionMarkup, CaptionRegistry
from figref.render import FigureBlock
from figref.system import ProcessedDocument, process_document, process_file


def open_document_source(path: str, encoding: str = "utf-8") -> DocumentSource:
    """A shortcut for opening a file from a real filesystem as a DocumentSource"""
    return DocumentSource.from_file(path, encoding=encoding)
