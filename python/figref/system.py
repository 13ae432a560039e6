"""The phases of processing a document:

1. Pre-scanning
   The raw source is read once, as text, and every caption call with a literal label is found.
   Labels are numbered in order of first appearance. A duplicated label stops processing here.
2. Setup
   A CaptionRegistry is seeded with the pre-scanned numbers, and the plugins are collected into
   the namespace that embedded document code is evaluated in.
   The registry belongs to this run only - it isn't shared between documents.
3. Rendering
   The document is evaluated top-to-bottom. Captions confirm their pre-scanned number as they're generated,
   references look up numbers that are already known even if their caption comes later.
   Any caption error aborts the whole run, and nothing is written out."""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from figref.config import FigrefConfig, read_directives
from figref.document import DocumentRenderer, DocumentSource
from figref.env_plugins import EnvPlugin
from figref.plugins import CaptionPlugin, PrimitivesPlugin
from figref.prescan import prescan_labels
from figref.registry import CaptionRegistry


@dataclass(frozen=True)
class ProcessedDocument:
    output: str
    figures: Dict[str, int]
    """The final label -> figure number table"""


def process_document(
    source: DocumentSource,
    config: FigrefConfig = FigrefConfig(),
    plugins: Sequence[EnvPlugin] = (),
) -> ProcessedDocument:
    lines = source.lines()

    directives = read_directives(lines)
    if directives:
        print(f"Taking settings from {source.name} directives: {directives}")
        config = config.with_overrides(directives)

    # Phase 1 - Pre-scanning
    prescanned: Optional[Dict[str, int]] = None
    if config.prescan:
        prescanned = prescan_labels(lines, config.caption_functions)

    # Phase 2 - Setup
    registry = CaptionRegistry(prescanned, config.number_format())
    env = EnvPlugin._make_env([PrimitivesPlugin(), *plugins, CaptionPlugin(registry)])
    env["registry"] = registry

    # Phase 3 - Rendering
    output = DocumentRenderer(source, env).render()

    return ProcessedDocument(output=output, figures=registry.dump_all())


def process_file(
    input_path: str,
    output_path: str,
    config: FigrefConfig = FigrefConfig(),
    plugins: Sequence[EnvPlugin] = (),
) -> ProcessedDocument:
    source = DocumentSource.from_file(input_path, encoding=config.encoding)
    processed = process_document(source, config, plugins)
    # Only written once the whole document has succeeded
    with open(output_path, "w", encoding=config.encoding) as f:
        f.write(processed.output)
    return processed
