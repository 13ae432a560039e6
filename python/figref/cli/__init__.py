import pathlib
from typing import List

from figref.config import FigrefConfig, read_directives
from figref.document import DocumentSource
from figref.errors import ConfigError
from figref.prescan import CaptionCall, scan_caption_calls
from figref.registry import CaptionRegistry
from figref.system import process_file


def autodetect_output(output_arg: str, input_path: pathlib.Path) -> pathlib.Path:
    """
    Given a --output-dir argument and an input document, determine where the processed document goes: {output}/{input name}
    """
    output_dir = pathlib.Path(output_arg)
    if output_dir.exists() and not output_dir.is_dir():
        raise ConfigError(
            f"Output directory {output_dir} exists but isn't a directory. Please make it a folder."
        )
    elif not output_dir.exists():
        print(f"Output directory {output_dir} does not exist, auto creating...")
        output_dir.mkdir(parents=True, exist_ok=True)

    output_path = output_dir / input_path.name
    if output_path.resolve() == input_path.resolve():
        raise ConfigError(
            f"Refusing to overwrite the input file {input_path}, please choose a different --output-dir"
        )
    print(f"Chose output file {output_path}")
    return output_path


def render(input_arg: str, output_arg: str, config: FigrefConfig) -> None:
    input_path = pathlib.Path(input_arg)
    if not input_path.is_file():
        raise ConfigError(f"Supplied input '{input_arg}' isn't a file")
    output_path = autodetect_output(output_arg, input_path)

    processed = process_file(str(input_path), str(output_path), config)
    print(f"Numbered {len(processed.figures)} figure(s) in {input_path}")


def scan(input_arg: str, config: FigrefConfig) -> List[CaptionCall]:
    """Pre-scan a document and print the numbering it would get, without rendering anything."""
    if not pathlib.Path(input_arg).is_file():
        raise ConfigError(f"Supplied input '{input_arg}' isn't a file")
    source = DocumentSource.from_file(input_arg, encoding=config.encoding)
    lines = source.lines()
    config = config.with_overrides(read_directives(lines))

    calls = scan_caption_calls(lines, config.caption_functions)
    registry = CaptionRegistry.from_lines(
        lines, config.caption_functions, config.number_format()
    )
    call_lines = {}
    for call in calls:
        call_lines.setdefault(call.label, call.line)

    table = registry.dump_all()
    if not table:
        print(f"No caption calls with literal labels found in {input_arg}")
    for label, number in table.items():
        print(
            f"{registry.lookup_reference(label)}\t{label}\t(line {call_lines[label]})"
        )
    return calls
