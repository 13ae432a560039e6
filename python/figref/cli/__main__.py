import argparse
import sys
from typing import Any, Dict, List, Optional

from figref.cli import render, scan
from figref.config import FigrefConfig
from figref.errors import FigrefError


def config_from_args(args: Any) -> FigrefConfig:
    overrides: Dict[str, str] = {}
    if args.caption_functions:
        overrides["caption_functions"] = args.caption_functions
    if args.no_prescan:
        overrides["prescan"] = "false"
    if args.figure_name is not None:
        overrides["figure_name"] = args.figure_name
    if args.numbering:
        overrides["numbering"] = args.numbering
    if args.separator is not None:
        overrides["separator"] = args.separator
    if args.encoding:
        overrides["encoding"] = args.encoding
    return FigrefConfig().with_overrides(overrides)


def wrap_render(args: Any) -> None:
    config = config_from_args(args)
    for input_arg in args.inputs:
        render(input_arg, args.output_dir, config)


def wrap_scan(args: Any) -> None:
    config = config_from_args(args)
    for input_arg in args.inputs:
        scan(input_arg, config)


def add_config_arguments(subcommand: argparse.ArgumentParser) -> None:
    subcommand.add_argument(
        "--caption-functions",
        type=str,
        default=None,
        help="Comma-separated names of the functions that create captions, which the pre-scan looks for. Defaults to 'fig_cap,register_caption'.",
    )
    subcommand.add_argument(
        "--no-prescan",
        action="store_true",
        help="Skip the pre-scan. Figures are numbered in the order they're rendered and forward references will fail.",
    )
    subcommand.add_argument(
        "--figure-name",
        type=str,
        default=None,
        help="The name in front of figure numbers, defaults to 'Figure'.",
    )
    subcommand.add_argument(
        "--numbering",
        type=str,
        default=None,
        choices=["arabic", "roman", "Roman", "alph", "Alph"],
        help="The numbering style for figures. The alph and Alph styles only go up to 26 figures.",
    )
    subcommand.add_argument(
        "--separator",
        type=str,
        default=None,
        help="What goes between the figure number and the caption text, defaults to ': '.",
    )
    subcommand.add_argument(
        "--encoding",
        type=str,
        default=None,
        help="The encoding of input and output files, defaults to utf-8.",
    )


def run_cli(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser("figref.cli")

    subparsers = parser.add_subparsers(required=True)

    render_subcommand = subparsers.add_parser(
        "render",
        help="Number the figure captions in a document and resolve the references to them.",
    )
    render_subcommand.add_argument(
        "inputs",
        type=str,
        nargs="+",
        help="The input documents.",
    )
    render_subcommand.add_argument(
        "-o",
        "--output-dir",
        type=str,
        required=True,
        help="The folder for processed documents. Each input is written to {output}/{input name}",
    )
    add_config_arguments(render_subcommand)
    # If the render subcommand is selected, set `args.func = wrap_render`
    render_subcommand.set_defaults(func=wrap_render)

    scan_subcommand = subparsers.add_parser(
        "scan",
        help="Show the figure numbers the pre-scan finds in a document, without rendering it.",
    )
    scan_subcommand.add_argument(
        "inputs",
        type=str,
        nargs="+",
        help="The input documents.",
    )
    add_config_arguments(scan_subcommand)
    scan_subcommand.set_defaults(func=wrap_scan)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (FigrefError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run_cli())
