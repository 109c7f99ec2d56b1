"""CLI entrypoint for indent_tree."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from indent_tree.builder import ParseOptions, parse_file
from indent_tree.config import load_config
from indent_tree.errors import ExtraIndentationError
from indent_tree.style import parse_style
from indent_tree.visualizer import export_tree_json, print_tree


LOGGER = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse an indented text file into a tree.")
    parser.add_argument("input_path", type=Path, help="Path to the indented text file.")
    parser.add_argument(
        "--style",
        default=None,
        help="Indent style: auto, tabs[:N] or spaces[:N]. Defaults to INDENT_TREE_STYLE or auto.",
    )
    parser.add_argument(
        "--ignore-extra-indentation",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Treat indentation jumps of more than one level as a single level.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the tree as JSON to this path.")
    parser.add_argument("--quiet", action="store_true", help="Do not print the tree.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity. Defaults to INDENT_TREE_LOG_LEVEL or WARNING.",
    )
    return parser


def _configure_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_cli(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(load_dotenv=True)
        style = parse_style(args.style) if args.style is not None else config.style
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    _configure_logging(args.log_level or config.log_level)

    ignore_extra = config.ignore_extra_indentation
    if args.ignore_extra_indentation is not None:
        ignore_extra = args.ignore_extra_indentation
    options = ParseOptions(ignore_extra_indentation=ignore_extra)

    try:
        result = parse_file(
            args.input_path,
            style=style,
            options=options,
            encoding=config.encoding,
            max_line_length=config.max_line_length,
        )
    except LookupError as exc:
        print(f"Unknown encoding: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"Failed to read input file: {exc}", file=sys.stderr)
        return 1

    if isinstance(result.error, ExtraIndentationError):
        print(f"{args.input_path}: {result.error}", file=sys.stderr)
        return 3
    if result.error is not None:
        print(f"Failed to read input file: {result.error}", file=sys.stderr)
        return 1

    LOGGER.info(
        "Parsed %s: %d lines, %d nodes, style=%s",
        args.input_path,
        result.line_count,
        result.node_count,
        result.style,
    )
    if not args.quiet:
        print_tree(result.root)

    if args.output is not None:
        try:
            export_tree_json(result, args.output)
        except OSError as exc:
            print(f"Failed to write JSON output: {exc}", file=sys.stderr)
            return 1
        print(f"JSON exported to: {args.output}")

    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
