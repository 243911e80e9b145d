"""
jackparse Command-Line Interface.

Provides commands to parse token files and inspect the result.

Usage:
    jackparse parse MainT.xml                  # Print the parse tree
    jackparse parse MainT.xml --format xml -o Main.xml
    jackparse check MainT.json                 # Syntax check only
    jackparse tokens MainT.xml --format json   # Echo the token stream

Environment:
    NO_COLOR             Disable coloured output
    JACKPARSE_LOG_LEVEL  Default for --log-level
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from jackparse import __version__
from jackparse.compiler import parse_tokens
from jackparse.compiler.parse_tree import ParseTree
from jackparse.compiler.parser import ENTRY_RULES
from jackparse.compiler.token_io import load_tokens, tokens_to_json, tokens_to_xml
from jackparse.utils.errors import JackParseError, ParseError

logger = logging.getLogger("jackparse")

LOG_LEVELS = ["debug", "info", "warning", "error"]
OUTPUT_FORMATS = ["text", "xml", "json"]


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.RESET = ""


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


def _default_log_level() -> str:
    level = os.environ.get("JACKPARSE_LOG_LEVEL", "warning").lower()
    return level if level in LOG_LEVELS else "warning"


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.setLevel(getattr(logging, level_name.upper()))


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="jackparse",
        description="jackparse - parse a class token stream into a parse tree",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=_default_log_level(),
        help="Logging level (default: $JACKPARSE_LOG_LEVEL or warning)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser(
        "parse",
        aliases=["p"],
        help="Parse a token file and print the tree",
    )
    parse_parser.add_argument(
        "input",
        type=Path,
        help="Token file (.xml or .json)",
    )
    parse_parser.add_argument(
        "--entry",
        choices=sorted(ENTRY_RULES),
        default="class",
        help="Grammar entry rule (default: class)",
    )
    parse_parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    parse_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the tree to this file instead of stdout",
    )

    # Check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check a token file for syntax errors",
    )
    check_parser.add_argument(
        "input",
        type=Path,
        help="Token file (.xml or .json)",
    )
    check_parser.add_argument(
        "--entry",
        choices=sorted(ENTRY_RULES),
        default="class",
        help="Grammar entry rule (default: class)",
    )

    # Tokens command
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Print the tokens read from a token file (debug)",
    )
    tokens_parser.add_argument(
        "input",
        type=Path,
        help="Token file (.xml or .json)",
    )
    tokens_parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text)",
    )

    return parser


def _render_tree(tree: ParseTree, output_format: str) -> str:
    if output_format == "xml":
        return tree.to_xml()
    if output_format == "json":
        return json.dumps(tree.to_dict(), indent=2) + "\n"
    return tree.to_text() + "\n"


def _print_error(error: JackParseError) -> None:
    print(f"{Colors.RED}Error:{Colors.RESET} {error}", file=sys.stderr)
    if isinstance(error, ParseError):
        print(f"  {error.detail}", file=sys.stderr)


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle the parse command."""
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        tokens = load_tokens(input_path)
        tree = parse_tokens(tokens, args.entry)
    except JackParseError as e:
        _print_error(e)
        return 1

    rendered = _render_tree(tree, args.format)
    if args.output:
        args.output.write_text(rendered, encoding="utf-8")
        logger.info("Wrote %s tree to %s", args.format, args.output)
    else:
        sys.stdout.write(rendered)

    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        parse_tokens(load_tokens(input_path), args.entry)
    except JackParseError as e:
        _print_error(e)
        return 1

    print(f"{Colors.GREEN}OK:{Colors.RESET} {input_path} (no syntax errors)")
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command (debug)."""
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        tokens = load_tokens(input_path)
    except JackParseError as e:
        _print_error(e)
        return 1

    if args.format == "xml":
        sys.stdout.write(tokens_to_xml(tokens))
    elif args.format == "json":
        sys.stdout.write(tokens_to_json(tokens) + "\n")
    else:
        for token in tokens:
            print(token)

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "parse": cmd_parse,
        "p": cmd_parse,
        "check": cmd_check,
        "tokens": cmd_tokens,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except Exception as e:
        logger.debug("Unhandled error in %s", args.command, exc_info=True)
        print(f"{Colors.RED}Internal error:{Colors.RESET} {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
