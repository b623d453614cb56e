"""
oong CLI Entrypoint.

This module provides the developer command-line interface of the oong front end.
It never runs programs; it shows what the lexer and parser make of them.

Features:
    - Read source from files or inline strings.
    - Dump the token stream, one token per line.
    - Dump the AST as indented JSON (default).
    - Check a file and report "Parse OK" or the parse error.

Example usage:
    oong hello.js
    oong -s "print(42)"
    oong --tokens -s "let x = 0x1F;"
    oong --check --strict app.ts
    oong --verbose app.ts

Exit status:
    0 on success, 1 on a parse error, 2 when the source file cannot be read.

Functions:
    run_oong(source: str, is_string: bool = False, mode: str = "ast", strict: bool = False) -> int:
        Runs the selected mode over a file or an inline string.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, configures logging and invokes `run_oong`.
"""

import argparse
import json
import logging
import sys

from oong.oong_ast import to_json_ready
from oong.oong_lexer import tokenize
from oong.oong_parser import Parser

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_READ_ERROR = 2

MODES = ("ast", "tokens", "check")


def read_source(source: str, is_string: bool = False) -> str:
    """Returns `source` itself with `is_string`, otherwise the contents of the file it names."""
    if is_string:
        return source
    with open(source, encoding="utf-8") as f:
        return f.read()


def run_oong(
    source: str,
    is_string: bool = False,
    mode: str = "ast",
    strict: bool = False,
) -> int:
    """
    Run the oong front end over one source unit and print the result.

    Args:
        source (str): A file path, or the source code itself when `is_string` is True.
        is_string (bool): If True, treats `source` as raw code instead of a path. Defaults to False.
        mode (str): "ast" (JSON tree), "tokens" (token dump) or "check" (OK / error line).
        strict (bool): Start the lexer in strict mode. Defaults to False.

    Returns:
        int: The process exit status.

    Side Effects:
        - Prints results to stdout and errors to stderr.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r}")
    try:
        text = read_source(source, is_string)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {source}: {exc}", file=sys.stderr)
        return EXIT_READ_ERROR

    if mode == "tokens":
        for token in tokenize(text, strict):
            print(repr(token))
        return EXIT_OK

    result = Parser(text, strict).parse()
    if mode == "check":
        print("Parse OK" if result.ok else f"Parse error: {result.error}")
        return EXIT_OK if result.ok else EXIT_PARSE_ERROR

    if not result.ok:
        print(f"Parse error: {result.error}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    print(json.dumps(to_json_ready(result.tree), indent=2))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the oong CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens` / `--ast` / `--check`: Output mode, `--ast` by default.
        - `--strict`: Lex in strict mode from the first token.
        - `--verbose`: Log parser activity (backtracking, skipped tokens) at DEBUG level.
    """
    parser = argparse.ArgumentParser(prog="oong", description="oong lexer and parser")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--tokens",
        dest="mode",
        action="store_const",
        const="tokens",
        help="Print one token per line",
    )
    output.add_argument(
        "--ast",
        dest="mode",
        action="store_const",
        const="ast",
        help="Print the AST as JSON (default)",
    )
    output.add_argument(
        "--check",
        dest="mode",
        action="store_const",
        const="check",
        help="Only report whether the source parses",
    )
    parser.set_defaults(mode="ast")
    parser.add_argument("--strict", action="store_true", help="Lex in strict mode")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("mode=%s strict=%s", args.mode, args.strict)

    return run_oong(
        source=args.source,
        is_string=args.string,
        mode=args.mode,
        strict=args.strict,
    )


if __name__ == "__main__":
    sys.exit(main())
