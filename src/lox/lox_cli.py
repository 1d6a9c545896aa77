"""
Lox CLI Entrypoint.

This module provides the command-line interface for the Lox front end. It scans
and parses a script and shows the result; it does not execute programs.

Features:
    - Read source from a script file or an inline string.
    - Print the parsed program in prefix notation, or the raw token list.
    - Report lexical and syntax errors on stderr.
    - Launch an interactive REPL when no script is given.

Exit codes:
    0   success
    64  usage error (more than one script argument)
    65  the source contained lexical or syntax errors

Example usage:
    lox hello.lox
    lox --tokens hello.lox
    lox -s "print 1 + 2;"
    lox --verbose

Functions:
    run_lox(source: str, show_tokens: bool = False) -> Diagnostics:
        Runs the scan/parse pipeline on source text and prints the result.

    run_file(path: str, show_tokens: bool = False) -> int:
        Reads a script and runs it, returning the exit code.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and dispatches to the REPL or to `run_file`.
"""

import argparse
import logging
import sys

from lox.emitters.sexpr_emitter import render
from lox.lox_errors import Diagnostics
from lox.lox_parser import parse_source

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_DATAERR = 65


def print_diagnostics(diagnostics: Diagnostics) -> None:
    for diagnostic in diagnostics:
        print(diagnostic, file=sys.stderr)


def run_lox(source: str, show_tokens: bool = False) -> Diagnostics:
    """
    Scan and parse `source`, printing tokens or the AST and any errors.

    Args:
        source (str): Lox source code.
        show_tokens (bool): If True, print one token per line instead of the AST.

    Returns:
        Diagnostics: The errors found; empty when the source is well formed.
    """
    result = parse_source(source)

    if show_tokens:
        for token in result.tokens:
            print(token)
    elif result.statements:
        print(render(result.statements))

    print_diagnostics(result.diagnostics)
    return result.diagnostics


def run_file(path: str, show_tokens: bool = False) -> int:
    """
    Run the script at `path` and return the process exit code.

    The file is decoded with the platform default encoding.
    """
    with open(path) as f:
        source = f.read()
    logger.debug("Read %d character(s) from %s", len(source), path)

    diagnostics = run_lox(source, show_tokens=show_tokens)
    return EXIT_DATAERR if diagnostics.had_error else EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lox", description="Scan and parse Lox source code."
    )
    parser.add_argument("script", nargs="?", help="Script file, or source text with -s")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret script as literal source"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of the syntax tree"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Lox CLI.

    - Launches the REPL if no script is passed.
    - Otherwise scans and parses the script (or the string given with `-s`).
    - Prints ``Usage: lox [script]`` and returns 64 if more than one script is given.
    """
    parser = build_arg_parser()
    args, extra = parser.parse_known_args(argv)
    if extra:
        print("Usage: lox [script]")
        return EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.script is None:
        from lox.lox_repl import start_repl

        start_repl(show_tokens=args.tokens, verbose=args.verbose)
        return EXIT_OK

    if args.string:
        diagnostics = run_lox(args.script, show_tokens=args.tokens)
        return EXIT_DATAERR if diagnostics.had_error else EXIT_OK

    return run_file(args.script, show_tokens=args.tokens)


if __name__ == "__main__":
    sys.exit(main())
