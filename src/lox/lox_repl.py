"""
Interactive prompt for the Lox front end.

Each entry is scanned and parsed on its own with a fresh `Diagnostics`, so an
error in one entry never marks later entries as failed. Entries that open a
brace continue on following lines until the braces balance.

Commands:
    exit, quit   leave the REPL (EOF and Ctrl-C also leave)
    :tokens      toggle printing tokens instead of the syntax tree
    :verbose     toggle printing a summary after each entry
"""

import logging

from lox.emitters.sexpr_emitter import render
from lox.lox_constants import TokenType
from lox.lox_errors import Diagnostics
from lox.lox_parser import ParseResult, parse_source
from lox.lox_scanner import scan

logger = logging.getLogger(__name__)

PROMPT = "> "
CONTINUATION_PROMPT = "... "


def open_braces(line: str) -> int:
    """Counts `{` minus `}` tokens, ignoring braces in strings and comments."""
    depth = 0
    for token in scan(line, Diagnostics()):
        if token.type == TokenType.LEFT_BRACE:
            depth += 1
        elif token.type == TokenType.RIGHT_BRACE:
            depth -= 1
    return depth


def read_entry() -> str | None:
    """Reads one entry, following continuation lines while braces are open.

    Returns:
        str | None: The entry text, or None if the user asked to leave.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        line = input(PROMPT if not src_lines else CONTINUATION_PROMPT)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += open_braces(line)
        if brace_count <= 0:
            break
    return "\n".join(src_lines)


def show_result(result: ParseResult, show_tokens: bool) -> None:
    if show_tokens:
        for token in result.tokens:
            print(token)
    elif any(stmt is not None for stmt in result.statements):
        print(render(result.statements))

    for diagnostic in result.diagnostics:
        print(f"[error] >>> {diagnostic}")


def start_repl(show_tokens: bool = False, verbose: bool = False) -> None:
    print("Lox REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_entry()
            if src is None:
                print("Exiting Lox REPL.")
                return

            command = src.strip()
            if not command:
                continue
            if command == ":tokens":
                show_tokens = not show_tokens
                print(f"[mode] >>> Token display {'ON' if show_tokens else 'OFF'}")
                continue
            if command == ":verbose":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            result = parse_source(src, Diagnostics())
            show_result(result, show_tokens)
            if verbose:
                print(
                    f"[info] >>> {len(result.tokens)} token(s), "
                    f"{len(result.statements)} statement(s), "
                    f"{len(result.diagnostics)} error(s)"
                )
            logger.debug("REPL entry had_error=%s", result.had_error)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Lox REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
