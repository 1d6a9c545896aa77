"""
Diagnostic reporting for the Lox front end.

Both the scanner and the parser report problems through a `Diagnostics` object
passed in by the caller. Reporting never stops the phase that reports; the caller
inspects `Diagnostics.had_error` once scanning and parsing are finished.

Classes:
    Diagnostic: One reported error tied to a source line.
    Diagnostics: Ordered collection of diagnostics plus the "had error" flag.
    ParseError: Recoverable syntax error raised inside a single declaration.

Example:
    >>> diagnostics = Diagnostics()
    >>> diagnostics.error(3, "Unexpected character.")
    >>> diagnostics.had_error
    True
    >>> print(diagnostics.messages[0])
    [line 3] Error: Unexpected character.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from lox.lox_constants import TokenType
from lox.lox_token import Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A single error report.

    Attributes:
        line (int): Source line the error refers to.
        where (str): Location context, e.g. `` at ';'`` or `` at end``; may be empty.
        message (str): Human-readable description.
        column (int | None): Column of the offending token, when known.
    """

    line: int
    where: str
    message: str
    column: int | None = None

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class Diagnostics:
    """Collects diagnostics for one or more scan/parse runs.

    A fresh instance starts clean. Passing the same instance to several runs
    accumulates their errors; call `reset()` to start over.
    """

    def __init__(self) -> None:
        self.messages: list[Diagnostic] = []

    @property
    def had_error(self) -> bool:
        return bool(self.messages)

    def report(
        self, line: int, where: str, message: str, column: int | None = None
    ) -> None:
        diagnostic = Diagnostic(line, where, message, column)
        self.messages.append(diagnostic)
        logger.debug("%s", diagnostic)

    def error(self, line: int, message: str, column: int | None = None) -> None:
        self.report(line, "", message, column)

    def token_error(self, token: Token, message: str) -> None:
        """Reports an error located at `token`."""
        if token.type == TokenType.EOF:
            self.report(token.line, " at end", message, token.column)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message, token.column)

    def reset(self) -> None:
        self.messages.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def __repr__(self) -> str:
        return f"Diagnostics({len(self.messages)} error(s))"


class ParseError(Exception):
    """Syntax error confined to the declaration being parsed.

    Raised by the parser when a required token is missing. The declaration rule
    turns it into a result value, after which the parser resynchronizes.

    Attributes:
        token (Token): The token at which the error was detected.
        message (str): The reported message.
    """

    def __init__(self, token: Token, message: str):
        super().__init__(f"[line {token.line}] {message}")
        self.token = token
        self.message = message


__all__ = ["Diagnostic", "Diagnostics", "ParseError"]
