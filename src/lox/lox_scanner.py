"""
Lexical analyzer for the Lox programming language.

This module converts raw source text into an ordered list of tokens:

Classes:
    SourceCursor: Character cursor with line and column tracking.
    Scanner: Converts one source string into tokens, reporting lexical errors.

Functions:
    scan(source, diagnostics=None) -> list[Token]

Features:
    - Skips whitespace and `//` line comments
    - One-character lookahead for `!=`, `==`, `<=`, `>=`
    - Recognizes:
        * Identifiers and reserved words
        * Numbers (integer or decimal, decoded as float)
        * Strings (may span lines, no escape sequences)
        * Operators and punctuation
    - Exact line, column and length for every token

Errors:
    Lexical errors (unexpected character, unterminated string) are reported to the
    `Diagnostics` object and scanning continues. The returned list always ends with
    exactly one EOF token.

Example:
    >>> [str(t) for t in scan("1+2")]
    ['NUMBER 1 1.0', 'PLUS + None', 'NUMBER 2 2.0', 'EOF  None']
"""

import logging
from typing import Any

from lox.lox_constants import TokenType, keywords, single_char_tokens, two_char_tokens
from lox.lox_errors import Diagnostics
from lox.lox_token import Token

logger = logging.getLogger(__name__)


class SourceCursor:
    """
    Reads characters from a source string while tracking the current lexeme.

    Attributes:
        source (str): The input source string.
        start (int): Offset of the first character of the lexeme being scanned.
        current (int): Offset of the next character to read.
        line (int): Current line number (1-indexed).
        line_start (int): Offset of the first character of the current line.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.start = 0
        self.current = 0
        self.line = 1
        self.line_start = 0

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        """
        Consumes and returns the next character.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.is_at_end():
            raise IndexError(
                f"Attempted to read past end of source at offset {self.current}, line {self.line}"
            )
        char = self.source[self.current]
        self.current += 1
        if char == "\n":
            self.line += 1
            self.line_start = self.current
        return char

    def peek(self) -> str:
        """Returns the next character without consuming it, or "" at the end."""
        if self.is_at_end():
            return ""
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return ""
        return self.source[self.current + 1]

    def match(self, expected: str) -> bool:
        """Consumes the next character only if it equals `expected`."""
        if self.peek() != expected:
            return False
        self.advance()
        return True

    def begin(self) -> None:
        self.start = self.current

    def lexeme(self) -> str:
        return self.source[self.start : self.current]

    def column(self) -> int:
        """1-based column of the current offset on the current line."""
        return self.current - self.line_start + 1


def is_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def is_alnum(char: str) -> bool:
    return is_alpha(char) or is_digit(char)


class Scanner:
    """Lexical analyzer for Lox.

    Each instance scans one source string. Errors go to `diagnostics`, which the
    caller owns and may share across several scans.

    Attributes:
        cursor (SourceCursor): Position state for this scan.
        diagnostics (Diagnostics): Sink for lexical errors.
        tokens (list[Token]): Tokens produced so far.
    """

    def __init__(self, source: str, diagnostics: Diagnostics | None = None) -> None:
        self.cursor = SourceCursor(source)
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.tokens: list[Token] = []
        self._token_line = 1
        self._token_column = 1

    def scan_tokens(self) -> list[Token]:
        """Scans the whole source and returns the tokens, ending with EOF.

        A finished scan is not repeated; later calls return the same list.
        """
        if self.tokens and self.tokens[-1].type == TokenType.EOF:
            return self.tokens

        cursor = self.cursor
        while not cursor.is_at_end():
            cursor.begin()
            self._token_line = cursor.line
            self._token_column = cursor.column()
            self.scan_token()

        self.tokens.append(
            Token(TokenType.EOF, "", None, cursor.line, cursor.column(), 0)
        )
        logger.debug("Scanned %d token(s)", len(self.tokens))
        return self.tokens

    def scan_token(self) -> None:
        """Scans one lexeme starting at `cursor.start`."""
        cursor = self.cursor
        char = cursor.advance()

        if char in " \r\t\n":
            return

        if char in single_char_tokens:
            self.add_token(single_char_tokens[char])
            return

        if char in two_char_tokens:
            second, double, single = two_char_tokens[char]
            self.add_token(double if cursor.match(second) else single)
            return

        if char == "/":
            if cursor.match("/"):
                while cursor.peek() not in ("\n", ""):
                    cursor.advance()
            else:
                self.add_token(TokenType.SLASH)
            return

        if char == '"':
            self.string()
        elif is_digit(char):
            self.number()
        elif is_alpha(char):
            self.identifier()
        else:
            self.diagnostics.report(
                self._token_line,
                f" at '{char}'",
                "Unexpected character.",
                self._token_column,
            )

    def string(self) -> None:
        cursor = self.cursor
        while cursor.peek() not in ('"', ""):
            cursor.advance()

        if cursor.is_at_end():
            self.diagnostics.error(
                self._token_line, "Unterminated string.", self._token_column
            )
            return

        cursor.advance()  # closing quote
        self.add_token(TokenType.STRING, cursor.source[cursor.start + 1 : cursor.current - 1])

    def number(self) -> None:
        cursor = self.cursor
        while is_digit(cursor.peek()):
            cursor.advance()

        # A fractional part needs at least one digit after the dot.
        if cursor.peek() == "." and is_digit(cursor.peek_next()):
            cursor.advance()
            while is_digit(cursor.peek()):
                cursor.advance()

        self.add_token(TokenType.NUMBER, float(cursor.lexeme()))

    def identifier(self) -> None:
        cursor = self.cursor
        while is_alnum(cursor.peek()):
            cursor.advance()

        text = cursor.lexeme()
        self.add_token(keywords.get(text, TokenType.IDENTIFIER))

    def add_token(self, type_: TokenType, literal: Any = None) -> None:
        cursor = self.cursor
        self.tokens.append(
            Token(
                type_,
                cursor.lexeme(),
                literal,
                self._token_line,
                self._token_column,
                cursor.current - cursor.start,
            )
        )


def scan(source: str, diagnostics: Diagnostics | None = None) -> list[Token]:
    """Scans `source` into tokens. See `Scanner`."""
    return Scanner(source, diagnostics).scan_tokens()


__all__ = ["Scanner", "SourceCursor", "scan"]
