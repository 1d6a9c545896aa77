"""
Token record for the Lox language.

Classes:
    Token: One lexical unit with its decoded literal and exact source span.

Example:
    >>> tok = Token(TokenType.NUMBER, "42", 42.0, line=1, column=1, length=2)
    >>> print(tok)
    NUMBER 42 42.0
"""

from dataclasses import dataclass
from typing import Any

from lox.lox_constants import TokenType


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token.

    Attributes:
        type (TokenType): The token's kind.
        lexeme (str): Exact source text that produced the token ("" for EOF).
        literal (Any): Decoded value: ``str`` for strings, ``float`` for numbers, else None.
        line (int): 1-based line where the token starts.
        column (int): 1-based column of the token's first character.
        length (int): Number of source characters the token spans.
    """

    type: TokenType
    lexeme: str
    literal: Any = None
    line: int = 1
    column: int = 1
    length: int = 0

    def __str__(self) -> str:
        return f"{self.type.name} {self.lexeme} {self.literal}"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, line={self.line}, col={self.column})"


__all__ = ["Token", "TokenType"]
