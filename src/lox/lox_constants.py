"""
Token vocabulary for the Lox language.

Defines the closed set of token types produced by the scanner, together with the
lookup tables the scanner and parser share.

Exports:
    - TokenType: Enumeration of every token kind.
    - single_char_tokens: Maps one-character lexemes that never start a longer token.
    - two_char_tokens: Maps a leading character to its (second char, combined, single) types.
    - keywords: Reserved words and the token type each one produces.
    - statement_starts: Token types the parser resynchronizes on after an error.
"""

from enum import Enum, auto


class TokenType(Enum):
    # Single-character tokens
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACE = auto()  # {
    RIGHT_BRACE = auto()  # }
    COMMA = auto()  # ,
    DOT = auto()  # .
    MINUS = auto()  # -
    PLUS = auto()  # +
    SEMICOLON = auto()  # ;
    SLASH = auto()  # /
    STAR = auto()  # *

    # One or two character tokens
    BANG = auto()  # !
    BANG_EQUAL = auto()  # !=
    EQUAL = auto()  # =
    EQUAL_EQUAL = auto()  # ==
    GREATER = auto()  # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()  # <
    LESS_EQUAL = auto()  # <=

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    AND = auto()
    OR = auto()
    NOT = auto()
    NIL = auto()
    TRUE = auto()
    FALSE = auto()
    CLASS = auto()
    THIS = auto()
    SUPER = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    PRINT = auto()
    RETURN = auto()
    VAR = auto()

    EOF = auto()


# "/" is absent: it may open a comment and is handled by the scanner itself.
single_char_tokens: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# first char -> (expected second char, two-char type, one-char type)
two_char_tokens: dict[str, tuple[str, TokenType, TokenType]] = {
    "!": ("=", TokenType.BANG_EQUAL, TokenType.BANG),
    "=": ("=", TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": ("=", TokenType.LESS_EQUAL, TokenType.LESS),
    ">": ("=", TokenType.GREATER_EQUAL, TokenType.GREATER),
}

keywords: dict[str, TokenType] = {
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
    "nil": TokenType.NIL,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "class": TokenType.CLASS,
    "this": TokenType.THIS,
    "super": TokenType.SUPER,
    "fun": TokenType.FUN,
    "for": TokenType.FOR,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "var": TokenType.VAR,
}

statement_starts: frozenset[TokenType] = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)

__all__ = [
    "TokenType",
    "keywords",
    "single_char_tokens",
    "statement_starts",
    "two_char_tokens",
]
