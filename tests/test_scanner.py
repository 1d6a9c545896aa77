import pytest
from hypothesis import given
from hypothesis import strategies as st

from lox.lox_constants import TokenType, keywords
from lox.lox_errors import Diagnostics
from lox.lox_scanner import Scanner, SourceCursor, scan
from lox.lox_token import Token

T = TokenType


def types(source: str) -> list[TokenType]:
    return [tok.type for tok in scan(source)]


def test_scan_simple_addition() -> None:
    tokens = scan("1+2")
    assert [t.type for t in tokens] == [T.NUMBER, T.PLUS, T.NUMBER, T.EOF]
    assert tokens[0].literal == 1
    assert tokens[2].literal == 2
    assert tokens[1].literal is None


def test_single_char_tokens() -> None:
    assert types("(){},.-+;*/") == [
        T.LEFT_PAREN,
        T.RIGHT_PAREN,
        T.LEFT_BRACE,
        T.RIGHT_BRACE,
        T.COMMA,
        T.DOT,
        T.MINUS,
        T.PLUS,
        T.SEMICOLON,
        T.STAR,
        T.SLASH,
        T.EOF,
    ]


def test_one_and_two_char_operators() -> None:
    assert types("! != = == < <= > >=") == [
        T.BANG,
        T.BANG_EQUAL,
        T.EQUAL,
        T.EQUAL_EQUAL,
        T.LESS,
        T.LESS_EQUAL,
        T.GREATER,
        T.GREATER_EQUAL,
        T.EOF,
    ]


def test_two_char_operator_without_spaces() -> None:
    tokens = scan("a>=b")
    assert [t.type for t in tokens] == [T.IDENTIFIER, T.GREATER_EQUAL, T.IDENTIFIER, T.EOF]
    assert tokens[1].lexeme == ">="
    assert tokens[1].length == 2


def test_line_comment_is_skipped() -> None:
    tokens = scan("// a comment + - *\n42")
    assert [t.type for t in tokens] == [T.NUMBER, T.EOF]
    assert tokens[0].line == 2


def test_comment_at_end_of_input() -> None:
    assert types("1 // trailing") == [T.NUMBER, T.EOF]


def test_slash_alone_is_division() -> None:
    assert types("4/2") == [T.NUMBER, T.SLASH, T.NUMBER, T.EOF]


def test_string_token() -> None:
    tok = scan('"hello world"')[0]
    assert tok.type == T.STRING
    assert tok.literal == "hello world"
    assert tok.lexeme == '"hello world"'
    assert tok.length == 13


def test_empty_string() -> None:
    tok = scan('""')[0]
    assert tok.type == T.STRING
    assert tok.literal == ""


def test_multiline_string_advances_line() -> None:
    tokens = scan('"a\nb" x')
    assert tokens[0].type == T.STRING
    assert tokens[0].literal == "a\nb"
    assert tokens[0].line == 1
    assert tokens[0].column == 1
    assert tokens[0].length == 5
    assert tokens[1].lexeme == "x"
    assert tokens[1].line == 2
    assert tokens[1].column == 4


def test_unterminated_string_reports_one_error() -> None:
    diagnostics = Diagnostics()
    tokens = scan('"abc', diagnostics)
    assert len(diagnostics) == 1
    assert diagnostics.messages[0].message == "Unterminated string."
    assert diagnostics.messages[0].line == 1
    assert [t.type for t in tokens] == [T.EOF]


def test_unterminated_string_reported_at_start_line() -> None:
    diagnostics = Diagnostics()
    tokens = scan('x\n"ab\ncd', diagnostics)
    assert diagnostics.messages[0].line == 2
    assert diagnostics.messages[0].column == 1
    assert tokens[-1].type == T.EOF
    assert tokens[-1].line == 3


@pytest.mark.parametrize(
    "source,literal",
    [
        ("0", 0.0),
        ("123", 123.0),
        ("12.5", 12.5),
        ("3.14159", 3.14159),
    ],
)  # type: ignore[misc]
def test_number_literals(source: str, literal: float) -> None:
    tok = scan(source)[0]
    assert tok.type == T.NUMBER
    assert tok.lexeme == source
    assert tok.literal == literal
    assert isinstance(tok.literal, float)


def test_trailing_dot_is_not_part_of_number() -> None:
    tokens = scan("1.")
    assert [t.type for t in tokens] == [T.NUMBER, T.DOT, T.EOF]
    assert tokens[0].lexeme == "1"


def test_leading_dot_is_not_part_of_number() -> None:
    tokens = scan(".5")
    assert [t.type for t in tokens] == [T.DOT, T.NUMBER, T.EOF]
    assert tokens[1].literal == 5.0


def test_method_call_style_dot_after_number() -> None:
    assert types("1.foo") == [T.NUMBER, T.DOT, T.IDENTIFIER, T.EOF]


def test_identifiers() -> None:
    tokens = scan("_foo bar1 orchid or")
    assert [t.type for t in tokens] == [
        T.IDENTIFIER,
        T.IDENTIFIER,
        T.IDENTIFIER,
        T.OR,
        T.EOF,
    ]
    assert [t.lexeme for t in tokens[:3]] == ["_foo", "bar1", "orchid"]


@pytest.mark.parametrize("word,expected", sorted(keywords.items()))  # type: ignore[misc]
def test_reserved_words(word: str, expected: TokenType) -> None:
    tok = scan(word)[0]
    assert tok.type == expected
    assert tok.lexeme == word
    assert tok.literal is None


def test_keywords_are_case_sensitive() -> None:
    assert types("Var PRINT") == [T.IDENTIFIER, T.IDENTIFIER, T.EOF]


def test_exact_columns_and_lengths() -> None:
    tokens = scan("var x = 10;")
    spans = [(t.lexeme, t.column, t.length) for t in tokens]
    assert spans == [
        ("var", 1, 3),
        ("x", 5, 1),
        ("=", 7, 1),
        ("10", 9, 2),
        (";", 11, 1),
        ("", 12, 0),
    ]


def test_columns_restart_on_each_line() -> None:
    tokens = scan("a\n  bb\n\tc")
    assert [(t.lexeme, t.line, t.column) for t in tokens[:3]] == [
        ("a", 1, 1),
        ("bb", 2, 3),
        ("c", 3, 2),
    ]


def test_unexpected_character_reports_and_continues() -> None:
    diagnostics = Diagnostics()
    tokens = scan("1 @ 2", diagnostics)
    assert [t.type for t in tokens] == [T.NUMBER, T.NUMBER, T.EOF]
    assert len(diagnostics) == 1
    diagnostic = diagnostics.messages[0]
    assert diagnostic.message == "Unexpected character."
    assert diagnostic.where == " at '@'"
    assert diagnostic.column == 3


def test_several_lexical_errors_in_one_pass() -> None:
    diagnostics = Diagnostics()
    scan("#\n$ ok\n^", diagnostics)
    assert [d.line for d in diagnostics] == [1, 2, 3]


def test_non_ascii_letter_is_unexpected() -> None:
    diagnostics = Diagnostics()
    tokens = scan("é", diagnostics)
    assert diagnostics.had_error
    assert [t.type for t in tokens] == [T.EOF]


def test_empty_input_returns_only_eof() -> None:
    tokens = scan("")
    assert tokens == [Token(T.EOF, "", None, 1, 1, 0)]


def test_eof_is_positioned_after_last_character() -> None:
    eof = scan("ab\ncd")[-1]
    assert eof.line == 2
    assert eof.column == 3
    assert eof.lexeme == ""


def test_shared_diagnostics_accumulate_across_scans() -> None:
    diagnostics = Diagnostics()
    scan("@", diagnostics)
    scan("#", diagnostics)
    assert len(diagnostics) == 2


def test_fresh_diagnostics_do_not_leak_between_scans() -> None:
    scanner_a = Scanner("@")
    scanner_a.scan_tokens()
    scanner_b = Scanner("ok")
    scanner_b.scan_tokens()
    assert scanner_a.diagnostics.had_error
    assert not scanner_b.diagnostics.had_error


def test_scan_tokens_twice_keeps_single_eof() -> None:
    scanner = Scanner("1 @")
    first = [t.type for t in scanner.scan_tokens()]
    second = [t.type for t in scanner.scan_tokens()]
    assert first == second == [TokenType.NUMBER, TokenType.EOF]
    assert len(scanner.diagnostics) == 1


def test_source_cursor_methods() -> None:
    cursor = SourceCursor("ab\nc")
    assert cursor.peek() == "a"
    assert cursor.peek_next() == "b"
    assert cursor.advance() == "a"
    assert cursor.match("b")
    assert not cursor.match("x")
    assert cursor.lexeme() == "ab"
    cursor.advance()
    assert cursor.line == 2
    assert cursor.column() == 1
    cursor.advance()
    assert cursor.is_at_end()
    assert cursor.peek() == ""
    assert cursor.peek_next() == ""


def test_source_cursor_advance_past_end_raises() -> None:
    cursor = SourceCursor("")
    with pytest.raises(IndexError, match="past end of source"):
        cursor.advance()


def test_token_str_uses_debug_format() -> None:
    assert str(scan("1")[0]) == "NUMBER 1 1.0"
    assert str(scan('"s"')[0]) == 'STRING "s" s'


@given(st.text(max_size=200))  # type: ignore[misc]
def test_scan_never_raises_and_ends_with_single_eof(source: str) -> None:
    diagnostics = Diagnostics()
    tokens = scan(source, diagnostics)
    assert tokens[-1].type == T.EOF
    assert tokens[-1].lexeme == ""
    assert sum(1 for t in tokens if t.type == T.EOF) == 1


@given(st.text(alphabet=st.characters(blacklist_categories=["Cs"]), max_size=200))  # type: ignore[misc]
def test_token_positions_point_at_their_lexemes(source: str) -> None:
    lines = source.split("\n")
    for tok in scan(source)[:-1]:
        assert len(tok.lexeme) == tok.length
        if tok.type != T.STRING:
            text = lines[tok.line - 1]
            assert text[tok.column - 1 : tok.column - 1 + tok.length] == tok.lexeme
