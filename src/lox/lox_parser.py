"""
Lox Language Parser

Parses Lox tokens into an abstract syntax tree using recursive descent, with one
function per grammar rule and a precedence-ordered chain of rules for binary
operators.

Grammar
-------
::

    declaration := "var" IDENTIFIER ("=" expression)? ";" | statement
    statement   := exprStmt | printStmt | ifStmt | whileStmt | forStmt | block
    exprStmt    := expression ";"
    printStmt   := "print" expression ";"
    ifStmt      := "if" "(" expression ")" statement ("else" statement)?
    whileStmt   := "while" "(" expression ")" statement
    forStmt     := "for" "(" (varDecl | exprStmt | ";") expression? ";" expression? ")" statement
    block       := "{" declaration* "}"

    expression  := assignment
    assignment  := IDENTIFIER "=" assignment | logic_or
    logic_or    := logic_and ("or" logic_and)*
    logic_and   := equality ("and" equality)*
    equality    := comparison (("!=" | "==") comparison)*
    comparison  := term ((">" | ">=" | "<" | "<=") term)*
    term        := factor (("-" | "+") factor)*
    factor      := unary (("/" | "*") unary)*
    unary       := ("!" | "-") unary | primary
    primary     := "true" | "false" | "nil" | NUMBER | STRING
                 | "(" expression ")" | IDENTIFIER

Parser Behavior
---------------
- Binary and logical operators fold to the left: ``1-2-3`` is ``(1-2)-3``.
- ``for`` loops are desugared into ``Block``/``While`` nodes; no for node exists.
- Syntax errors never escape `parse()`. Each one is reported to the
  `Diagnostics` object, the failed declaration is recorded as None, and parsing
  resumes at the next statement boundary.

Entry Points
------------
- `Parser.parse()`: Parse a token list into statements.
- `parse(tokens, diagnostics=None)`: Functional shortcut for the above.
- `parse_source(source)`: Scan and parse in one call, returning a `ParseResult`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lox.lox_ast import (
    Assign,
    Binary,
    Block,
    Expr,
    Expression,
    Grouping,
    If,
    Literal,
    Logical,
    Print,
    Stmt,
    Unary,
    Var,
    Variable,
    While,
)
from lox.lox_constants import TokenType, statement_starts
from lox.lox_errors import Diagnostics, ParseError
from lox.lox_scanner import scan
from lox.lox_token import Token

logger = logging.getLogger(__name__)

T = TokenType

# Operators accepted at each binary precedence level, lowest first.
EQUALITY_OPS = (T.BANG_EQUAL, T.EQUAL_EQUAL)
COMPARISON_OPS = (T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL)
TERM_OPS = (T.MINUS, T.PLUS)
FACTOR_OPS = (T.SLASH, T.STAR)
UNARY_OPS = (T.BANG, T.MINUS)


class Parser:
    """
    Lox Parser Class

    Transforms a list of tokens (ending in EOF) into a list of statement nodes.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream. Never modified.
    current : int
        Index of the next unconsumed token.
    diagnostics : Diagnostics
        Receives every syntax error found.

    Methods
    -------
    parse() -> list[Stmt | None]
        Parse the whole token stream.
    declaration() -> Stmt | ParseError
        Parse one declaration, returning the error instead of raising it.
    synchronize() -> None
        Skip tokens up to the next likely statement boundary.
    """

    def __init__(
        self, tokens: list[Token], diagnostics: Diagnostics | None = None
    ) -> None:
        if not tokens or tokens[-1].type != T.EOF:
            last = tokens[-1] if tokens else None
            line = last.line if last else 1
            tokens = list(tokens) + [Token(T.EOF, "", None, line)]
        self.tokens: list[Token] = tokens
        self.current: int = 0
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def parse(self) -> list[Stmt | None]:
        """Parse all declarations. Failed declarations appear as None."""
        statements: list[Stmt | None] = []
        while not self.is_at_end():
            statements.append(self.recover(self.declaration()))
        logger.debug(
            "Parsed %d statement(s), %d error(s)",
            len(statements),
            len(self.diagnostics),
        )
        return statements

    def recover(self, result: Stmt | ParseError) -> Stmt | None:
        """Resynchronizes after a failed declaration and returns its placeholder."""
        if isinstance(result, ParseError):
            self.synchronize()
            return None
        return result

    # Statements

    def declaration(self) -> Stmt | ParseError:
        try:
            if self.match(T.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as error:
            return error
        except RecursionError:
            return self.error(self.peek(), "Expression nested too deeply.")

    def var_declaration(self) -> Stmt:
        name = self.consume(T.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(T.EQUAL):
            initializer = self.expression()

        self.consume(T.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(T.FOR):
            return self.for_statement()
        if self.match(T.IF):
            return self.if_statement()
        if self.match(T.PRINT):
            return self.print_statement()
        if self.match(T.WHILE):
            return self.while_statement()
        if self.match(T.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def for_statement(self) -> Stmt:
        """Parse a for loop and desugar it into while-loop form."""
        self.consume(T.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Stmt | None
        if self.match(T.SEMICOLON):
            initializer = None
        elif self.match(T.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition: Expr | None = None
        if not self.check(T.SEMICOLON):
            condition = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after loop condition.")

        increment: Expr | None = None
        if not self.check(T.RIGHT_PAREN):
            increment = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = Block((body, Expression(increment)))
        if condition is None:
            condition = Literal(True)
        body = While(condition, body)
        if initializer is not None:
            body = Block((initializer, body))
        return body

    def if_statement(self) -> Stmt:
        self.consume(T.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(T.ELSE):
            else_branch = self.statement()
        return If(condition, then_branch, else_branch)

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def while_statement(self) -> Stmt:
        self.consume(T.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after condition.")
        return While(condition, self.statement())

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    def block(self) -> tuple[Stmt | None, ...]:
        statements: list[Stmt | None] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.recover(self.declaration()))
        self.consume(T.RIGHT_BRACE, "Expect '}' after block.")
        return tuple(statements)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()

        if self.match(T.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            # Reported without unwinding: the left side is already a valid expression.
            self.diagnostics.token_error(equals, "Invalid assignment target.")

        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(T.OR):
            operator = self.previous()
            expr = Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(T.AND):
            operator = self.previous()
            expr = Logical(expr, operator, self.equality())
        return expr

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match(*EQUALITY_OPS):
            operator = self.previous()
            expr = Binary(expr, operator, self.comparison())
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(*COMPARISON_OPS):
            operator = self.previous()
            expr = Binary(expr, operator, self.term())
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(*TERM_OPS):
            operator = self.previous()
            expr = Binary(expr, operator, self.factor())
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(*FACTOR_OPS):
            operator = self.previous()
            expr = Binary(expr, operator, self.unary())
        return expr

    def unary(self) -> Expr:
        if self.match(*UNARY_OPS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self) -> Expr:
        if self.match(T.FALSE):
            return Literal(False)
        if self.match(T.TRUE):
            return Literal(True)
        if self.match(T.NIL):
            return Literal(None)

        if self.match(T.NUMBER, T.STRING):
            return Literal(self.previous().literal)

        if self.match(T.IDENTIFIER):
            return Variable(self.previous())

        if self.match(T.LEFT_PAREN):
            expr = self.expression()
            self.consume(T.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    # Cursor

    def match(self, *types: TokenType) -> bool:
        for type_ in types:
            if self.check(type_):
                self.advance()
                return True
        return False

    def consume(self, type_: TokenType, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, type_: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == type_

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == T.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def error(self, token: Token, message: str) -> ParseError:
        self.diagnostics.token_error(token, message)
        return ParseError(token, message)

    def synchronize(self) -> None:
        """Discard tokens until just after a ';' or just before a statement keyword."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type == T.SEMICOLON:
                return
            if self.peek().type in statement_starts:
                return
            self.advance()


def parse(tokens: list[Token], diagnostics: Diagnostics | None = None) -> list[Stmt | None]:
    """Parse `tokens` into statements. See `Parser`."""
    return Parser(tokens, diagnostics).parse()


@dataclass
class ParseResult:
    """Everything one scan+parse run produced.

    Attributes:
        tokens (list[Token]): Scanner output, ending with EOF.
        statements (list[Stmt | None]): Parser output; None marks a failed declaration.
        diagnostics (Diagnostics): Errors from both phases, in the order found.
    """

    tokens: list[Token]
    statements: list[Stmt | None]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def had_error(self) -> bool:
        return self.diagnostics.had_error


def parse_source(source: str, diagnostics: Diagnostics | None = None) -> ParseResult:
    """Scan and parse `source`, collecting every diagnostic in one object."""
    if diagnostics is None:
        diagnostics = Diagnostics()
    tokens = scan(source, diagnostics)
    statements = Parser(tokens, diagnostics).parse()
    return ParseResult(tokens, statements, diagnostics)


__all__ = ["ParseResult", "Parser", "parse", "parse_source"]
