"""
Renders Lox AST nodes as parenthesized prefix expressions.

This module defines `SExprEmitter`, a debugging printer that makes the shape of a
parsed program visible: operator nesting, grouping, and the block/while form that
for loops desugar into.

Output examples:
    - ``1 + 2 * 3``            -> ``(+ 1 (* 2 3))``
    - ``var x = (1);``         -> ``(var x (group 1))``
    - ``if (a) print b;``      -> ``(if a (print b))``
    - a failed declaration     -> ``(error)``

Raises:
    - `NotImplementedError`: If a node's kind has no `emit_*` method.
"""

from lox.lox_ast import (
    Assign,
    ASTNode,
    Binary,
    Block,
    Expression,
    Grouping,
    If,
    Literal,
    Logical,
    Print,
    Unary,
    Var,
    Variable,
    While,
)


def format_value(value: object) -> str:
    """Formats a literal value the way Lox source would spell it."""
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


class SExprEmitter:
    """Emits one line of prefix notation per statement.

    Attributes:
        lines (list[str]): Rendered statements, in order.

    Methods:
        render(statements): Emits every statement and returns the joined output.
        emit(node): Dispatches to the `emit_<kind>` method for `node`.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def render(self, statements: list) -> str:
        for stmt in statements:
            self.lines.append(self.emit(stmt))
        return self.get_output()

    def emit(self, node: ASTNode | None) -> str:
        if node is None:
            return "(error)"
        method = getattr(self, f"emit_{node.kind}", None)
        if method is None:
            raise NotImplementedError(f"No emitter method for node kind '{node.kind}'")
        return str(method(node))

    def parenthesize(self, name: str, *parts: ASTNode | None) -> str:
        inner = " ".join(self.emit(part) for part in parts)
        return f"({name} {inner})" if inner else f"({name})"

    # Expressions

    def emit_literal(self, node: Literal) -> str:
        return format_value(node.value)

    def emit_grouping(self, node: Grouping) -> str:
        return self.parenthesize("group", node.expression)

    def emit_unary(self, node: Unary) -> str:
        return self.parenthesize(node.operator.lexeme, node.right)

    def emit_binary(self, node: Binary) -> str:
        return self.parenthesize(node.operator.lexeme, node.left, node.right)

    emit_logical = emit_binary

    def emit_variable(self, node: Variable) -> str:
        return node.name.lexeme

    def emit_assign(self, node: Assign) -> str:
        return f"(= {node.name.lexeme} {self.emit(node.value)})"

    # Statements

    def emit_expression(self, node: Expression) -> str:
        return self.parenthesize(";", node.expression)

    def emit_print(self, node: Print) -> str:
        return self.parenthesize("print", node.expression)

    def emit_var(self, node: Var) -> str:
        if node.initializer is None:
            return f"(var {node.name.lexeme})"
        return f"(var {node.name.lexeme} {self.emit(node.initializer)})"

    def emit_block(self, node: Block) -> str:
        return self.parenthesize("block", *node.statements)

    def emit_if(self, node: If) -> str:
        if node.else_branch is None:
            return self.parenthesize("if", node.condition, node.then_branch)
        return self.parenthesize("if-else", node.condition, node.then_branch, node.else_branch)

    def emit_while(self, node: While) -> str:
        return self.parenthesize("while", node.condition, node.body)


def render(statements: list) -> str:
    """Renders `statements` with a fresh `SExprEmitter`."""
    return SExprEmitter().render(statements)


__all__ = ["SExprEmitter", "format_value", "render"]
