"""
Defines the abstract syntax tree (AST) node model for the Lox programming language.

Nodes are immutable plain data: the parser builds them once and later stages
(printers, evaluators) read them. Every variant carries a class-level `kind`
discriminant so consumers can dispatch on it (see `SExprEmitter`) or use
`match` on the variant class.

Expression variants:
    Literal, Grouping, Unary, Binary, Logical, Variable, Assign

Statement variants:
    Expression, Print, Var, Block, If, While

Type aliases:
    Expr: Union of all expression variants.
    Stmt: Union of all statement variants.

Serialization:
    `ASTNode.to_dict()` converts a node and its descendants into an `ASTDict`,
    suitable for JSON output, debugging, or structural comparison in tests.

Example:
    >>> node = Binary(Literal(1.0), Token(TokenType.PLUS, "+"), Literal(2.0))
    >>> node.kind
    'binary'
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, TypedDict, Union

from lox.lox_token import Token


class TokenDict(TypedDict):
    type: str
    lexeme: str
    line: int
    column: int


class ASTDict(TypedDict, total=False):
    """
    Serialized form of an AST node.

    Fields:
        kind (str): The node variant (e.g. "binary", "var", "while").
        Remaining keys mirror the variant's fields. Child nodes become nested
        ASTDicts, tokens become TokenDicts, statement sequences become lists,
        and absent children or failed statements become None. Literals also
        carry "type" ("nil", "boolean", "number" or "string").
    """

    kind: str


def _serialize(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, Token):
        return TokenDict(
            type=value.type.name,
            lexeme=value.lexeme,
            line=value.line,
            column=value.column,
        )
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


class ASTNode:
    """Base class of every expression and statement variant."""

    kind: ClassVar[str] = "node"

    def to_dict(self) -> ASTDict:
        data: dict[str, Any] = {"kind": self.kind}
        for f in fields(self):  # type: ignore[arg-type]
            data[f.name] = _serialize(getattr(self, f.name))
        return data  # type: ignore[return-value]


# Expressions


def literal_type(value: Any) -> str:
    """Names the Lox type of a literal value."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


@dataclass(frozen=True, eq=False)
class Literal(ASTNode):
    """A constant value.

    Equality also compares the value's type: Python treats ``True == 1.0`` as
    true, but the Lox literals ``true`` and ``1`` are different nodes.
    """

    kind: ClassVar[str] = "literal"
    value: Any

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))

    def to_dict(self) -> ASTDict:
        data = super().to_dict()
        data["type"] = literal_type(self.value)  # type: ignore[typeddict-unknown-key]
        return data


@dataclass(frozen=True)
class Grouping(ASTNode):
    kind: ClassVar[str] = "grouping"
    expression: Expr


@dataclass(frozen=True)
class Unary(ASTNode):
    kind: ClassVar[str] = "unary"
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(ASTNode):
    kind: ClassVar[str] = "binary"
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(ASTNode):
    """Short-circuiting `and` / `or`; kept apart from Binary so evaluators can skip the right side."""

    kind: ClassVar[str] = "logical"
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable(ASTNode):
    kind: ClassVar[str] = "variable"
    name: Token


@dataclass(frozen=True)
class Assign(ASTNode):
    kind: ClassVar[str] = "assign"
    name: Token
    value: Expr


# Statements


@dataclass(frozen=True)
class Expression(ASTNode):
    kind: ClassVar[str] = "expression"
    expression: Expr


@dataclass(frozen=True)
class Print(ASTNode):
    kind: ClassVar[str] = "print"
    expression: Expr


@dataclass(frozen=True)
class Var(ASTNode):
    kind: ClassVar[str] = "var"
    name: Token
    initializer: Expr | None = None


@dataclass(frozen=True)
class Block(ASTNode):
    """A braced statement list. Entries are None where a declaration failed to parse."""

    kind: ClassVar[str] = "block"
    statements: tuple[Stmt | None, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class If(ASTNode):
    kind: ClassVar[str] = "if"
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt | None = None


@dataclass(frozen=True)
class While(ASTNode):
    kind: ClassVar[str] = "while"
    condition: Expr
    body: Stmt


Expr = Union[Literal, Grouping, Unary, Binary, Logical, Variable, Assign]
Stmt = Union[Expression, Print, Var, Block, If, While]


__all__ = [
    "ASTDict",
    "ASTNode",
    "Assign",
    "Binary",
    "Block",
    "Expr",
    "Expression",
    "Grouping",
    "If",
    "Literal",
    "Logical",
    "Print",
    "Stmt",
    "TokenDict",
    "Unary",
    "Var",
    "Variable",
    "While",
    "literal_type",
]
