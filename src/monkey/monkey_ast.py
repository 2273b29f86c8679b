"""
Defines the abstract syntax tree (AST) node structure for the Monkey programming language.

Node families:
    Program:
        The root: an ordered list of top-level statements.

    Statements:
        LetStatement, ReturnStatement, ExpressionStatement, BlockStatement.

    Expressions:
        Identifier, IntegerLiteral, BooleanLiteral, PrefixExpression,
        InfixExpression, IfExpression, FunctionLiteral.

Every node keeps the token that introduced it. Slots typed `X | None` are left
empty when the parser could not complete them after a syntax error, so a tree
may be partially populated; it is never rejected as a whole.

Rendering:
    `str(node)` returns the canonical text form used in diagnostics and tests.
    Prefix and infix expressions are fully parenthesized, so precedence is
    visible: `-a * b` renders as `((-a) * b)`. Empty slots render as "".
    Rendering depends only on the tree, never on the original source text.

Serialization:
    `node.to_dict()` converts a node and all descendants into a nested
    `NodeDict`, suitable for JSON output or debugging.

Example:
    >>> tok = Token(TokenKind.IDENT, "x")
    >>> str(PrefixExpression(Token(TokenKind.MINUS, "-"), "-", Identifier(tok, "x")))
    '(-x)'
"""

from dataclasses import dataclass, field, fields
from typing import Any, TypedDict

from monkey.monkey_token import Token


class NodeDict(TypedDict, total=False):
    """
    TypedDict representation of a node used for serialization.

    Only the keys relevant to a given node kind are present.

    Fields:
        kind (str): The node class name (e.g. "LetStatement", "InfixExpression").
        line (int): Line of the token that introduced the node.
        col (int): Column of the token that introduced the node.
        value (Any): Literal value, or nested NodeDict for statements.
        name (NodeDict | None): Bound identifier of a let statement.
        operator (str): Operator text of prefix/infix expressions.
        left (NodeDict): Left operand of an infix expression.
        right (NodeDict | None): Right operand of prefix/infix expressions.
        condition (NodeDict | None): Condition of an if expression.
        consequence (NodeDict): Block taken when the condition holds.
        alternative (NodeDict | None): Optional else block.
        parameters (list[NodeDict]): Function literal parameters.
        body (NodeDict): Function literal body.
        statements (list[NodeDict]): Children of a program or block.
    """

    kind: str
    line: int
    col: int
    value: Any
    name: "NodeDict | None"
    operator: str
    left: "NodeDict"
    right: "NodeDict | None"
    condition: "NodeDict | None"
    consequence: "NodeDict"
    alternative: "NodeDict | None"
    parameters: list["NodeDict"]
    body: "NodeDict"
    statements: list["NodeDict"]


def _serialize(value: Any) -> Any:
    if isinstance(value, (Node, Program)):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


def _render(node: "Node | None") -> str:
    return str(node) if node is not None else ""


@dataclass
class Node:
    """Base class of every statement and expression node.

    Attributes:
        token (Token): The token that introduced this node.
    """

    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def to_dict(self) -> NodeDict:
        data: dict[str, Any] = {
            "kind": type(self).__name__,
            "line": self.token.line,
            "col": self.token.col,
        }
        for f in fields(self):
            if f.name != "token":
                data[f.name] = _serialize(getattr(self, f.name))
        return data  # type: ignore[return-value]

    def __str__(self) -> str:
        return self.token_literal()


class Statement(Node):
    pass


class Expression(Node):
    pass


# Expressions


@dataclass
class Identifier(Expression):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    value: int


@dataclass
class BooleanLiteral(Expression):
    value: bool


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Expression | None = None

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.right)})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression | None = None

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {_render(self.right)})"


@dataclass
class BlockStatement(Statement):
    statements: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


@dataclass
class IfExpression(Expression):
    condition: Expression | None
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        out = f"if{_render(self.condition)} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    parameters: list[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


# Statements


@dataclass
class LetStatement(Statement):
    """`let <name> = <value>;`

    `name` is set whenever the parser got as far as the `=` token; `value`
    stays empty if the expression after `=` failed to parse.
    """

    name: Identifier | None = None
    value: Expression | None = None

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.name)} = {_render(self.value)};"


@dataclass
class ReturnStatement(Statement):
    value: Expression | None = None

    def __str__(self) -> str:
        return f"{self.token_literal()} {_render(self.value)};"


@dataclass
class ExpressionStatement(Statement):
    """A bare expression used as a statement; `token` is its first token."""

    value: Expression | None = None

    def __str__(self) -> str:
        return _render(self.value)


@dataclass
class Program:
    """Root of the tree: the top-level statements in source order."""

    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        return self.statements[0].token_literal() if self.statements else ""

    def to_dict(self) -> NodeDict:
        return {
            "kind": "Program",
            "statements": [s.to_dict() for s in self.statements],
        }

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


__all__ = [
    "BlockStatement",
    "BooleanLiteral",
    "Expression",
    "ExpressionStatement",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "NodeDict",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
