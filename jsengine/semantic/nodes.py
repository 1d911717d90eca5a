"""Syntax tree nodes consumed by the semantic analyzer."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields


@dataclass(frozen=True, order=True)
class Position:
    """A location in source text."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class Span:
    """A region of source text from ``start`` to ``end``."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("a span cannot end before it starts")


class Node:
    """Base class of every syntax tree node."""

    def children(self) -> Iterator[Node]:
        """Yield the direct child nodes in field order, skipping holes."""
        for spec in fields(self):
            if spec.name == "span":
                continue
            value = getattr(self, spec.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, (list, tuple)):
                yield from (item for item in value if isinstance(item, Node))

    def walk(self) -> Iterator[Node]:
        """Yield this node and all its descendants in pre-order."""
        yield self
        for child in self.children():
            yield from child.walk()


@dataclass
class Program(Node):
    body: list[Node] = field(default_factory=list)


@dataclass
class Identifier(Node):
    name: str


@dataclass
class VariableDeclarator(Node):
    id: Node
    init: Node | None = None


@dataclass
class VariableDeclaration(Node):
    kind: str
    declarations: list[VariableDeclarator] = field(default_factory=list)
    span: Span | None = None


@dataclass
class FunctionDeclaration(Node):
    id: Node | None
    params: list[Node]
    body: Node
    span: Span | None = None


@dataclass
class ExpressionStatement(Node):
    expression: Node


@dataclass
class BinaryExpression(Node):
    operator: str
    left: Node
    right: Node
    span: Span | None = None


@dataclass
class UnaryExpression(Node):
    operator: str
    argument: Node
    span: Span | None = None


@dataclass
class NumberLiteral(Node):
    value: float


@dataclass
class StringLiteral(Node):
    value: str


@dataclass
class BooleanLiteral(Node):
    value: bool


@dataclass
class NullLiteral(Node):
    """The ``null`` literal."""


@dataclass
class UndefinedLiteral(Node):
    """The ``undefined`` literal."""


@dataclass
class ThisExpression(Node):
    """The ``this`` keyword."""


@dataclass
class CallExpression(Node):
    callee: Node
    arguments: list[Node] = field(default_factory=list)
    span: Span | None = None


@dataclass
class AssignmentExpression(Node):
    left: Node
    right: Node
    operator: str = "="
    span: Span | None = None


@dataclass
class IfStatement(Node):
    test: Node
    consequent: Node
    alternate: Node | None = None
    span: Span | None = None


@dataclass
class WhileStatement(Node):
    test: Node
    body: Node
    span: Span | None = None


@dataclass
class ReturnStatement(Node):
    argument: Node | None = None


@dataclass
class BlockStatement(Node):
    body: list[Node] = field(default_factory=list)


@dataclass
class ArrayLiteral(Node):
    """An array literal; ``None`` elements are holes such as in ``[1, , 2]``."""

    elements: list[Node | None] = field(default_factory=list)


@dataclass
class Property(Node):
    key: Node
    value: Node


@dataclass
class ObjectLiteral(Node):
    properties: list[Property] = field(default_factory=list)


@dataclass
class MemberExpression(Node):
    object: Node
    property: Node
    computed: bool = False


@dataclass
class LogicalExpression(Node):
    operator: str
    left: Node
    right: Node


@dataclass
class ConditionalExpression(Node):
    test: Node
    consequent: Node
    alternate: Node
    span: Span | None = None


@dataclass
class ArrowFunctionExpression(Node):
    params: list[Node]
    body: Node