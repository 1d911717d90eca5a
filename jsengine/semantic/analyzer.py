"""Scope and type checking over the syntax tree."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from jsengine.semantic.errors import (
    ConstReassignment,
    DuplicateDeclaration,
    InvalidThisUsage,
    SemanticError,
    TypeMismatch,
    UndeclaredFunction,
    UndeclaredVariable,
    UninitializedVariable,
)
from jsengine.semantic.nodes import (
    ArrayLiteral,
    ArrowFunctionExpression,
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    LogicalExpression,
    MemberExpression,
    Node,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    Position,
    Program,
    Property,
    ReturnStatement,
    StringLiteral,
    ThisExpression,
    UnaryExpression,
    UndefinedLiteral,
    VariableDeclaration,
    WhileStatement,
)
from jsengine.semantic.scope import Scope, ScopeType
from jsengine.semantic.typesystem import Type, TypeKind

ANY = Type(TypeKind.ANY)
NUMBER = Type(TypeKind.NUMBER)
STRING = Type(TypeKind.STRING)
BOOLEAN = Type(TypeKind.BOOLEAN)
NULL = Type(TypeKind.NULL)
UNDEFINED = Type(TypeKind.UNDEFINED)
OBJECT = Type(TypeKind.OBJECT)

_DECLARATION_LINE = 1


def _position(node: Node) -> Position | None:
    span = getattr(node, "span", None)
    return span.start if span is not None else None


class SemanticAnalyzer:
    """Walks a syntax tree, tracking scopes and types and collecting errors."""

    def __init__(self) -> None:
        self._scopes: list[Scope] = [Scope.global_scope()]
        self.errors: list[SemanticError] = []

    @property
    def scope(self) -> Scope:
        """The innermost scope currently open."""
        return self._scopes[-1]

    def analyze(self, ast: Node) -> None:
        """Check a tree; raise the first error found, if any."""
        self._visit(ast)
        if self.errors:
            raise self.errors.pop(0)

    @contextmanager
    def _nested(self, scope_type: ScopeType) -> Iterator[Scope]:
        self._scopes.append(self.scope.child(scope_type))
        try:
            yield self.scope
        finally:
            self._scopes.pop()

    def _expect(self, expected: Type, name: str, node: Node, *types: Type) -> None:
        if not all(t.is_compatible_with(expected) for t in types):
            found = " and ".join(repr(t) for t in types)
            self.errors.append(TypeMismatch(name, found, _position(node)))

    def _visit(self, node: Node) -> Type:
        match node:
            case Program():
                for statement in node.body:
                    self._visit(statement)
                return UNDEFINED
            case VariableDeclaration():
                return self._variable_declaration(node)
            case FunctionDeclaration():
                return self._function_declaration(node)
            case ExpressionStatement():
                return self._visit(node.expression)
            case BinaryExpression():
                return self._binary(node)
            case UnaryExpression():
                return self._unary(node)
            case Identifier():
                return self._identifier(node.name)
            case NumberLiteral():
                return NUMBER
            case StringLiteral():
                return STRING
            case BooleanLiteral():
                return BOOLEAN
            case NullLiteral():
                return NULL
            case UndefinedLiteral():
                return UNDEFINED
            case ThisExpression():
                if self.scope.is_global_scope():
                    self.errors.append(InvalidThisUsage())
                return OBJECT
            case CallExpression():
                return self._call(node)
            case AssignmentExpression():
                return self._assignment(node)
            case IfStatement():
                return self._if(node)
            case WhileStatement():
                self._expect(BOOLEAN, "boolean", node, self._visit(node.test))
                with self._nested(ScopeType.BLOCK):
                    self._visit(node.body)
                return UNDEFINED
            case ReturnStatement():
                return self._visit(node.argument) if node.argument is not None else UNDEFINED
            case BlockStatement():
                last = UNDEFINED
                with self._nested(ScopeType.BLOCK):
                    for statement in node.body:
                        last = self._visit(statement)
                return last
            case ArrayLiteral():
                return self._array(node)
            case ObjectLiteral():
                for prop in node.properties:
                    self._visit(prop)
                return OBJECT
            case Property():
                if not isinstance(node.key, Identifier):
                    self._visit(node.key)
                return self._visit(node.value)
            case MemberExpression():
                self._visit(node.object)
                if not isinstance(node.property, Identifier):
                    self._visit(node.property)
                return ANY
            case LogicalExpression():
                left = self._visit(node.left)
                right = self._visit(node.right)
                if node.operator in ("&&", "||"):
                    return left.common_type(right)
                return BOOLEAN
            case ConditionalExpression():
                self._expect(BOOLEAN, "boolean", node, self._visit(node.test))
                consequent = self._visit(node.consequent)
                alternate = self._visit(node.alternate)
                return consequent.common_type(alternate)
            case ArrowFunctionExpression():
                with self._nested(ScopeType.FUNCTION) as scope:
                    self._declare_params(scope, node.params)
                    return_type = self._visit(node.body)
                return Type.function([], return_type)
            case _:
                return ANY

    def _declare_params(self, scope: Scope, params: list[Node]) -> None:
        for param in params:
            if isinstance(param, Identifier):
                scope.declare_variable(param.name, ANY, True, _DECLARATION_LINE)
                scope.initialize_variable(param.name)

    def _variable_declaration(self, node: VariableDeclaration) -> Type:
        mutable = node.kind != "const"
        for declarator in node.declarations:
            if not isinstance(declarator.id, Identifier):
                continue
            name = declarator.id.name
            var_type = self._visit(declarator.init) if declarator.init is not None else UNDEFINED
            scope = self.scope
            if scope.is_variable_declared_in_current_scope(name):
                self.errors.append(DuplicateDeclaration(name, _position(node)))
                continue
            scope.declare_variable(name, var_type, mutable, _DECLARATION_LINE)
            if declarator.init is not None:
                scope.initialize_variable(name)
        return UNDEFINED

    def _function_declaration(self, node: FunctionDeclaration) -> Type:
        if not isinstance(node.id, Identifier):
            return ANY
        with self._nested(ScopeType.FUNCTION) as scope:
            self._declare_params(scope, node.params)
            return_type = self._visit(node.body)
        self.scope.declare_function(node.id.name, [], return_type, False, _DECLARATION_LINE)
        return Type.function([], return_type)

    def _binary(self, node: BinaryExpression) -> Type:
        left = self._visit(node.left)
        right = self._visit(node.right)
        match node.operator:
            case "+":
                if left.is_compatible_with(STRING) or right.is_compatible_with(STRING):
                    return STRING
                if left.is_compatible_with(NUMBER) and right.is_compatible_with(NUMBER):
                    return NUMBER
                return STRING
            case "-" | "*" | "/" | "%":
                self._expect(NUMBER, "number", node, left, right)
                return NUMBER
            case "==" | "!=" | "===" | "!==":
                return BOOLEAN
            case "<" | ">" | "<=" | ">=":
                self._expect(NUMBER, "number", node, left, right)
                return BOOLEAN
            case "&&" | "||":
                self._expect(BOOLEAN, "boolean", node, left, right)
                return BOOLEAN
            case _:
                return ANY

    def _unary(self, node: UnaryExpression) -> Type:
        operand = self._visit(node.argument)
        match node.operator:
            case "!":
                self._expect(BOOLEAN, "boolean", node, operand)
                return BOOLEAN
            case "+" | "-":
                self._expect(NUMBER, "number", node, operand)
                return NUMBER
            case _:
                return ANY

    def _identifier(self, name: str) -> Type:
        info = self.scope.get_variable(name)
        if info is None:
            self.errors.append(UndeclaredVariable(name))
            return ANY
        if not info.initialized:
            self.errors.append(UninitializedVariable(name))
        return info.type_info

    def _call(self, node: CallExpression) -> Type:
        if isinstance(node.callee, Identifier):
            info = self.scope.get_function(node.callee.name)
            if info is None:
                self.errors.append(UndeclaredFunction(node.callee.name, _position(node)))
                return ANY
            for argument in node.arguments:
                self._visit(argument)
            return info.return_type
        callee_type = self._visit(node.callee)
        for argument in node.arguments:
            self._visit(argument)
        if callee_type.kind is TypeKind.FUNCTION:
            return callee_type.return_type
        self.errors.append(TypeMismatch("function", repr(callee_type), _position(node)))
        return ANY

    def _assignment(self, node: AssignmentExpression) -> Type:
        value_type = self._visit(node.right)
        if isinstance(node.left, Identifier):
            name = node.left.name
            info = self.scope.get_variable(name)
            if info is None:
                self.errors.append(UndeclaredVariable(name, _position(node)))
            elif not info.mutable:
                self.errors.append(ConstReassignment(name, _position(node)))
        return value_type

    def _if(self, node: IfStatement) -> Type:
        self._expect(BOOLEAN, "boolean", node, self._visit(node.test))
        with self._nested(ScopeType.BLOCK):
            self._visit(node.consequent)
        if node.alternate is not None:
            with self._nested(ScopeType.BLOCK):
                self._visit(node.alternate)
        return UNDEFINED

    def _array(self, node: ArrayLiteral) -> Type:
        element_types = [self._visit(element) for element in node.elements if element is not None]
        common = ANY
        for element_type in element_types:
            common = common.common_type(element_type)
        return Type.array(common)


def analyze(ast: Node) -> None:
    """Check a tree with a fresh analyzer; raise the first error found."""
    SemanticAnalyzer().analyze(ast)