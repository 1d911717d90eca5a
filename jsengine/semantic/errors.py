"""Errors reported by semantic analysis."""

from __future__ import annotations

from jsengine.semantic.nodes import Position


class SemanticError(Exception):
    """Base class of every semantic analysis error."""

    def __init__(self, description: str, position: Position | None = None) -> None:
        self.description = description
        self.position = position
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.position is None:
            return self.description
        return f"{self.description} at line {self.position.line}, column {self.position.column}"


class UndeclaredVariable(SemanticError):
    """A variable is used without being declared."""

    def __init__(self, name: str, position: Position | None = None) -> None:
        self.name = name
        super().__init__(f"Undeclared variable '{name}'", position)


class UninitializedVariable(SemanticError):
    """A variable is read before it is given a value."""

    def __init__(self, name: str, position: Position | None = None) -> None:
        self.name = name
        super().__init__(f"Variable '{name}' is used before being initialized", position)


class ConstReassignment(SemanticError):
    """A const variable is assigned to."""

    def __init__(self, name: str, position: Position | None = None) -> None:
        self.name = name
        super().__init__(f"Cannot reassign const variable '{name}'", position)


class TypeMismatch(SemanticError):
    """An operation or assignment got a type it does not accept."""

    def __init__(self, expected: str, found: str, position: Position | None = None) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"Type mismatch: expected {expected}, found {found}", position)


class UndeclaredFunction(SemanticError):
    """A function is called without being declared."""

    def __init__(self, name: str, position: Position | None = None) -> None:
        self.name = name
        super().__init__(f"Undeclared function '{name}'", position)


class WrongArgumentCount(SemanticError):
    """A function is called with the wrong number of arguments."""

    def __init__(
        self,
        function_name: str,
        expected: int,
        found: int,
        position: Position | None = None,
    ) -> None:
        self.function_name = function_name
        self.expected = expected
        self.found = found
        super().__init__(
            f"Function '{function_name}' expects {expected} arguments, "
            f"but {found} were provided",
            position,
        )


class InvalidThisUsage(SemanticError):
    """``this`` is used outside of a method or constructor."""

    def __init__(self, position: Position | None = None) -> None:
        super().__init__("Invalid use of 'this' outside of method or constructor", position)


class DuplicateDeclaration(SemanticError):
    """A name is declared twice in the same scope."""

    def __init__(self, name: str, position: Position | None = None) -> None:
        self.name = name
        super().__init__(f"Duplicate declaration of '{name}'", position)


class InvalidOperation(SemanticError):
    """An operation is applied to a type that does not support it."""

    def __init__(self, operation: str, type_name: str, position: Position | None = None) -> None:
        self.operation = operation
        self.type_name = type_name
        super().__init__(f"Invalid operation '{operation}' on type '{type_name}'", position)