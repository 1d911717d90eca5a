"""Lexical scopes tracked during semantic analysis."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from jsengine.semantic.typesystem import Type


class ScopeType(Enum):
    """The kind of construct that opened a scope."""

    GLOBAL = "Global"
    FUNCTION = "Function"
    BLOCK = "Block"
    CLASS = "Class"
    MODULE = "Module"


@dataclass
class VariableInfo:
    """What is known about a declared variable."""

    name: str
    type_info: Type
    mutable: bool
    initialized: bool = False
    line: int = 0


@dataclass
class FunctionInfo:
    """What is known about a declared function."""

    name: str
    param_types: list[Type] = field(default_factory=list)
    return_type: Type = field(default_factory=Type)
    is_method: bool = False
    line: int = 0


class Scope:
    """A set of declarations, looked up through its enclosing scopes."""

    def __init__(self, scope_type: ScopeType = ScopeType.GLOBAL, parent: Scope | None = None) -> None:
        self.scope_type = scope_type
        self.parent = parent
        self._variables: dict[str, VariableInfo] = {}
        self._functions: dict[str, FunctionInfo] = {}

    @classmethod
    def global_scope(cls) -> Scope:
        """Create an empty top-level scope."""
        return cls(ScopeType.GLOBAL)

    def child(self, scope_type: ScopeType) -> Scope:
        """Create a scope nested inside this one."""
        return Scope(scope_type, self)

    def _chain(self) -> Iterator[Scope]:
        scope: Scope | None = self
        while scope is not None:
            yield scope
            scope = scope.parent

    @property
    def local_variables(self) -> Mapping[str, VariableInfo]:
        """Variables declared in this scope only."""
        return MappingProxyType(self._variables)

    @property
    def local_functions(self) -> Mapping[str, FunctionInfo]:
        """Functions declared in this scope only."""
        return MappingProxyType(self._functions)

    def declare_variable(self, name: str, type_info: Type, mutable: bool, line: int) -> bool:
        """Declare a variable here; False if this scope already has one by that name."""
        if name in self._variables:
            return False
        self._variables[name] = VariableInfo(name, type_info, mutable, False, line)
        return True

    def initialize_variable(self, name: str) -> bool:
        """Mark a variable of this scope as assigned; False if it is not declared here."""
        info = self._variables.get(name)
        if info is None:
            return False
        info.initialized = True
        return True

    def get_variable(self, name: str) -> VariableInfo | None:
        """Find a variable in this scope or the nearest enclosing one."""
        for scope in self._chain():
            info = scope._variables.get(name)
            if info is not None:
                return info
        return None

    def is_variable_declared(self, name: str) -> bool:
        return any(name in scope._variables for scope in self._chain())

    def is_variable_declared_in_current_scope(self, name: str) -> bool:
        return name in self._variables

    def declare_function(
        self,
        name: str,
        param_types: list[Type],
        return_type: Type,
        is_method: bool,
        line: int,
    ) -> bool:
        """Declare a function here; False if this scope already has one by that name."""
        if name in self._functions:
            return False
        self._functions[name] = FunctionInfo(name, list(param_types), return_type, is_method, line)
        return True

    def get_function(self, name: str) -> FunctionInfo | None:
        """Find a function in this scope or the nearest enclosing one."""
        for scope in self._chain():
            info = scope._functions.get(name)
            if info is not None:
                return info
        return None

    def is_function_declared(self, name: str) -> bool:
        return any(name in scope._functions for scope in self._chain())

    def is_function_scope(self) -> bool:
        return self.scope_type is ScopeType.FUNCTION

    def is_block_scope(self) -> bool:
        return self.scope_type is ScopeType.BLOCK

    def is_global_scope(self) -> bool:
        return self.scope_type is ScopeType.GLOBAL