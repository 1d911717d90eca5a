"""Static types used by the semantic analyzer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class TypeKind(Enum):
    """The shape of a type."""

    UNDEFINED = "Undefined"
    NULL = "Null"
    BOOLEAN = "Boolean"
    NUMBER = "Number"
    STRING = "String"
    SYMBOL = "Symbol"
    OBJECT = "Object"
    ARRAY = "Array"
    FUNCTION = "Function"
    UNION = "Union"
    ANY = "Any"
    NEVER = "Never"


_PRIMITIVE_KINDS = frozenset(
    {
        TypeKind.UNDEFINED,
        TypeKind.NULL,
        TypeKind.BOOLEAN,
        TypeKind.NUMBER,
        TypeKind.STRING,
        TypeKind.SYMBOL,
    }
)
_OBJECT_KINDS = frozenset({TypeKind.OBJECT, TypeKind.ARRAY, TypeKind.FUNCTION})


@dataclass(frozen=True, repr=False)
class Type:
    """A JavaScript type. The default is ``Any``."""

    kind: TypeKind = TypeKind.ANY
    element: Type | None = None
    params: tuple[Type, ...] = ()
    return_type: Type | None = None
    members: tuple[Type, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "members", tuple(self.members))
        if self.kind is TypeKind.ARRAY and self.element is None:
            raise ValueError("an array type needs an element type")
        if self.kind is TypeKind.FUNCTION and self.return_type is None:
            raise ValueError("a function type needs a return type")

    @classmethod
    def array(cls, element: Type) -> Type:
        return cls(TypeKind.ARRAY, element=element)

    @classmethod
    def function(cls, params: Iterable[Type], return_type: Type) -> Type:
        return cls(TypeKind.FUNCTION, params=tuple(params), return_type=return_type)

    @classmethod
    def union(cls, members: Iterable[Type]) -> Type:
        return cls(TypeKind.UNION, members=tuple(members))

    def is_compatible_with(self, other: Type) -> bool:
        """Whether a value of this type may be used where ``other`` is expected."""
        if self.kind is TypeKind.ANY or other.kind is TypeKind.ANY:
            return True
        if self.kind is TypeKind.NEVER or other.kind is TypeKind.NEVER:
            return False
        if self.kind is TypeKind.UNION:
            return any(member.is_compatible_with(other) for member in self.members)
        if self.kind is TypeKind.ARRAY and other.kind is TypeKind.ARRAY:
            return self.element.is_compatible_with(other.element)
        if self.kind is TypeKind.FUNCTION and other.kind is TypeKind.FUNCTION:
            return (
                len(self.params) == len(other.params)
                and all(a.is_compatible_with(b) for a, b in zip(self.params, other.params))
                and self.return_type.is_compatible_with(other.return_type)
            )
        return self == other

    def common_type(self, other: Type) -> Type:
        """The most specific type covering both this type and ``other``."""
        if self.is_compatible_with(other):
            return self
        if other.is_compatible_with(self):
            return other
        return Type.union([self, other])

    def is_primitive(self) -> bool:
        return self.kind in _PRIMITIVE_KINDS

    def is_object(self) -> bool:
        return self.kind in _OBJECT_KINDS

    def __str__(self) -> str:
        if self.kind is TypeKind.ARRAY:
            return f"Array({self.element})"
        if self.kind is TypeKind.FUNCTION:
            params = ", ".join(str(p) for p in self.params)
            return f"Function {{ params: [{params}], return_type: {self.return_type} }}"
        if self.kind is TypeKind.UNION:
            members = ", ".join(str(m) for m in self.members)
            return f"Union([{members}])"
        return self.kind.value

    __repr__ = __str__


class TypeEnvironment:
    """Maps variable names to their types."""

    def __init__(self) -> None:
        self._types: dict[str, Type] = {}

    def declare(self, name: str, type_info: Type) -> None:
        self._types[name] = type_info

    def get_type(self, name: str) -> Type | None:
        return self._types.get(name)

    def is_declared(self, name: str) -> bool:
        return name in self._types

    def update_type(self, name: str, type_info: Type) -> bool:
        """Replace the type of an existing name; False if it was never declared."""
        if name not in self._types:
            return False
        self._types[name] = type_info
        return True