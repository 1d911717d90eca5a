"""Runtime values manipulated by the virtual machine."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from decimal import Decimal


def _format_number(number: float) -> str:
    """Render a float the way the engine displays numbers (no exponent)."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    return format(Decimal(repr(number)).normalize(), "f")


def _debug_number(number: float) -> str:
    text = _format_number(number)
    if text.lstrip("-").isdigit():
        return text + ".0"
    return text


def _parse_number(text: str) -> float:
    """Parse a numeric string strictly: no surrounding whitespace, no separators."""
    if not text or text != text.strip() or "_" in text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


class Value:
    """Base class of every value the VM can hold on its stack or heap."""

    __slots__ = ()

    def is_primitive(self) -> bool:
        return False

    def as_number(self) -> float | None:
        return None

    def as_bool(self) -> bool | None:
        return None

    def as_string(self) -> str | None:
        return None

    def to_number(self) -> float:
        return math.nan

    def to_string(self) -> str:
        raise NotImplementedError

    def to_boolean(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Number(Value):
    """A double-precision number."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Number({_debug_number(self.value)})"

    def is_primitive(self) -> bool:
        return True

    def as_number(self) -> float | None:
        return self.value

    def to_number(self) -> float:
        return self.value

    def to_string(self) -> str:
        return _format_number(self.value)

    def to_boolean(self) -> bool:
        return self.value != 0.0 and not math.isnan(self.value)


@dataclass(frozen=True, slots=True, repr=False)
class String(Value):
    """A string value."""

    value: str

    def __repr__(self) -> str:
        return f"String({json.dumps(self.value, ensure_ascii=False)})"

    def is_primitive(self) -> bool:
        return True

    def as_string(self) -> str | None:
        return self.value

    def to_number(self) -> float:
        return _parse_number(self.value)

    def to_string(self) -> str:
        return self.value

    def to_boolean(self) -> bool:
        return bool(self.value)


@dataclass(frozen=True, slots=True, repr=False)
class Boolean(Value):
    """A boolean value."""

    value: bool

    def __repr__(self) -> str:
        return f"Boolean({self.to_string()})"

    def is_primitive(self) -> bool:
        return True

    def as_bool(self) -> bool | None:
        return self.value

    def to_number(self) -> float:
        return 1.0 if self.value else 0.0

    def to_string(self) -> str:
        return "true" if self.value else "false"

    def to_boolean(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True, repr=False)
class ObjectRef(Value):
    """A handle to an object stored on the heap."""

    handle: int

    def __repr__(self) -> str:
        return f"Object({self.handle})"

    def to_string(self) -> str:
        return "[object Object]"


@dataclass(frozen=True, slots=True, repr=False)
class ArrayRef(Value):
    """A handle to an array stored on the heap."""

    handle: int

    def __repr__(self) -> str:
        return f"Array({self.handle})"

    def to_string(self) -> str:
        return "[object Array]"


@dataclass(frozen=True, slots=True, repr=False)
class FunctionRef(Value):
    """A handle to a function stored on the heap."""

    handle: int

    def __repr__(self) -> str:
        return f"Function({self.handle})"

    def to_string(self) -> str:
        return "[function]"


@dataclass(frozen=True, slots=True, repr=False)
class Null(Value):
    """The null value."""

    def __repr__(self) -> str:
        return "Null"

    def is_primitive(self) -> bool:
        return True

    def to_number(self) -> float:
        return 0.0

    def to_string(self) -> str:
        return "null"

    def to_boolean(self) -> bool:
        return False


@dataclass(frozen=True, slots=True, repr=False)
class Undefined(Value):
    """The undefined value."""

    def __repr__(self) -> str:
        return "Undefined"

    def is_primitive(self) -> bool:
        return True

    def to_string(self) -> str:
        return "undefined"

    def to_boolean(self) -> bool:
        return False