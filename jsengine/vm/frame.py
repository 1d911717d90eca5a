"""Call frames of the virtual machine."""

from __future__ import annotations

from dataclasses import dataclass, field

from jsengine.vm.value import Value

LOCAL_SLOTS = 16


@dataclass
class Frame:
    """State of one function activation."""

    return_address: int = 0
    arg_count: int = 0
    locals: list[int] = field(default_factory=lambda: [0] * LOCAL_SLOTS)
    base_pointer: int = 0
    arguments: list[Value] = field(default_factory=list)
    closure_vars: dict[str, Value] = field(default_factory=dict)
    function_handle: int | None = None
    this_value: Value | None = None

    @classmethod
    def with_return_address(cls, return_address: int) -> Frame:
        """Build an empty frame that returns to the given address."""
        return cls(return_address=return_address)