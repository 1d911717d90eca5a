"""Operand and frame stacks of the virtual machine."""

from __future__ import annotations

from dataclasses import dataclass, field

from jsengine.vm.frame import Frame
from jsengine.vm.value import Value


@dataclass
class Stack:
    """Holds operand values and saved call frames."""

    values: list[Value] = field(default_factory=list)
    frames: list[Frame] = field(default_factory=list)

    def push(self, value: Value) -> None:
        self.values.append(value)

    def pop(self) -> Value | None:
        """Remove and return the top value, or None if the stack is empty."""
        return self.values.pop() if self.values else None

    def push_frame(self, frame: Frame) -> None:
        self.frames.append(frame)

    def pop_frame(self) -> Frame | None:
        """Remove and return the top frame, or None if there is none."""
        return self.frames.pop() if self.frames else None