"""Compiled bytecode: a sequence of instructions."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from jsengine.vm.instructions import Instruction


@dataclass
class Bytecode:
    """A list of instructions executed by the VM."""

    instructions: list[Instruction] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.instructions = list(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]