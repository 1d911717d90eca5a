"""Instruction set of the virtual machine."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum


class Opcode(Enum):
    """Operation codes. Calling a member builds an :class:`Instruction`."""

    # Stack operations
    PUSH_CONST = "PushConst"
    POP = "Pop"
    DUP = "Dup"
    # Arithmetic
    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"
    DIV = "Div"
    MOD = "Mod"
    INC = "Inc"
    DEC = "Dec"
    # Logical
    AND = "And"
    OR = "Or"
    NOT = "Not"
    XOR = "Xor"
    # Comparison
    EQ = "Eq"
    NE = "Ne"
    LT = "Lt"
    GT = "Gt"
    LE = "Le"
    GE = "Ge"
    STRICT_EQ = "StrictEq"
    STRICT_NE = "StrictNe"
    # Variables
    LOAD_GLOBAL = "LoadGlobal"
    STORE_GLOBAL = "StoreGlobal"
    LOAD_LOCAL = "LoadLocal"
    STORE_LOCAL = "StoreLocal"
    LOAD_ARG = "LoadArg"
    LOAD_THIS_FUNCTION = "LoadThisFunction"
    LOAD_THIS = "LoadThis"
    LOAD_CLOSURE_VAR = "LoadClosureVar"
    # Control flow
    JUMP = "Jump"
    JUMP_IF_TRUE = "JumpIfTrue"
    JUMP_IF_FALSE = "JumpIfFalse"
    # Functions
    CALL = "Call"
    RETURN = "Return"
    # Objects and arrays
    NEW_OBJECT = "NewObject"
    NEW_ARRAY = "NewArray"
    SET_PROPERTY = "SetProperty"
    GET_PROPERTY = "GetProperty"
    # Special
    TYPE_OF = "TypeOf"
    INSTANCE_OF = "InstanceOf"
    IN = "In"
    DELETE = "Delete"
    NEW = "New"
    # Classes and prototypes
    NEW_CLASS = "NewClass"
    GET_PROTOTYPE = "GetPrototype"
    SET_PROTOTYPE = "SetPrototype"
    # Async and generators
    AWAIT = "Await"
    YIELD = "Yield"
    # Exception handling
    THROW = "Throw"
    TRY = "Try"
    CATCH = "Catch"
    FINALLY = "Finally"
    # Modern syntax
    SPREAD = "Spread"
    DESTRUCTURE = "Destructure"
    OPTIONAL_CHAIN = "OptionalChain"
    NULLISH_COALESCE = "NullishCoalesce"
    # Literals
    PUSH_NULL = "PushNull"
    PUSH_UNDEFINED = "PushUndefined"
    PUSH_TRUE = "PushTrue"
    PUSH_FALSE = "PushFalse"
    PUSH_SYMBOL = "PushSymbol"
    PUSH_BIG_INT = "PushBigInt"
    # Direct call by heap handle: (handle, argc)
    CALL_FUNCTION = "CallFunction"

    @property
    def operand_kinds(self) -> tuple[type, ...]:
        """Types of the operands this opcode takes, in order."""
        return _OPERANDS.get(self, ())

    def __call__(self, *operands: int | str) -> Instruction:
        return Instruction(self, operands)


_OPERANDS: dict[Opcode, tuple[type, ...]] = {
    Opcode.PUSH_CONST: (int,),
    Opcode.LOAD_GLOBAL: (int,),
    Opcode.STORE_GLOBAL: (int,),
    Opcode.LOAD_LOCAL: (int,),
    Opcode.STORE_LOCAL: (int,),
    Opcode.LOAD_ARG: (int,),
    Opcode.LOAD_CLOSURE_VAR: (str,),
    Opcode.JUMP: (int,),
    Opcode.JUMP_IF_TRUE: (int,),
    Opcode.JUMP_IF_FALSE: (int,),
    Opcode.CALL: (int,),
    Opcode.NEW_ARRAY: (int,),
    Opcode.TRY: (int, int),
    Opcode.PUSH_SYMBOL: (int,),
    Opcode.PUSH_BIG_INT: (int,),
    Opcode.CALL_FUNCTION: (int, int),
}


@dataclass(frozen=True)
class Instruction:
    """One VM instruction: an opcode and its operands."""

    opcode: Opcode
    operands: tuple[int | str, ...] = ()

    def __post_init__(self) -> None:
        operands = tuple(self.operands)
        object.__setattr__(self, "operands", operands)
        kinds = self.opcode.operand_kinds
        if len(operands) != len(kinds):
            raise TypeError(
                f"{self.opcode.value} takes {len(kinds)} operand(s), got {len(operands)}"
            )
        for kind, operand in zip(kinds, operands):
            if kind is int:
                if isinstance(operand, bool) or not isinstance(operand, int):
                    raise TypeError(f"{self.opcode.value} expects an integer operand")
                if operand < 0:
                    raise ValueError(f"{self.opcode.value} operand must not be negative")
            elif not isinstance(operand, str):
                raise TypeError(f"{self.opcode.value} expects a string operand")

    def __str__(self) -> str:
        if not self.operands:
            return self.opcode.value
        rendered = ", ".join(
            json.dumps(op) if isinstance(op, str) else str(op) for op in self.operands
        )
        return f"{self.opcode.value}({rendered})"