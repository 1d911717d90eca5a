"""Bytecode interpreter of the virtual machine."""

from __future__ import annotations

import copy
import math
from collections.abc import Sequence

from jsengine.vm.bytecode import Bytecode
from jsengine.vm.frame import Frame
from jsengine.vm.heap import FunctionEntry, Heap
from jsengine.vm.instructions import Instruction, Opcode
from jsengine.vm.stack import Stack
from jsengine.vm.value import (
    ArrayRef,
    Boolean,
    FunctionRef,
    Number,
    ObjectRef,
    String,
    Undefined,
    Value,
)

GLOBAL_SLOTS = 32
LOCAL_SLOTS = 16


class VMError(RuntimeError):
    """Raised when the machine reaches a state it cannot continue from."""


def _divide(a: float, b: float) -> float:
    """IEEE 754 division: dividing by zero gives an infinity or NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _arithmetic(opcode: Opcode, a: float, b: float) -> float:
    if opcode is Opcode.SUB:
        return a - b
    if opcode is Opcode.MUL:
        return a * b
    return _divide(a, b)


def _compare(opcode: Opcode, a: float, b: float) -> bool:
    if opcode is Opcode.LT:
        return a < b
    if opcode is Opcode.GT:
        return a > b
    if opcode is Opcode.LE:
        return a <= b
    return a >= b


class Executor:
    """Runs bytecode against an operand stack, a heap and global slots."""

    def __init__(self) -> None:
        self.stack = Stack()
        self.frame = Frame()
        self.heap = Heap()
        self.globals: list[Value] = [Undefined() for _ in range(GLOBAL_SLOTS)]

    def _pop(self) -> Value:
        value = self.stack.pop()
        if value is None:
            raise VMError("operand stack is empty")
        return value

    def _pop_pair(self) -> tuple[Value, Value]:
        right = self._pop()
        left = self._pop()
        return left, right

    def _take_callee(self) -> int:
        """Remove the function to call from the stack and return its handle."""
        values = self.stack.values
        if not values:
            raise VMError("operand stack is empty at Call")
        if isinstance(values[-1], FunctionRef):
            return values.pop().handle
        for index in range(len(values) - 1, -1, -1):
            if isinstance(values[index], FunctionRef):
                return values.pop(index).handle
        raise VMError("no function found on the stack for Call")

    def _invoke(self, handle: int, argc: int, ip: int, constants: Sequence[Value]) -> None:
        entry = self.heap.get(handle)
        if not isinstance(entry, FunctionEntry):
            raise VMError(f"invalid function handle on the heap: {handle}")
        bytecode = entry.bytecode
        closure_vars = dict(entry.closure_vars)
        args = [self._pop() for _ in range(argc)]
        args.reverse()
        this_value = self.stack.pop()
        new_frame = Frame(
            return_address=ip + 1,
            arg_count=argc,
            arguments=args,
            closure_vars=closure_vars,
            function_handle=handle,
            this_value=this_value,
        )
        self.stack.push_frame(copy.deepcopy(self.frame))
        self.frame = new_frame
        self.execute(bytecode, constants)
        previous = self.stack.pop_frame()
        if previous is not None:
            self.frame = previous

    def execute(self, bytecode: Bytecode, constants: Sequence[Value]) -> None:
        """Run the instructions until they end, a call completes or a return."""
        instructions: list[Instruction] = bytecode.instructions
        locals_: list[Value] = [Undefined() for _ in range(LOCAL_SLOTS)]
        ip = 0
        while ip < len(instructions):
            instruction = instructions[ip]
            opcode = instruction.opcode
            operands = instruction.operands
            match opcode:
                case Opcode.PUSH_CONST:
                    idx = operands[0]
                    self.stack.push(constants[idx] if idx < len(constants) else Undefined())
                case Opcode.ADD:
                    a, b = self._pop_pair()
                    if isinstance(a, Number) and isinstance(b, Number):
                        self.stack.push(Number(a.value + b.value))
                    else:
                        self.stack.push(String(f"{a!r}{b!r}"))
                case Opcode.SUB | Opcode.MUL | Opcode.DIV:
                    a, b = self._pop_pair()
                    if isinstance(a, Number) and isinstance(b, Number):
                        self.stack.push(Number(_arithmetic(opcode, a.value, b.value)))
                    else:
                        self.stack.push(Number(math.nan))
                case Opcode.EQ:
                    a, b = self._pop_pair()
                    self.stack.push(Boolean(a == b))
                case Opcode.NE:
                    a, b = self._pop_pair()
                    self.stack.push(Boolean(a != b))
                case Opcode.LT | Opcode.GT | Opcode.LE | Opcode.GE:
                    a, b = self._pop_pair()
                    if isinstance(a, Number) and isinstance(b, Number):
                        self.stack.push(Boolean(_compare(opcode, a.value, b.value)))
                    else:
                        self.stack.push(Boolean(False))
                case Opcode.JUMP:
                    ip = operands[0]
                    continue
                case Opcode.JUMP_IF_TRUE:
                    if self._pop().as_bool() or False:
                        ip = operands[0]
                        continue
                case Opcode.JUMP_IF_FALSE:
                    if not (self._pop().as_bool() or False):
                        ip = operands[0]
                        continue
                case Opcode.LOAD_LOCAL:
                    idx = operands[0]
                    self.stack.push(locals_[idx] if idx < len(locals_) else Undefined())
                case Opcode.STORE_LOCAL:
                    value = self._pop()
                    if operands[0] < len(locals_):
                        locals_[operands[0]] = value
                case Opcode.LOAD_GLOBAL:
                    idx = operands[0]
                    self.stack.push(self.globals[idx] if idx < len(self.globals) else Undefined())
                case Opcode.STORE_GLOBAL:
                    value = self._pop()
                    if operands[0] < len(self.globals):
                        self.globals[operands[0]] = value
                case Opcode.CALL:
                    handle = self._take_callee()
                    self._invoke(handle, operands[0], ip, constants)
                    break
                case Opcode.CALL_FUNCTION:
                    self._invoke(operands[0], operands[1], ip, constants)
                    break
                case Opcode.RETURN:
                    return_value = self.stack.pop()
                    previous = self.stack.pop_frame()
                    if previous is not None:
                        self.frame = previous
                    if return_value is not None:
                        self.stack.push(return_value)
                    break
                case Opcode.POP:
                    self.stack.pop()
                case Opcode.DUP:
                    if self.stack.values:
                        self.stack.push(self.stack.values[-1])
                case Opcode.NEW_OBJECT:
                    self.stack.push(ObjectRef(self.heap.alloc_object()))
                case Opcode.NEW_ARRAY:
                    self.stack.push(ArrayRef(self.heap.alloc_array()))
                case Opcode.SET_PROPERTY:
                    value = self._pop()
                    key = self._pop()
                    obj = self._pop()
                    if isinstance(obj, ObjectRef) and isinstance(key, String):
                        self.heap.set_object_property(obj.handle, key.value, value)
                case Opcode.GET_PROPERTY:
                    key = self._pop()
                    obj = self._pop()
                    result: Value | None = None
                    if isinstance(obj, ObjectRef) and isinstance(key, String):
                        result = self.heap.get_object_property(obj.handle, key.value)
                    self.stack.push(result if result is not None else Undefined())
                case Opcode.LOAD_ARG:
                    idx = operands[0]
                    arguments = self.frame.arguments
                    self.stack.push(arguments[idx] if idx < len(arguments) else Undefined())
                case Opcode.LOAD_THIS_FUNCTION:
                    if self.frame.function_handle is None:
                        raise VMError("LoadThisFunction used outside of a function")
                    self.stack.push(FunctionRef(self.frame.function_handle))
                case Opcode.LOAD_THIS:
                    this_value = self.frame.this_value
                    self.stack.push(this_value if this_value is not None else Undefined())
                case Opcode.LOAD_CLOSURE_VAR:
                    value = self.frame.closure_vars.get(operands[0])
                    self.stack.push(value if value is not None else Undefined())
                case _:
                    raise VMError(f"instruction not implemented: {instruction}")
            ip += 1