# jsengine

The core of a small JavaScript engine. It has two parts:

- `jsengine.vm` is a stack-based bytecode virtual machine. It has a value model, a heap addressed by handles, call frames and an `Executor` that runs `Bytecode`.
- `jsengine.semantic` is a semantic analyzer for a JavaScript syntax tree. It checks scopes, declarations, `const` reassignment, the use of `this` and simple type compatibility.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## The virtual machine

Modules in `jsengine.vm`:

- `value`: `Value` and its variants `Number`, `String`, `Boolean`, `ObjectRef`, `ArrayRef`, `FunctionRef`, `Null` and `Undefined`. Each variant has `is_primitive`, `as_number`, `as_bool`, `as_string`, `to_number`, `to_string` and `to_boolean`.
- `instructions`: the `Opcode` enum and the `Instruction` dataclass. Calling an opcode builds an instruction, for example `Opcode.PUSH_CONST(0)`. Operand counts and types are checked.
- `bytecode`: `Bytecode`, a list of instructions.
- `heap`: `Heap`. It holds `ObjectEntry`, `ArrayEntry`, `FunctionEntry` and `StringEntry` items under integer handles.
- `frame`: `Frame`, the state of one function activation.
- `stack`: `Stack`, the operand values and the saved frames.
- `executor`: `Executor` and `VMError`.

```python
from jsengine.vm.bytecode import Bytecode
from jsengine.vm.executor import Executor
from jsengine.vm.instructions import Opcode
from jsengine.vm.value import Number

program = Bytecode([
    Opcode.PUSH_CONST(0),
    Opcode.PUSH_CONST(1),
    Opcode.ADD(),
])

executor = Executor()
executor.execute(program, [Number(3.0), Number(2.0)])
print(executor.stack.values)  # [Number(5.0)]
```

### Calling functions

1. Allocate the function body with `Heap.alloc_function(bytecode, arg_count, local_count)`.
2. Push the optional `this` value, then the arguments, then a `FunctionRef` to the function.
3. Execute `Opcode.CALL(argc)`. You can also execute `Opcode.CALL_FUNCTION(handle, argc)`, which calls the function by its handle without a `FunctionRef` on the stack.

Inside the function:

- `LOAD_ARG`, `LOAD_THIS`, `LOAD_THIS_FUNCTION` and `LOAD_CLOSURE_VAR` read the call's arguments, its `this` value, the function itself and the variables set with `Heap.set_closure_var`.
- `RETURN` leaves the result on the stack.

Execution of the calling bytecode ends once the call has completed.

### Errors

`Executor` raises `VMError` in these cases:

- an operand stack is empty when a value is needed;
- no function can be found for `CALL`;
- a function handle is invalid;
- `LOAD_THIS_FUNCTION` is used outside a function;
- an opcode has no implementation.

## Semantic analysis

The tree is built from the dataclasses in `jsengine.semantic.nodes`, such as `Program`, `VariableDeclaration`, `Identifier` and `CallExpression`.

```python
from jsengine.semantic.analyzer import analyze
from jsengine.semantic.errors import ConstReassignment
from jsengine.semantic.nodes import (
    AssignmentExpression, ExpressionStatement, Identifier, NumberLiteral,
    Program, VariableDeclaration, VariableDeclarator,
)

# const x = 42; x = 100;
program = Program([
    VariableDeclaration("const", [VariableDeclarator(Identifier("x"), NumberLiteral(42.0))]),
    ExpressionStatement(AssignmentExpression(Identifier("x"), NumberLiteral(100.0))),
])

try:
    analyze(program)
except ConstReassignment as error:
    print(error)  # Cannot reassign const variable 'x'
```

`analyze` returns `None` when the program is valid. Otherwise it raises the first `SemanticError` it found. The subclasses are:

- `UndeclaredVariable`
- `UninitializedVariable`
- `ConstReassignment`
- `TypeMismatch`
- `UndeclaredFunction`
- `InvalidThisUsage`
- `DuplicateDeclaration`

To run several checks and keep the collected `errors`, create a `SemanticAnalyzer` and call its `analyze` method.

Supporting modules:

- `jsengine.semantic.scope` provides `Scope`, `ScopeType`, `VariableInfo` and `FunctionInfo`.
- `jsengine.semantic.typesystem` provides `Type`, `TypeKind` and `TypeEnvironment`.

## What the package does not do

- It has no parser. Syntax trees must be built from the node classes.
- It has no compiler from syntax trees to bytecode.
- It has no command-line program.
- Many opcodes are defined but not run by the executor, among them `MOD`, the logical, strict-comparison, exception, class and async opcodes. Executing one raises `VMError`.