import pytest

from jsengine.vm.bytecode import Bytecode
from jsengine.vm.instructions import Opcode


def test_empty_bytecode():
    code = Bytecode()
    assert len(code) == 0
    assert list(code) == []


def test_instructions_are_kept_in_order():
    program = [Opcode.PUSH_CONST(0), Opcode.PUSH_CONST(1), Opcode.ADD()]
    code = Bytecode(program)
    assert list(code) == program
    assert code[2] == Opcode.ADD()
    assert len(code) == len(program)


def test_sequence_is_copied_into_a_list():
    program = (Opcode.DUP(), Opcode.POP())
    code = Bytecode(program)
    assert code.instructions == list(program)
    code.instructions.append(Opcode.RETURN())
    assert len(program) == 2


def test_equality():
    assert Bytecode([Opcode.RETURN()]) == Bytecode([Opcode.RETURN()])
    assert not Bytecode([Opcode.RETURN()]) == Bytecode([Opcode.POP()])


def test_index_out_of_range():
    with pytest.raises(IndexError):
        Bytecode()[0]