import pytest

from jsengine.vm.instructions import Instruction, Opcode


def test_calling_opcode_builds_instruction():
    instr = Opcode.PUSH_CONST(0)
    assert instr == Instruction(Opcode.PUSH_CONST, (0,))
    assert instr.operands == (0,)
    assert instr.opcode is Opcode.PUSH_CONST


def test_instructions_without_operands():
    assert Opcode.POP().operands == ()
    assert Opcode.DUP().operands == ()
    assert Opcode.ADD().operands == ()
    assert Opcode.RETURN().operands == ()
    assert Opcode.NEW_OBJECT().operands == ()
    assert Opcode.ADD.operand_kinds == ()


def test_opcode_lookup_round_trip():
    for op in Opcode:
        assert Opcode(op.value) is op


def test_wrong_operand_count_raises():
    with pytest.raises(TypeError):
        Opcode.ADD(1)
    with pytest.raises(TypeError):
        Opcode.PUSH_CONST()
    with pytest.raises(TypeError):
        Opcode.TRY(1)


def test_wrong_operand_type_raises():
    with pytest.raises(TypeError):
        Opcode.LOAD_CLOSURE_VAR(3)
    with pytest.raises(TypeError):
        Opcode.JUMP("3")
    with pytest.raises(TypeError):
        Opcode.CALL(True)


def test_negative_operand_raises():
    with pytest.raises(ValueError):
        Opcode.LOAD_LOCAL(-1)


def test_two_operand_instructions():
    instr = Opcode.CALL_FUNCTION(4, 2)
    assert instr.operands == (4, 2)
    assert Opcode.TRY(1, 5).operands == (1, 5)


def test_equality_and_hash():
    assert Opcode.LOAD_CLOSURE_VAR("x") == Opcode.LOAD_CLOSURE_VAR("x")
    assert not Opcode.LOAD_CLOSURE_VAR("x") == Opcode.LOAD_CLOSURE_VAR("y")
    assert len({Opcode.DUP(), Opcode.DUP(), Opcode.POP()}) == 2


def test_text_form():
    assert str(Opcode.PUSH_CONST(0)) == "PushConst(0)"
    assert str(Opcode.LOAD_CLOSURE_VAR("x")) == 'LoadClosureVar("x")'
    assert str(Opcode.RETURN()) == Opcode.RETURN.value