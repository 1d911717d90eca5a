from jsengine.vm.frame import Frame
from jsengine.vm.value import Number


def test_default_frame():
    frame = Frame()
    assert frame.return_address == 0
    assert frame.arg_count == 0
    assert frame.locals == [0] * 16
    assert frame.arguments == []
    assert frame.closure_vars == {}
    assert frame.function_handle is None
    assert frame.this_value is None


def test_with_return_address():
    frame = Frame.with_return_address(7)
    assert frame.return_address == 7
    assert frame.locals == Frame().locals
    assert frame.function_handle is None


def test_frames_do_not_share_mutable_state():
    first = Frame()
    second = Frame()
    first.arguments.append(Number(1.0))
    first.closure_vars["x"] = Number(2.0)
    first.locals[0] = 5
    assert second.arguments == []
    assert second.closure_vars == {}
    assert second.locals[0] == 0


def test_frame_equality():
    assert Frame.with_return_address(3) == Frame(return_address=3)
    assert not Frame.with_return_address(3) == Frame()