import pytest

from conftest import FakeClock
from errors import TimeSourceError
from throttle_gate import ThrottleGate


def test_first_attempt_is_accepted():
    gate = ThrottleGate(FakeClock(100))
    assert gate.try_accept() is True
    assert gate.state.last_accept_secs == 100


def test_within_window_is_rejected():
    gate = ThrottleGate(FakeClock(100, 114))
    assert gate.try_accept()
    assert not gate.try_accept()


def test_window_boundary_is_accepted():
    gate = ThrottleGate(FakeClock(100, 115))
    assert gate.try_accept()
    assert gate.try_accept()
    assert gate.state.last_accept_secs == 115


def test_rejection_does_not_move_anchor():
    gate = ThrottleGate(FakeClock(100, 110, 116))
    assert gate.try_accept()
    assert not gate.try_accept()
    assert gate.state.last_accept_secs == 100
    assert gate.try_accept()


def test_zero_clock_raises_without_transition():
    gate = ThrottleGate(FakeClock(0, 100))
    with pytest.raises(TimeSourceError):
        gate.try_accept()
    assert gate.state.last_accept_secs is None
    assert gate.try_accept()


def test_custom_window():
    gate = ThrottleGate(FakeClock(10, 14, 15), window_secs=5)
    assert gate.try_accept()
    assert not gate.try_accept()
    assert gate.try_accept()
