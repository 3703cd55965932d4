"""
Tape behaviour: wraparound arithmetic, growth to the right, the left bound
and snapshots.
"""

import numpy as np
import pytest

from bfrepl.errors import LeftBoundExceeded
from bfrepl.tape import CENTER, GROWTH, INITIAL_SIZE, Tape


def test_init():
    tape = Tape()
    assert len(tape) == INITIAL_SIZE == 30_000
    assert tape.pointer == CENTER == 15_000
    assert tape.is_zero()
    assert not tape.cells.any()


def test_incr_decr():
    tape = Tape()
    for _ in range(50):
        tape.increment()
    assert chr(tape.read_value()) == '2'
    for _ in range(16):
        tape.increment()
    assert chr(tape.read_value()) == 'B'
    for _ in range(5):
        tape.decrement()
    assert chr(tape.read_value()) == '='
    for _ in range(256):
        tape.increment()
    assert chr(tape.read_value()) == '='
    for _ in range(256):
        tape.decrement()
    assert chr(tape.read_value()) == '='


@pytest.mark.parametrize("value", [0, 1, 127, 128, 254, 255])
def test_wraparound_closure(value):
    tape = Tape()
    tape.write_value(value)
    for _ in range(256):
        tape.increment()
    assert tape.read_value() == value
    for _ in range(256):
        tape.decrement()
    assert tape.read_value() == value


def test_overflow_and_underflow_wrap():
    tape = Tape()
    tape.write_value(255)
    tape.increment()
    assert tape.read_value() == 0
    tape.decrement()
    assert tape.read_value() == 255


def test_up_down():
    tape = Tape()
    for _ in range(50):
        tape.increment()
    tape.move_right()
    assert tape.is_zero()
    for _ in range(66):
        tape.increment()
    tape.move_left()
    assert chr(tape.read_value()) == '2'
    tape.move_right()
    assert chr(tape.read_value()) == 'B'
    tape.move_right()
    assert tape.is_zero()


def test_write_value():
    tape = Tape()
    tape.write_value(ord(','))
    for _ in range(44):
        tape.decrement()
    assert tape.is_zero()


@pytest.mark.parametrize("value", [-1, 256, 1000])
def test_write_value_rejects_out_of_range(value):
    tape = Tape()
    with pytest.raises(ValueError):
        tape.write_value(value)
    assert tape.is_zero()


def test_extend():
    tape = Tape()
    for _ in range(14_999):
        tape.move_right()
    assert tape.pointer == INITIAL_SIZE - 1
    assert len(tape) == INITIAL_SIZE

    tape.move_right()
    assert len(tape) == INITIAL_SIZE + GROWTH
    assert tape.pointer == INITIAL_SIZE
    assert not tape.cells[INITIAL_SIZE:].any()

    tape.move_right()
    assert len(tape) == 35_000


def test_extend_keeps_existing_cells():
    tape = Tape(size=3, start=2, growth=4)
    tape.write_value(9)
    tape.move_right()
    assert len(tape) == 7
    assert tape.pointer == 3
    assert tape.cells.dtype == np.uint8
    assert list(tape.cells) == [0, 0, 9, 0, 0, 0, 0]


def test_move_left_at_zero_is_fatal():
    tape = Tape(size=3, start=0)
    with pytest.raises(LeftBoundExceeded):
        tape.move_left()
    assert tape.pointer == 0
    assert len(tape) == 3


@pytest.mark.parametrize("kwargs", [
    {"size": 0},
    {"size": 10, "start": 10},
    {"size": 10, "start": -1},
    {"growth": 0},
])
def test_invalid_construction(kwargs):
    with pytest.raises(ValueError):
        Tape(**kwargs)


def test_snapshot_of_fresh_tape():
    snap = Tape().snapshot()
    assert snap.offset == 0
    assert snap.pointer == CENTER
    assert snap.start == CENTER - 5
    assert snap.cells == (0,) * 11
    assert snap.current == 0
    assert snap.truncated_left
    assert snap.truncated_right


def test_snapshot_clips_at_edges():
    left = Tape(size=20, start=2).snapshot()
    assert left.start == 0
    assert len(left.cells) == 8
    assert not left.truncated_left

    right = Tape(size=10, start=8).snapshot()
    assert right.start == 3
    assert len(right.cells) == 7
    assert not right.truncated_right


def test_snapshot_reports_current_cell():
    tape = Tape()
    tape.increment()
    tape.move_right()
    tape.write_value(7)
    snap = tape.snapshot(radius=1)
    assert snap.cells == (1, 7, 0)
    assert snap.current == 7
    assert snap.offset == 1


def test_snapshot_offset_stable_after_growth():
    tape = Tape(size=4, start=2, growth=4)
    tape.move_right()
    tape.move_right()
    assert len(tape) == 8
    assert tape.snapshot().offset == 2


def test_snapshot_rejects_negative_radius():
    with pytest.raises(ValueError):
        Tape().snapshot(radius=-1)
