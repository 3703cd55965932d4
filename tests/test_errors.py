"""
Error messages point at the offending bracket.
"""

import io

import pytest

from bfrepl import Engine
from bfrepl.errors import (
    BFError,
    LeftBoundExceeded,
    LoopMismatchError,
    UnmatchedLoopEnd,
    make_left_bound_error,
    make_loop_end_error,
    make_loop_start_error,
)


def test_loop_end_error_location():
    err = make_loop_end_error(source="+\n+]", position=3)
    assert isinstance(err, UnmatchedLoopEnd)
    assert (err.line, err.column) == (2, 2)
    assert "line 2, column 2" in str(err)
    assert str(err) == err.message
    assert "Hint:" in err.message


def test_context_marks_column():
    err = make_loop_end_error(source="+\n+]", position=3)
    lines = err.context.splitlines()
    assert lines[0] == "     1 | +"
    assert lines[1] == ">    2 | +]"
    assert lines[2] == "       |  ^"


def test_loop_start_error_counts_open_loops():
    single = make_loop_start_error(source="[", open_positions=[0])
    assert 'unmatched "["' in single.message
    assert single.open_positions == (0,)

    several = make_loop_start_error(source="+[[", open_positions=[1, 2])
    assert '2 unmatched "["' in several.message
    assert several.position == 2
    assert several.column == 3


def test_left_bound_error_is_not_a_loop_error():
    err = make_left_bound_error()
    assert isinstance(err, LeftBoundExceeded)
    assert isinstance(err, BFError)
    assert not isinstance(err, LoopMismatchError)
    assert err.pointer == 0


def test_engine_error_uses_program_text():
    engine = Engine(output=io.BytesIO())
    with pytest.raises(BFError) as excinfo:
        engine.execute("+++\n--]\n")
    assert excinfo.value.line == 2
    assert excinfo.value.column == 3
    assert "--]" in excinfo.value.context
