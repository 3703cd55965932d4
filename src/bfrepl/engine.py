from __future__ import annotations

import sys
from typing import BinaryIO, Iterator, List, Optional

from .errors import make_loop_end_error, make_loop_start_error
from .state import EngineState
from .tape import Tape, TapeSnapshot


class Engine:
    """Executes programs against one tape that lives as long as the engine.

    Each call to :meth:`execute` is a turn: the position, loop stack and skip
    marker start fresh, the tape carries over from the previous turn.
    """

    def __init__(self, tape: Optional[Tape] = None, *, output: Optional[BinaryIO] = None, trace: bool = False):
        self.tape = tape if tape is not None else Tape()
        self.output = output
        self.state = EngineState(is_tracing=trace)

    @property
    def trace(self) -> List[str]:
        return self.state.trace

    def snapshot(self, radius: int = 5) -> TapeSnapshot:
        return self.tape.snapshot(radius)

    def execute(self, program: str, input_text: str = '') -> None:
        """Run ``program`` to completion.

        Each byte goes to the output stream as soon as it is produced and
        nothing is kept here; the stream is flushed before returning, also
        when the program fails.

        Raises:
            UnmatchedLoopEnd: a "]" had no open "[" to pop or jump back to.
            UnmatchedLoopStart: the text ended with loops still open.
            LeftBoundExceeded: the program moved left of cell 0.
        """
        self.state.reset()
        sink = self.output if self.output is not None else sys.stdout.buffer
        inputs = iter(input_text)
        try:
            while self.state.position < len(program):
                self._step(program, inputs, sink)
                self.state.position += 1
        finally:
            sink.flush()

        if self.state.loop_stack:
            raise make_loop_start_error(source=program, open_positions=self.state.loop_stack)

    def _step(self, program: str, inputs: Iterator[str], sink: BinaryIO) -> None:
        state = self.state
        command = program[state.position]

        # Brackets are tracked even while skipping so the skip ends at the right "]".
        if command == '[':
            self._start_of_loop()
        elif command == ']':
            self._end_of_loop(program)

        if state.skipping:
            return

        tape = self.tape
        if command == '+':
            tape.increment()
        elif command == '-':
            tape.decrement()
        elif command == '>':
            tape.move_right()
        elif command == '<':
            tape.move_left()
        elif command == '.':
            sink.write(bytes((tape.read_value(),)))
        elif command == ',':
            char = next(inputs, None)
            if char is not None:
                tape.write_value(ord(char) & 0xFF)
        else:
            return
        if state.is_tracing:
            state.add_trace(f"{state.position:5d} {command} ptr={tape.pointer} cell={tape.read_value()}")

    def _start_of_loop(self) -> None:
        state = self.state
        state.loop_stack.append(state.position)
        # Nested starts inside a skipped body never get their own guard check.
        if not state.skipping and self.tape.is_zero():
            state.skip_marker = state.position
        if state.is_tracing:
            action = "skip" if state.skip_marker == state.position else f"push depth={len(state.loop_stack)}"
            state.add_trace(f"{state.position:5d} [ {action}")

    def _end_of_loop(self, program: str) -> None:
        state = self.state
        if state.skipping:
            if not state.loop_stack:
                raise make_loop_end_error(source=program, position=state.position)
            start = state.loop_stack.pop()
            if start == state.skip_marker:
                state.skip_marker = None
                if state.is_tracing:
                    state.add_trace(f"{state.position:5d} ] end skip of {start}")
            return

        if not state.loop_stack:
            raise make_loop_end_error(source=program, position=state.position)
        if self.tape.is_zero():
            start = state.loop_stack.pop()
            if state.is_tracing:
                state.add_trace(f"{state.position:5d} ] exit loop {start}")
        else:
            # Resume right after the "[", which stays on the stack.
            here = state.position
            state.position = state.loop_stack[-1]
            if state.is_tracing:
                state.add_trace(f"{here:5d} ] jump to {state.position}")
