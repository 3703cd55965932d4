from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional, TextIO

from .engine import Engine
from .errors import BFError
from .render import format_state

QUIT = 'quit'


def bracket_depth(text: str) -> int:
    return text.count('[') - text.count(']')


def read_program(read_line: Callable[[], str]) -> Optional[str]:
    """Read lines until every "[" has been closed; None once input is exhausted.

    A surplus of "]" does not wait for more lines; the engine reports it.
    """
    lines: List[str] = []
    while True:
        line = read_line()
        if not line:
            return None if not lines else ''.join(lines)
        lines.append(line)
        if bracket_depth(''.join(lines)) <= 0:
            return ''.join(lines)


class ConsoleSink:
    """Binary stream the engine writes to; passes each byte to a text console at once."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.dirty = False

    def write(self, data: bytes) -> int:
        # One character per byte, as "." prints a cell.
        self.stream.write(data.decode('latin-1'))
        self.dirty = True
        return len(data)

    def flush(self) -> None:
        self.stream.flush()

    def end_line(self) -> None:
        if self.dirty:
            self.stream.write('\n')
            self.dirty = False


class Session:
    """Interactive loop around one engine; the tape survives every turn.

    An engine created here writes straight to ``stdout``. An engine passed in
    keeps the output stream it was given.
    """

    def __init__(
        self,
        engine: Optional[Engine] = None,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        color: bool = True,
        trace: bool = False,
        radius: int = 5,
    ):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.sink = ConsoleSink(self.stdout)
        self.engine = engine if engine is not None else Engine(output=self.sink, trace=trace)
        self.color = color
        self.radius = radius

    def _print(self, *parts: str) -> None:
        print(*parts, file=self.stdout)

    def run_turn(self, program: str, input_text: Optional[str] = None) -> bool:
        """Run one program; returns False when it failed.

        Without ``input_text`` the user is asked for a line of input, but only
        when the program contains a read instruction.
        """
        if input_text is None:
            input_text = ''
            if ',' in program:
                self._print("Please enter program input:")
                input_text = self.stdin.readline().strip()

        ok = True
        try:
            self.engine.execute(program, input_text)
        except BFError as e:
            ok = False
            self.sink.end_line()
            self._print(f"Error: {e}")
        finally:
            self.sink.end_line()

        if self.engine.state.is_tracing:
            for line in self.engine.trace:
                self._print(line)
        self._print(format_state(self.engine.snapshot(self.radius), color=self.color))
        return ok

    def loop(self) -> None:
        program = ''
        while program != QUIT:
            self.run_turn(program)
            self._print("Next command:")
            text = read_program(self.stdin.readline)
            if text is None:
                return
            program = text.strip()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='bfrepl', description='Interactive interpreter for the eight-instruction tape language.')
    parser.add_argument('program', nargs='?', help='program file to run once; omit for an interactive session')
    parser.add_argument('-i', '--input', default='', help='input text consumed by "," when running a file')
    parser.add_argument('--no-color', action='store_true', help='disable ANSI colours in the state display')
    parser.add_argument('--trace', action='store_true', help='print every executed instruction after each turn')
    parser.add_argument('--radius', type=int, default=5, help='cells shown on each side of the pointer')
    args = parser.parse_args(argv)

    if args.radius < 0:
        parser.error('--radius must not be negative')

    session = Session(color=not args.no_color, trace=args.trace, radius=args.radius)
    if args.program is None:
        session.loop()
        return 0

    try:
        with open(args.program, 'r', encoding='utf-8') as f:
            code = f.read()
    except FileNotFoundError:
        print(f"Couldn't find file: {args.program}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Couldn't read file: {args.program} ({e})")
        return 1

    return 0 if session.run_turn(code, args.input) else 1
