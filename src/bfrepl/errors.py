from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


def _locate(source: str, position: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of ``position`` in ``source``."""
    before = source[:position]
    line = before.count('\n') + 1
    column = position - (before.rfind('\n') + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, column_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"{' ' * 7}| {' ' * (column_1 - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'loop_end':
        return 'Every "]" needs an earlier "[" that is still open. Remove the extra "]" or add a "[".'
    if kind == 'loop_start':
        return 'Close every "[" with a matching "]" before the end of the program.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class LoopMismatchError(BFError):
    position: int
    line: int = 0
    column: int = 0
    context: str = ''


@dataclass
class UnmatchedLoopEnd(LoopMismatchError):
    pass


@dataclass
class UnmatchedLoopStart(LoopMismatchError):
    open_positions: Tuple[int, ...] = field(default_factory=tuple)


@dataclass
class LeftBoundExceeded(BFError):
    pointer: int = 0


def _render(kind: str, message: str, source: str, position: int) -> Tuple[str, int, int, str]:
    line, column = _locate(source, position)
    ctx = _build_context(source.split('\n'), line, column)
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    text = f"LoopError: {message} (line {line}, column {column})\n{ctx}{hint_block}"
    return text, line, column, ctx


def make_loop_end_error(*, source: str, position: int) -> UnmatchedLoopEnd:
    text, line, column, ctx = _render('loop_end', 'unmatched "]"', source, position)
    return UnmatchedLoopEnd(message=text, position=position, line=line, column=column, context=ctx)


def make_loop_start_error(*, source: str, open_positions: Sequence[int]) -> UnmatchedLoopStart:
    # Report the innermost loop; it is the one closest to the end of the text.
    position = open_positions[-1]
    count = len(open_positions)
    message = 'unmatched "["' if count == 1 else f'{count} unmatched "["'
    text, line, column, ctx = _render('loop_start', message, source, position)
    return UnmatchedLoopStart(
        message=text,
        position=position,
        line=line,
        column=column,
        context=ctx,
        open_positions=tuple(open_positions),
    )


def make_left_bound_error() -> LeftBoundExceeded:
    return LeftBoundExceeded(
        message='TapeError: pointer moved left of cell 0 (the tape only grows to the right)',
        pointer=0,
    )
