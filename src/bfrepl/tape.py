from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import make_left_bound_error

INITIAL_SIZE = 30_000
CENTER = 15_000
GROWTH = 5_000


@dataclass(frozen=True)
class TapeSnapshot:
    """Read-only view of the pointer and the cells around it."""

    offset: int
    pointer: int
    start: int
    cells: Tuple[int, ...]
    size: int

    @property
    def current(self) -> int:
        return self.cells[self.pointer - self.start]

    @property
    def truncated_left(self) -> bool:
        return self.start > 0

    @property
    def truncated_right(self) -> bool:
        return self.start + len(self.cells) < self.size


class Tape:
    """Band of 8-bit cells that grows to the right as the pointer needs it.

    The pointer starts in the middle of the band. Moving past the right edge
    appends ``growth`` zeroed cells; moving left of cell 0 raises
    :class:`~bfrepl.errors.LeftBoundExceeded`.
    """

    def __init__(self, *, size: int = INITIAL_SIZE, start: int = CENTER, growth: int = GROWTH):
        if size <= 0:
            raise ValueError('tape size must be positive')
        if not 0 <= start < size:
            raise ValueError(f'start {start} is outside a tape of {size} cells')
        if growth <= 0:
            raise ValueError('growth must be positive')
        self.cells = np.zeros(size, dtype=np.uint8)
        self.pointer = start
        self.origin = start
        self.growth = growth

    def __len__(self) -> int:
        return len(self.cells)

    def move_right(self) -> None:
        if self.pointer + 1 >= len(self.cells):
            self.cells = np.concatenate((self.cells, np.zeros(self.growth, dtype=np.uint8)))
        self.pointer += 1

    def move_left(self) -> None:
        if self.pointer == 0:
            raise make_left_bound_error()
        self.pointer -= 1

    # Work on Python ints so numpy never sees a uint8 overflow.
    def increment(self) -> None:
        self.cells[self.pointer] = (int(self.cells[self.pointer]) + 1) % 256

    def decrement(self) -> None:
        self.cells[self.pointer] = (int(self.cells[self.pointer]) - 1) % 256

    def read_value(self) -> int:
        return int(self.cells[self.pointer])

    def write_value(self, value: int) -> None:
        if not 0 <= value <= 255:
            raise ValueError(f'cell value must be in 0..255, got {value}')
        self.cells[self.pointer] = value

    def is_zero(self) -> bool:
        return bool(self.cells[self.pointer] == 0)

    def snapshot(self, radius: int = 5) -> TapeSnapshot:
        if radius < 0:
            raise ValueError('radius must not be negative')
        start = max(0, self.pointer - radius)
        end = min(len(self.cells), self.pointer + radius + 1)
        return TapeSnapshot(
            offset=self.pointer - self.origin,
            pointer=self.pointer,
            start=start,
            cells=tuple(int(v) for v in self.cells[start:end]),
            size=len(self.cells),
        )
