from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .engine import Engine
from .tape import TapeSnapshot


@dataclass(frozen=True)
class RunOptions:
    trace: bool = False
    radius: int = 5


@dataclass(frozen=True)
class RunResult:
    output: bytes
    snapshot: TapeSnapshot
    trace: Tuple[str, ...]

    @property
    def text(self) -> str:
        # One character per byte, the way "." prints a cell.
        return self.output.decode('latin-1')


def run_string(program: str, input_text: str = '', *, options: Optional[RunOptions] = None) -> RunResult:
    opts = options if options is not None else RunOptions()
    sink = io.BytesIO()
    engine = Engine(output=sink, trace=opts.trace)
    engine.execute(program, input_text)
    return RunResult(output=sink.getvalue(), snapshot=engine.snapshot(opts.radius), trace=tuple(engine.trace))


def run_file(
    path: str | Path,
    input_text: str = '',
    *,
    options: Optional[RunOptions] = None,
    encoding: str = "utf-8",
) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), input_text, options=options)
