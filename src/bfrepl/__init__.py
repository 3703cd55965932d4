
from .engine import Engine
from .tape import Tape, TapeSnapshot
from .errors import BFError, LeftBoundExceeded, LoopMismatchError, UnmatchedLoopEnd, UnmatchedLoopStart
from .api import RunOptions, RunResult, run_file, run_string

__all__ = [
    'Engine',
    'Tape',
    'TapeSnapshot',
    'BFError',
    'LoopMismatchError',
    'UnmatchedLoopEnd',
    'UnmatchedLoopStart',
    'LeftBoundExceeded',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
]
