from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class EngineState:
    position: int = 0
    loop_stack: List[int] = field(default_factory=list)
    # Position of the "[" whose body is being skipped, None when executing normally.
    skip_marker: Optional[int] = None
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False

    def reset(self) -> None:
        self.position = 0
        self.loop_stack.clear()
        self.skip_marker = None
        self.trace.clear()

    @property
    def skipping(self) -> bool:
        return self.skip_marker is not None

    def add_trace(self, message: str) -> None:
        if self.is_tracing:
            self.trace.append(message)
