from __future__ import annotations

from typing import List

from .tape import TapeSnapshot

RULE_WIDTH = 62


class Colors:
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'
    ON_BLUE = '\033[44m'
    ON_GREY = '\033[48;2;50;50;50m'
    ENDC = '\033[0m'


def _cell(value: int, *, highlight: bool, color: bool) -> str:
    text = f"{value:>4}"
    if not color:
        return text
    if highlight:
        return f"{Colors.ON_BLUE}{Colors.BOLD}{text}{Colors.ENDC}"
    return f"{Colors.ON_GREY}{text}{Colors.ENDC}"


def format_state(snapshot: TapeSnapshot, *, color: bool = True) -> str:
    """Render the pointer position and its neighbouring cells as text."""
    title = f"{Colors.BOLD}{Colors.UNDERLINE}State{Colors.ENDC}" if color else "State"
    rule = '-' * RULE_WIDTH

    row: List[str] = []
    if snapshot.truncated_left:
        row.append('...')
    for i, value in enumerate(snapshot.cells):
        row.append('|')
        row.append(_cell(value, highlight=snapshot.start + i == snapshot.pointer, color=color))
    row.append('|...' if snapshot.truncated_right else '|')

    return "\n".join([
        '',
        title,
        '',
        f"Current position: {snapshot.offset}",
        '',
        rule,
        ''.join(row),
        rule,
    ])
