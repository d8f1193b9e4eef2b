from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..errors import PathInvariantError
from ..spec.model import Coloring, ConnectionKind, ConnectionSpec
from .core import Direction, Position

VERTICAL_CHAR = "|"
HORIZONTAL_CHAR = "-"
JOINT_CHAR = "+"
JUNCTION_CHAR = "#"

_ARROWS = {
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
    Direction.UP: "^",
    Direction.DOWN: "v",
}


@dataclass(frozen=True)
class ConnectionPart:
    start: Position
    end: Position
    fill_char: str


@dataclass(frozen=True)
class ConnectionDisplay:
    parts: Tuple[ConnectionPart, ...]
    color: Coloring
    joint_char: str
    start_char: str
    end_char: str
    path: Tuple[Position, ...] = ()

    @property
    def start(self) -> Optional[Position]:
        return self.path[0] if self.path else None

    @property
    def end(self) -> Optional[Position]:
        return self.path[-1] if self.path else None


def _step_direction(a: Position, b: Position) -> Direction:
    direction = Direction.from_step(b.x - a.x, b.y - a.y)
    if direction is None:
        raise PathInvariantError(f"Path step {a} -> {b} is not a single orthogonal move.")
    return direction


def _arrow(direction: Optional[Direction]) -> str:
    if direction is None:
        return JUNCTION_CHAR
    return _ARROWS[direction]


def _end_chars(
    first: Optional[Direction], last: Optional[Direction], kind: ConnectionKind
) -> Tuple[str, str]:
    if kind == ConnectionKind.GENERIC:
        return JUNCTION_CHAR, JUNCTION_CHAR
    incoming_start = first.opposite if first is not None else None
    if kind == ConnectionKind.SINGULAR:
        return JUNCTION_CHAR, _arrow(last)
    return _arrow(incoming_start), _arrow(last)


def _fill_char(direction: Direction) -> str:
    return VERTICAL_CHAR if direction.is_vertical else HORIZONTAL_CHAR


def connection_display_from_path(
    spec: ConnectionSpec, path: Sequence[Position]
) -> ConnectionDisplay:
    """Break a routed path into straight parts and pick its end glyphs."""
    parts: List[ConnectionPart] = []
    first: Optional[Direction] = None
    last: Optional[Direction] = None
    part_start: Optional[Position] = None

    for a, b in zip(path, path[1:]):
        direction = _step_direction(a, b)
        if part_start is None:
            part_start = a
        if last is not None and direction != last:
            parts.append(ConnectionPart(part_start, a, _fill_char(last)))
            part_start = a
        if first is None:
            first = direction
        last = direction

    if part_start is not None and last is not None:
        parts.append(ConnectionPart(part_start, path[-1], _fill_char(last)))

    start_char, end_char = _end_chars(first, last, spec.kind)
    return ConnectionDisplay(
        parts=tuple(parts),
        color=spec.color,
        joint_char=JOINT_CHAR,
        start_char=start_char,
        end_char=end_char,
        path=tuple(path),
    )
