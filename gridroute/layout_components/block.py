from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from wcwidth import wcwidth

from ..errors import DiagramError
from ..spec.model import BlockSpec, Coloring
from .constraint import BlockConstraint
from .core import Position, Side, Size

# Border plus one column of padding on each side.
BOX_PADDING = 4


def text_width(text: str) -> int:
    return sum(max(wcwidth(char), 1) for char in text)


@dataclass
class BlockDisplay:
    name: str
    color: Coloring
    lines: List[str]
    size: Size
    position: Position = field(default_factory=lambda: Position(0, 0))
    placed: bool = False

    def place(self, position: Position) -> None:
        if self.placed:
            raise DiagramError(f"Block '{self.name}' has already been placed.")
        if position.x < 0 or position.y < 0:
            raise DiagramError(f"Block '{self.name}' cannot be placed at {position}.")
        self.position = position
        self.placed = True

    @property
    def left(self) -> int:
        return self.position.x

    @property
    def top(self) -> int:
        return self.position.y

    @property
    def right(self) -> int:
        return self.position.x + self.size.width - 1

    @property
    def bottom(self) -> int:
        return self.position.y + self.size.height - 1

    def center(self) -> Position:
        return Position(
            self.position.x + self.size.width // 2,
            self.position.y + self.size.height // 2,
        )

    def corners(self) -> Iterator[Position]:
        yield Position(self.left, self.top)
        yield Position(self.right, self.top)
        yield Position(self.left, self.bottom)
        yield Position(self.right, self.bottom)

    def edge_midpoint(self, side: Side) -> Position:
        center = self.center()
        if side == Side.LEFT:
            return Position(self.left, center.y)
        if side == Side.TOP:
            return Position(center.x, self.top)
        if side == Side.RIGHT:
            return Position(self.right, center.y)
        return Position(center.x, self.bottom)

    def side_of(self, pos: Position) -> Optional[Side]:
        if pos.x in (self.left, self.right) and self.top < pos.y < self.bottom:
            return Side.LEFT if pos.x == self.left else Side.RIGHT
        if pos.y in (self.top, self.bottom) and self.left < pos.x < self.right:
            return Side.TOP if pos.y == self.top else Side.BOTTOM
        return None

    def clamp_position(self, pos: Position) -> Position:
        return Position(
            max(min(pos.x, self.right), self.left),
            max(min(pos.y, self.bottom), self.top),
        )

    def distance_to_position(self, pos: Position) -> int:
        return self.clamp_position(pos).manhattan_distance(pos)


def _wrap_words(text: str, limit: int) -> List[str]:
    content_limit = max(limit - BOX_PADDING, 1)
    lines: List[str] = []
    current = ""
    for word in text.split():
        while text_width(word) > content_limit:
            if current:
                lines.append(current)
                current = ""
            cut = len(word)
            while cut > 1 and text_width(word[:cut]) > content_limit:
                cut -= 1
            lines.append(word[:cut])
            word = word[cut:]
        if current and text_width(current) + text_width(word) + BOX_PADDING + 1 > limit:
            lines.append(current)
            current = word
        elif current:
            current = f"{current} {word}"
        else:
            current = word
    if current:
        lines.append(current)
    return lines or [""]


def size_block(spec: BlockSpec, constraint: BlockConstraint) -> BlockDisplay:
    """Build an unpositioned display box for ``spec``.

    Text that fits in ``min_limited_width`` stays on one line; anything longer
    is word-wrapped and the box only grows downward.
    """
    limit = constraint.min_limited_width
    width = text_width(spec.text)
    if width + BOX_PADDING <= limit:
        return BlockDisplay(
            name=spec.name,
            color=spec.color,
            lines=[spec.text],
            size=Size(width + BOX_PADDING, 3),
        )

    lines = _wrap_words(spec.text, limit)
    widest = max(text_width(line) for line in lines)
    return BlockDisplay(
        name=spec.name,
        color=spec.color,
        lines=lines,
        size=Size(widest + BOX_PADDING, len(lines) + 2),
    )
