import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Sequence, Union

from ..errors import ConfigurationError
from ..spec.model import DataSpec
from .block import BlockDisplay, size_block
from .canvas import Canvas
from .connection import ConnectionDisplay
from .constraint import LayoutConstraint
from .core import BoxChars, Position
from .graph import Graph
from .memoizer import PathMemoizer
from .pathfinder import RoutingPolicy, STRICT
from .placement import ConnectivityPlacement, VerticalStackPlacement
from .router import ConnectionRouter

logger = logging.getLogger(__name__)

PLACEMENTS = ("vertical", "connectivity")


@dataclass
class Layout:
    blocks: List[BlockDisplay] = field(default_factory=list)
    connections: List[ConnectionDisplay] = field(default_factory=list)

    def block_named(self, name: str) -> Optional[BlockDisplay]:
        for block in self.blocks:
            if block.name == name:
                return block
        return None


class LayoutEngine:

    def __init__(
        self,
        constraint: Optional[LayoutConstraint] = None,
        *,
        screen_width: Optional[int] = None,
        policy: Union[str, RoutingPolicy] = STRICT,
        placement: str = "vertical",
        max_attempts: Optional[int] = None,
    ) -> None:
        if constraint is not None and not isinstance(constraint, LayoutConstraint):
            raise ConfigurationError("constraint must be a LayoutConstraint instance.")
        self.constraint = constraint or LayoutConstraint()

        if screen_width is not None and (not isinstance(screen_width, int) or screen_width < 1):
            raise ConfigurationError("screen_width must be a positive integer.")
        self.screen_width = screen_width or self.constraint.max_width

        if isinstance(policy, RoutingPolicy):
            self.policy = policy
        else:
            try:
                self.policy = RoutingPolicy.named(str(policy))
            except ValueError as exc:
                raise ConfigurationError(str(exc)) from exc

        if placement not in PLACEMENTS:
            raise ConfigurationError(
                f"placement must be one of {', '.join(PLACEMENTS)}, got {placement!r}."
            )
        self.placement = placement
        if max_attempts is not None and (not isinstance(max_attempts, int) or max_attempts < 1):
            raise ConfigurationError("max_attempts must be a positive integer when provided.")
        self.max_attempts = max_attempts

    def _placer(self, graph: Graph) -> VerticalStackPlacement:
        spacing = self.constraint.block.inter_block_distance
        if self.placement == "connectivity":
            return ConnectivityPlacement(self.screen_width, spacing, graph)
        return VerticalStackPlacement(self.screen_width, spacing)

    def _routing_constraint(self, blocks: Sequence[BlockDisplay]) -> LayoutConstraint:
        """Grow the routing grid so every placed block and its clearance ring fits."""
        if not blocks:
            return self.constraint
        margin = self.constraint.connection.box_distance + 1
        width = max(self.constraint.max_width, max(b.right for b in blocks) + margin)
        height = max(self.constraint.max_height, max(b.bottom for b in blocks) + margin)
        if (width, height) == (self.constraint.max_width, self.constraint.max_height):
            return self.constraint
        logger.debug(
            "Routing grid grown from %dx%d to %dx%d to fit placed blocks",
            self.constraint.max_width,
            self.constraint.max_height,
            width,
            height,
        )
        return replace(self.constraint, max_width=width, max_height=height)

    def build(self, specs: Iterable[DataSpec]) -> Layout:
        graph = Graph.from_specs(specs)
        blocks = [size_block(spec, self.constraint.block) for spec in graph.block_specs]
        self._placer(graph).apply(blocks)

        router = ConnectionRouter(
            self._routing_constraint(blocks),
            self.policy,
            memoizer=PathMemoizer(),
            max_attempts=self.max_attempts,
        )
        connections = router.route(blocks, graph.connection_specs)
        logger.debug(
            "Laid out %d block(s) and %d of %d connection(s) with %s routing",
            len(blocks),
            len(connections),
            len(graph.connections),
            self.policy.name,
        )
        return Layout(blocks=blocks, connections=connections)


def _draw_block(canvas: Canvas, block: BlockDisplay, chars: BoxChars, style: Optional[str]) -> None:
    x, y = block.left, block.top
    right, bottom = block.right, block.bottom

    corner_chars = (chars.top_left, chars.top_right, chars.bottom_left, chars.bottom_right)
    for corner, char in zip(block.corners(), corner_chars):
        canvas.set(corner.x, corner.y, char, style)
    for i in range(x + 1, right):
        canvas.set(i, y, chars.horizontal, style)
        canvas.set(i, bottom, chars.horizontal, style)
    for j in range(y + 1, bottom):
        canvas.set(x, j, chars.vertical, style)
        canvas.set(right, j, chars.vertical, style)

    for idx, line in enumerate(block.lines):
        canvas.write(x + 2, y + 1 + idx, line, style)


def _draw_connection(canvas: Canvas, connection: ConnectionDisplay, style: Optional[str]) -> None:
    for index, part in enumerate(connection.parts):
        dx = (part.end.x > part.start.x) - (part.end.x < part.start.x)
        dy = (part.end.y > part.start.y) - (part.end.y < part.start.y)
        cursor = part.start
        while cursor != part.end:
            canvas.set(cursor.x, cursor.y, part.fill_char, style)
            cursor = Position(cursor.x + dx, cursor.y + dy)
        if index > 0:
            canvas.set(part.start.x, part.start.y, connection.joint_char, style)
        canvas.set(part.end.x, part.end.y, connection.joint_char, style)

    if connection.start is not None:
        canvas.set(connection.start.x, connection.start.y, connection.start_char, style)
    if connection.end is not None:
        canvas.set(connection.end.x, connection.end.y, connection.end_char, style)


def render_layout(
    layout: Layout,
    *,
    chars: Optional[BoxChars] = None,
    include_markup: bool = False,
) -> str:
    chars = chars or BoxChars.for_style("ascii")
    width = 1
    height = 1
    for block in layout.blocks:
        width = max(width, block.right + 1)
        height = max(height, block.bottom + 1)
    for connection in layout.connections:
        for pos in connection.path:
            width = max(width, pos.x + 1)
            height = max(height, pos.y + 1)

    canvas = Canvas(width=width, height=height)
    for block in layout.blocks:
        _draw_block(canvas, block, chars, block.color.style)
    for connection in layout.connections:
        _draw_connection(canvas, connection, connection.color.style)
    return canvas.render(crop=True, include_markup=include_markup)
