import logging
from typing import AbstractSet, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from ..errors import PathInvariantError
from ..spec.model import ConnectionSpec
from .block import BlockDisplay
from .connection import ConnectionDisplay, connection_display_from_path
from .constraint import LayoutConstraint
from .core import Position, Side
from .memoizer import PathMemoizer
from .pathfinder import STRICT, GridPathfinder, Path, RoutingPolicy

logger = logging.getLogger(__name__)

_CORE_SIDES = (Side.LEFT, Side.TOP, Side.RIGHT, Side.BOTTOM)
_MIN_ALTERNATE_STEP = 2


def core_connectors(block: BlockDisplay) -> List[Position]:
    return [block.edge_midpoint(side) for side in _CORE_SIDES]


def alternate_points(used: Position, block: BlockDisplay) -> List[Position]:
    points: List[Position] = []
    if block.side_of(used) in (Side.LEFT, Side.RIGHT):
        change = max(block.size.height // 4, _MIN_ALTERNATE_STEP)
        if used.y - change > block.top:
            points.append(used.add_y(-change))
        if used.y + change < block.bottom:
            points.append(used.add_y(change))
    else:
        change = max(block.size.width // 4, _MIN_ALTERNATE_STEP)
        if used.x - change > block.left:
            points.append(used.add_x(-change))
        if used.x + change < block.right:
            points.append(used.add_x(change))
    return points


def find_connection_points(block: BlockDisplay, used: AbstractSet[Position]) -> List[Position]:
    """Free anchor points on ``block``, stepping away from used midpoints."""
    points = core_connectors(block)
    while any(point in used for point in points):
        expanded: List[Position] = []
        for point in points:
            if point in used:
                expanded.extend(p for p in alternate_points(point, block) if p not in used)
            else:
                expanded.append(point)
        points = list(dict.fromkeys(expanded))
    return points


def shrink_candidates(
    starts: Sequence[Position], ends: Sequence[Position], attempt: int
) -> Tuple[List[Position], List[Position]]:
    """Drop candidates according to ``attempt`` read as a mixed-radix number.

    Each digit removes one element, alternating between the start and end
    lists, with the current list length as the digit's radix.
    """
    cur_starts = list(starts)
    cur_ends = list(ends)
    removing_start = True
    indicator = attempt
    while indicator > 0:
        target = cur_starts if removing_start else cur_ends
        if not target:
            break
        size = len(target)
        del target[indicator % size]
        indicator //= size
        removing_start = not removing_start
    return cur_starts, cur_ends


class ConnectionRouter:

    def __init__(
        self,
        constraint: LayoutConstraint,
        policy: RoutingPolicy = STRICT,
        *,
        memoizer: Optional[PathMemoizer] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be positive when provided.")
        self.constraint = constraint
        self.policy = policy
        self.memoizer = memoizer if memoizer is not None else PathMemoizer()
        self.max_attempts = max_attempts
        self._blocks: Dict[str, BlockDisplay] = {}

    def route(
        self,
        blocks: Sequence[BlockDisplay],
        connections: Sequence[ConnectionSpec],
    ) -> List[ConnectionDisplay]:
        self._blocks = {block.name: block for block in blocks}
        if self.policy.backtracking:
            result = self._route_backtracking(list(connections), 0, frozenset())
            if result is None:
                logger.warning(
                    "No conflict-free layout exists for %d connection(s).", len(connections)
                )
                return []
            return [display for display in result if display is not None]
        return self._route_single_pass(connections)

    def _pathfinder(self, conn: ConnectionSpec, blocked: AbstractSet[Position]) -> GridPathfinder:
        endpoints = {conn.start, conn.end}
        return GridPathfinder(
            obstacles=[b for name, b in self._blocks.items() if name not in endpoints],
            endpoints=[self._blocks[name] for name in endpoints],
            clearance=self.constraint.connection.box_distance,
            max_width=self.constraint.max_width,
            max_height=self.constraint.max_height,
            blocked=blocked,
            policy=self.policy,
        )

    def _endpoints(self, conn: ConnectionSpec) -> Optional[Tuple[BlockDisplay, BlockDisplay]]:
        start = self._blocks.get(conn.start)
        end = self._blocks.get(conn.end)
        if start is None or end is None:
            return None
        return start, end

    def _display(self, conn: ConnectionSpec, path: Path) -> Optional[ConnectionDisplay]:
        try:
            return connection_display_from_path(conn, path)
        except PathInvariantError:
            logger.error(
                "Dropping connection %s -> %s: routed path is malformed.",
                conn.start,
                conn.end,
                exc_info=True,
            )
            return None

    def _route_backtracking(
        self,
        connections: List[ConnectionSpec],
        index: int,
        blocked: FrozenSet[Position],
    ) -> Optional[List[Optional[ConnectionDisplay]]]:
        if index >= len(connections):
            return []

        conn = connections[index]
        endpoints = self._endpoints(conn)
        if endpoints is None:
            logger.warning("Skipping connection %s -> %s: unknown block.", conn.start, conn.end)
            return self._route_backtracking(connections, index + 1, blocked)

        start_block, end_block = endpoints
        start_points = find_connection_points(start_block, blocked)
        end_points = find_connection_points(end_block, blocked)
        finder = self._pathfinder(conn, blocked)
        failed: Set[Path] = set()

        attempt = 0
        while self.max_attempts is None or attempt < self.max_attempts:
            cur_starts, cur_ends = shrink_candidates(start_points, end_points, attempt)
            attempt += 1
            if not cur_starts or not cur_ends:
                return None

            pairs = [(s, e) for s in cur_starts for e in cur_ends if s != e]
            path = self.memoizer.get_shortest_option(pairs, finder)
            if path is None:
                return None
            if path in failed:
                continue

            rest = self._route_backtracking(connections, index + 1, blocked | frozenset(path))
            if rest is not None:
                return [self._display(conn, path)] + rest

            failed.add(path)
            logger.debug(
                "Backtracking connection %d (%s -> %s): %d start(s), %d end(s) left",
                index,
                conn.start,
                conn.end,
                len(cur_starts),
                len(cur_ends),
            )

        logger.warning(
            "Gave up on connection %s -> %s after %d attempts.", conn.start, conn.end, attempt
        )
        return None

    def _route_single_pass(self, connections: Sequence[ConnectionSpec]) -> List[ConnectionDisplay]:
        displays: List[ConnectionDisplay] = []
        blocked: FrozenSet[Position] = frozenset()
        for conn in connections:
            endpoints = self._endpoints(conn)
            if endpoints is None:
                logger.warning("Stopping at connection %s -> %s: unknown block.", conn.start, conn.end)
                break
            start_block, end_block = endpoints
            starts = find_connection_points(start_block, blocked)
            ends = find_connection_points(end_block, blocked)
            pairs = [(s, e) for s in starts for e in ends if s != e]
            path = self.memoizer.get_shortest_option(pairs, self._pathfinder(conn, blocked))
            if path is None:
                logger.warning("Stopping at connection %s -> %s: no path.", conn.start, conn.end)
                break
            blocked = blocked | frozenset(path)
            display = self._display(conn, path)
            if display is not None:
                displays.append(display)
        return displays
