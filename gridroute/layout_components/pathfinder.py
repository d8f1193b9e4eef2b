import heapq
from dataclasses import dataclass
from itertools import count
from typing import AbstractSet, Dict, Iterator, List, Optional, Sequence, Tuple

from .block import BlockDisplay
from .core import Direction, Position

Path = Tuple[Position, ...]
_State = Tuple[Position, Optional[Direction]]

BASE_STEP_COST = 1


@dataclass(frozen=True)
class RoutingPolicy:
    name: str
    blocked_penalty: Optional[int]
    backtracking: bool

    @property
    def strict(self) -> bool:
        return self.blocked_penalty is None

    def step_cost(self, blocked: bool) -> Optional[int]:
        if not blocked:
            return BASE_STEP_COST
        if self.blocked_penalty is None:
            return None
        return self.blocked_penalty

    @classmethod
    def named(cls, name: str) -> "RoutingPolicy":
        key = name.lower().strip()
        if key in {"strict", "backtracking"}:
            return STRICT
        if key in {"permissive", "crossing", "fast"}:
            return PERMISSIVE
        raise ValueError(f"Unknown routing policy: {name}")


STRICT = RoutingPolicy("strict", blocked_penalty=None, backtracking=True)
PERMISSIVE = RoutingPolicy("permissive", blocked_penalty=50 * BASE_STEP_COST, backtracking=False)


class GridPathfinder:
    """A* search over grid positions between two connected blocks.

    ``obstacles`` are the blocks a path must keep ``clearance`` cells away
    from; ``endpoints`` are the blocks being connected, which a path may touch
    only at its first and last position.
    """

    def __init__(
        self,
        *,
        obstacles: Sequence[BlockDisplay],
        endpoints: Sequence[BlockDisplay],
        clearance: int,
        max_width: int,
        max_height: int,
        blocked: AbstractSet[Position] = frozenset(),
        policy: RoutingPolicy = STRICT,
    ) -> None:
        self.obstacles = list(obstacles)
        self.endpoints = list(endpoints)
        self.clearance = clearance
        self.max_width = max_width
        self.max_height = max_height
        self.blocked = blocked
        self.policy = policy
        self.search_count = 0

    def _in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x <= self.max_width and 0 <= pos.y <= self.max_height

    def _clear_of_blocks(self, pos: Position) -> bool:
        if any(block.distance_to_position(pos) < self.clearance for block in self.obstacles):
            return False
        return all(block.distance_to_position(pos) > 0 for block in self.endpoints)

    def is_valid_neighbor(self, pos: Position, target: Position) -> bool:
        if pos == target:
            return True
        if self.policy.strict and pos in self.blocked:
            return False
        return self._clear_of_blocks(pos)

    def _neighbors(
        self, node: Position, target: Position
    ) -> Iterator[Tuple[Position, Direction, int]]:
        for direction in Direction:
            candidate = node.step(direction)
            if not self._in_bounds(candidate):
                continue
            if not self.is_valid_neighbor(candidate, target):
                continue
            cost = self.policy.step_cost(candidate != target and candidate in self.blocked)
            if cost is None:
                continue
            yield candidate, direction, cost

    def find_path(self, start: Position, end: Position) -> Optional[Path]:
        self.search_count += 1
        if start == end:
            return (start,)

        def heuristic(point: Position) -> int:
            return point.manhattan_distance(end)

        # States carry the arrival heading so that, between routes of equal
        # cost, the one with fewer turns is popped first.
        tie = count()
        start_state: _State = (start, None)
        open_heap: List[Tuple[int, int, int, _State]] = [
            (heuristic(start), 0, next(tie), start_state)
        ]
        best: Dict[_State, Tuple[int, int]] = {start_state: (0, 0)}
        came: Dict[_State, _State] = {}
        unseen = (float("inf"), float("inf"))

        while open_heap:
            _, _, _, state = heapq.heappop(open_heap)
            node, heading = state
            if node == end:
                path = [node]
                while state in came:
                    state = came[state]
                    path.append(state[0])
                path.reverse()
                return tuple(path)

            g_cost, turns = best[state]
            for neighbor, direction, step_cost in self._neighbors(node, end):
                turned = heading is not None and heading != direction
                score = (g_cost + step_cost, turns + int(turned))
                next_state = (neighbor, direction)
                if score >= best.get(next_state, unseen):
                    continue
                best[next_state] = score
                came[next_state] = state
                heapq.heappush(
                    open_heap, (score[0] + heuristic(neighbor), score[1], next(tie), next_state)
                )

        return None

    def is_valid_path(self, path: Sequence[Position]) -> bool:
        return not any(pos in self.blocked for pos in path)
