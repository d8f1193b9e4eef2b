from typing import List, Optional, Sequence

from .block import BlockDisplay
from .core import Position
from .graph import Graph


class VerticalStackPlacement:

    def __init__(self, screen_width: int, spacing: int) -> None:
        if screen_width < 1:
            raise ValueError("screen_width must be positive.")
        if spacing < 0:
            raise ValueError("spacing must not be negative.")
        self._screen_width = screen_width
        self._spacing = spacing

    def _order(self, blocks: Sequence[BlockDisplay]) -> List[BlockDisplay]:
        return list(blocks)

    def apply(self, blocks: Sequence[BlockDisplay]) -> List[BlockDisplay]:
        current_y = 0
        for block in self._order(blocks):
            x = max(self._screen_width // 2 - block.size.width // 2, 0)
            block.place(Position(x, current_y))
            current_y += block.size.height + self._spacing
        return list(blocks)


class ConnectivityPlacement(VerticalStackPlacement):
    """Stack blocks with the most connections first.

    The returned list keeps input order; only the vertical slots differ.
    """

    def __init__(self, screen_width: int, spacing: int, graph: Optional[Graph] = None) -> None:
        super().__init__(screen_width, spacing)
        self._graph = graph

    def _order(self, blocks: Sequence[BlockDisplay]) -> List[BlockDisplay]:
        if self._graph is None:
            return list(blocks)
        graph = self._graph
        return sorted(blocks, key=lambda block: -graph.connection_count(block.name))
