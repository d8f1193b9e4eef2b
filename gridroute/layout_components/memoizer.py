import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from .core import Position
from .pathfinder import Path

logger = logging.getLogger(__name__)


class PathCreator(Protocol):

    def find_path(self, start: Position, end: Position) -> Optional[Path]:
        ...

    def is_valid_path(self, path: Sequence[Position]) -> bool:
        ...


class PathMemoizer:

    def __init__(self) -> None:
        self.paths: Dict[Tuple[Position, Position], List[Path]] = defaultdict(list)

    def get_path(self, start: Position, end: Position, creator: PathCreator) -> Optional[Path]:
        shortest: Optional[Path] = None
        for path in self.paths[(start, end)]:
            if shortest is not None and len(path) >= len(shortest):
                continue
            if creator.is_valid_path(path):
                shortest = path

        if shortest is not None:
            logger.debug("Reusing memoized path %s -> %s", start, end)
            return shortest

        logger.debug("No memoized path %s -> %s, searching", start, end)
        path = creator.find_path(start, end)
        if path is not None:
            self.paths[(start, end)].append(path)
        return path

    def get_shortest_option(
        self,
        pairs: Iterable[Tuple[Position, Position]],
        creator: PathCreator,
    ) -> Optional[Path]:
        best_pair: Optional[Tuple[Position, Position]] = None
        best_len = 0
        for start, end in pairs:
            path = self.get_path(start, end, creator)
            if path is None:
                continue
            if best_pair is None or len(path) < best_len:
                best_pair = (start, end)
                best_len = len(path)

        if best_pair is None:
            return None
        return self.get_path(best_pair[0], best_pair[1], creator)

    def __len__(self) -> int:
        return sum(len(paths) for paths in self.paths.values())
