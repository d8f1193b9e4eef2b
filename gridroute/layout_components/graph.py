from dataclasses import dataclass, field
from functools import reduce
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ..errors import GraphResolutionError
from ..spec.model import BlockSpec, ConnectionSpec, DataSpec


_SCAN_CHUNK = 32


@dataclass
class GraphBlock:
    spec: BlockSpec
    connection_ids: List[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def connection_count(self) -> int:
        return len(self.connection_ids)


@dataclass(frozen=True)
class GraphConnection:
    spec: ConnectionSpec
    start_block: int
    end_block: int


class _EndpointMatch(NamedTuple):
    start: Optional[int] = None
    end: Optional[int] = None

    def merge(self, other: "_EndpointMatch") -> "_EndpointMatch":
        return _EndpointMatch(_earliest(self.start, other.start), _earliest(self.end, other.end))


def _earliest(a: Optional[int], b: Optional[int]) -> Optional[int]:
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


def _scan_range(
    blocks: Sequence[GraphBlock], spec: ConnectionSpec, lo: int, hi: int
) -> _EndpointMatch:
    start = end = None
    for index in range(lo, hi):
        name = blocks[index].name
        if start is None and name == spec.start:
            start = index
        if end is None and name == spec.end:
            end = index
        if start is not None and end is not None:
            break
    return _EndpointMatch(start, end)


def _find_endpoints(blocks: Sequence[GraphBlock], spec: ConnectionSpec) -> _EndpointMatch:
    chunks = (
        _scan_range(blocks, spec, lo, min(lo + _SCAN_CHUNK, len(blocks)))
        for lo in range(0, len(blocks), _SCAN_CHUNK)
    )
    return reduce(_EndpointMatch.merge, chunks, _EndpointMatch())


def _partition(specs: Iterable[DataSpec]) -> Tuple[List[BlockSpec], List[ConnectionSpec]]:
    blocks: List[BlockSpec] = []
    connections: List[ConnectionSpec] = []
    for spec in specs:
        if isinstance(spec, BlockSpec):
            blocks.append(spec)
        elif isinstance(spec, ConnectionSpec):
            connections.append(spec)
        else:
            raise TypeError(f"Unsupported spec type: {type(spec).__name__}")
    return blocks, connections


class Graph:
    """Blocks and the connections between them, stored as flat indexed lists.

    Connections refer to their endpoints by index into ``blocks`` and blocks
    list the indices of the connections attached to them, so both directions
    can be walked without reference cycles.
    """

    def __init__(self, blocks: List[GraphBlock], connections: List[GraphConnection]) -> None:
        self.blocks = blocks
        self.connections = connections
        self._by_name: Dict[str, int] = {block.name: idx for idx, block in enumerate(blocks)}

    @classmethod
    def from_specs(cls, specs: Iterable[DataSpec]) -> "Graph":
        block_specs, connection_specs = _partition(specs)
        blocks = [GraphBlock(spec) for spec in block_specs]

        errors: List[str] = []
        seen = set()
        for block in blocks:
            if block.name in seen:
                errors.append(f"Block {block.name} is defined more than once")
            seen.add(block.name)

        connections: List[GraphConnection] = []
        for spec in connection_specs:
            match = _find_endpoints(blocks, spec)
            missing = []
            if match.start is None:
                missing.append(spec.start)
            if match.end is None and spec.end not in missing:
                missing.append(spec.end)
            if missing:
                errors.extend(f"Block {name} does not exist" for name in missing)
                continue

            connection_id = len(connections)
            connections.append(GraphConnection(spec, match.start, match.end))
            blocks[match.start].connection_ids.append(connection_id)
            blocks[match.end].connection_ids.append(connection_id)

        if errors:
            raise GraphResolutionError(errors)
        return cls(blocks, connections)

    def block_named(self, name: str) -> Optional[GraphBlock]:
        index = self._by_name.get(name)
        return self.blocks[index] if index is not None else None

    def index_of(self, name: str) -> Optional[int]:
        return self._by_name.get(name)

    def connection_count(self, name: str) -> int:
        block = self.block_named(name)
        return block.connection_count if block else 0

    def connections_of(self, block_index: int) -> List[GraphConnection]:
        return [self.connections[cid] for cid in self.blocks[block_index].connection_ids]

    def other_end(self, connection_index: int, block_index: int) -> int:
        connection = self.connections[connection_index]
        if connection.start_block == block_index:
            return connection.end_block
        if connection.end_block == block_index:
            return connection.start_block
        raise ValueError(
            f"Connection {connection_index} is not attached to block {block_index}."
        )

    @property
    def block_specs(self) -> List[BlockSpec]:
        return [block.spec for block in self.blocks]

    @property
    def connection_specs(self) -> List[ConnectionSpec]:
        return [connection.spec for connection in self.connections]
