from dataclasses import dataclass, field
from typing import Optional

from ..errors import ConfigurationError


def _require_int(name: str, value: object, minimum: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer.")
    if value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}.")


@dataclass(frozen=True)
class BlockConstraint:
    min_limited_width: int = 20
    max_height_per_width: int = 1
    max_width_per_height: int = 10
    inter_block_distance: int = 5

    def __post_init__(self) -> None:
        # Narrower than this leaves no room for text inside the border.
        _require_int("min_limited_width", self.min_limited_width, 5)
        _require_int("max_height_per_width", self.max_height_per_width, 0)
        _require_int("max_width_per_height", self.max_width_per_height, 0)
        _require_int("inter_block_distance", self.inter_block_distance, 0)

    def max_width_for_height(self, height: int) -> int:
        return max(height * self.max_width_per_height, self.min_limited_width)

    def max_height_for_width(self, width: int) -> int:
        return width * self.max_height_per_width


@dataclass(frozen=True)
class ConnectionConstraint:
    min_length: int = 1
    max_length: int = 0
    box_distance: int = 2

    def __post_init__(self) -> None:
        _require_int("min_length", self.min_length, 0)
        _require_int("max_length", self.max_length, 0)
        _require_int("box_distance", self.box_distance, 0)
        if self.max_length and self.max_length < self.min_length:
            raise ConfigurationError("max_length must be 0 or at least min_length.")


@dataclass(frozen=True)
class LayoutConstraint:
    connection: ConnectionConstraint = field(default_factory=ConnectionConstraint)
    block: BlockConstraint = field(default_factory=BlockConstraint)
    max_width: int = 80
    max_height: int = 200

    def __post_init__(self) -> None:
        if not isinstance(self.connection, ConnectionConstraint):
            raise ConfigurationError("connection must be a ConnectionConstraint.")
        if not isinstance(self.block, BlockConstraint):
            raise ConfigurationError("block must be a BlockConstraint.")
        _require_int("max_width", self.max_width, 1)
        _require_int("max_height", self.max_height, 1)

    @classmethod
    def for_screen(
        cls,
        width: int,
        height: int,
        *,
        connection: Optional[ConnectionConstraint] = None,
        block: Optional[BlockConstraint] = None,
    ) -> "LayoutConstraint":
        return cls(
            connection=connection or ConnectionConstraint(),
            block=block or BlockConstraint(),
            max_width=width,
            max_height=height,
        )
