from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union


class Coloring(Enum):

    DEFAULT = "default"
    BLACK = "black"
    WHITE = "white"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"

    @property
    def style(self) -> Optional[str]:
        if self is Coloring.DEFAULT:
            return None
        return self.value

    @classmethod
    def named(cls, name: Optional[str]) -> "Coloring":
        if not name:
            return cls.DEFAULT
        try:
            return cls(name.lower().strip())
        except ValueError as exc:
            raise ValueError(f"Unknown color: {name}") from exc


class ConnectionKind(Enum):

    SINGULAR = "singular"
    DUAL = "dual"
    GENERIC = "generic"

    @classmethod
    def named(cls, name: Optional[str]) -> "ConnectionKind":
        if not name:
            return cls.GENERIC
        try:
            return cls(name.lower().strip())
        except ValueError as exc:
            raise ValueError(f"Unknown connection kind: {name}") from exc


@dataclass(frozen=True)
class BlockSpec:
    name: str
    color: Coloring
    text: str

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "BlockSpec":
        if "name" not in payload or "text" not in payload:
            raise ValueError("Block spec must include 'name' and 'text'.")
        color = payload.get("color")
        return cls(
            name=str(payload["name"]),
            color=Coloring.named(str(color) if color is not None else None),
            text=str(payload["text"]),
        )


@dataclass(frozen=True)
class ConnectionSpec:
    start: str
    end: str
    kind: ConnectionKind = ConnectionKind.GENERIC
    color: Coloring = Coloring.DEFAULT

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "ConnectionSpec":
        if "start" not in payload or "end" not in payload:
            raise ValueError("Connection spec must include 'start' and 'end'.")
        kind = payload.get("kind")
        color = payload.get("color")
        return cls(
            start=str(payload["start"]),
            end=str(payload["end"]),
            kind=ConnectionKind.named(str(kind) if kind is not None else None),
            color=Coloring.named(str(color) if color is not None else None),
        )


DataSpec = Union[BlockSpec, ConnectionSpec]


def spec_from_dict(payload: Dict[str, object]) -> DataSpec:
    if "text" in payload:
        return BlockSpec.from_dict(payload)
    return ConnectionSpec.from_dict(payload)
