from .model import (
    BlockSpec,
    Coloring,
    ConnectionKind,
    ConnectionSpec,
    DataSpec,
    spec_from_dict,
)
from .parser import parse_file, parse_specs

__all__ = [
    "BlockSpec",
    "Coloring",
    "ConnectionKind",
    "ConnectionSpec",
    "DataSpec",
    "spec_from_dict",
    "parse_file",
    "parse_specs",
]
