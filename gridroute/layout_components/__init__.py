from .block import BlockDisplay, size_block
from .canvas import Canvas
from .connection import ConnectionDisplay, ConnectionPart, connection_display_from_path
from .constraint import BlockConstraint, ConnectionConstraint, LayoutConstraint
from .core import BoxChars, Direction, Position, Side, Size
from .engine import Layout, LayoutEngine, render_layout
from .graph import Graph, GraphBlock, GraphConnection
from .memoizer import PathMemoizer
from .pathfinder import PERMISSIVE, STRICT, GridPathfinder, RoutingPolicy
from .placement import ConnectivityPlacement, VerticalStackPlacement
from .router import ConnectionRouter, find_connection_points

__all__ = [
    "BlockDisplay",
    "size_block",
    "Canvas",
    "ConnectionDisplay",
    "ConnectionPart",
    "connection_display_from_path",
    "BlockConstraint",
    "ConnectionConstraint",
    "LayoutConstraint",
    "BoxChars",
    "Direction",
    "Position",
    "Side",
    "Size",
    "Layout",
    "LayoutEngine",
    "render_layout",
    "Graph",
    "GraphBlock",
    "GraphConnection",
    "PathMemoizer",
    "PERMISSIVE",
    "STRICT",
    "GridPathfinder",
    "RoutingPolicy",
    "ConnectivityPlacement",
    "VerticalStackPlacement",
    "ConnectionRouter",
    "find_connection_points",
]
