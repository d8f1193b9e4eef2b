from .block_diagram import *
from .errors import *

__version__ = "0.1.0"
__all__ = [
    "BlockConstraint",
    "BlockSpec",
    "BoxChars",
    "Canvas",
    "Coloring",
    "ConnectionConstraint",
    "ConnectionDisplay",
    "ConnectionKind",
    "ConnectionSpec",
    "Layout",
    "LayoutConstraint",
    "LayoutEngine",
    "Position",
    "RoutingPolicy",
    "render_layout",
    "render_text",
    "DiagramError",
    "ConfigurationError",
    "LayoutOverflowError",
    "GraphResolutionError",
    "ParseError",
    "PathInvariantError",
]
