from typing import Optional, Union

from .layout_components import (
    BlockConstraint,
    BoxChars,
    Canvas,
    ConnectionConstraint,
    ConnectionDisplay,
    Layout,
    LayoutConstraint,
    LayoutEngine,
    Position,
    RoutingPolicy,
    render_layout,
)
from .errors import ConfigurationError
from .spec import BlockSpec, Coloring, ConnectionKind, ConnectionSpec, parse_specs

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
]


def render_text(
    source: str,
    *,
    constraint: Optional[LayoutConstraint] = None,
    screen_width: Optional[int] = None,
    policy: Union[str, RoutingPolicy] = "strict",
    box_style: str = "ascii",
    include_markup: bool = False,
) -> str:
    try:
        chars = BoxChars.for_style(box_style)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    engine = LayoutEngine(constraint, screen_width=screen_width, policy=policy)
    layout = engine.build(parse_specs(source))
    return render_layout(layout, chars=chars, include_markup=include_markup)
