import argparse
import logging
import shutil
import sys
from typing import List, Optional

from rich.console import Console

from .errors import DiagramError, GraphResolutionError
from .layout_components import (
    BlockConstraint,
    BoxChars,
    ConnectionConstraint,
    LayoutConstraint,
    LayoutEngine,
    render_layout,
)
from .spec import parse_file

DEFAULT_HEIGHT = 200


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gridroute",
        description="Lay out boxes and routed connections from a diagram description",
    )
    parser.add_argument("infile", help="Diagram description file")
    parser.add_argument(
        "--policy",
        choices=["strict", "permissive"],
        default="strict",
        help="strict backtracks to avoid crossings, permissive allows them",
    )
    parser.add_argument(
        "--placement",
        choices=["vertical", "connectivity"],
        default="vertical",
        help="Order in which blocks are stacked",
    )
    parser.add_argument("--width", type=int, default=None, help="Screen width (defaults to terminal)")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Routing grid height")
    parser.add_argument("--block-width", type=int, default=20, help="Width before text wraps")
    parser.add_argument("--spacing", type=int, default=5, help="Rows between stacked blocks")
    parser.add_argument("--clearance", type=int, default=2, help="Distance kept from unrelated blocks")
    parser.add_argument("--max-attempts", type=int, default=None, help="Retry bound per connection")
    parser.add_argument(
        "--box-style",
        choices=["ascii", "square", "rounded"],
        default="ascii",
        help="Border characters for blocks",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color markup")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log routing progress")
    return parser.parse_args(argv)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    _configure_logging(args.verbose)
    console = Console(no_color=args.no_color, highlight=False)
    errors = Console(stderr=True, highlight=False)

    width = args.width or shutil.get_terminal_size(fallback=(80, 24)).columns
    try:
        constraint = LayoutConstraint.for_screen(
            width,
            args.height,
            connection=ConnectionConstraint(box_distance=args.clearance),
            block=BlockConstraint(
                min_limited_width=args.block_width,
                inter_block_distance=args.spacing,
            ),
        )
        engine = LayoutEngine(
            constraint,
            screen_width=width,
            policy=args.policy,
            placement=args.placement,
            max_attempts=args.max_attempts,
        )
        layout = engine.build(parse_file(args.infile))
        text = render_layout(
            layout,
            chars=BoxChars.for_style(args.box_style),
            include_markup=not args.no_color,
        )
    except GraphResolutionError as exc:
        for message in exc.errors:
            errors.print(f"error: {message}", markup=False)
        return 1
    except DiagramError as exc:
        errors.print(f"error: {exc}", markup=False)
        return 1

    if args.no_color:
        console.print(text, markup=False, soft_wrap=True)
    else:
        console.print(text, soft_wrap=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
