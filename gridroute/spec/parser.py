import re
from pathlib import Path
from typing import List, Optional, Union

from ..errors import ParseError
from .model import BlockSpec, Coloring, ConnectionKind, ConnectionSpec, DataSpec


_BOX_HEADER = re.compile(
    r"^\s*box\s+text\s+(?P<name>[A-Za-z0-9]+)(?:\s+color\s+(?P<color>\S+))?\s*$"
)
_CONNECTION = re.compile(
    r"^\s*(?:(?P<kind>generic|singular|dual)\s+)?connection\s+"
    r"(?P<start>[A-Za-z0-9]+)\s+(?P<end>[A-Za-z0-9]+)"
    r"(?:\s+color\s+(?P<color>\S+))?\s*$"
)


def _coloring(name: Optional[str], line_no: int) -> Coloring:
    try:
        return Coloring.named(name)
    except ValueError as exc:
        raise ParseError(str(exc), line_no) from exc


def parse_specs(text: str) -> List[DataSpec]:
    """Parse the block/connection description format into flat specs.

    A block takes two lines, a ``box text <name> [color <c>]`` header and the
    text to display. A connection takes one line,
    ``[generic|singular|dual] connection <start> <end> [color <c>]``.
    Records are separated by one or more line endings.
    """
    specs: List[DataSpec] = []
    lines = text.splitlines()
    index = 0
    while index < len(lines):
        line = lines[index]
        line_no = index + 1
        if not line.strip():
            index += 1
            continue

        box = _BOX_HEADER.match(line)
        if box:
            if index + 1 >= len(lines):
                raise ParseError(
                    f"Block '{box.group('name')}' is missing its text line.", line_no
                )
            specs.append(
                BlockSpec(
                    name=box.group("name"),
                    color=_coloring(box.group("color"), line_no),
                    text=lines[index + 1].strip(),
                )
            )
            index += 2
            continue

        conn = _CONNECTION.match(line)
        if conn:
            specs.append(
                ConnectionSpec(
                    start=conn.group("start"),
                    end=conn.group("end"),
                    kind=ConnectionKind.named(conn.group("kind")),
                    color=_coloring(conn.group("color"), line_no),
                )
            )
            index += 1
            continue

        raise ParseError(f"Unrecognized statement: {line.strip()!r}", line_no)
    return specs


def parse_file(path: Union[str, Path]) -> List[DataSpec]:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ParseError(f"Could not read {path}: {exc.strerror or exc}") from exc
    return parse_specs(content)
