from typing import Dict, List, Optional, Tuple

from rich.markup import escape
from wcwidth import wcwidth

from ..errors import LayoutOverflowError


class Canvas:

    def __init__(self, width: int = 200, height: int = 100):
        self.width = width
        self.height = height
        self.grid = [[" " for _ in range(width)] for _ in range(height)]
        self.cell_widths = [[1 for _ in range(width)] for _ in range(height)]
        self.styles: Dict[Tuple[int, int], str] = {}
        self.min_x = width
        self.max_x = -1
        self.min_y = height
        self.max_y = -1

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise LayoutOverflowError(
                f"Layout content exceeds canvas bounds at ({x}, {y}). "
                "Increase the screen size or shorten the block text."
            )

    def _clear_glyph_at(self, x: int, y: int) -> None:
        base_x = x
        while base_x > 0 and self.cell_widths[y][base_x] == 0:
            base_x -= 1
        for i in range(self.cell_widths[y][base_x]):
            xi = base_x + i
            if xi < self.width:
                self.grid[y][xi] = " "
                self.cell_widths[y][xi] = 1
                self.styles.pop((xi, y), None)

    def set(self, x: int, y: int, char: str, style: Optional[str] = None) -> int:
        self._check_bounds(x, y)
        width = max(wcwidth(char), 1)
        for i in range(width):
            self._check_bounds(x + i, y)
            self._clear_glyph_at(x + i, y)

        self.grid[y][x] = char
        self.cell_widths[y][x] = width
        for i in range(1, width):
            self.grid[y][x + i] = " "
            self.cell_widths[y][x + i] = 0
        if style:
            self.styles[(x, y)] = style

        self.min_x = min(self.min_x, x)
        self.max_x = max(self.max_x, x + width - 1)
        self.min_y = min(self.min_y, y)
        self.max_y = max(self.max_y, y)
        return width

    def write(self, x: int, y: int, text: str, style: Optional[str] = None) -> None:
        cursor = x
        for char in text:
            cursor += self.set(cursor, y, char, style)

    def get(self, x: int, y: int) -> str:
        if 0 <= y < self.height and 0 <= x < self.width:
            if self.cell_widths[y][x] == 0:
                return " "
            return self.grid[y][x]
        return " "

    def _render_row(self, y: int, x0: int, x1: int, include_markup: bool) -> str:
        runs: List[Tuple[Optional[str], str]] = []
        for x in range(x0, x1 + 1):
            if self.cell_widths[y][x] == 0:
                continue
            style = self.styles.get((x, y)) if include_markup else None
            if runs and runs[-1][0] == style:
                runs[-1] = (style, runs[-1][1] + self.grid[y][x])
            else:
                runs.append((style, self.grid[y][x]))

        if not include_markup:
            return "".join(text for _, text in runs).rstrip()
        if runs and runs[-1][0] is None:
            runs[-1] = (None, runs[-1][1].rstrip())
        return "".join(
            f"[{style}]{escape(text)}[/{style}]" if style else escape(text)
            for style, text in runs
        )

    def render(self, crop: bool = True, include_markup: bool = False) -> str:
        if crop:
            if self.max_x < 0:
                return ""
            rows = range(self.min_y, self.max_y + 1)
            x0, x1 = self.min_x, self.max_x
        else:
            rows = range(self.height)
            x0, x1 = 0, self.width - 1
        return "\n".join(self._render_row(y, x0, x1, include_markup) for y in rows)
