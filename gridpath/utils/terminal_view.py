"""ASCII terminal renderer for grid maps and found paths."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from ..core.grid import GridMap
from ..core.node import Node
from ..persistence.map_io import BLOCKED, GOAL, PATH, START, format_map


# Basic ANSI colour codes used by :func:`render_grid`
_COLOURS = {
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "reset": "\x1b[0m",
}

_GLYPH_COLOURS = {
    BLOCKED: "blue",
    START: "green",
    GOAL: "red",
    PATH: "yellow",
}


def _glyph_to_colour(glyph: str) -> str:
    if glyph in _GLYPH_COLOURS:
        return _GLYPH_COLOURS[glyph]
    if glyph.isdigit():
        return "magenta"
    return "reset"


def render_grid(
    grid: GridMap, path: Sequence[Node] | None = None, colour: bool = True
) -> str:
    """Return ``grid`` with ``path`` overlaid, optionally ANSI coloured."""

    text = format_map(grid, path)
    if not colour:
        return text

    lines: list[str] = []
    for line in text.splitlines():
        row = [f"{_COLOURS[_glyph_to_colour(glyph)]}{glyph}" for glyph in line]
        row.append(_COLOURS["reset"])
        lines.append("".join(row))
    return "\n".join(lines) + "\n"


class TerminalView:
    """Minimal grid viewer writing to a text stream."""

    def __init__(self, colour: bool = True, stream: TextIO | None = None) -> None:
        self.colour = colour
        self.stream = stream

    def render(self, grid: GridMap, path: Sequence[Node] | None = None) -> None:
        out = self.stream if self.stream is not None else sys.stdout
        out.write(render_grid(grid, path, colour=self.colour))
        out.flush()


__all__ = ["TerminalView", "render_grid"]
