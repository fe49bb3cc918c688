"""Read and write ASCII terrain maps.

Map glyphs::

    .   walkable cell
    #   blocked cell
    S   start (walkable)
    G   goal (walkable)
    1-9 walkable cell with that movement weight
    *   walkable cell on a saved path

Row ``y`` of the file is grid row ``y``; column ``x`` is the character
offset. Blank lines and lines starting with ``;`` are skipped.
"""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import Iterable, List, Sequence

from ..core.costs import CostModel
from ..core.grid import GridMap
from ..core.node import Node

WALKABLE = "."
BLOCKED = "#"
START = "S"
GOAL = "G"
PATH = "*"
COMMENT = ";"
WEIGHTS = "123456789"


def _map_lines(text: str) -> List[str]:
    lines = []
    for raw in text.splitlines():
        line = raw.rstrip()
        if not line or line.startswith(COMMENT):
            continue
        lines.append(line)
    return lines


def parse_map(text: str, cost_model: CostModel | None = None) -> GridMap:
    """Build a :class:`GridMap` from the ASCII ``text``."""

    rows = _map_lines(text)
    if not rows:
        raise ValueError("map contains no rows")
    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"row {y} has width {len(row)}, expected {width}")

    grid = GridMap(width, len(rows), cost_model=cost_model)
    for y, row in enumerate(rows):
        for x, glyph in enumerate(row):
            if glyph == BLOCKED:
                grid.set_walkable(x, y, False)
            elif glyph == START:
                grid.set_start(x, y)
            elif glyph == GOAL:
                grid.set_goal(x, y)
            elif glyph in WEIGHTS:
                grid.set_weight(x, y, int(glyph))
            elif glyph not in (WALKABLE, PATH):
                raise ValueError(f"unknown map glyph {glyph!r} at ({x}, {y})")
    return grid


def _glyph(grid: GridMap, node: Node) -> str:
    if not node.walkable:
        return BLOCKED
    if grid.start_position == node.position:
        return START
    if grid.goal_position == node.position:
        return GOAL
    if node.weight > 1:
        return str(min(int(node.weight), 9))
    return WALKABLE


def format_map(grid: GridMap, path: Sequence[Node] | None = None) -> str:
    """Return ``grid`` as ASCII, marking plain ``path`` cells with ``*``."""

    on_path = {n.position for n in path or ()}
    lines = []
    for row in grid.tile_map:
        chars = []
        for node in row:
            glyph = _glyph(grid, node)
            if node.position in on_path and glyph == WALKABLE:
                glyph = PATH
            chars.append(glyph)
        lines.append("".join(chars))
    return "\n".join(lines) + "\n"


def load_map(path: str | Path, cost_model: CostModel | None = None) -> GridMap:
    """Read a map file; ``.gz`` files are decompressed transparently."""

    path = Path(path)
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as fh:
            text = fh.read()
    else:
        with open(path, "r", encoding="utf-8") as fh:
            text = fh.read()
    return parse_map(text, cost_model=cost_model)


def save_map(grid: GridMap, path: str | Path, path_nodes: Iterable[Node] | None = None) -> None:
    """Write ``grid`` to ``path`` in the format read by :func:`load_map`."""

    text = format_map(grid, list(path_nodes) if path_nodes is not None else None)
    path = Path(path)
    if path.suffix == ".gz":
        with gzip.open(path, "wt", encoding="utf-8") as fh:
            fh.write(text)
    else:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)


__all__ = ["parse_map", "format_map", "load_map", "save_map"]
