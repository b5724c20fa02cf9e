"""
ASCII rendering for junction box grids.

Provides two renderings:
1. Tile rendering - each cell drawn as a box-drawing glyph of its ports,
   coloured by material and lit when powered
2. Level rendering - the BFS power level of every cell, for debugging
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from connections import ports
from grid_types import Cell, Direction, Grid, Material, NodeKind, TileCategory

__all__ = ["cell_glyph", "render_grid", "render_legend", "render_levels"]

logger = logging.getLogger(__name__)

N, E, S, W = Direction.N, Direction.E, Direction.S, Direction.W

# Centre character for each port combination of a pipe
PIPE_GLYPHS: dict[frozenset[Direction], str] = {
    frozenset(): " ",
    frozenset({N, S}): "│",
    frozenset({E, W}): "─",
    frozenset({N, E}): "└",
    frozenset({E, S}): "┌",
    frozenset({S, W}): "┐",
    frozenset({W, N}): "┘",
    frozenset({N, E, W}): "┴",
    frozenset({N, E, S}): "├",
    frozenset({E, S, W}): "┬",
    frozenset({N, S, W}): "┤",
    frozenset({N, E, S, W}): "┼",
}

NODE_LETTERS = {
    NodeKind.SOURCE: "A",
    NodeKind.SINK: "B",
    NodeKind.DEAD_END: "D",
}

EMPTY_GLYPH = " · "
BLOCKER_GLYPH = "███"

MATERIAL_COLORS: dict[Material, Callable[[str], str]] = {
    Material.ROTATABLE: chalk.green,
    Material.FIXED: chalk.yellow,
    Material.SWITCH: chalk.blue,
    Material.TERMINAL: chalk.red,
    Material.EMPTY: lambda s: s,
}


def cell_glyph(cell: Cell) -> str:
    """
    Three-character picture of a cell.

    The middle character shows the ports; the outer characters extend the
    line to the cell edge when there is a west or east port. Nodes show
    their letter in the middle.
    """
    if cell.category == TileCategory.BLOCKER:
        return BLOCKER_GLYPH
    if cell.is_empty and cell.category == TileCategory.PIPE:
        return EMPTY_GLYPH

    cell_ports = ports(cell)
    left = "─" if W in cell_ports else " "
    right = "─" if E in cell_ports else " "

    if cell.category == TileCategory.NODE and cell.node_kind is not None:
        return left + NODE_LETTERS[cell.node_kind] + right

    return left + PIPE_GLYPHS[cell_ports] + right


def render_grid(
    grid: Grid,
    cursor: tuple[int, int] | None = None,
    title: str | None = None,
    color: bool = True,
) -> str:
    """
    Render a grid with a border.

    Args:
        grid: The grid to render (its power map decides which cells light up)
        cursor: Optional (row, col) to highlight
        title: Optional text for the top border
        color: False for plain text

    Returns:
        Rendered string, with ANSI colour codes unless color is False
    """
    def plain(s: str) -> str:
        return s

    width = grid.size * 3
    lines = []

    top = "─" * width
    if title:
        label = f" {title} "[:width]
        top = label + top[len(label):]
    lines.append("┌" + top + "┐")

    for row in grid.cells:
        line_parts = ["│"]
        for cell in row:
            content = cell_glyph(cell)
            if color:
                if cursor == (cell.row, cell.col):
                    content = chalk.bgWhite.black(content)
                elif grid.is_powered(cell.row, cell.col):
                    content = chalk.yellowBright(content)
                else:
                    content = MATERIAL_COLORS.get(cell.material, plain)(content)
            elif cursor == (cell.row, cell.col):
                content = "[" + content[1] + "]"
            line_parts.append(content)
        line_parts.append("│")
        lines.append("".join(line_parts))

    lines.append("└" + "─" * width + "┘")
    return "\n".join(lines)


def render_levels(grid: Grid) -> str:
    """
    Power level of every cell as plain text.

    Powered cells show their level (in base 36 past 9), unpowered cells a
    dot. One line per row.
    """
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    lines = []
    for row in grid.power:
        chars = []
        for level in row:
            if level is None:
                chars.append(".")
            else:
                chars.append(digits[level] if level < len(digits) else "+")
        lines.append("".join(chars))
    logger.debug("render_levels: %d rows", len(lines))
    return "\n".join(lines)


def render_legend(color: bool = True) -> str:
    """One-line key for the tile colours."""
    entries = [
        (Material.ROTATABLE, "rotate"),
        (Material.FIXED, "fixed"),
        (Material.SWITCH, "switch"),
        (Material.TERMINAL, "node"),
    ]
    parts = []
    for material, label in entries:
        swatch = "■"
        if color:
            swatch = MATERIAL_COLORS[material](swatch)
        parts.append(f"{swatch} {label}")
    lit = chalk.yellowBright("■") if color else "■"
    parts.append(f"{lit} powered")
    return "  ".join(parts)
