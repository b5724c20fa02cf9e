"""
Edit operations on a junction box grid.

Every operation returns a new, unpowered Grid and leaves its input alone.
Callers must run propagate() on the result. Operations that the rules
refuse (rotating a fixed tile, clicking empty space) are not errors: they
return the same cells back.
"""

from __future__ import annotations

import logging
import random
from enum import Enum

from grid_types import (
    GRID_SIZE,
    Cell,
    Grid,
    Material,
    NodeKind,
    PipeShape,
    TileCategory,
)
from junctionbox import neighbours

__all__ = [
    "Mode",
    "Piece",
    "activate_switch",
    "erase",
    "fill_random",
    "interact",
    "place",
    "place_blocker",
    "rotate",
]

logger = logging.getLogger(__name__)

Piece = PipeShape | NodeKind


class Mode(Enum):
    PLAY = "PLAY"
    EDIT = "EDIT"


def rotate(grid: Grid, row: int, col: int) -> Grid:
    """Turn one cell 90° clockwise. Empty cells stay put."""
    cell = grid.cell(row, col)
    if cell.is_empty:
        logger.debug("rotate: (%d, %d) is empty, ignored", row, col)
        return grid.without_power()
    return grid.replace_cells([cell.rotated()])


def activate_switch(grid: Grid, row: int, col: int) -> Grid:
    """
    Fire a switch: turn it and every pipe next to it.

    The switch turns only if it has a shape. Each orthogonal neighbour turns
    if it is a shaped PIPE made of ROTATABLE or FIXED material; this is the
    only way a FIXED pipe ever changes orientation. Nodes, blockers, other
    switches and empty cells are left alone.
    """
    switch = grid.cell(row, col)
    if switch.material != Material.SWITCH:
        logger.debug("activate_switch: (%d, %d) is %s, ignored", row, col, switch.material.value)
        return grid.without_power()

    updates: list[Cell] = []
    if switch.shape != PipeShape.NONE:
        updates.append(switch.rotated())

    for _, neighbour in neighbours(grid, switch):
        if (
            neighbour.category == TileCategory.PIPE
            and neighbour.shape != PipeShape.NONE
            and neighbour.material in (Material.ROTATABLE, Material.FIXED)
        ):
            updates.append(neighbour.rotated())

    logger.debug("activate_switch: (%d, %d) rotated %d cells", row, col, len(updates))
    return grid.replace_cells(updates)


def interact(grid: Grid, row: int, col: int, mode: Mode) -> Grid:
    """
    Apply a click on a cell.

    In EDIT mode any non-empty cell rotates. In PLAY mode ROTATABLE pipes
    rotate, SWITCH cells fire, and FIXED, TERMINAL and EMPTY cells refuse.
    """
    cell = grid.cell(row, col)

    if mode == Mode.EDIT:
        return rotate(grid, row, col)

    if cell.material == Material.ROTATABLE:
        return rotate(grid, row, col)
    if cell.material == Material.SWITCH:
        return activate_switch(grid, row, col)

    logger.debug("interact: %s cell at (%d, %d) is not playable", cell.material.value, row, col)
    return grid.without_power()


def erase(grid: Grid, row: int, col: int) -> Grid:
    """Reset a cell to empty space."""
    grid.cell(row, col)
    return grid.replace_cells([Cell.empty(row, col)])


def place(
    grid: Grid,
    row: int,
    col: int,
    piece: Piece,
    material: Material = Material.ROTATABLE,
) -> Grid:
    """
    Put a piece on a cell, replacing whatever was there.

    Nodes always get TERMINAL material. Only one SOURCE and one SINK may
    exist: placing one first erases any other cell of the same kind.
    Placed pieces start at orientation 0. Placing PipeShape.NONE erases.

    Args:
        grid: Grid to edit
        row, col: Target position
        piece: A PipeShape for pipes, or a NodeKind for terminals
        material: Material for pipes (ignored for nodes)

    Returns:
        New unpowered Grid

    Raises:
        IndexError: If (row, col) is off the board
        ValueError: If a pipe is given TERMINAL material; only nodes carry it
    """
    grid.cell(row, col)

    if isinstance(piece, NodeKind):
        updates = []
        if piece in (NodeKind.SOURCE, NodeKind.SINK):
            for existing in grid.find(lambda c: c.node_kind == piece):
                if (existing.row, existing.col) != (row, col):
                    logger.debug(
                        "place: clearing previous %s at (%d, %d)",
                        piece.value,
                        existing.row,
                        existing.col,
                    )
                    updates.append(Cell.empty(existing.row, existing.col))
        updates.append(Cell(row, col, category=TileCategory.NODE, node_kind=piece))
        return grid.replace_cells(updates)

    if piece == PipeShape.NONE or material == Material.EMPTY:
        return erase(grid, row, col)

    if material == Material.TERMINAL:
        raise ValueError(f"TERMINAL material is reserved for nodes, not {piece.value} pipes")

    return grid.replace_cells([Cell(row, col, shape=piece, material=material)])


def place_blocker(grid: Grid, row: int, col: int) -> Grid:
    """Put a blocker on a cell. Blockers never conduct."""
    grid.cell(row, col)
    return grid.replace_cells(
        [Cell(row, col, category=TileCategory.BLOCKER, material=Material.FIXED)]
    )


def fill_random(rng: random.Random, size: int = GRID_SIZE) -> Grid:
    """
    A board covered in rotatable straights and corners at random angles.

    Args:
        rng: Random source; pass a seeded one for a reproducible board
        size: Board dimension
    """
    cells = []
    for r in range(size):
        row = []
        for c in range(size):
            shape = PipeShape.STRAIGHT if rng.random() > 0.5 else PipeShape.CORNER
            row.append(
                Cell(
                    r,
                    c,
                    shape=shape,
                    material=Material.ROTATABLE,
                    orientation=rng.randrange(4) * 90,
                )
            )
        cells.append(tuple(row))
    return Grid(tuple(cells))
