"""
Power propagation for the junction box puzzle.

Breadth-first reachability from every source over the 4-neighbour board,
where an edge conducts only if both cells have a port on it. Stateless:
each call recomputes the whole board from its authored cells.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from connections import (
    Ports,
    are_connected,
    cell_connections,
    connections,
    ports,
)
from grid_types import (
    DIRECTIONS,
    GRID_SIZE,
    Cell,
    Direction,
    Grid,
    Material,
    NodeKind,
    PipeShape,
    TileCategory,
)

__all__ = [
    "GRID_SIZE",
    "Cell",
    "Direction",
    "Grid",
    "Material",
    "NodeKind",
    "PipeShape",
    "Ports",
    "PropagationResult",
    "TileCategory",
    "analyze",
    "neighbours",
    "powered_cells",
    "are_connected",
    "cell_connections",
    "connections",
    "ports",
    "propagate",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropagationResult:
    """Outcome of one propagation pass."""

    grid: Grid
    solved: bool
    source_count: int
    sink_count: int
    powered_sink_count: int
    powered_count: int


def analyze(grid: Grid) -> PropagationResult:
    """
    Run one full propagation pass and report what was reached.

    Sources are seeded in row-major order and the queue is strictly FIFO, so
    the level recorded on first visit is the shortest port-matched distance
    to the nearest source.

    Args:
        grid: A well-formed square grid. Its power map is ignored.

    Returns:
        PropagationResult whose grid carries the new power map
    """
    size = grid.size
    levels: list[list[int | None]] = [[None] * size for _ in range(size)]
    queue: deque[tuple[int, int, int]] = deque()

    source_count = 0
    sink_count = 0
    for cell in grid.iter_cells():
        if cell.is_source:
            levels[cell.row][cell.col] = 0
            queue.append((cell.row, cell.col, 0))
            source_count += 1
        elif cell.is_sink:
            sink_count += 1

    visited: set[tuple[int, int]] = set()

    while queue:
        row, col, level = queue.popleft()
        if (row, col) in visited:
            continue
        visited.add((row, col))

        current = grid.cells[row][col]

        for direction, neighbour in neighbours(grid, current):
            nr, nc = neighbour.row, neighbour.col
            if are_connected(current, neighbour, direction) and levels[nr][nc] is None:
                levels[nr][nc] = level + 1
                queue.append((nr, nc, level + 1))

    sinks = grid.find(lambda c: c.is_sink)
    powered_sinks = sum(1 for c in sinks if levels[c.row][c.col] is not None)
    solved = sink_count > 0 and powered_sinks == sink_count
    powered_count = sum(1 for row_levels in levels for lv in row_levels if lv is not None)

    logger.debug(
        "propagate: sources=%d sinks=%d powered_sinks=%d powered=%d solved=%s",
        source_count,
        sink_count,
        powered_sinks,
        powered_count,
        solved,
    )

    new_grid = grid.with_power(tuple(tuple(row_levels) for row_levels in levels))
    return PropagationResult(
        grid=new_grid,
        solved=solved,
        source_count=source_count,
        sink_count=sink_count,
        powered_sink_count=powered_sinks,
        powered_count=powered_count,
    )


def propagate(grid: Grid) -> tuple[Grid, bool]:
    """
    Recompute power for the whole board.

    A board with no sinks is never solved; otherwise it is solved when every
    sink is powered.

    Returns:
        (new grid with power applied, solved). The input grid is unchanged.
    """
    result = analyze(grid)
    return result.grid, result.solved


def powered_cells(grid: Grid) -> list[Cell]:
    """Cells powered in the grid's current power map, row-major."""
    return grid.find(lambda c: grid.is_powered(c.row, c.col))


def neighbours(grid: Grid, cell: Cell) -> list[tuple[Direction, Cell]]:
    """In-bounds orthogonal neighbours in N, E, S, W order."""
    result = []
    for direction in DIRECTIONS:
        dr, dc = direction.delta
        nr, nc = cell.row + dr, cell.col + dc
        if grid.in_bounds(nr, nc):
            result.append((direction, grid.cells[nr][nc]))
    return result
