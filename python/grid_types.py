"""
Shared type definitions for the junction box puzzle.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Iterator

GRID_SIZE = 8


class Direction(Enum):
    """Cardinal direction of a port. Values are indices into [N, E, S, W]."""

    N = 0  # Up (decreasing row)
    E = 1  # Right (increasing col)
    S = 2  # Down (increasing row)
    W = 3  # Left (decreasing col)

    @property
    def index(self) -> int:
        return self.value

    @property
    def opposite(self) -> Direction:
        return DIRECTIONS[(self.value + 2) % 4]

    @property
    def delta(self) -> tuple[int, int]:
        """(row, col) offset of the neighbour in this direction."""
        return _DELTAS[self]


DIRECTIONS: tuple[Direction, ...] = (Direction.N, Direction.E, Direction.S, Direction.W)

_DELTAS = {
    Direction.N: (-1, 0),
    Direction.E: (0, 1),
    Direction.S: (1, 0),
    Direction.W: (0, -1),
}


class TileCategory(Enum):
    PIPE = "PIPE"
    NODE = "NODE"  # Source/sink/dead-end terminals
    BLOCKER = "BLOCKER"  # Never conducts


class PipeShape(Enum):
    NONE = "NONE"
    STRAIGHT = "STRAIGHT"  # I
    CORNER = "CORNER"  # L
    TEE = "TEE"  # T
    CROSS = "CROSS"  # +


class NodeKind(Enum):
    SOURCE = "SOURCE"
    SINK = "SINK"
    DEAD_END = "DEAD_END"


class Material(Enum):
    """Who may rotate a cell. Does not affect connectivity."""

    ROTATABLE = "ROTATABLE"
    FIXED = "FIXED"
    SWITCH = "SWITCH"  # Rotates itself and its pipe neighbours
    TERMINAL = "TERMINAL"  # Forced for all nodes
    EMPTY = "EMPTY"


# =============================================================================
# Cells
# =============================================================================


@dataclass(frozen=True)
class Cell:
    """
    The authored identity of one board position.

    Power state is not stored here; see Grid.power.
    """

    row: int
    col: int
    category: TileCategory = TileCategory.PIPE
    shape: PipeShape = PipeShape.NONE
    node_kind: NodeKind | None = None
    material: Material = Material.EMPTY
    orientation: int = 0

    def __post_init__(self) -> None:
        if self.orientation % 90 != 0:
            raise ValueError(
                f"Invalid orientation {self.orientation} at ({self.row}, {self.col}): "
                f"must be a multiple of 90"
            )
        # Frozen, so normalise through object.__setattr__
        object.__setattr__(self, "orientation", self.orientation % 360)

        # EMPTY material carries nothing, whatever shape was asked for
        if self.category != TileCategory.PIPE or self.material == Material.EMPTY:
            object.__setattr__(self, "shape", PipeShape.NONE)

        if self.category == TileCategory.NODE:
            if self.node_kind is None:
                raise ValueError(f"NODE cell at ({self.row}, {self.col}) has no node_kind")
            object.__setattr__(self, "material", Material.TERMINAL)
        else:
            object.__setattr__(self, "node_kind", None)

    @classmethod
    def empty(cls, row: int, col: int) -> Cell:
        return cls(row, col)

    @property
    def is_empty(self) -> bool:
        return self.material == Material.EMPTY

    @property
    def is_source(self) -> bool:
        return self.category == TileCategory.NODE and self.node_kind == NodeKind.SOURCE

    @property
    def is_sink(self) -> bool:
        return self.category == TileCategory.NODE and self.node_kind == NodeKind.SINK

    def with_orientation(self, orientation: int) -> Cell:
        return replace(self, orientation=orientation)

    def rotated(self) -> Cell:
        """Same cell turned 90° clockwise."""
        return self.with_orientation((self.orientation + 90) % 360)


# =============================================================================
# Grid
# =============================================================================


PowerMap = tuple[tuple[int | None, ...], ...]


def _unpowered(size: int) -> PowerMap:
    return tuple(tuple(None for _ in range(size)) for _ in range(size))


@dataclass(frozen=True)
class Grid:
    """
    A square board of cells plus the power state from the last propagation.

    power[r][c] is None for an unpowered cell, otherwise its BFS distance
    from the nearest source. Only the propagation engine fills it in; every
    other constructor leaves the board unpowered.
    """

    cells: tuple[tuple[Cell, ...], ...]
    power: PowerMap = field(default=())

    def __post_init__(self) -> None:
        size = len(self.cells)
        for r, row in enumerate(self.cells):
            if len(row) != size:
                raise ValueError(
                    f"Grid must be square: row {r} has {len(row)} cells, expected {size}"
                )
            for c, cell in enumerate(row):
                if (cell.row, cell.col) != (r, c):
                    raise ValueError(
                        f"Cell at index ({r}, {c}) reports position ({cell.row}, {cell.col})"
                    )
        if not self.power:
            object.__setattr__(self, "power", _unpowered(size))
        elif len(self.power) != size or any(len(row) != size for row in self.power):
            raise ValueError(f"Power map does not match {size}x{size} grid")

    @classmethod
    def empty(cls, size: int = GRID_SIZE) -> Grid:
        return cls(tuple(tuple(Cell.empty(r, c) for c in range(size)) for r in range(size)))

    @property
    def size(self) -> int:
        return len(self.cells)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise IndexError(f"Position ({row}, {col}) outside {self.size}x{self.size} grid")
        return self.cells[row][col]

    def is_powered(self, row: int, col: int) -> bool:
        return self.power[row][col] is not None

    def power_level(self, row: int, col: int) -> int:
        level = self.power[row][col]
        return 0 if level is None else level

    def iter_cells(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for row in self.cells:
            yield from row

    def find(self, predicate: Callable[[Cell], bool]) -> list[Cell]:
        return [cell for cell in self.iter_cells() if predicate(cell)]

    def without_power(self) -> Grid:
        return Grid(self.cells)

    def replace_cells(self, updates: list[Cell]) -> Grid:
        """
        Return a new grid with the given cells swapped in by position.

        The result is unpowered: power is only ever recomputed, never patched.
        """
        mutable_cells = [list(row) for row in self.cells]
        for cell in updates:
            if not self.in_bounds(cell.row, cell.col):
                raise IndexError(
                    f"Position ({cell.row}, {cell.col}) outside {self.size}x{self.size} grid"
                )
            mutable_cells[cell.row][cell.col] = cell
        return Grid(tuple(tuple(row) for row in mutable_cells))

    def with_power(self, power: PowerMap) -> Grid:
        return Grid(self.cells, power)
