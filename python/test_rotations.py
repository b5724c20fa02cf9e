"""
Test rotation framework for systematic directional testing.

This module provides utilities to write propagation scenarios once and run
them in all 4 board rotations (0°, 90°, 180°, 270°), so every direction of
the port-matching rule is exercised by the same layout.
"""

from dataclasses import dataclass, replace

import pytest

from editing import Mode, interact
from grid_parser import parse_layout
from grid_types import Cell, Direction, Grid
from junctionbox import analyze, ports, propagate


# =============================================================================
# Rotation Utilities
# =============================================================================


def rotate_position_90(row: int, col: int, size: int) -> tuple[int, int]:
    """
    Rotate a position 90° clockwise within a size×size board.

    Position (row, col) → (col, size - 1 - row)
    """
    return col, size - 1 - row


def rotate_grid_90(grid: Grid) -> Grid:
    """
    Rotate a whole board 90° clockwise.

    Every cell moves to its rotated position and is itself turned 90°, so
    ports keep facing the same neighbours. Power state moves with the cells.
    """
    size = grid.size
    new_cells: list[list[Cell]] = [[None] * size for _ in range(size)]  # type: ignore
    new_power: list[list[int | None]] = [[None] * size for _ in range(size)]

    for cell in grid.iter_cells():
        new_row, new_col = rotate_position_90(cell.row, cell.col, size)
        new_cells[new_row][new_col] = replace(
            cell, row=new_row, col=new_col, orientation=cell.orientation + 90
        )
        new_power[new_row][new_col] = grid.power[cell.row][cell.col]

    return Grid(tuple(tuple(row) for row in new_cells), tuple(tuple(row) for row in new_power))


def rotate_direction_90(direction: Direction) -> Direction:
    """Rotate a direction 90° clockwise."""
    rotation_map = {
        Direction.N: Direction.E,
        Direction.E: Direction.S,
        Direction.S: Direction.W,
        Direction.W: Direction.N,
    }
    return rotation_map[direction]


def rotate_grid(grid: Grid, times: int) -> Grid:
    for _ in range(times % 4):
        grid = rotate_grid_90(grid)
    return grid


# =============================================================================
# Test Case Data Structures
# =============================================================================


@dataclass
class Scenario:
    """A layout with the levels and verdict expected after propagation."""

    name: str
    layout: str
    solved: bool
    levels: dict[tuple[int, int], int | None]  # None = must be unpowered


SCENARIOS = [
    Scenario(
        name="straight_line",
        layout="A9 I9 I9 B2",
        solved=True,
        levels={(0, 0): 0, (0, 1): 1, (0, 2): 2, (0, 3): 3},
    ),
    Scenario(
        name="broken_line",
        layout="A9 I9 I0 B2",
        solved=False,
        levels={(0, 1): 1, (0, 2): None, (0, 3): None},
    ),
    Scenario(
        name="corner_turn",
        layout="""
            __ __ __
            A9 L1 __
            __ L0 B2
        """,
        solved=True,
        levels={(1, 0): 0, (1, 1): 1, (2, 1): 2, (2, 2): 3},
    ),
    Scenario(
        name="tee_branch_only_one_sink_needed",
        layout="""
            __ D0 __
            A9 T0 I9 B2
            __ __ __ __
        """,
        solved=True,
        levels={(1, 1): 1, (0, 1): None, (1, 3): 3},
    ),
    Scenario(
        name="cross_passes_both_ways",
        layout="""
            __ A1 __
            I9 C0 I9
            __ I0 __
            __ B0 __
        """,
        solved=True,
        levels={(1, 0): 2, (1, 2): 2, (2, 1): 2, (3, 1): 3},
    ),
    Scenario(
        name="sink_facing_away",
        layout="A9 I9 B0",
        solved=False,
        levels={(0, 1): 1, (0, 2): None},
    ),
    Scenario(
        name="blocker_in_path",
        layout="A9 #0 B2",
        solved=False,
        levels={(0, 0): 0, (0, 1): None, (0, 2): None},
    ),
]


# =============================================================================
# Tests
# =============================================================================


class TestRotationUtilities:
    """Sanity checks for the rotation helpers themselves."""

    def test_position_rotation_cycles(self) -> None:
        """Four quarter turns return a position to where it started."""
        pos = (1, 2)
        for _ in range(4):
            pos = rotate_position_90(*pos, 8)
        assert pos == (1, 2)

    def test_grid_rotation_cycles(self) -> None:
        """Four quarter turns return the board unchanged."""
        grid = parse_layout("A9 L1 T2|C0 #0 s9|B2 i1 D0")
        assert rotate_grid(grid, 4) == grid

    def test_rotated_ports_follow_direction(self) -> None:
        """A cell's ports turn with the board."""
        grid = parse_layout("L0")
        cell = grid.cell(0, 0)
        rotated = rotate_grid_90(grid)
        moved = rotated.cell(*rotate_position_90(0, 0, 8))
        assert ports(moved) == {rotate_direction_90(d) for d in ports(cell)}


@pytest.mark.parametrize("times", [0, 1, 2, 3])
@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.name)
class TestScenariosInAllRotations:
    """Every scenario must hold however the board is turned."""

    def test_verdict(self, scenario: Scenario, times: int) -> None:
        """The solved verdict does not depend on board orientation."""
        grid = rotate_grid(parse_layout(scenario.layout), times)
        _, solved = propagate(grid)
        assert solved is scenario.solved

    def test_levels(self, scenario: Scenario, times: int) -> None:
        """Power levels move with their cells."""
        grid = rotate_grid(parse_layout(scenario.layout), times)
        result, _ = propagate(grid)
        for (row, col), expected in scenario.levels.items():
            for _ in range(times):
                row, col = rotate_position_90(row, col, grid.size)
            if expected is None:
                assert not result.is_powered(row, col), (row, col)
            else:
                assert result.is_powered(row, col), (row, col)
                assert result.power_level(row, col) == expected, (row, col)

    def test_idempotent(self, scenario: Scenario, times: int) -> None:
        """A second pass changes nothing."""
        grid = rotate_grid(parse_layout(scenario.layout), times)
        once, _ = propagate(grid)
        assert propagate(once)[0] == once


@pytest.mark.parametrize("times", [0, 1, 2, 3])
def test_propagate_commutes_with_rotation(times: int) -> None:
    """Rotating then propagating equals propagating then rotating."""
    grid = parse_layout("""
        A9 C0 I9 L1
        __ I0 __ I0
        D0 L0 I9 L2
        __ __ __ B0
    """)
    rotated_first, _ = propagate(rotate_grid(grid, times))
    propagated_first, _ = propagate(grid)
    assert rotated_first == rotate_grid(propagated_first, times)


@pytest.mark.parametrize("times", [0, 1, 2, 3])
def test_switch_press_in_all_rotations(times: int) -> None:
    """The switch puzzle is solved by one press whichever way it faces."""
    grid = rotate_grid(parse_layout("""
        A1 __ __ __
        i0 __ __ __
        L2 S0 l9 __
        __ __ l0 B2
    """), times)
    row, col = 2, 1
    for _ in range(times):
        row, col = rotate_position_90(row, col, grid.size)

    assert analyze(grid).solved is False
    assert analyze(interact(grid, row, col, Mode.PLAY)).solved is True
