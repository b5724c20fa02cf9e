"""
Explicit state transitions for a junction box session.

apply() takes the current state and one command and returns the next
state. Every command ends with exactly one full propagation pass, whether
or not it changed anything.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace

from editing import Mode, Piece, erase, fill_random, interact, place
from grid_parser import SeedError, decode_seed
from grid_types import GRID_SIZE, Grid, Material
from junctionbox import propagate

__all__ = [
    "Clear",
    "Command",
    "Erase",
    "Fill",
    "GameState",
    "Interact",
    "LoadSeed",
    "Place",
    "ToggleMode",
    "apply",
    "new_game",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class Interact:
    """Click a cell: rotate in EDIT mode, play it in PLAY mode."""

    row: int
    col: int


@dataclass(frozen=True)
class Place:
    row: int
    col: int
    piece: Piece
    material: Material = Material.ROTATABLE


@dataclass(frozen=True)
class Erase:
    row: int
    col: int


@dataclass(frozen=True)
class LoadSeed:
    seed: str


@dataclass(frozen=True)
class ToggleMode:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Fill:
    """Cover the board in random rotatable pipes. seed=None draws a fresh board."""

    seed: int | None = None


Command = Interact | Place | Erase | LoadSeed | ToggleMode | Clear | Fill


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True)
class GameState:
    """Everything the UI needs to draw one frame."""

    grid: Grid
    mode: Mode = Mode.EDIT
    solved: bool = False
    status: str = "Ready"


def new_game(grid: Grid | None = None, mode: Mode = Mode.EDIT) -> GameState:
    """Initial state with power already computed."""
    grid = grid if grid is not None else Grid.empty(GRID_SIZE)
    powered, solved = propagate(grid)
    return GameState(powered, mode, solved)


def apply(state: GameState, command: Command) -> GameState:
    """
    Advance the session by one command.

    Edits that the current mode does not allow leave the grid unchanged.
    A seed that fails to decode leaves the grid unchanged and reports why in
    status; a good seed switches to PLAY mode.

    Args:
        state: Current state (not modified)
        command: The command to apply

    Returns:
        Next state, with power recomputed
    """
    grid = state.grid
    mode = state.mode
    status = state.status

    match command:
        case Interact(row=row, col=col):
            grid = interact(grid, row, col, mode)
            status = f"Interacted with ({row}, {col})"
        case Place(row=row, col=col, piece=piece, material=material):
            if mode == Mode.EDIT:
                grid = place(grid, row, col, piece, material)
                status = f"Placed {piece.value} at ({row}, {col})"
            else:
                status = "Switch to EDIT mode to place pieces"
        case Erase(row=row, col=col):
            if mode == Mode.EDIT:
                grid = erase(grid, row, col)
                status = f"Erased ({row}, {col})"
            else:
                status = "Switch to EDIT mode to erase pieces"
        case LoadSeed(seed=seed):
            try:
                grid = decode_seed(seed, grid.size)
            except SeedError as e:
                logger.info("apply: rejected seed: %s", str(e).splitlines()[0])
                status = f"Invalid seed: expected {2 * grid.size * grid.size} characters, got {len(seed)}"
            else:
                mode = Mode.PLAY
                status = "Seed loaded"
        case ToggleMode():
            mode = Mode.PLAY if mode == Mode.EDIT else Mode.EDIT
            status = f"{mode.value} mode"
        case Clear():
            grid = Grid.empty(grid.size)
            status = "Board cleared"
        case Fill(seed=seed):
            grid = fill_random(random.Random(seed), grid.size)
            status = "Board filled"
        case _:
            raise TypeError(f"Unknown command: {command!r}")

    powered, solved = propagate(grid)
    if solved and not state.solved:
        logger.info("apply: circuit complete")
    return replace(state, grid=powered, mode=mode, solved=solved, status=status)
