"""
Demonstration scripts for the junction box puzzle.
"""

from editing import Mode, interact
from game_state import Interact, LoadSeed, Place, ToggleMode, apply, new_game
from grid_parser import decode_seed, encode_seed, format_layout, parse_layout
from grid_types import Material, NodeKind, PipeShape
from junctionbox import analyze, propagate
from ascii_render import render_grid, render_legend, render_levels


def status(solved: bool) -> str:
    return "CIRCUIT COMPLETE" if solved else "POWER OFFLINE"


def rotation_demo() -> None:
    """Rotate a line of pipes until power reaches the sink."""
    grid, solved = propagate(parse_layout("A9 I0 I0 I0 B2"))

    print("=" * 40)
    print("Rotation: three straights to turn")
    print("=" * 40)
    print(render_grid(grid, title=status(solved)))
    print()

    for col in (1, 2, 3):
        grid, solved = propagate(interact(grid, 0, col, Mode.PLAY))
        print(f"Operation: interact(0, {col}) -> {status(solved)}")

    print(render_grid(grid, title=status(solved)))
    print()
    print("Power levels:")
    print(render_levels(grid))


def switch_demo() -> None:
    """A single switch press turns fixed pipes into place."""
    grid, solved = propagate(parse_layout("""
        A1 __ __ __
        i0 __ __ __
        L2 S0 l9 __
        __ __ l0 B2
    """))

    print("=" * 40)
    print("Switch: fixed corners only a switch can turn")
    print("=" * 40)
    print("BEFORE:")
    print(render_grid(grid, cursor=(2, 1), title=status(solved)))
    print()

    grid, solved = propagate(interact(grid, 2, 1, Mode.PLAY))
    print("Operation: interact(2, 1) on the switch")
    print("AFTER:")
    print(render_grid(grid, title=status(solved)))
    print("✓ Solved" if solved else "✗ Still offline")


def seed_demo() -> None:
    """Share a board as a seed string and load it back."""
    grid = parse_layout("""
        A9 I9 L1 __
        __ __ I0 __
        __ __ L0 B2
    """)
    seed = encode_seed(grid)

    print("=" * 40)
    print("Seeds: 64 two-character codes")
    print("=" * 40)
    print(f"Seed: {seed}")
    print()
    print("Decoded layout:")
    print(format_layout(decode_seed(seed)))
    print()

    result = analyze(decode_seed(seed))
    print(
        f"Sources: {result.source_count}  Sinks: {result.sink_count}  "
        f"Powered: {result.powered_count}  Solved: {result.solved}"
    )

    state = apply(new_game(), LoadSeed(seed[:-1]))
    print(f"Truncated seed: {state.status}")


def session_demo() -> None:
    """Build a circuit in EDIT mode, then play it."""
    state = new_game()
    commands = [
        Place(3, 1, NodeKind.SOURCE),
        Place(3, 2, PipeShape.CORNER, Material.FIXED),
        Place(4, 2, PipeShape.STRAIGHT, Material.SWITCH),
        Place(5, 2, NodeKind.SINK),
        Interact(3, 1),
        Interact(3, 2),
        Interact(3, 2),
        ToggleMode(),
    ]
    for command in commands:
        state = apply(state, command)

    print("=" * 40)
    print("Session: place pieces, then play")
    print("=" * 40)
    print(render_grid(state.grid, title=status(state.solved)))
    print(f"Mode: {state.mode.name}  Status: {state.status}")
    print()

    # The switch is already vertical; one press turns it and spoils the path
    state = apply(state, Interact(4, 2))
    print(f"After switch press: {status(state.solved)}")
    print(render_grid(state.grid, title=status(state.solved)))
    print(render_legend())


if __name__ == "__main__":
    rotation_demo()
    print()
    switch_demo()
    print()
    seed_demo()
    print()
    session_demo()
