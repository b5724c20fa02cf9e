"""
Interactive demo for the junction box puzzle.
Display a board and rotate, place and erase tiles with keyboard commands.
"""

import logging
from dataclasses import replace

import readchar, sys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_grid, render_legend
from editing import Mode
from game_state import (
    Clear,
    Command,
    Erase,
    Fill,
    GameState,
    Interact,
    LoadSeed,
    Place,
    ToggleMode,
    apply,
    new_game,
)
from grid_parser import decode_seed, encode_seed, parse_layout
from grid_types import Material, NodeKind, PipeShape

# Number keys in EDIT mode
PALETTE: dict[str, tuple[PipeShape | NodeKind, Material]] = {
    "1": (PipeShape.STRAIGHT, Material.ROTATABLE),
    "2": (PipeShape.CORNER, Material.ROTATABLE),
    "3": (PipeShape.STRAIGHT, Material.FIXED),
    "4": (PipeShape.CORNER, Material.FIXED),
    "5": (PipeShape.STRAIGHT, Material.SWITCH),
    "6": (PipeShape.CORNER, Material.SWITCH),
    "7": (NodeKind.SOURCE, Material.TERMINAL),
    "8": (NodeKind.SINK, Material.TERMINAL),
    "9": (NodeKind.DEAD_END, Material.TERMINAL),
}

MOVES = {
    readchar.key.UP: (-1, 0),
    readchar.key.DOWN: (1, 0),
    readchar.key.LEFT: (0, -1),
    readchar.key.RIGHT: (0, 1),
    "w": (-1, 0),
    "s": (1, 0),
    "a": (0, -1),
    "d": (0, 1),
}


class InteractiveDemo:
    """Keyboard-driven board editor and player."""

    def __init__(self, state: GameState) -> None:
        self.state = state
        self.original_state = state  # Keep a copy of the original state
        self.cursor = (0, 0)
        self.console = Console()

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        state = self.state
        row, col = self.cursor

        status = Text()
        status.append("Mode: ", style="bold")
        status.append(f"{state.mode.value}\n")
        status.append("Cursor: ", style="bold")
        cell = state.grid.cell(row, col)
        kind = cell.node_kind.value if cell.node_kind else cell.shape.value
        status.append(f"[{row}, {col}] {cell.category.value} {kind} {cell.material.value} {cell.orientation}°\n\n")

        # Convert ANSI-colored grid text to Rich Text properly
        title = "CIRCUIT COMPLETE" if state.solved else "POWER OFFLINE"
        status.append(Text.from_ansi(render_grid(state.grid, cursor=self.cursor, title=title)))
        status.append("\n")
        status.append(Text.from_ansi(render_legend()))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  Arrows/WASD - Move cursor\n")
        status.append("  Space/Enter - Rotate or activate\n")
        status.append("  M - Toggle PLAY/EDIT mode\n")
        if state.mode == Mode.EDIT:
            status.append("  1-6 - Place I, L, i, l, S, s   7/8/9 - Source, Sink, Dead end\n")
            status.append("  X - Erase   C - Clear   F - Fill randomly\n")
        status.append("  E - Show seed   L - Load seed\n")
        status.append("  R - Reset to original board\n")
        status.append("  Q - Quit\n\n")

        # Status line at the bottom
        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(state.status)

        border = "blue" if state.solved else "green"
        return Panel(status, title="Junction Box", border_style=border, width=80)

    def move_cursor(self, dr: int, dc: int) -> None:
        size = self.state.grid.size
        row, col = self.cursor
        self.cursor = (min(max(row + dr, 0), size - 1), min(max(col + dc, 0), size - 1))

    def send(self, command: Command) -> None:
        self.state = apply(self.state, command)

    def show_seed(self) -> None:
        self.state = replace(self.state, status=f"Seed: {encode_seed(self.state.grid)}")

    def prompt_seed(self, live: Live) -> None:
        live.stop()
        try:
            seed = self.console.input("Seed: ").strip()
        finally:
            live.start()
        self.send(LoadSeed(seed))

    def reset_grid(self) -> None:
        """Reset the board to its original state."""
        self.state = replace(self.original_state, status="Board reset to original state")

    def handle_key(self, key: str, live: Live) -> bool:
        """Apply one key press. Returns False to quit."""
        row, col = self.cursor
        lower = key.lower() if len(key) == 1 else key

        if lower == "q":
            return False
        elif lower in MOVES:
            self.move_cursor(*MOVES[lower])
        elif key in (" ", readchar.key.ENTER):
            self.send(Interact(row, col))
        elif lower == "m":
            self.send(ToggleMode())
        elif key in PALETTE:
            piece, material = PALETTE[key]
            self.send(Place(row, col, piece, material))
        elif lower == "x":
            self.send(Erase(row, col))
        elif lower == "c":
            self.send(Clear())
        elif lower == "f":
            self.send(Fill())
        elif lower == "e":
            self.show_seed()
        elif lower == "l":
            self.prompt_seed(live)
        elif lower == "r":
            self.reset_grid()
        else:
            self.state = replace(self.state, status=f"Unknown key: {repr(key)}")
        return True

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    key = readchar.readkey()
                    if not self.handle_key(key, live):
                        break
            except KeyboardInterrupt:
                self.state = replace(self.state, status="Interrupted by user")
                live.update(self.generate_display())


LAYOUTS = dict(
    straight="""
        A9 I0 I0 I0 B2
    """,
    corners="""
        A1 __ __ __
        L0 L0 __ __
        __ L0 I0 B2
    """,
    switch="""
        A1 __ __ __
        i0 __ __ __
        L2 S0 l9 __
        __ __ l0 B2
    """,
    blank="",
)


def main(state: GameState) -> None:
    """Run interactive demo with a sample board."""
    demo = InteractiveDemo(state)
    demo.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'sublime':
        # Running from IDE - just render the initial state
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

        print('Running from IDE - rendering initial state')
        print()

        for name, layout in LAYOUTS.items():
            state = new_game(parse_layout(layout), Mode.PLAY)
            print(render_grid(state.grid, title=f"{name} {'solved' if state.solved else 'unsolved'}"))
            print()
    else:
        name = sys.argv[1] if len(sys.argv) > 1 else 'corners'
        if len(name) == 128:
            grid = decode_seed(name)
        else:
            grid = parse_layout(LAYOUTS[name])
        main(new_game(grid, Mode.PLAY))
