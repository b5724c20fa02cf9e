"""
Level encoding for the junction box puzzle.

Provides two text formats:
1. Seeds: the fixed 128-character share code (2 chars per cell, row-major)
2. Layouts: a readable multi-row form of the same codes, for hand-written levels
"""

from __future__ import annotations

import logging

from grid_types import GRID_SIZE, Cell, Grid, Material, NodeKind, PipeShape, TileCategory

__all__ = ["SeedError", "decode_seed", "encode_seed", "format_layout", "parse_layout"]

logger = logging.getLogger(__name__)

# Rotation codes: 0=0°, 9=90°, 1=180°, 2=270°
ROTATION_CODES = {0: "0", 90: "9", 180: "1", 270: "2"}
ROTATION_FROM_CODE = {code: degrees for degrees, code in ROTATION_CODES.items()}

EMPTY_CODE = "X"

# Type codes understood by seeds. Capital = rotatable, lowercase = fixed;
# S/s are switches (straight/corner).
SEED_CODES: dict[str, tuple[TileCategory, PipeShape, NodeKind | None, Material]] = {
    "A": (TileCategory.NODE, PipeShape.NONE, NodeKind.SOURCE, Material.TERMINAL),
    "B": (TileCategory.NODE, PipeShape.NONE, NodeKind.SINK, Material.TERMINAL),
    "D": (TileCategory.NODE, PipeShape.NONE, NodeKind.DEAD_END, Material.TERMINAL),
    "I": (TileCategory.PIPE, PipeShape.STRAIGHT, None, Material.ROTATABLE),
    "i": (TileCategory.PIPE, PipeShape.STRAIGHT, None, Material.FIXED),
    "L": (TileCategory.PIPE, PipeShape.CORNER, None, Material.ROTATABLE),
    "l": (TileCategory.PIPE, PipeShape.CORNER, None, Material.FIXED),
    "S": (TileCategory.PIPE, PipeShape.STRAIGHT, None, Material.SWITCH),
    "s": (TileCategory.PIPE, PipeShape.CORNER, None, Material.SWITCH),
}

# Extra codes for layouts only; seeds have no room for these tiles.
LAYOUT_CODES: dict[str, tuple[TileCategory, PipeShape, NodeKind | None, Material]] = {
    **SEED_CODES,
    "T": (TileCategory.PIPE, PipeShape.TEE, None, Material.ROTATABLE),
    "t": (TileCategory.PIPE, PipeShape.TEE, None, Material.FIXED),
    "C": (TileCategory.PIPE, PipeShape.CROSS, None, Material.ROTATABLE),
    "c": (TileCategory.PIPE, PipeShape.CROSS, None, Material.FIXED),
    "W": (TileCategory.PIPE, PipeShape.TEE, None, Material.SWITCH),
    "w": (TileCategory.PIPE, PipeShape.CROSS, None, Material.SWITCH),
    "#": (TileCategory.BLOCKER, PipeShape.NONE, None, Material.FIXED),
}


class SeedError(ValueError):
    """A seed string that cannot be turned into a grid."""


def _make_cell(row: int, col: int, type_code: str, orientation: int, codes: dict) -> Cell:
    if type_code not in codes:
        return Cell(row, col, orientation=orientation)
    category, shape, node_kind, material = codes[type_code]
    return Cell(
        row,
        col,
        category=category,
        shape=shape,
        node_kind=node_kind,
        material=material,
        orientation=orientation,
    )


def _type_code(cell: Cell, codes: dict) -> str:
    key = (cell.category, cell.shape, cell.node_kind, cell.material)
    for code, value in codes.items():
        if value == key:
            return code
    return EMPTY_CODE


def encode_seed(grid: Grid) -> str:
    """
    Encode a grid as a seed string.

    Each cell becomes a type code followed by a rotation code. Tiles the seed
    alphabet cannot express (tees, crosses, blockers) are written as X, but
    keep their rotation code.

    Args:
        grid: Grid to encode (power state is not encoded)

    Returns:
        String of 2 * size * size characters
    """
    parts = []
    for cell in grid.iter_cells():
        parts.append(_type_code(cell, SEED_CODES))
        parts.append(ROTATION_CODES[cell.orientation])
    return "".join(parts)


def decode_seed(seed: str, size: int = GRID_SIZE) -> Grid:
    """
    Decode a seed string into an unpowered grid.

    Unknown type codes decode as empty cells and unknown rotation codes as 0°.

    Args:
        seed: The share code
        size: Board dimension

    Returns:
        Grid with every cell populated

    Raises:
        SeedError: If the seed is not exactly 2 * size * size characters long
    """
    expected = 2 * size * size
    if len(seed) != expected:
        raise SeedError(
            f"Invalid seed length: {len(seed)}\n"
            f"  Expected: {expected} characters ({size}x{size} cells, 2 per cell)\n"
            f"  Format: type [{''.join(SEED_CODES)}{EMPTY_CODE}] + rotation "
            f"[{''.join(ROTATION_FROM_CODE)}]"
        )

    rows = []
    index = 0
    for r in range(size):
        row = []
        for c in range(size):
            type_code, rot_code = seed[index], seed[index + 1]
            index += 2
            orientation = ROTATION_FROM_CODE.get(rot_code, 0)
            row.append(_make_cell(r, c, type_code, orientation, SEED_CODES))
        rows.append(tuple(row))

    grid = Grid(tuple(rows))
    logger.debug("decode_seed: %d non-empty cells", len(grid.find(lambda c: not c.is_empty)))
    return grid


def parse_layout(definition: str, size: int = GRID_SIZE) -> Grid:
    """
    Parse a grid from a readable layout.

    Format:
    - Rows separated by | or newlines (blank lines ignored)
    - Each cell is a 2-character code: type then rotation, as in seeds
    - Spaces between cells are optional
    - Extra types: T/t tee, C/c cross (rotatable/fixed), W/w switch tee/cross,
      # blocker, and _ as a synonym for X
    - Missing cells and rows are padded with empty cells

    Example:
        \"\"\"
        A9 I9 B2
        __ __ L0
        \"\"\"

        Creates a source facing east at (0, 0), an east-west straight at
        (0, 1), a sink facing west at (0, 2) and a corner at (1, 2).

    Args:
        definition: Layout text
        size: Board dimension

    Returns:
        Unpowered Grid

    Raises:
        ValueError: On too many rows or columns, dangling characters, or
            unknown codes
    """
    row_strings = [
        line.strip()
        for chunk in definition.strip().split("\n")
        for line in chunk.split("|")
        if line.strip()
    ]
    if len(row_strings) > size:
        raise ValueError(
            f"Layout has {len(row_strings)} rows\n"
            f"  Maximum: {size}"
        )

    rows = []
    for r in range(size):
        row_str = row_strings[r].replace(" ", "") if r < len(row_strings) else ""
        if len(row_str) % 2 != 0:
            raise ValueError(
                f"Dangling character in layout row {r}: \"{row_strings[r]}\"\n"
                f"  Every cell needs a type code and a rotation code"
            )
        if len(row_str) > 2 * size:
            raise ValueError(
                f"Layout row {r} has {len(row_str) // 2} cells: \"{row_strings[r]}\"\n"
                f"  Maximum: {size}"
            )

        row = []
        for c in range(size):
            code = row_str[2 * c:2 * c + 2] if 2 * c < len(row_str) else "X0"
            type_code, rot_code = code[0], code[1]
            if type_code == "_":
                type_code = EMPTY_CODE
            if type_code != EMPTY_CODE and type_code not in LAYOUT_CODES:
                raise ValueError(
                    f"Invalid type code '{type_code}' at row {r}, column {c}\n"
                    f"  Row {r}: \"{row_strings[r]}\"\n"
                    f"  Valid codes: {''.join(LAYOUT_CODES)}{EMPTY_CODE}_"
                )
            if type_code == EMPTY_CODE and rot_code == "_":
                rot_code = "0"
            if rot_code not in ROTATION_FROM_CODE:
                raise ValueError(
                    f"Invalid rotation code '{rot_code}' at row {r}, column {c}\n"
                    f"  Row {r}: \"{row_strings[r]}\"\n"
                    f"  Valid codes: 0 (0°), 9 (90°), 1 (180°), 2 (270°)"
                )
            row.append(_make_cell(r, c, type_code, ROTATION_FROM_CODE[rot_code], LAYOUT_CODES))
        rows.append(tuple(row))

    return Grid(tuple(rows))


def format_layout(grid: Grid) -> str:
    """Inverse of parse_layout: one line per row, cells separated by spaces."""
    lines = []
    for row in grid.cells:
        codes = []
        for cell in row:
            type_code = _type_code(cell, LAYOUT_CODES)
            if type_code == EMPTY_CODE and cell.orientation == 0:
                codes.append("__")
            else:
                codes.append(type_code + ROTATION_CODES[cell.orientation])
        lines.append(" ".join(codes))
    return "\n".join(lines)
