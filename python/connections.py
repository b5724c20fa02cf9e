"""
Connection model: which edges of a tile carry power.

Ports are reported as a 4-tuple of booleans indexed [N, E, S, W].
"""

from __future__ import annotations

from grid_types import DIRECTIONS, Cell, Direction, NodeKind, PipeShape, TileCategory

__all__ = ["Ports", "are_connected", "cell_connections", "connections", "ports"]

Ports = tuple[bool, bool, bool, bool]

NO_PORTS: Ports = (False, False, False, False)

# Ports at orientation 0
_PIPE_PORTS: dict[PipeShape, Ports] = {
    PipeShape.STRAIGHT: (True, False, True, False),  # N-S
    PipeShape.CORNER: (True, True, False, False),  # N-E
    PipeShape.TEE: (True, True, False, True),  # N-E-W
    PipeShape.CROSS: (True, True, True, True),
    PipeShape.NONE: NO_PORTS,
}

# Sources and sinks have a single port, facing north before rotation
_NODE_PORTS: dict[NodeKind, Ports] = {
    NodeKind.SOURCE: (True, False, False, False),
    NodeKind.SINK: (True, False, False, False),
    NodeKind.DEAD_END: NO_PORTS,
}


def connections(
    shape: PipeShape,
    category: TileCategory,
    node_kind: NodeKind | None,
    orientation: int,
) -> Ports:
    """
    Ports of a tile after rotating it clockwise by orientation degrees.

    A base port at index i ends up at index (i + orientation // 90) % 4, so a
    STRAIGHT pipe at 90° runs E-W and a CORNER at 90° joins E and S.

    Never fails: combinations that make no sense (a NODE without a kind, a
    BLOCKER with a shape) simply have no ports.
    """
    if category == TileCategory.PIPE:
        base = _PIPE_PORTS.get(shape, NO_PORTS)
    elif category == TileCategory.NODE and node_kind is not None:
        base = _NODE_PORTS.get(node_kind, NO_PORTS)
    else:
        base = NO_PORTS

    steps = (orientation // 90) % 4
    rotated = [False, False, False, False]
    for i, has_port in enumerate(base):
        if has_port:
            rotated[(i + steps) % 4] = True
    return (rotated[0], rotated[1], rotated[2], rotated[3])


def cell_connections(cell: Cell) -> Ports:
    return connections(cell.shape, cell.category, cell.node_kind, cell.orientation)


def ports(cell: Cell) -> frozenset[Direction]:
    """The set of directions a cell conducts through."""
    conns = cell_connections(cell)
    return frozenset(d for d in DIRECTIONS if conns[d.index])


def are_connected(from_cell: Cell, to_cell: Cell, direction: Direction) -> bool:
    """
    True if power can cross the edge between two neighbouring cells.

    direction points from from_cell to to_cell. Both sides need a port on
    the shared edge.
    """
    return (
        cell_connections(from_cell)[direction.index]
        and cell_connections(to_cell)[direction.opposite.index]
    )
