"""Grid placement for footprint-shaped pieces.

Every operation takes a ``Tank`` and returns a ``Tank``. A rejected
placement or move returns the input tank itself, so callers can detect a
no-op with ``is``. The grid never holds a partial footprint.
"""

from __future__ import annotations

from collections.abc import Iterable

from aquarium_arena.core.constants import GRID_HEIGHT, GRID_WIDTH
from aquarium_arena.core.logging import get_logger
from aquarium_arena.models.pieces import AnyPiece, Cell, PlacedPiece, Position, footprint_cells
from aquarium_arena.models.tank import GridRows, Tank


logger = get_logger(__name__)

ORTHOGONAL_STEPS: tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


# =============================================================================
# Cell Helpers
# =============================================================================


def in_bounds(cell: Cell) -> bool:
    """Check whether ``cell`` lies on the grid."""
    x, y = cell
    return 0 <= x < GRID_WIDTH and 0 <= y < GRID_HEIGHT


def adjacent_cells(cells: Iterable[Cell]) -> list[Cell]:
    """Get the adjacent set of a group of cells.

    The adjacent set is every in-bounds orthogonal neighbour of any cell in
    the group that is not itself in the group, deduplicated and sorted.
    """
    own = set(cells)
    neighbours: set[Cell] = set()
    for x, y in own:
        for dx, dy in ORTHOGONAL_STEPS:
            cell = (x + dx, y + dy)
            if cell not in own and in_bounds(cell):
                neighbours.add(cell)
    return sorted(neighbours)


def _write_cells(grid: GridRows, cells: Iterable[Cell], value: str | None) -> GridRows:
    rows = [list(row) for row in grid]
    for x, y in cells:
        rows[y][x] = value
    return tuple(tuple(row) for row in rows)


# =============================================================================
# Placement Operations
# =============================================================================


def can_place(piece: AnyPiece, position: Position, tank: Tank) -> bool:
    """Check whether ``piece`` fits at ``position``.

    Every footprint cell must be in bounds and either empty or already
    occupied by the same instance (which allows in-place move checks).

    Args:
        piece: Piece to place, in any variant.
        position: Candidate origin.
        tank: Tank to place into.

    Returns:
        True if the placement is valid.
    """
    for cell in footprint_cells(piece.template.footprint, position):
        if not in_bounds(cell):
            return False
        occupant = tank.occupant(cell)
        if occupant is not None and occupant != piece.instance_id:
            return False
    return True


def valid_positions(piece: AnyPiece, tank: Tank) -> list[Position]:
    """List every origin at which ``piece`` currently fits, row by row."""
    return [
        Position(x=x, y=y)
        for y in range(GRID_HEIGHT)
        for x in range(GRID_WIDTH)
        if can_place(piece, Position(x=x, y=y), tank)
    ]


def _write_piece(tank: Tank, piece: AnyPiece, position: Position) -> Tank:
    """Write ``piece`` at ``position``, clearing any cells it held before."""
    grid = tank.grid
    current = tank.get(piece.instance_id)
    if isinstance(current, PlacedPiece):
        grid = _write_cells(grid, current.cells, None)

    placed = piece.placed_at(position)
    grid = _write_cells(grid, placed.cells, placed.instance_id)

    if current is None:
        pieces = (*tank.pieces, placed)
    else:
        pieces = tuple(placed if p.instance_id == placed.instance_id else p for p in tank.pieces)
    return tank.model_copy(update={"pieces": pieces, "grid": grid})


def place(piece: AnyPiece, position: Position, tank: Tank) -> Tank:
    """Place ``piece`` on the grid at ``position``.

    A piece not yet in the tank is appended to it; a piece already in the
    tank keeps its place in the acquisition order.

    Args:
        piece: Piece to place.
        position: Target origin.
        tank: Tank to place into.

    Returns:
        The new tank, or ``tank`` unchanged if the placement is invalid.
    """
    if not can_place(piece, position, tank):
        logger.debug(
            "Placement rejected",
            piece_id=piece.instance_id,
            x=position.x,
            y=position.y,
        )
        return tank
    return _write_piece(tank, piece, position)


def move(instance_id: str, position: Position, tank: Tank) -> Tank:
    """Move an already placed piece to ``position``.

    The piece's own cells count as free for the check, so overlapping moves
    (e.g. a one-cell shift of a long piece) are allowed. An invalid target
    leaves the piece where it was.

    Returns:
        The new tank, or ``tank`` unchanged if the move is invalid.
    """
    piece = tank.get(instance_id)
    if not isinstance(piece, PlacedPiece):
        logger.debug("Move rejected: piece not on grid", piece_id=instance_id)
        return tank
    if not can_place(piece, position, tank):
        logger.debug("Move rejected", piece_id=instance_id, x=position.x, y=position.y)
        return tank
    return _write_piece(tank, piece, position)


def remove(instance_id: str, tank: Tank) -> Tank:
    """Clear a piece's cells and drop it from the tank.

    Returns:
        The new tank, or ``tank`` unchanged if no such piece exists.
    """
    piece = tank.get(instance_id)
    if piece is None:
        return tank
    grid = tank.grid
    if isinstance(piece, PlacedPiece):
        grid = _write_cells(grid, piece.cells, None)
    pieces = tuple(p for p in tank.pieces if p.instance_id != instance_id)
    return tank.model_copy(update={"pieces": pieces, "grid": grid})


__all__ = [
    "ORTHOGONAL_STEPS",
    "in_bounds",
    "adjacent_cells",
    "can_place",
    "valid_positions",
    "place",
    "move",
    "remove",
]
