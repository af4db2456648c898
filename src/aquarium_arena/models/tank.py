"""Tank model: one side's pieces and their grid occupancy."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from aquarium_arena.core.constants import GRID_HEIGHT, GRID_WIDTH
from aquarium_arena.models.enums import Side
from aquarium_arena.models.pieces import AnyPiece, Cell, PlacedPiece


GridRows = tuple[tuple[str | None, ...], ...]


def empty_grid() -> GridRows:
    """Build an unoccupied grid (rows of columns)."""
    return tuple(tuple(None for _ in range(GRID_WIDTH)) for _ in range(GRID_HEIGHT))


class Tank(BaseModel):
    """A side's collection of pieces.

    Attributes:
        owner: Side that owns the tank.
        pieces: Pieces in acquisition order, placed or not.
        grid: Row-major occupancy; each cell holds the occupying instance id.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    owner: Side
    pieces: tuple[AnyPiece, ...] = ()
    grid: GridRows = Field(default_factory=empty_grid)

    @classmethod
    def empty(cls, owner: Side) -> "Tank":
        """Create an empty tank for ``owner``."""
        return cls(owner=owner)

    @property
    def water_quality(self) -> int:
        """Water quality derived from the current contents (0-10)."""
        from aquarium_arena.engine.synergy import compute_water_quality

        return compute_water_quality(self.pieces)

    @property
    def placed_pieces(self) -> list[PlacedPiece]:
        """Pieces currently on the grid, in acquisition order."""
        return [p for p in self.pieces if isinstance(p, PlacedPiece)]

    def get(self, instance_id: str) -> AnyPiece | None:
        """Find a piece by instance id."""
        for piece in self.pieces:
            if piece.instance_id == instance_id:
                return piece
        return None

    def occupant(self, cell: Cell) -> str | None:
        """Get the instance id occupying ``cell``, if any."""
        x, y = cell
        if 0 <= x < GRID_WIDTH and 0 <= y < GRID_HEIGHT:
            return self.grid[y][x]
        return None

    def occupied_cells(self) -> dict[Cell, str]:
        """Map every occupied cell to its occupant."""
        return {
            (x, y): occupant
            for y, row in enumerate(self.grid)
            for x, occupant in enumerate(row)
            if occupant is not None
        }


__all__ = [
    "GridRows",
    "Tank",
    "empty_grid",
]
