"""Tests for the tank model."""

from __future__ import annotations

from aquarium_arena.models import BuffedPiece, Piece, PlacedPiece, Side, Tank, empty_grid


class TestTank:
    """Tests for Tank queries."""

    def test_empty_tank(self) -> None:
        """Test an empty tank has base water quality and no occupants."""
        tank = Tank.empty(Side.PLAYER)

        assert tank.owner is Side.PLAYER
        assert tank.water_quality == 5
        assert tank.occupied_cells() == {}
        assert tank.grid == empty_grid()

    def test_grid_dimensions(self) -> None:
        """Test the grid is six rows of eight columns."""
        grid = empty_grid()
        assert len(grid) == 6
        assert all(len(row) == 8 for row in grid)

    def test_occupant_out_of_bounds(self) -> None:
        """Test off-grid cells have no occupant."""
        tank = Tank.empty(Side.PLAYER)
        assert tank.occupant((8, 0)) is None
        assert tank.occupant((-1, 2)) is None

    def test_placed_pieces_and_lookup(self, build_tank, make_piece) -> None:
        """Test unplaced pieces are held but not on the grid."""
        tank = build_tank([("java-fern", 0, 0)])
        loose = make_piece("neon-tetra")
        tank = tank.model_copy(update={"pieces": (*tank.pieces, loose)})

        assert [p.template.id for p in tank.placed_pieces] == ["java-fern"]
        assert tank.get(loose.instance_id) is loose
        assert len(tank.occupied_cells()) == 4

    def test_water_quality_tracks_contents(self, build_tank) -> None:
        """Test water quality is derived from the pieces, not stored."""
        tank = build_tank([("java-fern", 0, 0), ("sponge-filter", 4, 0)])
        assert tank.water_quality == 7

        trimmed = tank.model_copy(update={"pieces": tank.pieces[:1]})
        assert trimmed.water_quality == 6

    def test_variants_survive_validation(self, build_tank, make_piece) -> None:
        """Test the piece union dispatches on its kind tag."""
        tank = build_tank([("neon-tetra", 0, 0)])
        tank = tank.model_copy(update={"pieces": (*tank.pieces, make_piece("heater"))})

        restored = Tank.model_validate(tank.model_dump())

        assert isinstance(restored.pieces[0], PlacedPiece)
        assert not isinstance(restored.pieces[0], BuffedPiece)
        assert isinstance(restored.pieces[1], Piece)
