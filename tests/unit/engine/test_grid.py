"""Tests for grid placement."""

from __future__ import annotations

import random

from aquarium_arena.engine.grid import (
    adjacent_cells,
    can_place,
    move,
    place,
    remove,
    valid_positions,
)
from aquarium_arena.models import PlacedPiece, Position, Side, Tank


def _expected_cells(tank: Tank) -> dict[tuple[int, int], str]:
    cells: dict[tuple[int, int], str] = {}
    for piece in tank.placed_pieces:
        for cell in piece.cells:
            assert cell not in cells, f"overlap at {cell}"
            cells[cell] = piece.instance_id
    return cells


class TestAdjacentCells:
    """Tests for the adjacent set."""

    def test_excludes_own_cells(self) -> None:
        """Test a 2x2 block in the corner touches four in-bounds cells."""
        cells = [(0, 0), (1, 0), (0, 1), (1, 1)]

        assert adjacent_cells(cells) == [(0, 2), (1, 2), (2, 0), (2, 1)]

    def test_single_cell_in_middle(self) -> None:
        """Test a lone cell has four neighbours."""
        assert adjacent_cells([(3, 3)]) == [(2, 3), (3, 2), (3, 4), (4, 3)]


class TestCanPlace:
    """Tests for placement validation."""

    def test_in_bounds(self, make_piece) -> None:
        """Test a footprint fitting the grid is accepted."""
        tank = Tank.empty(Side.PLAYER)
        assert can_place(make_piece("pike-cichlid"), Position(x=5, y=5), tank)

    def test_out_of_bounds(self, make_piece) -> None:
        """Test a footprint hanging off the grid is rejected."""
        tank = Tank.empty(Side.PLAYER)
        pike = make_piece("pike-cichlid")

        assert not can_place(pike, Position(x=6, y=0), tank)
        assert not can_place(make_piece("betta"), Position(x=0, y=5), tank)
        assert not can_place(pike, Position(x=-1, y=0), tank)

    def test_overlap(self, build_tank, make_piece) -> None:
        """Test overlapping another piece is rejected."""
        tank = build_tank([("java-fern", 0, 0)])
        assert not can_place(make_piece("neon-tetra"), Position(x=1, y=1), tank)
        assert can_place(make_piece("neon-tetra"), Position(x=2, y=1), tank)

    def test_own_cells_count_as_free(self, build_tank) -> None:
        """Test a piece may overlap its own current cells."""
        tank = build_tank([("pike-cichlid", 0, 0)])
        pike = tank.placed_pieces[0]

        assert can_place(pike, Position(x=1, y=0), tank)

    def test_valid_positions(self, make_piece) -> None:
        """Test every origin on an empty grid fits a one-cell piece."""
        tank = Tank.empty(Side.PLAYER)

        assert len(valid_positions(make_piece("neon-tetra"), tank)) == 48
        assert len(valid_positions(make_piece("java-fern"), tank)) == 7 * 5


class TestPlace:
    """Tests for place."""

    def test_writes_every_cell(self, make_piece) -> None:
        """Test placing marks all footprint cells and records the position."""
        angelfish = make_piece("angelfish")
        tank = place(angelfish, Position(x=3, y=2), Tank.empty(Side.PLAYER))

        placed = tank.get(angelfish.instance_id)
        assert isinstance(placed, PlacedPiece)
        assert placed.position == Position(x=3, y=2)
        assert tank.occupied_cells() == {
            (3, 2): angelfish.instance_id,
            (3, 3): angelfish.instance_id,
            (4, 2): angelfish.instance_id,
        }

    def test_owned_piece_keeps_order(self, make_piece) -> None:
        """Test placing an owned piece replaces it in place."""
        first, second = make_piece("neon-tetra"), make_piece("heater")
        tank = Tank.empty(Side.PLAYER).model_copy(update={"pieces": (first, second)})

        tank = place(first, Position(x=0, y=0), tank)

        assert [p.instance_id for p in tank.pieces] == [first.instance_id, second.instance_id]
        assert tank.pieces[0].kind == "placed"

    def test_rejection_returns_same_tank(self, build_tank, make_piece) -> None:
        """Test an invalid placement leaves no partial writes."""
        tank = build_tank([("neon-tetra", 7, 5)])

        result = place(make_piece("pike-cichlid"), Position(x=5, y=5), tank)

        assert result is tank
        assert len(result.occupied_cells()) == 1


class TestMoveAndRemove:
    """Tests for move and remove."""

    def test_overlapping_shift(self, build_tank) -> None:
        """Test a long piece can shift by one onto its own cells."""
        tank = build_tank([("pike-cichlid", 0, 0)])
        pike_id = tank.placed_pieces[0].instance_id

        moved = move(pike_id, Position(x=1, y=0), tank)

        assert set(moved.occupied_cells()) == {(1, 0), (2, 0), (3, 0)}
        assert moved.occupant((0, 0)) is None

    def test_invalid_move_reverts(self, build_tank) -> None:
        """Test an invalid move leaves the piece where it was."""
        tank = build_tank([("betta", 0, 0), ("java-fern", 2, 0)])
        betta_id = tank.occupant((0, 0))

        result = move(betta_id, Position(x=2, y=1), tank)

        assert result is tank
        assert result.get(betta_id).position == Position(x=0, y=0)

    def test_move_unplaced_rejected(self, make_piece) -> None:
        """Test only placed pieces can move."""
        loose = make_piece("neon-tetra")
        tank = Tank.empty(Side.PLAYER).model_copy(update={"pieces": (loose,)})

        assert move(loose.instance_id, Position(x=0, y=0), tank) is tank

    def test_remove_clears_cells(self, build_tank) -> None:
        """Test removal frees the footprint and drops the piece."""
        tank = build_tank([("java-fern", 0, 0), ("neon-tetra", 4, 4)])
        fern_id = tank.occupant((0, 0))

        tank = remove(fern_id, tank)

        assert tank.get(fern_id) is None
        assert set(tank.occupied_cells()) == {(4, 4)}

    def test_remove_unknown(self) -> None:
        """Test removing an unknown id is a no-op."""
        tank = Tank.empty(Side.PLAYER)
        assert remove("ghost", tank) is tank


class TestOccupancyInvariant:
    """Property test: occupancy always equals the union of placed footprints."""

    def test_random_operation_sequence(self, make_piece, catalog) -> None:
        """Test occupancy after a long random sequence of operations."""
        rng = random.Random(99)
        template_ids = [t.id for t in catalog]
        tank = Tank.empty(Side.PLAYER)

        for _ in range(300):
            action = rng.random()
            position = Position(x=rng.randrange(-1, 9), y=rng.randrange(-1, 7))
            placed = tank.placed_pieces
            if action < 0.5 or not placed:
                tank = place(make_piece(rng.choice(template_ids)), position, tank)
            elif action < 0.8:
                tank = move(rng.choice(placed).instance_id, position, tank)
            else:
                tank = remove(rng.choice(placed).instance_id, tank)

            assert tank.occupied_cells() == _expected_cells(tank)
