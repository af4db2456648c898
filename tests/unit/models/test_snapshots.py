"""Tests for battle and game state snapshots."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from aquarium_arena.models import (
    BattleOutcome,
    BattleSnapshot,
    Combatant,
    GamePhase,
    GameState,
    Ledger,
    Side,
    SideState,
    Tank,
    TransactionType,
)


def _combatant(instance_id: str, side: Side, health: int) -> Combatant:
    return Combatant(
        instance_id=instance_id,
        name=instance_id,
        side=side,
        attack=2,
        speed=3,
        max_health=5,
        current_health=health,
    )


class TestCombatant:
    """Tests for Combatant."""

    def test_damage_floors_at_zero(self) -> None:
        """Test damage never takes health below zero."""
        hurt = _combatant("a", Side.PLAYER, 3).damaged(10)

        assert hurt.current_health == 0
        assert not hurt.is_alive


class TestBattleSnapshot:
    """Tests for BattleSnapshot queries."""

    def test_side_queries(self) -> None:
        """Test per-side living lists and totals."""
        snapshot = BattleSnapshot(
            round_cap=10,
            combatants=(
                _combatant("a", Side.PLAYER, 4),
                _combatant("b", Side.PLAYER, 0),
                _combatant("c", Side.OPPONENT, 5),
            ),
            player_water_quality=2,
            opponent_water_quality=8,
        )

        assert [c.instance_id for c in snapshot.living(Side.PLAYER)] == ["a"]
        assert snapshot.total_health(Side.PLAYER) == 4
        assert snapshot.water_quality(Side.OPPONENT) == 8
        assert snapshot.get("c").side is Side.OPPONENT
        assert not snapshot.is_concluded

    def test_water_quality_bounds(self) -> None:
        """Test water quality must stay within 0-10."""
        with pytest.raises(ValidationError):
            BattleSnapshot(round_cap=10, player_water_quality=11, opponent_water_quality=5)


class TestBattleOutcome:
    """Tests for outcome helpers."""

    def test_winner(self) -> None:
        """Test winners by outcome."""
        assert BattleOutcome.PLAYER_WIN.winner() is Side.PLAYER
        assert BattleOutcome.OPPONENT_WIN.winner() is Side.OPPONENT
        assert BattleOutcome.DRAW.winner() is None
        assert BattleOutcome.win_for(Side.OPPONENT) is BattleOutcome.OPPONENT_WIN


class TestGameState:
    """Tests for the campaign snapshot."""

    def _state(self) -> GameState:
        ledger = Ledger().record(Side.PLAYER, TransactionType.ROUND_START, 10, round=1)
        ledger = ledger.record(Side.OPPONENT, TransactionType.ROUND_START, 12, round=1)
        return GameState(
            player=SideState(side=Side.PLAYER, tank=Tank.empty(Side.PLAYER)),
            opponent=SideState(side=Side.OPPONENT, tank=Tank.empty(Side.OPPONENT)),
            ledger=ledger,
        )

    def test_defaults(self) -> None:
        """Test a new campaign starts shopping in round one."""
        state = self._state()

        assert state.round == 1
        assert state.phase is GamePhase.SHOPPING
        assert state.locked_shop_index is None
        assert state.battle is None

    def test_gold_from_ledger(self) -> None:
        """Test both balances are derived from the ledger."""
        state = self._state()

        assert state.gold == 10
        assert state.opponent_gold == 12
        assert state.gold_of(Side.OPPONENT) == 12

    def test_with_side(self) -> None:
        """Test replacing one side leaves the other untouched."""
        state = self._state()
        updated = state.with_side(state.opponent.model_copy(update={"wins": 2}))

        assert updated.opponent.wins == 2
        assert updated.player is state.player
        assert state.opponent.wins == 0

    def test_json_round_trip(self, build_tank) -> None:
        """Test a snapshot with derived gold reloads from its own JSON."""
        state = self._state()
        player = state.player.model_copy(update={"tank": build_tank([("neon-tetra", 1, 1)])})
        state = state.with_side(player)

        restored = GameState.model_validate_json(state.model_dump_json())

        assert restored == state
        assert restored.gold == 10
        assert restored.player.tank.water_quality == 5
