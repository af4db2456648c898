"""Tests for battle resolution."""

from __future__ import annotations

import random

import pytest

from aquarium_arena.core.config import BattleSettings
from aquarium_arena.core.exceptions import BattleError
from aquarium_arena.engine.battle import BattleSimulator, is_combat_eligible
from aquarium_arena.engine.grid import place
from aquarium_arena.models import (
    BattleEventType,
    BattleOutcome,
    BattleSnapshot,
    BattleStatus,
    Combatant,
    Piece,
    Position,
    Side,
    Tank,
)


def _combatant(
    instance_id: str,
    side: Side,
    *,
    attack: int = 0,
    health: int = 5,
    speed: int = 1,
) -> Combatant:
    return Combatant(
        instance_id=instance_id,
        name=instance_id,
        side=side,
        attack=attack,
        speed=speed,
        max_health=health,
        current_health=health,
    )


def _snapshot(*combatants: Combatant, player_wq: int = 5, opponent_wq: int = 5, cap: int = 10) -> BattleSnapshot:
    return BattleSnapshot(
        status=BattleStatus.RESOLVING,
        round_cap=cap,
        combatants=combatants,
        player_water_quality=player_wq,
        opponent_water_quality=opponent_wq,
    )


@pytest.fixture
def simulator() -> BattleSimulator:
    """Provide a simulator with default settings."""
    return BattleSimulator(BattleSettings())


class TestStart:
    """Tests for snapshotting tanks into a battle."""

    def test_combatants_use_enhanced_stats(self, simulator, build_tank) -> None:
        """Test combatants start at enhanced max health with fixed water quality."""
        player = build_tank([("java-fern", 0, 0), ("neon-tetra", 2, 0)])
        opponent = build_tank([("betta", 0, 0)], owner=Side.OPPONENT)

        snapshot = simulator.start(player, opponent)

        assert snapshot.status is BattleStatus.RESOLVING
        neon = snapshot.side_combatants(Side.PLAYER)
        assert len(neon) == 1
        assert (neon[0].attack, neon[0].max_health, neon[0].current_health) == (3, 4, 4)
        assert snapshot.player_water_quality == 6
        assert snapshot.opponent_water_quality == 5

    def test_flora_does_not_fight(self, simulator, build_tank) -> None:
        """Test a side with only plants concludes the battle at once."""
        player = build_tank([("java-fern", 0, 0), ("heater", 4, 4)])
        opponent = build_tank([("neon-tetra", 0, 0)], owner=Side.OPPONENT)

        snapshot = simulator.start(player, opponent)

        assert snapshot.is_concluded
        assert snapshot.outcome is BattleOutcome.OPPONENT_WIN
        assert snapshot.events == ()

    def test_both_empty_is_draw(self, simulator) -> None:
        """Test two empty tanks draw."""
        snapshot = simulator.start(Tank.empty(Side.PLAYER), Tank.empty(Side.OPPONENT))

        assert snapshot.outcome is BattleOutcome.DRAW

    def test_aggressive_apparatus_fights(self, simulator, catalog) -> None:
        """Test a non-creature tagged aggressive becomes a combatant."""
        heater = catalog.get("heater")
        angry = heater.model_copy(update={"tags": (*heater.tags, "aggressive")})
        origin = Position(x=0, y=0)
        player = place(Piece.from_template(angry, "angry-heater"), origin, Tank.empty(Side.PLAYER))
        calm = place(Piece.from_template(heater, "calm-heater"), origin, Tank.empty(Side.PLAYER))

        assert is_combat_eligible(player.pieces[0])
        assert not is_combat_eligible(calm.pieces[0])

        snapshot = simulator.start(player, Tank.empty(Side.OPPONENT))
        assert [c.instance_id for c in snapshot.combatants] == ["angry-heater"]
        assert snapshot.combatants[0].max_health == 3
        assert snapshot.outcome is BattleOutcome.PLAYER_WIN

        assert simulator.start(calm, Tank.empty(Side.OPPONENT)).combatants == ()


class TestRules:
    """Tests for damage and ordering rules."""

    def test_damage_scaling(self, simulator) -> None:
        """Test water quality scales damage and floors the result."""
        attacker = _combatant("a", Side.PLAYER, attack=5)

        assert simulator.attack_damage(attacker, 2) == 3
        assert simulator.attack_damage(attacker, 3) == 5
        assert simulator.attack_damage(attacker, 7) == 5
        assert simulator.attack_damage(attacker, 8) == 6

    def test_environmental_damage(self, simulator) -> None:
        """Test poor water deals a tenth of max health, at least one."""
        assert simulator.environmental_damage(_combatant("a", Side.PLAYER, health=3)) == 1
        assert simulator.environmental_damage(_combatant("b", Side.PLAYER, health=25)) == 2

    def test_turn_order_stable(self, simulator) -> None:
        """Test descending speed with ties kept in snapshot order."""
        combatants = (
            _combatant("p1", Side.PLAYER, speed=3),
            _combatant("p2", Side.PLAYER, speed=7),
            _combatant("o1", Side.OPPONENT, speed=3),
            _combatant("o2", Side.OPPONENT, speed=9, health=0),
        )

        assert simulator.turn_order(combatants) == ["p2", "p1", "o1"]


class TestStep:
    """Tests for round-by-round resolution."""

    def test_faster_side_eliminates_first(self, simulator) -> None:
        """Test a killed combatant does not act and the battle ends."""
        snapshot = _snapshot(
            _combatant("p", Side.PLAYER, attack=10, speed=5),
            _combatant("o", Side.OPPONENT, attack=4, health=3, speed=1),
        )

        result = simulator.step(snapshot, random.Random(0))

        assert result.outcome is BattleOutcome.PLAYER_WIN
        assert result.round_number == 1
        assert [(e.source, e.target, e.value) for e in result.events] == [("p", "o", 10)]
        assert result.get("p").current_health == 5

    def test_poor_water_status_event(self, simulator) -> None:
        """Test poor water hurts every living combatant of that side."""
        snapshot = _snapshot(
            _combatant("p1", Side.PLAYER),
            _combatant("p2", Side.PLAYER, health=20),
            _combatant("o", Side.OPPONENT),
            player_wq=2,
        )

        result = simulator.step(snapshot, random.Random(0))

        status = [e for e in result.events if e.type is BattleEventType.STATUS]
        assert len(status) == 1
        assert (status[0].source, status[0].value, status[0].round) == ("player", 3, 1)
        assert result.get("p1").current_health == 4
        assert result.get("p2").current_health == 18
        assert result.get("o").current_health == 5

    def test_simultaneous_wipe_is_draw(self, simulator) -> None:
        """Test both sides dying in the same round is a draw."""
        snapshot = _snapshot(
            _combatant("p", Side.PLAYER, health=1),
            _combatant("o", Side.OPPONENT, health=1),
            player_wq=0,
            opponent_wq=1,
        )

        assert simulator.step(snapshot, random.Random(0)).outcome is BattleOutcome.DRAW

    def test_round_cap_decides_by_health(self) -> None:
        """Test reaching the cap awards the side with more health left."""
        simulator = BattleSimulator(BattleSettings(round_cap=2))
        snapshot = _snapshot(
            _combatant("p", Side.PLAYER, health=5),
            _combatant("o", Side.OPPONENT, health=3),
            cap=2,
        )

        first = simulator.step(snapshot, random.Random(0))
        assert first.status is BattleStatus.RESOLVING

        final = simulator.step(first, random.Random(0))
        assert final.round_number == 2
        assert final.outcome is BattleOutcome.PLAYER_WIN

    def test_round_cap_equal_health_draws(self, simulator) -> None:
        """Test equal totals at the cap are a draw."""
        snapshot = _snapshot(
            _combatant("p", Side.PLAYER, health=4),
            _combatant("o", Side.OPPONENT, health=4),
            cap=1,
        )

        assert simulator.step(snapshot, random.Random(0)).outcome is BattleOutcome.DRAW

    def test_step_after_conclusion(self, simulator) -> None:
        """Test stepping a concluded battle is a driver error."""
        concluded = _snapshot(_combatant("p", Side.PLAYER)).model_copy(
            update={"status": BattleStatus.CONCLUDED, "outcome": BattleOutcome.PLAYER_WIN}
        )

        with pytest.raises(BattleError):
            simulator.step(concluded, random.Random(0))

    def test_step_does_not_mutate_input(self, simulator) -> None:
        """Test a step can be retried from the stored snapshot."""
        snapshot = _snapshot(
            _combatant("p", Side.PLAYER, attack=1, health=9),
            _combatant("o", Side.OPPONENT, attack=1, health=9),
        )

        first = simulator.step(snapshot, random.Random(4))
        again = simulator.step(snapshot, random.Random(4))

        assert first == again
        assert snapshot.round_number == 0


class TestResolve:
    """Tests for whole battles."""

    def _tanks(self, build_tank) -> tuple[Tank, Tank]:
        player = build_tank(
            [("neon-tetra", 0, 0), ("neon-tetra", 1, 0), ("java-fern", 0, 1), ("betta", 3, 0)]
        )
        opponent = build_tank(
            [("pike-cichlid", 0, 0), ("bristlenose-pleco", 0, 2), ("cardinal-tetra", 5, 5)],
            owner=Side.OPPONENT,
        )
        return player, opponent

    def test_deterministic(self, simulator, build_tank) -> None:
        """Test identical inputs and seeds give identical logs and outcomes."""
        player, opponent = self._tanks(build_tank)

        first = simulator.simulate(player, opponent, random.Random(2024))
        second = simulator.simulate(player, opponent, random.Random(2024))

        assert first.is_concluded
        assert first.events == second.events
        assert first.outcome is second.outcome

    def test_terminates_within_cap(self, simulator, build_tank) -> None:
        """Test every battle ends by the round cap."""
        player, opponent = self._tanks(build_tank)

        for seed in range(10):
            result = simulator.simulate(player, opponent, random.Random(seed))
            assert result.is_concluded
            assert 1 <= result.round_number <= 10
            if result.outcome is BattleOutcome.DRAW and result.living(Side.PLAYER):
                assert result.total_health(Side.PLAYER) == result.total_health(Side.OPPONENT)
