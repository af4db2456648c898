"""Turn-based battle resolution.

A battle moves ``IDLE -> RESOLVING -> CONCLUDED``. ``BattleSimulator.step``
resolves exactly one round and returns a new snapshot, so a presentation
timer can call it repeatedly and resume from whatever snapshot it holds.
Given the same snapshot and random state, a step always produces the same
result.

Round order:
    1. Living combatants of both sides act in descending speed order
       (stable; player side first on ties).
    2. Each attacker hits a random living enemy for its attack scaled by
       its own side's water quality.
    3. Sides in poor water take environmental damage.
    4. A side with no living combatants loses; both empty is a draw.
    5. At the round cap, higher total remaining health wins.
"""

from __future__ import annotations

import random

from aquarium_arena.core.config import BattleSettings
from aquarium_arena.core.constants import TAG_AGGRESSIVE
from aquarium_arena.core.exceptions import BattleError
from aquarium_arena.core.logging import get_logger
from aquarium_arena.engine.synergy import compute_water_quality, enhanced_stats
from aquarium_arena.models.battle import BattleEvent, BattleSnapshot, Combatant
from aquarium_arena.models.enums import BattleEventType, BattleOutcome, BattleStatus, Side
from aquarium_arena.models.pieces import PlacedPiece
from aquarium_arena.models.tank import Tank


logger = get_logger(__name__)


def is_combat_eligible(piece: PlacedPiece) -> bool:
    """Check whether a placed piece fights: creatures and aggressive pieces do."""
    return piece.is_creature or piece.has_tag(TAG_AGGRESSIVE)


class BattleSimulator:
    """Resolve battles between two tanks.

    Example:
        >>> simulator = BattleSimulator()
        >>> snapshot = simulator.start(player_tank, opponent_tank)
        >>> final = simulator.resolve(snapshot, random.Random(1))
        >>> final.outcome
        <BattleOutcome.PLAYER_WIN: 'player_win'>
    """

    def __init__(self, settings: BattleSettings | None = None) -> None:
        """Initialize the simulator.

        Args:
            settings: Battle settings (round cap, water thresholds).
        """
        self.settings = settings or BattleSettings()

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def _combatants(self, tank: Tank, side: Side, amplify: bool) -> list[Combatant]:
        combatants = []
        for piece in tank.placed_pieces:
            if not is_combat_eligible(piece):
                continue
            stats = enhanced_stats(piece, tank, amplify=amplify)
            if stats.max_health <= 0:
                continue
            combatants.append(
                Combatant(
                    instance_id=piece.instance_id,
                    name=piece.name,
                    side=side,
                    attack=stats.attack,
                    speed=stats.speed,
                    max_health=stats.max_health,
                    current_health=stats.max_health,
                )
            )
        return combatants

    def start(
        self,
        player_tank: Tank,
        opponent_tank: Tank,
        *,
        amplify: bool = False,
    ) -> BattleSnapshot:
        """Snapshot both tanks into a battle ready to resolve.

        Consumables should already be resolved. Water quality of each side is
        fixed here for the whole battle. A side with no combatants decides
        the battle immediately.

        Args:
            player_tank: Player tank at battle start.
            opponent_tank: Opponent tank at battle start.
            amplify: Apply plant amplification to enhanced stats.

        Returns:
            A resolving snapshot, or a concluded one if a side cannot fight.
        """
        snapshot = BattleSnapshot(
            status=BattleStatus.RESOLVING,
            round_cap=self.settings.round_cap,
            combatants=(
                *self._combatants(player_tank, Side.PLAYER, amplify),
                *self._combatants(opponent_tank, Side.OPPONENT, amplify),
            ),
            player_water_quality=compute_water_quality(player_tank.pieces),
            opponent_water_quality=compute_water_quality(opponent_tank.pieces),
        )
        logger.info(
            "Battle started",
            player_combatants=len(snapshot.side_combatants(Side.PLAYER)),
            opponent_combatants=len(snapshot.side_combatants(Side.OPPONENT)),
            player_water_quality=snapshot.player_water_quality,
            opponent_water_quality=snapshot.opponent_water_quality,
        )
        outcome = self._elimination_outcome(snapshot.combatants)
        if outcome is not None:
            return self._conclude(snapshot, outcome)
        return snapshot

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def damage_percent(self, water_quality: int) -> int:
        """Damage percentage for a side with ``water_quality``."""
        s = self.settings
        if water_quality < s.low_water_threshold:
            return s.low_water_damage_percent
        if water_quality > s.high_water_threshold:
            return s.high_water_damage_percent
        return 100

    def attack_damage(self, attacker: Combatant, water_quality: int) -> int:
        """Damage of one attack, floored to an integer."""
        return attacker.attack * self.damage_percent(water_quality) // 100

    @staticmethod
    def environmental_damage(combatant: Combatant) -> int:
        """Poor-water damage: a tenth of max health, at least 1."""
        return max(1, combatant.max_health // 10)

    @staticmethod
    def turn_order(combatants: tuple[Combatant, ...]) -> list[str]:
        """Instance ids of living combatants by descending speed (stable)."""
        living = [c for c in combatants if c.is_alive]
        return [c.instance_id for c in sorted(living, key=lambda c: -c.speed)]

    @staticmethod
    def _elimination_outcome(combatants: tuple[Combatant, ...]) -> BattleOutcome | None:
        player_alive = any(c.is_alive for c in combatants if c.side is Side.PLAYER)
        opponent_alive = any(c.is_alive for c in combatants if c.side is Side.OPPONENT)
        if player_alive and opponent_alive:
            return None
        if player_alive:
            return BattleOutcome.PLAYER_WIN
        if opponent_alive:
            return BattleOutcome.OPPONENT_WIN
        return BattleOutcome.DRAW

    @staticmethod
    def _health_outcome(snapshot: BattleSnapshot) -> BattleOutcome:
        player = snapshot.total_health(Side.PLAYER)
        opponent = snapshot.total_health(Side.OPPONENT)
        if player > opponent:
            return BattleOutcome.PLAYER_WIN
        if opponent > player:
            return BattleOutcome.OPPONENT_WIN
        return BattleOutcome.DRAW

    @staticmethod
    def _conclude(snapshot: BattleSnapshot, outcome: BattleOutcome) -> BattleSnapshot:
        logger.info(
            "Battle concluded",
            outcome=outcome.value,
            rounds=snapshot.round_number,
            player_health=snapshot.total_health(Side.PLAYER),
            opponent_health=snapshot.total_health(Side.OPPONENT),
        )
        return snapshot.model_copy(update={"status": BattleStatus.CONCLUDED, "outcome": outcome})

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def step(self, snapshot: BattleSnapshot, rng: random.Random) -> BattleSnapshot:
        """Resolve one round.

        Args:
            snapshot: Snapshot left by ``start`` or the previous step.
            rng: Random source for target selection.

        Returns:
            The snapshot after the round, concluded if the battle ended.

        Raises:
            BattleError: If the battle is not resolving.
        """
        if snapshot.status is not BattleStatus.RESOLVING:
            raise BattleError(
                f"Cannot step a battle that is {snapshot.status.value}",
                round_number=snapshot.round_number,
            )

        round_number = snapshot.round_number + 1
        current = {c.instance_id: c for c in snapshot.combatants}
        order = list(current)
        events: list[BattleEvent] = []

        for attacker_id in self.turn_order(snapshot.combatants):
            attacker = current[attacker_id]
            if not attacker.is_alive:
                continue
            enemies = [
                current[i] for i in order
                if current[i].side is attacker.side.other and current[i].is_alive
            ]
            if not enemies:
                continue
            target = rng.choice(enemies)
            damage = self.attack_damage(attacker, snapshot.water_quality(attacker.side))
            current[target.instance_id] = target.damaged(damage)
            events.append(
                BattleEvent(
                    type=BattleEventType.ATTACK,
                    source=attacker.instance_id,
                    target=target.instance_id,
                    value=damage,
                    round=round_number,
                    description=f"{attacker.name} hits {target.name} for {damage}",
                )
            )

        for side in (Side.PLAYER, Side.OPPONENT):
            if snapshot.water_quality(side) >= self.settings.low_water_threshold:
                continue
            total = 0
            for combatant_id in order:
                combatant = current[combatant_id]
                if combatant.side is side and combatant.is_alive:
                    damage = self.environmental_damage(combatant)
                    current[combatant_id] = combatant.damaged(damage)
                    total += damage
            if total:
                events.append(
                    BattleEvent(
                        type=BattleEventType.STATUS,
                        source=side.value,
                        value=total,
                        round=round_number,
                        description=f"Poor water quality deals {total} damage to the {side.value} side",
                    )
                )

        combatants = tuple(current[i] for i in order)
        stepped = snapshot.model_copy(
            update={
                "round_number": round_number,
                "combatants": combatants,
                "events": (*snapshot.events, *events),
            }
        )
        logger.debug("Battle round resolved", round=round_number, events=len(events))

        outcome = self._elimination_outcome(combatants)
        if outcome is None and round_number >= snapshot.round_cap:
            outcome = self._health_outcome(stepped)
        if outcome is not None:
            return self._conclude(stepped, outcome)
        return stepped

    def resolve(self, snapshot: BattleSnapshot, rng: random.Random) -> BattleSnapshot:
        """Step until the battle concludes."""
        while snapshot.status is BattleStatus.RESOLVING:
            snapshot = self.step(snapshot, rng)
        return snapshot

    def simulate(
        self,
        player_tank: Tank,
        opponent_tank: Tank,
        rng: random.Random,
        *,
        amplify: bool = False,
    ) -> BattleSnapshot:
        """Run a whole battle between two tanks."""
        return self.resolve(self.start(player_tank, opponent_tank, amplify=amplify), rng)


__all__ = [
    "BattleSimulator",
    "is_combat_eligible",
]
