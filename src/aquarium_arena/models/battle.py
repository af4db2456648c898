"""Pydantic V2 schemas for battle resolution snapshots.

A battle is a sequence of immutable ``BattleSnapshot`` values. Each
resolved round produces a new snapshot, so a presentation timer can pause
between rounds and resume from exactly the stored value.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from aquarium_arena.models.enums import BattleEventType, BattleOutcome, BattleStatus, Side


class Combatant(BaseModel):
    """A piece as it exists inside one battle.

    Attributes:
        instance_id: Instance id of the source piece.
        name: Display name.
        side: Side the combatant fights for.
        attack: Enhanced attack at battle start.
        speed: Enhanced speed at battle start.
        max_health: Enhanced max health at battle start.
        current_health: Remaining health.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    instance_id: str
    name: str
    side: Side
    attack: int = Field(ge=0)
    speed: int = Field(ge=0)
    max_health: int = Field(ge=0)
    current_health: int = Field(ge=0)

    @property
    def is_alive(self) -> bool:
        """Check whether the combatant still has health."""
        return self.current_health > 0

    def damaged(self, amount: int) -> "Combatant":
        """Return the combatant after taking ``amount`` damage (floored at 0)."""
        return self.model_copy(update={"current_health": max(0, self.current_health - amount)})


class BattleEvent(BaseModel):
    """An entry in the battle log.

    Attack events carry the attacker as ``source`` and the defender as
    ``target``. Status events carry the affected side as ``source`` and the
    total environmental damage as ``value``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: BattleEventType
    source: str
    target: str | None = None
    value: int = 0
    round: int = Field(ge=1)
    description: str = ""


class BattleSnapshot(BaseModel):
    """Complete state of a battle between two sides.

    Attributes:
        status: Idle, resolving, or concluded.
        round_number: Rounds resolved so far.
        round_cap: Round after which totals decide the battle.
        combatants: Every combatant of both sides, player side first.
        player_water_quality: Player tank water quality, fixed for the battle.
        opponent_water_quality: Opponent tank water quality, fixed for the battle.
        events: Ordered battle log.
        outcome: Result once concluded.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: BattleStatus = BattleStatus.IDLE
    round_number: int = Field(default=0, ge=0)
    round_cap: int = Field(ge=1)
    combatants: tuple[Combatant, ...] = ()
    player_water_quality: int = Field(ge=0, le=10)
    opponent_water_quality: int = Field(ge=0, le=10)
    events: tuple[BattleEvent, ...] = ()
    outcome: BattleOutcome | None = None

    @property
    def is_concluded(self) -> bool:
        return self.status is BattleStatus.CONCLUDED

    def water_quality(self, side: Side) -> int:
        """Water quality of ``side`` for this battle."""
        if side is Side.PLAYER:
            return self.player_water_quality
        return self.opponent_water_quality

    def side_combatants(self, side: Side) -> list[Combatant]:
        return [c for c in self.combatants if c.side is side]

    def living(self, side: Side) -> list[Combatant]:
        """Combatants of ``side`` that are still alive."""
        return [c for c in self.combatants if c.side is side and c.is_alive]

    def total_health(self, side: Side) -> int:
        """Sum of remaining health on ``side``."""
        return sum(c.current_health for c in self.combatants if c.side is side)

    def get(self, instance_id: str) -> Combatant | None:
        for combatant in self.combatants:
            if combatant.instance_id == instance_id:
                return combatant
        return None


__all__ = [
    "Combatant",
    "BattleEvent",
    "BattleSnapshot",
]
