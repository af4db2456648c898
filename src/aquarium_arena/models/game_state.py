"""Game state snapshot for a campaign.

``GameState`` is an immutable value. Every command on the orchestrator
returns a new snapshot (or the same one when the command is rejected);
nothing mutates a snapshot in place.

Models:
    SideState: One side's tank, shop, streak and tallies.
    GameState: The whole campaign at one moment.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from aquarium_arena.models.battle import BattleSnapshot
from aquarium_arena.models.economy import Ledger, Transaction
from aquarium_arena.models.enums import GamePhase, Side
from aquarium_arena.models.pieces import Piece
from aquarium_arena.models.tank import Tank


ShopSlots = tuple[Piece | None, ...]


class SideState(BaseModel):
    """Per-side campaign state.

    Attributes:
        side: Which side this is.
        tank: The side's tank.
        shop: Shop slots; an empty slot is None.
        loss_streak: Consecutive non-draw losses.
        wins: Battles won.
        losses: Battles lost.
        draws: Battles drawn.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    side: Side
    tank: Tank
    shop: ShopSlots = ()
    loss_streak: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    draws: int = Field(default=0, ge=0)

    def shop_index(self, instance_id: str) -> int | None:
        """Find the shop slot holding ``instance_id``."""
        for index, slot in enumerate(self.shop):
            if slot is not None and slot.instance_id == instance_id:
                return index
        return None


class GameState(BaseModel):
    """The complete campaign state at one moment.

    Attributes:
        round: Current campaign round (1-based).
        phase: Shopping or battle.
        player: Human side.
        opponent: Computer side.
        ledger: Full transaction history of both sides.
        locked_shop_index: Player shop slot kept across rerolls, if any.
        rerolls_this_round: Player rerolls taken this round.
        selected_piece_id: Piece the presentation layer has selected.
        battle: Battle in progress or awaiting completion.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    round: int = Field(default=1, ge=1)
    phase: GamePhase = GamePhase.SHOPPING
    player: SideState
    opponent: SideState
    ledger: Ledger = Field(default_factory=Ledger)
    locked_shop_index: int | None = None
    rerolls_this_round: int = Field(default=0, ge=0)
    selected_piece_id: str | None = None
    battle: BattleSnapshot | None = None

    @property
    def gold(self) -> int:
        """Player gold."""
        return self.ledger.balance(Side.PLAYER)

    @property
    def opponent_gold(self) -> int:
        """Opponent gold."""
        return self.ledger.balance(Side.OPPONENT)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self.ledger.transactions

    def side(self, side: Side) -> SideState:
        """Get the state of ``side``."""
        return self.player if side is Side.PLAYER else self.opponent

    def gold_of(self, side: Side) -> int:
        return self.ledger.balance(side)

    def with_side(self, state: SideState) -> "GameState":
        """Return a snapshot with one side replaced."""
        field_name = "player" if state.side is Side.PLAYER else "opponent"
        return self.model_copy(update={field_name: state})


__all__ = [
    "ShopSlots",
    "SideState",
    "GameState",
]
