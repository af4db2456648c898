"""Gold transaction ledger.

The ledger is append-only: a side's balance is always the running sum of
its recorded transactions, so it cannot drift from the history.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from aquarium_arena.core.exceptions import InsufficientGoldError
from aquarium_arena.models.enums import Side, TransactionType


class Transaction(BaseModel):
    """A single gold movement.

    Attributes:
        id: Unique transaction identifier.
        side: Side whose balance changed.
        type: Kind of movement.
        amount: Signed gold delta.
        round: Campaign round in which it happened.
        timestamp: Wall-clock time of recording.
        description: Human-readable description.
        piece_id: Instance id of the piece involved, if any.
        piece_name: Display name of the piece involved, if any.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    side: Side
    type: TransactionType
    amount: int
    round: int = Field(ge=1)
    timestamp: datetime = Field(default_factory=datetime.now)
    description: str = ""
    piece_id: str | None = None
    piece_name: str | None = None


class GoldSummary(BaseModel):
    """Totals of a side's gold movements by kind."""

    model_config = ConfigDict(frozen=True)

    spent_on_purchases: int = 0
    spent_on_rerolls: int = 0
    earned_from_sales: int = 0
    earned_from_battles: int = 0
    earned_from_interest: int = 0
    earned_from_loss_streaks: int = 0
    starting_gold: int = 0


class Ledger(BaseModel):
    """Append-only transaction history for both sides."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    transactions: tuple[Transaction, ...] = ()

    def balance(self, side: Side) -> int:
        """Current gold of ``side``."""
        return sum(t.amount for t in self.transactions if t.side is side)

    def can_afford(self, side: Side, cost: int) -> bool:
        """Check whether ``side`` holds at least ``cost`` gold."""
        return self.balance(side) >= cost

    def history(self, side: Side) -> list[Transaction]:
        """Transactions of ``side`` in recording order."""
        return [t for t in self.transactions if t.side is side]

    def record(
        self,
        side: Side,
        type: TransactionType,
        amount: int,
        *,
        round: int,
        description: str = "",
        piece_id: str | None = None,
        piece_name: str | None = None,
    ) -> "Ledger":
        """Append a transaction and return the new ledger.

        Args:
            side: Side whose balance changes.
            type: Kind of movement.
            amount: Signed gold delta.
            round: Current campaign round.
            description: Human-readable description.
            piece_id: Instance id of the piece involved.
            piece_name: Display name of the piece involved.

        Returns:
            A new ledger with the transaction appended.

        Raises:
            InsufficientGoldError: If the transaction would make the balance negative.
        """
        available = self.balance(side)
        if available + amount < 0:
            raise InsufficientGoldError(
                f"{side} cannot pay {-amount} gold",
                required=-amount,
                available=available,
            )
        transaction = Transaction(
            side=side,
            type=type,
            amount=amount,
            round=round,
            description=description,
            piece_id=piece_id,
            piece_name=piece_name,
        )
        return Ledger(transactions=(*self.transactions, transaction))

    def summary(self, side: Side) -> GoldSummary:
        """Total a side's gold movements by kind."""
        totals: dict[TransactionType, int] = {}
        for transaction in self.history(side):
            totals[transaction.type] = totals.get(transaction.type, 0) + transaction.amount
        return GoldSummary(
            spent_on_purchases=-totals.get(TransactionType.PURCHASE, 0),
            spent_on_rerolls=-totals.get(TransactionType.REROLL, 0),
            earned_from_sales=totals.get(TransactionType.SALE, 0),
            earned_from_battles=totals.get(TransactionType.BATTLE_REWARD, 0),
            earned_from_interest=totals.get(TransactionType.INTEREST, 0),
            earned_from_loss_streaks=totals.get(TransactionType.LOSS_STREAK_BONUS, 0),
            starting_gold=totals.get(TransactionType.ROUND_START, 0),
        )


__all__ = [
    "Transaction",
    "GoldSummary",
    "Ledger",
]
