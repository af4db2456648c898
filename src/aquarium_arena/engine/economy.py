"""Economy rules: costs, refunds, rewards and interest.

The numbers come from ``EconomySettings``; the ledger itself lives in
``aquarium_arena.models.economy``. Every gold movement goes through
``Ledger.record`` so balances stay derivable from history.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from aquarium_arena.core.config import EconomySettings
from aquarium_arena.core.logging import get_logger
from aquarium_arena.models.economy import Ledger
from aquarium_arena.models.enums import BattleOutcome, Side, TransactionType


logger = get_logger(__name__)


@dataclass(frozen=True)
class BattleSettlement:
    """Gold and streak changes of one side after a battle.

    Attributes:
        side: Side being settled.
        reward: Base battle reward.
        streak_bonus: Loss-streak catch-up bonus.
        interest: Interest on the post-reward balance.
        loss_streak: Streak after this battle.
    """

    side: Side
    reward: int
    streak_bonus: int
    interest: int
    loss_streak: int

    @property
    def total(self) -> int:
        return self.reward + self.streak_bonus + self.interest


class EconomyRules:
    """Gold formulas parameterized by economy settings."""

    def __init__(self, settings: EconomySettings | None = None) -> None:
        self.settings = settings or EconomySettings()

    def reroll_cost(self, rerolls_taken: int) -> int:
        """Cost of the next reroll after ``rerolls_taken`` this round.

        The first rerolls cost the base price; each one after that costs one
        more than the last (2, 2, 2, 2, 2, 3, 4, 5, ... with defaults).
        """
        s = self.settings
        if rerolls_taken < s.flat_reroll_count:
            return s.base_reroll_cost
        return s.base_reroll_cost + (rerolls_taken - s.flat_reroll_count + 1)

    def sale_value(self, cost: int) -> int:
        """Refund for selling a piece bought at ``cost``; bonuses never count."""
        return math.floor(cost * self.settings.sale_ratio)

    def battle_reward(self, outcome: BattleOutcome, side: Side, round_number: int) -> int:
        """Base reward for ``side`` after a battle in ``round_number``."""
        s = self.settings
        if outcome is BattleOutcome.DRAW:
            return s.draw_base_reward + round_number // 2
        if outcome.winner() is side:
            return s.win_base_reward + round_number
        return s.loss_reward

    def next_loss_streak(self, outcome: BattleOutcome, side: Side, loss_streak: int) -> int:
        """Streak after the battle: +1 on a loss, reset on a win or draw."""
        winner = outcome.winner()
        if winner is not None and winner is not side:
            return loss_streak + 1
        return 0

    def loss_streak_bonus(self, loss_streak: int) -> int:
        """Catch-up gold for a side on a loss streak."""
        if loss_streak < 1:
            return 0
        s = self.settings
        return min(s.loss_streak_bonus_per_loss * loss_streak, s.loss_streak_bonus_cap)

    def interest(self, gold: int) -> int:
        """Interest earned on holding ``gold`` (47 -> 4, 52 -> 5, 58 -> 5)."""
        s = self.settings
        return min(max(gold, 0) // s.interest_divisor, s.interest_cap)

    def next_interest(self, gold: int) -> int:
        """Preview interest for display."""
        return self.interest(gold)

    def settle_battle(
        self,
        ledger: Ledger,
        side: Side,
        outcome: BattleOutcome,
        *,
        loss_streak: int,
        round_number: int,
    ) -> tuple[Ledger, BattleSettlement]:
        """Record reward, streak bonus and interest for one side.

        Interest is computed on the balance after the reward and bonus.

        Returns:
            The new ledger and a summary of what was paid.
        """
        reward = self.battle_reward(outcome, side, round_number)
        streak = self.next_loss_streak(outcome, side, loss_streak)
        bonus = self.loss_streak_bonus(streak)

        ledger = ledger.record(
            side,
            TransactionType.BATTLE_REWARD,
            reward,
            round=round_number,
            description=f"Battle reward ({outcome.value})",
        )
        if bonus:
            ledger = ledger.record(
                side,
                TransactionType.LOSS_STREAK_BONUS,
                bonus,
                round=round_number,
                description=f"Loss streak bonus ({streak} in a row)",
            )
        interest = self.interest(ledger.balance(side))
        if interest:
            ledger = ledger.record(
                side,
                TransactionType.INTEREST,
                interest,
                round=round_number,
                description=f"Interest on {ledger.balance(side)} gold",
            )

        settlement = BattleSettlement(
            side=side,
            reward=reward,
            streak_bonus=bonus,
            interest=interest,
            loss_streak=streak,
        )
        logger.info(
            "Battle settled",
            side=side.value,
            outcome=outcome.value,
            reward=reward,
            streak_bonus=bonus,
            interest=interest,
            gold=ledger.balance(side),
        )
        return ledger, settlement


__all__ = [
    "BattleSettlement",
    "EconomyRules",
]
