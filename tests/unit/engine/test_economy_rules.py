"""Tests for economy rules."""

from __future__ import annotations

import pytest

from aquarium_arena.core.config import EconomySettings
from aquarium_arena.engine.economy import EconomyRules
from aquarium_arena.models import BattleOutcome, Ledger, Side, TransactionType


@pytest.fixture
def rules() -> EconomyRules:
    """Provide economy rules with default settings."""
    return EconomyRules(EconomySettings())


def _ledger(gold: int) -> Ledger:
    return Ledger().record(Side.PLAYER, TransactionType.ROUND_START, gold, round=1)


class TestCosts:
    """Tests for reroll cost and sale value."""

    def test_reroll_cost_sequence(self, rules: EconomyRules) -> None:
        """Test reroll costs 2,2,2,2,2,3,4,5 for rerolls 1..8."""
        assert [rules.reroll_cost(taken) for taken in range(8)] == [2, 2, 2, 2, 2, 3, 4, 5]

    @pytest.mark.parametrize(("cost", "value"), [(6, 4), (3, 2), (2, 1), (8, 6), (0, 0)])
    def test_sale_value(self, rules: EconomyRules, cost: int, value: int) -> None:
        """Test sale value is floor(0.75 x cost)."""
        assert rules.sale_value(cost) == value


class TestRewards:
    """Tests for battle rewards and loss streaks."""

    def test_win_loss_draw(self, rules: EconomyRules) -> None:
        """Test base rewards by outcome."""
        assert rules.battle_reward(BattleOutcome.PLAYER_WIN, Side.PLAYER, 4) == 9
        assert rules.battle_reward(BattleOutcome.PLAYER_WIN, Side.OPPONENT, 4) == 3
        assert rules.battle_reward(BattleOutcome.DRAW, Side.PLAYER, 5) == 6
        assert rules.battle_reward(BattleOutcome.DRAW, Side.OPPONENT, 5) == 6

    def test_streak_bookkeeping(self, rules: EconomyRules) -> None:
        """Test streaks grow on losses and reset on wins and draws."""
        assert rules.next_loss_streak(BattleOutcome.OPPONENT_WIN, Side.PLAYER, 2) == 3
        assert rules.next_loss_streak(BattleOutcome.PLAYER_WIN, Side.PLAYER, 2) == 0
        assert rules.next_loss_streak(BattleOutcome.DRAW, Side.PLAYER, 2) == 0

    def test_streak_bonus_capped(self, rules: EconomyRules) -> None:
        """Test the catch-up bonus is 2 per loss up to 10."""
        assert [rules.loss_streak_bonus(n) for n in range(7)] == [0, 2, 4, 6, 8, 10, 10]


class TestInterest:
    """Tests for interest."""

    @pytest.mark.parametrize(("gold", "interest"), [(47, 4), (52, 5), (58, 5), (9, 0), (0, 0)])
    def test_interest(self, rules: EconomyRules, gold: int, interest: int) -> None:
        """Test interest is floor(gold / 10) capped at 5."""
        assert rules.interest(gold) == interest
        assert rules.next_interest(gold) == interest


class TestSettleBattle:
    """Tests for recording a battle payout."""

    def test_loss_pays_reward_bonus_and_interest(self, rules: EconomyRules) -> None:
        """Test a loss pays 3, the streak bonus, then interest on the total."""
        ledger, settlement = rules.settle_battle(
            _ledger(20),
            Side.PLAYER,
            BattleOutcome.OPPONENT_WIN,
            loss_streak=1,
            round_number=3,
        )

        assert settlement.reward == 3
        assert settlement.loss_streak == 2
        assert settlement.streak_bonus == 4
        assert settlement.interest == 2
        assert ledger.balance(Side.PLAYER) == 29
        assert [t.type for t in ledger.history(Side.PLAYER)[1:]] == [
            TransactionType.BATTLE_REWARD,
            TransactionType.LOSS_STREAK_BONUS,
            TransactionType.INTEREST,
        ]

    def test_win_resets_streak(self, rules: EconomyRules) -> None:
        """Test a win pays 5 + round and records no streak bonus."""
        ledger, settlement = rules.settle_battle(
            _ledger(3),
            Side.PLAYER,
            BattleOutcome.PLAYER_WIN,
            loss_streak=4,
            round_number=2,
        )

        assert settlement.reward == 7
        assert settlement.loss_streak == 0
        assert settlement.streak_bonus == 0
        assert settlement.interest == 1
        assert settlement.total == 8
        assert ledger.balance(Side.PLAYER) == 11
