"""Heuristic drafting for the computer-controlled side.

The opponent plays by the same rules as the player: it draws from the
same ``ShopGenerator``, pays through the same ledger, places through the
same grid functions and later goes through the same consumable and water
quality code. Only its decisions are its own.

Drafting happens in two passes each round:

1. Rerolls. While the current shop scores below the round's threshold,
   the opponent peeks at a fresh shop and takes it (paying the reroll
   cost) only if it scores clearly better.
2. Purchases. Affordable offerings are ranked by a round-phase priority
   and bought in order until the spending target is met, each placed at a
   random position where it fits.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from aquarium_arena.core.config import OpponentSettings
from aquarium_arena.core.constants import GRID_CELLS, RARITY_SCORE_BONUS, TAG_SCHOOLING
from aquarium_arena.core.logging import get_logger
from aquarium_arena.engine.economy import EconomyRules
from aquarium_arena.engine.grid import place, valid_positions
from aquarium_arena.engine.shop import ShopGenerator
from aquarium_arena.models.economy import Ledger
from aquarium_arena.models.enums import PieceCategory, Rarity, Side, TransactionType
from aquarium_arena.models.game_state import ShopSlots, SideState
from aquarium_arena.models.pieces import Piece


logger = get_logger(__name__)

_RARE_OR_BETTER = frozenset({Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY})


@dataclass(frozen=True)
class DraftResult:
    """Outcome of one drafting turn.

    Attributes:
        side_state: Opponent state with the new tank and remaining shop.
        ledger: Ledger including the opponent's rerolls and purchases.
        rerolls: Rerolls taken.
        purchased: Instance ids bought and placed, in order.
    """

    side_state: SideState
    ledger: Ledger
    rerolls: int
    purchased: tuple[str, ...]


class OpponentAI:
    """Draft and place pieces for the opponent side."""

    def __init__(
        self,
        settings: OpponentSettings | None = None,
        economy: EconomyRules | None = None,
    ) -> None:
        """Initialize the opponent.

        Args:
            settings: Drafting heuristics.
            economy: Rules used to price rerolls.
        """
        self.settings = settings or OpponentSettings()
        self.economy = economy or EconomyRules()

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    @staticmethod
    def board_tags(state: SideState) -> set[str]:
        return {tag for piece in state.tank.pieces for tag in piece.tags}

    def quality_score(self, shop: ShopSlots, gold: int, board_tags: set[str]) -> float:
        """Average value of the offerings ``gold`` can afford.

        Each entry scores ``(attack + health) / cost`` plus a rarity bonus
        plus 1 per tag already on the board. A shop with nothing affordable
        scores 0.
        """
        scores = []
        for piece in shop:
            if piece is None or piece.cost > gold:
                continue
            stats = piece.template.stats
            score = (stats.attack + stats.health) / max(piece.cost, 1)
            score += RARITY_SCORE_BONUS[piece.template.rarity.value]
            score += sum(1 for tag in piece.tags if tag in board_tags)
            scores.append(score)
        if not scores:
            return 0.0
        return sum(scores) / len(scores)

    def reroll_threshold(self, round_number: int) -> float:
        s = self.settings
        if round_number <= s.early_round_limit:
            return s.early_reroll_threshold
        if round_number <= s.mid_round_limit:
            return s.mid_reroll_threshold
        return s.late_reroll_threshold

    def reroll_budget(self, gold: int, round_number: int) -> int:
        """Maximum rerolls this round."""
        s = self.settings
        budget = min(gold // s.reroll_gold_divisor, s.max_rerolls)
        if round_number <= s.early_round_limit:
            budget = min(budget, s.early_max_rerolls)
        return budget

    def priority(self, piece: Piece, round_number: int, board_tags: set[str]) -> int:
        """Rank an offering for the current phase of the campaign.

        Early rounds favor cheap, efficient pieces; mid rounds favor attack
        and plant, equipment or rare synergy; late rounds favor raw stats,
        rarity and expensive pieces.
        """
        s = self.settings
        stats = piece.template.stats
        rare = piece.template.rarity in _RARE_OR_BETTER
        if round_number <= s.early_round_limit:
            score = (10 - piece.cost) + stats.attack + stats.health
        elif round_number <= s.mid_round_limit:
            score = stats.attack * 2 + stats.health
            if piece.has_tag(TAG_SCHOOLING):
                score += 5
            if piece.category in (PieceCategory.FLORA, PieceCategory.APPARATUS):
                score += 3
            if rare:
                score += 3
        else:
            score = stats.attack * 3 + stats.health * 2 + piece.cost
            if rare:
                score += 8
        shared = sum(1 for tag in piece.tags if tag in board_tags)
        return score + shared * s.shared_tag_bonus

    def spending_target(self, gold: int, round_number: int) -> int:
        s = self.settings
        return max(s.minimum_spend, min(int(s.spend_ratio * gold), 2 * round_number))

    @staticmethod
    def board_cap(round_number: int) -> int:
        """Cells the opponent may fill by ``round_number``."""
        return min(GRID_CELLS, 6 + 6 * round_number)

    # -------------------------------------------------------------------------
    # Drafting
    # -------------------------------------------------------------------------

    def _reroll_pass(
        self,
        state: SideState,
        ledger: Ledger,
        round_number: int,
        shop_generator: ShopGenerator,
    ) -> tuple[SideState, Ledger, int]:
        side = state.side
        tags = self.board_tags(state)
        budget = self.reroll_budget(ledger.balance(side), round_number)
        threshold = self.reroll_threshold(round_number)
        taken = 0

        while taken < budget:
            gold = ledger.balance(side)
            current_score = self.quality_score(state.shop, gold, tags)
            if current_score >= threshold:
                break
            cost = self.economy.reroll_cost(taken)
            offered = [p.cost for p in state.shop if p is not None]
            cheapest = min(offered) if offered else 0
            if gold - cost < cheapest:
                break
            fresh = shop_generator.reroll(state.shop)
            fresh_score = self.quality_score(fresh, gold - cost, tags)
            if fresh_score < current_score * self.settings.improvement_ratio:
                break
            ledger = ledger.record(
                side,
                TransactionType.REROLL,
                -cost,
                round=round_number,
                description=f"Opponent reroll #{taken + 1}",
            )
            state = state.model_copy(update={"shop": fresh})
            taken += 1
            logger.debug("Opponent rerolled", cost=cost, score=round(fresh_score, 2))

        return state, ledger, taken

    def _purchase_pass(
        self,
        state: SideState,
        ledger: Ledger,
        round_number: int,
        rng: random.Random,
    ) -> tuple[SideState, Ledger, list[str]]:
        side = state.side
        tags = self.board_tags(state)
        target = self.spending_target(ledger.balance(side), round_number)
        cap = self.board_cap(round_number)
        ranked = sorted(
            (p for p in state.shop if p is not None),
            key=lambda p: self.priority(p, round_number, tags),
            reverse=True,
        )

        spent = 0
        purchased: list[str] = []
        tank = state.tank
        for piece in ranked:
            if spent >= target:
                break
            if piece.cost > ledger.balance(side):
                continue
            if len(tank.occupied_cells()) + len(piece.template.footprint) > cap:
                continue
            positions = valid_positions(piece, tank)
            if not positions:
                logger.debug("Opponent purchase skipped: no room", piece=piece.template.id)
                continue
            tank = place(piece, rng.choice(positions), tank)
            ledger = ledger.record(
                side,
                TransactionType.PURCHASE,
                -piece.cost,
                round=round_number,
                description=f"Opponent bought {piece.name}",
                piece_id=piece.instance_id,
                piece_name=piece.name,
            )
            spent += piece.cost
            purchased.append(piece.instance_id)

        shop = tuple(None if p is not None and p.instance_id in purchased else p for p in state.shop)
        return state.model_copy(update={"tank": tank, "shop": shop}), ledger, purchased

    def draft(
        self,
        state: SideState,
        ledger: Ledger,
        round_number: int,
        shop_generator: ShopGenerator,
        rng: random.Random,
    ) -> DraftResult:
        """Run one drafting turn for the opponent.

        Args:
            state: Opponent state, including its current shop.
            ledger: Ledger holding the opponent's gold.
            round_number: Current campaign round.
            shop_generator: Shared shop generator for rerolls.
            rng: Random source for placement.

        Returns:
            The drafted state, updated ledger and what was done.
        """
        if state.side is not Side.OPPONENT:
            logger.warning("Drafting for a non-opponent side", side=state.side.value)
        state, ledger, rerolls = self._reroll_pass(state, ledger, round_number, shop_generator)
        state, ledger, purchased = self._purchase_pass(state, ledger, round_number, rng)
        logger.info(
            "Opponent drafted",
            round=round_number,
            rerolls=rerolls,
            purchased=len(purchased),
            gold=ledger.balance(state.side),
            water_quality=state.tank.water_quality,
        )
        return DraftResult(
            side_state=state,
            ledger=ledger,
            rerolls=rerolls,
            purchased=tuple(purchased),
        )


__all__ = [
    "DraftResult",
    "OpponentAI",
]
