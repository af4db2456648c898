"""Campaign orchestration.

``GameOrchestrator`` is the command/query surface a presentation layer
talks to. It holds the current ``GameState`` snapshot and replaces it
wholesale on every accepted command. A rejected command (wrong phase,
not enough gold, invalid placement, unknown piece) is a no-op that
returns the current snapshot unchanged; it never raises.

Round lifecycle::

    SHOPPING --start_battle--> BATTLE --step_battle/run_battle-->
    BATTLE (concluded) --complete_battle--> SHOPPING (next round)

After ``complete_battle`` on the final round the campaign starts over.
"""

from __future__ import annotations

import random

from aquarium_arena.catalog.loader import PieceCatalog, default_catalog
from aquarium_arena.core.config import Settings, get_settings
from aquarium_arena.core.exceptions import InvalidGameStateError
from aquarium_arena.core.logging import bind_context, get_logger
from aquarium_arena.engine.battle import BattleSimulator
from aquarium_arena.engine.consumables import resolve_consumables
from aquarium_arena.engine.economy import EconomyRules
from aquarium_arena.engine.grid import move, place, remove
from aquarium_arena.engine.opponent import OpponentAI
from aquarium_arena.engine.shop import ShopGenerator
from aquarium_arena.engine.synergy import (
    active_bonuses,
    analyze_tank,
    bonus_providers,
    enhanced_stats,
)
from aquarium_arena.models.analysis import ActiveBonus, TankAnalysis
from aquarium_arena.models.battle import BattleSnapshot
from aquarium_arena.models.economy import Ledger
from aquarium_arena.models.enums import (
    BattleOutcome,
    BattleStatus,
    GamePhase,
    Side,
    TransactionType,
)
from aquarium_arena.models.game_state import GameState, ShopSlots, SideState
from aquarium_arena.models.pieces import PlacedPiece, Position, Stats
from aquarium_arena.models.tank import Tank


logger = get_logger(__name__)


class GameOrchestrator:
    """Run a campaign against the computer opponent.

    Attributes:
        settings: Rules configuration.
        catalog: Piece catalog for both shops.
        rng: Random source shared by shops, opponent and battles.

    Example:
        >>> game = GameOrchestrator(rng=random.Random(3))
        >>> state = game.purchase(game.state.player.shop[0].instance_id)
        >>> state.player.tank.pieces[0].kind
        'unplaced'
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        catalog: PieceCatalog | None = None,
        rng: random.Random | None = None,
        state: GameState | None = None,
    ) -> None:
        """Initialize the orchestrator and start (or resume) a campaign.

        Args:
            settings: Rules configuration (defaults to ``get_settings()``).
            catalog: Piece catalog (defaults to the built-in one).
            rng: Random source (defaults to one seeded from ``settings.seed``).
            state: Snapshot to resume from instead of a fresh campaign.

        Raises:
            InvalidGameStateError: If ``state`` pairs a phase with the wrong battle.
        """
        self.settings = settings or get_settings()
        self.catalog = catalog or default_catalog()
        self.rng = rng or random.Random(self.settings.seed)

        self.economy = EconomyRules(self.settings.economy)
        self.shop = ShopGenerator(
            self.catalog,
            self.rng,
            weighted=self.settings.shop.weighted_sampling,
        )
        self.simulator = BattleSimulator(self.settings.battle)
        self.opponent_ai = OpponentAI(self.settings.opponent, self.economy)

        if state is not None:
            self._check_resumable(state)
        self._state = state or self.new_campaign()
        logger.info("GameOrchestrator initialized", round=self._state.round)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def state(self) -> GameState:
        """Current campaign snapshot."""
        return self._state

    @property
    def amplify(self) -> bool:
        return self.settings.campaign.plant_amplification

    @property
    def reroll_cost(self) -> int:
        """Price of the player's next reroll this round."""
        return self.economy.reroll_cost(self._state.rerolls_this_round)

    @property
    def next_interest(self) -> int:
        """Interest the player's current gold would earn."""
        return self.economy.next_interest(self._state.gold)

    def tank(self, side: Side = Side.PLAYER) -> Tank:
        return self._state.side(side).tank

    def piece_stats(self, instance_id: str, side: Side = Side.PLAYER) -> Stats | None:
        """Enhanced stats of a piece, or None if it is not in the tank."""
        tank = self.tank(side)
        piece = tank.get(instance_id)
        if piece is None:
            return None
        return enhanced_stats(piece, tank, amplify=self.amplify)

    def piece_bonuses(self, instance_id: str, side: Side = Side.PLAYER) -> list[ActiveBonus]:
        """Active bonus descriptions of a piece for display."""
        tank = self.tank(side)
        piece = tank.get(instance_id)
        if piece is None:
            return []
        return active_bonuses(piece, tank, amplify=self.amplify)

    def piece_bonus_providers(self, instance_id: str, side: Side = Side.PLAYER) -> list[str]:
        """Instance ids of pieces currently buffing a piece."""
        tank = self.tank(side)
        piece = tank.get(instance_id)
        if piece is None:
            return []
        return bonus_providers(piece, tank)

    def sale_value(self, instance_id: str) -> int | None:
        piece = self.tank(Side.PLAYER).get(instance_id)
        if piece is None:
            return None
        return self.economy.sale_value(piece.cost)

    def analyze(self, side: Side = Side.PLAYER) -> TankAnalysis:
        """Aggregate stats of a side's tank."""
        return analyze_tank(self.tank(side), amplify=self.amplify)

    # =========================================================================
    # Campaign Lifecycle
    # =========================================================================

    def new_campaign(self) -> GameState:
        """Build the initial snapshot: fresh shops and starting gold."""
        slots = self.settings.shop.slot_count
        starting_gold = self.settings.economy.starting_gold
        ledger = Ledger()
        for side in Side:
            ledger = ledger.record(
                side,
                TransactionType.ROUND_START,
                starting_gold,
                round=1,
                description="Starting gold",
            )
        bind_context(campaign_round=1)
        return GameState(
            round=1,
            player=SideState(
                side=Side.PLAYER,
                tank=Tank.empty(Side.PLAYER),
                shop=self.shop.generate(slots),
            ),
            opponent=SideState(
                side=Side.OPPONENT,
                tank=Tank.empty(Side.OPPONENT),
                shop=self.shop.generate(slots),
            ),
            ledger=ledger,
        )

    @staticmethod
    def _check_resumable(state: GameState) -> None:
        if state.phase is GamePhase.BATTLE and state.battle is None:
            raise InvalidGameStateError(
                "Cannot resume a battle phase without a battle",
                current_state=state.phase.value,
                expected_states=[GamePhase.SHOPPING.value],
            )
        if state.phase is GamePhase.SHOPPING and state.battle is not None:
            raise InvalidGameStateError(
                "Cannot resume a shopping phase with a battle attached",
                current_state=state.phase.value,
                expected_states=[GamePhase.BATTLE.value],
            )

    def _commit(self, state: GameState) -> GameState:
        self._state = state
        return state

    def _reject(self, command: str, reason: str, **context: object) -> GameState:
        logger.debug("Command rejected", command=command, reason=reason, **context)
        return self._state

    def _in_shopping(self, command: str) -> bool:
        if self._state.phase is GamePhase.SHOPPING:
            return True
        self._reject(command, "not in shopping phase", phase=self._state.phase.value)
        return False

    # =========================================================================
    # Shopping Commands
    # =========================================================================

    def purchase(self, instance_id: str) -> GameState:
        """Buy a piece from the player's shop into the tank (unplaced).

        Clears the shop lock if the locked slot is the one bought.
        """
        if not self._in_shopping("purchase"):
            return self._state
        state = self._state
        index = state.player.shop_index(instance_id)
        if index is None:
            return self._reject("purchase", "not in shop", piece_id=instance_id)
        piece = state.player.shop[index]
        if piece is None:
            return self._reject("purchase", "empty slot", slot=index)
        if not state.ledger.can_afford(Side.PLAYER, piece.cost):
            return self._reject("purchase", "insufficient gold", cost=piece.cost, gold=state.gold)

        ledger = state.ledger.record(
            Side.PLAYER,
            TransactionType.PURCHASE,
            -piece.cost,
            round=state.round,
            description=f"Bought {piece.name}",
            piece_id=piece.instance_id,
            piece_name=piece.name,
        )
        shop = tuple(None if i == index else slot for i, slot in enumerate(state.player.shop))
        tank = state.player.tank.model_copy(update={"pieces": (*state.player.tank.pieces, piece)})
        locked = None if state.locked_shop_index == index else state.locked_shop_index

        logger.info("Piece purchased", piece=piece.template.id, cost=piece.cost)
        return self._commit(
            state.with_side(state.player.model_copy(update={"tank": tank, "shop": shop})).model_copy(
                update={"ledger": ledger, "locked_shop_index": locked}
            )
        )

    def place_piece(self, instance_id: str, position: Position) -> GameState:
        """Put an owned, unplaced piece on the grid."""
        if not self._in_shopping("place_piece"):
            return self._state
        tank = self._state.player.tank
        piece = tank.get(instance_id)
        if piece is None:
            return self._reject("place_piece", "not owned", piece_id=instance_id)
        if isinstance(piece, PlacedPiece):
            return self.move_piece(instance_id, position)
        placed = place(piece, position, tank)
        if placed is tank:
            return self._reject("place_piece", "invalid position", x=position.x, y=position.y)
        return self._commit(self._state.with_side(self._state.player.model_copy(update={"tank": placed})))

    def move_piece(self, instance_id: str, position: Position) -> GameState:
        """Move a placed piece; an invalid target leaves it where it was."""
        if not self._in_shopping("move_piece"):
            return self._state
        tank = self._state.player.tank
        moved = move(instance_id, position, tank)
        if moved is tank:
            return self._reject("move_piece", "invalid move", piece_id=instance_id)
        return self._commit(self._state.with_side(self._state.player.model_copy(update={"tank": moved})))

    def sell_piece(self, instance_id: str) -> GameState:
        """Sell an owned piece for a fraction of its acquisition cost."""
        if not self._in_shopping("sell_piece"):
            return self._state
        state = self._state
        piece = state.player.tank.get(instance_id)
        if piece is None:
            return self._reject("sell_piece", "not owned", piece_id=instance_id)

        value = self.economy.sale_value(piece.cost)
        ledger = state.ledger.record(
            Side.PLAYER,
            TransactionType.SALE,
            value,
            round=state.round,
            description=f"Sold {piece.name}",
            piece_id=piece.instance_id,
            piece_name=piece.name,
        )
        tank = remove(instance_id, state.player.tank)
        selected = None if state.selected_piece_id == instance_id else state.selected_piece_id

        logger.info("Piece sold", piece=piece.template.id, value=value)
        return self._commit(
            state.with_side(state.player.model_copy(update={"tank": tank})).model_copy(
                update={"ledger": ledger, "selected_piece_id": selected}
            )
        )

    def reroll_shop(self) -> GameState:
        """Redraw the player's shop, keeping the locked slot."""
        if not self._in_shopping("reroll_shop"):
            return self._state
        state = self._state
        cost = self.reroll_cost
        if not state.ledger.can_afford(Side.PLAYER, cost):
            return self._reject("reroll_shop", "insufficient gold", cost=cost, gold=state.gold)

        ledger = state.ledger.record(
            Side.PLAYER,
            TransactionType.REROLL,
            -cost,
            round=state.round,
            description=f"Shop reroll #{state.rerolls_this_round + 1}",
        )
        shop = self.shop.reroll(state.player.shop, state.locked_shop_index)

        logger.info("Shop rerolled", cost=cost, rerolls=state.rerolls_this_round + 1)
        return self._commit(
            state.with_side(state.player.model_copy(update={"shop": shop})).model_copy(
                update={"ledger": ledger, "rerolls_this_round": state.rerolls_this_round + 1}
            )
        )

    def toggle_shop_lock(self, slot_index: int) -> GameState:
        """Lock an occupied shop slot, or unlock it if it is already locked."""
        if not self._in_shopping("toggle_shop_lock"):
            return self._state
        state = self._state
        if not 0 <= slot_index < len(state.player.shop) or state.player.shop[slot_index] is None:
            return self._reject("toggle_shop_lock", "no piece in slot", slot=slot_index)
        locked = None if state.locked_shop_index == slot_index else slot_index
        return self._commit(state.model_copy(update={"locked_shop_index": locked}))

    def clear_shop_lock(self) -> GameState:
        if self._state.locked_shop_index is None:
            return self._state
        return self._commit(self._state.model_copy(update={"locked_shop_index": None}))

    def select_piece(self, instance_id: str | None) -> GameState:
        """Select a piece for display; selecting the selected piece clears it."""
        state = self._state
        selected = None if instance_id == state.selected_piece_id else instance_id
        return self._commit(state.model_copy(update={"selected_piece_id": selected}))

    # =========================================================================
    # Battle Commands
    # =========================================================================

    def start_battle(self) -> GameState:
        """Let the opponent draft, resolve consumables on both sides and start the battle."""
        if not self._in_shopping("start_battle"):
            return self._state
        state = self._state

        draft = self.opponent_ai.draft(
            state.opponent,
            state.ledger,
            state.round,
            self.shop,
            self.rng,
        )
        player = state.player.model_copy(update={"tank": resolve_consumables(state.player.tank)})
        opponent = draft.side_state.model_copy(
            update={"tank": resolve_consumables(draft.side_state.tank)}
        )
        battle = self.simulator.start(player.tank, opponent.tank, amplify=self.amplify)

        logger.info("Battle phase entered", round=state.round)
        return self._commit(
            state.model_copy(
                update={
                    "phase": GamePhase.BATTLE,
                    "player": player,
                    "opponent": opponent,
                    "ledger": draft.ledger,
                    "battle": battle,
                    "selected_piece_id": None,
                }
            )
        )

    def _resolving_battle(self, command: str) -> BattleSnapshot | None:
        battle = self._state.battle
        if self._state.phase is not GamePhase.BATTLE or battle is None:
            self._reject(command, "no battle in progress")
            return None
        if battle.status is not BattleStatus.RESOLVING:
            self._reject(command, "battle already concluded")
            return None
        return battle

    def step_battle(self) -> GameState:
        """Resolve one battle round (for a presentation timer)."""
        battle = self._resolving_battle("step_battle")
        if battle is None:
            return self._state
        return self._commit(self._state.model_copy(update={"battle": self.simulator.step(battle, self.rng)}))

    def run_battle(self) -> GameState:
        """Resolve the battle to its conclusion."""
        battle = self._resolving_battle("run_battle")
        if battle is None:
            return self._state
        return self._commit(self._state.model_copy(update={"battle": self.simulator.resolve(battle, self.rng)}))

    def complete_battle(self, outcome: BattleOutcome | None = None) -> GameState:
        """Pay out the battle and move to the next round.

        Args:
            outcome: Result to settle. Defaults to the concluded battle's
                outcome; rejected if neither is available.
        """
        state = self._state
        if state.phase is not GamePhase.BATTLE:
            return self._reject("complete_battle", "not in battle phase", phase=state.phase.value)
        if outcome is None and state.battle is not None:
            outcome = state.battle.outcome
        if outcome is None:
            return self._reject("complete_battle", "battle has no outcome yet")

        ledger = state.ledger
        sides = {}
        for side in Side:
            side_state = state.side(side)
            ledger, settlement = self.economy.settle_battle(
                ledger,
                side,
                outcome,
                loss_streak=side_state.loss_streak,
                round_number=state.round,
            )
            winner = outcome.winner()
            sides[side] = side_state.model_copy(
                update={
                    "loss_streak": settlement.loss_streak,
                    "wins": side_state.wins + int(winner is side),
                    "losses": side_state.losses + int(winner is side.other),
                    "draws": side_state.draws + int(winner is None),
                }
            )

        logger.info("Round complete", round=state.round, outcome=outcome.value)
        if state.round >= self.settings.campaign.final_round:
            logger.info("Campaign finished", wins=sides[Side.PLAYER].wins, losses=sides[Side.PLAYER].losses)
            return self._commit(self.new_campaign())

        next_round = state.round + 1
        slots = self.settings.shop.slot_count
        player_shop = self._next_player_shop(state, slots)
        bind_context(campaign_round=next_round)
        return self._commit(
            state.model_copy(
                update={
                    "round": next_round,
                    "phase": GamePhase.SHOPPING,
                    "player": sides[Side.PLAYER].model_copy(update={"shop": player_shop}),
                    "opponent": sides[Side.OPPONENT].model_copy(update={"shop": self.shop.generate(slots)}),
                    "ledger": ledger,
                    "rerolls_this_round": 0,
                    "battle": None,
                    "selected_piece_id": None,
                }
            )
        )

    def _next_player_shop(self, state: GameState, slots: int) -> ShopSlots:
        """Fresh shop for the next round, carrying the locked slot over."""
        locked = state.locked_shop_index
        if locked is None:
            return self.shop.generate(slots)
        return self.shop.reroll(state.player.shop, locked)


__all__ = ["GameOrchestrator"]
