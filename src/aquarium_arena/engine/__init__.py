"""Game engine for Aquarium Arena.

Submodules:
    grid: Footprint placement, moves and removal on the 8x6 grid
    synergy: Adjacency bonuses, enhanced stats, water quality, tank analysis
    consumables: Battle-entry consumable resolution
    shop: Shop generation and rerolls
    economy: Reroll costs, sale values, rewards, interest
    battle: Round-by-round battle resolution
    opponent: Heuristic drafting for the computer side
    orchestrator: Campaign command/query surface

Example:
    >>> from aquarium_arena.engine import GameOrchestrator
    >>> from aquarium_arena.models import Position
    >>>
    >>> game = GameOrchestrator(rng=random.Random(42))
    >>> piece_id = game.state.player.shop[0].instance_id
    >>> game.purchase(piece_id)
    >>> game.place_piece(piece_id, Position(x=0, y=0))
    >>> game.start_battle()
    >>> game.run_battle()
    >>> state = game.complete_battle()
"""

from __future__ import annotations

# =============================================================================
# Grid and Synergy
# =============================================================================
from aquarium_arena.engine.grid import (
    adjacent_cells,
    can_place,
    in_bounds,
    move,
    place,
    remove,
    valid_positions,
)
from aquarium_arena.engine.synergy import (
    active_bonuses,
    adjacent_pieces,
    analyze_tank,
    bonus_providers,
    compute_water_quality,
    enhanced_stats,
)
from aquarium_arena.engine.consumables import resolve_consumables

# =============================================================================
# Shop, Economy and Battle
# =============================================================================
from aquarium_arena.engine.shop import ShopGenerator
from aquarium_arena.engine.economy import BattleSettlement, EconomyRules
from aquarium_arena.engine.battle import BattleSimulator, is_combat_eligible

# =============================================================================
# Opponent and Orchestration
# =============================================================================
from aquarium_arena.engine.opponent import DraftResult, OpponentAI
from aquarium_arena.engine.orchestrator import GameOrchestrator


__all__ = [
    # Grid
    "in_bounds",
    "adjacent_cells",
    "can_place",
    "valid_positions",
    "place",
    "move",
    "remove",
    # Synergy
    "compute_water_quality",
    "adjacent_pieces",
    "enhanced_stats",
    "active_bonuses",
    "bonus_providers",
    "analyze_tank",
    "resolve_consumables",
    # Shop, economy, battle
    "ShopGenerator",
    "EconomyRules",
    "BattleSettlement",
    "BattleSimulator",
    "is_combat_eligible",
    # Opponent and orchestration
    "OpponentAI",
    "DraftResult",
    "GameOrchestrator",
]
