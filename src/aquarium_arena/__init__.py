"""Aquarium Arena - a build-and-battle aquarium autobattler engine.

Players buy fish, plants, equipment and food from a random shop, arrange
them on an 8x6 tank grid where adjacency grants stat synergies, and
battle a heuristic opponent each round. Every game state is an immutable
snapshot; commands return a new snapshot or the old one on rejection.

Example:
    >>> import random
    >>> from aquarium_arena import GameOrchestrator, Position
    >>>
    >>> game = GameOrchestrator(rng=random.Random(7))
    >>> fish = game.state.player.shop[0]
    >>> game.purchase(fish.instance_id)
    >>> game.place_piece(fish.instance_id, Position(x=2, y=2))
    >>> game.start_battle()
    >>> game.run_battle().battle.outcome

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 schemas (pieces, tanks, ledger, battle, game state).
    catalog: The static piece table and its validating loader.
    engine: Grid, synergy, shop, economy, battle, opponent and orchestration.
"""

from __future__ import annotations

# Core
from aquarium_arena.core.config import Settings, get_settings
from aquarium_arena.core.exceptions import AquariumArenaError
from aquarium_arena.core.logging import configure_logging, get_logger

# Catalog
from aquarium_arena.catalog import PieceCatalog, default_catalog, load_catalog

# Models
from aquarium_arena.models import (
    BattleOutcome,
    GamePhase,
    GameState,
    Piece,
    PlacedPiece,
    Position,
    Side,
    Tank,
)

# Engine
from aquarium_arena.engine import BattleSimulator, GameOrchestrator, ShopGenerator


__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Settings",
    "get_settings",
    "AquariumArenaError",
    "configure_logging",
    "get_logger",
    # Catalog
    "PieceCatalog",
    "default_catalog",
    "load_catalog",
    # Models
    "BattleOutcome",
    "GamePhase",
    "GameState",
    "Piece",
    "PlacedPiece",
    "Position",
    "Side",
    "Tank",
    # Engine
    "BattleSimulator",
    "GameOrchestrator",
    "ShopGenerator",
]
