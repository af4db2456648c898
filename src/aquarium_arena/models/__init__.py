"""Pydantic V2 schemas for Aquarium Arena.

Submodules:
    enums: Enumeration types (Side, PieceCategory, Rarity, GamePhase, ...)
    pieces: Catalog templates and the placed/unplaced/buffed piece variants
    tank: A side's pieces and grid occupancy
    economy: Append-only gold ledger
    battle: Battle snapshots, combatants and events
    game_state: Whole-campaign snapshot
    analysis: Derived per-piece bonuses and tank aggregates

Example:
    >>> from aquarium_arena.models import Piece, Position, Tank, Side
    >>> tank = Tank.empty(Side.PLAYER)
    >>> tank.water_quality
    5
"""

from __future__ import annotations

from aquarium_arena.models.enums import (
    BattleEventType,
    BattleOutcome,
    BattleStatus,
    BonusSource,
    GamePhase,
    PieceCategory,
    Rarity,
    Side,
    SynergyRole,
    TransactionType,
)
from aquarium_arena.models.pieces import (
    AnyPiece,
    BuffedPiece,
    Cell,
    ConsumedEffect,
    Piece,
    PieceTemplate,
    PlacedPiece,
    Position,
    StatBonus,
    Stats,
    footprint_cells,
)
from aquarium_arena.models.tank import Tank, empty_grid
from aquarium_arena.models.economy import GoldSummary, Ledger, Transaction
from aquarium_arena.models.battle import BattleEvent, BattleSnapshot, Combatant
from aquarium_arena.models.analysis import ActiveBonus, PieceBreakdown, TankAnalysis
from aquarium_arena.models.game_state import GameState, ShopSlots, SideState


__all__ = [
    # Enumerations
    "Side",
    "PieceCategory",
    "Rarity",
    "SynergyRole",
    "GamePhase",
    "TransactionType",
    "BattleStatus",
    "BattleOutcome",
    "BattleEventType",
    "BonusSource",
    # Pieces
    "Cell",
    "Position",
    "Stats",
    "StatBonus",
    "PieceTemplate",
    "ConsumedEffect",
    "Piece",
    "PlacedPiece",
    "BuffedPiece",
    "AnyPiece",
    "footprint_cells",
    # Tank
    "Tank",
    "empty_grid",
    # Economy
    "Transaction",
    "GoldSummary",
    "Ledger",
    # Battle
    "Combatant",
    "BattleEvent",
    "BattleSnapshot",
    # Analysis
    "ActiveBonus",
    "PieceBreakdown",
    "TankAnalysis",
    # Game state
    "ShopSlots",
    "SideState",
    "GameState",
]
