"""Derived views of a tank for display.

These models are never stored in ``GameState``; the synergy engine builds
them on demand from a tank so they always match its current contents.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from aquarium_arena.models.enums import BonusSource
from aquarium_arena.models.pieces import ConsumedEffect, PlacedPiece, Stats


class ActiveBonus(BaseModel):
    """A single bonus currently affecting a piece.

    Attributes:
        source: Display name of whatever grants the bonus.
        effect: Display text, e.g. ``+1 ATK +1 HP``.
        type: Adjacency, consumable or ability.
        attack: Attack granted.
        health: Health (and max health) granted.
        speed: Speed granted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str
    effect: str
    type: BonusSource
    attack: int = 0
    health: int = 0
    speed: int = 0


class PieceBreakdown(BaseModel):
    """Per-creature line of a tank analysis."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    piece: PlacedPiece
    original_stats: Stats
    enhanced_stats: Stats
    bonuses: Stats
    active_bonuses: tuple[ActiveBonus, ...] = ()
    consumed: tuple[ConsumedEffect, ...] = ()


class TankAnalysis(BaseModel):
    """Aggregate stats of the placed contents of a tank.

    Attack and speed aggregate over creatures; health aggregates over every
    placed piece that is not a consumable. Averages round half up.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_attack: int = 0
    bonus_attack: int = 0
    total_attack: int = 0
    base_health: int = 0
    bonus_health: int = 0
    total_health: int = 0
    base_average_speed: int = 0
    bonus_average_speed: int = 0
    average_speed: int = 0
    creature_count: int = 0
    total_pieces: int = 0
    water_quality: int = 0
    breakdown: tuple[PieceBreakdown, ...] = ()


__all__ = [
    "ActiveBonus",
    "PieceBreakdown",
    "TankAnalysis",
]
