"""Enumeration types for Aquarium Arena."""

from __future__ import annotations

from enum import StrEnum


class Side(StrEnum):
    """The two sides of a campaign."""

    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        """Get the opposing side."""
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class PieceCategory(StrEnum):
    """Broad kind of a placeable piece."""

    CREATURE = "creature"
    FLORA = "flora"
    APPARATUS = "apparatus"
    CONSUMABLE = "consumable"


class Rarity(StrEnum):
    """Rarity tier of a catalog piece."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class SynergyRole(StrEnum):
    """Adjacency rule a piece takes part in."""

    FERN = "fern"
    """Adjacent pieces gain +1 attack and +1 health."""

    ANUBIAS = "anubias"
    """Adjacent pieces gain +1 health."""

    NEON_SCHOOL = "neon_school"
    """+1 attack per adjacent schooling creature, double speed at 3+."""

    CARDINAL_SCHOOL = "cardinal_school"
    """+2 attack per adjacent schooling creature."""

    AMPLIFIER = "amplifier"
    """Doubles bonuses of adjacent flora when plant amplification is on."""


class GamePhase(StrEnum):
    """Phase of a campaign round."""

    SHOPPING = "shopping"
    BATTLE = "battle"


class TransactionType(StrEnum):
    """Kinds of gold movements recorded in the ledger."""

    PURCHASE = "purchase"
    SALE = "sale"
    REROLL = "reroll"
    BATTLE_REWARD = "battle_reward"
    INTEREST = "interest"
    LOSS_STREAK_BONUS = "loss_streak_bonus"
    ROUND_START = "round_start"


class BattleStatus(StrEnum):
    """Lifecycle of a battle resolution."""

    IDLE = "idle"
    RESOLVING = "resolving"
    CONCLUDED = "concluded"


class BattleOutcome(StrEnum):
    """Final result of a battle."""

    PLAYER_WIN = "player_win"
    OPPONENT_WIN = "opponent_win"
    DRAW = "draw"

    @classmethod
    def win_for(cls, side: Side) -> "BattleOutcome":
        """Get the outcome in which ``side`` wins."""
        return cls.PLAYER_WIN if side is Side.PLAYER else cls.OPPONENT_WIN

    def winner(self) -> Side | None:
        """Get the winning side, or None for a draw."""
        if self is BattleOutcome.PLAYER_WIN:
            return Side.PLAYER
        if self is BattleOutcome.OPPONENT_WIN:
            return Side.OPPONENT
        return None


class BattleEventType(StrEnum):
    """Kinds of entries in a battle event log."""

    ATTACK = "attack"
    STATUS = "status"


class BonusSource(StrEnum):
    """Where a displayed bonus comes from."""

    ADJACENCY = "adjacency"
    CONSUMABLE = "consumable"
    ABILITY = "ability"


__all__ = [
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
]
