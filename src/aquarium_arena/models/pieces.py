"""Pydantic V2 schemas for catalog templates and piece instances.

A piece instance is one of three tagged variants so that invalid
combinations cannot be represented:

- ``Piece``: bought but not on the grid.
- ``PlacedPiece``: on the grid at an origin position.
- ``BuffedPiece``: on the grid and permanently strengthened by one or more
  consumables, remembering its pre-buff stats.

All models are frozen; every change produces a new instance.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aquarium_arena.core.exceptions import CatalogError
from aquarium_arena.models.enums import PieceCategory, Rarity, SynergyRole


Cell = tuple[int, int]


# =============================================================================
# Value Objects
# =============================================================================


class Position(BaseModel):
    """A grid coordinate or a footprint offset."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int
    y: int

    def shifted(self, offset: "Position") -> "Position":
        """Return this position translated by ``offset``."""
        return Position(x=self.x + offset.x, y=self.y + offset.y)

    def as_cell(self) -> Cell:
        """Return the position as an ``(x, y)`` tuple."""
        return (self.x, self.y)


class Stats(BaseModel):
    """Combat stats of a piece.

    Attributes:
        attack: Damage dealt per attack.
        health: Current health.
        speed: Turn-order priority (higher acts first).
        max_health: Health ceiling.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    attack: int = Field(default=0, ge=0)
    health: int = Field(default=0, ge=0)
    speed: int = Field(default=0, ge=0)
    max_health: int = Field(default=0, ge=0)

    def plus(self, *, attack: int = 0, health: int = 0, speed: int = 0) -> "Stats":
        """Return stats with the bonuses added.

        A health bonus raises max health by the same amount.
        """
        return Stats(
            attack=self.attack + attack,
            health=self.health + health,
            speed=self.speed + speed,
            max_health=self.max_health + health,
        )


class StatBonus(BaseModel):
    """A fixed attack/health/speed bonus granted by a consumable."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    attack: int = Field(default=0, ge=0)
    health: int = Field(default=0, ge=0)
    speed: int = Field(default=0, ge=0)

    def describe(self) -> str:
        """Render the bonus as display text, e.g. ``+1 ATK +2 HP``."""
        parts = []
        if self.attack:
            parts.append(f"+{self.attack} ATK")
        if self.health:
            parts.append(f"+{self.health} HP")
        if self.speed:
            parts.append(f"+{self.speed} SPD")
        return " ".join(parts)


# =============================================================================
# Catalog Template
# =============================================================================


class PieceTemplate(BaseModel):
    """Immutable catalog entry describing a kind of piece.

    Attributes:
        id: Catalog identifier (e.g. ``neon-tetra``).
        name: Display name.
        category: Creature, flora, apparatus or consumable.
        rarity: Rarity tier.
        footprint: Cell offsets relative to the placement origin.
        stats: Base stats of a fresh instance.
        tags: Descriptive tags used by synergies and water quality.
        cost: Acquisition cost in gold.
        abilities: Human-readable ability descriptions.
        synergy: Adjacency rule this piece takes part in, if any.
        consumable_bonus: Bonus applied to adjacent creatures at battle start.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: PieceCategory
    rarity: Rarity = Rarity.COMMON
    footprint: tuple[Position, ...]
    stats: Stats
    tags: tuple[str, ...] = ()
    cost: int = Field(ge=0)
    abilities: tuple[str, ...] = ()
    synergy: SynergyRole | None = None
    consumable_bonus: StatBonus | None = None

    @field_validator("footprint")
    @classmethod
    def validate_footprint(cls, value: tuple[Position, ...]) -> tuple[Position, ...]:
        """Reject empty or self-overlapping footprints.

        Raises:
            CatalogError: If the footprint is empty or repeats a cell.
        """
        if not value:
            raise CatalogError("Piece footprint must contain at least one cell")
        if len({offset.as_cell() for offset in value}) != len(value):
            raise CatalogError("Piece footprint repeats a cell")
        return value

    def has_tag(self, tag: str) -> bool:
        """Check whether the template carries ``tag``."""
        return tag in self.tags


# =============================================================================
# Piece Instances
# =============================================================================


def footprint_cells(footprint: tuple[Position, ...], origin: Position) -> tuple[Cell, ...]:
    """Get the absolute cells a footprint covers when placed at ``origin``."""
    return tuple(origin.shifted(offset).as_cell() for offset in footprint)


class ConsumedEffect(BaseModel):
    """Record of a consumable applied to a creature at battle start."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_id: str
    source_name: str
    description: str
    applied_at: datetime
    bonus: StatBonus


class _PieceBase(BaseModel):
    """Fields shared by every piece variant."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    instance_id: str = Field(min_length=1)
    template: PieceTemplate
    stats: Stats

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def category(self) -> PieceCategory:
        return self.template.category

    @property
    def tags(self) -> tuple[str, ...]:
        return self.template.tags

    @property
    def cost(self) -> int:
        return self.template.cost

    @property
    def is_creature(self) -> bool:
        return self.template.category is PieceCategory.CREATURE

    @property
    def is_consumable(self) -> bool:
        return self.template.category is PieceCategory.CONSUMABLE

    def has_tag(self, tag: str) -> bool:
        return self.template.has_tag(tag)


class Piece(_PieceBase):
    """A piece instance that is not on the grid."""

    kind: Literal["unplaced"] = "unplaced"

    @classmethod
    def from_template(cls, template: PieceTemplate, instance_id: str) -> "Piece":
        """Stamp a fresh instance of ``template``."""
        return cls(instance_id=instance_id, template=template, stats=template.stats)

    def placed_at(self, position: Position) -> "PlacedPiece":
        """Return this piece on the grid at ``position``."""
        return PlacedPiece(
            instance_id=self.instance_id,
            template=self.template,
            stats=self.stats,
            position=position,
        )


class PlacedPiece(_PieceBase):
    """A piece instance occupying grid cells."""

    kind: Literal["placed"] = "placed"
    position: Position

    @property
    def cells(self) -> tuple[Cell, ...]:
        """Absolute cells covered by this piece."""
        return footprint_cells(self.template.footprint, self.position)

    @property
    def baseline_stats(self) -> Stats:
        """Stats before any consumable was applied."""
        return self.stats

    @property
    def effects(self) -> tuple[ConsumedEffect, ...]:
        return ()

    def placed_at(self, position: Position) -> "PlacedPiece":
        """Return this piece moved to ``position``, keeping its variant."""
        return self.model_copy(update={"position": position})

    def with_effect(self, effect: ConsumedEffect) -> "BuffedPiece":
        """Return this piece strengthened by a consumed effect."""
        bonus = effect.bonus
        return BuffedPiece(
            instance_id=self.instance_id,
            template=self.template,
            stats=self.stats.plus(attack=bonus.attack, health=bonus.health, speed=bonus.speed),
            position=self.position,
            original_stats=self.baseline_stats,
            consumed=(*self.effects, effect),
        )


class BuffedPiece(PlacedPiece):
    """A placed piece carrying one or more consumable effects."""

    kind: Literal["buffed"] = "buffed"  # type: ignore[assignment]
    original_stats: Stats
    consumed: tuple[ConsumedEffect, ...] = Field(min_length=1)

    @property
    def baseline_stats(self) -> Stats:
        return self.original_stats

    @property
    def effects(self) -> tuple[ConsumedEffect, ...]:
        return self.consumed


AnyPiece = Annotated[
    Union[Piece, PlacedPiece, BuffedPiece],
    Field(discriminator="kind"),
]
"""Any piece variant, discriminated by ``kind``."""


__all__ = [
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
]
