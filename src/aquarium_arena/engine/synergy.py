"""Adjacency synergies and aggregate tank metrics.

Bonuses are never written back onto a piece. ``enhanced_stats`` derives
them on demand from the piece's current stats and its neighbours, so base
and enhanced values can always be queried side by side.

Adjacency rules, evaluated once per adjacent piece instance:

- Fern-class flora: +1 attack and +1 health.
- Anubias-class flora: +1 health (stacks across instances).
- Consumables (creatures only): the consumable's bonus, as a preview of
  what battle entry will apply.
- Schooling: neon-class creatures gain +1 attack per adjacent schooling
  creature and double their speed with three or more; cardinal-class
  creatures gain +2 attack per adjacent schooling creature.

With plant amplification enabled, a flora bonus doubles when an
amplifier apparatus sits next to the flora piece granting it.
"""

from __future__ import annotations

from collections.abc import Iterable

from aquarium_arena.core.constants import (
    BASE_WATER_QUALITY,
    CARDINAL_ATTACK_PER_SCHOOLMATE,
    CROWDING_THRESHOLD,
    LARGE_SCHOOL_SIZE,
    MAX_WATER_QUALITY,
    MIN_WATER_QUALITY,
    TAG_FILTRATION,
    TAG_FLORA,
    TAG_SCHOOLING,
)
from aquarium_arena.engine.grid import adjacent_cells
from aquarium_arena.models.analysis import ActiveBonus, PieceBreakdown, TankAnalysis
from aquarium_arena.models.enums import BonusSource, PieceCategory, SynergyRole
from aquarium_arena.models.pieces import AnyPiece, PlacedPiece, StatBonus, Stats
from aquarium_arena.models.tank import Tank


# =============================================================================
# Water Quality
# =============================================================================


def compute_water_quality(pieces: Iterable[AnyPiece]) -> int:
    """Compute water quality from a tank's contents.

    Starts at 5, gains 1 per placed flora or filtration piece and loses 1
    per placed creature beyond the fourth, clamped to 0-10. Pieces that are
    not on the grid do not count.
    """
    placed = [p for p in pieces if isinstance(p, PlacedPiece)]
    quality = BASE_WATER_QUALITY
    quality += sum(1 for p in placed if p.has_tag(TAG_FLORA) or p.has_tag(TAG_FILTRATION))
    creatures = sum(1 for p in placed if p.is_creature)
    if creatures > CROWDING_THRESHOLD:
        quality -= creatures - CROWDING_THRESHOLD
    return max(MIN_WATER_QUALITY, min(MAX_WATER_QUALITY, quality))


# =============================================================================
# Adjacency
# =============================================================================


def adjacent_pieces(piece: PlacedPiece, tank: Tank) -> list[PlacedPiece]:
    """Get the distinct placed pieces touching ``piece`` orthogonally."""
    seen: set[str] = set()
    neighbours: list[PlacedPiece] = []
    for cell in adjacent_cells(piece.cells):
        occupant_id = tank.occupant(cell)
        if occupant_id is None or occupant_id == piece.instance_id or occupant_id in seen:
            continue
        occupant = tank.get(occupant_id)
        if isinstance(occupant, PlacedPiece):
            seen.add(occupant_id)
            neighbours.append(occupant)
    return neighbours


def _is_amplified(flora: PlacedPiece, tank: Tank) -> bool:
    return any(
        n.template.synergy is SynergyRole.AMPLIFIER and n.category is PieceCategory.APPARATUS
        for n in adjacent_pieces(flora, tank)
    )


def _is_schooling_creature(piece: AnyPiece) -> bool:
    return piece.is_creature and piece.has_tag(TAG_SCHOOLING)


def _flora_bonus(neighbour: PlacedPiece, tank: Tank, amplify: bool) -> ActiveBonus | None:
    role = neighbour.template.synergy
    if role not in (SynergyRole.FERN, SynergyRole.ANUBIAS):
        return None
    amplified = amplify and _is_amplified(neighbour, tank)
    amount = 2 if amplified else 1
    suffix = " (amplified)" if amplified else ""
    if role is SynergyRole.FERN:
        return ActiveBonus(
            source=neighbour.name,
            effect=f"+{amount} ATK +{amount} HP{suffix}",
            type=BonusSource.ADJACENCY,
            attack=amount,
            health=amount,
        )
    return ActiveBonus(
        source=neighbour.name,
        effect=f"+{amount} HP{suffix}",
        type=BonusSource.ADJACENCY,
        health=amount,
    )


def _consumable_preview(neighbour: PlacedPiece) -> ActiveBonus | None:
    bonus = neighbour.template.consumable_bonus
    if bonus is None:
        return None
    return ActiveBonus(
        source=neighbour.name,
        effect=f"{bonus.describe()} (preview)",
        type=BonusSource.CONSUMABLE,
        attack=bonus.attack,
        health=bonus.health,
        speed=bonus.speed,
    )


def _schooling_bonuses(piece: PlacedPiece, neighbours: list[PlacedPiece]) -> list[ActiveBonus]:
    if not _is_schooling_creature(piece):
        return []
    schoolmates = sum(1 for n in neighbours if _is_schooling_creature(n))
    if not schoolmates:
        return []

    role = piece.template.synergy
    if role is SynergyRole.NEON_SCHOOL:
        bonuses = [
            ActiveBonus(
                source="Schooling",
                effect=f"+{schoolmates} ATK",
                type=BonusSource.ABILITY,
                attack=schoolmates,
            )
        ]
        if schoolmates >= LARGE_SCHOOL_SIZE:
            bonuses.append(
                ActiveBonus(
                    source="Large School",
                    effect="Double Speed",
                    type=BonusSource.ABILITY,
                    speed=piece.stats.speed,
                )
            )
        return bonuses
    if role is SynergyRole.CARDINAL_SCHOOL:
        attack = schoolmates * CARDINAL_ATTACK_PER_SCHOOLMATE
        return [
            ActiveBonus(
                source="Schooling",
                effect=f"+{attack} ATK",
                type=BonusSource.ABILITY,
                attack=attack,
            )
        ]
    return []


def _stat_bonuses(piece: PlacedPiece, tank: Tank, amplify: bool) -> list[ActiveBonus]:
    """Bonuses that feed into enhanced stats."""
    neighbours = adjacent_pieces(piece, tank)
    bonuses: list[ActiveBonus] = []
    for neighbour in neighbours:
        flora = _flora_bonus(neighbour, tank, amplify)
        if flora is not None:
            bonuses.append(flora)
        if neighbour.is_consumable and piece.is_creature:
            preview = _consumable_preview(neighbour)
            if preview is not None:
                bonuses.append(preview)
    bonuses.extend(_schooling_bonuses(piece, neighbours))
    return bonuses


def _consumed_summary(piece: PlacedPiece) -> ActiveBonus | None:
    """One stacked entry for every consumable already eaten.

    These effects are part of the piece's stats, so the entry is display
    only and carries zero deltas.
    """
    if not piece.effects:
        return None
    total = StatBonus(
        attack=sum(e.bonus.attack for e in piece.effects),
        health=sum(e.bonus.health for e in piece.effects),
        speed=sum(e.bonus.speed for e in piece.effects),
    )
    names = list(dict.fromkeys(e.source_name for e in piece.effects))
    return ActiveBonus(
        source="Consumed Items",
        effect=f"{total.describe()} (from {', '.join(names)})",
        type=BonusSource.CONSUMABLE,
    )


# =============================================================================
# Public Queries
# =============================================================================


def enhanced_stats(piece: AnyPiece, tank: Tank, *, amplify: bool = False) -> Stats:
    """Get a piece's stats with every applicable adjacency bonus added.

    Unplaced pieces take part in no synergy and return their own stats.
    """
    if not isinstance(piece, PlacedPiece):
        return piece.stats
    bonuses = _stat_bonuses(piece, tank, amplify)
    return piece.stats.plus(
        attack=sum(b.attack for b in bonuses),
        health=sum(b.health for b in bonuses),
        speed=sum(b.speed for b in bonuses),
    )


def active_bonuses(piece: AnyPiece, tank: Tank, *, amplify: bool = False) -> list[ActiveBonus]:
    """Describe every bonus affecting ``piece`` for display."""
    if not isinstance(piece, PlacedPiece):
        return []
    bonuses = _stat_bonuses(piece, tank, amplify)
    consumed = _consumed_summary(piece)
    if consumed is not None:
        bonuses.append(consumed)
    return bonuses


def bonus_providers(piece: AnyPiece, tank: Tank) -> list[str]:
    """List instance ids of adjacent pieces currently granting ``piece`` a bonus."""
    if not isinstance(piece, PlacedPiece):
        return []
    providers = []
    for neighbour in adjacent_pieces(piece, tank):
        if neighbour.template.synergy in (SynergyRole.FERN, SynergyRole.ANUBIAS):
            providers.append(neighbour.instance_id)
        elif neighbour.is_consumable and piece.is_creature:
            providers.append(neighbour.instance_id)
        elif _is_schooling_creature(neighbour) and _is_schooling_creature(piece):
            providers.append(neighbour.instance_id)
    return providers


def _average(total: int, count: int) -> int:
    """Integer mean rounded half up."""
    if count == 0:
        return 0
    return (2 * total + count) // (2 * count)


def analyze_tank(tank: Tank, *, amplify: bool = False) -> TankAnalysis:
    """Aggregate base and enhanced stats over a tank's placed pieces.

    Args:
        tank: Tank to analyze.
        amplify: Apply plant amplification.

    Returns:
        Totals over creatures (attack, speed) and over placed non-consumables
        (health), plus a per-creature breakdown.
    """
    placed = tank.placed_pieces
    creatures = [p for p in placed if p.is_creature]
    sturdy = [p for p in placed if not p.is_consumable]
    enhanced = {p.instance_id: enhanced_stats(p, tank, amplify=amplify) for p in placed}

    base_attack = sum(p.stats.attack for p in creatures)
    total_attack = sum(enhanced[p.instance_id].attack for p in creatures)
    base_health = sum(p.stats.health for p in sturdy)
    total_health = sum(enhanced[p.instance_id].health for p in sturdy)
    base_speed = _average(sum(p.stats.speed for p in creatures), len(creatures))
    speed = _average(sum(enhanced[p.instance_id].speed for p in creatures), len(creatures))

    breakdown = []
    for creature in creatures:
        original = creature.baseline_stats
        current = enhanced[creature.instance_id]
        breakdown.append(
            PieceBreakdown(
                piece=creature,
                original_stats=original,
                enhanced_stats=current,
                bonuses=Stats(
                    attack=current.attack - original.attack,
                    health=current.health - original.health,
                    speed=current.speed - original.speed,
                    max_health=current.max_health - original.max_health,
                ),
                active_bonuses=tuple(active_bonuses(creature, tank, amplify=amplify)),
                consumed=creature.effects,
            )
        )

    return TankAnalysis(
        base_attack=base_attack,
        bonus_attack=total_attack - base_attack,
        total_attack=total_attack,
        base_health=base_health,
        bonus_health=total_health - base_health,
        total_health=total_health,
        base_average_speed=base_speed,
        bonus_average_speed=speed - base_speed,
        average_speed=speed,
        creature_count=len(creatures),
        total_pieces=len(tank.pieces),
        water_quality=compute_water_quality(tank.pieces),
        breakdown=tuple(breakdown),
    )


__all__ = [
    "compute_water_quality",
    "adjacent_pieces",
    "enhanced_stats",
    "active_bonuses",
    "bonus_providers",
    "analyze_tank",
]
