"""Battle-entry resolution of consumable pieces.

Both sides go through ``resolve_consumables`` so player and opponent
tanks follow one rule set.
"""

from __future__ import annotations

from datetime import datetime

from aquarium_arena.core.logging import get_logger
from aquarium_arena.engine.grid import remove
from aquarium_arena.engine.synergy import adjacent_pieces
from aquarium_arena.models.pieces import ConsumedEffect, PlacedPiece
from aquarium_arena.models.tank import Tank


logger = get_logger(__name__)


def resolve_consumables(tank: Tank, *, now: datetime | None = None) -> Tank:
    """Apply every placed consumable to its adjacent creatures, then drop all consumables.

    Each adjacent creature gains the consumable's bonus permanently and
    becomes a ``BuffedPiece`` that remembers its pre-buff stats. Every
    consumable leaves the tank afterwards, whether it was placed, had a
    target, or neither.

    Args:
        tank: Tank at battle start.
        now: Timestamp recorded on applied effects (defaults to now).

    Returns:
        The tank with buffs applied and no consumables left.
    """
    applied_at = now or datetime.now()
    consumables = [p for p in tank.pieces if p.is_consumable]
    if not consumables:
        return tank

    applied = 0
    for consumable in consumables:
        bonus = consumable.template.consumable_bonus
        if not isinstance(consumable, PlacedPiece) or bonus is None:
            continue
        effect = ConsumedEffect(
            source_id=consumable.instance_id,
            source_name=consumable.name,
            description=f"{consumable.name}: {bonus.describe()}",
            applied_at=applied_at,
            bonus=bonus,
        )
        targets = {n.instance_id for n in adjacent_pieces(consumable, tank) if n.is_creature}
        if not targets:
            continue
        pieces = tuple(
            p.with_effect(effect) if p.instance_id in targets and isinstance(p, PlacedPiece) else p
            for p in tank.pieces
        )
        tank = tank.model_copy(update={"pieces": pieces})
        applied += len(targets)

    for consumable in consumables:
        tank = remove(consumable.instance_id, tank)

    logger.debug(
        "Consumables resolved",
        side=tank.owner.value,
        consumed=len(consumables),
        effects_applied=applied,
    )
    return tank


__all__ = ["resolve_consumables"]
