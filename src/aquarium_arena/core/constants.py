"""Fixed rules constants for Aquarium Arena.

Tunable numbers live in ``core.config``; the values here are part of the
game's shape and never change at runtime.
"""

from __future__ import annotations

# =============================================================================
# Grid
# =============================================================================

GRID_WIDTH = 8
"""Number of columns in a tank grid."""

GRID_HEIGHT = 6
"""Number of rows in a tank grid."""

GRID_CELLS = GRID_WIDTH * GRID_HEIGHT
"""Total number of cells in a tank grid."""

# =============================================================================
# Water Quality
# =============================================================================

BASE_WATER_QUALITY = 5
"""Water quality of a tank before any contents are counted."""

MIN_WATER_QUALITY = 0
MAX_WATER_QUALITY = 10

CROWDING_THRESHOLD = 4
"""Creatures beyond this count each lower water quality by one."""

# =============================================================================
# Synergy
# =============================================================================

LARGE_SCHOOL_SIZE = 3
"""Adjacent schooling creatures needed for a neon-class speed doubling."""

CARDINAL_ATTACK_PER_SCHOOLMATE = 2
"""Attack a cardinal-class creature gains per adjacent schooling creature."""

# =============================================================================
# Tags
# =============================================================================

TAG_FLORA = "flora"
TAG_FILTRATION = "filtration"
TAG_SCHOOLING = "schooling"
TAG_AGGRESSIVE = "aggressive"

# =============================================================================
# Rarity
# =============================================================================

RARITY_WEIGHTS = {
    "common": 50,
    "uncommon": 30,
    "rare": 15,
    "epic": 4,
    "legendary": 1,
}
"""Relative draw weight of each rarity tier for weighted shop sampling."""

RARITY_SCORE_BONUS = {
    "common": 0.0,
    "uncommon": 0.5,
    "rare": 1.0,
    "epic": 1.5,
    "legendary": 2.0,
}
"""Quality score bonus the opponent gives each rarity tier."""


__all__ = [
    "GRID_WIDTH",
    "GRID_HEIGHT",
    "GRID_CELLS",
    "BASE_WATER_QUALITY",
    "MIN_WATER_QUALITY",
    "MAX_WATER_QUALITY",
    "CROWDING_THRESHOLD",
    "LARGE_SCHOOL_SIZE",
    "CARDINAL_ATTACK_PER_SCHOOLMATE",
    "TAG_FLORA",
    "TAG_FILTRATION",
    "TAG_SCHOOLING",
    "TAG_AGGRESSIVE",
    "RARITY_WEIGHTS",
    "RARITY_SCORE_BONUS",
]
