"""Static piece table.

Each entry is validated into a ``PieceTemplate`` when the catalog loads.
Footprints are lists of ``(x, y)`` offsets from the placement origin.
"""

from __future__ import annotations

from typing import Any


PIECE_TABLE: list[dict[str, Any]] = [
    # Nano fish
    {
        "id": "neon-tetra",
        "name": "Neon Tetra",
        "category": "creature",
        "rarity": "common",
        "footprint": [(0, 0)],
        "stats": {"attack": 2, "health": 3, "speed": 6, "max_health": 3},
        "tags": ["freshwater", "schooling", "nano"],
        "cost": 2,
        "abilities": ["+1 ATK per adjacent Schooling fish", "Double speed if 3+ adjacent"],
        "synergy": "neon_school",
    },
    {
        "id": "cardinal-tetra",
        "name": "Cardinal Tetra",
        "category": "creature",
        "rarity": "uncommon",
        "footprint": [(0, 0)],
        "stats": {"attack": 3, "health": 2, "speed": 7, "max_health": 2},
        "tags": ["freshwater", "schooling", "nano"],
        "cost": 3,
        "abilities": ["+2 ATK per adjacent Schooling fish"],
        "synergy": "cardinal_school",
    },
    # Showpiece fish
    {
        "id": "betta",
        "name": "Siamese Betta",
        "category": "creature",
        "rarity": "uncommon",
        "footprint": [(0, 0), (0, 1)],
        "stats": {"attack": 5, "health": 4, "speed": 4, "max_health": 4},
        "tags": ["freshwater", "aggressive", "labyrinth"],
        "cost": 4,
        "abilities": ["First strike", "+2 ATK if alone in row"],
    },
    {
        "id": "angelfish",
        "name": "Angelfish",
        "category": "creature",
        "rarity": "rare",
        "footprint": [(0, 0), (0, 1), (1, 0)],
        "stats": {"attack": 4, "health": 6, "speed": 3, "max_health": 6},
        "tags": ["freshwater", "territorial", "showpiece"],
        "cost": 6,
        "abilities": ["+3 ATK if no orthogonal neighbors"],
    },
    # Predators
    {
        "id": "pike-cichlid",
        "name": "Pike Cichlid",
        "category": "creature",
        "rarity": "rare",
        "footprint": [(0, 0), (1, 0), (2, 0)],
        "stats": {"attack": 7, "health": 5, "speed": 5, "max_health": 5},
        "tags": ["freshwater", "carnivore", "predator"],
        "cost": 8,
        "abilities": ["Heals 2 HP when KOing smaller fish"],
    },
    # Bottom dwellers
    {
        "id": "bristlenose-pleco",
        "name": "Bristlenose Pleco",
        "category": "creature",
        "rarity": "uncommon",
        "footprint": [(0, 0), (1, 0)],
        "stats": {"attack": 1, "health": 7, "speed": 2, "max_health": 7},
        "tags": ["freshwater", "cleaner", "nocturnal"],
        "cost": 4,
        "abilities": ["End of round: remove adjacent algae", "+2 ATK at night"],
    },
    # Plants
    {
        "id": "java-fern",
        "name": "Java Fern",
        "category": "flora",
        "rarity": "common",
        "footprint": [(0, 0), (0, 1), (1, 0), (1, 1)],
        "stats": {"attack": 0, "health": 8, "speed": 0, "max_health": 8},
        "tags": ["flora", "freshwater"],
        "cost": 3,
        "abilities": ["Adjacent fish +1 ATK and +1 HP"],
        "synergy": "fern",
    },
    {
        "id": "anubias",
        "name": "Anubias",
        "category": "flora",
        "rarity": "uncommon",
        "footprint": [(0, 0), (0, 1)],
        "stats": {"attack": 0, "health": 6, "speed": 0, "max_health": 6},
        "tags": ["flora", "freshwater"],
        "cost": 4,
        "abilities": ["Adjacent fish +1 HP (stacks)"],
        "synergy": "anubias",
    },
    # Equipment
    {
        "id": "sponge-filter",
        "name": "Sponge Filter",
        "category": "apparatus",
        "rarity": "common",
        "footprint": [(0, 0), (1, 0)],
        "stats": {"attack": 0, "health": 5, "speed": 0, "max_health": 5},
        "tags": ["filtration", "equipment"],
        "cost": 5,
        "abilities": ["Water Quality +1", "Amplifies adjacent plant effects"],
        "synergy": "amplifier",
    },
    {
        "id": "heater",
        "name": "Aquarium Heater",
        "category": "apparatus",
        "rarity": "uncommon",
        "footprint": [(0, 0)],
        "stats": {"attack": 0, "health": 3, "speed": 0, "max_health": 3},
        "tags": ["equipment", "heater"],
        "cost": 4,
        "abilities": ["Keeps the tank warm"],
    },
    # Consumables
    {
        "id": "brine-shrimp",
        "name": "Brine Shrimp",
        "category": "consumable",
        "rarity": "common",
        "footprint": [(0, 0)],
        "stats": {"attack": 0, "health": 1, "speed": 0, "max_health": 1},
        "tags": ["food", "consumable"],
        "cost": 2,
        "abilities": ["+1 ATK & +1 HP to adjacent fish this battle"],
        "consumable_bonus": {"attack": 1, "health": 1},
    },
    {
        "id": "blood-worm",
        "name": "Blood Worm",
        "category": "consumable",
        "rarity": "common",
        "footprint": [(0, 0)],
        "stats": {"attack": 0, "health": 1, "speed": 0, "max_health": 1},
        "tags": ["food", "consumable"],
        "cost": 3,
        "abilities": ["+1 ATK & +2 HP to adjacent fish this battle"],
        "consumable_bonus": {"attack": 1, "health": 2},
    },
]


__all__ = ["PIECE_TABLE"]
