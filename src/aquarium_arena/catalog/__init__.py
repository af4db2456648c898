"""Piece catalog: the static table of placeable piece templates."""

from __future__ import annotations

from aquarium_arena.catalog.loader import PieceCatalog, default_catalog, load_catalog
from aquarium_arena.catalog.pieces import PIECE_TABLE


__all__ = [
    "PIECE_TABLE",
    "PieceCatalog",
    "default_catalog",
    "load_catalog",
]
