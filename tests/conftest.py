"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Aquarium Arena test suite.
"""

from __future__ import annotations

import itertools
import random
from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from aquarium_arena.catalog import PieceCatalog, default_catalog
from aquarium_arena.core.config import Settings
from aquarium_arena.engine.grid import place
from aquarium_arena.models import Piece, Position, Side, Tank


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from aquarium_arena.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Provide default settings isolated from any local .env file."""
    monkeypatch.chdir(tmp_path)
    return Settings()


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random source."""
    return random.Random(1234)


# =============================================================================
# Catalog and Piece Fixtures
# =============================================================================


@pytest.fixture
def catalog() -> PieceCatalog:
    """Provide the built-in piece catalog."""
    return default_catalog()


@pytest.fixture
def make_piece(catalog: PieceCatalog) -> Callable[..., Piece]:
    """Factory for unplaced pieces with readable, unique instance ids.

    Returns:
        Function taking a template id and an optional instance id.
    """
    counter = itertools.count(1)

    def _make(template_id: str, instance_id: str | None = None) -> Piece:
        return Piece.from_template(
            catalog.get(template_id),
            instance_id or f"{template_id}-{next(counter)}",
        )

    return _make


@pytest.fixture
def build_tank(make_piece: Callable[..., Piece]) -> Callable[..., Tank]:
    """Factory for tanks laid out from ``(template_id, x, y)`` triples.

    Every placement must be valid; an invalid one fails the test.

    Returns:
        Function taking the layout and an optional owner side.
    """

    def _build(layout: list[tuple[str, int, int]], owner: Side = Side.PLAYER) -> Tank:
        tank = Tank.empty(owner)
        for template_id, x, y in layout:
            piece = make_piece(template_id)
            placed = place(piece, Position(x=x, y=y), tank)
            assert placed is not tank, f"could not place {template_id} at ({x}, {y})"
            tank = placed
        return tank

    return _build

