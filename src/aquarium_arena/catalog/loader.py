"""Piece catalog loading and validation.

The catalog is a load-time-fixed table of ``PieceTemplate`` values. Any
malformed entry (empty footprint, duplicate id, a consumable without a
bonus) raises ``CatalogError`` while loading so the defect surfaces at
startup instead of mid-game.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from aquarium_arena.catalog.pieces import PIECE_TABLE
from aquarium_arena.core.constants import RARITY_WEIGHTS
from aquarium_arena.core.exceptions import CatalogError
from aquarium_arena.core.logging import get_logger
from aquarium_arena.models.enums import PieceCategory
from aquarium_arena.models.pieces import PieceTemplate


logger = get_logger(__name__)


class PieceCatalog:
    """Read-only collection of piece templates.

    Example:
        >>> catalog = default_catalog()
        >>> catalog.get("neon-tetra").cost
        2
    """

    def __init__(self, templates: Iterable[PieceTemplate]) -> None:
        """Initialize the catalog.

        Args:
            templates: Validated templates, in table order.

        Raises:
            CatalogError: If the catalog is empty or ids repeat.
        """
        self._templates: dict[str, PieceTemplate] = {}
        for template in templates:
            if template.id in self._templates:
                raise CatalogError("Duplicate catalog id", piece_id=template.id)
            self._templates[template.id] = template
        if not self._templates:
            raise CatalogError("Catalog contains no pieces")

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[PieceTemplate]:
        return iter(self._templates.values())

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    @property
    def templates(self) -> list[PieceTemplate]:
        """All templates in table order."""
        return list(self._templates.values())

    def get(self, template_id: str) -> PieceTemplate:
        """Get a template by catalog id.

        Raises:
            KeyError: If no template has that id.
        """
        return self._templates[template_id]

    def rarity_weight(self, template: PieceTemplate) -> int:
        """Draw weight of ``template`` under weighted sampling."""
        return RARITY_WEIGHTS[template.rarity.value]


def _normalize_entry(entry: Mapping[str, Any]) -> dict[str, Any]:
    """Convert table shorthand (tuple offsets) into model input."""
    normalized = dict(entry)
    normalized["footprint"] = [
        offset if isinstance(offset, Mapping) else {"x": offset[0], "y": offset[1]}
        for offset in entry.get("footprint", [])
    ]
    return normalized


def _check_consumable(template: PieceTemplate) -> None:
    is_consumable = template.category is PieceCategory.CONSUMABLE
    if is_consumable and template.consumable_bonus is None:
        raise CatalogError("Consumable has no consumable_bonus", piece_id=template.id)
    if not is_consumable and template.consumable_bonus is not None:
        raise CatalogError("Only consumables may carry consumable_bonus", piece_id=template.id)


def load_catalog(entries: Iterable[Mapping[str, Any]]) -> PieceCatalog:
    """Validate raw table entries into a catalog.

    Args:
        entries: Raw piece definitions.

    Returns:
        The validated catalog.

    Raises:
        CatalogError: If any entry is malformed.
    """
    templates: list[PieceTemplate] = []
    for entry in entries:
        piece_id = str(entry.get("id", "")) or None
        try:
            template = PieceTemplate.model_validate(_normalize_entry(entry))
        except CatalogError as exc:
            raise CatalogError(exc.message, piece_id=piece_id) from exc
        except ValidationError as exc:
            raise CatalogError(
                f"Invalid catalog entry: {exc.error_count()} validation error(s)",
                piece_id=piece_id,
                details={"errors": str(exc)},
            ) from exc
        _check_consumable(template)
        templates.append(template)

    catalog = PieceCatalog(templates)
    logger.debug("Catalog loaded", pieces=len(catalog))
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> PieceCatalog:
    """Get the built-in catalog, validated once per process."""
    return load_catalog(PIECE_TABLE)


__all__ = [
    "PieceCatalog",
    "load_catalog",
    "default_catalog",
]
