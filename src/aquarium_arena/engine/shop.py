"""Shop generation.

Draws piece instances from the catalog into fixed-size slot arrays. The
random source is injected so tests and seeded campaigns can replay exact
shops.
"""

from __future__ import annotations

import random
import uuid

from aquarium_arena.catalog.loader import PieceCatalog
from aquarium_arena.core.logging import get_logger
from aquarium_arena.models.game_state import ShopSlots
from aquarium_arena.models.pieces import Piece, PieceTemplate


logger = get_logger(__name__)


class ShopGenerator:
    """Draw shop offerings from a catalog.

    Draws are uniform over the catalog unless ``weighted`` is set, in which
    case each template is drawn in proportion to its rarity weight.

    Example:
        >>> shop = ShopGenerator(default_catalog(), random.Random(7))
        >>> len(shop.generate(5))
        5
    """

    def __init__(
        self,
        catalog: PieceCatalog,
        rng: random.Random,
        *,
        weighted: bool = False,
    ) -> None:
        """Initialize the generator.

        Args:
            catalog: Catalog to draw from.
            rng: Random source for draws and instance ids.
            weighted: Draw by rarity weight instead of uniformly.
        """
        self.catalog = catalog
        self.rng = rng
        self.weighted = weighted
        self._templates = catalog.templates
        self._weights = [catalog.rarity_weight(t) for t in self._templates]

    def new_instance_id(self, template: PieceTemplate) -> str:
        """Create a unique instance id derived from the random source."""
        suffix = uuid.UUID(int=self.rng.getrandbits(128), version=4)
        return f"{template.id}-{suffix.hex[:12]}"

    def draw_template(self) -> PieceTemplate:
        """Draw one template."""
        if self.weighted:
            return self.rng.choices(self._templates, weights=self._weights, k=1)[0]
        return self.rng.choice(self._templates)

    def draw(self) -> Piece:
        """Draw one fresh piece instance."""
        template = self.draw_template()
        return Piece.from_template(template, self.new_instance_id(template))

    def generate(self, slot_count: int) -> ShopSlots:
        """Fill ``slot_count`` slots with independent draws.

        Duplicates across slots are allowed.
        """
        slots = tuple(self.draw() for _ in range(slot_count))
        logger.debug("Shop generated", slots=[s.template.id for s in slots])
        return slots

    def reroll(self, slots: ShopSlots, locked_index: int | None = None) -> ShopSlots:
        """Redraw every slot except the locked one.

        Args:
            slots: Current shop slots.
            locked_index: Slot that keeps its occupant, if any.

        Returns:
            New slots of the same length.
        """
        return tuple(
            slot if index == locked_index else self.draw()
            for index, slot in enumerate(slots)
        )


__all__ = ["ShopGenerator"]
