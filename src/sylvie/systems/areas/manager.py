"""Visited area tracking.

The VisitedAreaManager records which areas the player has entered. The set
only changes on area transitions, which is why it is saved as its own feature
instead of on every save.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from sylvie.systems.base import BaseSystem

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sylvie.systems.game_context import GameContext

logger = logging.getLogger(__name__)


class VisitedAreaManager(BaseSystem):
    """Tracks the set of visited area identifiers.

    Attributes:
        visited_areas: Identifiers of every area the player has entered. Read
            and replaced as a unit by the visited areas feature codec.
    """

    name: ClassVar[str] = "visited_areas"
    role: ClassVar[str] = "visited_area_manager"

    def __init__(self, visited_areas: Iterable[str] = ()) -> None:
        """Initialize the manager, optionally with already visited areas."""
        self.visited_areas: set[str] = set(visited_areas)

    def setup(self, context: GameContext) -> None:
        """Keep a reference to the context."""
        self.context = context

    def mark_visited(self, area_id: str) -> bool:
        """Record that the player entered an area.

        Returns:
            True if the area was not visited before.
        """
        if area_id in self.visited_areas:
            return False
        self.visited_areas.add(area_id)
        logger.info("Visited new area: %s", area_id)
        return True

    def has_visited(self, area_id: str) -> bool:
        """Check whether an area has been visited."""
        return area_id in self.visited_areas
