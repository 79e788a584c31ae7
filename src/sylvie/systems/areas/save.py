"""Visited areas codec for persisting which areas have been entered."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar, cast

from sylvie.saves.base import BaseFeatureCodec
from sylvie.saves.registry import FeatureRegistry
from sylvie.types import Feature

if TYPE_CHECKING:
    from sylvie.systems.areas.manager import VisitedAreaManager
    from sylvie.systems.game_context import GameContext

logger = logging.getLogger(__name__)


@FeatureRegistry.register
class VisitedAreasCodec(BaseFeatureCodec[set[str]]):
    """Feature codec for the visited area set, saved and restored as a unit."""

    feature: ClassVar[Feature] = Feature.VISITED_AREAS
    record_field: ClassVar[str] = "visited_areas"

    def extract(self, context: GameContext) -> set[str] | None:
        """Copy the visited area set from the area manager."""
        area_manager = cast("VisitedAreaManager | None", context.get_system("visited_areas"))
        if not area_manager:
            logger.warning("Visited area manager not available, cannot save visited areas")
            return None

        visited_areas = set(area_manager.visited_areas)
        logger.debug("Gathered %d visited areas", len(visited_areas))
        return visited_areas

    def apply(self, payload: set[str] | None, context: GameContext) -> bool:
        """Replace the area manager's visited set with the saved one."""
        if payload is None:
            logger.warning("Save has no visited areas to restore")
            return False

        area_manager = cast("VisitedAreaManager | None", context.get_system("visited_areas"))
        if not area_manager:
            logger.warning("Visited area manager not available, cannot restore visited areas")
            return False

        area_manager.visited_areas = set(payload)
        logger.debug("Restored %d visited areas", len(payload))
        return True
