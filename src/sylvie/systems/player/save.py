"""Player position codec for saving where the player stands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from sylvie.conf import settings
from sylvie.saves.base import BaseFeatureCodec
from sylvie.saves.registry import FeatureRegistry
from sylvie.types import Feature, Vector3

if TYPE_CHECKING:
    from sylvie.systems.game_context import GameContext

logger = logging.getLogger(__name__)


@FeatureRegistry.register
class SylviePositionCodec(BaseFeatureCodec[Vector3]):
    """Feature codec for the position of the entity tagged as the player."""

    feature: ClassVar[Feature] = Feature.SYLVIE_POSITION
    record_field: ClassVar[str] = "sylvie_position"

    def extract(self, context: GameContext) -> Vector3 | None:
        """Read the player entity's position."""
        player = context.find_with_tag(settings.PLAYER_TAG)
        if player is None:
            logger.warning("No entity tagged '%s' to save position from", settings.PLAYER_TAG)
            return None

        position = player.position
        return Vector3(float(position.x), float(position.y), float(position.z))

    def apply(self, payload: Vector3 | None, context: GameContext) -> bool:
        """Move the player entity to the saved position."""
        if payload is None:
            logger.warning("Save has no player position to restore")
            return False

        player = context.find_with_tag(settings.PLAYER_TAG)
        if player is None:
            logger.warning("No entity tagged '%s' to restore position to", settings.PLAYER_TAG)
            return False

        player.position = Vector3(payload.x, payload.y, payload.z)
        logger.debug("Restored player position (%.1f, %.1f, %.1f)", payload.x, payload.y, payload.z)
        return True
