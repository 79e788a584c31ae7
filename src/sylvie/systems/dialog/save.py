"""Dialogue variables codec."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, cast

from sylvie.saves.base import BaseFeatureCodec
from sylvie.saves.registry import FeatureRegistry
from sylvie.types import Feature

if TYPE_CHECKING:
    from sylvie.systems.dialog.manager import DialogueVariableManager
    from sylvie.systems.game_context import GameContext

logger = logging.getLogger(__name__)


@FeatureRegistry.register
class DialogueVariablesCodec(BaseFeatureCodec[dict[str, Any]]):
    """Feature codec for the dialogue variable store."""

    feature: ClassVar[Feature] = Feature.DIALOGUE_VARIABLES
    record_field: ClassVar[str] = "dialogue_variables"

    def extract(self, context: GameContext) -> dict[str, Any] | None:
        """Copy all dialogue variables."""
        dialogue_manager = cast("DialogueVariableManager | None", context.get_system("dialogue_variables"))
        if not dialogue_manager:
            logger.warning("Dialogue variable manager not available, cannot save dialogue variables")
            return None
        return dict(dialogue_manager.variables)

    def apply(self, payload: dict[str, Any] | None, context: GameContext) -> bool:
        """Replace all dialogue variables with the saved ones."""
        if payload is None:
            logger.warning("Save has no dialogue variables to restore")
            return False

        dialogue_manager = cast("DialogueVariableManager | None", context.get_system("dialogue_variables"))
        if not dialogue_manager:
            logger.warning("Dialogue variable manager not available, cannot restore dialogue variables")
            return False

        dialogue_manager.variables = dict(payload)
        logger.debug("Restored %d dialogue variables", len(payload))
        return True
