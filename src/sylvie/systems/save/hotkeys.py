"""Quick save and quick load keyboard shortcuts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import arcade

from sylvie.conf import settings
from sylvie.types import Feature

if TYPE_CHECKING:
    from sylvie.systems.save.base import SaveBaseManager

logger = logging.getLogger(__name__)


class SaveHotkeys:
    """Binds arcade key presses to quick save and quick load.

    Forward a view's on_key_press to this object. By default F5 saves the
    features in settings.QUICK_SAVE_FEATURES and F9 loads the default save.

    Example:
        class GameView(arcade.View):
            def on_key_press(self, symbol, modifiers):
                if self.save_hotkeys.on_key_press(symbol, modifiers):
                    return
                ...
    """

    def __init__(self, save_manager: SaveBaseManager) -> None:
        """Initialize with the save manager to drive."""
        self.save_manager = save_manager
        self.quick_save_key: int = getattr(arcade.key, settings.QUICK_SAVE_KEY)
        self.quick_load_key: int = getattr(arcade.key, settings.QUICK_LOAD_KEY)
        self.quick_save_features = [Feature(value) for value in settings.QUICK_SAVE_FEATURES]

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        """Handle quick save/load hotkeys.

        Args:
            symbol: Keyboard symbol.
            modifiers: Key modifiers.

        Returns:
            True if hotkey was handled.
        """
        if symbol == self.quick_save_key:
            self.save_manager.save_game(*self.quick_save_features)
            logger.info("Quick save started")
            return True
        if symbol == self.quick_load_key:
            if self.save_manager.try_load_game():
                logger.info("Quick load completed")
            else:
                logger.warning("No save found for quick load")
            return True
        return False
