"""Helper functions for setting up a Sylvie session.

Users can call create_context() to get a GameContext with the built-in
systems registered, or assemble one by hand for more control.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.logging import RichHandler

from sylvie.conf import settings
from sylvie.systems import DialogueVariableManager, GameContext, SaveManager, VisitedAreaManager

if TYPE_CHECKING:
    from pathlib import Path


def setup_logging(log_level: str | None = None) -> None:
    """Configure logging for the game.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). If
            None, uses settings.LOG_LEVEL.

    Side effects:
        - Configures the root logger with RichHandler
        - Sets the specified log level
    """
    log_level = log_level or settings.LOG_LEVEL
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )


def create_context(saves_dir: Path | None = None) -> GameContext:
    """Create a GameContext with the built-in systems registered.

    Registers the visited area manager, the dialogue variable manager and the
    save manager (in that order, so the save manager's codecs can reach the
    other two). The player entity is not created; add one tagged with
    settings.PLAYER_TAG once it spawns.

    Args:
        saves_dir: Optional custom save file directory for the SaveManager.

    Returns:
        The populated context.

    Example:
        >>> context = create_context()
        >>> context.add_entity(Entity("Sylvie", tag="Player"))
        >>> context.save_manager.try_load_game()
    """
    context = GameContext()
    context.register_system(VisitedAreaManager())
    context.register_system(DialogueVariableManager())
    context.register_system(SaveManager(saves_dir))
    return context
