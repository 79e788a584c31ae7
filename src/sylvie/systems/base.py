"""Base class for pluggable systems.

Systems own one slice of world state each (visited areas, dialogue variables,
saving) and are registered on a GameContext so that feature codecs and other
systems can reach them by name.

Example:
    Creating a custom system::

        from sylvie.systems.base import BaseSystem

        class WeatherManager(BaseSystem):
            name = "weather"
            role = "weather_manager"

            def setup(self, context):
                self.current_weather = "clear"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from sylvie.systems.game_context import GameContext


class BaseSystem(ABC):
    """Base class for all pluggable systems.

    Attributes:
        name: Unique identifier for the system. Must be defined as a class variable.
        role: Optional attribute name under which GameContext exposes the system
            (e.g. "save_manager" makes it available as context.save_manager).
    """

    name: ClassVar[str]
    role: ClassVar[str] = ""

    @abstractmethod
    def setup(self, context: GameContext) -> None:
        """Initialize the system when a session starts.

        Args:
            context: Game context providing access to other systems via get_system().
        """

    def cleanup(self) -> None:  # noqa: B027
        """Called when the session ends or the game exits.

        Override this method to release resources such as threads or files.
        """

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        """Handle key press events.

        Args:
            symbol: Arcade key constant for the pressed key.
            modifiers: Bitfield of modifier keys held.

        Returns:
            True if the event was handled and should stop propagating, False otherwise.
        """
        return False
