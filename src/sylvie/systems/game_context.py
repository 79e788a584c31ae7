"""Game context giving feature codecs and systems access to the live world.

The GameContext is a registry of systems plus a locator for tagged entities.
Feature codecs receive a context on every extract/apply call instead of reaching
for globals, which keeps them testable with a mocked context.

Example usage:
    context = GameContext()
    context.register_system(VisitedAreaManager())
    context.add_entity(Entity("Sylvie", tag="Player"))

    player = context.find_with_tag("Player")
    areas = context.visited_area_manager
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sylvie.systems.areas.manager import VisitedAreaManager
    from sylvie.systems.base import BaseSystem
    from sylvie.systems.dialog.manager import DialogueVariableManager
    from sylvie.systems.entities import Entity
    from sylvie.systems.save.manager import SaveManager

logger = logging.getLogger(__name__)


class GameContext:
    """Central context object providing access to systems and entities.

    Systems are registered by name and, when they declare a role, exposed as an
    attribute of that name. Entities are looked up by tag.
    """

    visited_area_manager: VisitedAreaManager
    dialogue_variable_manager: DialogueVariableManager
    save_manager: SaveManager

    def __init__(self) -> None:
        """Initialize an empty context."""
        self._systems: dict[str, BaseSystem] = {}
        self._entities: list[Entity] = []

    def register_system(self, system: BaseSystem) -> None:
        """Register a system and run its setup.

        Args:
            system: The system instance to register. Its name must be unique.
        """
        self._systems[system.name] = system
        if system.role:
            setattr(self, system.role, system)
        system.setup(self)
        logger.debug("Registered system: %s", system.name)

    def get_system(self, name: str) -> BaseSystem | None:
        """Get a registered system by name, or None."""
        return self._systems.get(name)

    def get_systems(self) -> dict[str, BaseSystem]:
        """Get all registered systems."""
        return self._systems.copy()

    def add_entity(self, entity: Entity) -> None:
        """Add an entity to the world."""
        self._entities.append(entity)

    def remove_entity(self, entity: Entity) -> None:
        """Remove an entity from the world if present."""
        if entity in self._entities:
            self._entities.remove(entity)

    def find_with_tag(self, tag: str) -> Entity | None:
        """Return the first entity carrying the given tag, or None."""
        for entity in self._entities:
            if entity.tag == tag:
                return entity
        return None

    def cleanup(self) -> None:
        """Clean up every registered system."""
        for system in self._systems.values():
            system.cleanup()
