"""Dialogue variable store.

Dialogue scripts read and write named variables (flags, counters, chosen
names). The whole mapping is saved and restored by the dialogue variables
feature codec.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from sylvie.systems.base import BaseSystem

if TYPE_CHECKING:
    from sylvie.systems.game_context import GameContext

logger = logging.getLogger(__name__)

DialogueValue = str | int | float | bool


class DialogueVariableManager(BaseSystem):
    """Holds dialogue variables by name."""

    name: ClassVar[str] = "dialogue_variables"
    role: ClassVar[str] = "dialogue_variable_manager"

    def __init__(self, variables: dict[str, DialogueValue] | None = None) -> None:
        """Initialize the store, optionally with starting variables."""
        self.variables: dict[str, DialogueValue] = dict(variables or {})

    def setup(self, context: GameContext) -> None:
        """Keep a reference to the context."""
        self.context = context

    def get_variable(self, name: str, default: DialogueValue | None = None) -> DialogueValue | None:
        """Get a variable value, or default when unset."""
        return self.variables.get(name, default)

    def set_variable(self, name: str, value: DialogueValue) -> None:
        """Set a variable value."""
        self.variables[name] = value
        logger.debug("Dialogue variable %s = %r", name, value)
