"""Game systems owning the slices of world state that can be saved."""

from sylvie.systems.areas import VisitedAreaManager
from sylvie.systems.base import BaseSystem
from sylvie.systems.dialog import DialogueVariableManager
from sylvie.systems.entities import Entity
from sylvie.systems.game_context import GameContext
from sylvie.systems.save import LoadedRecordCell, SaveManager

__all__ = [
    "BaseSystem",
    "DialogueVariableManager",
    "Entity",
    "GameContext",
    "LoadedRecordCell",
    "SaveManager",
    "VisitedAreaManager",
]
