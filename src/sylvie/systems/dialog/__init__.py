"""Dialogue variable system.

This package provides:
- DialogueVariableManager: Named variables read and written by dialogue
- DialogueVariablesCodec: Saves and restores all dialogue variables
"""

from sylvie.systems.dialog.manager import DialogueValue, DialogueVariableManager
from sylvie.systems.dialog.save import DialogueVariablesCodec

__all__ = ["DialogueValue", "DialogueVariableManager", "DialogueVariablesCodec"]
