"""Save system for persisting world state to disk.

This package provides:
- SaveManager: Builds, writes, reads and commits save records
- LoadedRecordCell: Holder for the record most recently saved or loaded

Keyboard shortcuts live in sylvie.systems.save.hotkeys, which needs arcade.
"""

from sylvie.systems.save.base import LoadedRecordCell, SaveBaseManager
from sylvie.systems.save.manager import SaveManager

__all__ = ["LoadedRecordCell", "SaveBaseManager", "SaveManager"]
