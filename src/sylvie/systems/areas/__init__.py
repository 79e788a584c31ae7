"""Visited area system.

This package provides:
- VisitedAreaManager: Tracks which areas the player has entered
- VisitedAreasCodec: Saves and restores the visited area set
"""

from sylvie.systems.areas.manager import VisitedAreaManager
from sylvie.systems.areas.save import VisitedAreasCodec

__all__ = ["VisitedAreaManager", "VisitedAreasCodec"]
