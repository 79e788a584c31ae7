"""Custom types and enumerations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Feature(Enum):
    """Slices of world state that can be saved and loaded independently.

    Values are written to save files, so they must stay stable. Every member
    needs a codec registered with FeatureRegistry.
    """

    SYLVIE_POSITION = "sylvie_position"
    VISITED_AREAS = "visited_areas"
    DIALOGUE_VARIABLES = "dialogue_variables"


@dataclass(frozen=True)
class Vector3:
    """Serializable 3D position."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization."""
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: dict[str, float]) -> Vector3:
        """Create from dictionary loaded from save file."""
        return cls(x=float(data["x"]), y=float(data["y"]), z=float(data["z"]))
