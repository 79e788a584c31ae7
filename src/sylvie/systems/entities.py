"""World entities located by tag."""

from __future__ import annotations

from dataclasses import dataclass, field

from sylvie.types import Vector3


@dataclass
class Entity:
    """A named world object with a tag and a 3D position.

    Attributes:
        name: Display name, unique within a context.
        tag: Lookup tag (e.g. "Player"). Feature codecs find entities by tag.
        position: Current world position.
    """

    name: str
    tag: str = ""
    position: Vector3 = field(default_factory=Vector3)
