"""The save record persisted to disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sylvie.conf import settings
from sylvie.types import Feature, Vector3


def _default_path_name() -> str:
    return settings.DEFAULT_SAVE_NAME


@dataclass
class SaveRecord:
    """An accumulating snapshot of selected world state.

    `features` lists the payload fields that are current as of the most recent
    save. Payloads for features not listed may still hold values from earlier
    saves; they are kept so later saves can accumulate, but consumers must not
    trust them.

    Attributes:
        features: Features captured by the most recent save, in request order.
        path_name: File name of the record without extension.
        sylvie_position: Position of the player entity.
        visited_areas: Identifiers of visited areas.
        dialogue_variables: Dialogue variables by name.
    """

    features: list[Feature] = field(default_factory=list)
    path_name: str = field(default_factory=_default_path_name)

    sylvie_position: Vector3 | None = None
    visited_areas: set[str] | None = None
    dialogue_variables: dict[str, Any] | None = None

    def has_feature(self, feature: Feature) -> bool:
        """Check whether a feature's payload is current in this record."""
        return feature in self.features

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain Python types for serialization.

        Every field is written, including payloads whose feature is not
        listed in `features`.
        """
        return {
            "features": [feature.value for feature in self.features],
            "path_name": self.path_name,
            "sylvie_position": self.sylvie_position.to_dict() if self.sylvie_position is not None else None,
            "visited_areas": sorted(self.visited_areas) if self.visited_areas is not None else None,
            "dialogue_variables": dict(self.dialogue_variables) if self.dialogue_variables is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SaveRecord:
        """Create from a dictionary loaded from a save file.

        Values are checked, not coerced: data that to_dict() could not have
        produced is rejected.

        Raises:
            KeyError: If a required field is missing.
            TypeError: If a field has the wrong type.
            ValueError: If a feature tag is unknown or repeated.
        """
        if not isinstance(data, dict):
            msg = f"Save data must be a dict, not {type(data).__name__}"
            raise TypeError(msg)

        feature_values = _str_list(data["features"], "features")
        features = [Feature(value) for value in feature_values]
        if len(set(features)) != len(features):
            msg = f"Duplicate feature tags in save data: {feature_values}"
            raise ValueError(msg)

        path_name = data["path_name"]
        if not isinstance(path_name, str):
            msg = f"path_name must be a str, not {type(path_name).__name__}"
            raise TypeError(msg)

        position = data.get("sylvie_position")
        visited_areas = data.get("visited_areas")
        dialogue_variables = data.get("dialogue_variables")
        return cls(
            features=features,
            path_name=path_name,
            sylvie_position=_position(position) if position is not None else None,
            visited_areas=set(_str_list(visited_areas, "visited_areas")) if visited_areas is not None else None,
            dialogue_variables=_variables(dialogue_variables) if dialogue_variables is not None else None,
        )


def _str_list(value: Any, name: str) -> list[str]:  # noqa: ANN401
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        msg = f"{name} must be a list of str"
        raise TypeError(msg)
    return value


def _position(value: Any) -> Vector3:  # noqa: ANN401
    if not isinstance(value, dict) or set(value) != {"x", "y", "z"}:
        msg = "sylvie_position must be a dict with keys x, y and z"
        raise TypeError(msg)
    for coordinate in value.values():
        # bool is an int subclass but never a coordinate
        if isinstance(coordinate, bool) or not isinstance(coordinate, int | float):
            msg = "sylvie_position coordinates must be numbers"
            raise TypeError(msg)
    return Vector3.from_dict(value)


def _variables(value: Any) -> dict[str, Any]:  # noqa: ANN401
    if not isinstance(value, dict) or not all(isinstance(key, str) for key in value):
        msg = "dialogue_variables must be a dict with str keys"
        raise TypeError(msg)
    return dict(value)
