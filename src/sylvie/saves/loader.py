"""Loader for feature codecs."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from sylvie.saves.registry import FeatureRegistry

if TYPE_CHECKING:
    from sylvie.conf import LazySettings
    from sylvie.saves.base import BaseFeatureCodec
    from sylvie.saves.record import SaveRecord
    from sylvie.systems.game_context import GameContext
    from sylvie.types import Feature

logger = logging.getLogger(__name__)


class MissingFeatureCodecError(Exception):
    """Raised when a Feature member has no registered codec."""

    def __init__(self, missing: list[Feature]) -> None:
        """Initialize with the features lacking a codec."""
        self.missing = missing
        names = ", ".join(feature.value for feature in missing)
        super().__init__(f"No feature codec registered for: {names}")


class FeatureLoader:
    """Loads feature codecs and dispatches extract/apply calls to them.

    The FeatureLoader handles:
    1. Importing codec modules to trigger registration
    2. Checking that every Feature member has a codec
    3. Instantiating one codec per feature
    4. Routing extract/apply calls to the right codec
    """

    def __init__(self, settings: LazySettings) -> None:
        """Initialize the feature loader.

        Args:
            settings: Configuration containing the INSTALLED_FEATURES list.
        """
        self.settings = settings
        self._instances: dict[Feature, BaseFeatureCodec] = {}

    def load_modules(self) -> None:
        """Import all configured codec modules to trigger registration."""
        installed_features = self.settings.INSTALLED_FEATURES or []
        for module_path in installed_features:
            try:
                importlib.import_module(module_path)
                logger.debug("Loaded feature codec module: %s", module_path)
            except ImportError:
                logger.exception("Could not load feature codec module '%s'", module_path)
                raise

    def instantiate_all(self) -> dict[Feature, BaseFeatureCodec]:
        """Create one instance of every registered codec.

        Returns:
            Dictionary mapping features to their codec instances.

        Raises:
            MissingFeatureCodecError: If any Feature member has no codec.
        """
        self.load_modules()

        missing = FeatureRegistry.missing()
        if missing:
            raise MissingFeatureCodecError(missing)

        for feature, codec_class in FeatureRegistry.get_all().items():
            self._instances[feature] = codec_class()
            logger.debug("Instantiated feature codec: %s", feature.value)

        logger.info("Instantiated %d feature codecs", len(self._instances))
        return self._instances

    def get_codec(self, feature: Feature) -> BaseFeatureCodec:
        """Get the codec instance for a feature.

        Raises:
            KeyError: If no codec was instantiated for the feature.
        """
        return self._instances[feature]

    def extract(self, feature: Feature, context: GameContext) -> Any:  # noqa: ANN401
        """Extract a feature's payload from the live world."""
        payload = self.get_codec(feature).extract(context)
        logger.debug("Extracted feature: %s", feature.value)
        return payload

    def store(self, feature: Feature, record: SaveRecord, context: GameContext) -> None:
        """Extract a feature and write its payload into the record."""
        codec = self.get_codec(feature)
        setattr(record, codec.record_field, self.extract(feature, context))

    def apply(self, feature: Feature, record: SaveRecord, context: GameContext) -> bool:
        """Apply a record's payload for one feature to the live world.

        Returns:
            True if the codec wrote world state.
        """
        codec = self.get_codec(feature)
        applied = codec.apply(getattr(record, codec.record_field), context)
        if applied:
            logger.debug("Applied feature: %s", feature.value)
        return applied
