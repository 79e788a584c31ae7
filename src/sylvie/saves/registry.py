"""Registry for feature codecs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from sylvie.types import Feature

if TYPE_CHECKING:
    from sylvie.saves.base import BaseFeatureCodec

logger = logging.getLogger(__name__)


class FeatureRegistry:
    """Central registry mapping each Feature to its codec class.

    Codecs register themselves using the @FeatureRegistry.register decorator.
    """

    _codecs: ClassVar[dict[Feature, type[BaseFeatureCodec]]] = {}

    @classmethod
    def register(cls, codec_class: type[BaseFeatureCodec]) -> type[BaseFeatureCodec]:
        """Register a feature codec class.

        Use as a decorator:
            @FeatureRegistry.register
            class MyCodec(BaseFeatureCodec):
                feature = Feature.MY_FEATURE
                record_field = "my_feature"
                ...

        Args:
            codec_class: The codec class to register.

        Returns:
            The same class (allows use as decorator).
        """
        feature = getattr(codec_class, "feature", None)
        if not isinstance(feature, Feature):
            msg = f"Feature codec {codec_class.__name__} must have a 'feature' class attribute"
            raise ValueError(msg)

        if not getattr(codec_class, "record_field", None):
            msg = f"Feature codec {codec_class.__name__} must have a 'record_field' class attribute"
            raise ValueError(msg)

        if feature in cls._codecs:
            logger.warning("Re-registering feature codec: %s", feature.value)

        cls._codecs[feature] = codec_class
        logger.debug("Registered feature codec: %s", feature.value)
        return codec_class

    @classmethod
    def get(cls, feature: Feature) -> type[BaseFeatureCodec] | None:
        """Get the codec class registered for a feature."""
        return cls._codecs.get(feature)

    @classmethod
    def get_all(cls) -> dict[Feature, type[BaseFeatureCodec]]:
        """Get all registered codec classes."""
        return cls._codecs.copy()

    @classmethod
    def is_registered(cls, feature: Feature) -> bool:
        """Check if a codec is registered for a feature."""
        return feature in cls._codecs

    @classmethod
    def missing(cls) -> list[Feature]:
        """List the Feature members that have no registered codec."""
        return [feature for feature in Feature if feature not in cls._codecs]

    @classmethod
    def clear(cls) -> None:
        """Clear all registered codecs (for testing)."""
        cls._codecs.clear()
