"""Feature codecs and save records for persisting world state."""

from sylvie.saves.base import BaseFeatureCodec
from sylvie.saves.builder import generate_save
from sylvie.saves.loader import FeatureLoader, MissingFeatureCodecError
from sylvie.saves.record import SaveRecord
from sylvie.saves.registry import FeatureRegistry

__all__ = [
    "BaseFeatureCodec",
    "FeatureLoader",
    "FeatureRegistry",
    "MissingFeatureCodecError",
    "SaveRecord",
    "generate_save",
]
