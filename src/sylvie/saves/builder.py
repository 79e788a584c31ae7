"""Builds save records from live world state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sylvie.saves.record import SaveRecord

if TYPE_CHECKING:
    from sylvie.saves.loader import FeatureLoader
    from sylvie.systems.game_context import GameContext
    from sylvie.types import Feature

logger = logging.getLogger(__name__)


def generate_save(
    base: SaveRecord | None,
    *features: Feature,
    context: GameContext,
    codecs: FeatureLoader,
) -> SaveRecord:
    """Add the requested features of the live world to a save record.

    Most world state changes far less often than saves happen (visited areas
    only change on area transitions), so callers name the features to capture
    and everything else keeps its previous payload.

    Args:
        base: Existing record to update in place. If None, a new record with
            the default path name is created.
        *features: Features to capture, in order. Duplicates are dropped.
        context: Game context the codecs read from.
        codecs: Loaded feature codecs.

    Returns:
        The updated record (the same object as `base` when one was given).
    """
    record = base if base is not None else SaveRecord()

    requested = list(dict.fromkeys(features))
    if len(requested) != len(features):
        logger.debug("Dropped duplicate features from save request: %s", features)
    record.features = requested

    for feature in record.features:
        codecs.store(feature, record, context)

    return record
