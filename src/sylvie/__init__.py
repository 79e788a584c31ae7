"""Sylvie - incremental, feature-tagged save/load for game worlds.

This package persists selected slices of game state ("features") to a single
binary save file and replays them into the running world later:
- Per-feature codecs that extract and apply world state
- Save records that accumulate features across saves
- Background writes and failure-tolerant loads
- Quick save/load hotkeys for arcade views

Quick start:
    from sylvie import Entity, Feature, create_context

    context = create_context()
    context.add_entity(Entity("Sylvie", tag="Player"))

    # Load the default save if there is one
    context.save_manager.try_load_game()

    # Later, after the player moved
    context.save_manager.save_game(Feature.SYLVIE_POSITION)

Settings:
    from sylvie.conf import settings

    settings.configure(SAVE_DIRECTORY="userdata")
"""

__version__ = "0.1.0"

from sylvie.conf import settings
from sylvie.helpers import create_context, setup_logging
from sylvie.saves import (
    BaseFeatureCodec,
    FeatureLoader,
    FeatureRegistry,
    MissingFeatureCodecError,
    SaveRecord,
    generate_save,
)
from sylvie.systems import (
    BaseSystem,
    DialogueVariableManager,
    Entity,
    GameContext,
    SaveManager,
    VisitedAreaManager,
)
from sylvie.types import Feature, Vector3

__all__ = [
    "BaseFeatureCodec",
    "BaseSystem",
    "DialogueVariableManager",
    "Entity",
    "Feature",
    "FeatureLoader",
    "FeatureRegistry",
    "GameContext",
    "MissingFeatureCodecError",
    "SaveManager",
    "SaveRecord",
    "Vector3",
    "VisitedAreaManager",
    "__version__",
    "create_context",
    "generate_save",
    "settings",
    "setup_logging",
]
