"""Player feature codec.

The player is the single entity tagged with settings.PLAYER_TAG. Its position
is saved as the SYLVIE_POSITION feature.
"""

from sylvie.systems.player.save import SylviePositionCodec

__all__ = ["SylviePositionCodec"]
