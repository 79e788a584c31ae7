"""Base class for feature codecs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

if TYPE_CHECKING:
    from sylvie.systems.game_context import GameContext
    from sylvie.types import Feature

PayloadT = TypeVar("PayloadT")


class BaseFeatureCodec(ABC, Generic[PayloadT]):
    """Abstract base class for feature codecs.

    A feature codec moves one slice of world state between the live game and a
    SaveRecord. extract() reads the live source and returns a copy suitable for
    serialization; apply() writes a payload back into the live sink. A codec
    must never touch another feature's slice of state.

    Class Attributes:
        feature: The Feature member this codec handles.
        record_field: Name of the SaveRecord attribute holding the payload.

    Example:
        @FeatureRegistry.register
        class WeatherCodec(BaseFeatureCodec[str]):
            feature: ClassVar[Feature] = Feature.WEATHER
            record_field: ClassVar[str] = "weather"

            def extract(self, context: GameContext) -> str | None:
                return context.get_system("weather").current_weather

            def apply(self, payload: str | None, context: GameContext) -> bool:
                if payload is None:
                    return False
                context.get_system("weather").current_weather = payload
                return True
    """

    feature: ClassVar[Feature]
    record_field: ClassVar[str]

    @abstractmethod
    def extract(self, context: GameContext) -> PayloadT | None:
        """Read this feature's state from the live world.

        Args:
            context: Game context providing access to systems and entities.

        Returns:
            A payload that shares no mutable state with the world, or None if
            the live source is not available.
        """

    @abstractmethod
    def apply(self, payload: PayloadT | None, context: GameContext) -> bool:
        """Overwrite this feature's live state with a payload.

        Must accept payloads from earlier sessions and be idempotent.

        Args:
            payload: Value previously produced by extract(), possibly restored
                from disk.
            context: Game context providing access to systems and entities.

        Returns:
            True if world state was written, False if there was nothing to
            apply or no sink to apply it to.
        """
