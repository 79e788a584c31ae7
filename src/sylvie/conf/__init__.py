"""Django-like settings system for Sylvie.

Usage:
    # In your game project's settings.py
    SAVE_DIRECTORY = "userdata"
    DEFAULT_SAVE_NAME = "slot"

    # In your game code
    from sylvie.conf import settings

    print(settings.SAVE_DIRECTORY)  # "userdata"
"""

import importlib
import logging
import os
from typing import Any

from sylvie.conf import global_settings

logger = logging.getLogger(__name__)

SETTINGS_MODULE_ENV = "SYLVIE_SETTINGS_MODULE"


class LazySettings:
    """Settings proxy that resolves save settings on first access.

    Values come from global_settings, overridden by the uppercase names of
    the module named by SYLVIE_SETTINGS_MODULE (default: "settings"). A
    missing user module is not an error. Save workers read settings from
    other threads, so configure everything before the first save.
    """

    def __init__(self) -> None:
        """Initialize the proxy without loading anything."""
        self._wrapped: Settings | None = None

    def _load(self) -> "Settings":
        if self._wrapped is None:
            wrapped = Settings()
            module_name = os.environ.get(SETTINGS_MODULE_ENV, "settings")
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                logger.debug("No settings module '%s', using defaults", module_name)
            else:
                wrapped.update(module)
            self._wrapped = wrapped
        return self._wrapped

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        """Get a setting value, loading settings if not yet loaded."""
        return getattr(self._load(), name)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        """Set a setting value."""
        if name == "_wrapped":
            self.__dict__["_wrapped"] = value
        else:
            setattr(self._load(), name, value)

    def configure(self, **options: Any) -> None:  # noqa: ANN401
        """Override settings in code, skipping the user settings module.

        Example:
            settings.configure(
                SAVE_DIRECTORY="/tmp/saves",
                SAVE_ATOMIC_WRITES=False,
            )
        """
        if self._wrapped is None:
            self._wrapped = Settings()
        for name, value in options.items():
            setattr(self._wrapped, name, value)

    def is_configured(self) -> bool:
        """Check if settings have been loaded."""
        return self._wrapped is not None

    def reset(self) -> None:
        """Drop loaded values so the next access loads them again."""
        self._wrapped = None


class Settings:
    """Container for all settings with attribute access."""

    def __init__(self) -> None:
        """Initialize settings with defaults from global_settings."""
        self.update(global_settings)

    def update(self, module: object) -> None:
        """Copy every uppercase attribute of a module onto these settings."""
        for name in dir(module):
            if name.isupper():
                setattr(self, name, getattr(module, name))


# Global singleton instance
settings = LazySettings()

__all__ = ["LazySettings", "Settings", "global_settings", "settings"]
