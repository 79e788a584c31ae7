"""Default settings for Sylvie.

Users can override these in their project's settings.py file.

Example:
    # In your project's settings.py:
    from sylvie.conf import global_settings

    # Override framework defaults
    SAVE_DIRECTORY = "userdata"
    QUICK_SAVE_FEATURES = ["sylvie_position"]

    # Register extra feature codecs
    INSTALLED_FEATURES = [
        *global_settings.INSTALLED_FEATURES,
        "mygame.systems.weather.save",
    ]
"""

# Save file settings
SAVE_DIRECTORY = "saves"
"""Directory holding save files. Relative paths resolve against the working directory."""

SAVE_FILE_EXTENSION = ".sylvie"
"""Extension that replaces any extension on a save's path name."""

DEFAULT_SAVE_NAME = "save0"
"""Path name for new records and for try_load_game()."""

SAVE_BUFFER_SIZE = 1_000
"""Write buffer size in bytes. Save files stay small, so this barely matters."""

SAVE_ATOMIC_WRITES = True
"""Write to a temporary file and rename it over the target.

When False the save file is overwritten in place, and a crash mid-write can
leave a file that fails to load.
"""

SAVE_WORKER_THREADS = 1
"""Number of background threads used for save_game() writes."""

# World settings
PLAYER_TAG = "Player"
"""Tag of the single controllable entity whose position is saved."""

# Hotkey settings
QUICK_SAVE_KEY = "F5"
"""Name of the arcade.key constant that triggers a quick save."""

QUICK_LOAD_KEY = "F9"
"""Name of the arcade.key constant that triggers a quick load."""

QUICK_SAVE_FEATURES = ["sylvie_position"]
"""Feature values saved by the quick save hotkey."""

# Logging settings
LOG_LEVEL = "INFO"
"""Level passed to setup_logging() by default."""

# Installed feature codecs (like Django's INSTALLED_APPS)
INSTALLED_FEATURES = [
    "sylvie.systems.player.save",
    "sylvie.systems.areas.save",
    "sylvie.systems.dialog.save",
]
"""List of module paths to import for feature codec registration.

Every member of sylvie.types.Feature needs a registered codec, otherwise the
FeatureLoader refuses to start.
"""
