"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from sylvie.conf import settings
from sylvie.saves.registry import FeatureRegistry

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def configure_test_settings() -> Generator[None]:
    """Configure settings for each test and reset them afterwards.

    Save files go to a temporary directory so tests never touch the working
    directory.

    Yields:
        None
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        settings.configure(
            SAVE_DIRECTORY=str(Path(temp_dir) / "saves"),
            SAVE_FILE_EXTENSION=".sylvie",
            DEFAULT_SAVE_NAME="save0",
            SAVE_BUFFER_SIZE=1_000,
            SAVE_ATOMIC_WRITES=True,
            SAVE_WORKER_THREADS=1,
            PLAYER_TAG="Player",
            QUICK_SAVE_KEY="F5",
            QUICK_LOAD_KEY="F9",
            QUICK_SAVE_FEATURES=["sylvie_position"],
            LOG_LEVEL="DEBUG",
        )
        yield
        # Reset settings after test
        settings.reset()


@pytest.fixture
def preserve_feature_registry() -> Generator[None]:
    """Restore registered feature codecs after a test that modifies the registry.

    Yields:
        None
    """
    saved = FeatureRegistry.get_all()
    yield
    FeatureRegistry.clear()
    FeatureRegistry._codecs.update(saved)
