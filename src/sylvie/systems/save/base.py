"""Base class for SaveManager and the loaded-record cell."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from sylvie.systems.base import BaseSystem

if TYPE_CHECKING:
    from concurrent.futures import Future

    from sylvie.saves.record import SaveRecord
    from sylvie.types import Feature


class LoadedRecordCell:
    """Lock-guarded holder for the record most recently saved from or loaded into.

    Each get or set is atomic. A read-modify-write sequence across calls is
    not: two threads saving at once can lose an update, last writer wins.
    """

    def __init__(self) -> None:
        """Initialize an empty cell."""
        self._lock = threading.Lock()
        self._record: SaveRecord | None = None

    def get(self) -> SaveRecord | None:
        """Return the current record, or None."""
        with self._lock:
            return self._record

    def set(self, record: SaveRecord) -> None:
        """Replace the current record."""
        with self._lock:
            self._record = record

    def clear(self) -> None:
        """Forget the current record."""
        with self._lock:
            self._record = None


class SaveBaseManager(BaseSystem, ABC):
    """Base class for SaveManager."""

    role = "save_manager"

    @abstractmethod
    def save_to_file(self, record: SaveRecord) -> bool:
        """Write a record to the file named by its path name."""
        ...

    @abstractmethod
    def load_from_file(self, name: str) -> SaveRecord | None:
        """Read a record from the file with the given path name."""
        ...

    @abstractmethod
    def commit_load(self, record: SaveRecord | None) -> bool:
        """Apply a record to the live world and make it the loaded record."""
        ...

    @abstractmethod
    def save_game(self, *features: Feature) -> Future[bool]:
        """Save the given features onto the loaded record in the background."""
        ...

    @abstractmethod
    def try_load_game(self) -> bool:
        """Load and commit the default save if it exists."""
        ...
