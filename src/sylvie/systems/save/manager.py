"""Save and load system for incremental world state persistence.

A save file holds one SaveRecord. Records accumulate: each save names the
features that changed, those payloads are re-extracted from the live world,
and every other payload keeps the value from an earlier save. The whole record
is then written to `<SAVE_DIRECTORY>/<path_name><SAVE_FILE_EXTENSION>`.

The save system consists of:
- SaveRecord: The persisted unit (see sylvie.saves.record)
- FeatureLoader: Dispatches extract/apply to per-feature codecs
- SaveManager: File I/O, background writes and the loaded-record state

Key behaviors:
- Binary pickle encoding of the record's plain-dict form
- Atomic replace of the target file (configurable)
- Background writes on a thread pool, fire-and-forget for callers
- Every load failure (missing, unreadable, corrupt) is logged and reported
  as None, never raised

Example usage:
    save_manager = SaveManager()
    context.register_system(save_manager)

    # Save the player's position; visited areas keep their previous payload
    save_manager.save_game(Feature.SYLVIE_POSITION)

    # On the loading screen
    save_manager.try_load_game()
"""

from __future__ import annotations

import copy
import logging
import os
import pickle
import tempfile
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from sylvie.conf import settings
from sylvie.saves import FeatureLoader, SaveRecord, generate_save
from sylvie.systems.save.base import LoadedRecordCell, SaveBaseManager

if TYPE_CHECKING:
    from sylvie.systems.game_context import GameContext
    from sylvie.types import Feature

logger = logging.getLogger(__name__)


class _PlainUnpickler(pickle.Unpickler):
    """Unpickler that only accepts builtin containers and scalars.

    Save files hold the record's to_dict() form, so any global reference in
    the stream means the file was not written by SaveManager.
    """

    def find_class(self, module: str, name: str) -> Any:  # noqa: ANN401
        msg = f"Save files may not reference {module}.{name}"
        raise pickle.UnpicklingError(msg)


class SaveManager(SaveBaseManager):
    """Manages saving and loading of SaveRecords.

    Attributes:
        saves_dir: Directory containing save files.
        codecs: Feature codecs used to build and commit records.
    """

    name: ClassVar[str] = "save"

    def __init__(self, saves_dir: Path | None = None) -> None:
        """Initialize the save manager.

        Args:
            saves_dir: Optional custom path to the save file directory. If None,
                uses settings.SAVE_DIRECTORY relative to the working directory.
        """
        if saves_dir is None:
            saves_dir = Path.cwd() / settings.SAVE_DIRECTORY

        self.saves_dir = saves_dir
        self.saves_dir.mkdir(parents=True, exist_ok=True)

        self.codecs = FeatureLoader(settings)
        self._loaded = LoadedRecordCell()

        self._executor: ThreadPoolExecutor | None = None
        self._pending: set[Future[bool]] = set()
        self._pending_lock = threading.Lock()

    def setup(self, context: GameContext) -> None:
        """Load feature codecs and start with no loaded record."""
        self.context = context
        self.codecs.instantiate_all()
        self._loaded.clear()

    def cleanup(self) -> None:
        """Wait for pending writes and stop the worker threads."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        logger.debug("Save manager cleaned up")

    @property
    def loaded_record(self) -> SaveRecord | None:
        """The record most recently saved from or loaded into, or None."""
        return self._loaded.get()

    def reset(self) -> None:
        """Forget the loaded record so the next save starts a new one."""
        self._loaded.clear()

    def generate_save(self, base: SaveRecord | None, *features: Feature) -> SaveRecord:
        """Capture the requested features from this session's world into a record.

        See sylvie.saves.builder.generate_save.
        """
        return generate_save(base, *features, context=self.context, codecs=self.codecs)

    def get_save_path(self, name: str) -> Path:
        """Get the file path for a save path name.

        Any extension on the name is replaced by settings.SAVE_FILE_EXTENSION.

        Raises:
            ValueError: If the name is empty.
        """
        if not name:
            msg = "Save path name must not be empty"
            raise ValueError(msg)
        return (self.saves_dir / name).with_suffix(settings.SAVE_FILE_EXTENSION)

    def save_to_file(self, record: SaveRecord) -> bool:
        """Write a record to the file derived from its path name.

        Blocks while writing, so it is normally run on a worker thread by
        save_game(). All fields are written, whether or not their feature is
        listed in the record. An existing file is replaced.

        Args:
            record: The record to write. It is only read.

        Returns:
            True if the file was written, False if any error occurred.
        """
        try:
            save_path = self.get_save_path(record.path_name)
            logger.info("Saving to %s", save_path)

            data = pickle.dumps(record.to_dict(), protocol=pickle.HIGHEST_PROTOCOL)
            if settings.SAVE_ATOMIC_WRITES:
                self._write_atomic(save_path, data)
            else:
                with save_path.open("wb", buffering=settings.SAVE_BUFFER_SIZE) as f:
                    f.write(data)

        except Exception:
            logger.exception("Failed to save %s", record.path_name)
            return False
        else:
            logger.info("Game saved to %s", save_path)
            return True

    def _write_atomic(self, path: Path, data: bytes) -> None:
        """Write bytes to a temporary sibling file, then rename it over path."""
        fd, tmp_name = tempfile.mkstemp(prefix=path.name, suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb", buffering=settings.SAVE_BUFFER_SIZE) as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        finally:
            Path(tmp_name).unlink(missing_ok=True)

    def load_from_file(self, name: str) -> SaveRecord | None:
        """Read a record from the file derived from a path name.

        Blocks while reading. Safe to call from a worker thread.

        Args:
            name: Path name of the save, without extension.

        Returns:
            The record if the file exists and decodes, None otherwise. The
            reason for a failure is only logged.
        """
        try:
            save_path = self.get_save_path(name)

            if not save_path.exists():
                logger.warning("No save file found at %s", save_path)
                return None

            with save_path.open("rb") as f:
                data = _PlainUnpickler(f).load()

            record = SaveRecord.from_dict(data)

        except Exception:
            logger.exception("Couldn't load save %s", name)
            return None
        else:
            logger.info("Loaded save from %s", save_path)
            return record

    def commit_load(self, record: SaveRecord | None) -> bool:
        """Apply a record's features to the live world and make it the loaded record.

        Each feature listed in the record is applied in order. Payloads for
        unlisted features are ignored.

        Args:
            record: The record to apply. None is ignored with a warning.

        Returns:
            True if the record was committed, False if it was None.
        """
        if record is None:
            logger.warning("Tried to load a null save")
            return False

        for feature in record.features:
            self.codecs.apply(feature, record, self.context)

        self._loaded.set(record)
        logger.info("Committed save %s with %d features", record.path_name, len(record.features))
        return True

    def load_save(self, record: SaveRecord | None) -> bool:
        """Commit a record into the live world. Same as commit_load()."""
        return self.commit_load(record)

    def save_game(self, *features: Feature) -> Future[bool]:
        """Save features onto the loaded record and write it in the background.

        The record is built from world state before this method returns, and
        becomes the loaded record whether or not the write later succeeds.
        Callers do not need to wait on the returned future; write errors are
        only logged.

        Args:
            *features: Features that changed since the last save.

        Returns:
            Future resolving to the result of save_to_file().
        """
        record = self.generate_save(self.loaded_record, *features)
        self._loaded.set(record)

        # Later saves mutate the loaded record, so the writer gets its own copy
        snapshot = copy.deepcopy(record)
        future = self._get_executor().submit(self.save_to_file, snapshot)
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget_write)
        return future

    def try_load_game(self) -> bool:
        """Load and commit the save at the default path name.

        If the file does not exist or cannot be read, this does nothing.

        Returns:
            True if a save was committed.
        """
        return self.commit_load(self.load_from_file(settings.DEFAULT_SAVE_NAME))

    def wait_for_pending_writes(self, timeout: float | None = None) -> bool:
        """Block until background writes submitted so far have finished.

        Returns:
            True if all writes finished within the timeout.
        """
        with self._pending_lock:
            pending = list(self._pending)
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def save_exists(self, name: str | None = None) -> bool:
        """Check if a save file exists for a path name (default save if None)."""
        return self.get_save_path(name or settings.DEFAULT_SAVE_NAME).exists()

    def delete_save(self, name: str | None = None) -> bool:
        """Delete a save file.

        Args:
            name: Path name of the save, or None for the default save.

        Returns:
            True if the file existed and was deleted, False otherwise.
        """
        name = name or settings.DEFAULT_SAVE_NAME
        try:
            save_path = self.get_save_path(name)

            if save_path.exists():
                save_path.unlink()
            else:
                logger.warning("No save file to delete for %s", name)
                return False

        except Exception:
            logger.exception("Failed to delete save %s", name)
            return False
        else:
            logger.info("Deleted save %s", name)
            return True

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=settings.SAVE_WORKER_THREADS,
                thread_name_prefix="sylvie-save",
            )
        return self._executor

    def _forget_write(self, future: Future[bool]) -> None:
        with self._pending_lock:
            self._pending.discard(future)
