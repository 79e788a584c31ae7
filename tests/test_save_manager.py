"""Tests for SaveManager file I/O, commit and orchestration."""

import pickle
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from sylvie.conf import settings
from sylvie.helpers import create_context
from sylvie.saves import SaveRecord
from sylvie.systems.entities import Entity
from sylvie.systems.save import SaveManager
from sylvie.types import Feature, Vector3


class SaveManagerTestCase(unittest.TestCase):
    """Base class creating a populated world in a temporary save directory."""

    def setUp(self) -> None:
        """Create a context with a player, visited areas and dialogue variables."""
        self._temp_dir = tempfile.TemporaryDirectory()
        self.saves_dir = Path(self._temp_dir.name)

        self.context = create_context(self.saves_dir)
        self.save_manager: SaveManager = self.context.save_manager
        self.player = Entity("Sylvie", tag="Player", position=Vector3(1.0, 2.0, 3.0))
        self.context.add_entity(self.player)
        self.area_manager = self.context.visited_area_manager
        self.area_manager.visited_areas = {"cave", "village"}
        self.dialogue_manager = self.context.dialogue_variable_manager

    def tearDown(self) -> None:
        """Stop background writers and remove the save directory."""
        self.context.cleanup()
        self._temp_dir.cleanup()


class TestSavePaths(SaveManagerTestCase):
    """Test save path derivation."""

    def test_path_uses_extension(self) -> None:
        """Test that the path is the name plus the save extension."""
        assert self.save_manager.get_save_path("save0") == self.saves_dir / "save0.sylvie"

    def test_path_replaces_existing_extension(self) -> None:
        """Test that an extension on the name is replaced."""
        assert self.save_manager.get_save_path("save0.json") == self.saves_dir / "save0.sylvie"

    def test_default_directory_from_settings(self) -> None:
        """Test that the save directory defaults to settings.SAVE_DIRECTORY."""
        manager = SaveManager()

        assert manager.saves_dir == Path(settings.SAVE_DIRECTORY)
        assert manager.saves_dir.is_dir()

    def test_empty_name_is_rejected(self) -> None:
        """Test that an empty path name cannot be saved."""
        record = SaveRecord(path_name="")

        assert self.save_manager.save_to_file(record) is False
        assert list(self.saves_dir.iterdir()) == []


class TestSaveToFile(SaveManagerTestCase):
    """Test writing and reading save files."""

    def test_round_trip(self) -> None:
        """Test that a written record reads back equal in all fields."""
        self.dialogue_manager.set_variable("apples", 3)
        record = self.save_manager.generate_save(
            None, Feature.SYLVIE_POSITION, Feature.VISITED_AREAS, Feature.DIALOGUE_VARIABLES
        )

        assert self.save_manager.save_to_file(record) is True

        loaded = self.save_manager.load_from_file("save0")

        assert loaded == record
        assert loaded is not record

    def test_untagged_payloads_are_written(self) -> None:
        """Test that the encoding is not feature-aware."""
        record = SaveRecord(features=[Feature.SYLVIE_POSITION], visited_areas={"cave"})

        self.save_manager.save_to_file(record)
        loaded = self.save_manager.load_from_file("save0")

        assert loaded.visited_areas == {"cave"}

    def test_existing_file_is_replaced(self) -> None:
        """Test that saving twice keeps only the latest record."""
        self.save_manager.save_to_file(SaveRecord(sylvie_position=Vector3(1.0, 1.0, 1.0)))
        self.save_manager.save_to_file(SaveRecord(sylvie_position=Vector3(2.0, 2.0, 2.0)))

        loaded = self.save_manager.load_from_file("save0")

        assert loaded.sylvie_position == Vector3(2.0, 2.0, 2.0)
        assert [path.name for path in self.saves_dir.iterdir()] == ["save0.sylvie"]

    def test_in_place_write(self) -> None:
        """Test writing without the temporary file step."""
        settings.configure(SAVE_ATOMIC_WRITES=False)
        record = SaveRecord(path_name="direct", visited_areas={"lake"})

        assert self.save_manager.save_to_file(record) is True
        assert self.save_manager.load_from_file("direct") == record

    def test_failed_replace_keeps_previous_file(self) -> None:
        """Test that a failed atomic write leaves the old save readable."""
        old = SaveRecord(features=[Feature.VISITED_AREAS], visited_areas={"cave"})
        self.save_manager.save_to_file(old)

        with patch("sylvie.systems.save.manager.os.replace", side_effect=OSError("disk full")):
            result = self.save_manager.save_to_file(SaveRecord(visited_areas={"tower"}))

        assert result is False
        assert self.save_manager.load_from_file("save0") == old
        assert [path.name for path in self.saves_dir.iterdir()] == ["save0.sylvie"]


class TestLoadFromFile(SaveManagerTestCase):
    """Test load failure handling."""

    def test_missing_file_returns_none(self) -> None:
        """Test that a missing save loads as None."""
        assert self.save_manager.load_from_file("nothing_here") is None

    def test_truncated_file_returns_none(self) -> None:
        """Test that a partially written file loads as None."""
        self.save_manager.save_to_file(SaveRecord(visited_areas={"cave"}))
        path = self.save_manager.get_save_path("save0")
        path.write_bytes(path.read_bytes()[:10])

        assert self.save_manager.load_from_file("save0") is None

    def test_garbage_file_returns_none(self) -> None:
        """Test that a file with random content loads as None."""
        self.save_manager.get_save_path("save0").write_bytes(b"not a save file")

        assert self.save_manager.load_from_file("save0") is None

    def test_wrong_structure_returns_none(self) -> None:
        """Test that a valid pickle of the wrong shape loads as None."""
        self.save_manager.get_save_path("save0").write_bytes(pickle.dumps([1, 2, 3]))

        assert self.save_manager.load_from_file("save0") is None

    def test_foreign_objects_are_refused(self) -> None:
        """Test that pickles referencing classes are not unpickled."""
        self.save_manager.get_save_path("save0").write_bytes(pickle.dumps(SaveRecord()))

        assert self.save_manager.load_from_file("save0") is None

    def test_unknown_feature_returns_none(self) -> None:
        """Test that a record with an unknown feature tag loads as None."""
        data = SaveRecord().to_dict()
        data["features"] = ["weather"]
        self.save_manager.get_save_path("save0").write_bytes(pickle.dumps(data))

        assert self.save_manager.load_from_file("save0") is None


    def write_raw(self, **overrides: object) -> None:
        """Write the default save's plain form with some fields replaced."""
        data = SaveRecord(features=[Feature.VISITED_AREAS], visited_areas={"cave"}).to_dict()
        data.update(overrides)
        self.save_manager.get_save_path("save0").write_bytes(pickle.dumps(data))

    def test_valid_raw_data_loads(self) -> None:
        """Test that untouched plain data still loads."""
        self.write_raw()

        assert self.save_manager.load_from_file("save0").visited_areas == {"cave"}

    def test_visited_areas_string_returns_none(self) -> None:
        """Test that a string is not split into a set of characters."""
        self.write_raw(visited_areas="cave")

        assert self.save_manager.load_from_file("save0") is None

    def test_visited_areas_non_string_items_return_none(self) -> None:
        """Test that visited areas must hold strings."""
        self.write_raw(visited_areas=["cave", 7])

        assert self.save_manager.load_from_file("save0") is None

    def test_dialogue_variables_pairs_return_none(self) -> None:
        """Test that a list of pairs is not turned into a dict."""
        self.write_raw(dialogue_variables=[["a", 1]])

        assert self.save_manager.load_from_file("save0") is None

    def test_dialogue_variables_non_string_keys_return_none(self) -> None:
        """Test that dialogue variable names must be strings."""
        self.write_raw(dialogue_variables={1: "a"})

        assert self.save_manager.load_from_file("save0") is None

    def test_path_name_number_returns_none(self) -> None:
        """Test that a numeric path name is not converted to a string."""
        self.write_raw(path_name=42)

        assert self.save_manager.load_from_file("save0") is None

    def test_features_string_returns_none(self) -> None:
        """Test that the feature list must be a list."""
        self.write_raw(features="visited_areas")

        assert self.save_manager.load_from_file("save0") is None

    def test_duplicate_features_return_none(self) -> None:
        """Test that a feature tag may appear only once."""
        self.write_raw(features=["sylvie_position", "sylvie_position"])

        assert self.save_manager.load_from_file("save0") is None

    def test_position_with_text_coordinates_returns_none(self) -> None:
        """Test that position coordinates must be numbers."""
        self.write_raw(sylvie_position={"x": "1", "y": 2.0, "z": 3.0})

        assert self.save_manager.load_from_file("save0") is None

    def test_position_with_bool_coordinates_returns_none(self) -> None:
        """Test that booleans are not accepted as coordinates."""
        self.write_raw(sylvie_position={"x": True, "y": 2.0, "z": 3.0})

        assert self.save_manager.load_from_file("save0") is None

    def test_position_list_returns_none(self) -> None:
        """Test that a position must be a dict of coordinates."""
        self.write_raw(sylvie_position=[1.0, 2.0, 3.0])

        assert self.save_manager.load_from_file("save0") is None

    def test_integer_position_loads(self) -> None:
        """Test that integer coordinates are accepted as numbers."""
        self.write_raw(sylvie_position={"x": 1, "y": 2, "z": 3})

        assert self.save_manager.load_from_file("save0").sylvie_position == Vector3(1.0, 2.0, 3.0)


class TestCommitLoad(SaveManagerTestCase):
    """Test replaying records into the live world."""

    def test_starts_without_loaded_record(self) -> None:
        """Test that a new session has no loaded record."""
        assert self.save_manager.loaded_record is None

    def test_commit_applies_tagged_features(self) -> None:
        """Test that listed features are written to the world."""
        record = SaveRecord(
            features=[Feature.SYLVIE_POSITION, Feature.VISITED_AREAS],
            sylvie_position=Vector3(5.0, 6.0, 7.0),
            visited_areas={"tower"},
        )

        assert self.save_manager.commit_load(record) is True

        assert self.player.position == Vector3(5.0, 6.0, 7.0)
        assert self.area_manager.visited_areas == {"tower"}
        assert self.save_manager.loaded_record is record

    def test_commit_ignores_untagged_payloads(self) -> None:
        """Test that stale payloads for unlisted features are not applied."""
        record = SaveRecord(
            features=[Feature.SYLVIE_POSITION],
            sylvie_position=Vector3(5.0, 6.0, 7.0),
            visited_areas={"tower"},
        )

        self.save_manager.commit_load(record)

        assert self.area_manager.visited_areas == {"cave", "village"}

    def test_commit_is_idempotent(self) -> None:
        """Test that committing twice gives the same world as committing once."""
        record = SaveRecord(
            features=[Feature.SYLVIE_POSITION, Feature.VISITED_AREAS, Feature.DIALOGUE_VARIABLES],
            sylvie_position=Vector3(5.0, 6.0, 7.0),
            visited_areas={"tower"},
            dialogue_variables={"apples": 1},
        )

        self.save_manager.commit_load(record)
        first = (self.player.position, set(self.area_manager.visited_areas), dict(self.dialogue_manager.variables))
        self.save_manager.commit_load(record)
        second = (self.player.position, set(self.area_manager.visited_areas), dict(self.dialogue_manager.variables))

        assert first == second

    def test_commit_none_is_noop(self) -> None:
        """Test that committing None changes neither world nor loaded record."""
        existing = SaveRecord()
        self.save_manager.commit_load(existing)

        assert self.save_manager.commit_load(None) is False

        assert self.player.position == Vector3(1.0, 2.0, 3.0)
        assert self.area_manager.visited_areas == {"cave", "village"}
        assert self.save_manager.loaded_record is existing

    def test_load_save_alias(self) -> None:
        """Test that load_save commits like commit_load."""
        record = SaveRecord(features=[Feature.SYLVIE_POSITION], sylvie_position=Vector3(0.0, 0.0, 0.0))

        assert self.save_manager.load_save(record) is True
        assert self.player.position == Vector3(0.0, 0.0, 0.0)

    def test_position_survives_disk(self) -> None:
        """Test saving the player at (1, 2, 3), moving away, and loading back."""
        record = self.save_manager.generate_save(None, Feature.SYLVIE_POSITION)
        self.save_manager.save_to_file(record)

        self.player.position = Vector3(100.0, 100.0, 100.0)
        self.save_manager.commit_load(self.save_manager.load_from_file(record.path_name))

        assert self.player.position == Vector3(1.0, 2.0, 3.0)


class TestSaveGame(SaveManagerTestCase):
    """Test the background save and default load entry points."""

    def test_save_game_writes_in_background(self) -> None:
        """Test that save_game writes the default save file."""
        future = self.save_manager.save_game(Feature.SYLVIE_POSITION)

        assert future.result(timeout=5) is True
        assert self.save_manager.save_exists()

    def test_save_game_updates_loaded_record(self) -> None:
        """Test that the built record becomes the loaded record."""
        self.save_manager.save_game(Feature.VISITED_AREAS)

        loaded = self.save_manager.loaded_record
        assert loaded is not None
        assert loaded.features == [Feature.VISITED_AREAS]

    def test_save_game_accumulates_features(self) -> None:
        """Test the visited areas then position scenario."""
        self.save_manager.save_game(Feature.VISITED_AREAS)
        self.area_manager.mark_visited("tower")
        self.save_manager.save_game(Feature.SYLVIE_POSITION)
        assert self.save_manager.wait_for_pending_writes(timeout=5)

        record = self.save_manager.load_from_file("save0")

        assert record.features == [Feature.SYLVIE_POSITION]
        assert record.sylvie_position == Vector3(1.0, 2.0, 3.0)
        assert record.visited_areas == {"cave", "village"}

    def test_save_game_captures_state_at_call_time(self) -> None:
        """Test that the write reflects the world when save_game was called."""
        future = self.save_manager.save_game(Feature.SYLVIE_POSITION)
        self.player.position = Vector3(50.0, 50.0, 50.0)
        future.result(timeout=5)

        assert self.save_manager.load_from_file("save0").sylvie_position == Vector3(1.0, 2.0, 3.0)

    def test_failed_write_is_not_raised(self) -> None:
        """Test that write errors stay in the background and the loaded record still updates."""
        with patch.object(self.save_manager, "get_save_path", side_effect=OSError("read-only")):
            future = self.save_manager.save_game(Feature.SYLVIE_POSITION)
            result = future.result(timeout=5)

        assert result is False
        assert self.save_manager.loaded_record.sylvie_position == Vector3(1.0, 2.0, 3.0)

    def test_try_load_game_without_save(self) -> None:
        """Test that a missing default save leaves everything untouched."""
        assert self.save_manager.try_load_game() is False

        assert self.player.position == Vector3(1.0, 2.0, 3.0)
        assert self.area_manager.visited_areas == {"cave", "village"}
        assert self.save_manager.loaded_record is None

    def test_try_load_game_restores_default_save(self) -> None:
        """Test that try_load_game commits the default save."""
        self.save_manager.save_game(Feature.SYLVIE_POSITION, Feature.VISITED_AREAS)
        self.save_manager.wait_for_pending_writes(timeout=5)
        self.save_manager.reset()
        self.player.position = Vector3(0.0, 0.0, 0.0)
        self.area_manager.visited_areas = set()

        assert self.save_manager.try_load_game() is True

        assert self.player.position == Vector3(1.0, 2.0, 3.0)
        assert self.area_manager.visited_areas == {"cave", "village"}
        assert self.save_manager.loaded_record.path_name == "save0"

    def test_save_after_cleanup_restarts_workers(self) -> None:
        """Test that a save after cleanup still gets written."""
        self.save_manager.cleanup()

        future = self.save_manager.save_game(Feature.SYLVIE_POSITION)

        assert future.result(timeout=5) is True


class TestSaveFiles(SaveManagerTestCase):
    """Test save file management helpers."""

    def test_save_exists(self) -> None:
        """Test save_exists before and after writing."""
        assert self.save_manager.save_exists("save0") is False

        self.save_manager.save_to_file(SaveRecord())

        assert self.save_manager.save_exists("save0") is True

    def test_delete_save(self) -> None:
        """Test deleting an existing save."""
        self.save_manager.save_to_file(SaveRecord())

        assert self.save_manager.delete_save() is True
        assert self.save_manager.save_exists() is False

    def test_delete_missing_save(self) -> None:
        """Test deleting a save that does not exist."""
        assert self.save_manager.delete_save("nothing_here") is False
