"""
Tests for the `docseed/fixtures/fixture_registry.py` module.
"""

import os

import pytest
from pytest_mock import MockerFixture

from docseed.config import Config
from docseed.exceptions import FixtureDataMissingError, FixtureSourceNotFoundError, MalformedFixtureFileError
from docseed.fixtures.fixture_registry import FixtureFile, FixtureRegistry, default_fallback_path
from docseed.fixtures.values import Reference
from tests.fixture_types import FixtureCallable, FixtureStr


class TestFixtureFile:
    """Tests for the `FixtureFile` dataclass."""

    def test_keys_and_len(self):
        """
        Test that `keys` keeps file order and `len` counts the entries.
        """
        fixture_file = FixtureFile("cities", "cities.yml", {"b": {}, "a": {}})
        assert fixture_file.keys() == ["b", "a"]
        assert len(fixture_file) == 2

    def test_defaults_to_no_entries(self):
        """
        Test that a `FixtureFile` has no entries by default.
        """
        assert len(FixtureFile("cities", "cities.yml")) == 0


class TestFixtureRegistry:
    """Tests for the `FixtureRegistry` class."""

    def test_missing_directory(self, tmp_path):
        """
        Test that a registry with neither directory raises `FixtureSourceNotFoundError`.

        Args:
            tmp_path: PyTest temporary directory fixture.
        """
        missing = os.path.join(str(tmp_path), "missing")
        with pytest.raises(FixtureSourceNotFoundError, match="Unable to find fixtures in either"):
            FixtureRegistry(path=missing, fallback_path=os.path.join(missing, "fallback"))

    def test_fallback_directory(self, tmp_path, write_fixture_files: FixtureCallable):
        """
        Test that the fallback directory is used when the primary one doesn't exist.

        Args:
            tmp_path: PyTest temporary directory fixture.
            write_fixture_files: A fixture that writes fixture files to a temporary directory.
        """
        fixtures_dir = write_fixture_files({"states.yml": "ohio:\n  name: Ohio\n"})
        registry = FixtureRegistry(path=os.path.join(str(tmp_path), "missing"), fallback_path=fixtures_dir)
        assert registry.directory == fixtures_dir
        assert registry.get("states").entries == {"ohio": {"name": "Ohio"}}

    def test_relative_default_paths(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        """
        Test that the default `test/fixtures` and `../test/fixtures` locations are tried
        relative to the current directory.

        Args:
            tmp_path: PyTest temporary directory fixture.
            monkeypatch: PyTest monkeypatch fixture.
        """
        fixtures_dir = tmp_path / "test" / "fixtures"
        fixtures_dir.mkdir(parents=True)
        working_dir = tmp_path / "project"
        working_dir.mkdir()

        monkeypatch.chdir(working_dir)
        assert os.path.realpath(FixtureRegistry().directory) == os.path.realpath(fixtures_dir)

        monkeypatch.chdir(tmp_path)
        assert os.path.realpath(FixtureRegistry().directory) == os.path.realpath(fixtures_dir)

    def test_fallback_follows_configured_path(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        """
        Test that the default fallback is the configured relative path one level up.

        Args:
            tmp_path: PyTest temporary directory fixture.
            monkeypatch: PyTest monkeypatch fixture.
        """
        fixtures_dir = tmp_path / "spec" / "seeds"
        fixtures_dir.mkdir(parents=True)
        working_dir = tmp_path / "project"
        working_dir.mkdir()
        monkeypatch.chdir(working_dir)

        registry = FixtureRegistry.from_config(Config({"fixtures": {"path": os.path.join("spec", "seeds")}}))
        assert os.path.realpath(registry.directory) == os.path.realpath(fixtures_dir)

    @pytest.mark.parametrize(
        "path, expected",
        [
            (os.path.join("test", "fixtures"), os.path.join("..", "test", "fixtures")),
            ("seeds", os.path.join("..", "seeds")),
            (os.path.join(os.sep, "srv", "fixtures"), None),
        ],
    )
    def test_default_fallback_path(self, path: str, expected: str):
        """
        Test that relative paths fall back one level up and absolute paths have no fallback.

        Args:
            path: The configured fixture directory.
            expected: The fallback we expect.
        """
        assert default_fallback_path(path) == expected

    def test_from_config(self, write_fixture_files: FixtureCallable):
        """
        Test building a registry from the `fixtures` configuration section.

        Args:
            write_fixture_files: A fixture that writes fixture files to a temporary directory.
        """
        fixtures_dir = write_fixture_files({"states.fixture": "ohio: {}\n"})
        config = Config({"fixtures": {"path": fixtures_dir, "fallback_path": None, "extensions": [".fixture"]}})
        registry = FixtureRegistry.from_config(config)
        assert registry.directory == fixtures_dir
        assert registry.extensions == (".fixture",)
        assert registry.collections() == ["states"]

    def test_get(self, sample_registry: FixtureRegistry, sample_fixtures_dir: FixtureStr):
        """
        Test that `get` returns the parsed file with colon markers stripped from the keys
        and references left as written.

        Args:
            sample_registry: A registry over the sample fixture files.
            sample_fixtures_dir: The path to the sample fixture files.
        """
        cities = sample_registry.get("cities")
        assert cities.collection == "cities"
        assert cities.path == os.path.join(sample_fixtures_dir, "cities.yml")
        assert cities.keys() == ["new_york_city", "terrytown"]
        assert cities.entries["new_york_city"]["state"] == ":new_york"

        states = sample_registry.get("states")
        assert states.entries["louisiana"]["geo_uri_scheme"] == Reference("louisiana")

    def test_collections(self, sample_registry: FixtureRegistry):
        """
        Test that every fixture file is listed by collection name.

        Args:
            sample_registry: A registry over the sample fixture files.
        """
        assert sample_registry.collections() == ["cities", "geo_uri_schemes", "states", "users"]

    def test_get_missing_collection(self, sample_registry: FixtureRegistry):
        """
        Test that `get` raises `FixtureDataMissingError` for an unknown collection.

        Args:
            sample_registry: A registry over the sample fixture files.
        """
        with pytest.raises(FixtureDataMissingError, match="'planets'"):
            sample_registry.get("planets")

    def test_files_are_parsed_once(self, mocker: MockerFixture, sample_registry: FixtureRegistry):
        """
        Test that every file is parsed on the first `get` and cached afterwards.

        Args:
            mocker: PyTest mocker fixture.
            sample_registry: A registry over the sample fixture files.
        """
        load_spy = mocker.spy(sample_registry, "_load_files")
        sample_registry.get("cities")
        sample_registry.get("states")
        sample_registry.collections()
        load_spy.assert_called_once()

    def test_reload(self, write_fixture_files: FixtureCallable):
        """
        Test that `reload` makes the registry read the files again.

        Args:
            write_fixture_files: A fixture that writes fixture files to a temporary directory.
        """
        fixtures_dir = write_fixture_files({"states.yml": "ohio:\n  name: Ohio\n"})
        registry = FixtureRegistry(path=fixtures_dir, fallback_path=None)
        assert registry.get("states").keys() == ["ohio"]

        write_fixture_files({"states.yml": "utah:\n  name: Utah\n"})
        assert registry.get("states").keys() == ["ohio"]

        registry.reload()
        assert registry.get("states").keys() == ["utah"]

    def test_ignores_other_files(self, write_fixture_files: FixtureCallable):
        """
        Test that files without a fixture extension and directories are skipped, and that
        `.yaml` files are read too.

        Args:
            write_fixture_files: A fixture that writes fixture files to a temporary directory.
        """
        fixtures_dir = write_fixture_files({"README.md": "# fixtures\n", "users.yaml": "admin: {}\n"})
        os.makedirs(os.path.join(fixtures_dir, "nested.yml"))
        registry = FixtureRegistry(path=fixtures_dir, fallback_path=None)
        assert registry.collections() == ["users"]

    def test_duplicate_collection_keeps_first(self, write_fixture_files: FixtureCallable, caplog):
        """
        Test that when two files hold the same collection, the first one (by name) wins.

        Args:
            write_fixture_files: A fixture that writes fixture files to a temporary directory.
            caplog: PyTest fixture to capture log output.
        """
        fixtures_dir = write_fixture_files({"users.yml": "from_yml: {}\n", "users.yaml": "from_yaml: {}\n"})
        registry = FixtureRegistry(path=fixtures_dir, fallback_path=None)
        assert registry.get("users").keys() == ["from_yaml"]
        assert "Ignoring" in caplog.text

    def test_empty_file_and_empty_entries(self, write_fixture_files: FixtureCallable):
        """
        Test that an empty file is an empty collection and an empty entry is an empty field map.

        Args:
            write_fixture_files: A fixture that writes fixture files to a temporary directory.
        """
        fixtures_dir = write_fixture_files({"states.yml": "", "users.yml": "nobody:\n"})
        registry = FixtureRegistry(path=fixtures_dir, fallback_path=None)
        assert len(registry.get("states")) == 0
        assert registry.get("users").entries == {"nobody": {}}

    @pytest.mark.parametrize(
        "contents, match",
        [("- just\n- a list\n", "must map fixture keys"), ("ohio: Ohio\n", "must be a map of fields")],
    )
    def test_malformed_file(self, write_fixture_files: FixtureCallable, contents: str, match: str):
        """
        Test that files which aren't maps of field maps raise `MalformedFixtureFileError`.

        Args:
            write_fixture_files: A fixture that writes fixture files to a temporary directory.
            contents: The fixture file's contents.
            match: Part of the error message we expect.
        """
        fixtures_dir = write_fixture_files({"states.yml": contents})
        registry = FixtureRegistry(path=fixtures_dir, fallback_path=None)
        with pytest.raises(MalformedFixtureFileError, match=match):
            registry.get("states")
