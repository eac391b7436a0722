##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Discovery, parsing and caching of fixture files.

A fixture directory holds one YAML file per collection, named after the
collection (`cities.yml`, `geo_uri_schemes.yml`, ...). Each file maps fixture
keys to field maps:

```yaml
new_york_city:
  name: New York City
  state: :new_york
  population:
    total: 9000000
```

The `FixtureRegistry` locates the directory once, when it is created, and parses
every file the first time any collection is requested. The parsed data is kept
until [`reload`][fixtures.fixture_registry.FixtureRegistry.reload] is called.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from docseed.config import Config
from docseed.config.config_filepaths import DEFAULT_FIXTURES_PATH
from docseed.exceptions import FixtureDataMissingError, FixtureSourceNotFoundError, MalformedFixtureFileError
from docseed.fixtures.values import FixtureYamlLoader, strip_key_marker
from docseed.utils import expand_path, load_yaml


LOG = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".yml", ".yaml")


def default_fallback_path(path: str) -> Optional[str]:
    """
    The directory tried when `path` doesn't exist: the same relative path one
    level up from the working directory.

    Args:
        path: The configured fixture directory.

    Returns:
        `../<path>` for a relative `path`, or None for an absolute one.
    """
    if os.path.isabs(os.path.expandvars(os.path.expanduser(path))):
        return None
    return os.path.join("..", path)


@dataclass
class FixtureFile:
    """
    The parsed contents of one fixture file.

    Attributes:
        collection: The collection the file holds fixtures for.
        path: The file the fixtures were read from.
        entries: Fixture key to field map, in file order.
    """

    collection: str
    path: str
    entries: Dict[Any, Dict[str, Any]] = field(default_factory=dict)

    def keys(self) -> List[Any]:
        """The fixture keys, in file order."""
        return list(self.entries.keys())

    def __len__(self) -> int:
        return len(self.entries)


class FixtureRegistry:
    """
    Finds the fixture directory and serves parsed fixture files by collection name.

    Attributes:
        directory: The absolute path of the fixture directory in use.
        extensions: The file extensions treated as fixture files.

    Methods:
        from_config (classmethod): Build a registry from the `fixtures` configuration section.
        get: Get the parsed fixture file for a collection.
        collections: List every collection with a fixture file.
        reload: Forget the parsed files so they are read again on the next `get`.
    """

    def __init__(
        self,
        path: str = DEFAULT_FIXTURES_PATH,
        fallback_path: Optional[str] = None,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ):
        """
        Args:
            path: The fixture directory to use.
            fallback_path: The directory to use instead if `path` doesn't exist. Defaults
                to `path` one level up, see `default_fallback_path`.
            extensions: The file extensions treated as fixture files.

        Raises:
            FixtureSourceNotFoundError: If neither `path` nor `fallback_path` is a directory.
        """
        self.extensions: tuple = tuple(ext.lower() for ext in extensions)
        self.directory: str = self._find_directory(path, fallback_path or default_fallback_path(path))
        self._files: Optional[Dict[str, FixtureFile]] = None

    @classmethod
    def from_config(cls, config: Config) -> "FixtureRegistry":
        """
        Build a registry from the `fixtures` section of a configuration.

        Args:
            config: The Docseed configuration.

        Returns:
            A new `FixtureRegistry`.
        """
        section = config.fixtures
        return cls(
            path=getattr(section, "path", DEFAULT_FIXTURES_PATH),
            fallback_path=getattr(section, "fallback_path", None),
            extensions=getattr(section, "extensions", DEFAULT_EXTENSIONS),
        )

    @staticmethod
    def _find_directory(path: str, fallback_path: Optional[str]) -> str:
        candidates = [path] if not fallback_path else [path, fallback_path]
        for candidate in candidates:
            directory = expand_path(candidate)
            if os.path.isdir(directory):
                LOG.debug(f"Using fixture directory '{directory}'.")
                return directory
        raise FixtureSourceNotFoundError(
            f"Unable to find fixtures in either {' or '.join(str(candidate) for candidate in candidates)}"
        )

    def _is_fixture_file(self, filename: str) -> bool:
        return os.path.splitext(filename)[1].lower() in self.extensions

    def _read_file(self, collection: str, filepath: str) -> FixtureFile:
        LOG.debug(f"Reading fixture file '{filepath}'.")
        contents = load_yaml(filepath, loader=FixtureYamlLoader)
        if contents is None:
            return FixtureFile(collection, filepath)
        if not isinstance(contents, dict):
            raise MalformedFixtureFileError(
                f"Fixture file '{filepath}' must map fixture keys to field maps, not {type(contents).__name__}."
            )

        entries = {}
        for key, field_map in contents.items():
            if field_map is None:
                field_map = {}
            if not isinstance(field_map, dict):
                raise MalformedFixtureFileError(
                    f"Fixture '{key}' in '{filepath}' must be a map of fields, not {type(field_map).__name__}."
                )
            entries[strip_key_marker(key)] = field_map
        return FixtureFile(collection, filepath, entries)

    def _load_files(self) -> Dict[str, FixtureFile]:
        files = {}
        for filename in sorted(os.listdir(self.directory)):
            filepath = os.path.join(self.directory, filename)
            if not os.path.isfile(filepath) or not self._is_fixture_file(filename):
                continue
            collection = os.path.splitext(filename)[0]
            if collection in files:
                LOG.warning(
                    f"Ignoring '{filepath}': fixtures for '{collection}' were already read from "
                    f"'{files[collection].path}'."
                )
                continue
            files[collection] = self._read_file(collection, filepath)
        LOG.info(f"Loaded {len(files)} fixture file(s) from '{self.directory}'.")
        return files

    def _ensure_loaded(self) -> Dict[str, FixtureFile]:
        if self._files is None:
            self._files = self._load_files()
        return self._files

    def get(self, collection: str) -> FixtureFile:
        """
        Get the parsed fixture file for a collection. Every fixture file is parsed
        the first time this is called.

        Args:
            collection: The collection name (e.g. "cities").

        Returns:
            The collection's `FixtureFile`.

        Raises:
            FixtureDataMissingError: If the fixture directory has no file for `collection`.
        """
        files = self._ensure_loaded()
        try:
            return files[collection]
        except KeyError as exc:
            raise FixtureDataMissingError(
                f"Could not find fixtures for '{collection}' in '{self.directory}'."
            ) from exc

    def collections(self) -> List[str]:
        """
        List every collection that has a fixture file.

        Returns:
            The collection names, sorted.
        """
        return sorted(self._ensure_loaded())

    def reload(self):
        """
        Forget every parsed fixture file. They are read again on the next `get`.
        """
        LOG.debug(f"Clearing cached fixtures from '{self.directory}'.")
        self._files = None
