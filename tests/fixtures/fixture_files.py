##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Fixtures for the modules in the `fixtures` folder.
"""

import os
import textwrap
from typing import Dict

import pytest

from docseed.backends.memory.memory_backend import MemoryBackend
from docseed.fixtures.fixture_registry import FixtureRegistry
from docseed.fixtures.loader import FixtureLoader
from tests.fixture_types import FixtureCallable, FixtureStr


@pytest.fixture
def write_fixture_files(tmp_path) -> FixtureCallable:
    """
    Provide a function that writes fixture files into a temporary fixture directory.

    Args:
        tmp_path: PyTest temporary directory fixture.

    Returns:
        A function taking a mapping of file name to YAML text. It writes every file
        (dedenting the text) and returns the directory they were written to.
    """

    def _write_fixture_files(files: Dict[str, str]) -> str:
        fixtures_dir = os.path.join(str(tmp_path), "fixtures")
        os.makedirs(fixtures_dir, exist_ok=True)
        for filename, contents in files.items():
            with open(os.path.join(fixtures_dir, filename), "w") as fixture_file:
                fixture_file.write(textwrap.dedent(contents))
        return fixtures_dir

    return _write_fixture_files


@pytest.fixture
def make_loader(write_fixture_files: FixtureCallable, memory_backend: MemoryBackend) -> FixtureCallable:
    """
    Provide a function that builds a `FixtureLoader` over freshly written fixture files
    and the test's in-memory backend.

    Args:
        write_fixture_files: A fixture that writes fixture files to a temporary directory.
        memory_backend: A fresh in-memory backend.

    Returns:
        A function taking a mapping of file name to YAML text and returning a `FixtureLoader`.
    """

    def _make_loader(files: Dict[str, str]) -> FixtureLoader:
        registry = FixtureRegistry(path=write_fixture_files(files), fallback_path=None)
        return FixtureLoader(registry, memory_backend)

    return _make_loader


@pytest.fixture
def sample_registry(sample_fixtures_dir: FixtureStr) -> FixtureRegistry:
    """
    A registry over the sample fixture files in `tests/data/fixtures`.

    Args:
        sample_fixtures_dir: The path to the sample fixture files.

    Returns:
        A `FixtureRegistry` for the sample fixtures.
    """
    return FixtureRegistry(path=sample_fixtures_dir, fallback_path=None)


@pytest.fixture
def sample_loader(sample_registry: FixtureRegistry, memory_backend: MemoryBackend) -> FixtureLoader:
    """
    A loader over the sample fixture files and a fresh in-memory backend.

    Args:
        sample_registry: A registry over the sample fixture files.
        memory_backend: A fresh in-memory backend.

    Returns:
        A `FixtureLoader` for the sample fixtures.
    """
    return FixtureLoader(sample_registry, memory_backend)
