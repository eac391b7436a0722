##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
from glob import glob

import pytest

from tests.fixture_types import FixtureStr


#######################################
# Loading in Module Specific Fixtures #
#######################################

fixture_glob = os.path.join(os.path.dirname(__file__), "fixtures", "**", "*.py")
pytest_plugins = [
    "tests." + os.path.relpath(fixture_file, os.path.dirname(__file__)).replace(os.sep, ".")[: -len(".py")]
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]
pytest_plugins.append("pytester")


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(scope="session")
def path_to_test_data() -> FixtureStr:
    """
    Fixture to provide the path to the directory containing the test data.

    Returns:
        The absolute path to the `tests/data` directory.
    """
    return os.path.join(os.path.abspath(os.path.dirname(__file__)), "data")


@pytest.fixture(scope="session")
def sample_fixtures_dir(path_to_test_data: FixtureStr) -> FixtureStr:
    """
    Fixture to provide the path to the sample fixture files (states, cities, ...).

    Args:
        path_to_test_data: The absolute path to the `tests/data` directory.

    Returns:
        The absolute path to the `tests/data/fixtures` directory.
    """
    return os.path.join(path_to_test_data, "fixtures")
