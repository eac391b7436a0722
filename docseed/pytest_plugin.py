##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Pytest integration for Docseed.

Installing Docseed registers this plugin through the `pytest11` entry point. It
adds three command line options and four fixtures:

- `docseed_config` (session): the configuration from `docseed.yaml`, the
  environment and the command line options.
- `fixture_registry` (session): a `FixtureRegistry` over the configured fixture directory.
- `docseed_backend` (session): the configured document backend.
- `fixture_loader` (function): a `FixtureLoader` over the two session fixtures.

```python
def test_city_state(fixture_loader):
    cities = fixture_loader.load(City)
    assert cities["new_york_city"].state.name == "New York"
```
"""

import logging

import pytest

from docseed.backends.backend_factory import backend_factory
from docseed.backends.document_backend import DocumentBackend
from docseed.config import Config
from docseed.config.configfile import get_config
from docseed.fixtures.fixture_registry import FixtureRegistry
from docseed.fixtures.loader import FixtureLoader
from docseed.log_formatter import setup_logging


LOG = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser):
    """Add Docseed's command line options."""
    group = parser.getgroup("docseed", "declarative document fixtures")
    group.addoption(
        "--docseed-fixtures-path",
        action="store",
        default=None,
        help="Directory containing the fixture files. Overrides fixtures.path from docseed.yaml.",
    )
    group.addoption(
        "--docseed-backend",
        action="store",
        default=None,
        help="Name of the backend to load fixtures into (e.g. memory, redis, json_file).",
    )
    group.addoption(
        "--docseed-log-level",
        action="store",
        default=None,
        help="Log level for the docseed logger (e.g. DEBUG). Overrides logging.level from docseed.yaml.",
    )


def pytest_configure(config: pytest.Config):
    """
    Set up the docseed logger. The level comes from `--docseed-log-level`, or from
    `logging.level` in docseed.yaml when the option is omitted; colours always come
    from `logging.colors`. Docseed logging is left alone when neither sets a level.
    """
    logging_section = get_config().logging
    log_level = config.getoption("--docseed-log-level", default=None) or getattr(logging_section, "level", None)
    if not log_level:
        return
    colors = bool(getattr(logging_section, "colors", True))
    setup_logging(logger=logging.getLogger("docseed"), log_level=str(log_level).upper(), colors=colors)


@pytest.fixture(scope="session")
def docseed_config(pytestconfig: pytest.Config) -> Config:
    """
    The Docseed configuration, with command line options applied on top.

    Returns:
        The configuration for this test session.
    """
    config = get_config()
    fixtures_path = pytestconfig.getoption("--docseed-fixtures-path", default=None)
    if fixtures_path:
        config.fixtures.path = fixtures_path
    backend_name = pytestconfig.getoption("--docseed-backend", default=None)
    if backend_name:
        config.backend.name = backend_name
    return config


@pytest.fixture(scope="session")
def fixture_registry(docseed_config: Config) -> FixtureRegistry:
    """
    The fixture files for this test session.

    Returns:
        A `FixtureRegistry` over the configured fixture directory.
    """
    return FixtureRegistry.from_config(docseed_config)


@pytest.fixture(scope="session")
def docseed_backend(docseed_config: Config) -> DocumentBackend:
    """
    The backend fixtures are loaded into for this test session.

    Returns:
        The configured document backend.
    """
    backend = backend_factory.create_from_config(docseed_config)
    LOG.debug(f"Loading fixtures into the '{backend.get_name()}' backend.")
    return backend


@pytest.fixture
def fixture_loader(fixture_registry: FixtureRegistry, docseed_backend: DocumentBackend) -> FixtureLoader:
    """
    A loader for the session's fixtures and backend.

    Returns:
        A new `FixtureLoader`.
    """
    return FixtureLoader(fixture_registry, docseed_backend)
