##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `backend_factory.py` module.
"""

import pytest
from pytest_mock import MockerFixture

from docseed.backends.backend_factory import DocseedBackendFactory
from docseed.backends.document_backend import DocumentBackend
from docseed.config import Config
from docseed.exceptions import BackendNotSupportedError


class DummyMemoryBackend(DocumentBackend):
    def __init__(self, *args, **kwargs):
        self.kwargs = kwargs

    def get_version(self):
        pass

    def flush_database(self):
        pass

    def _create_store(self, model_class):
        pass


class DummyRedisBackend(DummyMemoryBackend):
    pass


class DummyJsonFileBackend(DummyMemoryBackend):
    pass


class TestDocseedBackendFactory:
    """
    Test suite for the `DocseedBackendFactory`.

    This class tests that the backend factory correctly registers, resolves, instantiates,
    and reports supported Docseed backends. It uses mocking to isolate backend behavior
    and focuses on the factory's interface and logic.
    """

    @pytest.fixture
    def backend_factory(self, mocker: MockerFixture) -> DocseedBackendFactory:
        """
        An instance of the `DocseedBackendFactory` class. Resets on each test.

        Args:
            mocker: PyTest mocker fixture.

        Returns:
            An instance of the `DocseedBackendFactory` class for testing.
        """
        mocker.patch("docseed.backends.backend_factory.MemoryBackend", DummyMemoryBackend)
        mocker.patch("docseed.backends.backend_factory.RedisBackend", DummyRedisBackend)
        mocker.patch("docseed.backends.backend_factory.JsonFileBackend", DummyJsonFileBackend)
        mocker.patch("docseed.abstracts.factory.entry_points", return_value=[])

        return DocseedBackendFactory()

    def test_list_available_backends(self, backend_factory: DocseedBackendFactory):
        """
        Test that `list_available` returns the correct set of built-in backends.

        Args:
            backend_factory: An instance of the `DocseedBackendFactory` class for testing.
        """
        assert set(backend_factory.list_available()) == {"memory", "redis", "json_file"}

    @pytest.mark.parametrize(
        "backend_type, expected_cls",
        [
            ("memory", DummyMemoryBackend),
            ("redis", DummyRedisBackend),
            ("rediss", DummyRedisBackend),
            ("json_file", DummyJsonFileBackend),
            ("json", DummyJsonFileBackend),
        ],
    )
    def test_create_valid_backend(
        self, backend_factory: DocseedBackendFactory, backend_type: str, expected_cls: DocumentBackend
    ):
        """
        Test that `create` returns a valid backend instance for a registered name or alias.

        Args:
            backend_factory: An instance of the `DocseedBackendFactory` class for testing.
            backend_type: The type of backend to create.
            expected_cls: The class that we're expecting `backend_factory` to create.
        """
        instance = backend_factory.create(backend_type)
        assert isinstance(instance, expected_cls)

    def test_create_invalid_backend_raises(self, backend_factory: DocseedBackendFactory):
        """
        Test that `create` raises `BackendNotSupportedError` for unknown backends.

        Args:
            backend_factory: An instance of the `DocseedBackendFactory` class for testing.
        """
        with pytest.raises(BackendNotSupportedError, match="unsupported_backend"):
            backend_factory.create("unsupported_backend")

    def test_invalid_registration_type_error(self, backend_factory: DocseedBackendFactory):
        """
        Test that trying to register a non-DocumentBackend raises TypeError.

        Args:
            backend_factory: An instance of the `DocseedBackendFactory` class for testing.
        """

        class NotADocumentBackend:
            pass

        with pytest.raises(TypeError, match="must inherit from DocumentBackend"):
            backend_factory.register("fake", NotADocumentBackend)

    def test_create_from_config(self, backend_factory: DocseedBackendFactory):
        """
        Test that the backend section's name picks the backend and the rest are its options.

        Args:
            backend_factory: An instance of the `DocseedBackendFactory` class for testing.
        """
        config = Config({"backend": {"name": "redis", "url": "redis://cache:6379/1"}})
        instance = backend_factory.create_from_config(config)
        assert isinstance(instance, DummyRedisBackend)
        assert instance.kwargs == {"url": "redis://cache:6379/1"}

    def test_create_from_config_defaults_to_memory(self, backend_factory: DocseedBackendFactory):
        """
        Test that a configuration without a backend section builds the memory backend.

        Args:
            backend_factory: An instance of the `DocseedBackendFactory` class for testing.
        """
        instance = backend_factory.create_from_config(Config({}))
        assert isinstance(instance, DummyMemoryBackend)
        assert not instance.kwargs
