##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Backend factory for selecting and instantiating document backends in Docseed.

This module defines the `DocseedBackendFactory` class, which manages the available
backend implementations (in-memory, Redis, JSON file, and any plugin registered under
the `docseed.backends` entry point group) and builds the one named by the configuration.
"""

from typing import Any, Type

from docseed.abstracts import DocseedBaseFactory
from docseed.backends.document_backend import DocumentBackend
from docseed.backends.json_file.json_file_backend import JsonFileBackend
from docseed.backends.memory.memory_backend import MemoryBackend
from docseed.backends.redis.redis_backend import RedisBackend
from docseed.config import Config
from docseed.exceptions import BackendNotSupportedError


class DocseedBackendFactory(DocseedBaseFactory):
    """
    Factory class for managing and instantiating supported Docseed backends.

    Attributes:
        _registry (Dict[str, DocumentBackend]): Maps canonical backend names to backend classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical backend names.

    Methods:
        register: Register a new backend class and optional aliases.
        list_available: Return a list of supported backend names.
        create: Instantiate a backend class by name or alias.
        create_from_config: Instantiate the backend named in a `Config`.
        get_component_info: Return metadata about a registered backend.
    """

    def _register_builtins(self):
        """
        Register built-in backend implementations.
        """
        self.register("memory", MemoryBackend)
        self.register("redis", RedisBackend, aliases=["rediss"])
        self.register("json_file", JsonFileBackend, aliases=["json"])

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of DocumentBackend.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass DocumentBackend.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, DocumentBackend):
            raise TypeError(f"{component_class} must inherit from DocumentBackend")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering backend plugins.

        Returns:
            The entry point namespace for Docseed backend plugins.
        """
        return "docseed.backends"

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        """
        Raise a `BackendNotSupportedError` for unsupported backends.

        Args:
            msg: The message to add to the error being raised.
        """
        raise BackendNotSupportedError(msg)

    def create_from_config(self, config: Config) -> DocumentBackend:
        """
        Build the backend described by the `backend` section of a configuration.

        Args:
            config: The Docseed configuration.

        Returns:
            The configured backend, or a `MemoryBackend` if no backend is configured.
        """
        name = getattr(config.backend, "name", None) or "memory"
        options = config.backend_options()
        return self.create(name, options or None)


backend_factory = DocseedBackendFactory()
