##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Name-keyed registries of interchangeable implementations.

A [`DocseedBaseFactory`][abstracts.factory.DocseedBaseFactory] maps names (and
aliases of those names) to classes and builds instances on request. Classes come
from two places: the ones a subclass registers itself in `_register_builtins`, and
ones that other distributions advertise under the subclass's entry point group.
Docseed uses it to pick a document backend by the name given in the configuration.
"""

import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Dict, List, Type


LOG = logging.getLogger(__name__)


class DocseedBaseFactory(ABC):
    """
    Registry of named component classes that can build instances of them.

    Subclasses provide the built-in components, the check every registered class
    must pass, and the entry point group that third-party components are listed under.

    Attributes:
        _registry (Dict[str, Any]): Canonical name to component class.
        _aliases (Dict[str, str]): Alias to canonical name.

    Methods:
        register: Add a component class under a name and optional aliases.
        resolve_name: Turn an alias into its canonical name.
        list_available: Names of every component, including entry point plugins.
        create: Build a component by name or alias.
        get_component_info: Describe a component by name or alias.
    """

    def __init__(self):
        self._registry: Dict[str, Any] = {}
        self._aliases: Dict[str, str] = {}
        self._register_builtins()

    @abstractmethod
    def _register_builtins(self):
        """Register the components that ship with Docseed."""
        raise NotImplementedError(f"{type(self).__name__} does not register any built-in components.")

    @abstractmethod
    def _validate_component(self, component_class: Any):
        """
        Check a class before it's registered.

        Args:
            component_class: The class about to be registered.

        Raises:
            TypeError: If `component_class` can't be used as a component of this factory.
        """
        raise NotImplementedError(f"{type(self).__name__} does not validate its components.")

    @abstractmethod
    def _entry_point_group(self) -> str:
        """
        Returns:
            The entry point group third-party components of this factory are listed under.
        """
        raise NotImplementedError(f"{type(self).__name__} does not name an entry point group.")

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        """
        Raise the error for a component name nothing is registered under.

        Args:
            msg: The error message.

        Raises:
            ValueError: Unless a subclass raises something more specific.
        """
        raise ValueError(msg)

    def _discover_plugins(self):
        # Built-ins and earlier registrations win over entry points with the same name
        for entry_point in entry_points(group=self._entry_point_group()):
            if entry_point.name in self._registry:
                continue
            try:
                self.register(entry_point.name, entry_point.load())
            except Exception as exc:  # pylint: disable=broad-exception-caught
                LOG.warning(f"Failed to load plugin '{entry_point.name}' from '{self._entry_point_group()}': {exc}")
                continue
            LOG.info(f"Registered '{entry_point.name}' from the '{self._entry_point_group()}' entry points.")

    def register(self, name: str, component_class: Any, aliases: List[str] = None):
        """
        Add a component class to the registry.

        Args:
            name: The canonical name of the component.
            component_class: The class to build when `name` is requested.
            aliases: Other names `component_class` can be requested by.

        Raises:
            TypeError: If `component_class` fails `_validate_component`.
        """
        self._validate_component(component_class)
        self._registry[name] = component_class
        for alias in aliases or []:
            self._aliases[alias] = name
        LOG.debug(f"Registered {component_class.__name__} as '{name}' (aliases: {aliases or []}).")

    def resolve_name(self, name: str) -> str:
        """
        Args:
            name: A canonical name or an alias.

        Returns:
            The canonical name `name` stands for.
        """
        return self._aliases.get(name, name)

    def list_available(self) -> List[str]:
        """
        Returns:
            The canonical names of every built-in and plugin component.
        """
        self._discover_plugins()
        return list(self._registry)

    def _lookup(self, name: str) -> Any:
        canonical_name = self.resolve_name(name)
        if canonical_name not in self._registry:
            self._discover_plugins()
        if canonical_name not in self._registry:
            self._raise_component_error_class(
                f"Component '{name}' is not supported. Available components: {', '.join(self.list_available())}"
            )
        return self._registry[canonical_name]

    def create(self, component_type: str, config: Dict = None) -> Any:
        """
        Build a component.

        Args:
            component_type: The name or alias of the component.
            config: Keyword arguments for the component's constructor.

        Returns:
            The new component.

        Raises:
            ValueError: If the component's constructor fails.
        """
        component_class = self._lookup(component_type)
        canonical_name = self.resolve_name(component_type)
        try:
            component = component_class(**(config or {}))
        except Exception as exc:
            raise ValueError(f"Failed to create component '{canonical_name}': {exc}") from exc
        LOG.debug(f"Created '{canonical_name}' component {component_class.__name__}.")
        return component

    def get_component_info(self, component_type: str) -> Dict:
        """
        Describe a component.

        Args:
            component_type: The name or alias of the component.

        Returns:
            The component's canonical name, class name, module and docstring.
        """
        component_class = self._lookup(component_type)
        return {
            "name": self.resolve_name(component_type),
            "class": component_class.__name__,
            "module": component_class.__module__,
            "description": component_class.__doc__ or "No description available",
        }
