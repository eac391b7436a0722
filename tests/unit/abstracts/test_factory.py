##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `factory.py` module of the `abstracts/` directory.
"""

from typing import Any, Type

import pytest
from pytest_mock import MockerFixture

from docseed.abstracts import DocseedBaseFactory


# --- Dummy Components ---
class DummyComponent:
    """A testable dummy component."""


class DummyComponentWithInit:
    def __init__(self, foo=None, bar=None):
        self.foo = foo
        self.bar = bar


class DummyPlugin:
    """A component only available through an entry point."""


# --- Concrete Subclass for Testing ---
class ExampleFactory(DocseedBaseFactory):
    def _register_builtins(self) -> None:
        self.register("dummy", DummyComponent, aliases=["alias_dummy"])

    def _validate_component(self, component_class: Any) -> None:
        if not isinstance(component_class, type):
            raise TypeError("Component must be a class")

    def _entry_point_group(self) -> str:
        return "docseed.test_plugins"

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        raise RuntimeError(msg)  # Use a distinct error type for test verification


class TestDocseedBaseFactory:
    """
    Unit test suite for the `DocseedBaseFactory` abstract base class.

    This suite verifies the expected behavior of the factory's core logic through a
    concrete subclass (`ExampleFactory`) that defines the required abstract methods.
    Entry points are mocked so that no installed plugin is ever loaded.
    """

    @pytest.fixture
    def entry_points(self, mocker: MockerFixture):
        """
        Replace entry point discovery with a mock that finds nothing by default.

        Args:
            mocker: PyTest mocker fixture.

        Returns:
            The mocked `entry_points` function.
        """
        return mocker.patch("docseed.abstracts.factory.entry_points", return_value=[])

    @pytest.fixture
    def factory(self, entry_points) -> ExampleFactory:
        """
        An instance of the dummy `ExampleFactory` class. Resets on each test.

        Args:
            entry_points: The mocked `entry_points` function.

        Returns:
            An instance of the dummy `ExampleFactory` class for testing.
        """
        return ExampleFactory()

    @staticmethod
    def _entry_point(mocker: MockerFixture, name: str, loaded: Any = None, error: Exception = None):
        entry_point = mocker.MagicMock()
        entry_point.name = name
        if error is not None:
            entry_point.load.side_effect = error
        else:
            entry_point.load.return_value = loaded
        return entry_point

    def test_register_and_list(self, factory: ExampleFactory):
        """
        Test that components are registered and listed properly.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        assert "dummy" in factory.list_available()
        assert factory._registry["dummy"] is DummyComponent
        assert factory._aliases["alias_dummy"] == "dummy"

    def test_create_component_without_config(self, factory: ExampleFactory):
        """
        Test instantiation of a registered component with no config.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        instance = factory.create("dummy")
        assert isinstance(instance, DummyComponent)

    def test_create_component_with_config(self, factory: ExampleFactory):
        """
        Test instantiation of a component with constructor args.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        factory.register("with_init", DummyComponentWithInit)
        instance = factory.create("with_init", config={"foo": "a", "bar": 42})
        assert isinstance(instance, DummyComponentWithInit)
        assert instance.foo == "a"
        assert instance.bar == 42

    def test_create_component_with_bad_config(self, factory: ExampleFactory):
        """
        Test that a component that fails to initialize raises a `ValueError`.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        factory.register("with_init", DummyComponentWithInit)
        with pytest.raises(ValueError, match="Failed to create component 'with_init'"):
            factory.create("with_init", config={"baz": 1})

    def test_resolve_name(self, factory: ExampleFactory):
        """
        Test that aliases resolve to their canonical name and other names are returned as is.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        assert factory.resolve_name("alias_dummy") == "dummy"
        assert factory.resolve_name("dummy") == "dummy"
        assert factory.resolve_name("unknown") == "unknown"

    def test_create_component_using_alias(self, factory: ExampleFactory):
        """
        Test alias resolution in component creation.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        instance = factory.create("alias_dummy")
        assert isinstance(instance, DummyComponent)

    def test_create_unregistered_component_raises(self, factory: ExampleFactory):
        """
        Test that creating an unknown component raises the correct error.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        with pytest.raises(RuntimeError, match="not supported"):
            factory.create("unknown")

    def test_register_invalid_component_raises(self, factory: ExampleFactory):
        """
        Test that register raises TypeError for non-class input.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        with pytest.raises(TypeError):
            factory.register("bad", object())  # not a class

    def test_get_component_info(self, factory: ExampleFactory):
        """
        Test metadata returned from `get_component_info`.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        info = factory.get_component_info("alias_dummy")
        assert info["name"] == "dummy"
        assert info["class"] == "DummyComponent"
        assert info["module"] == DummyComponent.__module__
        assert info["description"] == "A testable dummy component."

    def test_get_component_info_for_invalid_component(self, factory: ExampleFactory):
        """
        Test that get_component_info raises when the component is unknown.

        Args:
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        with pytest.raises(RuntimeError, match="not supported"):
            factory.get_component_info("not_registered")

    def test_discover_plugins_registers_entry_points(
        self, mocker: MockerFixture, entry_points, factory: ExampleFactory
    ):
        """
        Test that components found through entry points can be created, and that
        discovery uses the factory's entry point group.

        Args:
            mocker: PyTest mocker fixture.
            entry_points: The mocked `entry_points` function.
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        entry_points.return_value = [self._entry_point(mocker, "plugin", DummyPlugin)]

        instance = factory.create("plugin")

        entry_points.assert_called_with(group="docseed.test_plugins")
        assert isinstance(instance, DummyPlugin)
        assert "plugin" in factory.list_available()

    def test_discover_plugins_skips_registered_names(
        self, mocker: MockerFixture, entry_points, factory: ExampleFactory
    ):
        """
        Test that an entry point can't replace a component that's already registered.

        Args:
            mocker: PyTest mocker fixture.
            entry_points: The mocked `entry_points` function.
            factory: An instance of the dummy `ExampleFactory` class for testing.
        """
        entry_point = self._entry_point(mocker, "dummy", DummyPlugin)
        entry_points.return_value = [entry_point]

        factory.list_available()

        entry_point.load.assert_not_called()
        assert factory._registry["dummy"] is DummyComponent

    def test_discover_plugins_logs_failures(
        self, mocker: MockerFixture, entry_points, factory: ExampleFactory, caplog
    ):
        """
        Test that a plugin that fails to load is logged and skipped.

        Args:
            mocker: PyTest mocker fixture.
            entry_points: The mocked `entry_points` function.
            factory: An instance of the dummy `ExampleFactory` class for testing.
            caplog: PyTest fixture to capture log output.
        """
        entry_points.return_value = [
            self._entry_point(mocker, "broken", error=ImportError("no module named 'broken'")),
            self._entry_point(mocker, "not_a_class", loaded="just a string"),
        ]

        assert set(factory.list_available()) == {"dummy"}
        assert "Failed to load plugin 'broken'" in caplog.text
        assert "Failed to load plugin 'not_a_class'" in caplog.text
