##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Used to store the application configuration.

The `config` package provides functionality for locating and loading Docseed's
configuration: where fixture files live, which document backend to persist into,
and how to log.

Modules:
    config_filepaths.py: Constants for the configuration file name and search locations.
    configfile.py: Handles locating, reading and defaulting the `docseed.yaml` file.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from docseed.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all Docseed config settings in one place.
    Regardless of the config data loading method, this class is meant to
    standardize config data retrieval throughout all parts of Docseed.

    Attributes:
        fixtures (Optional[SimpleNamespace]): Where fixture files are found (`path`,
            `fallback_path`, `extensions`).
        backend (Optional[SimpleNamespace]): The document backend to use (`name` plus
            any backend keyword options).
        logging (Optional[SimpleNamespace]): Logging settings (`level`, `colors`).

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
        backend_options: The backend section minus its `name`, as keyword arguments.
    """

    SECTIONS: List[str] = ["fixtures", "backend", "logging"]

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                The keys "fixtures", "backend" and "logging" are each converted into a
                `SimpleNamespace` and assigned to the corresponding attribute.
        """
        self.fixtures: Optional[SimpleNamespace] = None
        self.backend: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with copied section attributes.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update({section: copy(self.__dict__[section]) for section in self.SECTIONS})
        return result

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            A string containing the values of every configuration section.
        """
        formatted_str = "config:"
        for name in self.SECTIONS:
            attr = getattr(self, name)
            if attr is not None:
                items = (f"    {k}: {v!r}" for k, v in attr.__dict__.items())
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for section in self.SECTIONS:
            try:
                setattr(self, section, nested_dict_to_namespaces(app_dict[section]))
            except KeyError:
                # The sections are optional
                pass

    def backend_options(self) -> Dict:
        """
        Get the keyword arguments that should be passed to the configured backend.

        Returns:
            Every key of the `backend` section except `name`.
        """
        if self.backend is None:
            return {}
        return {key: val for key, val in vars(self.backend).items() if key != "name"}
