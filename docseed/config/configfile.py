##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module provides functionality for locating and loading Docseed's configuration
file (`docseed.yaml`), merging it over the built-in defaults, and applying
environment variable overrides.
"""
import logging
import os
from copy import deepcopy
from typing import Dict

from docseed.config import Config
from docseed.config.config_filepaths import (
    APP_FILENAME,
    CONFIG_PATH_FILE,
    DEFAULT_FIXTURES_PATH,
    DOCSEED_HOME,
)
from docseed.utils import dict_deep_merge, load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict = {
    "fixtures": {
        "path": DEFAULT_FIXTURES_PATH,
        "fallback_path": None,
        "extensions": [".yml", ".yaml"],
    },
    "backend": {"name": "memory"},
    "logging": {"level": None, "colors": True},
}

ENV_OVERRIDES: Dict = {
    "DOCSEED_FIXTURES_PATH": ("fixtures", "path"),
    "DOCSEED_BACKEND": ("backend", "name"),
}


def load_config(filepath: str) -> Dict:
    """
    Reads a Docseed YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> str:
    """
    Locate the Docseed configuration file (`docseed.yaml`).

    This function searches for the configuration file based on a given directory or,
    if no directory is provided, uses a fallback sequence:
      1. Check for `docseed.yaml` in the current working directory.
      2. Check if `CONFIG_PATH_FILE` exists and points to a valid config file.
      3. Check for `docseed.yaml` in the `DOCSEED_HOME` directory.

    If a `path` is explicitly provided, the function checks only that directory
    for `docseed.yaml`.

    Args:
        path: A specific directory to look for `docseed.yaml`.

    Returns:
        The full path to the `docseed.yaml` file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        if os.path.isfile(CONFIG_PATH_FILE):
            with open(CONFIG_PATH_FILE, "r") as f:
                config_path = f.read().strip()
            if os.path.isfile(config_path):
                return config_path

        path_app = os.path.join(DOCSEED_HOME, APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def apply_env_overrides(app_dict: Dict) -> Dict:
    """
    Apply any `DOCSEED_*` environment variables on top of `app_dict`.

    Args:
        app_dict: The configuration dictionary to modify in place.

    Returns:
        The modified configuration dictionary.
    """
    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            LOG.debug(f"Using {env_var}={value} for {section}.{key}.")
            app_dict.setdefault(section, {})[key] = value
    return app_dict


def get_config(path: str = None) -> Config:
    """
    Build the Docseed configuration.

    The defaults are loaded first, then the contents of the configuration file
    found by [`find_config_file`][config.configfile.find_config_file] (if any),
    then environment variable overrides.

    Args:
        path: A specific directory to look for `docseed.yaml` in.

    Returns:
        The assembled [`Config`][config.Config] object.
    """
    app_dict = deepcopy(DEFAULT_CONFIG)

    filepath = find_config_file(path)
    if filepath is not None:
        file_contents = load_config(filepath)
        if file_contents:
            dict_deep_merge(app_dict, file_contents)
    else:
        LOG.debug("No docseed.yaml found; using the default configuration.")

    apply_env_overrides(app_dict)
    return Config(app_dict)
