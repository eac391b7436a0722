##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Module for project-wide utility functions.
"""
import logging
import os
import re
from copy import deepcopy
from types import SimpleNamespace
from typing import Any, Dict

import yaml


LOG = logging.getLogger(__name__)

# Plurals that the suffix rules below get wrong
IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
    "datum": "data",
    "criterion": "criteria",
}
IRREGULAR_SINGULARS = {plural: singular for singular, plural in IRREGULAR_PLURALS.items()}
UNCOUNTABLE = {"equipment", "information", "series", "species", "sheep", "fish", "metadata"}


def load_yaml(filepath: str, loader: Any = yaml.SafeLoader) -> Any:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.
        loader: The YAML loader class to parse with. Must be a safe loader or
            a subclass of one.

    Returns:
        The contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.load(_file, Loader=loader)  # nosec B506


def expand_path(path: str) -> str:
    """
    Expand user shortcuts and environment variables in `path` and make it absolute.

    Args:
        path: The path to expand.

    Returns:
        The absolute, expanded path.
    """
    return os.path.abspath(os.path.expandvars(os.path.expanduser(path)))


def to_snake_case(name: str) -> str:
    """
    Convert a CamelCase class name into snake_case.

    Args:
        name: The name to convert (e.g. "GeoUriScheme").

    Returns:
        The snake_case form of `name` (e.g. "geo_uri_scheme").
    """
    name = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name).lower()


def to_camel_case(name: str) -> str:
    """
    Convert a snake_case name into CamelCase.

    Args:
        name: The name to convert (e.g. "geo_uri_scheme").

    Returns:
        The CamelCase form of `name` (e.g. "GeoUriScheme").
    """
    return "".join(part.capitalize() for part in name.split("_") if part)


def _pluralize_word(word: str) -> str:
    lowered = word.lower()
    if lowered in UNCOUNTABLE:
        return word
    if lowered in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[lowered]
    if re.search(r"[^aeiou]y$", lowered):
        return word[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", lowered):
        return word + "es"
    return word + "s"


def _singularize_word(word: str) -> str:
    lowered = word.lower()
    if lowered in UNCOUNTABLE:
        return word
    if lowered in IRREGULAR_SINGULARS:
        return IRREGULAR_SINGULARS[lowered]
    if lowered.endswith("ies") and len(lowered) > 3:
        return word[:-3] + "y"
    if re.search(r"(ss|x|z|ch|sh)es$", lowered):
        return word[:-2]
    if lowered.endswith("s") and not lowered.endswith("ss"):
        return word[:-1]
    return word


def get_plural_of_entity(entity: str, split_delimiter: str = "_", join_delimiter: str = "_") -> str:
    """
    Pluralize an entity name. Only the last word of a multi-word name is pluralized.

    Args:
        entity: The entity name to pluralize (e.g. "geo_uri_scheme").
        split_delimiter: The delimiter separating words in `entity`.
        join_delimiter: The delimiter used to join the words back together.

    Returns:
        The pluralized name (e.g. "geo_uri_schemes").
    """
    words = entity.split(split_delimiter)
    words[-1] = _pluralize_word(words[-1])
    return join_delimiter.join(words)


def get_singular_of_entity(entity: str, split_delimiter: str = "_", join_delimiter: str = "_") -> str:
    """
    Singularize an entity name. Only the last word of a multi-word name is singularized.

    Args:
        entity: The entity name to singularize (e.g. "people").
        split_delimiter: The delimiter separating words in `entity`.
        join_delimiter: The delimiter used to join the words back together.

    Returns:
        The singular name (e.g. "person").
    """
    words = entity.split(split_delimiter)
    words[-1] = _singularize_word(words[-1])
    return join_delimiter.join(words)


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    This function recursively transforms a dictionary (which may contain other
    dictionaries) into a structure of SimpleNamespace objects. Each key in the
    dictionary becomes an attribute of a SimpleNamespace, allowing for attribute-style
    access to the data.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"{dic} is not a dict")

    new_dic = deepcopy(dic)
    return recurse(new_dic)


def dict_deep_merge(dict_a: Dict, dict_b: Dict, path: str = None):
    """
    Merge `dict_b` into `dict_a` in place. Nested dictionaries are merged
    recursively; any other value in `dict_b` overwrites the one in `dict_a`.

    Args:
        dict_a: The dict that will be modified.
        dict_b: The dict whose values take precedence.
        path: The key path of the current recursion, used for logging.
    """
    if path is None:
        path = ""
    for key, val in dict_b.items():
        if key in dict_a and isinstance(dict_a[key], dict) and isinstance(val, dict):
            dict_deep_merge(dict_a[key], val, f"{path}.{key}" if path else str(key))
        else:
            if key in dict_a and dict_a[key] != val:
                LOG.debug(f"Overriding '{f'{path}.{key}' if path else key}' with {val!r}.")
            dict_a[key] = val
