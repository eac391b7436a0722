##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Utility functions for backends in the Docseed application.

These utilities convert documents into a persistable format and back, and
implement the attribute-filter matching used by every store's queries.
"""

import json
import logging
import os
from datetime import date, datetime
from typing import Any, Dict, Type, TypeVar


T = TypeVar("T")

LOG = logging.getLogger(__name__)

_MISSING = object()


def _json_default(value: Any) -> Dict[str, Any]:
    """
    Encode values the `json` module can't handle on its own. Each one is wrapped
    in a single-key marker dictionary so it can be recognized when decoding.
    """
    # datetime is a subclass of date so it has to be checked first
    if isinstance(value, datetime):
        return {"__datetime__": value.isoformat()}
    if isinstance(value, date):
        return {"__date__": value.isoformat()}
    if isinstance(value, (set, frozenset)):
        return {"__set__": list(value)}
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _json_object_hook(obj: Dict[str, Any]) -> Any:
    """Undo the marker dictionaries written by `_json_default`."""
    if len(obj) == 1:
        if "__datetime__" in obj:
            return datetime.fromisoformat(obj["__datetime__"])
        if "__date__" in obj:
            return date.fromisoformat(obj["__date__"])
        if "__set__" in obj:
            return set(obj["__set__"])
    return obj


def encode_value(value: Any) -> str:
    """
    Encode a single value as JSON, preserving sets, dates and datetimes.

    Args:
        value: The value to encode.

    Returns:
        The JSON string.
    """
    return json.dumps(value, default=_json_default)


def decode_value(value: str) -> Any:
    """
    Decode a value written by [`encode_value`][backends.utils.encode_value].

    Args:
        value: The JSON string.

    Returns:
        The decoded value.
    """
    return json.loads(value, object_hook=_json_object_hook)


def load_json_file(filepath: str) -> Dict[str, Any]:
    """
    Load a JSON file written by [`dump_json_file`][backends.utils.dump_json_file].
    The caller is responsible for holding the file's lock.

    Args:
        filepath: The path to the JSON file.

    Returns:
        The decoded contents, or an empty dictionary if the file doesn't exist yet.
    """
    if not os.path.exists(filepath):
        return {}
    with open(filepath, "r") as json_file:
        return json.load(json_file, object_hook=_json_object_hook)


def dump_json_file(data: Dict[str, Any], filepath: str):
    """
    Write data to a JSON file atomically by writing a temporary file and moving
    it into place. The caller is responsible for holding the file's lock.

    Args:
        data: The data to write.
        filepath: The path to the JSON file.
    """
    dirname = os.path.dirname(filepath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)

    temp_filepath = f"{filepath}.tmp"
    with open(temp_filepath, "w") as json_file:
        json.dump(data, json_file, indent=4, default=_json_default)
    os.replace(temp_filepath, filepath)


def serialize_document(document: Any) -> Dict[str, str]:
    """
    Given a [`Document`][documents.document.Document] instance, convert its data
    into a flat mapping of attribute name to JSON string.

    Args:
        document: A [`Document`][documents.document.Document] instance.

    Returns:
        A dictionary of information that the database can store.
    """
    LOG.debug(f"Serializing {type(document).__name__} '{document.id}'...")
    return {key: encode_value(val) for key, val in document.to_dict().items()}


def deserialize_document(data: Dict[str, str], model_class: Type[T]) -> T:
    """
    Given data written by [`serialize_document`][backends.utils.serialize_document],
    convert it back into a document.

    Args:
        data: The serialized data retrieved from the database.
        model_class: A [`Document`][documents.document.Document] subclass.

    Returns:
        A [`Document`][documents.document.Document] instance.
    """
    deserialized_data = {}

    for key, val in data.items():
        try:
            deserialized_data[key] = decode_value(val)
        except json.JSONDecodeError as exc:
            LOG.error(f"Failed to deserialize JSON for key {key}: {val}")
            LOG.error(f"Error: {str(exc)}")
            # Use the original string value as fallback
            deserialized_data[key] = val

    return model_class.from_dict(deserialized_data)


def dig(data: Dict[str, Any], path: str) -> Any:
    """
    Walk a dotted attribute path through nested dictionaries.

    Args:
        data: The nested data to walk.
        path: The dotted path (e.g. "population.total").

    Returns:
        The value at `path`, or a private sentinel if any step is missing.
    """
    current = data
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def matches_filters(data: Dict[str, Any], filters: Dict[str, Any]) -> bool:
    """
    Check whether nested document data satisfies every attribute filter. A key
    containing dots addresses a nested value. A path that doesn't exist only
    matches a filter value of `None`.

    Args:
        data: A document's data as produced by `Document.to_dict`.
        filters: A mapping of attribute path to expected value.

    Returns:
        True if every filter matches.
    """
    for path, expected in filters.items():
        actual = dig(data, path)
        if actual is _MISSING:
            if expected is not None:
                return False
        elif actual != expected:
            return False
    return True
