##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tagged fixture field values.

A raw value parsed from a fixture file is classified into exactly one of:

- `Direct(value)`: a plain value (scalar, list or map) assigned as given.
- `Reference(key)`: the key of a fixture in another collection. Written either as a
  string starting with a colon (`state: :new_york`) or with the `!ref` tag
  (`state: !ref new_york`).
- `ABSENT`: an explicit `null`, meaning "this relation is deliberately empty".

Fixture keys may carry the same leading colon (`:new_york_city:`); it is stripped
so that every key can be looked up as a plain string.
"""

import re
from dataclasses import dataclass
from typing import Any, Hashable, Union

import yaml


REFERENCE_MARKER = ":"
REFERENCE_PATTERN = re.compile(r"^:([A-Za-z_][\w-]*)$")


@dataclass(frozen=True)
class Direct:
    """A plain value to assign as-is."""

    value: Any


@dataclass(frozen=True)
class Reference:
    """The key of a fixture in another collection."""

    key: str


class _Absent:
    """Type of the `ABSENT` singleton."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

FieldValue = Union[Direct, Reference, _Absent]


def strip_key_marker(key: Hashable) -> Hashable:
    """
    Remove a single leading colon from a fixture key or reference.

    Args:
        key: The key as written in the fixture file.

    Returns:
        The key without its marker. Non-string keys are returned unchanged.
    """
    if isinstance(key, str) and key.startswith(REFERENCE_MARKER):
        return key[len(REFERENCE_MARKER) :]
    return key


def classify_value(raw: Any) -> FieldValue:
    """
    Classify a raw parsed fixture value.

    Args:
        raw: The value as parsed from the fixture file.

    Returns:
        `ABSENT` for None, a `Reference` for a `!ref` tagged value or a colon-prefixed
            identifier, otherwise a `Direct` wrapping `raw`.
    """
    if raw is None or raw is ABSENT:
        return ABSENT
    if isinstance(raw, Reference):
        return raw
    if isinstance(raw, str):
        match = REFERENCE_PATTERN.match(raw)
        if match:
            return Reference(match.group(1))
    return Direct(raw)


class FixtureYamlLoader(yaml.SafeLoader):  # pylint: disable=too-many-ancestors
    """
    A safe YAML loader that also understands the `!ref` tag for fixture references.
    """


def _construct_reference(loader: yaml.SafeLoader, node: yaml.Node) -> Reference:
    return Reference(strip_key_marker(loader.construct_scalar(node)))


FixtureYamlLoader.add_constructor("!ref", _construct_reference)
