##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `fixtures` package turns fixture files into persisted documents.

Modules:
    embedded_builder: Builds embedded documents and links them to their owner.
    field_assigner: Chooses between a field's write accessor and the attribute bag.
    fixture_registry: Finds, parses and caches fixture files.
    loader: The `FixtureLoader` pipeline and its per-call `LoadContext`.
    persister: Deduplicates documents by value and saves new ones.
    reference_resolver: Resolves fixture references into persisted documents.
    values: Classifies raw fixture values as direct values, references or absent.
"""

from docseed.fixtures.fixture_registry import FixtureFile, FixtureRegistry
from docseed.fixtures.loader import FixtureLoader, LoadContext
from docseed.fixtures.values import ABSENT, Direct, Reference, classify_value


__all__ = [
    "ABSENT",
    "Direct",
    "FixtureFile",
    "FixtureLoader",
    "FixtureRegistry",
    "LoadContext",
    "Reference",
    "classify_value",
]
