##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Module of all Docseed-specific exception types.
"""

from typing import List


__all__ = (
    "FixtureError",
    "FixtureSourceNotFoundError",
    "FixtureDataMissingError",
    "MalformedFixtureFileError",
    "InvalidReferenceRelationError",
    "MalformedEmbeddedValueError",
    "EmbedParentNotFoundError",
    "CyclicReferenceError",
    "UnknownDocumentClassError",
    "DocumentNotFoundError",
    "BackendNotSupportedError",
)


class FixtureError(Exception):
    """
    Base class for every error raised while loading fixtures. Any of these
    aborts the whole `load` call it was raised in.
    """


class FixtureSourceNotFoundError(FixtureError):
    """
    Exception to signal that no fixture directory could be found at either
    the configured location or its fallback.
    """


class FixtureDataMissingError(FixtureError):
    """
    Exception to signal that a requested collection has no fixture file.
    """


class MalformedFixtureFileError(FixtureError):
    """
    Exception to signal that a fixture file is not a mapping of fixture keys
    to field maps.
    """


class InvalidReferenceRelationError(FixtureError):
    """
    Exception to signal that a reference (or explicit null) was given to a field
    that is not a belongs-to or has-one relation.
    """


class MalformedEmbeddedValueError(FixtureError):
    """
    Exception to signal that a field declared as embedded was not given a
    field map.
    """


class EmbedParentNotFoundError(FixtureError):
    """
    Exception to signal that an embedded document class declares no
    embedded-in relation pointing back at its owner.
    """


class CyclicReferenceError(FixtureError):
    """
    Exception to signal that collections reference each other in a cycle.

    Attributes:
        cycle: The names of the document classes forming the cycle, in the order
            they were entered. The first name is repeated at the end.
    """

    def __init__(self, cycle: List[str]):
        self.cycle: List[str] = cycle
        super().__init__(f"Cyclic fixture reference detected: {' -> '.join(cycle)}")


class UnknownDocumentClassError(Exception):
    """
    Exception to signal that a relation names a document class that was never defined.
    """


class DocumentNotFoundError(Exception):
    """
    Exception to signal that a document does not exist in the backend.
    """


class BackendNotSupportedError(Exception):
    """
    Exception to signal that the provided backend is not supported by Docseed.
    """
