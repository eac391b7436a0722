##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""This module provides enumerations for interfaces."""
from enum import Enum


__all__ = ("RelationKind",)


class RelationKind(Enum):
    """
    Enum for the kinds of relation a document field can declare.

    Attributes:
        NONE (str): The field is a plain value with no relation semantics.
        BELONGS_TO (str): The document stores the id of another top-level document.
        HAS_ONE (str): The document points at exactly one other top-level document.
        HAS_MANY (str): Other top-level documents store this document's id.
        EMBEDS_ONE (str): The field holds one embedded document owned by this one.
        EMBEDS_MANY (str): The field holds a list of embedded documents owned by this one.
        EMBEDDED_IN (str): The inverse of an embeds relation; points at the owner.
    """

    NONE = "none"
    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    EMBEDS_ONE = "embeds_one"
    EMBEDS_MANY = "embeds_many"
    EMBEDDED_IN = "embedded_in"

    @property
    def is_reference(self) -> bool:
        """Whether a fixture may point this field at another fixture by key."""
        return self in (RelationKind.BELONGS_TO, RelationKind.HAS_ONE)

    @property
    def is_embedding(self) -> bool:
        """Whether this field owns embedded documents."""
        return self in (RelationKind.EMBEDS_ONE, RelationKind.EMBEDS_MANY)
