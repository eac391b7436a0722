##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `documents` package defines the document model that fixtures are loaded into.

Modules:
    document: The `Document` base class and the document class registry.
    fields: `Field` declarations and their write-accessor capabilities.
    relations: Relation declarations (`BelongsTo`, `HasOne`, `HasMany`, `EmbedsOne`,
        `EmbedsMany`, `EmbeddedIn`) and relation metadata lookups.
"""

from docseed.documents.document import Document, resolve_document_class
from docseed.documents.fields import Field, FieldCapability
from docseed.documents.relations import (
    BelongsTo,
    EmbeddedIn,
    EmbedsMany,
    EmbedsOne,
    HasMany,
    HasOne,
    RelationDescriptor,
    find_embedded_in,
    relation_kind,
    relations_of,
)


__all__ = [
    "BelongsTo",
    "Document",
    "EmbeddedIn",
    "EmbedsMany",
    "EmbedsOne",
    "Field",
    "FieldCapability",
    "HasMany",
    "HasOne",
    "RelationDescriptor",
    "find_embedded_in",
    "relation_kind",
    "relations_of",
    "resolve_document_class",
]
