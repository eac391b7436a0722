##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Construction of embedded documents from fixture field maps.

An embedded document is built from a map of its fields, then pointed back at
its owner through the embedded class's embedded-in relation. Every embedded
class must declare one that matches the owner.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from docseed.documents.document import Document
from docseed.documents.relations import find_embedded_in
from docseed.exceptions import EmbedParentNotFoundError, InvalidReferenceRelationError, MalformedEmbeddedValueError
from docseed.fixtures.field_assigner import FieldAssigner
from docseed.fixtures.values import Reference, classify_value


LOG = logging.getLogger(__name__)


def find_embed_parent_field(embedded_class: Type[Document], owner: Document) -> str:
    """
    Find the embedded-in field of `embedded_class` that points back at `owner`.

    Args:
        embedded_class: The embedded document class.
        owner: The document that will own the embedded document.

    Returns:
        The name of the embedded-in field.

    Raises:
        EmbedParentNotFoundError: If `embedded_class` declares no embedded-in
            relation that `owner` can fill.
    """
    parent_field = find_embedded_in(embedded_class, owner)
    if parent_field is None:
        raise EmbedParentNotFoundError(
            f"Unable to find the parent field of {embedded_class.__name__}: it declares no "
            f"embedded-in relation to {type(owner).__name__}."
        )
    return parent_field


class EmbeddedBuilder:
    """
    Builds embedded documents and links them to their owner.

    Methods:
        build_one: Build a single embedded document from a field map.
        build_many: Build a list of embedded documents from a list of field maps.
    """

    def __init__(self, assigner: FieldAssigner = None):
        """
        Args:
            assigner: Used to assign each field of an embedded document.
        """
        self.assigner: FieldAssigner = assigner or FieldAssigner()

    def build_one(
        self,
        embedded_class: Type[Document],
        field_map: Dict[str, Any],
        owner: Document,
        inverse_of: Optional[str] = None,
    ) -> Document:
        """
        Build one embedded document and point it at its owner.

        Args:
            embedded_class: The embedded document class.
            field_map: The embedded document's fields.
            owner: The document that owns the embedded document.
            inverse_of: The embedded-in field to set, when the owner's relation names it.

        Returns:
            The new embedded document.

        Raises:
            MalformedEmbeddedValueError: If `field_map` is not a map.
            InvalidReferenceRelationError: If a field of the map is a reference, written
                either as `:key` or with the `!ref` tag.
            EmbedParentNotFoundError: If `embedded_class` has no embedded-in relation to the owner.
        """
        if not isinstance(field_map, dict):
            raise MalformedEmbeddedValueError(
                f"{field_map!r} was supposed to be a map of {embedded_class.__name__} fields. "
                f"{embedded_class.__name__} documents are embedded in {type(owner).__name__}; "
                f"write them as maps inside the {type(owner).__name__} fixture."
            )

        embedded = embedded_class()
        for field_name, raw in field_map.items():
            value = classify_value(raw)
            if isinstance(value, Reference):
                raise InvalidReferenceRelationError(
                    f"{embedded_class.__name__}.{field_name} is inside an embedded document, "
                    f"which cannot reference the fixture '{value.key}'."
                )
            self.assigner.assign(embedded, field_name, raw)

        parent_field = inverse_of or find_embed_parent_field(embedded_class, owner)
        setattr(embedded, parent_field, owner)
        LOG.debug(f"Built embedded {embedded_class.__name__} for {type(owner).__name__} '{owner.id}'.")
        return embedded

    def build_many(
        self,
        embedded_class: Type[Document],
        field_maps: List[Dict[str, Any]],
        owner: Document,
        inverse_of: Optional[str] = None,
    ) -> List[Document]:
        """
        Build a list of embedded documents, in the order given, each pointed at the owner.

        Args:
            embedded_class: The embedded document class.
            field_maps: One field map per embedded document.
            owner: The document that owns the embedded documents.
            inverse_of: The embedded-in field to set, when the owner's relation names it.

        Returns:
            The new embedded documents.

        Raises:
            MalformedEmbeddedValueError: If `field_maps` is not a list, or one of its
                elements is not a map.
        """
        if not isinstance(field_maps, list):
            raise MalformedEmbeddedValueError(
                f"{field_maps!r} was supposed to be a list of {embedded_class.__name__} field maps."
            )
        return [self.build_one(embedded_class, field_map, owner, inverse_of) for field_map in field_maps]
