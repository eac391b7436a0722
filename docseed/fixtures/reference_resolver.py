##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Resolution of fixture references into persisted documents.

A reference names a fixture of another collection by key. Resolving it makes
sure the target collection has been loaded in the current load call (loading it
if needed) and returns the document that key was persisted as. An explicit
`null` loads the target collection the same way and resolves to None.
"""

import logging
from typing import Callable, Dict, Optional, Type, Union

from docseed.documents.document import Document
from docseed.documents.relations import relations_of
from docseed.exceptions import InvalidReferenceRelationError
from docseed.fixtures.values import _Absent, Reference


LOG = logging.getLogger(__name__)

CollectionLoader = Callable[[Type[Document]], Dict[str, Document]]


class ReferenceResolver:
    """
    Turns `Reference` and `ABSENT` field values into documents.

    Attributes:
        load_collection: Called with a document class to get the key to document
            mapping of its fixtures for the current load call, loading them first if needed.
    """

    def __init__(self, load_collection: CollectionLoader):
        """
        Args:
            load_collection: Returns the loaded fixtures of a document class.
        """
        self.load_collection: CollectionLoader = load_collection

    def resolve(
        self, model_class: Type[Document], field_name: str, value: Union[Reference, _Absent]
    ) -> Optional[Document]:
        """
        Resolve a reference (or explicit absence) for one field.

        Args:
            model_class: The class of the document that holds the field.
            field_name: The field the value was given for.
            value: A `Reference` to a fixture key, or `ABSENT`.

        Returns:
            The persisted document the reference names, or None for `ABSENT` and for
                keys the target collection doesn't define.

        Raises:
            InvalidReferenceRelationError: If the field is not a belongs-to or has-one relation.
            FixtureDataMissingError: If the target collection has no fixture file.
        """
        relation = relations_of(model_class).get(field_name)
        if relation is None or not relation.kind.is_reference:
            kind = "no relation" if relation is None else f"a {relation.kind.value} relation"
            shown = "null" if not isinstance(value, Reference) else f"reference to '{value.key}'"
            raise InvalidReferenceRelationError(
                f"{model_class.__name__}.{field_name} was given a {shown}, but it declares {kind}. "
                "Only belongs-to and has-one relations can be given references or null."
            )

        target_class = relation.target_class
        instances = self.load_collection(target_class)
        if not isinstance(value, Reference):
            LOG.debug(f"{model_class.__name__}.{field_name} is explicitly empty.")
            return None

        document = instances.get(value.key)
        if document is None:
            LOG.warning(
                f"{model_class.__name__}.{field_name} references '{value.key}', which is not a "
                f"{target_class.__name__} fixture. Leaving it empty."
            )
            return None

        LOG.debug(f"Resolved {model_class.__name__}.{field_name} to {target_class.__name__} '{value.key}'.")
        return document
