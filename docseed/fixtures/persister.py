##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Deduplication and persistence of loaded fixture documents.

Before a freshly built document is saved, its attributes (minus the identity
attribute) are flattened into a filter and the backend is asked for a document of
the same class that already matches it. If there is one, it is reused and the new
document is discarded. Documents are therefore reused *by value*, not by fixture
key: loading the same fixtures twice yields the same stored documents, and two
fixtures whose non-list attributes are identical collapse into one stored document.

Flattening rules:
- plain values are kept under their own name
- a nested map `population: {total: 5}` becomes `population.total: 5`
- an embedded document becomes `<lowercased class name>.<field>` entries, without its `_id`
- lists are left out, so they never take part in the comparison

The embedded document prefix is the lowercased class name, not the field name. A
document embedded under a field named differently from its class therefore never
matches a stored document, and is saved again on every load.
"""

import logging
import uuid
from typing import Any, Dict, List, Union

from docseed.backends.document_backend import DocumentBackend
from docseed.documents.document import ID_ATTRIBUTE, Document


LOG = logging.getLogger(__name__)


def _flatten_document(document: Document) -> Dict[str, Any]:
    prefix = type(document).__name__.lower()
    return {f"{prefix}.{name}": value for name, value in document.to_dict().items() if name != ID_ATTRIBUTE}


def flatten_attributes(attributes: Any) -> Union[str, Dict[str, Any]]:
    """
    Flatten document attributes into the filter used to find an equal stored document.

    Args:
        attributes: An attribute mapping, or an embedded document to flatten on its own.

    Returns:
        A flat mapping of attribute path to value. Strings are returned unchanged.
    """
    if isinstance(attributes, str):
        return attributes
    if isinstance(attributes, Document):
        return _flatten_document(attributes)

    flattened = {}
    for key, value in attributes.items():
        if isinstance(value, dict):
            for inner_key, inner_value in value.items():
                flattened[f"{key}.{inner_key}"] = inner_value
        elif isinstance(value, Document):
            flattened.update(_flatten_document(value))
        elif isinstance(value, (list, tuple)):
            continue
        else:
            flattened[key] = value
    return flattened


def _embedded_documents(value: Any) -> List[Document]:
    if isinstance(value, Document):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, Document)]
    return []


def insert_embedded_ids(document: Document) -> List[str]:
    """
    Give an id to every embedded document in the attribute bag that doesn't have
    one yet, e.g. one rebuilt with `from_dict` from data without an `_id`. Both
    embeds-one documents and the elements of embeds-many lists are covered. Ids
    that are already set are kept.

    Args:
        document: The document about to be saved.

    Returns:
        The names of the attributes holding embedded documents, all of which now have an id.
    """
    filled = []
    for key, value in document.attributes.items():
        embedded_documents = _embedded_documents(value)
        for embedded in embedded_documents:
            if embedded.id is None:
                embedded[ID_ATTRIBUTE] = str(uuid.uuid4())
                LOG.debug(f"Gave embedded {type(embedded).__name__} in '{key}' the id '{embedded.id}'.")
        if embedded_documents:
            filled.append(key)
    return filled


class Persister:
    """
    Saves documents, reusing an equal stored document when one exists.

    Attributes:
        backend: The backend documents are saved to.
    """

    def __init__(self, backend: DocumentBackend):
        """
        Args:
            backend: The backend documents are saved to.
        """
        self.backend: DocumentBackend = backend

    def save_or_reuse(self, document: Document) -> Document:
        """
        Save a document unless an equal one is already stored.

        Args:
            document: A freshly built document.

        Returns:
            The stored document equal to `document` if there is one, otherwise
                `document` itself after it has been saved.
        """
        model_class = type(document)
        attributes = {key: value for key, value in document.attributes.items() if key != ID_ATTRIBUTE}
        flattened = flatten_attributes(attributes)

        if self.backend.exists(model_class, flattened):
            existing = self.backend.find_first(model_class, flattened)
            LOG.debug(f"Reusing stored {model_class.__name__} '{existing.id}' instead of saving a duplicate.")
            return existing

        insert_embedded_ids(document)
        self.backend.save(document)
        LOG.debug(f"Saved new {model_class.__name__} '{document.id}'.")
        return document
