##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
In-process store holding one collection's documents as plain data.

Documents are copied on the way in and on the way out, so a document that is
modified after being saved doesn't change what's stored until it's saved again.
"""

import logging
from copy import deepcopy
from typing import Dict, Generic, List, Optional, Type

from docseed.backends.store_base import StoreBase, T


LOG = logging.getLogger(__name__)


class MemoryStore(StoreBase[T], Generic[T]):
    """
    A store that keeps documents in a dictionary, in insertion order.

    Attributes:
        key (str): The collection name this store holds.
        model_class (Type[T]): The document class used for deserialization.

    Methods:
        save: Save or update a document.
        retrieve: Retrieve a document by ID.
        retrieve_all: Retrieve every document in the collection.
        delete: Delete a document by ID.
        clear: Remove every document in the collection.
    """

    def __init__(self, key: str, model_class: Type[T]):
        super().__init__(key, model_class)
        self._documents: Dict[str, Dict] = {}

    def save(self, document: T):
        """
        Save or update a document.

        Args:
            document: The document to save.
        """
        action = "Updating" if document.id in self._documents else "Creating"
        LOG.debug(f"{action} {self.key} entry with id '{document.id}' in memory.")
        self._documents[document.id] = deepcopy(document.to_dict())

    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve a document by ID.

        Args:
            identifier: The ID of the document to retrieve.

        Returns:
            The document if found, None otherwise.
        """
        data = self._documents.get(identifier)
        if data is None:
            return None
        return self.model_class.from_dict(deepcopy(data))

    def retrieve_all(self) -> List[T]:
        """
        Retrieve every document in the collection.

        Returns:
            A list of documents in the order they were first saved.
        """
        return [self.model_class.from_dict(deepcopy(data)) for data in self._documents.values()]

    def delete(self, identifier: str):
        """
        Delete a document by ID. Unknown IDs are ignored.

        Args:
            identifier: The ID of the document to delete.
        """
        self._documents.pop(identifier, None)

    def clear(self):
        """Remove every document in the collection."""
        self._documents.clear()
