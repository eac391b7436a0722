##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines the abstract base class for all document store implementations in Docseed.

This module provides the `StoreBase` class, which outlines the required interface for saving,
retrieving, listing, and deleting documents of one collection from a backing data store. All
concrete store classes must inherit from this class and implement its abstract methods. The
attribute-filter queries used for fixture deduplication are implemented here on top of
`retrieve_all`; stores may override them with something faster.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from docseed.backends.utils import matches_filters
from docseed.documents.document import Document


LOG = logging.getLogger(__name__)
T = TypeVar("T", bound=Document)


class StoreBase(ABC, Generic[T]):
    """
    Base class for all stores supported in Docseed. A store holds the documents of
    one collection.

    Attributes:
        key: The collection name this store holds.
        model_class: The document class used for deserialization.

    Methods:
        save: Save or update a document in the database.
        retrieve: Retrieve a document from the database by ID.
        retrieve_all: Query the database for all documents of this type.
        delete: Delete a document from the database by ID.
        retrieve_all_filtered: Query the database for documents matching attribute filters.
        find_first: Retrieve the first document matching attribute filters.
        exists: Check whether any document matches attribute filters.
    """

    def __init__(self, key: str, model_class: Type[T]):
        """
        Args:
            key: The collection name this store holds.
            model_class: The document class used for deserialization.
        """
        self.key: str = key
        self.model_class: Type[T] = model_class

    @abstractmethod
    def save(self, document: T):
        """
        Save or update a document in the database.

        Args:
            document: The document to save.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `save` method.")

    @abstractmethod
    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve a document from the database by its ID.

        Args:
            identifier: The ID of the document to retrieve.

        Returns:
            The document if found, None otherwise.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve` method.")

    @abstractmethod
    def retrieve_all(self) -> List[T]:
        """
        Query the database for all documents of this type.

        Returns:
            A list of documents.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `retrieve_all` method.")

    @abstractmethod
    def delete(self, identifier: str):
        """
        Delete a document from the database by its ID.

        Args:
            identifier: The ID of the document to delete.
        """
        raise NotImplementedError("Subclasses of `StoreBase` must implement a `delete` method.")

    def retrieve_all_filtered(self, filters: Dict[str, Any]) -> List[T]:
        """
        Query the database for documents whose attributes match every filter.

        Args:
            filters: A mapping of attribute path (`a.b` for nested values) to expected value.

        Returns:
            The matching documents, in store order.
        """
        return [document for document in self.retrieve_all() if matches_filters(document.to_dict(), filters)]

    def find_first(self, filters: Dict[str, Any]) -> Optional[T]:
        """
        Retrieve the first document whose attributes match every filter.

        Args:
            filters: A mapping of attribute path (`a.b` for nested values) to expected value.

        Returns:
            The first matching document, or None if nothing matches.
        """
        for document in self.retrieve_all():
            if matches_filters(document.to_dict(), filters):
                return document
        return None

    def exists(self, filters: Dict[str, Any]) -> bool:
        """
        Check whether any document's attributes match every filter.

        Args:
            filters: A mapping of attribute path (`a.b` for nested values) to expected value.

        Returns:
            True if at least one document matches.
        """
        return self.find_first(filters) is not None
