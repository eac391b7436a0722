##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Abstract base class for document backends in the Docseed application.

This module defines `DocumentBackend`, an abstract base class that specifies
the required interface for backend implementations responsible for persisting
and retrieving documents in Docseed.

The `DocumentBackend` class encapsulates:
- A unified interface for saving, retrieving, querying and deleting documents
- One store per collection, created the first time a document class is used
- Binding every document it hands out so reference relations can be fetched lazily
- Support for backend-specific behavior such as version reporting and database flushing

Usage:
    This base class is not meant to be instantiated directly. Instead, it should be subclassed
    by backend-specific implementations such as `MemoryBackend` or `RedisBackend`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from docseed.backends.store_base import StoreBase
from docseed.documents.document import Document
from docseed.exceptions import DocumentNotFoundError


LOG = logging.getLogger(__name__)


class DocumentBackend(ABC):
    """
    Abstract base class for a document backend, which provides methods to save and query
    documents in a backing database.

    Attributes:
        backend_name (str): The name of the backend (e.g., "memory", "redis").
        stores (Dict[str, backends.store_base.StoreBase]): The stores created so far,
            keyed by collection name.

    Methods:
        get_name:
            Retrieve the name of the backend.

        get_version:
            Query the backend for the current version.

        flush_database:
            Remove every entry in the database.

        save:
            Save a document to the backend database.

        retrieve:
            Retrieve a document by its ID.

        retrieve_all:
            Retrieve all documents of a class.

        retrieve_all_filtered:
            Retrieve all documents of a class whose attributes match some filters.

        find_first:
            Retrieve the first document of a class whose attributes match some filters.

        exists:
            Check whether any document of a class matches some filters.

        delete:
            Delete a document by its ID.
    """

    def __init__(self, backend_name: str):
        """
        Initialize the `DocumentBackend` instance.

        Args:
            backend_name: The name of the backend (e.g., "redis").
        """
        self.backend_name: str = backend_name
        self.stores: Dict[str, StoreBase] = {}

    def get_name(self) -> str:
        """
        Get the name of the backend.

        Returns:
            The name of the backend (e.g. redis).
        """
        return self.backend_name

    @abstractmethod
    def get_version(self) -> str:
        """
        Query the backend for the current version.

        Returns:
            A string representing the current version of the backend.
        """
        raise NotImplementedError("Subclasses of `DocumentBackend` must implement a `get_version` method.")

    @abstractmethod
    def flush_database(self):
        """
        Remove everything stored in the database.
        """
        raise NotImplementedError("Subclasses of `DocumentBackend` must implement a `flush_database` method.")

    @abstractmethod
    def _create_store(self, model_class: Type[Document]) -> StoreBase:
        """
        Create the store that holds documents of `model_class`.

        Args:
            model_class: The document class the store will hold.

        Returns:
            A new store for the class's collection.
        """
        raise NotImplementedError("Subclasses of `DocumentBackend` must implement a `_create_store` method.")

    def _get_store(self, model_class: Type[Document]) -> StoreBase:
        """
        Get the store for a document class, creating it on first use.

        Args:
            model_class: The document class.

        Returns:
            The store holding the class's collection.

        Raises:
            TypeError: If `model_class` is an embedded document class, which has no store.
        """
        if model_class.is_embedded():
            raise TypeError(f"{model_class.__name__} is an embedded document and is stored inside its owner.")
        collection = model_class.collection_name()
        if collection not in self.stores:
            LOG.debug(f"Creating a {self.backend_name} store for collection '{collection}'.")
            self.stores[collection] = self._create_store(model_class)
        return self.stores[collection]

    def _bind(self, document: Optional[Document]) -> Optional[Document]:
        return None if document is None else document.bind(self)

    def save(self, document: Document):
        """
        Save a document to its collection.

        Args:
            document: An instance of a [`Document`][documents.document.Document] subclass.
        """
        store = self._get_store(type(document))
        store.save(document)
        self._bind(document)

    def retrieve(self, model_class: Type[Document], identifier: str) -> Optional[Document]:
        """
        Retrieve a document by its ID.

        Args:
            model_class: The class of the document to retrieve.
            identifier: The ID of the document.

        Returns:
            The document, or None if it does not exist.
        """
        LOG.debug(f"Retrieving '{identifier}' from collection '{model_class.collection_name()}'.")
        return self._bind(self._get_store(model_class).retrieve(identifier))

    def retrieve_all(self, model_class: Type[Document]) -> List[Document]:
        """
        Retrieve every document of a class.

        Args:
            model_class: The class of the documents to retrieve.

        Returns:
            A list of documents.
        """
        return [self._bind(document) for document in self._get_store(model_class).retrieve_all()]

    def retrieve_all_filtered(self, model_class: Type[Document], filters: Dict[str, Any]) -> List[Document]:
        """
        Retrieve every document of a class whose attributes match all filters.

        Args:
            model_class: The class of the documents to retrieve.
            filters: A mapping of attribute path (`a.b` for nested values) to expected value.

        Returns:
            A list of matching documents.
        """
        store = self._get_store(model_class)
        return [self._bind(document) for document in store.retrieve_all_filtered(filters)]

    def find_first(self, model_class: Type[Document], filters: Dict[str, Any]) -> Optional[Document]:
        """
        Retrieve the first document of a class whose attributes match all filters.

        Args:
            model_class: The class of the document to retrieve.
            filters: A mapping of attribute path (`a.b` for nested values) to expected value.

        Returns:
            The first matching document, or None.
        """
        return self._bind(self._get_store(model_class).find_first(filters))

    def exists(self, model_class: Type[Document], filters: Dict[str, Any]) -> bool:
        """
        Check whether any document of a class matches all filters.

        Args:
            model_class: The class of the documents to check.
            filters: A mapping of attribute path (`a.b` for nested values) to expected value.

        Returns:
            True if a matching document exists.
        """
        return self._get_store(model_class).exists(filters)

    def delete(self, model_class: Type[Document], identifier: str):
        """
        Delete a document by its ID.

        Args:
            model_class: The class of the document to delete.
            identifier: The ID of the document.

        Raises:
            DocumentNotFoundError: If no such document exists.
        """
        store = self._get_store(model_class)
        if store.retrieve(identifier) is None:
            raise DocumentNotFoundError(
                f"{model_class.__name__} with id '{identifier}' does not exist in the database."
            )
        store.delete(identifier)
        LOG.info(f"Successfully deleted {model_class.__name__} '{identifier}'.")
