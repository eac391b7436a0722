##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Redis-backed store for one collection of Docseed documents.

Each document is one Redis hash at `<collection>:<id>`. Every top-level attribute
is a hash field holding JSON, so embedded documents, lists, dates and sets
survive the round trip.

See also:
    - docseed.backends.store_base: Base class
    - docseed.backends.utils: Serialization helpers
"""

import logging
from typing import Any, Dict, Generic, Iterator, List, Optional, Type

from redis import Redis

from docseed.backends.store_base import StoreBase, T
from docseed.backends.utils import deserialize_document, matches_filters, serialize_document


LOG = logging.getLogger(__name__)


class RedisStore(StoreBase[T], Generic[T]):
    """
    Store for documents of one collection in a Redis database.

    Attributes:
        client (Redis): The Redis client used for database operations.
        key (str): The prefix key used for Redis entries (the collection name).
        model_class (Type[T]): The document class used for deserialization.

    Methods:
        save: Save or update a document in the database.
        retrieve: Retrieve a document from the database by ID.
        retrieve_all: Query the database for all documents of this type.
        delete: Delete a document from the database by ID.
        find_first: Retrieve the first document matching attribute filters.
        clear: Delete every document of this type.
    """

    def __init__(self, client: Redis, key: str, model_class: Type[T]):
        """
        Initialize the Redis store with a Redis client.

        Args:
            client: A Redis client instance used to interact with the Redis database.
            key: The prefix key used for Redis entries.
            model_class: The document class used for deserialization.
        """
        super().__init__(key, model_class)
        self.client: Redis = client

    def _get_full_key(self, document_id: str) -> str:
        """
        Get the full Redis key for a document.

        Args:
            document_id: The document ID.

        Returns:
            The full Redis key.
        """
        return document_id if document_id.startswith(f"{self.key}:") else f"{self.key}:{document_id}"

    def _iter_documents(self) -> Iterator[T]:
        for key in self.client.scan_iter(match=f"{self.key}:*"):
            document = self.retrieve(key)
            if document is not None:
                yield document

    def save(self, document: T):
        """
        Save or update a document in the Redis database. Attributes removed from the
        document since the last save are removed from the hash too.

        Args:
            document: The document to save.
        """
        document_key = self._get_full_key(document.id)
        serialized_data = serialize_document(document)

        if self.client.exists(document_key):
            LOG.debug(f"Attempting to update {self.key} with id '{document.id}'...")
            stale_fields = set(self.client.hkeys(document_key)) - set(serialized_data)
            if stale_fields:
                self.client.hdel(document_key, *stale_fields)
            self.client.hset(document_key, mapping=serialized_data)
            LOG.debug(f"Successfully updated {self.key} with id '{document.id}'.")
        else:
            LOG.debug(f"Creating a {self.key} entry in Redis...")
            self.client.hset(document_key, mapping=serialized_data)
            LOG.debug(f"Successfully created a {self.key} with id '{document.id}' in Redis.")

    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve a document from the Redis database by ID.

        Args:
            identifier: The ID (or full Redis key) of the document to retrieve.

        Returns:
            The document if found, None otherwise.
        """
        document_key = self._get_full_key(identifier)
        if not self.client.exists(document_key):
            return None

        data_from_redis = self.client.hgetall(document_key)
        return deserialize_document(data_from_redis, self.model_class)

    def retrieve_all(self) -> List[T]:
        """
        Query the Redis database for all documents of this type.

        Returns:
            A list of documents.
        """
        LOG.debug(f"Fetching all {self.key} from Redis...")
        all_documents = list(self._iter_documents())
        LOG.debug(f"Successfully retrieved {len(all_documents)} {self.key} from Redis.")
        return all_documents

    def find_first(self, filters: Dict[str, Any]) -> Optional[T]:
        """
        Retrieve the first document whose attributes match every filter, stopping
        the scan as soon as one is found.

        Args:
            filters: A mapping of attribute path (`a.b` for nested values) to expected value.

        Returns:
            The first matching document, or None if nothing matches.
        """
        for document in self._iter_documents():
            if matches_filters(document.to_dict(), filters):
                return document
        return None

    def delete(self, identifier: str):
        """
        Delete a document from the Redis database by ID.

        Args:
            identifier: The ID of the document to delete.
        """
        document_key = self._get_full_key(identifier)
        LOG.debug(f"Deleting {self.key} hash with key '{document_key}'...")
        self.client.delete(document_key)

    def clear(self):
        """Delete every document of this type."""
        keys = list(self.client.scan_iter(match=f"{self.key}:*"))
        if keys:
            self.client.delete(*keys)
