##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Store for one collection kept in a shared JSON database file.

The file holds a single object of the form `{collection: {id: document}}`. Every
operation reads the file while holding a `FileLock` next to it, and every write
replaces the file atomically, so several processes can share one database.
"""

import logging
from typing import Dict, Generic, List, Optional, Type

from filelock import FileLock

from docseed.backends.store_base import StoreBase, T
from docseed.backends.utils import dump_json_file, load_json_file


LOG = logging.getLogger(__name__)


class JsonFileStore(StoreBase[T], Generic[T]):
    """
    A store for one collection inside a JSON database file.

    Attributes:
        filepath (str): The path to the JSON database file.
        lock_file (str): The path to the lock file guarding `filepath`.
        key (str): The collection name this store holds.
        model_class (Type[T]): The document class used for deserialization.

    Methods:
        save: Save or update a document.
        retrieve: Retrieve a document by ID.
        retrieve_all: Retrieve every document in the collection.
        delete: Delete a document by ID.
        clear: Remove every document in the collection.
    """

    def __init__(self, filepath: str, key: str, model_class: Type[T]):
        """
        Args:
            filepath: The path to the JSON database file.
            key: The collection name this store holds.
            model_class: The document class used for deserialization.
        """
        super().__init__(key, model_class)
        self.filepath: str = filepath
        self.lock_file: str = f"{filepath}.lock"

    def _read_collection(self) -> Dict[str, Dict]:
        with FileLock(self.lock_file):  # pylint: disable=abstract-class-instantiated
            return load_json_file(self.filepath).get(self.key, {})

    def save(self, document: T):
        """
        Save or update a document.

        Args:
            document: The document to save.
        """
        with FileLock(self.lock_file):  # pylint: disable=abstract-class-instantiated
            database = load_json_file(self.filepath)
            collection = database.setdefault(self.key, {})
            action = "Updating" if document.id in collection else "Creating"
            LOG.debug(f"{action} {self.key} entry with id '{document.id}' in '{self.filepath}'.")
            collection[document.id] = document.to_dict()
            dump_json_file(database, self.filepath)

    def retrieve(self, identifier: str) -> Optional[T]:
        """
        Retrieve a document by ID.

        Args:
            identifier: The ID of the document to retrieve.

        Returns:
            The document if found, None otherwise.
        """
        data = self._read_collection().get(identifier)
        if data is None:
            return None
        return self.model_class.from_dict(data)

    def retrieve_all(self) -> List[T]:
        """
        Retrieve every document in the collection.

        Returns:
            A list of documents in the order they were first saved.
        """
        return [self.model_class.from_dict(data) for data in self._read_collection().values()]

    def delete(self, identifier: str):
        """
        Delete a document by ID. Unknown IDs are ignored.

        Args:
            identifier: The ID of the document to delete.
        """
        with FileLock(self.lock_file):  # pylint: disable=abstract-class-instantiated
            database = load_json_file(self.filepath)
            if database.get(self.key, {}).pop(identifier, None) is not None:
                dump_json_file(database, self.filepath)

    def clear(self):
        """Remove every document in the collection."""
        with FileLock(self.lock_file):  # pylint: disable=abstract-class-instantiated
            database = load_json_file(self.filepath)
            if database.pop(self.key, None) is not None:
                dump_json_file(database, self.filepath)
