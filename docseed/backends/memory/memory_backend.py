##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
In-memory backend implementation for the Docseed application.

This is the default backend. Nothing outlives the process, which makes it the
natural choice for unit test suites that only need the documents for the
length of a test session.
"""

import logging
from typing import Type

from docseed import __version__
from docseed.backends.document_backend import DocumentBackend
from docseed.backends.memory.memory_store import MemoryStore
from docseed.documents.document import Document


LOG = logging.getLogger(__name__)


class MemoryBackend(DocumentBackend):
    """
    A `DocumentBackend` that keeps every collection in process memory.

    Methods:
        get_version: Report the Docseed version, since there is no server.
        flush_database: Remove every document from every collection.
    """

    def __init__(self, backend_name: str = "memory"):
        super().__init__(backend_name)

    def _create_store(self, model_class: Type[Document]) -> MemoryStore:
        return MemoryStore(model_class.collection_name(), model_class)

    def get_version(self) -> str:
        """
        Report the version of the backend.

        Returns:
            The installed Docseed version.
        """
        return __version__

    def flush_database(self):
        """
        Remove every document from every collection.
        """
        for store in self.stores.values():
            store.clear()
        LOG.debug("Flushed the in-memory database.")
