##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
JSON file backend implementation for the Docseed application.

Every collection lives in one JSON file on disk, which makes loaded fixtures easy
to inspect and lets them outlive the process without running a database server.
"""

import logging
import os
from typing import Type

from filelock import FileLock

from docseed import __version__
from docseed.backends.document_backend import DocumentBackend
from docseed.backends.json_file.json_file_store import JsonFileStore
from docseed.documents.document import Document
from docseed.utils import expand_path


LOG = logging.getLogger(__name__)

DEFAULT_JSON_FILE = "docseed_db.json"


class JsonFileBackend(DocumentBackend):
    """
    A `DocumentBackend` that keeps every collection in a single JSON file.

    Attributes:
        backend_name (str): The name of the backend.
        filepath (str): The absolute path to the JSON database file.

    Methods:
        get_version: Report the Docseed version, since there is no server.
        flush_database: Remove the database file.
    """

    def __init__(self, backend_name: str = "json_file", path: str = DEFAULT_JSON_FILE):
        """
        Args:
            backend_name: The name of the backend.
            path: The path to the JSON database file. It is created on the first save.
        """
        super().__init__(backend_name)
        self.filepath: str = expand_path(path)
        # The lock file lives next to the database so its directory has to exist up front
        os.makedirs(os.path.dirname(self.filepath), exist_ok=True)

    def _create_store(self, model_class: Type[Document]) -> JsonFileStore:
        return JsonFileStore(self.filepath, model_class.collection_name(), model_class)

    def get_version(self) -> str:
        """
        Report the version of the backend.

        Returns:
            The installed Docseed version.
        """
        return __version__

    def flush_database(self):
        """
        Remove the database file and everything in it.
        """
        with FileLock(f"{self.filepath}.lock"):  # pylint: disable=abstract-class-instantiated
            if os.path.exists(self.filepath):
                os.remove(self.filepath)
        LOG.debug(f"Flushed the JSON database at '{self.filepath}'.")
