##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Redis backend implementation for the Docseed application.

This module provides a concrete implementation of the `DocumentBackend` interface using Redis
as the underlying database. It defines the `RedisBackend` class, which creates one
`RedisStore` per collection and handles database flushing.
"""

import logging
from typing import Type

from redis import Redis

from docseed.backends.document_backend import DocumentBackend
from docseed.backends.redis.redis_store import RedisStore
from docseed.documents.document import Document


LOG = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisBackend(DocumentBackend):
    """
    A Redis-based implementation of the `DocumentBackend` interface.

    Attributes:
        backend_name (str): The name of the backend (e.g., "redis").
        client (Redis): The Redis client used for database operations.

    Methods:
        get_version:
            Query Redis for the current version.

        flush_database:
            Remove every entry in the Redis database.
    """

    def __init__(self, backend_name: str = "redis", url: str = DEFAULT_REDIS_URL, client: Redis = None, **kwargs):
        """
        Initialize the `RedisBackend` instance, setting up the Redis client connection.

        Args:
            backend_name: The name of the backend (e.g., "redis").
            url: The Redis connection URL. Ignored when `client` is given.
            client: An existing Redis client to use. It must decode responses.
            **kwargs: Extra keyword arguments passed to `Redis.from_url`.
        """
        super().__init__(backend_name)
        if client is None:
            redis_config = {"url": url, "decode_responses": True}
            redis_config.update(kwargs)
            client = Redis.from_url(**redis_config)
        self.client: Redis = client

    def _create_store(self, model_class: Type[Document]) -> RedisStore:
        return RedisStore(self.client, model_class.collection_name(), model_class)

    def get_version(self) -> str:
        """
        Query the Redis backend for the current version.

        Returns:
            A string representing the current version of Redis.
        """
        client_info = self.client.info()
        return client_info.get("redis_version", "N/A")

    def flush_database(self):
        """
        Remove everything stored in Redis.
        """
        self.client.flushdb()
