##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Redis backend for Docseed.

Modules:
    redis_backend: The `RedisBackend` class.
    redis_store: `RedisStore`, which keeps one collection's documents as Redis hashes.
"""
