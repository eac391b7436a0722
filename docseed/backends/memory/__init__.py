##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
In-memory backend for Docseed.

Modules:
    memory_backend: The `MemoryBackend` class.
    memory_store: `MemoryStore`, a dictionary-backed store for one collection.
"""
