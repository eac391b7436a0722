##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
JSON file backend for Docseed.

Modules:
    json_file_backend: The `JsonFileBackend` class.
    json_file_store: `JsonFileStore`, which keeps one collection inside the shared JSON file.
"""
