##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `backends` package contains the document stores that loaded fixtures are
persisted into.

Subpackages:
    json_file: A backend that keeps every collection in one JSON file.
    memory: The default, in-process backend.
    redis: A backend that keeps every document as a Redis hash.

Modules:
    backend_factory: Contains `backend_factory`, used to build a backend by name.
    document_backend: The `DocumentBackend` abstract base class.
    store_base: The `StoreBase` abstract base class for per-collection stores.
    utils: Serialization and attribute-filter helpers shared by the stores.
"""
