##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Assignment of plain fixture values onto documents.
"""

import logging
from typing import Any

from docseed.documents.document import Document


LOG = logging.getLogger(__name__)


class FieldAssigner:
    """
    Decides, per field, whether a value goes through the document's write accessor
    or straight into its attribute bag.

    A member with a custom write transform (a `Field` with a `transform`, or a
    property with a setter) is assigned through the accessor so the transform runs,
    e.g. hashing a password. Everything else is stored verbatim in the attribute bag.
    """

    def assign(self, document: Document, field_name: str, value: Any):
        """
        Assign one value to one field of a document.

        Args:
            document: The document being populated.
            field_name: The field to assign.
            value: The value to assign.
        """
        capability = type(document).capabilities().get(field_name)
        if capability is not None and capability.has_write_transform:
            LOG.debug(f"Assigning {type(document).__name__}.{field_name} through its write accessor.")
            setattr(document, field_name, value)
        else:
            document[field_name] = value
