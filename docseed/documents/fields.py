##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Field declarations for Docseed documents.

A `Field` is a data descriptor that reads and writes a document's attribute bag.
Fields may carry a write transform (for example hashing a password before it is
stored); whether a field has one is recorded once, when the document class is
created, as a `FieldCapability`.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class FieldCapability:
    """
    What a document class allows when writing one of its members.

    Attributes:
        name: The name of the member.
        has_write_transform: True if assigning this member runs custom code
            instead of storing the value verbatim.
    """

    name: str
    has_write_transform: bool = False


class Field:
    """
    A declared document field backed by the document's attribute bag.

    Attributes:
        default: The value (or zero-argument callable producing the value) placed in
            the attribute bag when a document is constructed. `None` leaves the
            field out of the bag entirely.
        transform: A callable applied to every value assigned through the accessor.
        name: The attribute name, set when the owning class is created.
    """

    def __init__(self, default: Any = None, transform: Optional[Callable[[Any], Any]] = None):
        self.default: Any = default
        self.transform: Optional[Callable[[Any], Any]] = transform
        self.name: str = None

    def __set_name__(self, owner: type, name: str):
        self.name = name

    @property
    def has_write_transform(self) -> bool:
        """Whether assigning through this field runs a transform."""
        return self.transform is not None

    def get_default(self) -> Any:
        """
        Produce this field's default value.

        Returns:
            The result of calling `default` if it is callable, otherwise `default` itself.
        """
        return self.default() if callable(self.default) else self.default

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        if self.name in instance.attributes:
            return instance.attributes[self.name]
        return self.get_default()

    def __set__(self, instance: Any, value: Any):
        if self.transform is not None:
            value = self.transform(value)
        instance.attributes[self.name] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, transform={self.transform!r})"
