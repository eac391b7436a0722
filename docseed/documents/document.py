##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module houses the `Document` base class that every fixture-loadable
model derives from, along with the registry used to resolve document classes
by name.

A document is an attribute bag (`attributes`) plus declared fields and
relations. The identity attribute `_id` is assigned on construction. Declaring a
subclass registers it by class name and records, once, which of its members
have a custom write accessor.
"""

import logging
import uuid
from typing import Any, Dict, Type, TypeVar

from docseed.common.enums import RelationKind
from docseed.documents.fields import Field, FieldCapability
from docseed.documents.relations import RelationDescriptor, find_embedded_in
from docseed.exceptions import UnknownDocumentClassError
from docseed.utils import get_plural_of_entity, to_snake_case


LOG = logging.getLogger(__name__)
T = TypeVar("T", bound="Document")

ID_ATTRIBUTE = "_id"
DOCUMENT_CLASSES: Dict[str, Type["Document"]] = {}


def resolve_document_class(name: str) -> Type["Document"]:
    """
    Look up a document class by its class name.

    Args:
        name: The class name (e.g. "GeoUriScheme").

    Returns:
        The registered document class.

    Raises:
        UnknownDocumentClassError: If no document class with that name has been defined.
    """
    try:
        return DOCUMENT_CLASSES[name]
    except KeyError as exc:
        raise UnknownDocumentClassError(f"No document class named '{name}' has been defined.") from exc


class Document:
    """
    Base class for documents stored in a document backend.

    Attributes:
        attributes: The attribute bag. Always holds `_id`; holds every field value
            that has been set, embedded documents included.
        _related: Objects cached by reference and embedded-in relations.
        _backend: The backend this document was saved to or read from, if any.

    Methods:
        collection_name (classmethod): The collection this class's fixtures and documents live in.
        capabilities (classmethod): The write-accessor capability of every declared member.
        fields (classmethod): The declared fields.
        relations (classmethod): The declared relations.
        is_embedded (classmethod): Whether this class is only ever embedded in another document.
        to_dict: Convert the document to nested plain data.
        from_dict (classmethod): Rebuild a document from `to_dict` output.
        bind: Attach this document (and its embedded documents) to a backend.
    """

    __collection__: str = None
    _fields: Dict[str, Field] = {}
    _relations: Dict[str, RelationDescriptor] = {}
    _capabilities: Dict[str, FieldCapability] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        fields: Dict[str, Field] = {}
        relations: Dict[str, RelationDescriptor] = {}
        capabilities: Dict[str, FieldCapability] = {}

        for klass in reversed(cls.__mro__):
            for name, member in vars(klass).items():
                if isinstance(member, Field):
                    fields[name] = member
                    capabilities[name] = FieldCapability(name, member.has_write_transform)
                elif isinstance(member, RelationDescriptor):
                    relations[name] = member
                    capabilities[name] = FieldCapability(name, False)
                elif isinstance(member, property):
                    capabilities[name] = FieldCapability(name, member.fset is not None)

        cls._fields = fields
        cls._relations = relations
        cls._capabilities = capabilities

        if cls.__name__ in DOCUMENT_CLASSES and DOCUMENT_CLASSES[cls.__name__] is not cls:
            LOG.debug(f"Replacing registered document class '{cls.__name__}'.")
        DOCUMENT_CLASSES[cls.__name__] = cls

    def __init__(self, **kwargs):
        self._setup({ID_ATTRIBUTE: str(uuid.uuid4())})
        for name, field in self._fields.items():
            default = field.get_default()
            if default is not None:
                self.attributes[name] = default
        for key, value in kwargs.items():
            setattr(self, key, value)

    def _setup(self, attributes: Dict[str, Any]):
        object.__setattr__(self, "attributes", attributes)
        object.__setattr__(self, "_related", {})
        object.__setattr__(self, "_backend", None)

    @classmethod
    def collection_name(cls) -> str:
        """
        The name of the collection this class's fixtures and stored documents live in:
        `__collection__` when the class sets it, otherwise the pluralized snake_case
        class name.

        Returns:
            The collection name (e.g. "geo_uri_schemes" for `GeoUriScheme`).
        """
        explicit = cls.__dict__.get("__collection__")
        if explicit:
            return explicit
        return get_plural_of_entity(to_snake_case(cls.__name__))

    @classmethod
    def capabilities(cls) -> Dict[str, FieldCapability]:
        """The write-accessor capability of every declared member, keyed by name."""
        return dict(cls._capabilities)

    @classmethod
    def fields(cls) -> Dict[str, Field]:
        """The declared fields, keyed by name."""
        return dict(cls._fields)

    @classmethod
    def relations(cls) -> Dict[str, RelationDescriptor]:
        """The declared relations, keyed by name."""
        return dict(cls._relations)

    @classmethod
    def is_embedded(cls) -> bool:
        """Whether this class declares an embedded-in relation."""
        return any(relation.kind is RelationKind.EMBEDDED_IN for relation in cls._relations.values())

    @property
    def id(self) -> Any:  # pylint: disable=invalid-name
        """The identity attribute."""
        return self.attributes.get(ID_ATTRIBUTE)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not declared; fall back to dynamic attributes
        attributes = self.__dict__.get("attributes")
        if attributes is not None and name in attributes:
            return attributes[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any):
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self.attributes[name] = value

    def __getitem__(self, key: str) -> Any:
        return self.attributes.get(key)

    def __setitem__(self, key: str, value: Any):
        self.attributes[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.attributes

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        shown = ", ".join(
            f"{key}={val!r}" for key, val in self.attributes.items() if not isinstance(val, (Document, list))
        )
        return f"{type(self).__name__}({shown})"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the document to nested plain data. Embedded documents become nested
        dictionaries carrying their own `_id`; embedded-in back-references and cached
        related objects are left out.

        Returns:
            The document as a dictionary.
        """
        return {key: _to_plain(value) for key, value in self.attributes.items()}

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Create a document from a dictionary produced by `to_dict`. Declared
        embeds-one and embeds-many fields are rebuilt into documents linked to
        the new owner; everything else is placed in the attribute bag as-is.

        Args:
            data: A dictionary to turn into an instance of this class.

        Returns:
            An instance of the class that called this.
        """
        document = cls.__new__(cls)
        document._setup({})
        for key, value in data.items():
            relation = cls._relations.get(key)
            if relation is not None and relation.kind is RelationKind.EMBEDS_ONE and isinstance(value, dict):
                value = _embedded_from_dict(relation, value, document)
            elif relation is not None and relation.kind is RelationKind.EMBEDS_MANY and isinstance(value, list):
                value = [
                    _embedded_from_dict(relation, item, document) if isinstance(item, dict) else item for item in value
                ]
            document.attributes[key] = value
        return document

    def bind(self, backend: Any) -> "Document":
        """
        Attach this document, and every embedded document it holds, to a backend so
        that reference relations can be fetched lazily.

        Args:
            backend: The [`DocumentBackend`][backends.document_backend.DocumentBackend]
                this document belongs to.

        Returns:
            This document.
        """
        object.__setattr__(self, "_backend", backend)
        for value in self.attributes.values():
            if isinstance(value, Document):
                value.bind(backend)
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Document):
                        item.bind(backend)
        return self


def _to_plain(value: Any) -> Any:
    if isinstance(value, Document):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_plain(val) for key, val in value.items()}
    return value


def _embedded_from_dict(relation: RelationDescriptor, data: Dict[str, Any], owner: Document) -> Document:
    embedded_class = relation.target_class
    embedded = embedded_class.from_dict(data)
    inverse = relation.inverse_of or find_embedded_in(embedded_class, owner)
    if inverse is not None:
        setattr(embedded, inverse, owner)
    return embedded
