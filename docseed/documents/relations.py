##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Relation declarations for Docseed documents.

Each declarator (`BelongsTo`, `HasOne`, `HasMany`, `EmbedsOne`, `EmbedsMany`,
`EmbeddedIn`) is both the relation's metadata and the Python descriptor that
reads and writes it on a document instance. The functions at the bottom of this
module answer metadata questions about a document class without touching an
instance: [`relations_of`][documents.relations.relations_of],
[`relation_kind`][documents.relations.relation_kind] and
[`find_embedded_in`][documents.relations.find_embedded_in].

Storage rules per kind:
- belongs-to / has-one keep the related document's id in the attribute bag under
  `<name>_id` and cache the related object. Reading a document that only knows
  the id fetches it through the backend the document is bound to.
- has-many is read-only and queries the bound backend for documents whose
  `<inverse>_id` is this document's id.
- embeds-one / embeds-many keep the embedded document(s) in the attribute bag.
- embedded-in keeps the owner outside the attribute bag, so it is never
  serialized or compared.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type, Union

from docseed.common.enums import RelationKind
from docseed.utils import get_singular_of_entity, to_camel_case, to_snake_case


if TYPE_CHECKING:
    from docseed.documents.document import Document


LOG = logging.getLogger(__name__)


class RelationDescriptor:
    """
    Base class for every relation declaration.

    Attributes:
        kind: The [`RelationKind`][common.enums.RelationKind] of this relation.
        name: The field name, set when the owning class is created.
        owner: The class the relation was declared on.
        inverse_of: The name of the matching field on the target class, if any.
    """

    kind: RelationKind = RelationKind.NONE

    def __init__(self, target: Union[str, type, None] = None, inverse_of: str = None):
        """
        Args:
            target: The related document class, or its class name. Omit it to infer
                the class name from the field name.
            inverse_of: The name of the matching field on the target class.
        """
        self._target: Union[str, type, None] = target
        self.inverse_of: Optional[str] = inverse_of
        self.name: str = None
        self.owner: type = None

    def __set_name__(self, owner: type, name: str):
        self.owner = owner
        self.name = name

    def _inferred_target_name(self) -> str:
        return to_camel_case(self.name)

    @property
    def target_name(self) -> str:
        """The class name of the related document class."""
        if isinstance(self._target, type):
            return self._target.__name__
        return self._target or self._inferred_target_name()

    @property
    def target_class(self) -> Type["Document"]:
        """
        The related document class, resolved lazily so classes may refer to each
        other before both exist.

        Raises:
            UnknownDocumentClassError: If no document class with the target name exists.
        """
        if isinstance(self._target, type):
            return self._target
        from docseed.documents.document import resolve_document_class  # pylint: disable=import-outside-toplevel

        return resolve_document_class(self.target_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, target={self.target_name!r})"


class ReferenceRelation(RelationDescriptor):
    """
    A relation to one independently stored document, kept as a foreign key.
    """

    @property
    def foreign_key(self) -> str:
        """The attribute bag key holding the related document's id."""
        return f"{self.name}_id"

    def __get__(self, instance: Optional["Document"], owner: type) -> Any:
        if instance is None:
            return self
        if self.name in instance._related:
            return instance._related[self.name]

        related_id = instance.attributes.get(self.foreign_key)
        if related_id is None or instance._backend is None:
            return None

        LOG.debug(f"Fetching {self.target_name} '{related_id}' for {type(instance).__name__}.{self.name}.")
        related = instance._backend.retrieve(self.target_class, related_id)
        instance._related[self.name] = related
        return related

    def __set__(self, instance: "Document", value: Optional["Document"]):
        instance._related[self.name] = value
        instance.attributes[self.foreign_key] = None if value is None else value.id


class BelongsTo(ReferenceRelation):
    """This document stores the id of another top-level document."""

    kind = RelationKind.BELONGS_TO


class HasOne(ReferenceRelation):
    """This document points at exactly one other top-level document."""

    kind = RelationKind.HAS_ONE


class HasMany(RelationDescriptor):
    """
    Other top-level documents point at this one through a belongs-to relation.
    """

    kind = RelationKind.HAS_MANY

    def _inferred_target_name(self) -> str:
        return to_camel_case(get_singular_of_entity(self.name))

    @property
    def inverse_foreign_key(self) -> str:
        """The attribute bag key on the target documents that holds this document's id."""
        inverse = self.inverse_of or to_snake_case(self.owner.__name__)
        return f"{inverse}_id"

    def __get__(self, instance: Optional["Document"], owner: type) -> Any:
        if instance is None:
            return self
        if instance._backend is None:
            return []
        return instance._backend.retrieve_all_filtered(self.target_class, {self.inverse_foreign_key: instance.id})

    def __set__(self, instance: "Document", value: Any):
        raise AttributeError(
            f"'{self.name}' is a has-many relation and cannot be assigned; "
            f"assign the owner on each {self.target_name} instead."
        )


class EmbedsOne(RelationDescriptor):
    """This document owns a single embedded document."""

    kind = RelationKind.EMBEDS_ONE

    def __get__(self, instance: Optional["Document"], owner: type) -> Any:
        if instance is None:
            return self
        return instance.attributes.get(self.name)

    def __set__(self, instance: "Document", value: Optional["Document"]):
        if value is not None:
            link_embedded(value, instance, self.inverse_of)
        instance.attributes[self.name] = value


class EmbedsMany(RelationDescriptor):
    """This document owns an ordered list of embedded documents."""

    kind = RelationKind.EMBEDS_MANY

    def _inferred_target_name(self) -> str:
        return to_camel_case(get_singular_of_entity(self.name))

    def __get__(self, instance: Optional["Document"], owner: type) -> Any:
        if instance is None:
            return self
        return instance.attributes.setdefault(self.name, [])

    def __set__(self, instance: "Document", value: List["Document"]):
        value = list(value or [])
        for embedded in value:
            link_embedded(embedded, instance, self.inverse_of)
        instance.attributes[self.name] = value


class EmbeddedIn(RelationDescriptor):
    """The inverse of an embeds relation: points at the owning document."""

    kind = RelationKind.EMBEDDED_IN

    def __get__(self, instance: Optional["Document"], owner: type) -> Any:
        if instance is None:
            return self
        return instance._related.get(self.name)

    def __set__(self, instance: "Document", value: Optional["Document"]):
        instance._related[self.name] = value


def relations_of(model_class: type) -> Dict[str, RelationDescriptor]:
    """
    Get every relation declared on a document class, including inherited ones.

    Args:
        model_class: A [`Document`][documents.document.Document] subclass.

    Returns:
        A mapping of field name to relation descriptor.
    """
    return dict(getattr(model_class, "_relations", {}))


def relation_kind(model_class: type, field_name: str) -> RelationKind:
    """
    Report the relation kind of one field.

    Args:
        model_class: A [`Document`][documents.document.Document] subclass.
        field_name: The field to inspect.

    Returns:
        The field's [`RelationKind`][common.enums.RelationKind], or `RelationKind.NONE`
            if the field declares no relation.
    """
    relation = relations_of(model_class).get(field_name)
    return RelationKind.NONE if relation is None else relation.kind


def find_embedded_in(embedded_class: type, owner: Any) -> Optional[str]:
    """
    Find the field on an embedded document class that points back at its owner.

    The first embedded-in relation whose target the owner is an instance of wins.

    Args:
        embedded_class: The embedded [`Document`][documents.document.Document] subclass.
        owner: The owning document, or its class.

    Returns:
        The name of the embedded-in field, or None if the class declares none that
            points back at the owner.
    """
    owner_class = owner if isinstance(owner, type) else type(owner)
    for name, relation in relations_of(embedded_class).items():
        if relation.kind is not RelationKind.EMBEDDED_IN:
            continue
        if issubclass(owner_class, relation.target_class):
            return name
    return None


def link_embedded(embedded: "Document", owner: "Document", inverse_of: str = None):
    """
    Point an embedded document's embedded-in field at its owner, if it has one.

    Args:
        embedded: The embedded document.
        owner: The document that owns it.
        inverse_of: The embedded-in field name, when already known.
    """
    inverse = inverse_of or find_embedded_in(type(embedded), owner)
    if inverse is not None:
        setattr(embedded, inverse, owner)
