##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The fixture loading pipeline.

[`FixtureLoader.load`][fixtures.loader.FixtureLoader.load] takes a document class,
reads the fixtures of its collection, builds one document per fixture key and
persists it, and returns the documents keyed by fixture key. Each field value is
routed by its shape and by the relation the field declares:

| Value                         | Field                     | Result                                  |
|-------------------------------|---------------------------|-----------------------------------------|
| reference (`:key`, `!ref key`) | belongs-to / has-one     | the referenced fixture's document       |
| `null`                        | belongs-to / has-one      | the relation is left empty              |
| reference or `null`           | anything else             | `InvalidReferenceRelationError`         |
| map                           | embeds-one                | an embedded document                    |
| list of maps                  | embeds-many               | embedded documents, in file order       |
| list                          | anything else             | appended to the document's list         |
| map                           | anything else             | stored as a plain map                   |
| anything else                 | embeds-one / embeds-many  | `MalformedEmbeddedValueError`           |
| anything else                 | anything else             | assigned by the `FieldAssigner`         |

Referencing another collection loads it within the same call. Each collection is
loaded at most once per call; a collection that ends up referencing itself,
directly or through others, raises `CyclicReferenceError`.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type

from docseed.backends.document_backend import DocumentBackend
from docseed.common.enums import RelationKind
from docseed.documents.document import Document
from docseed.documents.relations import relations_of
from docseed.exceptions import CyclicReferenceError, MalformedEmbeddedValueError
from docseed.fixtures.embedded_builder import EmbeddedBuilder
from docseed.fixtures.field_assigner import FieldAssigner
from docseed.fixtures.fixture_registry import FixtureRegistry
from docseed.fixtures.persister import Persister
from docseed.fixtures.reference_resolver import ReferenceResolver
from docseed.fixtures.values import Direct, classify_value


LOG = logging.getLogger(__name__)


class LoadContext:
    """
    The state of one top-level `load` call.

    Attributes:
        stack: The document classes currently being loaded, outermost first.
        loaded: The documents of every class loaded so far in this call, keyed
            by class and then by fixture key.
    """

    def __init__(self):
        self.stack: List[Type[Document]] = []
        self.loaded: Dict[Type[Document], Dict[Any, Document]] = {}

    def instances_for(self, model_class: Type[Document]) -> Optional[Dict[Any, Document]]:
        """
        Get the documents already loaded for a class in this call.

        Args:
            model_class: The document class.

        Returns:
            Fixture key to document, or None if the class hasn't been loaded yet.
        """
        return self.loaded.get(model_class)

    @contextmanager
    def loading(self, model_class: Type[Document]) -> Iterator[None]:
        """
        Mark a class as being loaded for the duration of the `with` block.

        Args:
            model_class: The document class about to be loaded.

        Raises:
            CyclicReferenceError: If the class is already being loaded further up the stack.
        """
        if model_class in self.stack:
            start = self.stack.index(model_class)
            cycle = [klass.__name__ for klass in self.stack[start:]] + [model_class.__name__]
            raise CyclicReferenceError(cycle)

        self.stack.append(model_class)
        try:
            yield
        finally:
            self.stack.pop()

    def record(self, model_class: Type[Document], instances: Dict[Any, Document]):
        """
        Remember the documents loaded for a class.

        Args:
            model_class: The document class.
            instances: Fixture key to document.
        """
        self.loaded[model_class] = instances


class FixtureLoader:
    """
    Loads fixtures into documents and persists them.

    Attributes:
        registry: Serves the parsed fixture files.
        backend: Where loaded documents are persisted.
        assigner: Assigns plain values to fields.
        embedded_builder: Builds embedded documents.
        persister: Saves documents, reusing equal stored ones.

    Methods:
        load: Load every fixture of a document class.
    """

    def __init__(self, registry: FixtureRegistry, backend: DocumentBackend):
        """
        Args:
            registry: Serves the parsed fixture files.
            backend: Where loaded documents are persisted.
        """
        self.registry: FixtureRegistry = registry
        self.backend: DocumentBackend = backend
        self.assigner: FieldAssigner = FieldAssigner()
        self.embedded_builder: EmbeddedBuilder = EmbeddedBuilder(self.assigner)
        self.persister: Persister = Persister(backend)

    def load(self, model_class: Type[Document]) -> Dict[Any, Document]:
        """
        Load every fixture of a document class, along with every fixture it
        references, and persist them.

        Args:
            model_class: The document class to load fixtures for.

        Returns:
            Fixture key to persisted document, in file order.

        Raises:
            FixtureDataMissingError: If there is no fixture file for the class's collection,
                or for a collection it references.
            CyclicReferenceError: If collections reference each other in a cycle.
            FixtureError: Any other fixture error. Documents persisted before the error
                stay persisted.
        """
        LOG.info(f"Loading {model_class.__name__} fixtures...")
        instances = self._load(model_class, LoadContext())
        LOG.info(f"Loaded {len(instances)} {model_class.__name__} fixture(s).")
        return instances

    def _load(self, model_class: Type[Document], context: LoadContext) -> Dict[Any, Document]:
        loaded = context.instances_for(model_class)
        if loaded is not None:
            return loaded

        fixture_file = self.registry.get(model_class.collection_name())
        resolver = ReferenceResolver(lambda target_class: self._load(target_class, context))

        with context.loading(model_class):
            instances = {}
            for key, field_map in fixture_file.entries.items():
                LOG.debug(f"Building {model_class.__name__} '{key}'.")
                document = model_class()
                for field_name, raw in field_map.items():
                    self._populate_field(document, field_name, raw, resolver)
                instances[key] = self.persister.save_or_reuse(document)

        context.record(model_class, instances)
        return instances

    def _populate_field(self, document: Document, field_name: str, raw: Any, resolver: ReferenceResolver):
        model_class = type(document)
        value = classify_value(raw)

        if not isinstance(value, Direct):
            setattr(document, field_name, resolver.resolve(model_class, field_name, value))
            return

        relation = relations_of(model_class).get(field_name)
        kind = RelationKind.NONE if relation is None else relation.kind
        raw = value.value

        if kind is RelationKind.EMBEDS_MANY:
            if not isinstance(raw, list):
                raise MalformedEmbeddedValueError(
                    f"{model_class.__name__}.{field_name} embeds many {relation.target_name} documents "
                    f"and must be given a list of maps, not {type(raw).__name__}."
                )
            embedded = self.embedded_builder.build_many(relation.target_class, raw, document, relation.inverse_of)
            self._extend_list(document, field_name, embedded)
        elif kind is RelationKind.EMBEDS_ONE:
            if not isinstance(raw, dict):
                raise MalformedEmbeddedValueError(
                    f"{model_class.__name__}.{field_name} embeds one {relation.target_name} document "
                    f"and must be given a map, not {type(raw).__name__}."
                )
            document[field_name] = self.embedded_builder.build_one(
                relation.target_class, raw, document, relation.inverse_of
            )
        elif isinstance(raw, list):
            self._extend_list(document, field_name, raw)
        elif isinstance(raw, dict):
            document[field_name] = raw
        else:
            self.assigner.assign(document, field_name, raw)

    @staticmethod
    def _extend_list(document: Document, field_name: str, values: List[Any]):
        if document[field_name] is None:
            document[field_name] = []
        document[field_name].extend(values)
