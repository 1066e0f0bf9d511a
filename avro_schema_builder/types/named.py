"""
Named types: types with a fullname that are defined once per schema and
referenced by fullname everywhere else.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from ..errors import InvalidDefinitionError
from ..reference_state import ReferenceState
from .base import AbstractType, avro_name, split_name
from .mixins import HasMetadata

if TYPE_CHECKING:
    from ..definition_cache import DefinitionCache
    from ..field import Field


class NamedType(HasMetadata, AbstractType):
    """Base class for record, error, enum and fixed types."""

    dsl_attributes = ("namespace", "aliases", "doc", "logical_type")

    def __init__(
        self,
        name: str | None = None,
        *,
        cache: DefinitionCache,
        namespace: str | None = None,
        options: dict[str, Any] | None = None,
        field: Field | None = None,
    ):
        super().__init__(cache)
        self.owner_field = field
        self.namespace = namespace
        self.aliases: list[str] | None = None
        self.doc: str | None = None
        self.logical_type: str | None = None
        self.configure_options(options or {})

        if name is None and field is not None:
            name = self._generated_name(field)
        if not name:
            raise InvalidDefinitionError(f"Invalid {self.avro_type_name} name: {name!r}")
        # A dotted name carries its own namespace
        identity = avro_name(name, self.namespace)
        self.namespace, self.name = split_name(identity)
        self.fullname = identity.fullname
        if self.aliases is not None:
            self.aliases = list(self.aliases)

    def _generated_name(self, field: Field) -> str:
        return f"__{field.record.name}_{field.name}_{self.avro_type_name}"

    def describe(self) -> str:
        return f"{self.avro_type_name} {getattr(self, 'fullname', '')}".rstrip()

    def is_named(self) -> bool:
        return True

    def current_namespace(self) -> str | None:
        return self.namespace

    @property
    def alias_fullnames(self) -> list[str]:
        return [avro_name(alias, self.namespace).fullname for alias in self.aliases or []]

    def serialize(self, reference_state: ReferenceState) -> Any:
        return reference_state.definition_or_reference(self.fullname, lambda: self.definition(reference_state))

    def identity_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"type": self.avro_type_name, "name": self.name}
        if self.namespace:
            document["namespace"] = self.namespace
        return document

    @abstractmethod
    def definition(self, reference_state: ReferenceState) -> dict[str, Any]:
        """Return the full definition of this type."""
        pass

    def duplicate(self) -> AbstractType:
        # The cache owns named types; copies share the instance.
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.cache.discard(self)
        return False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.fullname}>"
