"""
Record and error types.

A record owns an ordered mapping from field name to Field. Adding a field
whose name already exists replaces the previous field in place: the new
field takes over the original position.
"""

from __future__ import annotations

from typing import Any, Callable

from ..errors import InvalidDefinitionError
from ..field import Field
from ..reference_state import ReferenceState
from .mixins import HasAnonymousTypes
from .named import NamedType


class RecordType(HasAnonymousTypes, NamedType):
    """A record in an Avro schema. Records may be defined at the top-level
    or as the type for a field in a record."""

    avro_type_name = "record"
    dsl_attributes = NamedType.dsl_attributes + ("abstract",)
    accepts_extra_metadata = True

    def __init__(self, name: str | None = None, **kwargs: Any):
        self.abstract = False
        self._fields: dict[str, Field] = {}
        super().__init__(name, **kwargs)

    def required(self, name: str, type_or_name: Any, block: Callable | None = None, **options: Any) -> Field:
        """Add a required field to the record."""
        return self._add_field(
            Field(
                name,
                type_or_name,
                record=self,
                cache=self.cache,
                type_namespace=self.namespace,
                options=options,
                block=block,
            )
        )

    def optional(self, name: str, type_or_name: Any, block: Callable | None = None, **options: Any) -> Field:
        """Add an optional field to the record. In Avro this is represented
        as a union of null and the type specified here."""
        return self._add_field(
            Field(
                name,
                type_or_name,
                record=self,
                cache=self.cache,
                type_namespace=self.namespace,
                optional=True,
                options=options,
                block=block,
            )
        )

    def extends(self, name: str, namespace: str | None = None) -> None:
        """Add copies of the fields of the record with the specified name."""
        source = self.cache.lookup_named_type(name, namespace or self.namespace)
        if not isinstance(source, RecordType):
            raise InvalidDefinitionError(f"{self.fullname} cannot extend {source.describe()}")
        for field_name, field in source.duplicated_fields(self).items():
            self._fields[field_name] = field

    def duplicated_fields(self, record: RecordType | None = None) -> dict[str, Field]:
        return {name: field.duplicate(record) for name, field in self._fields.items()}

    def field(self, name: str) -> Field:
        try:
            return self._fields[name]
        except KeyError:
            raise KeyError(f"{self.fullname} has no field {name!r}") from None

    @property
    def fields(self) -> list[Field]:
        return list(self._fields.values())

    @property
    def field_names(self) -> list[str]:
        return list(self._fields)

    def definition(self, reference_state: ReferenceState) -> dict[str, Any]:
        document = self.identity_document()
        document["fields"] = [field.serialize(reference_state) for field in self._fields.values()]
        document.update(self.metadata_document())
        return document

    def _add_field(self, field: Field) -> Field:
        self._fields[field.name] = field
        return field


class ErrorType(RecordType):
    """An error is a record serialized with type "error"."""

    avro_type_name = "error"
