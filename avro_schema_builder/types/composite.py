"""
Anonymous composite types: arrays, maps and unions.

Members are kept as given (a type name or a type object) and resolved
through the definition cache when serialized, so they may refer to types
declared later.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..errors import InvalidDefinitionError
from ..reference_state import ReferenceState
from .base import AbstractType, duplicate_type

if TYPE_CHECKING:
    from ..definition_cache import DefinitionCache


class CompositeType(AbstractType):
    """Base class for types that contain other types."""

    def __init__(self, cache: DefinitionCache, namespace: str | None = None):
        super().__init__(cache)
        self.namespace = namespace

    def resolve(self, type_or_name: Any) -> AbstractType:
        return self.cache.resolve_type(type_or_name, self.namespace)


class ArrayType(CompositeType):
    avro_type_name = "array"
    dsl_attributes = ("items",)

    def __init__(
        self,
        items: Any = None,
        *,
        cache: DefinitionCache,
        namespace: str | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(cache, namespace)
        self.items = items
        self.configure_options(options or {})
        if self.items is None:
            raise InvalidDefinitionError("array requires items")

    def serialize(self, reference_state: ReferenceState) -> dict[str, Any]:
        return {"type": "array", "items": self.resolve(self.items).serialize(reference_state)}

    def duplicate(self) -> AbstractType:
        duplicate = super().duplicate()
        duplicate.items = duplicate_type(self.items)
        return duplicate


class MapType(CompositeType):
    avro_type_name = "map"
    dsl_attributes = ("values",)

    def __init__(
        self,
        values: Any = None,
        *,
        cache: DefinitionCache,
        namespace: str | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(cache, namespace)
        self.values = values
        self.configure_options(options or {})
        if self.values is None:
            raise InvalidDefinitionError("map requires values")

    def serialize(self, reference_state: ReferenceState) -> dict[str, Any]:
        return {"type": "map", "values": self.resolve(self.values).serialize(reference_state)}

    def duplicate(self) -> AbstractType:
        duplicate = super().duplicate()
        duplicate.values = duplicate_type(self.values)
        return duplicate


class UnionType(CompositeType):
    avro_type_name = "union"
    dsl_attributes = ("types",)

    def __init__(
        self,
        types: list[Any] | None = None,
        *,
        cache: DefinitionCache,
        namespace: str | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(cache, namespace)
        self.types = list(types or [])
        self.configure_options(options or {})
        self.types = list(self.types)
        if not self.types:
            raise InvalidDefinitionError("union requires at least one type")

    def serialize(self, reference_state: ReferenceState) -> list[Any]:
        return [self.resolve(member).serialize(reference_state) for member in self.types]

    def duplicate(self) -> AbstractType:
        duplicate = super().duplicate()
        duplicate.types = [duplicate_type(member) for member in self.types]
        return duplicate
