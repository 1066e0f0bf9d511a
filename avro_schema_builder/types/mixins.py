"""
Capabilities shared by records, enums, fixed types and the DSL.
"""

from __future__ import annotations

from typing import Any

from .composite import ArrayType, MapType, UnionType


class HasMetadata:
    """Emits doc, aliases, logicalType and extra metadata when present."""

    METADATA_KEYS = (
        ("doc", "doc"),
        ("aliases", "aliases"),
        ("logical_type", "logicalType"),
    )

    def metadata_document(self) -> dict[str, Any]:
        document = {}
        for attr, key in self.METADATA_KEYS:
            value = getattr(self, attr, None)
            if value is not None:
                document[key] = value
        for key, value in getattr(self, "extra_metadata", {}).items():
            if value is not None:
                document[key] = value
        return document


class HasAnonymousTypes:
    """Creates anonymous array, map and union types bound to the current cache.

    Classes using this mixin provide a ``cache`` attribute and a
    ``current_namespace()`` method used to resolve type names.
    """

    def array(self, items: Any, **options: Any) -> ArrayType:
        return ArrayType(items, cache=self.cache, namespace=self.current_namespace(), options=options)

    def map(self, values: Any, **options: Any) -> MapType:
        return MapType(values, cache=self.cache, namespace=self.current_namespace(), options=options)

    def union(self, *types: Any, **options: Any) -> UnionType:
        return UnionType(list(types), cache=self.cache, namespace=self.current_namespace(), options=options)
