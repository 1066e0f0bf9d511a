"""
Factory for the types that can be created from a type name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from ..errors import InvalidDefinitionError
from .base import PRIMITIVE_TYPES, AbstractType, PrimitiveType
from .composite import ArrayType, MapType, UnionType
from .enum import EnumType
from .fixed import FixedType
from .named import NamedType
from .record import ErrorType, RecordType

if TYPE_CHECKING:
    from ..definition_cache import DefinitionCache
    from ..field import Field

NAMED_TYPE_CLASSES: dict[str, type[NamedType]] = {
    "record": RecordType,
    "error": ErrorType,
    "enum": EnumType,
    "fixed": FixedType,
}

COMPOSITE_TYPE_CLASSES = {
    "array": ArrayType,
    "map": MapType,
    "union": UnionType,
}


def create_builtin_type(
    type_name: str,
    *,
    cache: DefinitionCache,
    name: str | None = None,
    namespace: str | None = None,
    options: dict[str, Any] | None = None,
    field: Field | None = None,
    block: Callable | None = None,
) -> AbstractType:
    """
    Create a primitive, composite or named type from its Avro type name.

    Named types are configured by block (if given) and then registered in
    the cache. If the block fails, nothing it registered is kept.

    Args:
        type_name: An Avro type name such as "int", "array" or "record"
        cache: The definition cache for the current build
        name: Name for a named type (generated from field when omitted)
        namespace: Namespace for a named type, or for resolving member names
        options: Type options
        field: The field this type is created for, if any
        block: Callable receiving the new named type

    Returns:
        The new type
    """
    options = dict(options or {})

    if type_name in PRIMITIVE_TYPES or type_name in COMPOSITE_TYPE_CLASSES:
        if block is not None:
            raise InvalidDefinitionError(f"A block is not supported for type {type_name}")
        if name is not None:
            raise InvalidDefinitionError(f"Type {type_name} cannot be named")
        if type_name in PRIMITIVE_TYPES:
            return PrimitiveType(type_name, cache, options)
        return COMPOSITE_TYPE_CLASSES[type_name](cache=cache, namespace=namespace, options=options)

    if type_name not in NAMED_TYPE_CLASSES:
        raise InvalidDefinitionError(f"Unknown builtin type {type_name!r}")

    with cache.transaction():
        named = NAMED_TYPE_CLASSES[type_name](name, cache=cache, namespace=namespace, options=options, field=field)
        if block is not None:
            block(named)
        cache.add_schema_object(named)
    return named
