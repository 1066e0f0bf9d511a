"""
Avro types produced by the builder.
"""

from __future__ import annotations

from .base import BUILTIN_TYPES, NAMED_TYPES, PRIMITIVE_TYPES, AbstractType, PrimitiveType, TypeMacro
from .composite import ArrayType, MapType, UnionType
from .enum import EnumType
from .fixed import FixedType
from .mixins import HasAnonymousTypes, HasMetadata
from .named import NamedType
from .record import ErrorType, RecordType
from .builtin import create_builtin_type

__all__ = [
    "AbstractType",
    "PrimitiveType",
    "TypeMacro",
    "ArrayType",
    "MapType",
    "UnionType",
    "NamedType",
    "RecordType",
    "ErrorType",
    "EnumType",
    "FixedType",
    "HasAnonymousTypes",
    "HasMetadata",
    "create_builtin_type",
    "BUILTIN_TYPES",
    "NAMED_TYPES",
    "PRIMITIVE_TYPES",
]
