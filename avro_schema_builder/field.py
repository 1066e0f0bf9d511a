"""
Fields of a record.

A field's type is given either as a type object, as a builtin type name
("string", "array", "record", ...) or as the name of a named type or type
macro. Names are only looked up in the definition cache when the field is
serialized, so a field may refer to a type that is declared later.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Callable

from .errors import InvalidDefinitionError
from .reference_state import ReferenceState
from .types.base import BUILTIN_TYPES, AbstractType, duplicate_type, reject_attribute, validate_name

if TYPE_CHECKING:
    from .definition_cache import DefinitionCache
    from .types.record import RecordType

# Options that configure the field itself rather than its type
FIELD_ATTRIBUTES = ("doc", "default", "aliases", "order")

# Field options that configure an inline named type
TYPE_OPTION_NAMES = {
    "type_name": "name",
    "type_namespace": "namespace",
    "type_aliases": "aliases",
    "type_doc": "doc",
}

SORT_ORDERS = ("ascending", "descending", "ignore")


class Field:
    """A named, typed slot in a record."""

    def __init__(
        self,
        name: str,
        type_or_name: Any,
        *,
        record: RecordType,
        cache: DefinitionCache,
        type_namespace: str | None = None,
        optional: bool = False,
        options: dict[str, Any] | None = None,
        block: Callable | None = None,
    ):
        self.name = validate_name(name, "field name")
        self.record = record
        self.cache = cache
        self.type_namespace = type_namespace
        self.optional = optional

        self.doc: str | None = None
        self.aliases: list[str] | None = None
        self._order: str | None = None
        self._default: Any = None
        self._has_default = False
        self.extra_metadata: dict[str, Any] = {}

        type_options = self._configure_options(dict(options or {}))
        self._type = self._create_type(type_or_name, type_options, block)

    def _configure_options(self, options: dict[str, Any]) -> dict[str, Any]:
        """Apply field options and return the remaining options for the type."""
        type_options = {}
        for key, value in options.items():
            if key in FIELD_ATTRIBUTES:
                setattr(self, key, value)
            elif key in self.cache.config.extra_metadata_attributes:
                self.extra_metadata[key] = value
            else:
                type_options[key] = value
        if "type_namespace" in type_options:
            self.type_namespace = type_options["type_namespace"]
        return type_options

    def _create_type(self, type_or_name: Any, type_options: dict[str, Any], block: Callable | None) -> Any:
        if isinstance(type_or_name, str) and type_or_name in BUILTIN_TYPES:
            from .types.builtin import create_builtin_type

            options = {TYPE_OPTION_NAMES.get(key, key): value for key, value in type_options.items()}
            name = options.pop("name", None)
            namespace = options.pop("namespace", self.type_namespace)
            return create_builtin_type(
                type_or_name,
                cache=self.cache,
                name=name,
                namespace=namespace,
                options=options,
                field=self,
                block=block,
            )

        if not isinstance(type_or_name, (str, list, AbstractType)):
            raise InvalidDefinitionError(f"Invalid type for field {self.name}: {type_or_name!r}")
        if block is not None:
            raise InvalidDefinitionError(f"A block is only supported for builtin named types (field {self.name})")
        for key in type_options:
            if key != "type_namespace":
                reject_attribute(self.cache, key, f"field {self.name}")
        return type_or_name

    @property
    def default(self) -> Any:
        return self._default

    @default.setter
    def default(self, value: Any) -> None:
        self._default = value
        self._has_default = True

    @property
    def has_default(self) -> bool:
        return self._has_default

    def clear_default(self) -> None:
        self._default = None
        self._has_default = False

    @property
    def order(self) -> str | None:
        return self._order

    @order.setter
    def order(self, value: str | None) -> None:
        if value is not None and value not in SORT_ORDERS:
            raise InvalidDefinitionError(f"Invalid order {value!r} for field {self.name}")
        self._order = value

    @property
    def field_type(self) -> AbstractType:
        """The type of this field, looked up in the cache if given by name."""
        return self.cache.resolve_type(self._type, self.type_namespace)

    def serialize(self, reference_state: ReferenceState) -> dict[str, Any]:
        document: dict[str, Any] = {
            "name": self.name,
            "type": self._serialized_type(reference_state),
        }
        if self.doc is not None:
            document["doc"] = self.doc
        if self._has_default:
            document["default"] = self._default
        elif self.optional:
            document["default"] = None
        if self._order is not None:
            document["order"] = self._order
        if self.aliases is not None:
            document["aliases"] = list(self.aliases)
        for key, value in self.extra_metadata.items():
            if value is not None:
                document[key] = value
        return document

    def to_dict(self, reference_state: ReferenceState | None = None) -> dict[str, Any]:
        return self.serialize(reference_state or ReferenceState())

    def _serialized_type(self, reference_state: ReferenceState) -> Any:
        serialized = self.field_type.serialize(reference_state)
        if not self.optional:
            return serialized

        if serialized == "null":
            return serialized
        if isinstance(serialized, list):
            members = [member for member in serialized if member != "null"]
        else:
            members = [serialized]

        # The default must match the first branch of the union
        if self._has_default and self._default is not None:
            return members + ["null"]
        return ["null"] + members

    def duplicate(self, record: RecordType | None = None) -> Field:
        """Return a copy of this field that shares no mutable state with it."""
        duplicate = copy.copy(self)
        if record is not None:
            duplicate.record = record
        if self.aliases is not None:
            duplicate.aliases = list(self.aliases)
        duplicate._default = copy.deepcopy(self._default)
        duplicate.extra_metadata = copy.deepcopy(self.extra_metadata)
        duplicate._type = duplicate_type(self._type)
        return duplicate

    def __repr__(self) -> str:
        return f"<Field {self.name}{' (optional)' if self.optional else ''}>"
