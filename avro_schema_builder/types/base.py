"""
Base classes shared by every Avro type the builder can produce.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import avro.constants
import avro.errors
from avro.name import Name, validate_basename

from ..errors import InvalidDefinitionError, UnknownAttributeError
from ..reference_state import ReferenceState

if TYPE_CHECKING:
    from ..definition_cache import DefinitionCache

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = frozenset(avro.constants.PRIMITIVE_TYPES)

NAMED_TYPES = frozenset(avro.constants.NAMED_TYPES)

COMPOSITE_TYPES = frozenset({"array", "map", "union"})

# Type names that create a new type when used as a field type
BUILTIN_TYPES = PRIMITIVE_TYPES | NAMED_TYPES | COMPOSITE_TYPES

NAME_ERRORS = (avro.errors.InvalidName, avro.errors.SchemaParseException)


def validate_name(name: Any, description: str) -> str:
    """Return name if it is a valid unqualified Avro name, else raise InvalidDefinitionError."""
    if not isinstance(name, str) or "." in name:
        raise InvalidDefinitionError(f"Invalid {description}: {name!r}")
    try:
        validate_basename(name)
    except NAME_ERRORS as e:
        raise InvalidDefinitionError(f"Invalid {description}: {name!r}") from e
    return name


def validate_namespace(namespace: Any) -> str:
    """Return namespace if every dotted component is a valid Avro name."""
    if not isinstance(namespace, str):
        raise InvalidDefinitionError(f"Invalid namespace: {namespace!r}")
    for part in namespace.split("."):
        validate_name(part, f"namespace {namespace!r}")
    return namespace


def avro_name(name: Any, namespace: str | None = None) -> Name:
    """
    Build the avro Name for a name in a namespace.

    A dotted name carries its own namespace and ignores the one given.

    Raises:
        InvalidDefinitionError: If the name or namespace is not valid
    """
    if not isinstance(name, str) or not (namespace is None or isinstance(namespace, str)):
        raise InvalidDefinitionError(f"Invalid name {name!r} (namespace {namespace!r})")
    try:
        result = Name(name, namespace or None)
        for part in result.fullname.split("."):
            validate_basename(part)
    except NAME_ERRORS as e:
        raise InvalidDefinitionError(f"Invalid name {name!r} (namespace {namespace!r}): {e}") from e
    return result


def split_name(result: Name) -> tuple[str | None, str]:
    """Return (namespace, name) for an avro Name."""
    return result.space or None, result.fullname.rpartition(".")[2]


def reject_attribute(cache: DefinitionCache, attribute: str, target: str) -> None:
    """Raise or warn about an unsupported attribute, depending on configuration."""
    if cache.config.strict_attributes:
        raise UnknownAttributeError(attribute, target)
    logger.warning("Ignoring unsupported attribute '%s' for %s", attribute, target)


def duplicate_type(type_or_name: Any) -> Any:
    """Copy an anonymous type; names and named types are shared."""
    if isinstance(type_or_name, list):
        return [duplicate_type(member) for member in type_or_name]
    if isinstance(type_or_name, AbstractType) and not type_or_name.is_named():
        return type_or_name.duplicate()
    return type_or_name


class AbstractType(ABC):
    """Base class for all types."""

    avro_type_name: str = ""

    # Options accepted by configure_options
    dsl_attributes: tuple[str, ...] = ()

    # Whether extra metadata attributes from the config are accepted
    accepts_extra_metadata: bool = False

    def __init__(self, cache: DefinitionCache):
        self.cache = cache
        self.extra_metadata: dict[str, Any] = {}

    def configure_options(self, options: dict[str, Any]) -> None:
        for key, value in options.items():
            if key in self.dsl_attributes:
                setattr(self, key, value)
            elif self.accepts_extra_metadata and key in self.cache.config.extra_metadata_attributes:
                self.extra_metadata[key] = value
            else:
                reject_attribute(self.cache, key, self.describe())

    def describe(self) -> str:
        return f"type {self.avro_type_name}"

    def is_named(self) -> bool:
        return False

    @abstractmethod
    def serialize(self, reference_state: ReferenceState) -> Any:
        """Return the schema document for this type."""
        pass

    def to_dict(self, reference_state: ReferenceState | None = None) -> Any:
        """Serialize with a fresh reference state unless one is given."""
        if reference_state is None:
            reference_state = ReferenceState()
        return self.serialize(reference_state)

    def duplicate(self) -> AbstractType:
        duplicate = copy.copy(self)
        duplicate.extra_metadata = copy.deepcopy(self.extra_metadata)
        return duplicate


class PrimitiveType(AbstractType):
    """A primitive type, optionally annotated with a logical type."""

    dsl_attributes = ("logical_type", "precision", "scale")

    def __init__(self, type_name: str, cache: DefinitionCache, options: dict[str, Any] | None = None):
        super().__init__(cache)
        self.avro_type_name = type_name
        self.logical_type: str | None = None
        self.precision: int | None = None
        self.scale: int | None = None
        self.configure_options(options or {})

    def serialize(self, reference_state: ReferenceState) -> Any:
        if self.logical_type is None and self.precision is None and self.scale is None:
            return self.avro_type_name
        document: dict[str, Any] = {"type": self.avro_type_name}
        for key, value in (
            ("logicalType", self.logical_type),
            ("precision", self.precision),
            ("scale", self.scale),
        ):
            if value is not None:
                document[key] = value
        return document


class TypeMacro(AbstractType):
    """A named alias for an anonymous type, inlined wherever it is referenced."""

    def __init__(self, name: str, namespace: str | None, wrapped: AbstractType, cache: DefinitionCache):
        super().__init__(cache)
        self.name = name
        self.namespace = namespace
        self.wrapped = wrapped
        self.avro_type_name = wrapped.avro_type_name

    @property
    def fullname(self) -> str:
        return avro_name(self.name, self.namespace).fullname

    def describe(self) -> str:
        return f"type macro {self.fullname}"

    def serialize(self, reference_state: ReferenceState) -> Any:
        return self.wrapped.serialize(reference_state)

    def duplicate(self) -> AbstractType:
        return self
