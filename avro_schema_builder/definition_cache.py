"""
Registry of the named types and type macros defined during one build.

The cache maps fullnames to the single instance defined for that name.
Types that are not defined yet are loaded on demand through an importer
(normally the DSL, which searches its load paths for a definition file).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from .config import BuilderConfig
from .errors import AmbiguousDefinitionError, DuplicateDefinitionError, InvalidDefinitionError, UnresolvedTypeError
from .types.base import PRIMITIVE_TYPES, AbstractType, PrimitiveType, TypeMacro, avro_name
from .types.composite import UnionType
from .types.named import NamedType

logger = logging.getLogger(__name__)


class DefinitionCache:
    """Stores named types and type macros by fullname for a single build."""

    def __init__(self, config: BuilderConfig | None = None, importer: Callable[[str], bool] | None = None):
        """
        Initialize the cache.

        Args:
            config: Builder configuration
            importer: Callable that loads the definition for a name and
                returns True if a definition file was found
        """
        self.config = config or BuilderConfig()
        self.importer = importer
        self._schema_objects: dict[str, NamedType] = {}
        self._type_macros: dict[str, TypeMacro] = {}
        self._objects_by_name: dict[str, list[NamedType]] = {}
        self._importing: set[str] = set()

    def add_schema_object(self, named_type: NamedType) -> None:
        """Register a named type under its fullname and alias fullnames."""
        keys = [named_type.fullname] + named_type.alias_fullnames
        for key in keys:
            if key in self._schema_objects or key in self._type_macros:
                raise DuplicateDefinitionError(key)
        for key in keys:
            self._schema_objects[key] = named_type
        self._objects_by_name.setdefault(named_type.name, []).append(named_type)
        logger.debug("Registered %s %s", named_type.avro_type_name, named_type.fullname)

    def add_type_macro(self, macro: TypeMacro) -> None:
        """Register a type macro under its fullname."""
        fullname = macro.fullname
        if fullname in self._schema_objects or fullname in self._type_macros:
            raise DuplicateDefinitionError(fullname)
        self._type_macros[fullname] = macro
        logger.debug("Registered type macro %s", fullname)

    def discard(self, named_type: NamedType) -> None:
        """Remove a named type if it is registered."""
        for key in [named_type.fullname] + named_type.alias_fullnames:
            if self._schema_objects.get(key) is named_type:
                del self._schema_objects[key]
        same_name = self._objects_by_name.get(named_type.name, [])
        if named_type in same_name:
            same_name.remove(named_type)
            if not same_name:
                del self._objects_by_name[named_type.name]

    def lookup_named_type(self, name: str, namespace: str | None = None) -> AbstractType:
        """
        Find the named type or type macro for a name.

        Args:
            name: A name or fullname
            namespace: Namespace used when name is not qualified

        Returns:
            The registered type

        Raises:
            UnresolvedTypeError: If no definition exists or can be loaded
            AmbiguousDefinitionError: If an unqualified name matches several types
        """
        try:
            fullname = avro_name(name, namespace).fullname
        except InvalidDefinitionError as e:
            raise UnresolvedTypeError(name, namespace) from e
        found = self._find(fullname)

        if found is None and self.importer is not None and fullname not in self._importing:
            self._importing.add(fullname)
            try:
                logger.debug("Importing definition for %s", fullname)
                self.importer(fullname)
            finally:
                self._importing.discard(fullname)
            found = self._find(fullname)

        if found is not None:
            return found

        if namespace and "." not in name:
            # Retry as an unqualified name
            try:
                return self.lookup_named_type(name)
            except UnresolvedTypeError:
                raise UnresolvedTypeError(name, namespace) from None

        raise UnresolvedTypeError(name, namespace)

    def resolve_type(self, type_or_name: Any, namespace: str | None = None) -> AbstractType:
        """Return a type object for a type object, primitive name, type name or list (union)."""
        if isinstance(type_or_name, AbstractType):
            return type_or_name
        if isinstance(type_or_name, list):
            return UnionType(type_or_name, cache=self, namespace=namespace)
        if type_or_name in PRIMITIVE_TYPES:
            return PrimitiveType(type_or_name, self)
        return self.lookup_named_type(str(type_or_name), namespace)

    def _find(self, fullname: str) -> AbstractType | None:
        if fullname in self._schema_objects:
            return self._schema_objects[fullname]
        if fullname in self._type_macros:
            return self._type_macros[fullname]
        if "." not in fullname:
            candidates = self._objects_by_name.get(fullname, [])
            if len(candidates) > 1:
                raise AmbiguousDefinitionError(fullname, sorted(c.fullname for c in candidates))
            if candidates:
                return candidates[0]
        return None

    @contextmanager
    def transaction(self) -> Iterator[DefinitionCache]:
        """Discard every registration made inside the block if it raises."""
        schema_objects = dict(self._schema_objects)
        type_macros = dict(self._type_macros)
        objects_by_name = {name: list(objects) for name, objects in self._objects_by_name.items()}
        try:
            yield self
        except Exception:
            self._schema_objects = schema_objects
            self._type_macros = type_macros
            self._objects_by_name = objects_by_name
            raise

    def __contains__(self, fullname: str) -> bool:
        return fullname in self._schema_objects or fullname in self._type_macros

    def get(self, fullname: str) -> AbstractType | None:
        return self._schema_objects.get(fullname) or self._type_macros.get(fullname)

    @property
    def fullnames(self) -> list[str]:
        """Fullnames of registered named types, in registration order."""
        seen = []
        for named_type in self._schema_objects.values():
            if named_type.fullname not in seen:
                seen.append(named_type.fullname)
        return seen
