"""
Builder DSL used to declare Avro schemas.

A declaration is either a callable that receives the DSL object, or Python
source evaluated with the DSL vocabulary in scope::

    namespace("com.example")

    with record("Person") as person:
        person.required("name", "string")
        person.optional("age", "int")

Types that are referenced but not declared are loaded from definition files
found below the configured load paths: ``com.example.Person`` is searched as
``com/example/Person.py`` at any depth below each load path.
"""

from __future__ import annotations

import json
import logging
import runpy
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator

import avro.errors
import avro.schema

from .config import BuilderConfig, default_config
from .definition_cache import DefinitionCache
from .errors import (
    AmbiguousDefinitionError,
    AvroBuilderError,
    FrontEndEvaluationError,
    InvalidDefinitionError,
    SchemaValidationError,
    UnresolvedTypeError,
)
from .reference_state import ReferenceState
from .types import NamedType, TypeMacro, create_builtin_type
from .types.base import PRIMITIVE_TYPES, AbstractType, validate_namespace
from .types.mixins import HasAnonymousTypes

logger = logging.getLogger(__name__)

DEFINITION_FILE_SUFFIX = ".py"

# Names available to declarations given as source
DSL_METHODS = (
    "namespace",
    "record",
    "error",
    "enum",
    "fixed",
    "type_macro",
    "import_type",
    "array",
    "map",
    "union",
)


class DSL(HasAnonymousTypes):
    """Evaluates declarations and builds the schema for the last type defined."""

    def __init__(
        self,
        declaration: str | Callable[[DSL], Any] | None = None,
        *,
        filename: str | Path | None = None,
        config: BuilderConfig | None = None,
        cache: DefinitionCache | None = None,
        loaded_files: set[Path] | None = None,
    ):
        """
        Initialize the DSL and evaluate a declaration.

        Args:
            declaration: Source text or a callable receiving this DSL
            filename: Definition file to evaluate (when declaration is None),
                or the name reported for errors in declaration
            config: Builder configuration, defaults to a copy of default_config
            cache: Definition cache shared with the DSL that loaded this one
            loaded_files: Files already evaluated during this build
        """
        self.config = config if config is not None else default_config.copy()
        self.cache = cache if cache is not None else DefinitionCache(self.config, importer=self._import_definition)
        self._loaded_files = loaded_files if loaded_files is not None else set()
        self._namespace: str | None = None
        self.last_object: AbstractType | None = None

        if declaration is not None:
            self.evaluate(declaration, filename=str(filename) if filename else None)
        elif filename is not None:
            self.eval_file(filename)

    # Declaration evaluation

    @contextmanager
    def transaction(self) -> Iterator[DSL]:
        """Discard the registrations and loaded files recorded inside the block if it raises."""
        loaded_files = set(self._loaded_files)
        with self.cache.transaction():
            try:
                yield self
            except Exception:
                # The set is shared with the DSLs loading nested files
                self._loaded_files.intersection_update(loaded_files)
                raise

    def evaluate(self, declaration: str | Callable[[DSL], Any], filename: str | None = None) -> DSL:
        """Evaluate a declaration. Registrations are discarded if it fails."""
        if callable(declaration):
            self._run(lambda: declaration(self), filename)
        else:
            source_name = filename or "<declaration>"
            self._run(lambda: exec(compile(declaration, source_name, "exec"), self.vocabulary()), filename)
        return self

    def eval_file(self, filename: str | Path) -> DSL:
        """Run a definition file with the DSL vocabulary as its globals."""
        path = Path(filename)
        if not path.is_file():
            raise FrontEndEvaluationError(f"No such file: {path}", str(path))
        with self.transaction():
            self._loaded_files.add(path.resolve())
            self._run(lambda: runpy.run_path(str(path), init_globals=self.vocabulary()), str(path))
        return self

    def _run(self, action: Callable[[], Any], filename: str | None) -> None:
        with self.transaction():
            try:
                action()
            except AvroBuilderError:
                raise
            except Exception as e:
                raise FrontEndEvaluationError(f"{type(e).__name__}: {e}", filename) from e

    def vocabulary(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in DSL_METHODS}

    # Vocabulary

    def namespace(self, value: str | None = None) -> str | None:
        """Set the namespace for the following definitions, or return it."""
        if value is not None:
            self._namespace = validate_namespace(value)
        return self._namespace

    def current_namespace(self) -> str | None:
        return self._namespace

    def record(self, name: str, block: Callable | None = None, **options: Any) -> NamedType:
        return self._define("record", name, options, block)

    def error(self, name: str, block: Callable | None = None, **options: Any) -> NamedType:
        return self._define("error", name, options, block)

    def enum(self, name: str, *symbols: str, **options: Any) -> NamedType:
        if symbols:
            options["symbols"] = list(symbols)
        return self._define("enum", name, options)

    def fixed(self, name: str, size: int | None = None, **options: Any) -> NamedType:
        if size is not None:
            options["size"] = size
        return self._define("fixed", name, options)

    def type_macro(self, name: str, type_or_name: Any, **options: Any) -> TypeMacro:
        """Define a reusable anonymous type that is inlined where it is referenced."""
        namespace = options.pop("namespace", self._namespace)
        if isinstance(type_or_name, str) and type_or_name in PRIMITIVE_TYPES | {"array", "map", "union"}:
            wrapped = create_builtin_type(type_or_name, cache=self.cache, namespace=namespace, options=options)
        elif isinstance(type_or_name, AbstractType) and not type_or_name.is_named():
            if options:
                raise InvalidDefinitionError(f"Options are not supported with a type object for macro {name}")
            wrapped = type_or_name
        else:
            raise InvalidDefinitionError(f"Type macro {name} must wrap an anonymous type, got {type_or_name!r}")
        macro = TypeMacro(name, namespace, wrapped, self.cache)
        self.cache.add_type_macro(macro)
        return macro

    def import_type(self, name: str) -> None:
        """Load the definition file for name."""
        if not self._import_definition(name):
            raise UnresolvedTypeError(name)

    def _define(self, type_name: str, name: str, options: dict[str, Any], block: Callable | None = None) -> NamedType:
        namespace = options.pop("namespace", self._namespace)
        named = create_builtin_type(
            type_name,
            cache=self.cache,
            name=name,
            namespace=namespace,
            options=options,
            block=block,
        )
        if not getattr(named, "abstract", False):
            self.last_object = named
        return named

    # Definition files

    def find_file(self, name: str) -> Path | None:
        """
        Find the definition file for a name below the load paths.

        Args:
            name: A name or fullname; dots map to directories

        Returns:
            The path of the only matching file, or None

        Raises:
            AmbiguousDefinitionError: If more than one file matches
        """
        relative = "/".join(name.split(".")) + DEFINITION_FILE_SUFFIX
        matches: list[Path] = []
        for load_path in self.config.load_paths:
            for match in sorted(Path(load_path).glob(f"**/{relative}")):
                resolved = match.resolve()
                if resolved not in matches:
                    matches.append(resolved)
        if len(matches) > 1:
            raise AmbiguousDefinitionError(name, [str(m) for m in matches])
        return matches[0] if matches else None

    def _import_definition(self, name: str) -> bool:
        """Evaluate the definition file for name. Returns False if none is found."""
        path = self.find_file(name)
        if path is None:
            logger.debug("No definition file for %s", name)
            return False
        if path in self._loaded_files:
            return True
        logger.debug("Loading %s from %s", name, path)
        DSL(filename=path, config=self.config, cache=self.cache, loaded_files=self._loaded_files)
        return True

    # Output

    def to_dict(self) -> Any:
        """Serialize the last defined type with a fresh reference state."""
        if self.last_object is None:
            raise FrontEndEvaluationError("No schema defined")
        return self.last_object.serialize(ReferenceState())

    def to_json(self, validate: bool | None = None, pretty: bool | None = None) -> str:
        validate = self.config.validate if validate is None else validate
        pretty = self.config.pretty if pretty is None else pretty
        text = json.dumps(self.to_dict(), indent=2 if pretty else None)
        if validate:
            parse_schema(text)
        return text

    def as_schema(self) -> avro.schema.Schema:
        """Return the schema as an avro.schema.Schema object."""
        return parse_schema(self.to_json(validate=False, pretty=False))


def parse_schema(text: str) -> avro.schema.Schema:
    """Parse JSON schema text with the avro library."""
    try:
        return avro.schema.parse(text)
    except avro.errors.AvroException as e:
        raise SchemaValidationError(str(e)) from e
