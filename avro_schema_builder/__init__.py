"""Avro Schema Builder

Build Avro schemas from Python declarations of records, enums and fixed
types. Named types are defined once per schema and referenced by fullname
everywhere else; types defined in other files are loaded on demand from
the configured load paths.
"""

__version__ = "1.0.0"

from pathlib import Path
from typing import Any, Callable

import avro.schema

from .config import BuilderConfig, default_config
from .definition_cache import DefinitionCache
from .dsl import DSL
from .errors import (
    AmbiguousDefinitionError,
    AvroBuilderError,
    DuplicateDefinitionError,
    FrontEndEvaluationError,
    InvalidDefinitionError,
    SchemaValidationError,
    UnknownAttributeError,
    UnresolvedTypeError,
)
from .field import Field
from .reference_state import ReferenceState
from .schema_store import SchemaStore

Declaration = str | Callable[[DSL], Any] | None


def build_dsl(declaration: Declaration = None, filename: str | Path | None = None, config: BuilderConfig | None = None) -> DSL:
    """Evaluate a declaration (source, callable or file) and return the DSL."""
    return DSL(declaration, filename=filename, config=config)


def build(declaration: Declaration = None, filename: str | Path | None = None, config: BuilderConfig | None = None) -> str:
    """Evaluate a declaration and return the JSON schema text."""
    return build_dsl(declaration, filename=filename, config=config).to_json()


def build_schema(
    declaration: Declaration = None, filename: str | Path | None = None, config: BuilderConfig | None = None
) -> avro.schema.Schema:
    """Evaluate a declaration and return an avro.schema.Schema."""
    return build_dsl(declaration, filename=filename, config=config).as_schema()


def add_load_path(*paths: str | Path) -> None:
    """Add paths that will be searched for definitions."""
    default_config.add_load_path(*paths)


def extra_metadata_attributes(*attrs: str) -> None:
    """Define extra allowable metadata attributes for fields and records."""
    default_config.add_extra_metadata_attributes(*attrs)


__all__ = [
    "build",
    "build_dsl",
    "build_schema",
    "add_load_path",
    "extra_metadata_attributes",
    "BuilderConfig",
    "default_config",
    "DSL",
    "DefinitionCache",
    "Field",
    "ReferenceState",
    "SchemaStore",
    "AvroBuilderError",
    "AmbiguousDefinitionError",
    "DuplicateDefinitionError",
    "FrontEndEvaluationError",
    "InvalidDefinitionError",
    "SchemaValidationError",
    "UnknownAttributeError",
    "UnresolvedTypeError",
]
