"""
Store of avro.schema.Schema objects built from a directory of definition files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import avro.schema

from .config import BuilderConfig, default_config
from .dsl import DSL, parse_schema
from .errors import InvalidDefinitionError, UnresolvedTypeError
from .reference_state import ReferenceState
from .types.base import avro_name

logger = logging.getLogger(__name__)


class SchemaStore:
    """Finds, builds and caches schemas by fullname."""

    def __init__(self, path: str | Path, config: BuilderConfig | None = None):
        self.path = Path(path)
        self.config = (config or default_config).copy()
        self.config.load_paths = [str(self.path)]
        self._schemas: dict[str, avro.schema.Schema] = {}

    def find(self, name: str, namespace: str | None = None) -> avro.schema.Schema:
        """
        Return the schema for a type defined below the store path.

        Each schema is built in its own DSL so definitions never leak
        between lookups.

        Raises:
            UnresolvedTypeError: If no definition can be found
        """
        try:
            requested = avro_name(name, namespace).fullname
        except InvalidDefinitionError as e:
            raise UnresolvedTypeError(name, namespace) from e
        if requested not in self._schemas:
            logger.debug("Building schema for %s from %s", requested, self.path)
            dsl = DSL(config=self.config)
            named_type = dsl.cache.lookup_named_type(name, namespace)
            fullname = named_type.fullname
            if fullname not in self._schemas:
                document = named_type.serialize(ReferenceState())
                self._schemas[fullname] = parse_schema(json.dumps(document))
            # A lookup that fell back to a short name is cached under both keys
            self._schemas[requested] = self._schemas[fullname]
        return self._schemas[requested]

    def __contains__(self, fullname: str) -> bool:
        return fullname in self._schemas
