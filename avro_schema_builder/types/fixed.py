"""
Fixed-size binary types.
"""

from __future__ import annotations

from typing import Any

from ..errors import InvalidDefinitionError
from ..reference_state import ReferenceState
from .named import NamedType


class FixedType(NamedType):
    avro_type_name = "fixed"
    dsl_attributes = ("namespace", "aliases", "logical_type", "size", "precision", "scale")

    def __init__(self, name: str | None = None, size: int | None = None, **kwargs: Any):
        self.size = size
        self.precision: int | None = None
        self.scale: int | None = None
        super().__init__(name, **kwargs)
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size <= 0:
            raise InvalidDefinitionError(f"Fixed {self.fullname} requires a positive integer size, got {self.size!r}")

    def definition(self, reference_state: ReferenceState) -> dict[str, Any]:
        document = self.identity_document()
        document["size"] = self.size
        document.update(self.metadata_document())
        if self.precision is not None:
            document["precision"] = self.precision
        if self.scale is not None:
            document["scale"] = self.scale
        return document
