"""
Enum types.
"""

from __future__ import annotations

from typing import Any

from ..errors import InvalidDefinitionError
from ..reference_state import ReferenceState
from .base import validate_name
from .named import NamedType


class EnumType(NamedType):
    avro_type_name = "enum"
    dsl_attributes = NamedType.dsl_attributes + ("symbols", "default")

    def __init__(self, name: str | None = None, *symbols: str, **kwargs: Any):
        self.symbols: list[str] = list(symbols)
        self.default: str | None = None
        super().__init__(name, **kwargs)
        self.symbols = list(self.symbols)
        self._validate_symbols()

    def _validate_symbols(self) -> None:
        if not self.symbols:
            raise InvalidDefinitionError(f"Enum {self.fullname} requires at least one symbol")
        seen = set()
        for symbol in self.symbols:
            validate_name(symbol, f"symbol for enum {self.fullname}")
            if symbol in seen:
                raise InvalidDefinitionError(f"Duplicate symbol {symbol!r} for enum {self.fullname}")
            seen.add(symbol)
        if self.default is not None and self.default not in seen:
            raise InvalidDefinitionError(f"Default {self.default!r} is not a symbol of enum {self.fullname}")

    def definition(self, reference_state: ReferenceState) -> dict[str, Any]:
        document = self.identity_document()
        document["symbols"] = list(self.symbols)
        if self.default is not None:
            document["default"] = self.default
        document.update(self.metadata_document())
        return document
