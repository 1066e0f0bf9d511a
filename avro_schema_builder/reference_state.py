"""
Traversal state used while serializing a type graph.

Avro requires each named type to be fully defined once; every later
occurrence must be a reference by fullname.
"""

from __future__ import annotations

from typing import Any, Callable


class ReferenceState:
    """Tracks the fullnames already emitted during one serialization pass."""

    def __init__(self):
        self._defined: set[str] = set()

    def definition_or_reference(self, fullname: str, define: Callable[[], Any]) -> Any:
        """
        Return the full definition the first time fullname is seen, else the fullname.

        The fullname is marked before define() runs so recursive references
        inside the definition serialize as references.

        Args:
            fullname: Identity of the named type
            define: Callable producing the full definition

        Returns:
            The definition document or the bare fullname
        """
        if fullname in self._defined:
            return fullname
        self._defined.add(fullname)
        return define()

    def is_defined(self, fullname: str) -> bool:
        return fullname in self._defined

    @property
    def defined_names(self) -> frozenset[str]:
        return frozenset(self._defined)
