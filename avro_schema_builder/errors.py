"""
Exceptions raised while building Avro schemas.
"""

from __future__ import annotations


class AvroBuilderError(Exception):
    """Base class for all errors raised by the schema builder."""

    pass


class UnresolvedTypeError(AvroBuilderError):
    """Raised when a referenced type cannot be found in the cache or loaded."""

    def __init__(self, name: str, namespace: str | None = None):
        self.name = name
        self.namespace = namespace
        message = f"Definition not found for {name}"
        if namespace:
            message += f" (namespace {namespace})"
        super().__init__(message)


class AmbiguousDefinitionError(AvroBuilderError):
    """Raised when a name matches more than one definition."""

    def __init__(self, name: str, candidates: list[str]):
        self.name = name
        self.candidates = candidates
        super().__init__(f"Multiple definitions match {name}: {', '.join(candidates)}")


class InvalidDefinitionError(AvroBuilderError):
    """Raised when a type definition is structurally invalid.

    This can happen when:
    - A record, enum or fixed has an empty or invalid name
    - An enum has no symbols or duplicate symbols
    - A fixed has a size that is not a positive integer
    """

    pass


class UnknownAttributeError(InvalidDefinitionError):
    """Raised when an option is not supported by the type or field."""

    def __init__(self, attribute: str, target: str):
        self.attribute = attribute
        self.target = target
        super().__init__(f"Unsupported attribute '{attribute}' for {target}")


class DuplicateDefinitionError(InvalidDefinitionError):
    """Raised when a fullname is defined twice in the same build."""

    def __init__(self, fullname: str):
        self.fullname = fullname
        super().__init__(f"Definition for {fullname} already exists")


class FrontEndEvaluationError(AvroBuilderError):
    """Raised when evaluating a declaration fails outside of the builder."""

    def __init__(self, message: str, filename: str | None = None):
        self.filename = filename
        if filename:
            message = f"{filename}: {message}"
        super().__init__(message)


class SchemaValidationError(AvroBuilderError):
    """Raised when the generated document is rejected by the avro library."""

    pass
