"""
Configuration for the schema builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BuilderConfig:
    """Configuration options for building schemas."""

    # Directories searched recursively for definition files
    load_paths: list[str] = field(default_factory=list)

    # Additional attributes that fields and records may carry and emit verbatim
    extra_metadata_attributes: list[str] = field(default_factory=list)

    # Raise on unsupported attributes instead of ignoring them
    strict_attributes: bool = True

    # Check generated documents with the avro library
    validate: bool = True

    # Indent generated JSON
    pretty: bool = True

    def add_load_path(self, *paths: str) -> None:
        """Add paths that will be searched for definitions."""
        for path in paths:
            path = str(path)
            if path not in self.load_paths:
                self.load_paths.append(path)

    def add_extra_metadata_attributes(self, *attrs: str) -> None:
        """Allow additional metadata attributes on fields and records."""
        for attr in attrs:
            attr = str(attr)
            if attr not in self.extra_metadata_attributes:
                self.extra_metadata_attributes.append(attr)

    def copy(self) -> BuilderConfig:
        return BuilderConfig.from_dict(self.to_dict())

    @staticmethod
    def from_dict(d: dict) -> BuilderConfig:
        """Create a config from a dictionary."""
        config = BuilderConfig()
        for k, v in d.items():
            if hasattr(config, k):
                if isinstance(v, list):
                    v = list(v)
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "load_paths": list(self.load_paths),
            "extra_metadata_attributes": list(self.extra_metadata_attributes),
            "strict_attributes": self.strict_attributes,
            "validate": self.validate,
            "pretty": self.pretty,
        }


# Defaults used by build(), build_schema() and build_dsl() when no config is given
default_config = BuilderConfig()
