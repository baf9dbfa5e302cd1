"""
Typed configuration loading from environment variables and properties files.

Each field of a dataclass or pydantic model is resolved from, in order:
the environment, a ``key=value`` properties file (``app.properties`` by
default), then the field's declared default. Critical fields with no value
anywhere fail the load.

Usage:
    from dataclasses import dataclass
    from envbind import load_variables, setting

    @dataclass
    class Settings:
        port: int = setting("PORT", default="8080")
        host: str = setting("HOST", critical=True)
        debug: bool = setting("DEBUG", default="false")

    settings = load_variables(Settings())
"""

from __future__ import annotations

from .errors import CoercionError, ConfigError, MissingCriticalFieldError, SchemaError
from .loader import (
    ConfigLoader,
    load,
    load_variables,
    load_variables_with_prefix,
    load_variables_with_prefix_and_props,
    load_variables_with_props,
)
from .resolver import ResolutionContext, Resolver
from .schema import ConfigTags, extract, setting, tags
from .sources import DEFAULT_PROPERTIES_FILE, EnvSource, MappingSource, PropertySource, ValueSource
from .types import FieldDescriptor, FieldKind, ResolvedValue, ValueOrigin

__all__ = [
    # Entry points
    "ConfigLoader",
    "load",
    "load_variables",
    "load_variables_with_props",
    "load_variables_with_prefix",
    "load_variables_with_prefix_and_props",
    # Schema
    "extract",
    "setting",
    "tags",
    "ConfigTags",
    "FieldDescriptor",
    "FieldKind",
    # Resolution
    "Resolver",
    "ResolutionContext",
    "ResolvedValue",
    "ValueOrigin",
    # Sources
    "DEFAULT_PROPERTIES_FILE",
    "ValueSource",
    "MappingSource",
    "EnvSource",
    "PropertySource",
    # Error classes
    "ConfigError",
    "SchemaError",
    "MissingCriticalFieldError",
    "CoercionError",
]
