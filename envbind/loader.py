"""
ConfigLoader - binds typed config fields to environment and properties values.

Sources are consulted in fixed priority order: environment variables, then
the properties file (``app.properties`` unless told otherwise), then each
field's declared default. A missing properties file is not an error.

Usage:
    @dataclass
    class Settings:
        port: int = setting("PORT", default="8080")
        host: str = setting("HOST", critical=True)

    settings = load_variables(Settings())

    # Or with a prefix: reads APP_PORT and APP_HOST
    settings = load_variables_with_prefix(Settings(), "APP")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from .errors import SchemaError
from .resolver import ResolutionContext, Resolver
from .schema import extract
from .sources import DEFAULT_PROPERTIES_FILE, EnvSource, PropertySource, ValueSource
from .types import FieldDescriptor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigLoader:
    """
    Reusable loader holding the sources and options for repeated loads.

    Every ``load`` call re-reads the properties file and re-extracts the
    schema, so changes to either between calls are picked up.
    """

    def __init__(
        self,
        env: ValueSource | Mapping[str, str] | None = None,
        properties_path: str | Path | None = DEFAULT_PROPERTIES_FILE,
        prefix: str = "",
        strict: bool = False,
        properties: ValueSource | Mapping[str, str] | None = None,
    ):
        """
        Initialize the loader.

        Args:
            env: Environment lookup. Defaults to the live process environment.
            properties_path: Properties file to read on each load, or None for none.
            prefix: Namespace prepended to every lookup name as ``PREFIX_``.
            strict: Raise SchemaError on unrecognised critical flags and
                unsupported field types instead of ignoring them.
            properties: Pre-built properties source; takes precedence over
                ``properties_path``.
        """
        self._env = env if isinstance(env, ValueSource) else EnvSource(env)
        if properties is None or isinstance(properties, ValueSource):
            self._properties = properties
        else:
            self._properties = PropertySource(properties)
        self.properties_path = properties_path
        self.prefix = prefix
        self.strict = strict
        self._resolver = Resolver()

    def describe(self, target: Any) -> list[FieldDescriptor]:
        """Return the field descriptors for target without loading anything."""
        return extract(target, strict=self.strict)

    def load(self, target: T) -> T:
        """
        Populate target's fields from the configured sources.

        Args:
            target: A dataclass or pydantic model instance

        Returns:
            The same target, for chaining

        Raises:
            SchemaError: If target is not a config instance
            MissingCriticalFieldError: If a critical field has no value
            CoercionError: If a value does not parse as its field's type
        """
        if isinstance(target, type):
            raise SchemaError(f"Config target must be an instance, got class {target.__name__}")

        descriptors = extract(target, strict=self.strict)
        context = ResolutionContext(env=self._env, properties=self._open_properties(), prefix=self.prefix)

        applied = self._resolver.resolve(descriptors, target, context)
        logger.info(f"Loaded {len(applied)} of {len(descriptors)} config fields into {type(target).__name__}")
        return target

    def _open_properties(self) -> ValueSource | None:
        if self._properties is not None:
            return self._properties
        if self.properties_path is None:
            return None
        return PropertySource.from_file(self.properties_path)


def load(
    target: T,
    prefix: str = "",
    properties_path: str | Path | None = DEFAULT_PROPERTIES_FILE,
    *,
    env: ValueSource | Mapping[str, str] | None = None,
    properties: ValueSource | Mapping[str, str] | None = None,
    strict: bool = False,
) -> T:
    """Load target with an explicit prefix, properties file and sources."""
    loader = ConfigLoader(
        env=env,
        properties_path=properties_path,
        prefix=prefix,
        strict=strict,
        properties=properties,
    )
    return loader.load(target)


def load_variables(target: T) -> T:
    """Load from the environment and ``app.properties``."""
    return load(target)


def load_variables_with_props(target: T, file_name: str | Path) -> T:
    """Load from the environment and the given properties file."""
    return load(target, properties_path=file_name)


def load_variables_with_prefix(target: T, prefix: str) -> T:
    """Load ``PREFIX_NAME`` keys from the environment and ``app.properties``."""
    return load(target, prefix=prefix)


def load_variables_with_prefix_and_props(target: T, prefix: str, file_name: str | Path) -> T:
    """Load ``PREFIX_NAME`` keys from the environment and the given properties file."""
    return load(target, prefix=prefix, properties_path=file_name)
