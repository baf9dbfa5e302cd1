"""Value sources consulted by the resolver.

Each source is a read-only key lookup returning a string or None. The
environment is read live on every lookup; a properties file is parsed once
when the source is built.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from jproperties import ParseError, Properties

logger = logging.getLogger(__name__)

DEFAULT_PROPERTIES_FILE = "app.properties"


class ValueSource(ABC):
    """Abstract key -> string lookup."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short label used in log messages"""
        pass

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for key, or None if the source does not define it."""
        pass


class MappingSource(ValueSource):
    """Expose any string mapping as a value source."""

    def __init__(self, values: Mapping[str, str | None], name: str = "mapping"):
        self._values = values
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, keys={len(self._values)})"


class EnvSource(MappingSource):
    """Process environment lookup, exact case."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        # os.environ itself, not a copy, so lookups see the live environment
        super().__init__(os.environ if environ is None else environ, name="environment")


class PropertySource(MappingSource):
    """Values parsed from a Java-style ``.properties`` file."""

    def __init__(self, values: Mapping[str, str | None], path: Path | None = None):
        super().__init__(values, name="properties")
        self.path = path

    @classmethod
    def from_file(cls, path: str | Path) -> PropertySource | None:
        """
        Load a UTF-8 properties file.

        Parsed with jproperties: ``=``, ``:`` and whitespace separators, ``#``
        and ``!`` comment lines, ``\\`` line continuations and ``\\uXXXX``
        escapes. Values are otherwise kept verbatim, quotes and inline ``#``
        included. A key with no value maps to the empty string.

        Args:
            path: Location of the properties file

        Returns:
            The loaded source, or None if the file is missing or unreadable
        """
        file_path = Path(path)
        if not file_path.is_file():
            logger.debug(f"No properties file at {file_path}, using environment and defaults only")
            return None

        properties = Properties()
        try:
            with open(file_path, "rb") as f:
                properties.load(f, "utf-8")
        except (OSError, UnicodeDecodeError, ParseError) as e:
            logger.warning(f"Ignoring unreadable properties file {file_path}: {e}")
            return None

        loaded = dict(properties.properties)
        logger.debug(f"Loaded {len(loaded)} properties from {file_path}")
        return cls(loaded, path=file_path)
