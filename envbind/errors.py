"""Configuration error classes.

All load-time exceptions share ``ConfigError`` so callers can catch the
whole family at startup.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class SchemaError(ConfigError):
    """Raised when a target cannot be described as a set of config fields."""

    pass


class MissingCriticalFieldError(ConfigError):
    """Raised when a critical field has no value in any source."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Critical config field {name} missing from the environment")


class CoercionError(ConfigError):
    """Raised when a resolved string cannot be converted to the field's type."""

    def __init__(self, field: str, expected_kind: str, *, key: str | None = None, value: str | None = None):
        self.field = field
        self.expected_kind = expected_kind
        self.key = key
        self.value = value
        source = f" (from {key}={value!r})" if key is not None else ""
        super().__init__(f"Error converting field {field} to {expected_kind}{source}")
