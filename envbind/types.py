"""Field descriptor types.

Defines the closed set of supported field kinds, their string coercion rules
and the per-field descriptor produced by the schema extractor.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_TRUE_VALUES = frozenset({"true", "t", "1"})
_FALSE_VALUES = frozenset({"false", "f", "0"})
_INF_LITERALS = frozenset({"inf", "infinity"})


def _parse_int(raw: str) -> int:
    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError(f"invalid integer literal: {raw!r}")
    value = int(raw, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer {raw} out of 64-bit range")
    return value


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean literal: {raw!r}")


def _parse_float(raw: str) -> float:
    if not raw or not raw.isascii() or raw != raw.strip() or "_" in raw:
        raise ValueError(f"invalid float literal: {raw!r}")

    unsigned = raw.lstrip("+-").lower()
    if unsigned.startswith("0x"):
        if "p" not in unsigned:
            raise ValueError(f"hex float {raw!r} needs a p exponent")
        try:
            value = float.fromhex(raw)
        except OverflowError as e:
            raise ValueError(f"float {raw} out of range") from e
    else:
        value = float(raw)

    # float() silently overflows to infinity; only explicit literals may produce it
    if math.isinf(value) and unsigned not in _INF_LITERALS:
        raise ValueError(f"float {raw} out of range")
    return value


class FieldKind(Enum):
    """Supported configuration field kinds."""

    STRING = "string"
    INTEGER = "int"
    BOOLEAN = "bool"
    FLOAT = "float"

    def coerce(self, raw: str) -> Any:
        """
        Convert a raw string into this kind's Python value.

        Args:
            raw: The string taken from the environment, properties or default

        Returns:
            The typed value

        Raises:
            ValueError: If the string is not a valid literal for this kind
        """
        if self is FieldKind.STRING:
            return raw
        elif self is FieldKind.INTEGER:
            return _parse_int(raw)
        elif self is FieldKind.BOOLEAN:
            return _parse_bool(raw)
        else:
            return _parse_float(raw)


class ValueOrigin(Enum):
    """Where a resolved value came from."""

    ENVIRONMENT = "environment"
    PROPERTIES = "properties"
    DEFAULT = "default"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Normalized description of one configurable field.

    Attributes:
        field_name: The attribute name as declared on the target
        lookup_name: Key used against the sources, before prefixing
        mandatory: If True, a missing value fails the load
        has_default: Whether a declared default exists
        default_value: The declared default, used verbatim
        kind: The field's kind, or None when its type is unsupported
        writable: False for private names and frozen targets
    """

    field_name: str
    lookup_name: str
    mandatory: bool = False
    has_default: bool = False
    default_value: str = ""
    kind: FieldKind | None = None
    writable: bool = True


@dataclass(frozen=True)
class ResolvedValue:
    """Outcome of looking a field up in its sources, before coercion."""

    raw: str = ""
    found: bool = False
    origin: ValueOrigin | None = None


NOT_FOUND = ResolvedValue()
