"""Schema extraction.

Turns a dataclass or pydantic model into the ordered list of field
descriptors the resolver works from. Field metadata is attached
declaratively, through dataclass field metadata or pydantic ``Annotated``
metadata:

    @dataclass
    class Settings:
        port: int = setting("PORT", default="8080")
        host: str = setting("HOST", critical=True)

    class Settings(BaseModel):
        port: Annotated[int, tags("PORT", default="8080")] = 0

Descriptors are rebuilt on every call; nothing is cached.
"""

from __future__ import annotations

import dataclasses
import logging
import types
from enum import Enum
from typing import Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from .errors import SchemaError
from .types import FieldDescriptor, FieldKind

logger = logging.getLogger(__name__)

# Metadata keys read from each field
ENV_KEY = "env"
DEFAULT_KEY = "default"
CRITICAL_KEY = "critical"

_CRITICAL_TRUE = frozenset({"true", "t", "y"})
_CRITICAL_FALSE = frozenset({"false", "f", "n"})

# bool before int: bool is an int subclass
_KIND_BY_TYPE: tuple[tuple[type, FieldKind], ...] = (
    (bool, FieldKind.BOOLEAN),
    (int, FieldKind.INTEGER),
    (float, FieldKind.FLOAT),
    (str, FieldKind.STRING),
)


@dataclasses.dataclass(frozen=True)
class ConfigTags:
    """
    Config metadata for one field.

    Used as ``Annotated`` metadata on pydantic fields, where pydantic keeps it
    in ``FieldInfo.metadata`` and leaves the JSON schema alone.

    Attributes:
        env: Override for the lookup name (defaults to the field name)
        default: Fallback value used when no source has the key; None means no default
        critical: Marks the field mandatory ("true", "t", "y" or True)
    """

    env: str | None = None
    default: Any = None
    critical: bool | str | None = None

    def as_metadata(self) -> dict[str, Any]:
        """Return the keys that are set, as a dataclass metadata mapping."""
        metadata: dict[str, Any] = {}
        if self.env is not None:
            metadata[ENV_KEY] = self.env
        if self.default is not None:
            metadata[DEFAULT_KEY] = self.default
        if self.critical is not None:
            metadata[CRITICAL_KEY] = self.critical
        return metadata


def tags(env: str | None = None, default: Any = None, critical: bool | str | None = None) -> ConfigTags:
    """Build the config metadata marker for a pydantic ``Annotated`` field."""
    return ConfigTags(env=env, default=default, critical=critical)


def setting(
    env: str | None = None,
    *,
    default: Any = None,
    critical: bool | str | None = None,
    initial: Any = None,
    **field_kwargs: Any,
) -> Any:
    """
    Declare a dataclass config field.

    Args:
        env: Override for the lookup name
        default: Fallback string applied when no source has the key
        critical: Marks the field mandatory
        initial: The attribute's value before loading
        **field_kwargs: Passed through to ``dataclasses.field``

    Returns:
        A ``dataclasses.field`` carrying the config metadata
    """
    metadata = {**field_kwargs.pop("metadata", {}), **tags(env, default, critical).as_metadata()}
    if "default_factory" in field_kwargs:
        return dataclasses.field(metadata=metadata, **field_kwargs)
    return dataclasses.field(default=initial, metadata=metadata, **field_kwargs)


def extract(target: Any, strict: bool = False) -> list[FieldDescriptor]:
    """
    Derive field descriptors for a config target.

    Args:
        target: A dataclass or pydantic model, class or instance
        strict: Reject unrecognised critical flags and unsupported field types

    Returns:
        Descriptors in field declaration order

    Raises:
        SchemaError: If the target is not record-shaped, or on strict violations
    """
    target_type = target if isinstance(target, type) else type(target)

    if dataclasses.is_dataclass(target_type):
        descriptors = _extract_dataclass(target_type, strict)
    elif issubclass(target_type, BaseModel):
        descriptors = _extract_model(target_type, strict)
    else:
        raise SchemaError(f"Config target must be a dataclass or pydantic model, got {target_type.__name__}")

    logger.debug(f"Extracted {len(descriptors)} field descriptors from {target_type.__name__}")
    return descriptors


def _extract_dataclass(target_type: type, strict: bool) -> list[FieldDescriptor]:
    try:
        hints = get_type_hints(target_type)
    except (NameError, TypeError) as e:
        raise SchemaError(f"Cannot resolve field types of {target_type.__name__}: {e}") from e

    frozen = target_type.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return [
        _describe(f.name, hints.get(f.name, f.type), f.metadata, frozen, strict)
        for f in dataclasses.fields(target_type)
    ]


def _extract_model(target_type: type[BaseModel], strict: bool) -> list[FieldDescriptor]:
    model_frozen = bool(target_type.model_config.get("frozen", False))
    descriptors = []
    for name, info in target_type.model_fields.items():
        extra = next((m.as_metadata() for m in info.metadata if isinstance(m, ConfigTags)), {})
        frozen = model_frozen or bool(info.frozen)
        descriptors.append(_describe(name, info.annotation, extra, frozen, strict))
    return descriptors


def _describe(name: str, annotation: Any, metadata: Any, frozen: bool, strict: bool) -> FieldDescriptor:
    # None counts as no default, never as the string "None"
    raw_default = metadata.get(DEFAULT_KEY)
    has_default = raw_default is not None
    default_value = raw_default if has_default else ""
    if not isinstance(default_value, str):
        default_value = str(default_value)

    kind = kind_for(annotation)
    if kind is None and strict:
        raise SchemaError(f"Field {name} has unsupported type {annotation!r}")

    return FieldDescriptor(
        field_name=name,
        lookup_name=metadata.get(ENV_KEY) or name,
        mandatory=_parse_critical(name, metadata.get(CRITICAL_KEY), strict),
        has_default=has_default,
        default_value=default_value,
        kind=kind,
        writable=not frozen and not name.startswith("_"),
    )


def _parse_critical(name: str, value: Any, strict: bool) -> bool:
    """Parse a critical flag; unrecognised values read as False unless strict."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value

    lowered = str(value).lower()
    if lowered in _CRITICAL_TRUE:
        return True
    if strict and lowered not in _CRITICAL_FALSE:
        raise SchemaError(f"Field {name} has unrecognised critical flag {value!r}")
    return False


def kind_for(annotation: Any) -> FieldKind | None:
    """
    Map a declared type to its field kind.

    ``Optional[X]`` and ``X | None`` resolve to the kind of ``X``.
    Enums and anything outside bool/int/float/str map to None.
    """
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            return None
        annotation = members[0]

    if get_origin(annotation) is not None or not isinstance(annotation, type):
        return None
    if issubclass(annotation, Enum):
        return None

    for python_type, kind in _KIND_BY_TYPE:
        if issubclass(annotation, python_type):
            return kind
    return None
