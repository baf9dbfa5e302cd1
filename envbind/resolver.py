"""
Field resolver.

Looks each field up in priority order (environment, properties file,
declared default), coerces the winning string and writes it onto the target.
The first failure aborts the whole call; fields already written stay written.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .errors import CoercionError, MissingCriticalFieldError
from .logging_config import TRACE
from .sources import ValueSource
from .types import NOT_FOUND, FieldDescriptor, ResolvedValue, ValueOrigin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """Sources and prefix for a single load call."""

    env: ValueSource
    properties: ValueSource | None = None
    prefix: str = ""

    def effective_name(self, lookup_name: str) -> str:
        """Apply the prefix: ``PREFIX_NAME``, or the bare name without one."""
        if self.prefix:
            return f"{self.prefix}_{lookup_name}"
        return lookup_name

    def lookup(self, descriptor: FieldDescriptor) -> ResolvedValue:
        """
        Find the raw value for a field.

        Args:
            descriptor: The field to look up

        Returns:
            The first hit from env, properties or default; NOT_FOUND otherwise

        Raises:
            MissingCriticalFieldError: If a mandatory field has no value anywhere
        """
        name = self.effective_name(descriptor.lookup_name)

        value = self.env.get(name)
        if value is not None:
            return ResolvedValue(value, True, ValueOrigin.ENVIRONMENT)

        if self.properties is not None:
            value = self.properties.get(name)
            if value is not None:
                return ResolvedValue(value, True, ValueOrigin.PROPERTIES)

        if descriptor.has_default:
            return ResolvedValue(descriptor.default_value, True, ValueOrigin.DEFAULT)

        if descriptor.mandatory:
            raise MissingCriticalFieldError(name)

        return NOT_FOUND


class Resolver:
    """Applies resolved values to a config target."""

    def resolve(
        self,
        descriptors: Sequence[FieldDescriptor],
        target: Any,
        context: ResolutionContext,
    ) -> list[str]:
        """
        Resolve every field in declaration order and write it onto target.

        Args:
            descriptors: Field descriptors from the schema extractor
            target: The object whose attributes receive the values
            context: Sources and prefix for this call

        Returns:
            Names of the fields that were written

        Raises:
            MissingCriticalFieldError: On the first mandatory field with no value
            CoercionError: On the first value that does not parse as its kind
        """
        applied: list[str] = []

        for descriptor in descriptors:
            resolved = context.lookup(descriptor)
            if not resolved.found:
                logger.debug(f"No value for {descriptor.field_name}, leaving it unchanged")
                continue

            if not descriptor.writable:
                logger.debug(f"Field {descriptor.field_name} is not writable, skipping")
                continue

            if descriptor.kind is None:
                logger.debug(f"Field {descriptor.field_name} has an unsupported type, skipping")
                continue

            key = context.effective_name(descriptor.lookup_name)
            try:
                value = descriptor.kind.coerce(resolved.raw)
            except ValueError as e:
                raise CoercionError(
                    descriptor.field_name,
                    descriptor.kind.value,
                    key=key,
                    value=resolved.raw,
                ) from e

            setattr(target, descriptor.field_name, value)
            applied.append(descriptor.field_name)

            logger.debug(f"Resolved {descriptor.field_name} from {resolved.origin.value} ({key})")  # type: ignore[union-attr]
            logger.log(TRACE, f"{key}={resolved.raw!r}")

        return applied
