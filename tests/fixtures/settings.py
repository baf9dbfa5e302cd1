"""Shared config targets for envbind tests."""

from __future__ import annotations

from dataclasses import dataclass

from envbind import setting

# Keys read by the targets below, with and without the APP prefix
SETTINGS_KEYS = ("HOST", "PORT", "DEBUG", "RATIO", "APP_HOST", "APP_PORT", "APP_DEBUG", "APP_RATIO")


@dataclass
class ServerSettings:
    """Host declared first so a missing host stops before port and debug."""

    host: str = setting("HOST", critical=True)
    port: int = setting("PORT", default="8080")
    debug: bool = setting("DEBUG", default="false")


@dataclass
class TunedSettings:
    """Every supported kind, none critical."""

    host: str = setting("HOST", default="localhost")
    port: int = setting("PORT", default="8080")
    debug: bool = setting("DEBUG", default="false")
    ratio: float = setting("RATIO", default="0.5")
