"""Runtime configuration for licensekit."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from licensekit.cache import DEFAULT_CACHE_DIR, DEFAULT_TTL_HOURS
from licensekit.errors import ConfigError
from licensekit.models import ManifestValue
from licensekit.spdx import DEFAULT_TIMEOUT, SPDX_DATA_URL


ENV_PREFIX = "LICENSEKIT_"
TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUTHY:
        return True
    if lowered in FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class Settings:
    """Settings resolved from defaults, environment and CLI options."""
    cache_dir: Path = DEFAULT_CACHE_DIR
    cache_ttl_hours: int = DEFAULT_TTL_HOURS
    timeout: float = DEFAULT_TIMEOUT
    offline: bool = False
    spdx_url: str = SPDX_DATA_URL
    manifest_value: ManifestValue = ManifestValue.NAME
    
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``LICENSEKIT_*`` environment variables.

        Raises:
            ConfigError: if a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        settings = cls()
        
        def get(key: str) -> Optional[str]:
            return env.get(ENV_PREFIX + key)
        
        if get("CACHE_DIR"):
            settings = replace(settings, cache_dir=Path(get("CACHE_DIR")).expanduser())
        
        if get("CACHE_TTL") is not None:
            try:
                ttl = int(get("CACHE_TTL"))
            except ValueError:
                raise ConfigError(f"{ENV_PREFIX}CACHE_TTL must be an integer")
            if ttl < 0:
                raise ConfigError(f"{ENV_PREFIX}CACHE_TTL must not be negative")
            settings = replace(settings, cache_ttl_hours=ttl)
        
        if get("TIMEOUT") is not None:
            try:
                timeout = float(get("TIMEOUT"))
            except ValueError:
                raise ConfigError(f"{ENV_PREFIX}TIMEOUT must be a number")
            if timeout <= 0:
                raise ConfigError(f"{ENV_PREFIX}TIMEOUT must be positive")
            settings = replace(settings, timeout=timeout)
        
        if get("OFFLINE") is not None:
            settings = replace(
                settings, offline=_parse_bool(ENV_PREFIX + "OFFLINE", get("OFFLINE"))
            )
        
        if get("SPDX_URL"):
            settings = replace(settings, spdx_url=get("SPDX_URL"))
        
        if get("MANIFEST_VALUE"):
            settings = replace(
                settings, manifest_value=parse_manifest_value(get("MANIFEST_VALUE"))
            )
        
        return settings


def parse_manifest_value(value: str) -> ManifestValue:
    """Parse ``name`` or ``identifier`` (``id`` accepted) into a ManifestValue."""
    lowered = value.strip().lower()
    if lowered == "id":
        lowered = ManifestValue.IDENTIFIER.value
    try:
        return ManifestValue(lowered)
    except ValueError:
        raise ConfigError(
            f"Manifest value must be 'name' or 'identifier', got {value!r}"
        )
