"""Runtime configuration model for catalog builds.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REGISTRY_ROOT,
    ENV_LOG_LEVEL,
    ENV_OPTIONAL_SOURCES,
    ENV_OUTPUT_DIR,
    ENV_REGISTRY_ROOT,
    REGISTRY_SOURCES,
)
from core.errors import CatalogConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CatalogConfig:
    """Validated runtime configuration.

    Attributes:
        registry_root: Root directory of the DMFR registry checkout.
        output_dir: Directory receiving exported catalog files.
        optional_sources: Source names allowed to be missing.
        log_level: Minimum structured log level.
    """

    registry_root: Path
    output_dir: Path
    optional_sources: tuple[str, ...]
    log_level: str

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CatalogConfigError: If environment values are invalid.
        """
        registry_root_value = os.getenv(ENV_REGISTRY_ROOT, str(DEFAULT_REGISTRY_ROOT))
        output_dir_value = os.getenv(ENV_OUTPUT_DIR, str(DEFAULT_OUTPUT_DIR))
        optional_sources = parse_optional_sources(os.getenv(ENV_OPTIONAL_SOURCES, ""))
        log_level = _parse_log_level(os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL))
        return cls(
            registry_root=Path(registry_root_value).expanduser().resolve(),
            output_dir=Path(output_dir_value).expanduser().resolve(),
            optional_sources=optional_sources,
            log_level=log_level,
        )


def parse_optional_sources(raw_value: str) -> tuple[str, ...]:
    """Parse a comma-separated list of optional source names.

    Args:
        raw_value: Raw string from environment or CLI.

    Returns:
        Ordered, de-duplicated source names.

    Raises:
        CatalogConfigError: If a name is not a known registry source.
    """
    names: list[str] = []
    for item in raw_value.split(","):
        name = item.strip().strip("/")
        if not name:
            continue
        if name not in REGISTRY_SOURCES:
            raise CatalogConfigError(
                f"Invalid {ENV_OPTIONAL_SOURCES} entry '{name}'. "
                f"Expected any of {', '.join(REGISTRY_SOURCES)}."
            )
        if name not in names:
            names.append(name)
    return tuple(names)


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Upper-cased logging level name.

    Raises:
        CatalogConfigError: If value is not a standard level name.
    """
    level = raw_value.strip().upper()
    if level not in _LOG_LEVELS:
        raise CatalogConfigError(
            f"Invalid {ENV_LOG_LEVEL} value: expected one of "
            f"{', '.join(_LOG_LEVELS)}, got '{raw_value}'."
        )
    return level
