"""Core constants used across catalog modules.

This module centralizes directory names, environment keys, and file names.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_REGISTRY_ROOT = Path("transitland-atlas")
DEFAULT_OUTPUT_DIR = Path(".dmfr-catalog")
DEFAULT_LOG_LEVEL = "INFO"

FEEDS_SOURCE = "feeds"
OPERATORS_SOURCE = "operators"
SWISS_OPERATORS_SOURCE = "operators/switzerland"
REGISTRY_SOURCES = (FEEDS_SOURCE, OPERATORS_SOURCE, SWISS_OPERATORS_SOURCE)

ENV_REGISTRY_ROOT = "DMFR_REGISTRY_ROOT"
ENV_OUTPUT_DIR = "DMFR_OUTPUT_DIR"
ENV_OPTIONAL_SOURCES = "DMFR_OPTIONAL_SOURCES"
ENV_LOG_LEVEL = "DMFR_LOG_LEVEL"

FEEDS_FILE_NAME = "feeds.json"
OPERATORS_FILE_NAME = "operators.json"
OPERATOR_TO_FEEDS_FILE_NAME = "operator_to_feeds.json"
FEED_TO_OPERATORS_FILE_NAME = "feed_to_operators.json"
MANIFEST_FILE_NAME = "manifest.json"
HASH_ALGORITHM = "sha256"
