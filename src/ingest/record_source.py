"""Registry record source.

This module walks the registry directories and decodes each file into a
RegistryDocument. Per-file failures are logged and skipped here, so the
catalog builder only ever sees structurally valid documents.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

from core.constants import (
    FEEDS_SOURCE,
    OPERATORS_SOURCE,
    REGISTRY_SOURCES,
    SWISS_OPERATORS_SOURCE,
)
from core.errors import CatalogConfigError, CatalogSourceError, DmfrDecodeError
from core.logging_config import get_logger
from core.types import RegistryDocument
from ingest.dmfr_decoder import decode_operator_document, decode_registry_document

_LOGGER = get_logger(__name__)

DocumentDecoder = Callable[[str, str, str], RegistryDocument]


@dataclass(frozen=True)
class RegistrySource:
    """One registry directory and how its files decode.

    Attributes:
        name: Source name relative to the registry root.
        decoder: Decoder applied to each file's text.
        log_malformed: Whether decode failures are logged.
    """

    name: str
    decoder: DocumentDecoder
    log_malformed: bool


DEFAULT_SOURCES = (
    RegistrySource(FEEDS_SOURCE, decode_registry_document, log_malformed=False),
    RegistrySource(OPERATORS_SOURCE, decode_operator_document, log_malformed=True),
    RegistrySource(SWISS_OPERATORS_SOURCE, decode_operator_document, log_malformed=True),
)


class RegistryRecordSource:
    """Lazy, ordered reader over the registry directories.

    Sources are visited in declaration order and files inside each source
    in sorted name order, so repeated runs see the same document sequence.
    """

    def __init__(
        self,
        registry_root: Path,
        optional_sources: tuple[str, ...] = (),
        sources: tuple[RegistrySource, ...] = DEFAULT_SOURCES,
    ) -> None:
        """Create a record source.

        Args:
            registry_root: Registry checkout root.
            optional_sources: Source names allowed to be missing.
            sources: Registry sources to read, in order.

        Raises:
            CatalogConfigError: If an optional source name is unknown.
        """
        unknown = [name for name in optional_sources if name not in REGISTRY_SOURCES]
        if unknown:
            raise CatalogConfigError(
                f"Unknown optional registry source(s): {', '.join(unknown)}. "
                f"Expected any of {', '.join(REGISTRY_SOURCES)}."
            )
        self._registry_root = registry_root
        self._optional_sources = optional_sources
        self._sources = sources
        self.unreadable_count = 0
        self.malformed_count = 0

    def documents(self) -> Iterator[RegistryDocument]:
        """Yield decoded documents from every source.

        All source directories are listed before the first document is
        yielded, so a missing required directory fails the build up front.

        Yields:
            Decoded registry documents.

        Raises:
            CatalogSourceError: If a required source directory is unavailable.
        """
        listings = [(source, self._list_source(source)) for source in self._sources]
        for source, file_paths in listings:
            for file_path in file_paths:
                document = self._read_document(source, file_path)
                if document is not None:
                    yield document

    def _list_source(self, source: RegistrySource) -> list[Path]:
        """List regular files of one source directory.

        Args:
            source: Registry source to list.

        Returns:
            Sorted file paths; empty for a missing optional source.

        Raises:
            CatalogSourceError: If a required directory cannot be listed.
        """
        directory = self._registry_root / source.name
        try:
            entries = sorted(directory.iterdir())
        except OSError as error:
            if source.name in self._optional_sources:
                _LOGGER.warning(
                    "source_unavailable",
                    source=source.name,
                    directory=str(directory),
                    reason=str(error),
                )
                return []
            raise CatalogSourceError(
                f"Registry source '{source.name}' is unavailable at {directory}: "
                f"{error.strerror or error}. Check the registry root or mark the "
                "source as optional."
            ) from error
        return [entry for entry in entries if entry.is_file()]

    def _read_document(self, source: RegistrySource, file_path: Path) -> RegistryDocument | None:
        """Read and decode one file, returning None when it is skipped."""
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            self.unreadable_count += 1
            _LOGGER.warning(
                "document_unreadable",
                source=source.name,
                path=str(file_path),
                reason=str(error),
            )
            return None
        try:
            return source.decoder(text, str(file_path), source.name)
        except DmfrDecodeError as error:
            self.malformed_count += 1
            if source.log_malformed:
                _LOGGER.warning(
                    "document_malformed",
                    source=source.name,
                    path=str(file_path),
                    reason=str(error),
                )
            return None
