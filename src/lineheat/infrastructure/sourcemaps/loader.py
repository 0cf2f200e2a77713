"""Source-map discovery and loading.

Best-effort: a malformed or unreadable file is logged and skipped,
never aborts the scan. Disk-bound, runs only at startup or reload.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from lineheat.domain.exceptions import MalformedSourceMapError, UnreadableFileError
from lineheat.domain.model.configuration import DEFAULT_MAP_SUFFIX
from lineheat.infrastructure.sourcemaps.decoder import decode_source_map

if TYPE_CHECKING:
    from collections.abc import Mapping

    from lineheat.domain.model.source_map import SourceMapTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadReport:
    """Outcome of one directory scan.

    Attributes:
        tables: Generated file name -> table, for every map that decoded
        skipped: Map files that could not be read or decoded
    """

    tables: Mapping[str, SourceMapTable]
    skipped: tuple[Path, ...]

    @property
    def loaded_count(self) -> int:
        """Number of tables loaded."""
        return len(self.tables)

    @classmethod
    def empty(cls) -> LoadReport:
        """Create empty report."""
        return cls(tables=MappingProxyType({}), skipped=())


def find_source_map_files(root: Path, suffix: str = DEFAULT_MAP_SUFFIX) -> list[Path]:
    """Recursively list files ending with suffix, sorted by path.

    Unreadable directories are skipped silently.
    """
    found: list[Path] = []

    def _on_error(error: OSError) -> None:
        logger.debug("Skipping unreadable directory: %s", error)

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_on_error):
        found.extend(Path(dirpath) / name for name in filenames if name.endswith(suffix))

    return sorted(found)


def read_source_map(path: Path, suffix: str = DEFAULT_MAP_SUFFIX) -> SourceMapTable:
    """Read and decode one map file.

    The table is named after the document's `file` field, falling back
    to the map file name without suffix (`app.js.map` -> `app.js`).

    Raises:
        UnreadableFileError: File cannot be read.
        MalformedSourceMapError: Document cannot be decoded.
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        raise UnreadableFileError(path, e) from e

    return decode_source_map(content, name=path.name.removesuffix(suffix))


def load_source_maps(root: Path, suffix: str = DEFAULT_MAP_SUFFIX) -> LoadReport:
    """Scan root for source maps and decode every one that is valid.

    Never raises for per-file problems. A missing root yields an
    empty report. When two maps name the same generated file, the
    later path (sorted order) wins.

    Args:
        root: Directory to scan recursively.
        suffix: Map file suffix.

    Returns:
        LoadReport with loaded tables and skipped files.
    """
    tables: dict[str, SourceMapTable] = {}
    skipped: list[Path] = []

    for path in find_source_map_files(root, suffix):
        try:
            table = read_source_map(path, suffix)
        except MalformedSourceMapError as e:
            logger.warning("Failed to load source map %s: %s", path, e.reason)
            skipped.append(path)
            continue
        except UnreadableFileError as e:
            logger.debug("Skipping unreadable source map: %s", e)
            skipped.append(path)
            continue

        tables[table.name] = table

    logger.info("Loaded %d source maps from %s", len(tables), root)
    return LoadReport(tables=MappingProxyType(tables), skipped=tuple(skipped))
