"""Location resolver: raw generated positions -> canonical LocationKey.

Best-effort, never fails: a position without a mapping resolves to the
raw (file, line). Tables are replaced wholesale on reload, never mutated,
so lookups need no lock.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from lineheat.domain.model.configuration import DEFAULT_MAP_SUFFIX
from lineheat.domain.model.location_key import LocationKey
from lineheat.infrastructure.frames import basename, parse_frame, parse_stack
from lineheat.infrastructure.sourcemaps.loader import LoadReport, load_source_maps

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from lineheat.domain.model.source_map import SourceMapTable
    from lineheat.infrastructure.frames import StackFrame


class _TableIndex:
    """Immutable lookup of tables by full name and by last path component.

    Both indexes keep the last table given for a name.
    """

    __slots__ = ("by_basename", "by_name")

    def __init__(self, tables: Iterable[SourceMapTable]) -> None:
        by_name: dict[str, SourceMapTable] = {}
        by_basename: dict[str, SourceMapTable] = {}
        for table in tables:
            by_name[table.name] = table
            by_basename[basename(table.name)] = table
        self.by_name: Mapping[str, SourceMapTable] = MappingProxyType(by_name)
        self.by_basename: Mapping[str, SourceMapTable] = MappingProxyType(by_basename)

    def find(self, generated_file: str) -> SourceMapTable | None:
        table = self.by_name.get(generated_file)
        if table is None:
            table = self.by_basename.get(basename(generated_file))
        return table


class LocationResolver:
    """Maps generated positions back to original sources.

    Thread-safe: readers see either the old or the new table set,
    swapped by a single attribute assignment.

    Lifecycle:
        resolver = LocationResolver()
        resolver.reload(Path("dist"))
        key = resolver.resolve("app.js", 12, 4)
    """

    __slots__ = ("_index",)

    def __init__(self, tables: Iterable[SourceMapTable] = ()) -> None:
        """Initialize with preloaded tables (default: none)."""
        self._index = _TableIndex(tables)

    @property
    def tables(self) -> Mapping[str, SourceMapTable]:
        """Loaded tables by generated file name."""
        return self._index.by_name

    def replace_tables(self, tables: Iterable[SourceMapTable]) -> None:
        """Swap in a new table set."""
        self._index = _TableIndex(tables)

    def reload(self, root: Path, suffix: str = DEFAULT_MAP_SUFFIX) -> LoadReport:
        """Rescan root and swap in the tables that loaded.

        Disk I/O happens before the swap and holds no lock.
        """
        report = load_source_maps(root, suffix)
        self.replace_tables(report.tables.values())
        return report

    def lookup(self, generated_file: str, line: int, column: int) -> LocationKey | None:
        """Mapped source location, or None when no entry matches exactly."""
        table = self._index.find(generated_file)
        if table is None:
            return None
        entry = table.lookup(line, column)
        if entry is None:
            return None
        return LocationKey(file=entry.source_file, line=entry.source_line)

    def resolve(self, generated_file: str, line: int, column: int) -> LocationKey:
        """Resolve an explicit generated position.

        Args:
            generated_file: Compiled file name.
            line: Generated line (1-based).
            column: Generated column (0-based).

        Returns:
            Mapped key, or (generated_file, line) unchanged when unmapped.

        Raises:
            ValueError: If line < 1.
        """
        mapped = self.lookup(generated_file, line, column)
        if mapped is not None:
            return mapped
        return LocationKey(file=generated_file, line=line)

    def resolve_frame(self, text: str) -> LocationKey | None:
        """Resolve one stack-trace line. None if it is not a frame."""
        frame = parse_frame(text)
        if frame is None:
            return None
        return self.resolve_parsed(frame)

    def resolve_parsed(self, frame: StackFrame) -> LocationKey | None:
        """Resolve a parsed frame; file is normalized to its last component.

        Frame columns are 1-based, table columns 0-based. Frames with
        line 0 carry no source position and resolve to None.
        """
        if frame.line < 1:
            return None

        mapped: LocationKey | None = None
        if frame.column is not None and frame.column >= 1:
            mapped = self.lookup(frame.file, frame.line, frame.column - 1)

        if mapped is not None:
            return LocationKey(file=basename(mapped.file), line=mapped.line)
        return LocationKey(file=frame.short_file, line=frame.line)

    def resolve_stack(self, text: str) -> list[LocationKey]:
        """Resolve every frame of a stack trace in order, skipping non-frames."""
        keys: list[LocationKey] = []
        for frame in parse_stack(text):
            key = self.resolve_parsed(frame)
            if key is not None:
                keys.append(key)
        return keys
