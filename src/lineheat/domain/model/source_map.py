"""Decoded source-map tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class MappingEntry:
    """One generated position mapped to an original source position.

    Attributes:
        generated_line: Line in the generated file (1-based)
        generated_column: Column in the generated file (0-based)
        source_line: Line in the original source (1-based)
        source_column: Column in the original source (0-based)
        source_file: Original source file name
    """

    generated_line: int
    generated_column: int
    source_line: int
    source_column: int
    source_file: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.generated_line <= 0:
            raise ValueError(f"generated_line must be > 0, got {self.generated_line}")
        if self.generated_column < 0:
            raise ValueError(f"generated_column must be >= 0, got {self.generated_column}")
        if self.source_line <= 0:
            raise ValueError(f"source_line must be > 0, got {self.source_line}")
        if self.source_column < 0:
            raise ValueError(f"source_column must be >= 0, got {self.source_column}")


@dataclass(frozen=True, slots=True)
class SourceMapTable:
    """All mapping entries of one compiled unit.

    Immutable once built. Reloading builds a new table.

    Attributes:
        name: Generated (compiled) file name this table belongs to
        entries: Entries in document order
    """

    name: str
    entries: tuple[MappingEntry, ...]
    _index: Mapping[tuple[int, int], MappingEntry] = field(
        init=False,
        repr=False,
        compare=False,
    )

    def __post_init__(self) -> None:
        """Validate and build the position index."""
        if not self.name:
            raise ValueError("name must be non-empty string")

        index: dict[tuple[int, int], MappingEntry] = {}
        for entry in self.entries:
            # First entry in document order wins
            index.setdefault((entry.generated_line, entry.generated_column), entry)
        object.__setattr__(self, "_index", MappingProxyType(index))

    def lookup(self, generated_line: int, generated_column: int) -> MappingEntry | None:
        """Find the entry at an exact generated position."""
        return self._index.get((generated_line, generated_column))

    def __len__(self) -> int:
        return len(self.entries)
