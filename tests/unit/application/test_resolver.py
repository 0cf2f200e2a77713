"""Tests for application/resolver.py.

Tests:
- Exact lookups by full name and by basename
- Raw fallback for unmapped positions
- Frame parsing with 1-based columns and file normalization
- Reload swaps the whole table set
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lineheat.application.resolver import LocationResolver
from lineheat.domain.model.location_key import LocationKey
from tests.factories import make_entry, make_source_map, make_table, write_source_map

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def resolver() -> LocationResolver:
    """Resolver with app.js mapping (1,0) -> app.ts:1 and (2,4) -> app.ts:7."""
    table = make_table(
        make_entry(generated_line=1, generated_column=0, source_line=1),
        make_entry(generated_line=2, generated_column=4, source_line=7),
    )
    return LocationResolver([table])


class TestResolve:
    """Tests for resolve with explicit positions."""

    def test_mapped(self, resolver: LocationResolver) -> None:
        """Mapped positions resolve to the original source line."""
        assert resolver.resolve("app.js", 1, 0) == LocationKey("app.ts", 1)
        assert resolver.resolve("app.js", 2, 4) == LocationKey("app.ts", 7)

    def test_mapped_by_basename(self, resolver: LocationResolver) -> None:
        """A full path finds the table by its last component."""
        assert resolver.resolve("/dist/app.js", 1, 0) == LocationKey("app.ts", 1)

    def test_basename_and_full_name_agree_on_precedence(self) -> None:
        """Tables sharing a basename: the last one wins for both lookups."""
        first = make_table(make_entry(source_line=1), name="a/app.js")
        second = make_table(make_entry(source_line=2), name="b/app.js")
        resolver = LocationResolver([first, second])

        assert resolver.resolve("b/app.js", 1, 0) == LocationKey("app.ts", 2)
        assert resolver.resolve("/srv/app.js", 1, 0) == LocationKey("app.ts", 2)

    def test_unmapped_column_falls_back(self, resolver: LocationResolver) -> None:
        """Exact match only: other columns keep the raw location."""
        assert resolver.resolve("app.js", 2, 5) == LocationKey("app.js", 2)

    def test_unknown_file_falls_back(self, resolver: LocationResolver) -> None:
        """Files without a table keep the raw location."""
        assert resolver.resolve("other.js", 3, 0) == LocationKey("other.js", 3)

    def test_no_tables(self) -> None:
        """Empty resolver is the identity on (file, line)."""
        assert LocationResolver().resolve("app.js", 1, 0) == LocationKey("app.js", 1)

    def test_lookup_miss_is_none(self, resolver: LocationResolver) -> None:
        """lookup() does not fall back."""
        assert resolver.lookup("app.js", 9, 0) is None

    def test_invalid_line_raises(self, resolver: LocationResolver) -> None:
        """Raw fallback still enforces line > 0."""
        with pytest.raises(ValueError):
            resolver.resolve("other.js", 0, 0)


class TestResolveFrame:
    """Tests for stack-frame resolution."""

    def test_v8_frame_mapped(self, resolver: LocationResolver) -> None:
        """Column 1 in a frame is table column 0."""
        key = resolver.resolve_frame("    at handler (/srv/dist/app.js:1:1)")
        assert key == LocationKey("app.ts", 1)

    def test_v8_column_is_one_based(self, resolver: LocationResolver) -> None:
        """Column 5 in a frame is table column 4."""
        assert resolver.resolve_frame("at f (/srv/app.js:2:5)") == LocationKey("app.ts", 7)

    def test_unmapped_frame_uses_basename(self, resolver: LocationResolver) -> None:
        """Unmapped frames key on the file's last component."""
        assert resolver.resolve_frame("at foo (/a/b/c.js:10:5)") == LocationKey("c.js", 10)

    def test_python_frame(self, resolver: LocationResolver) -> None:
        """CPython frames resolve without a column."""
        key = resolver.resolve_frame('  File "/x/y/mod.py", line 12, in run')
        assert key == LocationKey("mod.py", 12)

    def test_mapped_source_normalized_to_basename(self) -> None:
        """Mapped source paths are reduced to their last component."""
        table = make_table(make_entry(source_file="src/lib/app.ts", source_line=4))
        resolver = LocationResolver([table])
        assert resolver.resolve_frame("at f (/dist/app.js:1:1)") == LocationKey("app.ts", 4)

    def test_non_frames_are_none(self, resolver: LocationResolver) -> None:
        """Messages and position-less frames resolve to None."""
        assert resolver.resolve_frame("Error: boom") is None
        assert resolver.resolve_frame("at new Promise (<anonymous>)") is None

    def test_line_zero_is_none(self, resolver: LocationResolver) -> None:
        """Line 0 carries no source position."""
        assert resolver.resolve_frame("at f (/srv/app.js:0:1)") is None

    def test_resolve_stack(self, resolver: LocationResolver) -> None:
        """Every frame resolves in order, non-frames skipped."""
        text = "\n".join(
            [
                "Error: boom",
                "    at handler (/srv/dist/app.js:1:1)",
                "    at new Promise (<anonymous>)",
                "    at main (/srv/dist/main.js:3:9)",
            ]
        )
        assert resolver.resolve_stack(text) == [
            LocationKey("app.ts", 1),
            LocationKey("main.js", 3),
        ]


class TestReload:
    """Tests for reload and replace_tables."""

    def test_reload_from_directory(self, tmp_path: Path) -> None:
        """Maps on disk become tables."""
        write_source_map(tmp_path, "app.js.map", make_source_map(mappings="AACA"))
        resolver = LocationResolver()

        report = resolver.reload(tmp_path)

        assert report.loaded_count == 1
        assert set(resolver.tables) == {"app.js"}
        assert resolver.resolve("app.js", 1, 0) == LocationKey("app.ts", 2)

    def test_reload_replaces_previous_tables(
        self, resolver: LocationResolver, tmp_path: Path
    ) -> None:
        """Reload from an empty directory drops the old tables."""
        resolver.reload(tmp_path)
        assert resolver.tables == {}
        assert resolver.resolve("app.js", 1, 0) == LocationKey("app.js", 1)

    def test_replace_tables(self, resolver: LocationResolver) -> None:
        """replace_tables swaps the whole set."""
        resolver.replace_tables([make_table(make_entry(source_line=9), name="bundle.js")])
        assert set(resolver.tables) == {"bundle.js"}
        assert resolver.resolve("bundle.js", 1, 0) == LocationKey("app.ts", 9)
