"""Source-map v3 decoder: document -> SourceMapTable.

Stateless, FAIL-FIRST on malformed documents. Decoding order matters:
every segment field is a delta added to running state left to right.
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from lineheat.domain.exceptions import MalformedSourceMapError
from lineheat.domain.model.source_map import MappingEntry, SourceMapTable
from lineheat.infrastructure.sourcemaps.vlq import decode_vlq

# Segment field positions
_GENERATED_COLUMN = 0
_SOURCE_INDEX = 1
_SOURCE_LINE = 2
_SOURCE_COLUMN = 3


def decode_source_map(
    document: str | bytes | Mapping[str, object],
    *,
    name: str | None = None,
) -> SourceMapTable:
    """Decode a source-map document into a table.

    Args:
        document: JSON text or already-parsed mapping.
        name: Table name used when the document has no `file` field.

    Returns:
        Table with entries in document order.

    Raises:
        MalformedSourceMapError: Invalid JSON, not an object, missing
            `mappings` string, missing `sources` list, a referenced
            source entry that is not a string, or no usable name.
    """
    label = name or ""
    raw = _parse(document, label)

    mappings = raw.get("mappings")
    if not isinstance(mappings, str):
        raise MalformedSourceMapError("'mappings' must be a string", name=label)

    sources = raw.get("sources")
    if not isinstance(sources, list):
        raise MalformedSourceMapError("'sources' must be a list", name=label)

    file_field = raw.get("file")
    table_name = file_field if isinstance(file_field, str) and file_field else name
    if not table_name:
        raise MalformedSourceMapError("no 'file' field and no name given", name=label)

    source_root = raw.get("sourceRoot")
    root = source_root if isinstance(source_root, str) else ""

    entries = decode_mappings(mappings, sources, source_root=root, name=table_name)
    return SourceMapTable(name=table_name, entries=entries)


def decode_mappings(
    mappings: str,
    sources: list[object],
    *,
    source_root: str = "",
    name: str = "",
) -> tuple[MappingEntry, ...]:
    """Decode a `mappings` string against its `sources` list.

    Generated lines are 1-based, generated columns reset to 0 on every
    line. Source index, line and column are running totals across the
    whole document. A 1-field segment reuses the running source
    position. Segments whose source index is outside `sources` are
    dropped, as are segments whose running totals went negative.

    Raises:
        MalformedSourceMapError: A referenced in-range source is not a string.
    """
    entries: list[MappingEntry] = []

    source_index = 0
    source_line = 0
    source_column = 0

    for generated_line, line in enumerate(mappings.split(";"), start=1):
        generated_column = 0

        for segment in line.split(","):
            if not segment:
                continue

            fields = decode_vlq(segment)
            if not fields:
                continue

            generated_column += fields[_GENERATED_COLUMN]
            if len(fields) > _SOURCE_INDEX:
                source_index += fields[_SOURCE_INDEX]
            if len(fields) > _SOURCE_LINE:
                source_line += fields[_SOURCE_LINE]
            if len(fields) > _SOURCE_COLUMN:
                source_column += fields[_SOURCE_COLUMN]

            if not 0 <= source_index < len(sources):
                continue
            if generated_column < 0 or source_line < 0 or source_column < 0:
                continue

            entries.append(
                MappingEntry(
                    generated_line=generated_line,
                    generated_column=generated_column,
                    source_line=source_line + 1,
                    source_column=source_column,
                    source_file=_source_name(sources, source_index, source_root, name),
                )
            )

    return tuple(entries)


def _source_name(sources: list[object], index: int, source_root: str, name: str) -> str:
    """Resolve sources[index], prefixed with sourceRoot when set."""
    source = sources[index]
    if not isinstance(source, str):
        raise MalformedSourceMapError(f"sources[{index}] must be a string", name=name)
    if source_root:
        return f"{source_root.rstrip('/')}/{source}"
    return source


def _parse(document: str | bytes | Mapping[str, object], name: str) -> Mapping[str, object]:
    """Parse JSON text, or accept an already-parsed mapping."""
    if isinstance(document, Mapping):
        return document

    try:
        raw = json.loads(document)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise MalformedSourceMapError(f"invalid JSON: {e}", name=name) from e

    if not isinstance(raw, dict):
        raise MalformedSourceMapError(
            f"document must be a JSON object, got {type(raw).__name__}",
            name=name,
        )
    return raw
