"""Source-map support: Base64 VLQ codec, decoder and directory loader."""

from lineheat.infrastructure.sourcemaps.decoder import decode_mappings, decode_source_map
from lineheat.infrastructure.sourcemaps.loader import (
    LoadReport,
    find_source_map_files,
    load_source_maps,
    read_source_map,
)
from lineheat.infrastructure.sourcemaps.vlq import decode_vlq, encode_segment, encode_vlq

__all__ = [
    "LoadReport",
    "decode_mappings",
    "decode_source_map",
    "decode_vlq",
    "encode_segment",
    "encode_vlq",
    "find_source_map_files",
    "load_source_maps",
    "read_source_map",
]
