"""Base64 VLQ codec used by the source-map `mappings` field.

Each Base64 digit carries 5 data bits (least-significant group first)
plus a continuation bit (32). The low bit of the assembled value is the
sign, the remaining bits the magnitude.

See: https://sourcemaps.info/spec.html
"""

from __future__ import annotations

from typing import Final

BASE64_ALPHABET: Final = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

VLQ_BASE_SHIFT: Final = 5
VLQ_BASE: Final = 1 << VLQ_BASE_SHIFT
VLQ_BASE_MASK: Final = VLQ_BASE - 1
VLQ_CONTINUATION_BIT: Final = VLQ_BASE

_DIGITS: Final[dict[str, int]] = {char: index for index, char in enumerate(BASE64_ALPHABET)}


def decode_vlq(segment: str) -> list[int]:
    """Decode every complete VLQ value in segment.

    An invalid Base64 character ends decoding; values completed before
    it are kept. A trailing group with the continuation bit still set is
    incomplete and dropped.

    Args:
        segment: One comma-free segment of a `mappings` string.

    Returns:
        Signed integers in segment order.
    """
    values: list[int] = []
    value = 0
    shift = 0

    for char in segment:
        digit = _DIGITS.get(char)
        if digit is None:
            break

        value += (digit & VLQ_BASE_MASK) << shift
        if digit & VLQ_CONTINUATION_BIT:
            shift += VLQ_BASE_SHIFT
            continue

        magnitude = value >> 1
        values.append(-magnitude if value & 1 else magnitude)
        value = 0
        shift = 0

    return values


def encode_vlq(value: int) -> str:
    """Encode one signed integer as Base64 VLQ."""
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1

    chars: list[str] = []
    while True:
        digit = vlq & VLQ_BASE_MASK
        vlq >>= VLQ_BASE_SHIFT
        if vlq:
            digit |= VLQ_CONTINUATION_BIT
        chars.append(BASE64_ALPHABET[digit])
        if not vlq:
            return "".join(chars)


def encode_segment(values: list[int] | tuple[int, ...]) -> str:
    """Encode a segment of signed integers."""
    return "".join(encode_vlq(value) for value in values)
