"""Helpers for hexadecimal number strings as used by Ethereum nodes."""

from __future__ import annotations

import re

_SIGNED_HEX = re.compile(r"[+-]?[0-9a-fA-F]+")
_UNSIGNED_HEX = re.compile(r"[0-9a-fA-F]+")
_UINT64_MAX = (1 << 64) - 1


def hex_format(s: str) -> str:
    """Strip a ``0x``/``0X`` prefix and left-pad to an even number of digits."""
    if len(s) > 1 and s[:2] in ("0x", "0X"):
        s = s[2:]
    if len(s) % 2 == 1:
        s = "0" + s
    return s


def big_int_from_hex(h: str) -> int | None:
    """Parse a hex string into an integer; ``None`` if it is not valid hex."""
    digits = hex_format(h)
    if not _SIGNED_HEX.fullmatch(digits):
        return None
    return int(digits, 16)


def hex_to_uint64(h: str) -> int:
    """Parse a hex string into an unsigned 64-bit integer.

    Raises ValueError for invalid digits or values that do not fit in 64 bits.
    """
    digits = hex_format(h)
    if not _UNSIGNED_HEX.fullmatch(digits):
        raise ValueError(f"invalid hex number: {h!r}")
    value = int(digits, 16)
    if value > _UINT64_MAX:
        raise ValueError(f"value out of range for uint64: {h!r}")
    return value