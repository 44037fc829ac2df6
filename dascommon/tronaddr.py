"""Base58Check conversion of TRON addresses."""

from __future__ import annotations

import hashlib

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(_ALPHABET)}
_CHECKSUM_LEN = 4


class AddressError(ValueError):
    """Raised when an address cannot be encoded or decoded."""


def _checksum(payload: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:_CHECKSUM_LEN]


def _b58encode(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_ALPHABET[rem])
    leading = len(data) - len(data.lstrip(b"\0"))
    return "1" * leading + "".join(reversed(digits))


def _b58decode(text: str) -> bytes:
    number = 0
    for char in text:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise AddressError(f"invalid base58 character {char!r}") from None
    leading = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * leading + body


def encode58_check(hex_address: str) -> str:
    """Encode a hex payload as Base58 with a double-SHA256 checksum."""
    try:
        payload = bytes.fromhex(hex_address)
    except ValueError as exc:
        raise AddressError(f"invalid hex address: {exc}") from exc
    return _b58encode(payload + _checksum(payload))


def decode58_check(address: str) -> str:
    """Decode a Base58Check string and return its payload as lower-case hex."""
    raw = _b58decode(address)
    if len(raw) < _CHECKSUM_LEN:
        raise AddressError("base58 check error: too short")
    payload, check = raw[:-_CHECKSUM_LEN], raw[-_CHECKSUM_LEN:]
    if _checksum(payload) != check:
        raise AddressError("base58 check error: checksum mismatch")
    return payload.hex()


def pubkey_hex_to_base58(address: str) -> str:
    """Turn a hex TRON address (``41...``) into its Base58 form."""
    try:
        return encode58_check(address)
    except AddressError as exc:
        raise AddressError(f"encode 58check:{exc}") from exc


def pubkey_hex_from_base58(address: str) -> str:
    """Turn a Base58 TRON address into its hex form."""
    try:
        return decode58_check(address)
    except AddressError as exc:
        raise AddressError(f"decode base58:{exc}") from exc