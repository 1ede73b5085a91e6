"""Base58 and Base58Check encoding for TRON addresses."""

from __future__ import annotations

import hashlib

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: digit for digit, char in enumerate(ALPHABET)}

_ADDRESS_LENGTH = 20
_PREFIX_MAINNET = 0x41
_CHECKSUM_LENGTH = 4


class Base58Error(ValueError):
    """Raised when base58 text cannot be decoded or fails its check."""


def _checksum(data: bytes) -> bytes:
    first = hashlib.sha256(data).digest()
    return hashlib.sha256(first).digest()[:_CHECKSUM_LENGTH]


def encode(data: bytes) -> str:
    """Encode bytes as base58; each leading zero byte becomes ``1``."""
    data = bytes(data)
    stripped = data.lstrip(b"\x00")
    zeros = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(ALPHABET[remainder])
    return "1" * zeros + "".join(reversed(digits))


def decode(text: str) -> bytes:
    """Decode base58 text into bytes."""
    if not text:
        raise Base58Error("zero length string")
    number = 0
    for char in text:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise Base58Error(f"invalid base58 digit {char!r}") from None
    zeros = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\x00" * zeros + body


def encode_check(data: bytes) -> str:
    """Append a double-SHA256 checksum and encode as base58."""
    data = bytes(data)
    return encode(data + _checksum(data))


def decode_check(text: str) -> bytes:
    """Decode a base58check TRON address and verify prefix and checksum."""
    decoded = decode(text)
    if len(decoded) < _CHECKSUM_LENGTH:
        raise Base58Error("b58 check error")
    if len(decoded) != _ADDRESS_LENGTH + _CHECKSUM_LENGTH + 1:
        raise Base58Error(f"invalid address length: {len(decoded)}")
    if decoded[0] != _PREFIX_MAINNET:
        raise Base58Error("invalid prefix")
    payload, checksum = decoded[:-_CHECKSUM_LENGTH], decoded[-_CHECKSUM_LENGTH:]
    if _checksum(payload) != checksum:
        raise Base58Error("b58 check error")
    return payload