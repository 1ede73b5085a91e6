"""Hex encoding helpers, byte padding and the 32-byte Keccak hash type."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from Crypto.Hash import keccak

HASH_LENGTH = 32

_HEX_PAIRS = re.compile(r"(?:[0-9a-fA-F]{2})*")


def bytes_to_hex_string(data: bytes) -> str:
    """Encode bytes as a lower-case hex string prefixed with ``0x``."""
    return "0x" + bytes(data).hex()


def hex_string_to_bytes(text: str) -> bytes:
    """Decode a hex string, dropping every ``0x`` it contains."""
    if not text:
        raise ValueError("empty hex string")
    return hex_to_bytes(text.replace("0x", ""))


def to_hex(data: bytes) -> str:
    """Return ``0x``-prefixed hex of ``data``; empty input gives ``0x0``."""
    return "0x" + (bytes_to_hex(data) or "0")


def to_hex_array(items: Iterable[bytes]) -> list[str]:
    """Apply :func:`to_hex` to every item."""
    return [to_hex(item) for item in items]


def from_hex(text: str) -> bytes:
    """Decode hex text that may carry a ``0x`` prefix and an odd length."""
    if has_0x_prefix(text):
        text = text[2:]
    if len(text) % 2 == 1:
        text = "0" + text
    return hex_to_bytes(text)


def has_0x_prefix(text: str) -> bool:
    """Tell whether ``text`` starts with ``0x`` or ``0X``."""
    return text[:2] in ("0x", "0X")


def bytes_to_hex(data: bytes) -> str:
    """Return the plain lower-case hex encoding of ``data``."""
    return bytes(data).hex()


def hex_to_bytes(text: str) -> bytes:
    """Strictly decode a plain hex string of even length."""
    if len(text) % 2 == 1:
        raise ValueError(f"odd length hex string: {text!r}")
    if not _HEX_PAIRS.fullmatch(text):
        raise ValueError(f"invalid hex string: {text!r}")
    return bytes.fromhex(text)


def hex_to_bytes_fixed(text: str, length: int) -> bytes:
    """Decode as much valid hex as leads ``text`` and fit it to ``length`` bytes.

    Longer results keep their rightmost bytes; shorter ones are left-padded
    with zeroes.
    """
    match = _HEX_PAIRS.match(text)
    decoded = bytes.fromhex(match.group() if match else "")
    if len(decoded) >= length:
        return decoded[len(decoded) - length:]
    return decoded.rjust(length, b"\x00")


def right_pad_bytes(data: bytes, length: int) -> bytes:
    """Zero-pad ``data`` on the right up to ``length`` bytes."""
    data = bytes(data)
    return data if length <= len(data) else data.ljust(length, b"\x00")


def left_pad_bytes(data: bytes, length: int) -> bytes:
    """Zero-pad ``data`` on the left up to ``length`` bytes."""
    data = bytes(data)
    return data if length <= len(data) else data.rjust(length, b"\x00")


def trim_left_zeroes(data: bytes) -> bytes:
    """Drop leading zero bytes."""
    return bytes(data).lstrip(b"\x00")


def keccak256(data: bytes) -> bytes:
    """Return the legacy Keccak-256 digest of ``data``."""
    hasher = keccak.new(digest_bits=256)
    hasher.update(bytes(data))
    return hasher.digest()


@dataclass(frozen=True)
class Hash:
    """A 32-byte hash value."""

    value: bytes = bytes(HASH_LENGTH)

    def __post_init__(self) -> None:
        if len(self.value) != HASH_LENGTH:
            raise ValueError(f"hash must be {HASH_LENGTH} bytes, got {len(self.value)}")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Hash":
        """Build a hash from ``data``, cropping on the left or zero-padding."""
        tail = bytes(data)[-HASH_LENGTH:]
        return cls(tail.rjust(HASH_LENGTH, b"\x00"))

    @classmethod
    def from_int(cls, value: int) -> "Hash":
        """Build a hash from the big-endian bytes of ``abs(value)``."""
        magnitude = abs(value)
        return cls.from_bytes(magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big"))

    @classmethod
    def from_hex(cls, text: str) -> "Hash":
        """Build a hash from hex text."""
        return cls.from_bytes(hex_string_to_bytes(text))

    def to_int(self) -> int:
        """Return the hash as an unsigned big-endian integer."""
        return int.from_bytes(self.value, "big")

    def hex(self) -> str:
        """Return the ``0x``-prefixed hex form."""
        return bytes_to_hex_string(self.value)

    def terminal_string(self) -> str:
        """Return a short form showing the first and last three bytes."""
        return f"{self.value[:3].hex()}…{self.value[29:].hex()}"

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.hex()