"""TRON account addresses and their conversions to and from EVM form."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Union

from .base58 import Base58Error, decode_check, encode_check
from .hexutils import from_hex, keccak256

HASH_LENGTH = 32
ADDRESS_LENGTH = 21
ADDRESS_LENGTH_BASE58 = 34
TRON_BYTE_PREFIX = 0x41
EVM_ADDRESS_LENGTH = 20

_HEX40 = re.compile(r"[0-9a-fA-F]{40}")


class AddressError(ValueError):
    """Raised when an address cannot be parsed or converted."""


def _to_evm_bytes(data: bytes) -> bytes:
    """Fit ``data`` to 20 bytes, cropping on the left or zero-padding."""
    tail = bytes(data)[-EVM_ADDRESS_LENGTH:]
    return tail.rjust(EVM_ADDRESS_LENGTH, b"\x00")


def is_hex_address(text: str) -> bool:
    """Tell whether ``text`` is a 20-byte hex address, ``0x`` optional."""
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    return bool(_HEX40.fullmatch(text))


def to_checksum_address(data: bytes) -> str:
    """Return the EIP-55 mixed-case hex form of a 20-byte EVM address."""
    lower = _to_evm_bytes(data).hex()
    digest = keccak256(lower.encode("ascii")).hex()
    mixed = "".join(
        char.upper() if char.isalpha() and int(nibble, 16) > 7 else char
        for char, nibble in zip(lower, digest)
    )
    return "0x" + mixed


class Address(bytes):
    """Raw bytes of a TRON address, normally 21 bytes starting with 0x41."""

    @classmethod
    def from_int(cls, value: int) -> "Address":
        """Build an address from the big-endian bytes of ``abs(value)``."""
        magnitude = abs(value)
        raw = magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")
        if len(raw) > ADDRESS_LENGTH:
            raise AddressError(f"integer too large for an address: {len(raw)} bytes")
        return cls(raw.rjust(ADDRESS_LENGTH, b"\x00"))

    @classmethod
    def from_hex(cls, text: str) -> "Address":
        """Build an address from hex text, ``0x`` optional."""
        try:
            return cls(from_hex(text))
        except ValueError as err:
            raise AddressError(f"invalid hex address {text!r}: {err}") from err

    @classmethod
    def from_base58(cls, text: str) -> "Address":
        """Build an address from its base58check form."""
        try:
            return cls(decode_check(text))
        except Base58Error as err:
            raise AddressError(str(err)) from err

    @classmethod
    def from_base64(cls, text: str) -> "Address":
        """Build an address from standard padded base64."""
        try:
            return cls(base64.b64decode(text, validate=True))
        except binascii.Error as err:
            raise AddressError(f"invalid base64 address {text!r}: {err}") from err

    @classmethod
    def from_evm(cls, evm_address: Union[bytes, str]) -> "Address":
        """Build a TRON address from a 20-byte EVM address (bytes or hex)."""
        if isinstance(evm_address, str):
            try:
                raw = from_hex(evm_address)
            except ValueError as err:
                raise AddressError(f"invalid EVM address {evm_address!r}") from err
        else:
            raw = bytes(evm_address)
        return cls(bytes([TRON_BYTE_PREFIX]) + _to_evm_bytes(raw))

    @classmethod
    def parse(cls, text: str) -> "Address":
        """Parse EVM hex, 41-prefixed TRON hex or base58 text."""
        if is_hex_address(text):
            return cls.from_evm(text)
        if len(text) == ADDRESS_LENGTH * 2 and text[:2] == "41":
            return cls.from_hex(text)
        if len(text) == ADDRESS_LENGTH_BASE58 and text[0] == "T":
            return cls.from_base58(text)
        raise AddressError(f"invalid address format: {text}")

    @classmethod
    def from_public_key(cls, public_key: bytes) -> "Address":
        """Derive an address from an uncompressed secp256k1 public key.

        Accepts 65 bytes starting with 0x04, or the bare 64-byte X||Y form.
        """
        key = bytes(public_key)
        if len(key) == 65 and key[0] == 0x04:
            key = key[1:]
        if len(key) != 64:
            raise AddressError(f"expected an uncompressed public key, got {len(public_key)} bytes")
        return cls(bytes([TRON_BYTE_PREFIX]) + keccak256(key)[-EVM_ADDRESS_LENGTH:])

    @classmethod
    def scan(cls, value: object) -> "Address":
        """Build an address from a database value of exactly 21 bytes."""
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise AddressError(f"can't scan {type(value).__name__} into Address")
        raw = bytes(value)
        if len(raw) != ADDRESS_LENGTH:
            raise AddressError(
                f"can't scan bytes of len {len(raw)} into Address, want {ADDRESS_LENGTH}"
            )
        return cls(raw)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Address":
        """Parse a JSON string holding a base58 or hex address."""
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8")
        if len(text) < 2 or text[0] != '"' or text[-1] != '"':
            raise AddressError("invalid address format")
        inner = text[1:-1]
        if not inner:
            return cls()
        if inner[0] == "T":
            try:
                return cls(decode_check(inner))
            except Base58Error as err:
                raise AddressError(f"invalid base58 address: {err}") from err
        try:
            return cls(from_hex(inner))
        except ValueError as err:
            raise AddressError(f"invalid Tron hex address: {err}") from err

    def to_json(self) -> str:
        """Return the address as a JSON string in base58."""
        return f'"{self}"' if self else '""'

    def hex(self) -> str:  # type: ignore[override]
        """Return the TRON hex form without a ``0x`` prefix."""
        return bytes(self).hex()

    def eth_address_bytes(self) -> bytes:
        """Return the 20-byte EVM address after the prefix byte."""
        if not self:
            raise AddressError("empty address")
        return _to_evm_bytes(bytes(self)[1:])

    def eth_address(self) -> str:
        """Return the EIP-55 checksummed EVM form of the address."""
        return to_checksum_address(self.eth_address_bytes())

    def __str__(self) -> str:
        if not self:
            return ""
        if self[0] == 0:
            return str(int.from_bytes(self, "big"))
        return encode_check(bytes(self))

    def __repr__(self) -> str:
        return f"Address({str(self)!r})"


ZERO_ADDRESS = Address(bytes([TRON_BYTE_PREFIX]) + bytes(ADDRESS_LENGTH - 1))