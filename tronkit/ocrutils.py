"""Helpers for building and inspecting OCR2 reports, signatures and call parameters."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any, Iterable

from .address import Address
from .hexutils import keccak256

CL_NODE_NAME = "primary"
SUN_PER_TRX = 1_000_000

_WORD = 32
_SIGNATURE_LENGTH = 65


def _check_bytes32(name: str, data: bytes) -> bytes:
    data = bytes(data)
    if len(data) != _WORD:
        raise ValueError(f"{name} must be {_WORD} bytes, got {len(data)}")
    return data


def to_hex_string(data: bytes) -> str:
    """Return ``data`` as lower-case hex prefixed with ``0x``."""
    return "0x" + bytes(data).hex()


def get_rsv_from_signature(signature: bytes) -> tuple[str, str, int]:
    """Split a 65-byte signature into hex ``r``, hex ``s`` and the ``v`` byte."""
    signature = bytes(signature)
    if len(signature) != _SIGNATURE_LENGTH:
        raise ValueError("invalid signature length, expected 65 bytes")
    return to_hex_string(signature[:32]), to_hex_string(signature[32:64]), signature[64]


def bytes32_to_hex(data: bytes) -> str:
    """Return a 32-byte value as ``0x``-prefixed hex."""
    return to_hex_string(_check_bytes32("value", data))


def bytes32_list_to_hex(items: Iterable[bytes]) -> list[str]:
    """Apply :func:`bytes32_to_hex` to every item."""
    return [bytes32_to_hex(item) for item in items]


def pad_to_bytes32(data: bytes) -> bytes:
    """Trim ``data`` to 32 bytes or zero-pad it on the right."""
    return bytes(data)[:_WORD].ljust(_WORD, b"\x00")


@dataclass(frozen=True)
class ReportContext:
    """The config digest, epoch, round and extra hash a report is signed under."""

    config_digest: bytes = bytes(_WORD)
    epoch: int = 0
    round: int = 0
    extra_hash: bytes = bytes(_WORD)

    def __post_init__(self) -> None:
        _check_bytes32("config digest", self.config_digest)
        _check_bytes32("extra hash", self.extra_hash)
        if not 0 <= self.epoch < 1 << 32:
            raise ValueError(f"epoch out of 32-bit range: {self.epoch}")
        if not 0 <= self.round < 1 << 8:
            raise ValueError(f"round out of 8-bit range: {self.round}")


def raw_report_context(context: ReportContext) -> tuple[bytes, bytes, bytes]:
    """Lay a report context out as the three 32-byte words sent on chain.

    The second word holds the epoch big-endian in bytes 27 to 30 and the
    round in byte 31.
    """
    epoch_and_round = bytes(27) + context.epoch.to_bytes(4, "big") + bytes([context.round])
    return bytes(context.config_digest), epoch_and_round, bytes(context.extra_hash)


def raw_report_context_to_hex(raw: Iterable[bytes]) -> tuple[str, ...]:
    """Return each word of a raw report context as ``0x``-prefixed hex."""
    return tuple(to_hex_string(word) for word in raw)


def split_signature(signature: bytes) -> tuple[bytes, bytes, int]:
    """Split a 65-byte signature into 32-byte ``r`` and ``s`` and the ``v`` byte."""
    signature = bytes(signature)
    if len(signature) != _SIGNATURE_LENGTH:
        raise ValueError("SplitSignature: wrong size")
    return signature[:32], signature[32:64], signature[64]


def function_signature_hash(signature: str) -> str:
    """Return the Keccak-256 hash of a function signature as ``0x`` hex."""
    return to_hex_string(keccak256(signature.encode("utf-8")))


def to_eth_address(tron_address: str) -> bytes:
    """Return the 20 raw bytes of the EVM address behind a TRON address in any text form."""
    return Address.parse(tron_address).eth_address_bytes()


def _json_default(value: Any) -> Any:
    if isinstance(value, Address):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def marshal_params(*args: Any) -> str:
    """Encode alternating type names and values as a JSON array of ``{type: value}`` objects."""
    if len(args) % 2 == 1:
        raise ValueError("odd number of params")
    encoded = []
    for param_type, value in zip(args[::2], args[1::2]):
        if not isinstance(param_type, str):
            raise TypeError("non-string param type")
        encoded.append({param_type: value})
    return json.dumps(encoded, separators=(",", ":"), default=_json_default)