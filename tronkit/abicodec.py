"""Parsing of Solidity type names and ABI encoding and decoding of values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Union

from .address import is_hex_address
from .hexutils import from_hex

WORD = 32
_EVM_ADDRESS_LENGTH = 20

_TYPE_RE = re.compile(r"([a-z]+)(\d*)((?:\[\d*\])*)")
_SUFFIX_RE = re.compile(r"\[(\d*)\]")


class AbiError(ValueError):
    """Raised when a type cannot be parsed or a value cannot be encoded or decoded."""


@dataclass(frozen=True)
class AbiType:
    """A Solidity ABI type.

    ``kind`` is one of ``uint``, ``int``, ``address``, ``bool``, ``string``,
    ``bytes``, ``fixed_bytes``, ``slice`` or ``array``. ``size`` holds the bit
    width of integers, the length of fixed bytes or the length of an array.
    ``elem`` is the element type of slices and arrays.
    """

    kind: str
    size: int = 0
    elem: AbiType | None = None

    def is_dynamic(self) -> bool:
        """Tell whether values of this type are encoded out of line."""
        if self.kind in ("string", "bytes", "slice"):
            return True
        if self.kind == "array":
            return self.elem.is_dynamic()
        return False

    def __str__(self) -> str:
        if self.kind in ("uint", "int"):
            return f"{self.kind}{self.size}"
        if self.kind == "fixed_bytes":
            return f"bytes{self.size}"
        if self.kind == "slice":
            return f"{self.elem}[]"
        if self.kind == "array":
            return f"{self.elem}[{self.size}]"
        return self.kind


def _elementary(base: str, digits: str, text: str) -> AbiType:
    if base in ("uint", "int"):
        bits = int(digits) if digits else 256
        if bits == 0 or bits > 256 or bits % 8:
            raise AbiError(f"invalid integer width in type {text!r}")
        return AbiType(base, bits)
    if base == "bytes":
        if not digits:
            return AbiType("bytes")
        length = int(digits)
        if not 1 <= length <= WORD:
            raise AbiError(f"invalid fixed bytes length in type {text!r}")
        return AbiType("fixed_bytes", length)
    if base in ("address", "bool", "string"):
        if digits:
            raise AbiError(f"invalid type {text!r}")
        return AbiType(base)
    raise AbiError(f"unsupported type {text!r}")


def parse_type(text: str) -> AbiType:
    """Parse a Solidity type name such as ``uint256``, ``bytes32`` or ``address[2][]``."""
    match = _TYPE_RE.fullmatch(text)
    if not match:
        raise AbiError(f"invalid type {text!r}")
    base, digits, suffixes = match.groups()
    ty = _elementary(base, digits, text)
    for dim in _SUFFIX_RE.findall(suffixes):
        ty = AbiType("slice", elem=ty) if dim == "" else AbiType("array", int(dim), ty)
    return ty


def _as_type(ty: Union[AbiType, str]) -> AbiType:
    if isinstance(ty, AbiType):
        return ty
    if isinstance(ty, str):
        return parse_type(ty)
    raise AbiError(f"not a type: {ty!r}")


def _head_size(ty: AbiType) -> int:
    if ty.kind == "array" and not ty.elem.is_dynamic():
        return ty.size * _head_size(ty.elem)
    return WORD


def _word(number: int) -> bytes:
    return number.to_bytes(WORD, "big")


def _as_bytes(ty: AbiType, value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise AbiError(f"cannot use {type(value).__name__} as {ty}")
    return bytes(value)


def _as_sequence(ty: AbiType, value: Any) -> list:
    if not isinstance(value, (list, tuple)):
        raise AbiError(f"cannot use {type(value).__name__} as {ty}")
    return list(value)


def _encode_integer(ty: AbiType, value: Any) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AbiError(f"cannot use {type(value).__name__} as {ty}")
    if ty.kind == "uint":
        low, high = 0, (1 << ty.size) - 1
    else:
        low, high = -(1 << (ty.size - 1)), (1 << (ty.size - 1)) - 1
    if not low <= value <= high:
        raise AbiError(f"value {value} out of range for {ty}")
    return _word(value % (1 << (8 * WORD)))


def _encode_address(value: Any) -> bytes:
    if isinstance(value, str):
        if not is_hex_address(value):
            raise AbiError(f"invalid address {value!r}")
        value = from_hex(value)
    data = _as_bytes(AbiType("address"), value)
    if len(data) != _EVM_ADDRESS_LENGTH:
        raise AbiError(f"address must be {_EVM_ADDRESS_LENGTH} bytes, got {len(data)}")
    return data.rjust(WORD, b"\x00")


def _encode_dynamic_bytes(data: bytes) -> bytes:
    return _word(len(data)) + data + bytes(-len(data) % WORD)


def _encode_value(ty: AbiType, value: Any) -> bytes:
    kind = ty.kind
    if kind in ("uint", "int"):
        return _encode_integer(ty, value)
    if kind == "bool":
        if not isinstance(value, bool):
            raise AbiError(f"cannot use {type(value).__name__} as bool")
        return _word(int(value))
    if kind == "address":
        return _encode_address(value)
    if kind == "fixed_bytes":
        data = _as_bytes(ty, value)
        if len(data) != ty.size:
            raise AbiError(f"expected {ty.size} bytes for {ty}, got {len(data)}")
        return data.ljust(WORD, b"\x00")
    if kind == "string":
        if not isinstance(value, str):
            raise AbiError(f"cannot use {type(value).__name__} as string")
        return _encode_dynamic_bytes(value.encode("utf-8"))
    if kind == "bytes":
        return _encode_dynamic_bytes(_as_bytes(ty, value))
    items = _as_sequence(ty, value)
    elements = [ty.elem] * len(items)
    if kind == "array":
        if len(items) != ty.size:
            raise AbiError(f"expected {ty.size} elements for {ty}, got {len(items)}")
        return _encode_tuple(elements, items)
    return _word(len(items)) + _encode_tuple(elements, items)


def _encode_tuple(types: Sequence[AbiType], values: Sequence[Any]) -> bytes:
    heads: list[bytes] = []
    tails: list[bytes] = []
    offset = sum(_head_size(ty) for ty in types)
    for ty, value in zip(types, values):
        if ty.is_dynamic():
            encoded = _encode_value(ty, value)
            heads.append(_word(offset))
            tails.append(encoded)
            offset += len(encoded)
        else:
            heads.append(_encode_value(ty, value))
    return b"".join(heads + tails)


def encode(types: Iterable[Union[AbiType, str]], values: Iterable[Any]) -> bytes:
    """ABI-encode ``values`` as a tuple of the given ``types``."""
    parsed = [_as_type(ty) for ty in types]
    values = list(values)
    if len(values) != len(parsed):
        raise AbiError(f"argument count mismatch: got {len(values)} for {len(parsed)}")
    return _encode_tuple(parsed, values)


def _read_word(data: bytes, pos: int) -> bytes:
    if pos < 0 or pos + WORD > len(data):
        raise AbiError("cannot decode: data too short")
    return data[pos:pos + WORD]


def _read_length(data: bytes, pos: int) -> int:
    number = int.from_bytes(_read_word(data, pos), "big")
    if number > len(data):
        raise AbiError(f"cannot decode: length or offset {number} out of bounds")
    return number


def _decode_value(ty: AbiType, data: bytes, pos: int) -> Any:
    kind = ty.kind
    if kind == "uint":
        number = int.from_bytes(_read_word(data, pos), "big")
        if number.bit_length() > ty.size:
            raise AbiError(f"value out of range for {ty}")
        return number
    if kind == "int":
        number = int.from_bytes(_read_word(data, pos), "big", signed=True)
        if not -(1 << (ty.size - 1)) <= number < (1 << (ty.size - 1)):
            raise AbiError(f"value out of range for {ty}")
        return number
    if kind == "bool":
        number = int.from_bytes(_read_word(data, pos), "big")
        if number not in (0, 1):
            raise AbiError("improperly encoded boolean value")
        return bool(number)
    if kind == "address":
        return _read_word(data, pos)[WORD - _EVM_ADDRESS_LENGTH:]
    if kind == "fixed_bytes":
        return _read_word(data, pos)[:ty.size]
    if kind in ("string", "bytes"):
        length = _read_length(data, pos)
        start = pos + WORD
        if start + length > len(data):
            raise AbiError("cannot decode: data too short")
        raw = data[start:start + length]
        return raw.decode("utf-8", errors="replace") if kind == "string" else raw
    if kind == "array":
        return _decode_tuple([ty.elem] * ty.size, data, pos)
    count = _read_length(data, pos)
    start = pos + WORD
    if count * _head_size(ty.elem) > len(data) - start:
        raise AbiError("cannot decode: data too short")
    return _decode_tuple([ty.elem] * count, data, start)


def _decode_tuple(types: Sequence[AbiType], data: bytes, start: int) -> list:
    values = []
    pos = start
    for ty in types:
        if ty.is_dynamic():
            values.append(_decode_value(ty, data, start + _read_length(data, pos)))
        else:
            values.append(_decode_value(ty, data, pos))
        pos += _head_size(ty)
    return values


def decode(types: Iterable[Union[AbiType, str]], data: bytes) -> list:
    """Decode ABI-encoded ``data`` as a tuple of the given ``types``."""
    parsed = [_as_type(ty) for ty in types]
    return _decode_tuple(parsed, bytes(data), 0)