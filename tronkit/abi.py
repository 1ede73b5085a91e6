"""Packing of contract call parameters given as alternating type names and values."""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any, Optional, Sequence

from .abicodec import AbiError, AbiType, encode, parse_type
from .address import Address, AddressError
from .hexutils import hex_to_bytes, keccak256

Param = dict

_SELECTOR_LENGTH = 4
_EVM_ADDRESS_LENGTH = 20
_UNSIGNED_DEC = re.compile(r"[0-9]+")
_SIGNED_DEC = re.compile(r"[+-]?[0-9]+")
_SIGNED_HEX = re.compile(r"[+-]?[0-9a-fA-F]+")


def load_from_json(text: str) -> list[Param]:
    """Parse a JSON array of ``{type: value}`` objects; empty text gives no params."""
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise AbiError(f"invalid params JSON: {err}") from err
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise AbiError("params JSON must be an array of objects")
    return data


def selector(signature: str) -> bytes:
    """Return the 4-byte selector of a function signature such as ``transfer(address,uint256)``."""
    return keccak256(signature.encode("utf-8"))[:_SELECTOR_LENGTH]


def _parse_big(text: str) -> int:
    if text.startswith("0x"):
        body = text[2:]
        if _SIGNED_HEX.fullmatch(body):
            return int(body, 16)
    elif _SIGNED_DEC.fullmatch(text):
        return int(text, 10)
    raise AbiError(f"invalid integer {text!r}")


def _convert_to_int(ty: AbiType, text: str) -> int:
    if ty.size <= 64:
        pattern = _UNSIGNED_DEC if ty.kind == "uint" else _SIGNED_DEC
        if not pattern.fullmatch(text):
            raise AbiError(f"invalid integer {text!r} for {ty}")
        return int(text, 10)
    return _parse_big(text)


def _convert_to_address(value: Any) -> bytes:
    if isinstance(value, str):
        try:
            parsed = Address.parse(value)
        except AddressError as err:
            raise AbiError(f"invalid address {value}: {err}") from err
        return bytes(parsed)[-_EVM_ADDRESS_LENGTH:]
    if isinstance(value, Address):
        return value.eth_address_bytes()
    raise AbiError(f"invalid address {value!r}")


def _all_of(value: Any, kind: type) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, kind) for item in value)


def _convert_address_list(value: Any) -> Any:
    if _all_of(value, str):
        converted = []
        for text in value:
            try:
                converted.append(Address.parse(text).eth_address_bytes())
            except AddressError:
                break
        if converted:
            if len(converted) != len(value):
                raise AbiError("failed to convert all base58 addresses")
            return converted
        return value
    if _all_of(value, Address):
        return [item.eth_address_bytes() for item in value]
    return value


def _convert_string_to_bytes(ty: AbiType, text: str) -> bytes:
    try:
        data = hex_to_bytes(text)
    except ValueError:
        try:
            data = base64.b64decode(text, validate=True)
        except binascii.Error as err:
            raise AbiError(f"invalid bytes value {text!r}: {err}") from err
    if ty.kind == "bytes":
        return data
    if len(data) != ty.size:
        raise AbiError(f"invalid size: {ty.size}/{len(data)}")
    return data


def _convert(ty: AbiType, value: Any) -> Any:
    if ty.kind in ("slice", "array"):
        elem = ty.elem
        if elem.kind == "address":
            return _convert_address_list(value)
        if elem.kind in ("int", "uint") and elem.size > 64 and _all_of(value, str):
            return [_parse_big(text) for text in value]
        return value
    if ty.kind == "address":
        return _convert_to_address(value)
    if ty.kind in ("int", "uint") and isinstance(value, str):
        return _convert_to_int(ty, value)
    if ty.kind in ("bytes", "fixed_bytes") and isinstance(value, str):
        return _convert_string_to_bytes(ty, value)
    return value


def get_padded_param(params: Sequence[Any]) -> bytes:
    """ABI-encode a flat sequence of alternating type names and values.

    Addresses may be given in any text form or as :class:`Address`; integers
    and wide integer arrays may be given as decimal or ``0x`` hex strings;
    bytes may be given as hex or base64 strings.
    """
    params = list(params)
    if len(params) % 2 == 1:
        raise AbiError(f"expected even number of params, got {len(params)}")
    types: list[AbiType] = []
    values: list[Any] = []
    for key, value in zip(params[::2], params[1::2]):
        if not isinstance(key, str):
            raise AbiError(f"invalid non-string type {key!r}")
        try:
            ty = parse_type(key)
        except AbiError as err:
            raise AbiError(f"could not parse type {key}: {err}") from err
        types.append(ty)
        values.append(_convert(ty, value))
    return encode(types, values)


def pack(method: str, params: Optional[Sequence[Any]] = None) -> bytes:
    """Return the selector of ``method`` followed by its encoded parameters."""
    return selector(method) + get_padded_param(params or [])