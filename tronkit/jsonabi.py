"""Contract ABI descriptions as returned by TRON node JSON APIs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .abicodec import AbiError, AbiType, parse_type


@dataclass(frozen=True)
class Argument:
    """A typed, named argument of a contract function or event."""

    name: str
    type: AbiType
    indexed: bool = False


@dataclass
class EntryParam:
    """An input or output of an ABI entry."""

    name: str = ""
    type: str = ""
    indexed: bool = False


@dataclass
class Entry:
    """One function, event or constructor of a contract ABI."""

    name: str = ""
    type: str = ""
    state_mutability: str = ""
    anonymous: bool = False
    constant: bool = False
    payable: bool = False
    inputs: list[EntryParam] = field(default_factory=list)
    outputs: list[EntryParam] = field(default_factory=list)


def _field(data: dict, key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise AbiError(f"field {key!r} must be of type {kind.__name__}")
    return value


def _params_from(data: dict, key: str) -> list[EntryParam]:
    items = data.get(key)
    if items is None:
        return []
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise AbiError(f"field {key!r} must be a list of objects")
    return [
        EntryParam(
            name=_field(item, "name", str, ""),
            type=_field(item, "type", str, ""),
            indexed=_field(item, "indexed", bool, False),
        )
        for item in items
    ]


def _entry_from_dict(data: Any) -> Entry:
    if not isinstance(data, dict):
        raise AbiError("ABI entry must be an object")
    return Entry(
        name=_field(data, "name", str, ""),
        type=_field(data, "type", str, ""),
        state_mutability=_field(data, "stateMutability", str, ""),
        anonymous=_field(data, "anonymous", bool, False),
        constant=_field(data, "constant", bool, False),
        payable=_field(data, "payable", bool, False),
        inputs=_params_from(data, "inputs"),
        outputs=_params_from(data, "outputs"),
    )


def _param_to_dict(param: EntryParam) -> dict:
    out: dict = {}
    if param.indexed:
        out["indexed"] = True
    if param.name:
        out["name"] = param.name
    if param.type:
        out["type"] = param.type
    return out


def _entry_to_dict(entry: Entry) -> dict:
    out: dict = {}
    if entry.name:
        out["name"] = entry.name
    if entry.anonymous:
        out["anonymous"] = True
    if entry.constant:
        out["constant"] = True
    if entry.payable:
        out["payable"] = True
    if entry.state_mutability:
        out["stateMutability"] = entry.state_mutability
    if entry.type:
        out["type"] = entry.type
    out["inputs"] = [_param_to_dict(param) for param in entry.inputs]
    out["outputs"] = [_param_to_dict(param) for param in entry.outputs]
    return out


def _arguments(params: Iterable[EntryParam]) -> list[Argument]:
    arguments = []
    for param in params:
        try:
            ty = parse_type(param.type)
        except AbiError as err:
            raise AbiError(f"invalid param {param.type}: {err}") from err
        arguments.append(Argument(name=param.name, type=ty, indexed=param.indexed))
    return arguments


@dataclass
class JsonAbi:
    """The list of entries that makes up a contract ABI."""

    entries: list[Entry] = field(default_factory=list)

    @classmethod
    def from_list(cls, items: Iterable[Any]) -> "JsonAbi":
        """Build an ABI from a list of entry objects as found in JSON."""
        return cls([_entry_from_dict(item) for item in items])

    def to_list(self) -> list[dict]:
        """Return the entries as JSON-ready objects, leaving out empty fields."""
        return [_entry_to_dict(entry) for entry in self.entries]

    def _find(self, name: str) -> Optional[Entry]:
        return next((entry for entry in self.entries if entry.name == name), None)

    def get_function_signature(self, name: str) -> str:
        """Return ``name(type,...)`` for the first entry called ``name``."""
        entry = self._find(name)
        if entry is None:
            raise AbiError(f"entry with name {name} not found in abi")
        return f"{name}({','.join(param.type for param in entry.inputs)})"

    def get_input_parser(self, method: str) -> list[Argument]:
        """Return the typed inputs of the first entry called ``method``."""
        entry = self._find(method)
        if entry is None:
            raise AbiError("not found")
        return _arguments(entry.inputs)

    def get_output_parser(self, method: str) -> list[Argument]:
        """Return the typed outputs of the first entry called ``method``."""
        entry = self._find(method)
        if entry is None:
            raise AbiError("not found")
        return _arguments(entry.outputs)


def load_json_abi(text: str) -> JsonAbi:
    """Parse a JSON array of ABI entries."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise AbiError(f"failed to parse ABI JSON: {err}") from err
    if data is None:
        return JsonAbi()
    if not isinstance(data, list):
        raise AbiError("failed to parse ABI JSON: expected an array")
    try:
        return JsonAbi.from_list(data)
    except AbiError as err:
        raise AbiError(f"failed to parse ABI JSON: {err}") from err