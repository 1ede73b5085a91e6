"""Transaction, contract and receipt records exchanged with TRON node HTTP APIs."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from .jsonabi import JsonAbi


class ResponseCode(str, Enum):
    """Response codes a node gives when accepting or rejecting a transaction."""

    SUCCESS = "SUCCESS"
    SIG_ERROR = "SIGERROR"
    CONTRACT_VALIDATE_ERROR = "CONTRACT_VALIDATE_ERROR"
    CONTRACT_EXE_ERROR = "CONTRACT_EXE_ERROR"
    BANDWIDTH_ERROR = "BANDWITH_ERROR"
    DUP_TRANSACTION_ERROR = "DUP_TRANSACTION_ERROR"
    TAPOS_ERROR = "TAPOS_ERROR"
    TOO_BIG_TRANSACTION_ERROR = "TOO_BIG_TRANSACTION_ERROR"
    TRANSACTION_EXPIRATION_ERROR = "TRANSACTION_EXPIRATION_ERROR"
    SERVER_BUSY = "SERVER_BUSY"
    NO_CONNECTION = "NO_CONNECTION"
    NOT_ENOUGH_EFFECTIVE_CONNECTION = "NOT_ENOUGH_EFFECTIVE_CONNECTION"
    BLOCK_UNSOLIDIFIED = "BLOCK_UNSOLIDIFIED"
    OTHER_ERROR = "OTHER_ERROR"


class TransactionResult(str, Enum):
    """Outcomes of contract execution reported in a transaction receipt."""

    DEFAULT = "DEFAULT"
    SUCCESS = "SUCCESS"
    REVERT = "REVERT"
    BAD_JUMP_DESTINATION = "BAD_JUMP_DESTINATION"
    OUT_OF_MEMORY = "OUT_OF_MEMORY"
    PRECOMPILED_CONTRACT = "PRECOMPILED_CONTRACT"
    STACK_TOO_SMALL = "STACK_TOO_SMALL"
    STACK_TOO_LARGE = "STACK_TOO_LARGE"
    ILLEGAL_OPERATION = "ILLEGAL_OPERATION"
    STACK_OVERFLOW = "STACK_OVERFLOW"
    OUT_OF_ENERGY = "OUT_OF_ENERGY"
    OUT_OF_TIME = "OUT_OF_TIME"
    JVM_STACK_OVERFLOW = "JVM_STACK_OVER_FLOW"
    UNKNOWN = "UNKNOWN"
    TRANSFER_FAILED = "TRANSFER_FAILED"
    INVALID_CODE = "INVALID_CODE"


def _scalar(key: str, kind: type, *, omitempty: bool = False) -> Any:
    return field(default=kind(), metadata={"json": key, "kind": kind, "omitempty": omitempty})


def _list(key: str, item: type, *, omitempty: bool = False) -> Any:
    return field(default_factory=list, metadata={"json": key, "item": item, "omitempty": omitempty})


def _map(key: str, value: type, *, omitempty: bool = False) -> Any:
    return field(default_factory=dict, metadata={"json": key, "value": value, "omitempty": omitempty})


def _model(key: str, model: type, *, optional: bool = False, omitempty: bool = False) -> Any:
    metadata = {"json": key, "model": model, "omitempty": omitempty}
    if optional:
        return field(default=None, metadata=metadata)
    return field(default_factory=model, metadata=metadata)


def _custom(
    key: str, decode: Callable[[Any], Any], encode: Callable[[Any], Any], *, omitempty: bool = False
) -> Any:
    return field(
        default=None,
        metadata={"json": key, "decode": decode, "encode": encode, "omitempty": omitempty},
    )


def _check(kind: type, raw: Any, key: str) -> Any:
    valid = isinstance(raw, kind) and (kind is bool or not isinstance(raw, bool))
    if not valid:
        raise ValueError(f"field {key!r}: expected {kind.__name__}, got {type(raw).__name__}")
    return raw


def _decode_item(item: type, raw: Any, key: str) -> Any:
    if raw is None:
        return item()
    if issubclass(item, JsonModel):
        return item.from_dict(raw)
    return _check(item, raw, key)


def _decode_field(meta: Mapping[str, Any], raw: Any) -> Any:
    key = meta["json"]
    if "model" in meta:
        return meta["model"].from_dict(raw)
    if "item" in meta:
        if not isinstance(raw, list):
            raise ValueError(f"field {key!r}: expected list, got {type(raw).__name__}")
        return [_decode_item(meta["item"], element, key) for element in raw]
    if "value" in meta:
        if not isinstance(raw, dict):
            raise ValueError(f"field {key!r}: expected object, got {type(raw).__name__}")
        return {name: _decode_item(meta["value"], element, key) for name, element in raw.items()}
    if "decode" in meta:
        return meta["decode"](raw)
    return _check(meta["kind"], raw, key)


def _encode(value: Any) -> Any:
    if isinstance(value, JsonModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode(element) for element in value]
    if isinstance(value, dict):
        return {name: _encode(element) for name, element in value.items()}
    return value


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (bool, int, str, list, dict)) and not value)


class JsonModel:
    """Base of records that map to and from node JSON objects.

    Each field names its JSON key in its metadata; unknown keys are ignored
    on input and fields marked ``omitempty`` are left out when empty.
    """

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """Build the record from a decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ValueError(f"{cls.__name__}: expected object, got {type(data).__name__}")
        kwargs = {}
        for spec in fields(cls):
            raw = data.get(spec.metadata["json"])
            if raw is not None:
                kwargs[spec.name] = _decode_field(spec.metadata, raw)
        return cls(**kwargs)

    def to_dict(self) -> dict:
        """Return the record as a JSON-ready object."""
        out: dict = {}
        for spec in fields(self):
            meta = spec.metadata
            value = getattr(self, spec.name)
            if meta["omitempty"] and _is_empty(value):
                continue
            if "encode" in meta and value is not None:
                out[meta["json"]] = meta["encode"](value)
            else:
                out[meta["json"]] = _encode(value)
        return out


def _decode_abi(raw: Any) -> JsonAbi:
    if not isinstance(raw, dict):
        raise ValueError(f"field 'abi': expected object, got {type(raw).__name__}")
    entries = raw.get("entrys")
    if entries is None:
        return JsonAbi()
    if not isinstance(entries, list):
        raise ValueError("field 'entrys': expected list")
    return JsonAbi.from_list(entries)


def _encode_abi(abi: JsonAbi) -> dict:
    return {"entrys": abi.to_list()} if abi.entries else {}


@dataclass
class NewContract(JsonModel):
    """A contract being created, as carried inside a transaction."""

    origin_address: str = _scalar("origin_address", str, omitempty=True)
    contract_address: str = _scalar("contract_address", str, omitempty=True)
    abi: Optional[JsonAbi] = _custom("abi", _decode_abi, _encode_abi, omitempty=True)
    bytecode: str = _scalar("bytecode", str, omitempty=True)
    call_value: int = _scalar("call_value", int, omitempty=True)
    consume_user_resource_percent: int = _scalar("consume_user_resource_percent", int, omitempty=True)
    name: str = _scalar("name", str, omitempty=True)
    origin_energy_limit: int = _scalar("origin_energy_limit", int, omitempty=True)
    code_hash: str = _scalar("code_hash", str, omitempty=True)


@dataclass
class ParameterValue(JsonModel):
    """The typed payload of a contract call inside a transaction."""

    owner_address: str = _scalar("owner_address", str, omitempty=True)
    to_address: str = _scalar("to_address", str, omitempty=True)
    data: str = _scalar("data", str, omitempty=True)
    contract_address: str = _scalar("contract_address", str, omitempty=True)
    amount: int = _scalar("amount", int, omitempty=True)
    new_contract: Optional[NewContract] = _model("new_contract", NewContract, optional=True, omitempty=True)


@dataclass
class Parameter(JsonModel):
    """A contract parameter with its protobuf type URL."""

    value: ParameterValue = _model("value", ParameterValue)
    type_url: str = _scalar("type_url", str, omitempty=True)


@dataclass
class Contract(JsonModel):
    """One contract (operation) of a transaction."""

    parameter: Parameter = _model("parameter", Parameter)
    type: str = _scalar("type", str, omitempty=True)


@dataclass
class RawData(JsonModel):
    """The signed part of a transaction."""

    contract: list = _list("contract", Contract, omitempty=True)
    ref_block_bytes: str = _scalar("ref_block_bytes", str, omitempty=True)
    ref_block_hash: str = _scalar("ref_block_hash", str, omitempty=True)
    expiration: int = _scalar("expiration", int, omitempty=True)
    fee_limit: int = _scalar("fee_limit", int, omitempty=True)
    timestamp: int = _scalar("timestamp", int, omitempty=True)


@dataclass
class Return(JsonModel):
    """The result of executing one contract of a transaction."""

    contract_ret: str = _scalar("contractRet", str)
    ret: str = _scalar("ret", str)


@dataclass
class Transaction(JsonModel):
    """A transaction as built by and broadcast to a node."""

    visible: bool = _scalar("visible", bool)
    tx_id: str = _scalar("txID", str)
    raw_data: RawData = _model("raw_data", RawData)
    raw_data_hex: str = _scalar("raw_data_hex", str)
    signature: list = _list("signature", str)

    def add_signature(self, signature_hex: str) -> None:
        """Append a hex-encoded signature."""
        self.signature.append(signature_hex)

    def add_signature_bytes(self, signature: bytes) -> None:
        """Append a raw signature, stored as lower-case hex."""
        self.add_signature(bytes(signature).hex())


@dataclass
class ExecutedTransaction(Transaction):
    """A transaction together with the results of its contracts."""

    ret: list = _list("ret", Return, omitempty=True)


@dataclass
class ResourceReceipt(JsonModel):
    """Energy and bandwidth spent by a transaction, and its execution result."""

    energy_usage: int = _scalar("energy_usage", int, omitempty=True)
    energy_fee: int = _scalar("energy_fee", int, omitempty=True)
    origin_energy_usage: int = _scalar("origin_energy_usage", int, omitempty=True)
    energy_usage_total: int = _scalar("energy_usage_total", int, omitempty=True)
    net_usage: int = _scalar("net_usage", int, omitempty=True)
    net_fee: int = _scalar("net_fee", int, omitempty=True)
    result: str = _scalar("result", str, omitempty=True)
    energy_penalty_total: int = _scalar("energy_penalty_total", int, omitempty=True)


@dataclass
class Log(JsonModel):
    """An event log emitted during contract execution."""

    address: str = _scalar("address", str, omitempty=True)
    topics: list = _list("topics", str, omitempty=True)
    data: str = _scalar("data", str, omitempty=True)


@dataclass
class CallValueInfo(JsonModel):
    """Value moved by an internal transaction."""

    call_value: int = _scalar("callValue", int, omitempty=True)
    token_id: str = _scalar("tokenId", str, omitempty=True)


@dataclass
class InternalTransaction(JsonModel):
    """A call made by a contract during execution."""

    hash: str = _scalar("hash", str, omitempty=True)
    caller_address: str = _scalar("caller_address", str, omitempty=True)
    transfer_to_address: str = _scalar("transferTo_address", str, omitempty=True)
    call_value_info: list = _list("callValueInfo", CallValueInfo, omitempty=True)
    note: str = _scalar("note", str, omitempty=True)
    rejected: bool = _scalar("rejected", bool, omitempty=True)
    extra: str = _scalar("extra", str, omitempty=True)


@dataclass
class TransactionInfo(JsonModel):
    """The outcome of a transaction once it is included in a block."""

    id: str = _scalar("id", str)
    fee: int = _scalar("fee", int)
    block_number: int = _scalar("blockNumber", int)
    block_timestamp: int = _scalar("blockTimeStamp", int)
    contract_result: list = _list("contractResult", str)
    contract_address: str = _scalar("contract_address", str)
    receipt: ResourceReceipt = _model("receipt", ResourceReceipt)
    log: list = _list("log", Log)
    result: str = _scalar("result", str)
    res_message: str = _scalar("resMessage", str)
    withdraw_amount: int = _scalar("withdraw_amount", int)
    unfreeze_amount: int = _scalar("unfreeze_amount", int)
    internal_transactions: list = _list("internal_transactions", InternalTransaction)
    withdraw_expire_amount: int = _scalar("withdraw_expire_amount", int)
    cancel_unfreeze_v2_amount: dict = _map("cancel_unfreezeV2_amount", int)