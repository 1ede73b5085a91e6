"""Client for the read-only wallet API served by TRON solidity and full nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, TypeVar

from .abi import get_padded_param
from .abicodec import AbiError
from .accounts import Account
from .address import Address
from .blocks import Block
from .transport import NodeClient, RpcError
from .txmodels import ExecutedTransaction, JsonModel, TransactionInfo, _list, _model, _scalar

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1

_M = TypeVar("_M", bound=JsonModel)


def _decode(model: type[_M], data: Mapping[str, Any]) -> _M:
    """Build ``model`` from a response object, reporting bad shapes as :class:`RpcError`."""
    try:
        return model.from_dict(data)
    except (TypeError, ValueError) as err:
        raise RpcError(f"failed to unmarshal JSON response: {err}") from err


def _encode_params(params: Optional[Sequence[Any]]) -> str:
    try:
        return get_padded_param(params or []).hex()
    except AbiError as err:
        raise AbiError(f"failed to encode params: {err}") from err


def _check_int32(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"{name} out of 32-bit range: {value}")
    return value


def _failure(message: str, response: JsonModel) -> RpcError:
    error = RpcError(message)
    error.response = response
    return error


@dataclass
class ReturnEnergyEstimate(JsonModel):
    """Whether a simulated call succeeded, with the node's code and message."""

    result: bool = _scalar("result", bool)
    code: str = _scalar("code", str)
    message: str = _scalar("message", str)


@dataclass
class TriggerConstantContractResponse(JsonModel):
    """Outcome of a read-only contract call."""

    result: ReturnEnergyEstimate = _model("result", ReturnEnergyEstimate)
    energy_used: int = _scalar("energy_used", int)
    energy_penalty: int = _scalar("energy_penalty", int)
    constant_result: list = _list("constant_result", str)
    transaction: Optional[ExecutedTransaction] = _model(
        "transaction", ExecutedTransaction, optional=True
    )


@dataclass
class EnergyEstimateResult(JsonModel):
    """Estimated energy needed to run a contract call."""

    result: ReturnEnergyEstimate = _model("result", ReturnEnergyEstimate)
    energy_required: int = _scalar("energy_required", int)


class SolidityNodeClient(NodeClient):
    """Queries accounts, blocks, transactions and constant calls on a node."""

    def get_account(self, account_address: Address) -> Account:
        """Return the state of ``account_address``."""
        data = self.post(
            "/getaccount", {"address": str(account_address), "visible": True}
        )
        return _decode(Account, data)

    def get_now_block(self) -> Block:
        """Return the latest block."""
        block = _decode(Block, self.get("/getnowblock"))
        if block.block_header is None:
            raise RpcError("failed to retrieve block header")
        return block

    def get_block_by_num(self, num: int) -> Block:
        """Return the block at height ``num``."""
        _check_int32("block number", num)
        block = _decode(Block, self.post("/getblockbynum", {"num": num}))
        if block.block_header is None:
            raise RpcError("failed to retrieve block header")
        return block

    def trigger_constant_contract(
        self,
        from_address: Address,
        contract_address: Address,
        method: str,
        params: Optional[Sequence[Any]],
    ) -> TriggerConstantContractResponse:
        """Run a read-only call of ``method`` with alternating type/value ``params``.

        Raises :class:`RpcError` carrying the parsed ``response`` when the node
        reports the call as failed.
        """
        body = {
            "owner_address": str(from_address),
            "contract_address": str(contract_address),
            "function_selector": method,
            "parameter": _encode_params(params),
            "data": "",
            "call_value": 0,
            "call_token_value": 0,
            "token_id": 0,
            "visible": True,
        }
        response = _decode(
            TriggerConstantContractResponse, self.post("/triggerconstantcontract", body)
        )
        if not response.result.result:
            raise _failure(
                "failed to trigger constant contract, "
                f"code: {response.result.code}, message: {response.result.message}",
                response,
            )
        return response

    def estimate_energy(
        self,
        from_address: Address,
        contract_address: Address,
        method: str,
        params: Optional[Sequence[Any]],
        amount: int,
    ) -> EnergyEstimateResult:
        """Estimate the energy a call of ``method`` sending ``amount`` sun would need.

        Raises :class:`RpcError` carrying the parsed ``response`` when the node
        cannot produce an estimate.
        """
        body = {
            "owner_address": str(from_address),
            "contract_address": str(contract_address),
            "function_selector": method,
            "parameter": _encode_params(params),
            "data": "",
            "call_value": amount,
            "call_token_value": 0,
            "token_id": 0,
            "visible": True,
        }
        response = _decode(EnergyEstimateResult, self.post("/estimateenergy", body))
        if not response.result.result:
            raise _failure(
                "failed to estimate energy, "
                f"code: {response.result.code}, message: {response.result.message}",
                response,
            )
        return response

    def get_transaction_info_by_id(self, tx_hash: str) -> TransactionInfo:
        """Return the outcome of the transaction with id ``tx_hash``."""
        info = _decode(
            TransactionInfo, self.post("/gettransactioninfobyid", {"value": tx_hash})
        )
        # The node answers 200 with an empty object for unknown transactions.
        if not info.id:
            raise RpcError("transaction not found")
        return info