"""Client for the TRON full node wallet API, adding transaction-building calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .abicodec import AbiError, encode, parse_type
from .address import Address
from .jsonabi import load_json_abi
from .soliditynode import (
    ReturnEnergyEstimate,
    SolidityNodeClient,
    _check_int32,
    _decode,
    _encode_params,
)
from .transport import RpcError
from .txmodels import JsonModel, NewContract, Transaction, _model, _scalar


@dataclass
class DeployContractResponse(Transaction):
    """An unsigned contract-creation transaction and the address it will create."""

    contract_address: str = _scalar("contract_address", str)


@dataclass
class ContractInfo(NewContract):
    """A deployed contract as reported by ``getcontract``."""


@dataclass
class TriggerSmartContractResponse(JsonModel):
    """An unsigned contract-call transaction and whether the node accepted the call."""

    result: ReturnEnergyEstimate = _model("result", ReturnEnergyEstimate)
    transaction: Optional[Transaction] = _model("transaction", Transaction, optional=True)


@dataclass
class BroadcastResponse(JsonModel):
    """The node's verdict on a broadcast transaction."""

    result: bool = _scalar("result", bool)
    code: str = _scalar("code", str)
    txid: str = _scalar("txid", str)
    message: str = _scalar("message", str)


class BroadcastError(RpcError):
    """Raised when a node rejects a broadcast transaction."""

    def __init__(self, message: str, response: BroadcastResponse) -> None:
        super().__init__(message)
        self.response = response


@dataclass
class EnergyPrices(JsonModel):
    """History of energy unit prices as ``timestamp:price`` pairs separated by commas."""

    prices: str = _scalar("prices", str)


def _encode_constructor(abi_json: str, params: Sequence[Any]) -> bytes:
    try:
        abi = load_json_abi(abi_json)
        constructor = next(
            (entry for entry in abi.entries if entry.type.lower() == "constructor"), None
        )
        types = [parse_type(param.type) for param in constructor.inputs] if constructor else []
    except AbiError as err:
        raise AbiError(f"failed to parse ABI: {err}") from err
    try:
        return encode(types, params)
    except AbiError as err:
        raise AbiError(f"failed to encode params: {err}") from err


class FullNodeClient(SolidityNodeClient):
    """Builds, deploys and broadcasts transactions on a full node."""

    def deploy_contract(
        self,
        owner: Address,
        contract_name: str,
        abi_json: str,
        bytecode: str,
        origin_energy_limit: int,
        consume_user_resource_percent: int,
        fee_limit: int,
        params: Optional[Sequence[Any]],
    ) -> DeployContractResponse:
        """Build an unsigned transaction deploying a contract.

        ``params`` are the constructor arguments, given as values for the
        constructor inputs declared in ``abi_json``.
        """
        encoded = _encode_constructor(abi_json, list(params or []))
        fields = {
            "owner_address": str(owner),
            "abi": abi_json,
            "bytecode": bytecode,
            "parameter": encoded.hex(),
            "name": contract_name,
            "fee_limit": fee_limit,
            "consume_user_resource_percent": consume_user_resource_percent,
            "origin_energy_limit": origin_energy_limit,
            "visible": True,
        }
        body = {key: value for key, value in fields.items() if value}
        return _decode(DeployContractResponse, self.post("/deploycontract", body))

    def get_contract(self, contract_address: Address) -> ContractInfo:
        """Return the deployed contract at ``contract_address``."""
        data = self.post(
            "/getcontract", {"value": str(contract_address), "visible": True}
        )
        info = _decode(ContractInfo, data)
        if info.abi is None:
            raise RpcError("could not get contract ABI")
        return info

    def trigger_smart_contract(
        self,
        from_address: Address,
        contract_address: Address,
        method: str,
        params: Optional[Sequence[Any]],
        fee_limit: int,
        amount: int,
    ) -> TriggerSmartContractResponse:
        """Build an unsigned transaction calling ``method`` with alternating type/value ``params``."""
        body = {
            "owner_address": str(from_address),
            "contract_address": str(contract_address),
            "function_selector": method,
            "parameter": _encode_params(params),
            "data": "",
            "fee_limit": _check_int32("fee limit", fee_limit),
            "call_value": amount,
            "call_token_value": 0,
            "token_id": 0,
            "permission_id": 0,
            "visible": True,
        }
        return _decode(TriggerSmartContractResponse, self.post("/triggersmartcontract", body))

    def broadcast_transaction(self, transaction: Optional[Transaction]) -> BroadcastResponse:
        """Send a signed transaction to the network."""
        if transaction is None:
            raise ValueError("empty body")
        if not transaction.tx_id:
            raise ValueError("empty transaction ID in request")
        if not transaction.signature:
            raise ValueError("no signatures")
        response = _decode(BroadcastResponse, self.post("/broadcasttransaction", transaction))
        if not response.result:
            raise BroadcastError(
                f"broadcasting failed. Code: {response.code}, Message: {response.message}",
                response,
            )
        return response

    def get_energy_prices(self) -> EnergyPrices:
        """Return the history of energy unit prices."""
        return _decode(EnergyPrices, self.get("/getenergyprices"))

    def transfer(self, from_address: Address, to_address: Address, amount: int) -> Transaction:
        """Build an unsigned transaction moving ``amount`` sun of TRX."""
        body = {
            "owner_address": str(from_address),
            "to_address": str(to_address),
            "amount": amount,
            "visible": True,
        }
        tx = _decode(Transaction, self.post("/createtransaction", body))
        if not tx.tx_id:
            raise RpcError("failed to create transaction")
        return tx