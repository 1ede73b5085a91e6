"""Block records returned by the ``getnowblock`` and ``getblockbynum`` node endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .txmodels import ExecutedTransaction, JsonModel, _list, _model, _scalar


@dataclass
class BlockHeaderRaw(JsonModel):
    """The signed fields of a block header."""

    timestamp: int = _scalar("timestamp", int, omitempty=True)
    tx_trie_root: str = _scalar("txTrieRoot", str, omitempty=True)
    parent_hash: str = _scalar("parentHash", str, omitempty=True)
    number: int = _scalar("number", int, omitempty=True)
    witness_id: int = _scalar("witness_id", int, omitempty=True)
    witness_address: str = _scalar("witness_address", str, omitempty=True)
    version: int = _scalar("version", int, omitempty=True)
    account_state_root: str = _scalar("accountStateRoot", str, omitempty=True)


@dataclass
class BlockHeader(JsonModel):
    """A block header and the producing witness's signature."""

    raw_data: Optional[BlockHeaderRaw] = _model(
        "raw_data", BlockHeaderRaw, optional=True, omitempty=True
    )
    witness_signature: str = _scalar("witness_signature", str, omitempty=True)


@dataclass
class Block(JsonModel):
    """A block with its id, header and executed transactions."""

    block_id: str = _scalar("blockID", str)
    transactions: list = _list("transactions", ExecutedTransaction, omitempty=True)
    block_header: Optional[BlockHeader] = _model(
        "block_header", BlockHeader, optional=True, omitempty=True
    )