"""Account records returned by the ``getaccount`` node endpoint."""

from __future__ import annotations

from dataclasses import dataclass

from .txmodels import JsonModel, _list, _model, _scalar


@dataclass
class FrozenBalance(JsonModel):
    """TRX staked under Stake 1.0 and when it may be unstaked."""

    frozen_balance: int = _scalar("frozen_balance", int)
    expire_time: int = _scalar("expire_time", int)


@dataclass
class AccountResource(JsonModel):
    """Energy-related resources of an account."""

    delegated_frozen_balance_for_energy: int = _scalar("delegated_frozen_balance_for_energy", int)
    acquired_delegated_frozen_balance_for_energy: int = _scalar(
        "acquired_delegated_frozen_balance_for_energy", int
    )
    delegated_frozen_v2_balance_for_energy: int = _scalar(
        "delegated_frozenV2_balance_for_energy", int
    )
    acquired_delegated_frozen_v2_balance_for_energy: int = _scalar(
        "acquired_delegated_frozenV2_balance_for_energy", int
    )
    energy_window_size: int = _scalar("energy_window_size", int)
    energy_window_optimized: bool = _scalar("energy_window_optimized", bool)
    energy_usage: int = _scalar("energy_usage", int)
    latest_consume_time_for_energy: int = _scalar("latest_consume_time_for_energy", int)


@dataclass
class Key(JsonModel):
    """A key allowed to sign under a permission, with its weight."""

    address: str = _scalar("address", str, omitempty=True)
    weight: int = _scalar("weight", int, omitempty=True)


@dataclass
class Permission(JsonModel):
    """An owner, witness or active permission of an account."""

    type: str = _scalar("type", str)
    id: int = _scalar("id", int, omitempty=True)
    permission_name: str = _scalar("permission_name", str, omitempty=True)
    threshold: int = _scalar("threshold", int, omitempty=True)
    parent_id: int = _scalar("parent_id", int, omitempty=True)
    operations: str = _scalar("operations", str, omitempty=True)
    keys: list = _list("keys", Key, omitempty=True)


@dataclass
class FreezeV2(JsonModel):
    """TRX staked under Stake 2.0 for one resource type."""

    type: str = _scalar("type", str, omitempty=True)
    amount: int = _scalar("amount", int, omitempty=True)


@dataclass
class UnfreezeV2(JsonModel):
    """One pending Stake 2.0 unstaking."""

    type: str = _scalar("type", str, omitempty=True)
    unfreeze_amount: int = _scalar("unfreeze_amount", int, omitempty=True)
    unfreeze_expire_time: int = _scalar("unfreeze_expire_time", int, omitempty=True)


@dataclass
class Vote(JsonModel):
    """Votes given to a super representative."""

    vote_address: str = _scalar("vote_address", str, omitempty=True)
    vote_count: int = _scalar("vote_count", int, omitempty=True)


@dataclass
class Asset(JsonModel):
    """A TRC10 token id and an amount."""

    key: str = _scalar("key", str, omitempty=True)
    value: int = _scalar("value", int, omitempty=True)


@dataclass
class Account(JsonModel):
    """The state of an account as reported by a node."""

    account_name: str = _scalar("account_name", str)
    address: str = _scalar("address", str)
    create_time: int = _scalar("create_time", int)
    balance: int = _scalar("balance", int)
    frozen: FrozenBalance = _model("frozen", FrozenBalance)
    delegated_frozen_balance_for_bandwidth: int = _scalar(
        "delegated_frozen_balance_for_bandwidth", int
    )
    acquired_delegated_frozen_balance_for_bandwidth: int = _scalar(
        "acquired_delegated_frozen_balance_for_bandwidth", int
    )
    delegated_frozen_v2_balance_for_bandwidth: int = _scalar(
        "delegated_frozenV2_balance_for_bandwidth", int
    )
    acquired_delegated_frozen_v2_balance_for_bandwidth: int = _scalar(
        "acquired_delegated_frozenV2_balance_for_bandwidth", int
    )
    account_resource: AccountResource = _model("account_resource", AccountResource)
    frozen_v2: list = _list("frozenV2", FreezeV2)
    unfrozen_v2: list = _list("unfrozenV2", UnfreezeV2)
    net_usage: int = _scalar("net_usage", int)
    free_net_usage: int = _scalar("free_net_usage", int)
    net_window_size: int = _scalar("net_window_size", int)
    net_window_optimized: bool = _scalar("net_window_optimized", bool)
    votes: Vote = _model("votes", Vote)
    latest_opration_time: int = _scalar("latest_opration_time", int)
    latest_consume_time: int = _scalar("latest_consume_time", int)
    latest_consume_free_time: int = _scalar("latest_consume_free_time", int)
    is_witness: bool = _scalar("is_witness", bool)
    allowance: int = _scalar("allowance", int)
    latest_withdraw_time: int = _scalar("latest_withdraw_time", int)
    owner_permission: Permission = _model("owner_permission", Permission)
    witness_permission: Permission = _model("witness_permission", Permission)
    active_permission: list = _list("active_permission", Permission)
    asset: list = _list("asset", Asset)
    asset_v2: list = _list("assetV2", Asset)
    asset_issued_name: str = _scalar("asset_issued_name", str)
    asset_issued_id: str = _scalar("asset_issued_ID", str)
    free_asset_net_usage: list = _list("free_asset_net_usage", Asset)
    free_asset_net_usage_v2: list = _list("free_asset_net_usageV2", Asset)