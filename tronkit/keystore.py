"""Signing of TRON transactions with a keystore that holds EVM keys."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from .address import Address, AddressError, to_checksum_address


@runtime_checkable
class KeysStore(Protocol):
    """A keystore that lists its enabled EVM addresses and signs with them.

    Addresses are the 20 raw bytes of an EVM account.
    """

    def enabled_addresses(self) -> Sequence[bytes]:
        """Return the addresses whose keys may be used."""
        ...

    def sign(self, address: bytes, data: bytes) -> bytes:
        """Sign ``data`` with the key of ``address``."""
        ...


class LoopKeystoreAdapter:
    """Lets an EVM keystore sign for TRON accounts.

    TRON base58 account names are turned into the EVM addresses the keys are
    stored under; the signing itself is left to the wrapped keystore.
    """

    def __init__(self, keys: KeysStore) -> None:
        self._keys = keys

    def accounts(self) -> list[str]:
        """Return the enabled addresses as checksummed ``0x`` hex strings."""
        try:
            enabled = self._keys.enabled_addresses()
        except Exception as err:
            raise RuntimeError(f"failed to get enabled addresses: {err}") from err
        return [to_checksum_address(bytes(address)) for address in enabled]

    def sign(self, account: str, data: bytes) -> bytes:
        """Sign ``data`` for the TRON account given in base58 form."""
        try:
            tron_address = Address.from_base58(account)
        except (AddressError, ValueError) as err:
            raise ValueError(f"failed to convert to TRON address: {err}") from err
        return self._keys.sign(tron_address.eth_address_bytes(), bytes(data))