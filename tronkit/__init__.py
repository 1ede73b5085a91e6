"""TRON addresses, base58check, ABI encoding, HTTP node clients and signing helpers."""

__version__ = "0.1.0"

__all__ = [
    "hexutils",
    "base58",
    "address",
    "abicodec",
    "abi",
    "jsonabi",
    "txmodels",
    "transport",
    "accounts",
    "blocks",
    "soliditynode",
    "fullnode",
    "keystore",
    "ocrutils",
]