# tronkit

A Python library for working with the TRON network:

- **Addresses** (`tronkit.address`): one `Address` type that parses base58
  (`T...`), 41-prefixed hex and 0x-prefixed EVM addresses and converts between
  them.
- **Base58Check** (`tronkit.base58`): `encode`, `decode`, `encode_check` and
  `decode_check`. `decode_check` also checks the TRON address length and the
  0x41 prefix.
- **Hex helpers** (`tronkit.hexutils`): hex conversion, byte padding,
  `keccak256` and a 32-byte `Hash` type.
- **ABI encoding** (`tronkit.abicodec`, `tronkit.abi`): Solidity type parsing,
  tuple encoding and decoding, function selectors, and call data built from
  alternating type/value lists.
- **Contract ABIs** (`tronkit.jsonabi`): load the ABI JSON a node returns and
  get function signatures and typed argument lists from it.
- **HTTP node clients** (`tronkit.soliditynode`, `tronkit.fullnode`) for the
  node wallet APIs: accounts, blocks, constant calls, energy estimates,
  transaction info, contract deployment and lookup, contract calls, transfers,
  broadcasting and energy prices.
- **Keystore adapter** (`tronkit.keystore`): sign for TRON accounts with a
  keystore that holds EVM keys.
- **OCR2 helpers** (`tronkit.ocrutils`): split signatures, lay out report
  contexts, hash function signatures and serialise call parameters.

## Installation

```
pip install tronkit
```

## Addresses

```python
from tronkit.address import Address

addr = Address.parse("T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb")
print(str(addr))            # T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb
print(addr.hex())           # 410000000000000000000000000000000000000000
print(addr.eth_address())   # 0x0000000000000000000000000000000000000000 (EIP-55)
```

`Address` is a `bytes` subclass. `Address.parse` takes any of the three text
forms and raises `AddressError` for anything else. You can also build an
address with `from_base58`, `from_hex`, `from_base64`, `from_evm`, `from_int`,
`from_public_key` (an uncompressed secp256k1 key), `scan` (exactly 21 raw
bytes) and `from_json`. `eth_address_bytes()` returns the 20 raw EVM bytes.

## ABI encoding

```python
from tronkit.abi import pack, selector, get_padded_param

selector("transfer(address,uint256)").hex()   # 'a9059cbb'

data = pack("transferFrom(address,address,uint256)", [
    "address", "0x364b03e0815687edaf90b81ff58e496dea7383d7",
    "address", "0x364b03e0815687edaf90b81ff58e496dea7383d7",
    "uint256", "10000000000000000",
])
```

The parameters are a flat list that alternates type and value. An odd-length
list raises `AbiError`. These conversions are applied to the values:

- addresses, single or in arrays, may be given in any text form or as `Address`
- integers may be given as decimal strings; integers wider than 64 bits, and
  arrays of them, also accept `0x` hex strings
- `bytes` and `bytesN` values may be given as hex or base64 strings

`tronkit.abicodec` holds the lower-level `parse_type`, `encode(types, values)`
and `decode(types, data)`.

## Talking to a node

```python
from tronkit.address import Address
from tronkit.soliditynode import SolidityNodeClient
from tronkit.fullnode import FullNodeClient

with SolidityNodeClient("http://localhost:8091/walletsolidity") as solidity:
    account = solidity.get_account(Address.parse("TVSTZkvVosqh4YHLwHmmNuqeyn967aE2iv"))
    print(account.balance)

full = FullNodeClient("http://localhost:8090/wallet", timeout=10)
print(full.get_energy_prices().prices)
```

Both clients take an optional `requests.Session` and a `timeout`. When they
are used as context managers, a session the client created itself is closed
on exit.

`SolidityNodeClient` offers `get_account`, `get_now_block`,
`get_block_by_num`, `trigger_constant_contract`, `estimate_energy` and
`get_transaction_info_by_id`. `FullNodeClient` has all of these, plus
`deploy_contract`, `get_contract`, `trigger_smart_contract`, `transfer`,
`broadcast_transaction` and `get_energy_prices`. `deploy_contract` takes its
constructor arguments as plain values that match the constructor inputs
declared in the ABI JSON. The contract-call methods take alternating
type/value lists, as `pack` does.

A call raises `RpcError` in these cases:

- the node returns a status other than 200
- the body is not a JSON object
- the body holds an `Error` field
- a block has no header
- a transaction is not found

A failed constant call or energy estimate raises `RpcError` and keeps the
parsed response on its `response` attribute. A rejected broadcast raises
`BroadcastError`, which also keeps the response.

## Keystore adapter

```python
from tronkit.keystore import LoopKeystoreAdapter

adapter = LoopKeystoreAdapter(my_keys)   # any object with enabled_addresses() and sign()
adapter.accounts()                       # checksummed 0x addresses
adapter.sign("T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb", b"payload")
```

`sign` converts the base58 account to its EVM address and hands the signing
to the wrapped keystore.

## What this package does not do

- It does not hold private keys and cannot sign transactions by itself.
  Signing is left to a keystore you supply.
- It talks only to the node HTTP JSON APIs. It has no gRPC client.
- It has no command-line program.

## Development

```
pip install -e ".[test]"
pytest
```