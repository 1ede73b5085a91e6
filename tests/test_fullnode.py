import json

import pytest
import responses

from tronkit.abicodec import AbiError
from tronkit.address import Address
from tronkit.fullnode import BroadcastError, FullNodeClient
from tronkit.transport import RpcError
from tronkit.txmodels import Transaction

BASE = "http://fullnode.example.com/wallet"

DEPLOY_CONTRACT_RESPONSE = """{
  "visible": true,
  "txID": "36cfdc59c96dd425b102489a9de1c70455be40b075a565a56f06643be695f0c3",
  "contract_address": "41306d7f39ffc367edb1dee2a9782847e1579795a0",
  "raw_data": {
    "contract": [
      {
        "parameter": {
          "value": {
            "owner_address": "TJmmqjb1DK9TTZbQXzRQ2AuA94z4gKAPFh",
            "new_contract": {
              "bytecode": "608060405234801561001057600080fd5b50",
              "name": "SomeContract",
              "origin_address": "TJmmqjb1DK9TTZbQXzRQ2AuA94z4gKAPFh",
              "abi": {
                "entrys": [
                  {
                    "inputs": [
                      {"name": "key", "type": "uint256"},
                      {"name": "value", "type": "uint256"}
                    ],
                    "name": "set",
                    "stateMutability": "Nonpayable",
                    "type": "Function"
                  },
                  {
                    "outputs": [{"name": "value", "type": "uint256"}],
                    "constant": true,
                    "inputs": [{"name": "key", "type": "uint256"}],
                    "name": "get",
                    "stateMutability": "View",
                    "type": "Function"
                  }
                ]
              }
            }
          },
          "type_url": "type.googleapis.com/protocol.CreateSmartContract"
        },
        "type": "CreateSmartContract"
      }
    ],
    "ref_block_bytes": "a1f8",
    "ref_block_hash": "135be5ca457bc5fd",
    "expiration": 1742180361000,
    "timestamp": 1742180302542
  },
  "raw_data_hex": "0a02a1f82208135be5ca457bc5fd"
}"""

ENERGY_PRICES_RESPONSE = """{
  "prices": "0:100,1575871200000:10,1606537680000:40,1614238080000:140,1635739080000:280,1681895880000:420"
}"""

CREATE_TRANSACTION_RESPONSE = """{
  "visible": true,
  "txID": "7182680f7aee0892aea0b87c783e32f8f43d50a5ffbfc014aa468892ffccb205",
  "raw_data": {
    "contract": [
      {
        "parameter": {
          "value": {
            "amount": 1000,
            "owner_address": "TZ4UXDV5ZhNW7fb2AMSbgfAEZ7hWsnYS2g",
            "to_address": "TPswDDCAWhJAZGdHPidFg5nEf8TkNToDX1"
          },
          "type_url": "type.googleapis.com/protocol.TransferContract"
        },
        "type": "TransferContract"
      }
    ],
    "ref_block_bytes": "a2bc",
    "ref_block_hash": "46cc5c608ac2ad52",
    "expiration": 1742180955000,
    "timestamp": 1742180897646
  },
  "raw_data_hex": "0a02a2bc220846cc5c608ac2ad52"
}"""

TRIGGER_SMART_CONTRACT_RESPONSE = """{
  "result": {"result": true},
  "transaction": {
    "visible": true,
    "txID": "b58c32274d9c54c590f4879cb941d7dc6a3f5e415bcc31c67bd2cb142a9c3269",
    "raw_data": {
      "contract": [{"parameter": {"value": {"data": "a9059cbb"}}, "type": "TriggerSmartContract"}],
      "fee_limit": 1000000
    },
    "raw_data_hex": "0a02a73a"
  }
}"""


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    with FullNodeClient(BASE) as node:
        yield node


def _body(mocked):
    return json.loads(mocked.calls[0].request.body)


def test_deploy_contract(mocked, client):
    mocked.add(responses.POST, BASE + "/deploycontract", body=DEPLOY_CONTRACT_RESPONSE)
    owner = Address.parse("TVSTZkvVosqh4YHLwHmmNuqeyn967aE2iv")
    res = client.deploy_contract(owner, "test", "[]", "0x1234", 0, 0, 0, None)
    assert res.contract_address == "41306d7f39ffc367edb1dee2a9782847e1579795a0"
    assert len(res.raw_data.contract) == 1
    new_contract = res.raw_data.contract[0].parameter.value.new_contract
    assert new_contract.name == "SomeContract"
    assert new_contract.abi.get_function_signature("set") == "set(uint256,uint256)"
    body = _body(mocked)
    assert body == {
        "owner_address": "TVSTZkvVosqh4YHLwHmmNuqeyn967aE2iv",
        "abi": "[]",
        "bytecode": "0x1234",
        "name": "test",
        "visible": True,
    }


def test_deploy_contract_encodes_constructor_args(mocked, client):
    mocked.add(responses.POST, BASE + "/deploycontract", body=DEPLOY_CONTRACT_RESPONSE)
    owner = Address.parse("TVSTZkvVosqh4YHLwHmmNuqeyn967aE2iv")
    abi_json = '[{"type": "constructor", "inputs": [{"name": "x", "type": "uint256"}]}]'
    res = client.deploy_contract(owner, "test", abi_json, "00", 10, 20, 30, [5])
    assert res.contract_address == "41306d7f39ffc367edb1dee2a9782847e1579795a0"
    body = _body(mocked)
    assert body["parameter"] == (
        "0000000000000000000000000000000000000000000000000000000000000005"
    )
    assert body["origin_energy_limit"] == 10
    assert body["consume_user_resource_percent"] == 20
    assert body["fee_limit"] == 30


def test_deploy_contract_rejects_extra_args(client):
    owner = Address.parse("TVSTZkvVosqh4YHLwHmmNuqeyn967aE2iv")
    with pytest.raises(AbiError, match="failed to encode params"):
        client.deploy_contract(owner, "test", "[]", "00", 0, 0, 0, [1])


def test_deploy_contract_rejects_bad_abi(client):
    owner = Address.parse("TVSTZkvVosqh4YHLwHmmNuqeyn967aE2iv")
    with pytest.raises(AbiError, match="failed to parse ABI"):
        client.deploy_contract(owner, "test", "not json", "00", 0, 0, 0, None)


def test_get_energy_prices(mocked, client):
    mocked.add(responses.GET, BASE + "/getenergyprices", body=ENERGY_PRICES_RESPONSE)
    res = client.get_energy_prices()
    assert res.prices == (
        "0:100,1575871200000:10,1606537680000:40,1614238080000:140,"
        "1635739080000:280,1681895880000:420"
    )


def test_transfer(mocked, client):
    mocked.add(responses.POST, BASE + "/createtransaction", body=CREATE_TRANSACTION_RESPONSE)
    sender = Address.parse("TZ4UXDV5ZhNW7fb2AMSbgfAEZ7hWsnYS2g")
    receiver = Address.parse("TPswDDCAWhJAZGdHPidFg5nEf8TkNToDX1")
    res = client.transfer(sender, receiver, 1000)
    assert len(res.raw_data.contract) == 1
    assert res.raw_data.contract[0].type == "TransferContract"
    assert res.raw_data.contract[0].parameter.value.amount == 1000
    assert _body(mocked) == {
        "owner_address": "TZ4UXDV5ZhNW7fb2AMSbgfAEZ7hWsnYS2g",
        "to_address": "TPswDDCAWhJAZGdHPidFg5nEf8TkNToDX1",
        "amount": 1000,
        "visible": True,
    }


def test_transfer_without_tx_id(mocked, client):
    mocked.add(responses.POST, BASE + "/createtransaction", body="{}")
    sender = Address.parse("TZ4UXDV5ZhNW7fb2AMSbgfAEZ7hWsnYS2g")
    with pytest.raises(RpcError, match="failed to create transaction"):
        client.transfer(sender, sender, 1)


def test_get_contract(mocked, client):
    mocked.add(
        responses.POST,
        BASE + "/getcontract",
        body='{"contract_address": "41306d7f39ffc367edb1dee2a9782847e1579795a0", '
        '"abi": {"entrys": [{"name": "get", "type": "Function", '
        '"inputs": [{"name": "key", "type": "uint256"}]}]}}',
    )
    contract = Address.parse("TG3XXyExBkPp9nzdajDZsozEu4BkaSJozs")
    info = client.get_contract(contract)
    assert info.contract_address == "41306d7f39ffc367edb1dee2a9782847e1579795a0"
    assert info.abi.get_function_signature("get") == "get(uint256)"
    assert _body(mocked) == {"value": "TG3XXyExBkPp9nzdajDZsozEu4BkaSJozs", "visible": True}


def test_get_contract_without_abi(mocked, client):
    mocked.add(responses.POST, BASE + "/getcontract", body="{}")
    contract = Address.parse("TG3XXyExBkPp9nzdajDZsozEu4BkaSJozs")
    with pytest.raises(RpcError, match="could not get contract ABI"):
        client.get_contract(contract)


def test_trigger_smart_contract(mocked, client):
    mocked.add(
        responses.POST, BASE + "/triggersmartcontract", body=TRIGGER_SMART_CONTRACT_RESPONSE
    )
    sender = Address.parse("TZ4UXDV5ZhNW7fb2AMSbgfAEZ7hWsnYS2g")
    contract = Address.parse("TG3XXyExBkPp9nzdajDZsozEu4BkaSJozs")
    res = client.trigger_smart_contract(
        sender, contract, "set(uint256)", ["uint256", "43981"], 1000000, 7
    )
    assert res.result.result is True
    assert res.transaction.raw_data.fee_limit == 1000000
    body = _body(mocked)
    assert body["function_selector"] == "set(uint256)"
    assert body["parameter"] == (
        "000000000000000000000000000000000000000000000000000000000000abcd"
    )
    assert body["fee_limit"] == 1000000
    assert body["call_value"] == 7
    assert body["permission_id"] == 0


def test_trigger_smart_contract_fee_limit_range(client):
    sender = Address.parse("TZ4UXDV5ZhNW7fb2AMSbgfAEZ7hWsnYS2g")
    with pytest.raises(ValueError, match="32-bit"):
        client.trigger_smart_contract(sender, sender, "f()", [], 1 << 40, 0)


def test_broadcast_transaction(mocked, client):
    mocked.add(
        responses.POST,
        BASE + "/broadcasttransaction",
        body='{"result": true, "code": "SUCCESS", "txid": "abc"}',
    )
    tx = Transaction(tx_id="abc")
    tx.add_signature_bytes(b"\x01\x02")
    res = client.broadcast_transaction(tx)
    assert res.txid == "abc"
    body = _body(mocked)
    assert body["txID"] == "abc"
    assert body["signature"] == ["0102"]


def test_broadcast_transaction_rejected(mocked, client):
    mocked.add(
        responses.POST,
        BASE + "/broadcasttransaction",
        body='{"result": false, "code": "SIGERROR", "message": "bad sig"}',
    )
    tx = Transaction(tx_id="abc", signature=["00"])
    with pytest.raises(BroadcastError, match="Code: SIGERROR, Message: bad sig") as info:
        client.broadcast_transaction(tx)
    assert info.value.response.code == "SIGERROR"


@pytest.mark.parametrize(
    "tx, message",
    [
        (None, "empty body"),
        (Transaction(signature=["00"]), "empty transaction ID"),
        (Transaction(tx_id="abc"), "no signatures"),
    ],
)
def test_broadcast_transaction_invalid(client, tx, message):
    with pytest.raises(ValueError, match=message):
        client.broadcast_transaction(tx)