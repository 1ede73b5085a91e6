import pytest

from tronkit.abi import get_padded_param, load_from_json, pack, selector
from tronkit.abicodec import AbiError
from tronkit.address import Address

TRON_ADDRESS = "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"


def test_get_padded_param():
    params = [
        "string", "KLV Test Token",
        "string", "KLV",
        "uint8", "6",
        "uint256", "100000000000000000000",
    ]
    assert len(get_padded_param(params)) == 256


def test_get_padded_param_odd_len():
    params = [
        "string", "KLV Test Token",
        "string", "KLV",
        "uint8", "6",
        "uint256",
    ]
    with pytest.raises(AbiError, match="expected even number of params, got 7"):
        get_padded_param(params)


def test_get_padded_param_address_array():
    b = get_padded_param(["address[2]", [TRON_ADDRESS, TRON_ADDRESS]])
    assert len(b) == 64
    assert b.hex() == (
        "000000000000000000000000364b03e0815687edaf90b81ff58e496dea7383d7"
        "000000000000000000000000364b03e0815687edaf90b81ff58e496dea7383d7"
    )


def test_get_padded_param_uint256_array():
    b = get_padded_param(["uint256[2]", ["100000000000000000000", "200000000000000000000"]])
    assert len(b) == 64
    assert b.hex() == (
        "0000000000000000000000000000000000000000000000056bc75e2d63100000"
        "00000000000000000000000000000000000000000000000ad78ebc5ac6200000"
    )


def test_get_padded_param_bytes32():
    value = bytes([0, 1, 2] * 10 + [0, 1])
    b = get_padded_param(["bytes32", value])
    assert len(b) == 32
    assert b.hex() == "0001020001020001020001020001020001020001020001020001020001020001"


def test_get_padded_param_hex_uint256():
    b = get_padded_param(["uint256", "43981", "uint256", "0xABCD"])
    assert len(b) == 64
    assert b.hex() == (
        "000000000000000000000000000000000000000000000000000000000000abcd"
        "000000000000000000000000000000000000000000000000000000000000abcd"
    )


@pytest.mark.parametrize(
    "byte_array, expected, expected_len",
    [
        (
            [],
            "0000000000000000000000000000000000000000000000000000000000000020"
            "0000000000000000000000000000000000000000000000000000000000000000",
            64,
        ),
        (
            [bytes([0x01, 0x02, 0x03, 0x04])],
            "0000000000000000000000000000000000000000000000000000000000000020"
            "0000000000000000000000000000000000000000000000000000000000000001"
            "0000000000000000000000000000000000000000000000000000000000000020"
            "0000000000000000000000000000000000000000000000000000000000000004"
            "0102030400000000000000000000000000000000000000000000000000000000",
            160,
        ),
        (
            [bytes([1]), bytes([2]), bytes([3])],
            "0000000000000000000000000000000000000000000000000000000000000020"
            "0000000000000000000000000000000000000000000000000000000000000003"
            "0000000000000000000000000000000000000000000000000000000000000060"
            "00000000000000000000000000000000000000000000000000000000000000a0"
            "00000000000000000000000000000000000000000000000000000000000000e0"
            "0000000000000000000000000000000000000000000000000000000000000001"
            "0100000000000000000000000000000000000000000000000000000000000000"
            "0000000000000000000000000000000000000000000000000000000000000001"
            "0200000000000000000000000000000000000000000000000000000000000000"
            "0000000000000000000000000000000000000000000000000000000000000001"
            "0300000000000000000000000000000000000000000000000000000000000000",
            352,
        ),
        (
            [bytes([0x01, 0x02]), bytes([0x03, 0x04, 0x05])],
            "0000000000000000000000000000000000000000000000000000000000000020"
            "0000000000000000000000000000000000000000000000000000000000000002"
            "0000000000000000000000000000000000000000000000000000000000000040"
            "0000000000000000000000000000000000000000000000000000000000000080"
            "0000000000000000000000000000000000000000000000000000000000000002"
            "0102000000000000000000000000000000000000000000000000000000000000"
            "0000000000000000000000000000000000000000000000000000000000000003"
            "0304050000000000000000000000000000000000000000000000000000000000",
            256,
        ),
        (
            [bytes([0x01, 0x02]), b"", bytes([0x03, 0x04, 0x05])],
            "0000000000000000000000000000000000000000000000000000000000000020"
            "0000000000000000000000000000000000000000000000000000000000000003"
            "0000000000000000000000000000000000000000000000000000000000000060"
            "00000000000000000000000000000000000000000000000000000000000000a0"
            "00000000000000000000000000000000000000000000000000000000000000c0"
            "0000000000000000000000000000000000000000000000000000000000000002"
            "0102000000000000000000000000000000000000000000000000000000000000"
            "0000000000000000000000000000000000000000000000000000000000000000"
            "0000000000000000000000000000000000000000000000000000000000000003"
            "0304050000000000000000000000000000000000000000000000000000000000",
            320,
        ),
    ],
    ids=[
        "empty",
        "single element",
        "multiple elements",
        "mixed content",
        "mixed content with empty",
    ],
)
def test_get_padded_param_bytes_array(byte_array, expected, expected_len):
    b = get_padded_param(["bytes[]", byte_array])
    assert len(b) == expected_len
    assert b.hex() == expected


def test_load_from_json():
    params = load_from_json('[{"bytes[]":"[\\"01020304\\"]"}]')
    assert len(params) == 1
    assert params[0] == {"bytes[]": '["01020304"]'}

    params = load_from_json(
        '[{"address[2]":["TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R", "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"]},'
        '{"uint256[2]":["100000000000000000000", "200000000000000000000"]}]'
    )
    assert len(params) == 2
    assert params[0] == {"address[2]": [TRON_ADDRESS, TRON_ADDRESS]}
    assert params[1] == {"uint256[2]": ["100000000000000000000", "200000000000000000000"]}


def test_load_from_json_empty_text():
    assert load_from_json("") == []


@pytest.mark.parametrize("text", ["{}", "not json", "[1, 2]"])
def test_load_from_json_rejects_non_arrays(text):
    with pytest.raises(AbiError):
        load_from_json(text)


def test_selector():
    assert selector("transfer(address,uint256)").hex() == "a9059cbb"
    assert selector("createAndOpen(address,address)").hex() == "581f3c50"
    assert selector("transferFrom(address,address,uint256)").hex() == "23b872dd"


def test_pack():
    packed = pack(
        "transferFrom(address,address,uint256)",
        [
            "address", "0x364b03e0815687edaf90b81ff58e496dea7383d7",
            "address", "0x364b03e0815687edaf90b81ff58e496dea7383d7",
            "uint256", "10000000000000000",
        ],
    )
    assert packed.hex() == (
        "23b872dd"
        "000000000000000000000000364b03e0815687edaf90b81ff58e496dea7383d7"
        "000000000000000000000000364b03e0815687edaf90b81ff58e496dea7383d7"
        "000000000000000000000000000000000000000000000000002386f26fc10000"
    )


def test_pack_without_params_is_selector():
    assert pack("transfer(address,uint256)") == selector("transfer(address,uint256)")


def test_address_object_matches_string():
    by_object = get_padded_param(["address", Address.parse(TRON_ADDRESS)])
    assert by_object == get_padded_param(["address", TRON_ADDRESS])


def test_address_object_list_matches_strings():
    addr = Address.parse(TRON_ADDRESS)
    by_objects = get_padded_param(["address[]", [addr, addr]])
    assert by_objects == get_padded_param(["address[]", [TRON_ADDRESS, TRON_ADDRESS]])


def test_small_int_string_matches_int():
    assert get_padded_param(["uint8", "6"]) == get_padded_param(["uint8", 6])


def test_bytes32_from_hex_string_matches_bytes():
    value = bytes(range(32))
    assert get_padded_param(["bytes32", value.hex()]) == get_padded_param(["bytes32", value])


def test_bytes32_wrong_size_string():
    with pytest.raises(AbiError, match="invalid size"):
        get_padded_param(["bytes32", "0102"])


def test_non_string_type_key():
    with pytest.raises(AbiError, match="invalid non-string type"):
        get_padded_param([5, "x"])


def test_unknown_type():
    with pytest.raises(AbiError, match="could not parse type"):
        get_padded_param(["uint7", "1"])


def test_partially_convertible_address_list():
    with pytest.raises(AbiError, match="failed to convert all base58 addresses"):
        get_padded_param(["address[]", [TRON_ADDRESS, "not-an-address"]])


def test_invalid_single_address():
    with pytest.raises(AbiError, match="invalid address"):
        get_padded_param(["address", "not-an-address"])


def test_invalid_small_integer_string():
    with pytest.raises(AbiError):
        get_padded_param(["uint8", "abc"])