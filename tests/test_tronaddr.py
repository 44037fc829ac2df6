import pytest

from dascommon.tronaddr import (
    AddressError,
    decode58_check,
    encode58_check,
    pubkey_hex_from_base58,
    pubkey_hex_to_base58,
)

ADDRESS = "TQoLh9evwUmZKxpD1uhFttsZk3EBs8BksV"


def test_decode_known_address():
    hex_address = pubkey_hex_from_base58(ADDRESS)
    assert hex_address.startswith("41")
    assert len(hex_address) == 42


def test_decode_then_encode_round_trip():
    assert pubkey_hex_to_base58(pubkey_hex_from_base58(ADDRESS)) == ADDRESS


def test_leading_one_breaks_checksum():
    with pytest.raises(AddressError, match="decode base58"):
        pubkey_hex_from_base58("1" + ADDRESS)


def test_zero_address_pinned():
    assert encode58_check("41" + "00" * 20) == "T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb"


@pytest.mark.parametrize("payload", ["41" + "ab" * 20, "00", "0000ff", "41" + "00" * 20])
def test_encode_decode_round_trip(payload):
    assert decode58_check(encode58_check(payload)) == payload


def test_invalid_base58_character():
    with pytest.raises(AddressError):
        decode58_check("T0OIl")


def test_too_short():
    with pytest.raises(AddressError):
        decode58_check("1")


def test_invalid_hex_input():
    with pytest.raises(AddressError, match="encode 58check"):
        pubkey_hex_to_base58("not-hex")