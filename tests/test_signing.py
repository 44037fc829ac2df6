import pytest

from dascommon.ckbtypes import WitnessArgs, hex_to_hash
from dascommon.signing import (
    append_signed_to_witnesses,
    build_tx_message,
    ckb_hash,
    sign_transaction,
    sign_transaction_message,
)

TX_HASH = hex_to_hash("0xabcdef")


class _Signer:
    def __init__(self):
        self.messages = []

    def sign(self, message):
        self.messages.append(message)
        return bytes(range(65))


def _witness_args():
    return WitnessArgs(lock=bytes(65))


def _witnesses():
    return [b"\x01", b"\x02", b"\x03", b"extra-1", b"extra-2"]


def test_ckb_hash_of_empty_input():
    assert ckb_hash(b"").hex() == "44f4c69744d5f8c55d642062949dcae49bc4e7ef43d388c5a12f42b5633d163e"


def test_ckb_hash_is_deterministic_32_bytes():
    assert ckb_hash(b"abc") == ckb_hash(b"abc")
    assert len(ckb_hash(b"abc")) == 32
    assert ckb_hash(b"abc") != ckb_hash(b"abd")


def test_message_ignores_first_group_witness():
    base = _witnesses()
    changed = _witnesses()
    changed[0] = b"something else"
    first = build_tx_message(TX_HASH, base, 3, [0, 1], _witness_args())
    second = build_tx_message(TX_HASH, changed, 3, [0, 1], _witness_args())
    assert first == second


def test_message_covers_other_group_witnesses():
    changed = _witnesses()
    changed[1] = b"\x09"
    first = build_tx_message(TX_HASH, _witnesses(), 3, [0, 1], _witness_args())
    second = build_tx_message(TX_HASH, changed, 3, [0, 1], _witness_args())
    assert first != second
    assert len(first) == 32


def test_message_ignores_witnesses_of_other_groups():
    changed = _witnesses()
    changed[2] = b"\x09"
    first = build_tx_message(TX_HASH, _witnesses(), 3, [0, 1], _witness_args())
    second = build_tx_message(TX_HASH, changed, 3, [0, 1], _witness_args())
    assert first == second


def test_message_covers_witnesses_beyond_inputs():
    changed = _witnesses()
    changed[4] = b"changed"
    first = build_tx_message(TX_HASH, _witnesses(), 3, [0], _witness_args())
    second = build_tx_message(TX_HASH, changed, 3, [0], _witness_args())
    assert first != second
    assert len(second) == 32


def test_message_depends_on_tx_hash():
    other = hex_to_hash("0x01")
    first = build_tx_message(TX_HASH, _witnesses(), 3, [0], _witness_args())
    second = build_tx_message(other, _witnesses(), 3, [0], _witness_args())
    assert first != second
    assert first == build_tx_message(TX_HASH, _witnesses(), 3, [0], _witness_args())


def test_message_rejects_short_tx_hash():
    with pytest.raises(ValueError):
        build_tx_message(b"\x01\x02", _witnesses(), 3, [0], _witness_args())


def test_append_signed_replaces_first_group_witness():
    witnesses = _witnesses()
    args = WitnessArgs(lock=bytes(65), input_type=b"in")
    result = append_signed_to_witnesses(witnesses, [1, 2], args, b"sig")
    expected = WitnessArgs(lock=b"sig", input_type=b"in").serialize()
    assert result == expected
    assert witnesses[1] == expected
    assert witnesses[0] == b"\x01"
    assert witnesses[2] == b"\x03"


def test_append_signed_rejects_empty_group():
    with pytest.raises(ValueError):
        append_signed_to_witnesses(_witnesses(), [], _witness_args(), b"sig")


def test_sign_transaction_message_uses_key():
    witnesses = _witnesses()
    signer = _Signer()
    result = sign_transaction_message(witnesses, [0], _witness_args(), b"msg", signer)
    assert signer.messages == [b"msg"]
    assert witnesses[0] == result == WitnessArgs(lock=bytes(range(65))).serialize()


def test_sign_transaction_signs_built_message():
    witnesses = _witnesses()
    expected_message = build_tx_message(TX_HASH, _witnesses(), 3, [0, 1], _witness_args())
    signer = _Signer()
    sign_transaction(TX_HASH, witnesses, 3, [0, 1], _witness_args(), signer)
    assert signer.messages == [expected_message]
    assert witnesses[0] == WitnessArgs(lock=bytes(range(65))).serialize()
    assert witnesses[1:] == _witnesses()[1:]