"""Signing messages and witnesses for CKB transactions."""

from __future__ import annotations

import hashlib
import struct
from typing import Protocol, Sequence

from .ckbtypes import HASH_LEN, WitnessArgs

_CKB_PERSONALIZATION = b"ckb-default-hash"


class Signer(Protocol):
    def sign(self, message: bytes) -> bytes:
        ...


def ckb_hash(data: bytes) -> bytes:
    """Blake2b-256 with the CKB personalisation."""
    return hashlib.blake2b(data, digest_size=32, person=_CKB_PERSONALIZATION).digest()


def _length_prefixed(data: bytes) -> bytes:
    return struct.pack("<Q", len(data)) + data


def build_tx_message(
    tx_hash: bytes,
    witnesses: Sequence[bytes],
    input_count: int,
    group: Sequence[int],
    witness_args: WitnessArgs,
) -> bytes:
    """Digest to sign for one input group.

    It covers the transaction hash, the group's witness args, the other
    witnesses of the group and every witness beyond the inputs.
    """
    if len(tx_hash) != HASH_LEN:
        raise ValueError(f"tx_hash must be {HASH_LEN} bytes, got {len(tx_hash)}")
    parts = [tx_hash, _length_prefixed(witness_args.serialize())]
    parts.extend(_length_prefixed(witnesses[index]) for index in group[1:])
    parts.extend(_length_prefixed(witness) for witness in witnesses[input_count:])
    return ckb_hash(b"".join(parts))


def append_signed_to_witnesses(
    witnesses: list[bytes],
    group: Sequence[int],
    witness_args: WitnessArgs,
    signed: bytes,
) -> bytes:
    """Store the signed witness args at the group's first witness and return them."""
    if not group:
        raise ValueError("input group is empty")
    signed_args = WitnessArgs(
        lock=signed,
        input_type=witness_args.input_type,
        output_type=witness_args.output_type,
    )
    serialized = signed_args.serialize()
    witnesses[group[0]] = serialized
    return serialized


def sign_transaction_message(
    witnesses: list[bytes],
    group: Sequence[int],
    witness_args: WitnessArgs,
    message: bytes,
    key: Signer,
) -> bytes:
    """Sign ``message`` with ``key`` and place the result into ``witnesses``."""
    signed = key.sign(message)
    return append_signed_to_witnesses(witnesses, group, witness_args, signed)


def sign_transaction(
    tx_hash: bytes,
    witnesses: list[bytes],
    input_count: int,
    group: Sequence[int],
    witness_args: WitnessArgs,
    key: Signer,
) -> bytes:
    """Build the group's message, sign it and store the signed witness."""
    message = build_tx_message(tx_hash, witnesses, input_count, group, witness_args)
    return sign_transaction_message(witnesses, group, witness_args, message, key)