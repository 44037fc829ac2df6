"""Core CKB chain data types and their molecule serialisation."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import Any

HASH_LEN = 32
EMPTY_MSG = "cant found on chain"


def hex_to_hash(value: str) -> bytes:
    """Parse a hex string into a 32-byte hash, left-padding with zeros.

    Longer inputs keep their last 32 bytes.
    """
    text = value[2:] if value[:2] in ("0x", "0X") else value
    if len(text) % 2:
        text = "0" + text
    raw = bytes.fromhex(text)
    return raw[-HASH_LEN:].rjust(HASH_LEN, b"\0")


def _molecule_bytes(data: bytes) -> bytes:
    return struct.pack("<I", len(data)) + data


@dataclass(frozen=True)
class OutPoint:
    """Reference to one output of a transaction."""

    tx_hash: bytes
    index: int

    def __post_init__(self) -> None:
        if len(self.tx_hash) != HASH_LEN:
            raise ValueError(f"tx_hash must be {HASH_LEN} bytes, got {len(self.tx_hash)}")
        if not 0 <= self.index <= 0xFFFFFFFF:
            raise ValueError(f"index out of range: {self.index}")

    @property
    def tx_hash_hex(self) -> str:
        return "0x" + self.tx_hash.hex()

    def serialize(self) -> bytes:
        """Molecule struct: 32-byte hash followed by a little-endian u32 index."""
        return self.tx_hash + struct.pack("<I", self.index)


@dataclass(frozen=True)
class Script:
    code_hash: bytes
    hash_type: str
    args: bytes = b""

    def occupied_capacity(self) -> int:
        """Bytes this script takes in a cell."""
        return len(self.args) + HASH_LEN + 1


@dataclass
class CellOutput:
    capacity: int
    lock: Script
    type: Script | None = None

    def occupied_capacity(self, data: bytes) -> int:
        """Bytes this output takes together with its data."""
        size = 8 + len(data) + self.lock.occupied_capacity()
        if self.type is not None:
            size += self.type.occupied_capacity()
        return size


@dataclass
class CellInput:
    previous_output: OutPoint | None = None
    since: int = 0


class DepType(str, enum.Enum):
    CODE = "code"
    DEP_GROUP = "dep_group"


@dataclass(frozen=True)
class CellDep:
    out_point: OutPoint
    dep_type: DepType = DepType.CODE


@dataclass
class LiveCell:
    out_point: OutPoint
    output: CellOutput
    output_data: bytes = b""
    block_number: int = 0
    tx_index: int = 0


@dataclass
class TypeInputCell:
    """A transaction input tagged with the lock type that signs it."""

    input: CellInput
    lock_type: int
    cell_cap: int
    input_index: int = 0


@dataclass
class WitnessArgs:
    lock: bytes | None = None
    input_type: bytes | None = None
    output_type: bytes | None = None

    def serialize(self) -> bytes:
        """Molecule table of three optional byte vectors."""
        fields = [
            b"" if value is None else _molecule_bytes(value)
            for value in (self.lock, self.input_type, self.output_type)
        ]
        header_size = 4 * (1 + len(fields))
        offsets = []
        position = header_size
        for item in fields:
            offsets.append(position)
            position += len(item)
        header = struct.pack(f"<{1 + len(fields)}I", position, *offsets)
        return header + b"".join(fields)


@dataclass
class Transaction:
    version: int = 0
    cell_deps: list[CellDep] = field(default_factory=list)
    header_deps: list[bytes] = field(default_factory=list)
    inputs: list[CellInput] = field(default_factory=list)
    outputs: list[CellOutput] = field(default_factory=list)
    outputs_data: list[bytes] = field(default_factory=list)
    witnesses: list[bytes] = field(default_factory=list)


@dataclass
class TxMsgData:
    """A scanned block's base information with its transactions."""

    block_base_info: dict[str, Any]
    txs: list[Transaction] = field(default_factory=list)


class EmptyCellError(LookupError):
    """Raised when an expected cell cannot be found on chain."""

    def __init__(self, cell_name: str) -> None:
        super().__init__(f"{cell_name} {EMPTY_MSG}")
        self.cell_name = cell_name


def is_empty_error(err: BaseException | None) -> bool:
    """Tell whether ``err`` reports a cell missing from the chain."""
    return err is not None and str(err).endswith(EMPTY_MSG)