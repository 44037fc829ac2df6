"""Wrappers around live cells found on chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .ckbtypes import CellDep, CellInput, DepType, EmptyCellError, LiveCell, TypeInputCell

_VALUE_OFFSET = 2
_VALUE_SIZE = 8


@dataclass
class LiveCellPack:
    """A live cell with its capacity and optional decoded witness content."""

    live_cell: LiveCell
    cell_cap: int
    obj: Any = None
    witness_data: bytes = b""

    def tx_hash(self) -> bytes:
        return self.live_cell.out_point.tx_hash

    def to_cell_dep(self) -> CellDep:
        """Reference the cell as a code dependency."""
        return CellDep(out_point=self.live_cell.out_point, dep_type=DepType.CODE)

    def type_input_cell(self, lock_type: int) -> TypeInputCell:
        """Spend the cell as an input signed by ``lock_type``."""
        return TypeInputCell(
            input=CellInput(previous_output=self.live_cell.out_point),
            lock_type=lock_type,
            cell_cap=self.cell_cap,
        )

    def latest_value(self) -> int:
        """The big-endian int64 after the two-byte header (time or block height)."""
        data = self.live_cell.output_data
        if not data:
            raise ValueError("invalid cell data: empty")
        raw = data[_VALUE_OFFSET:_VALUE_OFFSET + _VALUE_SIZE]
        if len(raw) < _VALUE_SIZE:
            raise ValueError(f"invalid cell data: {len(data)} bytes is too short")
        return int.from_bytes(raw, "big", signed=True)


def pick_one_cell(live_cells: Sequence[LiveCell], cell_name: str) -> LiveCellPack:
    """Choose the cell to use from those found: the second when there are several.

    Raises EmptyCellError when there are none.
    """
    if not live_cells:
        raise EmptyCellError(cell_name)
    chosen = live_cells[1] if len(live_cells) > 1 else live_cells[0]
    return LiveCellPack(live_cell=chosen, cell_cap=chosen.output.capacity)