import pytest

from dascommon.cellprovider import LiveCellPack, pick_one_cell
from dascommon.ckbtypes import (
    CellOutput,
    DepType,
    EmptyCellError,
    LiveCell,
    OutPoint,
    Script,
    hex_to_hash,
    is_empty_error,
)


def _cell(tx_hex, capacity, data=b""):
    return LiveCell(
        out_point=OutPoint(hex_to_hash(tx_hex), 0),
        output=CellOutput(capacity=capacity, lock=Script(bytes(32), "type")),
        output_data=data,
    )


def test_pick_one_cell_empty_raises():
    with pytest.raises(EmptyCellError) as info:
        pick_one_cell([], "timeCell")
    assert str(info.value) == "timeCell cant found on chain"
    assert is_empty_error(info.value)


def test_pick_one_cell_single():
    cell = _cell("0x01", 500)
    pack = pick_one_cell([cell], "quoteCell")
    assert pack.live_cell is cell
    assert pack.cell_cap == 500


def test_pick_one_cell_prefers_second():
    first, second, third = _cell("0x01", 1), _cell("0x02", 2), _cell("0x03", 3)
    pack = pick_one_cell([first, second, third], "heightCell")
    assert pack.live_cell is second
    assert pack.cell_cap == 2


def test_tx_hash():
    cell = _cell("0x0a", 10)
    pack = LiveCellPack(live_cell=cell, cell_cap=10)
    assert pack.tx_hash() == hex_to_hash("0x0a")


def test_to_cell_dep():
    cell = _cell("0x0b", 10)
    dep = LiveCellPack(live_cell=cell, cell_cap=10).to_cell_dep()
    assert dep.out_point == cell.out_point
    assert dep.dep_type is DepType.CODE


def test_type_input_cell():
    cell = _cell("0x0c", 77)
    type_input = LiveCellPack(live_cell=cell, cell_cap=77).type_input_cell(3)
    assert type_input.lock_type == 3
    assert type_input.cell_cap == 77
    assert type_input.input.previous_output == cell.out_point
    assert type_input.input.since == 0


def test_latest_value_reads_big_endian_after_header():
    data = b"\x00\x01" + (1234567890).to_bytes(8, "big")
    pack = LiveCellPack(live_cell=_cell("0x0d", 1, data), cell_cap=1)
    assert pack.latest_value() == 1234567890


def test_latest_value_ignores_trailing_bytes():
    data = b"\x00\x01" + (42).to_bytes(8, "big") + b"\xff\xff"
    pack = LiveCellPack(live_cell=_cell("0x0d", 1, data), cell_cap=1)
    assert pack.latest_value() == 42


def test_latest_value_empty_data_raises():
    pack = LiveCellPack(live_cell=_cell("0x0e", 1), cell_cap=1)
    with pytest.raises(ValueError):
        pack.latest_value()


def test_latest_value_short_data_raises():
    pack = LiveCellPack(live_cell=_cell("0x0f", 1, b"\x00\x01\x02"), cell_cap=1)
    with pytest.raises(ValueError):
        pack.latest_value()