# dascommon

Building blocks for services that assemble and track transactions on the CKB
chain for an account system.

## What is inside

- `dascommon.config`: `load_config(path)` reads a YAML file and returns its
  content (an empty file gives `{}`). It raises `ConfigError` if the file
  cannot be opened, read or parsed.
- `dascommon.ethformat`: `hex_format` strips a `0x`/`0X` prefix and pads to an
  even number of digits; `big_int_from_hex` returns an `int` or `None` for
  invalid hex; `hex_to_uint64` raises `ValueError` for invalid digits or
  values beyond 64 bits.
- `dascommon.tronaddr`: Base58Check encoding and decoding with a
  double-SHA256 checksum (`encode58_check`, `decode58_check`) and the TRON
  address wrappers `pubkey_hex_to_base58` and `pubkey_hex_from_base58`.
  Bad input raises `AddressError`, a subclass of `ValueError`.
- `dascommon.ckbtypes`: data classes for the chain (`OutPoint`, `Script`,
  `CellOutput`, `CellInput`, `CellDep`, `DepType`, `LiveCell`,
  `TypeInputCell`, `WitnessArgs`, `Transaction`, `TxMsgData`), molecule
  serialisation for `OutPoint` and `WitnessArgs`, `hex_to_hash`, and
  `EmptyCellError` / `is_empty_error` for "cell not found on chain".
- `dascommon.repeatchecker`: `NormalCellRepeater` remembers recently spent
  out-points (in an LRU cache of 20000 entries by default) and reports them
  as unusable until `secs_overdue` seconds have passed. `usable_cells`
  filters a list of live cells.
- `dascommon.txpool`: `ChainTxPool` keeps a snapshot of the node's raw
  transaction pool, refreshed through a callable you pass to `refresh` or
  `run`; `find_tx` searches it and `dump` renders it as JSON.
  `RecentUsedTxManager` stores recently produced cells (`RecentUsedTx`);
  `pop_local` returns an unexpired entry at once, while `pop_confirmed`
  waits, up to `retry_time` checks, for its transaction to appear in the pool.
- `dascommon.builder`: `TransactionBuilder` collects cell deps (skipping
  duplicates, optionally producing a witness per dep), inputs, outputs and
  witnesses; works out the capacity still needed (`need_capacity_value`),
  picks live cells to cover it (`add_inputs_for_capacity`), adds a change
  output (`add_charge_output`) and places inputs grouped by lock type
  (`build_inputs`, returning `BuildTransactionResult` items). Shortfalls
  raise `CapacityError`.
- `dascommon.signing`: `ckb_hash` (Blake2b-256 with the CKB
  personalisation), `build_tx_message` for an input group, and
  `sign_transaction` / `sign_transaction_message` /
  `append_signed_to_witnesses`, which write the signed witness args into the
  witness list.
- `dascommon.cellprovider`: `LiveCellPack` wraps a live cell for use as a
  code cell dep or typed input, and `latest_value` reads the big-endian
  int64 after a two-byte header (as in time and block-height cells).
  `pick_one_cell` chooses a cell from a search result, the second when
  several are found, and raises `EmptyCellError` when none are.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from dascommon.ethformat import hex_to_uint64
from dascommon.tronaddr import pubkey_hex_from_base58, pubkey_hex_to_base58

assert hex_to_uint64("0x1f") == 31

hex_addr = pubkey_hex_from_base58("TQoLh9evwUmZKxpD1uhFttsZk3EBs8BksV")
assert pubkey_hex_to_base58(hex_addr) == "TQoLh9evwUmZKxpD1uhFttsZk3EBs8BksV"
```

## What it does not do

- It has no client for a chain node or indexer and makes no network calls.
  Anything that needs node data, such as refreshing `ChainTxPool` or finding
  live cells, takes data or a callable that you supply.
- It holds no private keys and implements no signature scheme: signing
  functions take any object with a `sign(message) -> bytes` method.
- It does not compute transaction hashes; `build_tx_message` and
  `sign_transaction` take the hash as an argument.
- It has no block scanner or block storage, no Ethereum or TRON transaction
  building or signature verification, and no payment service client.
- It has no command-line program.