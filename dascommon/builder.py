"""Incremental construction of CKB transactions with capacity bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Tuple, Union

from .ckbtypes import (
    CellDep,
    CellInput,
    CellOutput,
    DepType,
    LiveCell,
    OutPoint,
    Script,
    Transaction,
    TypeInputCell,
    WitnessArgs,
)

ONE_CKB = 100_000_000
CKB_TX_MIN_OUTPUT_CAPACITY = 61 * ONE_CKB
SIGNATURE_PLACEHOLDER = bytes(65)
EMPTY_WITNESS_ARG_PLACEHOLDER = bytes(89)

WitnessFactory = Callable[[int], bytes]
CellDepItem = Union[CellDep, Tuple[CellDep, Optional[WitnessFactory]]]


class CapacityError(ValueError):
    """Raised when inputs do not cover outputs plus fee as required."""


def _empty_witness_arg() -> WitnessArgs:
    return WitnessArgs(lock=bytes(SIGNATURE_PLACEHOLDER))


@dataclass
class BuildTransactionResult:
    """Inputs of one lock type: their positions and the witness to sign."""

    lock_type: int
    group: list[int]
    witness_arg: WitnessArgs = field(default_factory=_empty_witness_arg)


class TransactionBuilder:
    """Collects cell deps, inputs, outputs and witnesses into a transaction."""

    def __init__(self, from_script: Script | None, fee: int) -> None:
        self._from_script = from_script
        self._fee = fee
        self._total_input_cap = 0
        self._total_output_cap = 0
        self._input_list: list[TypeInputCell] = []
        self._custom_witnesses: list[bytes] = []
        self._tx = Transaction(version=0, header_deps=[])

    @property
    def from_script(self) -> Script | None:
        return self._from_script

    @property
    def fee(self) -> int:
        return self._fee

    @property
    def total_input_cap(self) -> int:
        return self._total_input_cap

    @property
    def total_output_cap(self) -> int:
        return self._total_output_cap

    @property
    def input_list(self) -> list[TypeInputCell]:
        return list(self._input_list)

    @property
    def custom_witnesses(self) -> list[bytes]:
        return list(self._custom_witnesses)

    @property
    def tx(self) -> Transaction:
        return self._tx

    def inputs_outputs_fee_capacity(self) -> tuple[int, int, int]:
        """Return ``(fee, input capacity, output capacity)`` if they balance exactly."""
        if self._total_input_cap != self._total_output_cap + self._fee:
            raise CapacityError("capacity error, not equal")
        return self._fee, self._total_input_cap, self._total_output_cap

    def add_cell_dep(
        self,
        cell_dep: CellDep | None,
        witness_factory: WitnessFactory | None = None,
    ) -> "TransactionBuilder":
        """Add a cell dep once; ``witness_factory`` gets its index and yields a witness."""
        if cell_dep is None:
            return self
        for existing in self._tx.cell_deps:
            if (
                existing.out_point.tx_hash == cell_dep.out_point.tx_hash
                and existing.out_point.index == cell_dep.out_point.index
            ):
                return self
        self._tx.cell_deps.append(cell_dep)
        if witness_factory is not None:
            index = len(self._tx.cell_deps) - 1
            self._custom_witnesses.append(witness_factory(index))
        return self

    def add_cell_deps(self, cell_deps: Iterable[CellDepItem]) -> "TransactionBuilder":
        """Add cell deps, each given alone or as ``(dep, witness_factory)``."""
        for item in cell_deps:
            if isinstance(item, tuple):
                dep, factory = item
                self.add_cell_dep(dep, factory)
            else:
                self.add_cell_dep(item)
        return self

    def add_input(self, type_input: TypeInputCell) -> "TransactionBuilder":
        self._total_input_cap += type_input.cell_cap
        self._input_list.append(type_input)
        return self

    def add_inputs(self, type_inputs: Iterable[TypeInputCell]) -> "TransactionBuilder":
        for type_input in type_inputs:
            self.add_input(type_input)
        return self

    def output_index(self) -> int:
        """Index of the most recently added output."""
        if not self._tx.outputs:
            raise IndexError("transaction has no outputs")
        return len(self._tx.outputs) - 1

    def add_inputs_for_capacity(
        self,
        live_cells: Iterable[LiveCell],
        lock_type: int,
        need_cap: int | None = None,
    ) -> list[OutPoint]:
        """Add live cells as inputs until ``need_cap`` is covered.

        ``need_cap`` defaults to :meth:`need_capacity_value`. Returns the
        out-points used; raises CapacityError if the cells fall short.
        """
        if need_cap is None:
            need_cap = self.need_capacity_value()
        if need_cap == 0:
            return []
        used: list[OutPoint] = []
        collected = 0
        for cell in live_cells:
            if collected >= need_cap:
                break
            out_point = OutPoint(cell.out_point.tx_hash, cell.out_point.index)
            capacity = cell.output.capacity
            self.add_input(
                TypeInputCell(
                    input=CellInput(previous_output=out_point, since=0),
                    lock_type=lock_type,
                    cell_cap=capacity,
                )
            )
            used.append(out_point)
            collected += capacity
        if collected < need_cap:
            raise CapacityError(
                f"AddInputAutoComputeItems:not enough capacity, input: {collected}, want: {need_cap}"
            )
        return used

    def add_output(self, output: CellOutput, data: bytes = b"") -> "TransactionBuilder":
        self._tx.outputs.append(output)
        self._tx.outputs_data.append(bytes(data) if data is not None else b"")
        self._total_output_cap += output.capacity
        return self

    def need_capacity_value(self) -> int:
        """Capacity still to be gathered from inputs, or change worth returning."""
        minimum = CKB_TX_MIN_OUTPUT_CAPACITY + self._fee
        if self._total_output_cap < minimum:
            return minimum
        total_spend = self._total_output_cap + self._fee
        if total_spend > self._total_input_cap:
            return total_spend - self._total_input_cap
        left = self._total_input_cap - total_spend
        if left > CKB_TX_MIN_OUTPUT_CAPACITY:
            return left
        return 0

    def add_charge_output(
        self,
        receiver: Script,
        sign_cell_dep: CellDep | OutPoint,
        append_to_charge: bool = False,
    ) -> "TransactionBuilder":
        """Return the surplus to ``receiver``; call after inputs and outputs are added.

        A surplus too small for its own cell is added to the first output
        locked by ``receiver`` when ``append_to_charge`` is set, and otherwise
        left to the miner.
        """
        if isinstance(sign_cell_dep, OutPoint):
            sign_cell_dep = CellDep(out_point=sign_cell_dep, dep_type=DepType.DEP_GROUP)
        self.add_cell_dep(sign_cell_dep)
        spend = self._total_output_cap + self._fee
        if self._total_input_cap < spend:
            return self
        charge = self._total_input_cap - spend
        if charge < CKB_TX_MIN_OUTPUT_CAPACITY:
            if append_to_charge:
                for output in self._tx.outputs:
                    if output.lock == receiver:
                        output.capacity += charge
                        break
            return self
        self._tx.outputs.append(CellOutput(capacity=charge, lock=receiver, type=None))
        self._tx.outputs_data.append(b"")
        return self

    def add_witness(self, witness: bytes) -> "TransactionBuilder":
        self._custom_witnesses.append(witness)
        return self

    def build_witness(self) -> "TransactionBuilder":
        """Append the collected custom witnesses to the transaction."""
        self._tx.witnesses.extend(self._custom_witnesses)
        return self

    def build_transaction(self) -> None:
        """Check that inputs cover outputs plus fee."""
        want = self._total_output_cap + self._fee
        if self._total_input_cap < want:
            raise CapacityError(
                f"not enough capacity, input: {self._total_input_cap}, want: {want}"
            )

    def _add_inputs_for_transaction(self, type_inputs: list[TypeInputCell]) -> list[int]:
        if not type_inputs:
            raise ValueError("input cells empty")
        start = len(self._tx.inputs)
        group = []
        for offset, type_input in enumerate(type_inputs):
            type_input.input_index = start + offset
            self._tx.inputs.append(type_input.input)
            self._tx.witnesses.append(b"")
            group.append(start + offset)
        self._tx.witnesses[start] = EMPTY_WITNESS_ARG_PLACEHOLDER
        return group

    def build_inputs(self) -> list[BuildTransactionResult]:
        """Place inputs into the transaction, grouped by lock type.

        Groups appear in the order their lock type was first added; each
        group's first witness gets a placeholder to be signed later.
        """
        by_lock: dict[int, list[TypeInputCell]] = {}
        for type_input in self._input_list:
            by_lock.setdefault(type_input.lock_type, []).append(type_input)
        return [
            BuildTransactionResult(
                lock_type=lock_type,
                group=self._add_inputs_for_transaction(items),
                witness_arg=_empty_witness_arg(),
            )
            for lock_type, items in by_lock.items()
        ]

    def log(self) -> str:
        cap_info = (
            f"input cap: {self._total_input_cap}, "
            f"output cap without charge: {self._total_output_cap}, "
            f"need cap include fee: {self.need_capacity_value()}"
        )
        return (
            f"deps count: {len(self._tx.cell_deps)}, input count: {len(self._input_list)}, "
            f"output count: {len(self._tx.outputs)} \n"
            f"data count: {len(self._tx.outputs_data)}\n"
            f"witnesses count: {len(self._tx.witnesses)}\n"
            f"{cap_info}"
        )