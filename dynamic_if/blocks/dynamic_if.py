"""
Dynamic if block: an if/then block whose else-if and else cases appear while
blocks are dragged over it and are tidied up when the drag ends.

Slots, in order: IF<n>/DO<n> pairs (condition, branch), then an optional ELSE.
IF0/DO0 always exist. Case counts are derived from the slot list, never cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from dynamic_if import reconciler
from dynamic_if.config import resolve_block_config
from dynamic_if.foundation.block import AbstractBaseBlock
from dynamic_if.foundation.connection import Connection
from dynamic_if.foundation.events import ShapeChanged
from dynamic_if.foundation.registry import register_block
from dynamic_if.foundation.slot import Slot, SlotRole
from dynamic_if.mutation import shape_to_string

ELSE_NAME = SlotRole.ELSE.value


def condition_name(discriminator: Union[str, int]) -> str:
    return f"{SlotRole.CONDITION.value}{discriminator}"


def branch_name(discriminator: Union[str, int]) -> str:
    return f"{SlotRole.BRANCH.value}{discriminator}"


@dataclass
class ValidationResult:
    """Result of shape validation: errors (broken invariants) and warnings."""

    errors: List[str]
    warnings: List[str]

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


@register_block("dynamic_if")
class DynamicIfBlock(AbstractBaseBlock):
    """
    Block for if/elseif/else statements. Must have one if case.
    Can have any number of elseif cases and optionally one else case.
    """

    #: Minimum number of cases for this block.
    min_cases = 1

    @property
    def block_type(self) -> str:
        return "dynamic_if"

    def init(self) -> None:
        self._config = resolve_block_config(self._config)
        self.style = self._config["style"]
        self.help_url = self._config["help_url"]
        self.tooltip = self._config["tooltip"]
        self.append_value_input(
            condition_name(0), SlotRole.CONDITION, self._msg("if"), check=self._condition_check()
        )
        self.append_statement_input(branch_name(0), SlotRole.BRANCH, self._msg("then"))
        self.set_previous_statement(True)
        self.set_next_statement(True)

    def _msg(self, key: str) -> str:
        return self._config["messages"][key]

    def _condition_check(self) -> Optional[List[str]]:
        check = self._config.get("condition_check")
        if not check:
            return None
        return [check] if isinstance(check, str) else list(check)

    # --- Slot model ---

    def get_slot(self, name: str) -> Optional[Slot]:
        return self.get_input(name)

    def index_of(self, connection: Connection) -> Optional[int]:
        """Position of the slot owning `connection`, or None if it is not one of ours."""
        for i, slot in enumerate(self._inputs):
            if slot.connection is connection:
                return i
        return None

    def insert_case_pair_before(self, index: int, discriminator: Union[str, int]) -> Tuple[Slot, Slot]:
        """
        Insert an IF/DO pair before the slot at `index` (index == len(slots) appends).
        Returns (condition, branch).
        """
        size = len(self._inputs)
        if index < 0 or index > size:
            raise IndexError(f"Slot index {index} out of range for {size} slots on {self.block_id!r}")
        cond = self.append_value_input(
            condition_name(discriminator), SlotRole.CONDITION, self._msg("elseif"),
            check=self._condition_check(),
        )
        branch = self.append_statement_input(branch_name(discriminator), SlotRole.BRANCH, self._msg("then"))
        if index < size:
            self.move_input_before(cond.name, self._inputs[index].name)
            self.move_input_before(branch.name, self._inputs[index + 1].name)
        return cond, branch

    def remove_all_dynamic_slots(self) -> None:
        """Remove every slot except the first IF/DO pair (attached blocks are unplugged)."""
        for slot in reversed(self._inputs[2:]):
            self.remove_input(slot.name)

    def canonicalize_first_pair(self) -> None:
        """Give the mandatory first pair the canonical IF0/DO0 names."""
        cond, branch = self._inputs[0], self._inputs[1]
        self.rename_input(cond.name, condition_name(0))
        self.rename_input(branch.name, branch_name(0))

    def append_else_slot(self, target: Optional[Connection] = None) -> Slot:
        slot = self.append_statement_input(ELSE_NAME, SlotRole.ELSE, self._msg("else"))
        if target is not None:
            slot.connection.connect(target)
        return slot

    def cases(self) -> Iterator[Tuple[Slot, Slot]]:
        """(condition, branch) pairs in slot order."""
        slots = self._inputs
        for i, slot in enumerate(slots[:-1]):
            if slot.role == SlotRole.CONDITION and slots[i + 1].role == SlotRole.BRANCH:
                yield slot, slots[i + 1]

    @property
    def case_count(self) -> int:
        return max(sum(1 for _ in self.cases()), self.min_cases)

    @property
    def elseif_count(self) -> int:
        return self.case_count - 1

    @property
    def has_else(self) -> bool:
        return self.get_input(ELSE_NAME) is not None

    def validate_shape(self, canonical: bool = True, strict: bool = False) -> ValidationResult:
        """
        Check slot ordering invariants. With canonical=True also require IF0..IF<n-1>
        numbering; empty else-if cases are reported as warnings.
        If strict=True and there are errors, raise ValueError.
        """
        errors: List[str] = []
        warnings: List[str] = []
        slots = self._inputs
        if len(slots) < 2 or slots[0].role != SlotRole.CONDITION or slots[1].role != SlotRole.BRANCH:
            errors.append("First case (condition + branch) is missing")
        else_positions = [i for i, s in enumerate(slots) if s.role == SlotRole.ELSE]
        if len(else_positions) > 1:
            errors.append(f"More than one else slot: {else_positions}")
        if else_positions and else_positions[-1] != len(slots) - 1:
            errors.append("Else slot is not the last slot")
        body = [s for s in slots if s.role != SlotRole.ELSE]
        if len(body) % 2:
            errors.append("Unpaired condition/branch slot")
        for i in range(0, len(body) - 1, 2):
            cond, branch = body[i], body[i + 1]
            if cond.role != SlotRole.CONDITION or branch.role != SlotRole.BRANCH:
                errors.append(f"Slots {cond.name!r}/{branch.name!r} do not form a case")
                continue
            if cond.discriminator != branch.discriminator:
                errors.append(f"Case slots {cond.name!r}/{branch.name!r} disagree on discriminator")
            if canonical:
                if cond.discriminator != str(i // 2):
                    errors.append(f"Case {i // 2} is named {cond.name!r}, expected {condition_name(i // 2)!r}")
                if i > 0 and cond.is_empty and branch.is_empty:
                    warnings.append(f"Case {cond.discriminator} has no attached blocks")
        result = ValidationResult(errors=errors, warnings=warnings)
        if strict and result.errors:
            raise ValueError("; ".join(result.errors))
        return result

    # --- Drag hooks ---

    def on_pending_connection(self, connection: Connection) -> None:
        """Called by the drag dispatcher while a block hovers over `connection`."""
        reconciler.on_pending_connection(self, connection)

    def finalize_connections(self, notify: bool = True) -> None:
        """
        Called by the drag dispatcher when a drag involving this block ends.
        Rebuilds the slots with events suppressed; fires one ShapeChanged if notify.
        """
        old = shape_to_string(self)
        if self.workspace is None:
            reconciler.finalize_connections(self)
        else:
            with self.workspace.events.suppressed():
                reconciler.finalize_connections(self)
        if notify:
            self._fire(ShapeChanged(self.block_id, old, shape_to_string(self)))

    def slot_names(self) -> List[str]:
        return [s.name for s in self._inputs]
