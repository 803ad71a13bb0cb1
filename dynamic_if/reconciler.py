"""
Case reconciliation for the dynamic if block.

- on_pending_connection: while a block hovers, grow a case (or the else slot)
  so the drop has somewhere to land. Provisional: case ids are unique tokens.
- finalize_connections: when the drag ends, rebuild the slot list from what is
  actually attached: populated cases only, renumbered 0..n-1, else last.

Both are stateless; the block's slot list is the only state.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from dynamic_if.foundation.connection import Connection, ConnectionType
from dynamic_if.foundation.slot import SlotRole

if TYPE_CHECKING:
    from dynamic_if.blocks.dynamic_if import DynamicIfBlock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaseTargets:
    """Connections of the blocks plugged into one case; either side may be None."""

    if_target: Optional[Connection] = None
    do_target: Optional[Connection] = None


def new_case_id() -> str:
    """Unique discriminator for a provisional case."""
    return uuid.uuid4().hex


def on_pending_connection(block: DynamicIfBlock, connection: Connection) -> None:
    """
    `connection` on `block` is being hovered by a dragged block (nothing committed yet).
    Safe to call repeatedly: an unchanged state never gains extra slots.
    """
    if connection.type == ConnectionType.NEXT_STATEMENT and not block.has_else:
        block.append_else_slot()
        logger.debug(f"{block.block_id}: added provisional else slot")

    index = block.index_of(connection)
    if index is None:
        return
    slots = block.input_list
    slot = slots[index]
    if slot.role != SlotRole.CONDITION or slot.is_empty:
        return
    if slot.connection.target_block.is_insertion_marker:
        return

    next_index = index + 2
    next_slot = slots[next_index] if next_index < len(slots) else None
    if next_slot is None or next_slot.role == SlotRole.ELSE:
        _insert_provisional_case(block, next_index)
        return
    next_block = next_slot.connection.target_block
    if next_block is not None and next_block.is_insertion_marker:
        _insert_provisional_case(block, next_index)


def _insert_provisional_case(block: DynamicIfBlock, index: int) -> None:
    cond, _ = block.insert_case_pair_before(index, new_case_id())
    logger.debug(f"{block.block_id}: inserted provisional case {cond.discriminator} at slot {index}")


def collect_case_targets(block: DynamicIfBlock) -> List[CaseTargets]:
    """
    Attached connections per case, in slot order. Cases with nothing attached on
    either side are skipped; a half-filled case keeps None for the empty side.
    """
    targets: List[CaseTargets] = []
    for cond, branch in block.cases():
        if cond.target is None and branch.target is None:
            continue
        targets.append(CaseTargets(cond.target, branch.target))
    return targets


def finalize_connections(block: DynamicIfBlock) -> None:
    """Rebuild the cases with strictly ascending case numbers and reattach everything."""
    case_targets = collect_case_targets(block)
    else_slot = block.get_slot(SlotRole.ELSE.value)
    else_target = else_slot.target if else_slot is not None else None

    block.remove_all_dynamic_slots()
    block.canonicalize_first_pair()
    _add_case_inputs(block, case_targets)
    if else_target is not None:
        block.append_else_slot(else_target)

    logger.debug(
        f"{block.block_id}: rebuilt {len(case_targets)} populated case(s), "
        f"else={'yes' if else_target is not None else 'no'}"
    )


def _add_case_inputs(block: DynamicIfBlock, case_targets: List[CaseTargets]) -> None:
    for i, targets in enumerate(case_targets):
        if i == 0:
            cond, branch = block.input_list[0], block.input_list[1]
        else:
            cond, branch = block.insert_case_pair_before(2 * i, i)
        if targets.if_target is not None:
            cond.connection.connect(targets.if_target)
        if targets.do_target is not None:
            branch.connection.connect(targets.do_target)
