"""Blocks and helpers for foundation and dynamic if tests."""

from typing import Optional

from dynamic_if.foundation.block import AbstractBaseBlock, AttachmentKind
from dynamic_if.foundation.slot import SlotRole
from dynamic_if.foundation.workspace import Workspace


def value_block(
    ws: Workspace,
    block_id: Optional[str] = None,
    *,
    kind: AttachmentKind = AttachmentKind.REAL,
    check: Optional[str] = None,
) -> AbstractBaseBlock:
    config = {"check": check} if check else {}
    return ws.new_block("value", block_id, kind=kind, **config)


def statement_block(
    ws: Workspace, block_id: Optional[str] = None, *, kind: AttachmentKind = AttachmentKind.REAL
) -> AbstractBaseBlock:
    return ws.new_block("statement", block_id, kind=kind)


def attach(block: AbstractBaseBlock, slot_name: str, child: AbstractBaseBlock) -> None:
    """Plug child into block's slot through the matching connection."""
    slot = block.get_input(slot_name)
    assert slot is not None, slot_name
    conn = child.output if slot.role == SlotRole.CONDITION else child.previous
    slot.connection.connect(conn)


def target_id(block: AbstractBaseBlock, slot_name: str) -> Optional[str]:
    slot = block.get_input(slot_name)
    assert slot is not None, slot_name
    target = slot.connection.target_block
    return target.block_id if target is not None else None
