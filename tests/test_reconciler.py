"""Tests for the hover heuristic and the finalize rebuild."""

from dynamic_if.blocks.dynamic_if import DynamicIfBlock
from dynamic_if.foundation.block import AttachmentKind
from dynamic_if.foundation.events import ShapeChanged
from dynamic_if.foundation.slot import SlotRole
from dynamic_if.foundation.workspace import Workspace
from dynamic_if.mutation import save_mutation
from dynamic_if.reconciler import CaseTargets, collect_case_targets, new_case_id
from tests.foundation.helpers import attach, statement_block, target_id, value_block


def hover(block: DynamicIfBlock, slot_name: str) -> None:
    block.on_pending_connection(block.get_slot(slot_name).connection)


# --- hover heuristic ---


def test_hover_filled_condition_inserts_case_after_it(ws: Workspace, block: DynamicIfBlock) -> None:
    attach(block, "IF0", value_block(ws, "v"))
    hover(block, "IF0")
    slots = block.input_list
    assert len(slots) == 4
    assert slots[2].role == SlotRole.CONDITION and slots[3].role == SlotRole.BRANCH
    assert slots[2].discriminator == slots[3].discriminator
    assert slots[2].discriminator not in ("0", "")


def test_hover_is_idempotent(ws: Workspace, block: DynamicIfBlock) -> None:
    attach(block, "IF0", value_block(ws, "v"))
    hover(block, "IF0")
    once = block.slot_names()
    hover(block, "IF0")
    assert block.slot_names() == once


def test_hover_empty_condition_does_nothing(block: DynamicIfBlock) -> None:
    hover(block, "IF0")
    assert block.slot_names() == ["IF0", "DO0"]


def test_hover_condition_holding_preview_counts_as_empty(ws: Workspace, block: DynamicIfBlock) -> None:
    attach(block, "IF0", value_block(ws, "ghost", kind=AttachmentKind.PREVIEW))
    hover(block, "IF0")
    hover(block, "IF0")
    assert block.slot_names() == ["IF0", "DO0"]


def test_hover_inserts_before_else(ws: Workspace, block: DynamicIfBlock) -> None:
    attach(block, "IF0", value_block(ws, "v"))
    block.append_else_slot()
    hover(block, "IF0")
    names = block.slot_names()
    assert len(names) == 5
    assert names[-1] == "ELSE"


def test_hover_preview_in_next_case_still_grows(ws: Workspace, block: DynamicIfBlock) -> None:
    attach(block, "IF0", value_block(ws, "v"))
    block.insert_case_pair_before(2, "p")
    attach(block, "IFp", value_block(ws, "ghost", kind=AttachmentKind.PREVIEW))
    hover(block, "IF0")
    names = block.slot_names()
    assert len(names) == 6
    assert names[4:] == ["IFp", "DOp"]


def test_hover_real_block_in_next_case_does_not_grow(ws: Workspace, block: DynamicIfBlock) -> None:
    attach(block, "IF0", value_block(ws, "v"))
    block.insert_case_pair_before(2, "r")
    attach(block, "IFr", value_block(ws, "real"))
    hover(block, "IF0")
    assert block.slot_names() == ["IF0", "DO0", "IFr", "DOr"]


def test_hover_statement_connection_adds_else_once(block: DynamicIfBlock) -> None:
    hover(block, "DO0")
    hover(block, "DO0")
    assert block.slot_names() == ["IF0", "DO0", "ELSE"]


def test_hover_own_next_connection_adds_else(block: DynamicIfBlock) -> None:
    block.on_pending_connection(block.next)
    block.on_pending_connection(block.next)
    assert block.slot_names() == ["IF0", "DO0", "ELSE"]


def test_hover_foreign_connection_is_ignored(ws: Workspace, block: DynamicIfBlock) -> None:
    block.on_pending_connection(value_block(ws).output)
    assert block.slot_names() == ["IF0", "DO0"]


def test_new_case_ids_are_unique() -> None:
    assert len({new_case_id() for _ in range(50)}) == 50


# --- finalize ---


def test_finalize_fresh_block(block: DynamicIfBlock) -> None:
    block.finalize_connections()
    assert block.slot_names() == ["IF0", "DO0"]
    assert save_mutation(block) is None


def test_collect_case_targets_skips_empty_cases(ws: Workspace, block: DynamicIfBlock) -> None:
    v = value_block(ws, "v")
    attach(block, "IF0", v)
    block.insert_case_pair_before(2, "e")
    block.insert_case_pair_before(4, "h")
    s = statement_block(ws, "s")
    attach(block, "DOh", s)
    assert collect_case_targets(block) == [
        CaseTargets(v.output, None),
        CaseTargets(None, s.previous),
    ]


def test_finalize_drops_empty_middle_case(ws: Workspace, block: DynamicIfBlock) -> None:
    attach(block, "IF0", value_block(ws, "c0"))
    attach(block, "DO0", statement_block(ws, "s0"))
    block.insert_case_pair_before(2, "mid")
    block.insert_case_pair_before(4, "last")
    attach(block, "IFlast", value_block(ws, "c2"))
    attach(block, "DOlast", statement_block(ws, "s2"))

    block.finalize_connections()

    assert block.slot_names() == ["IF0", "DO0", "IF1", "DO1"]
    assert (target_id(block, "IF0"), target_id(block, "DO0")) == ("c0", "s0")
    assert (target_id(block, "IF1"), target_id(block, "DO1")) == ("c2", "s2")


def test_finalize_preserves_pairs_and_order(ws: Workspace, block: DynamicIfBlock) -> None:
    for d in ("z", "m", "q"):
        block.insert_case_pair_before(len(block.input_list), d)
    attach(block, "IFz", value_block(ws, "a"))
    attach(block, "DOm", statement_block(ws, "b"))
    attach(block, "IFq", value_block(ws, "c"))
    attach(block, "DOq", statement_block(ws, "d"))

    block.finalize_connections()

    assert block.slot_names() == ["IF0", "DO0", "IF1", "DO1", "IF2", "DO2"]
    assert (target_id(block, "IF0"), target_id(block, "DO0")) == ("a", None)
    assert (target_id(block, "IF1"), target_id(block, "DO1")) == (None, "b")
    assert (target_id(block, "IF2"), target_id(block, "DO2")) == ("c", "d")
    assert block.get_slot("IF1").label == "else if"
    assert block.validate_shape().is_valid


def test_finalize_keeps_filled_else_and_drops_empty_else(ws: Workspace, block: DynamicIfBlock) -> None:
    block.append_else_slot()
    block.finalize_connections()
    assert block.has_else is False

    s = statement_block(ws, "s")
    block.append_else_slot(s.previous)
    block.insert_case_pair_before(2, "x")
    block.finalize_connections()
    assert block.slot_names() == ["IF0", "DO0", "ELSE"]
    assert target_id(block, "ELSE") == "s"


def test_finalize_renames_legacy_first_case(ws: Workspace, block: DynamicIfBlock) -> None:
    block.rename_input("IF0", "IF4")
    block.rename_input("DO0", "DO4")
    block.insert_case_pair_before(2, 7)
    attach(block, "IF7", value_block(ws, "v"))
    block.finalize_connections()
    assert block.slot_names() == ["IF0", "DO0"]
    assert target_id(block, "IF0") == "v"


def test_finalize_fires_single_shape_event(ws: Workspace, block: DynamicIfBlock, events: list) -> None:
    attach(block, "IF0", value_block(ws, "v"))
    block.insert_case_pair_before(2, "a")
    block.insert_case_pair_before(4, "b")
    attach(block, "DOb", statement_block(ws, "s"))
    events.clear()

    block.finalize_connections()

    assert events == [ShapeChanged("if1", '<mutation elseif="2"/>', '<mutation elseif="1"/>')]
    assert ws.events.is_enabled


def test_finalize_without_notify_is_silent(ws: Workspace, block: DynamicIfBlock, events: list) -> None:
    block.insert_case_pair_before(2, "a")
    events.clear()
    block.finalize_connections(notify=False)
    assert events == []


def test_minimum_shape_survives_everything(ws: Workspace, block: DynamicIfBlock) -> None:
    v = value_block(ws, "v")
    attach(block, "IF0", v)
    hover(block, "IF0")
    hover(block, "DO0")
    v.unplug()
    block.finalize_connections()
    assert block.case_count == 1
    assert block.slot_names() == ["IF0", "DO0"]
