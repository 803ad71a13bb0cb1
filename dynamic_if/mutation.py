"""
Mutation (persisted shape) of the dynamic if block.

Written form:  <mutation elseif="N" else="1"/>   (no element for the default shape)
Legacy form:   <mutation inputs="0,3,7" else="true"/>   (read only; wins when present)
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, List, Optional

from lxml import etree

if TYPE_CHECKING:
    from dynamic_if.blocks.dynamic_if import DynamicIfBlock

logger = logging.getLogger(__name__)

MUTATION_TAG = "mutation"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_count(value: Optional[str], attribute: str = "count") -> int:
    """
    Leading integer of `value` (parseInt-style: "3abc" -> 3).
    Missing, non-numeric or negative values become 0.
    """
    if value is None:
        return 0
    m = _LEADING_INT.match(value)
    if m is None:
        logger.warning(f"Mutation attribute {attribute}={value!r} is not a number, using 0")
        return 0
    n = int(m.group(1))
    if n < 0:
        logger.warning(f"Mutation attribute {attribute}={value!r} is negative, using 0")
        return 0
    return n


def shape_to_dom(case_count: int, has_else: bool) -> Optional[etree._Element]:
    """Canonical element for a shape, or None for one case without else."""
    elseif_count = max(case_count - 1, 0)
    if not elseif_count and not has_else:
        return None
    container = etree.Element(MUTATION_TAG)
    if elseif_count:
        container.set("elseif", str(elseif_count))
    if has_else:
        container.set("else", "1")
    return container


def shape_to_string(block: DynamicIfBlock) -> Optional[str]:
    """Current counts of `block` serialized as-is (no rebuild)."""
    return to_xml_string(shape_to_dom(block.case_count, block.has_else))


def mutation_to_dom(block: DynamicIfBlock) -> Optional[etree._Element]:
    """
    Create XML to represent the block's cases. Rebuilds first so the counts match
    what is attached; the rebuild is silent (no ShapeChanged).
    """
    block.finalize_connections(notify=False)
    return shape_to_dom(block.case_count, block.has_else)


def dom_to_mutation(block: DynamicIfBlock, xml_element: etree._Element) -> None:
    """Restore the slots from a mutation element (legacy `inputs` takes precedence)."""
    if xml_element.get("inputs"):
        deserialize_inputs(block, xml_element)
    else:
        deserialize_counts(block, xml_element)


def deserialize_inputs(block: DynamicIfBlock, xml_element: etree._Element) -> None:
    """Legacy form: explicit case discriminators plus else="true"."""
    discriminators = _legacy_discriminators(xml_element.get("inputs") or "")
    block.remove_all_dynamic_slots()
    block.canonicalize_first_pair()
    if discriminators:
        first = discriminators[0]
        cond, branch = block.input_list[0], block.input_list[1]
        block.rename_input(cond.name, f"IF{first}")
        block.rename_input(branch.name, f"DO{first}")
        for d in discriminators[1:]:
            block.insert_case_pair_before(len(block.input_list), d)
    if xml_element.get("else") == "true":
        block.append_else_slot()


def _legacy_discriminators(inputs: str) -> List[str]:
    out: List[str] = []
    for token in inputs.split(","):
        token = token.strip()
        if not token:
            logger.warning(f"Skipping empty case id in inputs={inputs!r}")
            continue
        if token in out:
            logger.warning(f"Skipping duplicate case id {token!r} in inputs={inputs!r}")
            continue
        out.append(token)
    return out


def deserialize_counts(block: DynamicIfBlock, xml_element: etree._Element) -> None:
    """Standard form: elseif="N" else="1"."""
    elseif_count = parse_count(xml_element.get("elseif"), "elseif")
    else_count = parse_count(xml_element.get("else"), "else")
    block.remove_all_dynamic_slots()
    block.canonicalize_first_pair()
    for i in range(1, elseif_count + 1):
        block.insert_case_pair_before(len(block.input_list), i)
    if else_count:
        block.append_else_slot()


def to_xml_string(xml_element: Optional[etree._Element]) -> Optional[str]:
    if xml_element is None:
        return None
    return etree.tostring(xml_element, encoding="unicode")


def from_xml_string(text: str) -> etree._Element:
    element = etree.fromstring(text)
    if element.tag != MUTATION_TAG:
        raise ValueError(f"Expected <{MUTATION_TAG}> element, got <{element.tag}>")
    return element


def save_mutation(block: DynamicIfBlock) -> Optional[str]:
    return to_xml_string(mutation_to_dom(block))


def load_mutation(block: DynamicIfBlock, text: Optional[str]) -> None:
    """Apply a serialized mutation; None or empty text means the default shape."""
    if not text or not text.strip():
        block.remove_all_dynamic_slots()
        block.canonicalize_first_pair()
        return
    dom_to_mutation(block, from_xml_string(text))
