#!/usr/bin/env python3
"""dynamic_if: minimal example: grow an else-if case by dragging.

A condition is already plugged into IF0. Dragging a second condition over IF0
opens a new case below it; dropping into that case and ending the drag leaves
a canonical IF0/DO0, IF1/DO1 block.
"""
import logging

from dynamic_if import DragSession, Workspace, save_mutation

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

# ── 1. Workspace with an if block and two conditions ──
ws = Workspace("demo")
block = ws.new_block("dynamic_if", "if1")
first = ws.new_block("value", "x_gt_0", check="Boolean")
second = ws.new_block("value", "y_gt_0", check="Boolean")
block.get_slot("IF0").connection.connect(first.output)
ws.events.listen(lambda e: print(f"  event: {e}"))

# ── 2. Drag the second condition over the filled IF0, then into the new case ──
drag = DragSession(ws, second)
drag.hover(block.get_slot("IF0").connection)
print(f"while hovering: {block.slot_names()}")
drag.hover(block.input_list[2].connection)
drag.drop()

# ── 3. Canonical shape + persisted form ──
print(f"after drop:     {block.slot_names()}")
print(f"mutation:       {save_mutation(block)}")
