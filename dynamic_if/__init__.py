"""
dynamic_if: if/else-if/else block whose cases grow and shrink under drag and drop.

Levels: foundation (connections, slots, blocks, workspace, drag) → blocks → reconciler / mutation.
"""

__version__ = "0.1.0"

from dynamic_if.foundation import (
    AbstractBaseBlock,
    AttachmentKind,
    BlockRegistry,
    Connection,
    ConnectionType,
    DragSession,
    EventBus,
    ShapeChanged,
    Slot,
    SlotRole,
    StatementBlock,
    ValueBlock,
    Workspace,
)
from dynamic_if.blocks import DynamicIfBlock, ValidationResult
from dynamic_if.mutation import dom_to_mutation, load_mutation, mutation_to_dom, save_mutation

__all__ = [
    "__version__",
    "AbstractBaseBlock",
    "AttachmentKind",
    "BlockRegistry",
    "Connection",
    "ConnectionType",
    "DragSession",
    "EventBus",
    "ShapeChanged",
    "Slot",
    "SlotRole",
    "StatementBlock",
    "ValueBlock",
    "Workspace",
    "DynamicIfBlock",
    "ValidationResult",
    "dom_to_mutation",
    "load_mutation",
    "mutation_to_dom",
    "save_mutation",
]
