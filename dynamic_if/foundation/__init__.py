"""
Foundation level: Connection, Slot, Block, Registry, Events, Workspace, Drag.
"""

from dynamic_if.foundation.connection import Connection, ConnectionType
from dynamic_if.foundation.slot import Slot, SlotRole
from dynamic_if.foundation.block import AbstractBaseBlock, AttachmentKind
from dynamic_if.foundation.events import (
    BlockEvent,
    ConnectionChanged,
    EventBus,
    ShapeChanged,
    SlotAdded,
    SlotMoved,
    SlotRemoved,
)
from dynamic_if.foundation.registry import BlockRegistry, register_block
from dynamic_if.foundation.stubs import StatementBlock, ValueBlock
from dynamic_if.foundation.workspace import Workspace
from dynamic_if.foundation.drag import DragSession

__all__ = [
    "Connection",
    "ConnectionType",
    "Slot",
    "SlotRole",
    "AbstractBaseBlock",
    "AttachmentKind",
    "BlockEvent",
    "ConnectionChanged",
    "EventBus",
    "ShapeChanged",
    "SlotAdded",
    "SlotMoved",
    "SlotRemoved",
    "BlockRegistry",
    "register_block",
    "StatementBlock",
    "ValueBlock",
    "Workspace",
    "DragSession",
]
