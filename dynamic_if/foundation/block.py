"""
Abstract Base Block: identity + connections + ordered slot list.

- init() declares the block's own connections and initial slots.
- input_list is the ordered slot sequence; order is visual and serialization order.
- Structural edits (append/remove/move/rename) and connection changes are
  reported to the owning workspace's event bus.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from dynamic_if.foundation.connection import Connection, ConnectionType
from dynamic_if.foundation.events import (
    BlockEvent,
    ConnectionChanged,
    SlotAdded,
    SlotMoved,
    SlotRemoved,
)
from dynamic_if.foundation.slot import Slot, SlotRole

if TYPE_CHECKING:
    from dynamic_if.foundation.workspace import Workspace


class AttachmentKind(str, Enum):
    """Whether a block is a real value or a transient drag preview (insertion marker)."""

    REAL = "real"
    PREVIEW = "preview"


class AbstractBaseBlock(ABC):
    """
    Minimal host block: owns its slots, never the sub-blocks plugged into them.

    Identity: block_type (kind of block), block_id (instance id in workspace).
    Contract: init() declares connections and the initial slot list.
    """

    def __init__(
        self,
        block_id: Optional[str] = None,
        *,
        config: Optional[Dict[str, Any]] = None,
        kind: AttachmentKind = AttachmentKind.REAL,
    ) -> None:
        self._block_id = block_id or self._default_block_id()
        self._config = dict(config or {})
        self._kind = AttachmentKind(kind)
        self._inputs: List[Slot] = []
        self.workspace: Optional[Workspace] = None
        self.output: Optional[Connection] = None
        self.previous: Optional[Connection] = None
        self.next: Optional[Connection] = None
        self.init()

    def _default_block_id(self) -> str:
        """Override to provide default block_id; default uses class name + id(self)."""
        return f"{type(self).__name__}_{id(self)}"

    # --- Identity ---

    @property
    def block_type(self) -> str:
        """Type identifier for registry and config. Override in subclass."""
        return type(self).__name__

    @property
    def block_id(self) -> str:
        return self._block_id

    @property
    def config(self) -> Dict[str, Any]:
        """Copy of config used to build this block."""
        return dict(self._config)

    @property
    def kind(self) -> AttachmentKind:
        return self._kind

    @property
    def is_insertion_marker(self) -> bool:
        return self._kind == AttachmentKind.PREVIEW

    # --- Declaration ---

    @abstractmethod
    def init(self) -> None:
        """Declare own connections (output/previous/next) and the initial slots."""
        ...

    def set_output(self, has_output: bool, check: Optional[Sequence[str]] = None) -> None:
        self.output = Connection(self, ConnectionType.OUTPUT_VALUE, check) if has_output else None

    def set_previous_statement(self, has_previous: bool) -> None:
        self.previous = Connection(self, ConnectionType.PREVIOUS_STATEMENT) if has_previous else None

    def set_next_statement(self, has_next: bool) -> None:
        self.next = Connection(self, ConnectionType.NEXT_STATEMENT) if has_next else None

    # --- Slots ---

    @property
    def input_list(self) -> List[Slot]:
        return list(self._inputs)

    def get_input(self, name: str) -> Optional[Slot]:
        for slot in self._inputs:
            if slot.name == name:
                return slot
        return None

    def append_value_input(
        self, name: str, role: SlotRole, label: str = "", check: Optional[Sequence[str]] = None
    ) -> Slot:
        return self._append_input(name, role, ConnectionType.INPUT_VALUE, label, check)

    def append_statement_input(self, name: str, role: SlotRole, label: str = "") -> Slot:
        return self._append_input(name, role, ConnectionType.NEXT_STATEMENT, label, None)

    def _append_input(
        self,
        name: str,
        role: SlotRole,
        conn_type: ConnectionType,
        label: str,
        check: Optional[Sequence[str]],
    ) -> Slot:
        if self.get_input(name) is not None:
            raise ValueError(f"Slot already exists: {name!r} on {self.block_id!r}")
        slot = Slot(name, SlotRole(role), Connection(self, conn_type, check), label)
        self._inputs.append(slot)
        self._fire(SlotAdded(self.block_id, name, len(self._inputs) - 1))
        return slot

    def remove_input(self, name: str) -> None:
        """Remove a slot. A plugged-in sub-block is unplugged, not destroyed."""
        slot = self._require_input(name)
        index = self._inputs.index(slot)
        slot.connection.disconnect()
        del self._inputs[index]
        self._fire(SlotRemoved(self.block_id, name, index))

    def move_input_before(self, name: str, ref_name: Optional[str]) -> None:
        """Move slot `name` before slot `ref_name` (None: move to the end)."""
        slot = self._require_input(name)
        old_index = self._inputs.index(slot)
        if ref_name == name:
            return
        self._inputs.pop(old_index)
        if ref_name is None:
            self._inputs.append(slot)
        else:
            ref = self.get_input(ref_name)
            if ref is None:
                self._inputs.insert(old_index, slot)
                raise KeyError(f"Slot {ref_name!r} does not exist on {self.block_id!r}")
            self._inputs.insert(self._inputs.index(ref), slot)
        new_index = self._inputs.index(slot)
        if new_index != old_index:
            self._fire(SlotMoved(self.block_id, name, old_index, new_index))

    def rename_input(self, old_name: str, new_name: str) -> None:
        slot = self._require_input(old_name)
        if old_name == new_name:
            return
        if self.get_input(new_name) is not None:
            raise ValueError(f"Slot already exists: {new_name!r} on {self.block_id!r}")
        slot.name = new_name

    def _require_input(self, name: str) -> Slot:
        slot = self.get_input(name)
        if slot is None:
            raise KeyError(f"Slot {name!r} does not exist on {self.block_id!r}")
        return slot

    def get_children(self) -> List[AbstractBaseBlock]:
        """Blocks plugged into this block's slots, in slot order."""
        return [s.connection.target_block for s in self._inputs if s.connection.target_block is not None]

    def unplug(self) -> None:
        """Detach this block from its parent (output or previous connection)."""
        for conn in (self.output, self.previous):
            if conn is not None:
                conn.disconnect()

    # --- Events ---

    def _fire(self, event: BlockEvent) -> None:
        if self.workspace is not None:
            self.workspace.events.fire(event)

    def _notify_connection(self, connection: Connection) -> None:
        for slot in self._inputs:
            if slot.connection is connection:
                target = connection.target_block
                self._fire(ConnectionChanged(
                    self.block_id, slot.name, target.block_id if target is not None else None
                ))
                return

    def __repr__(self) -> str:
        return f"{type(self).__name__}(block_id={self.block_id!r}, block_type={self.block_type!r})"
