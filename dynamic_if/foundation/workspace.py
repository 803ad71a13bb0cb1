"""
Workspace: container of top-level and nested blocks plus the event bus.

- Blocks (block_id -> block), built from the registry or added directly.
- One EventBus per workspace; blocks report structural changes through it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from dynamic_if.foundation.block import AbstractBaseBlock, AttachmentKind
from dynamic_if.foundation.events import EventBus
from dynamic_if.foundation.registry import BlockRegistry


def _default_block_id(block_type: str, blocks: Dict[str, Any]) -> str:
    """Unique block_id from block_type and the number of blocks."""
    base = (block_type or "block").replace("/", "_").replace(" ", "_")
    n = len(blocks)
    candidate = f"{base}_{n}"
    while candidate in blocks:
        n += 1
        candidate = f"{base}_{n}"
    return candidate


class Workspace:
    """
    Workspace = blocks + event bus.
    Blocks are never owned by each other; removing a slot only unplugs a child.
    """

    def __init__(self, workspace_id: Optional[str] = None, registry: Optional[BlockRegistry] = None) -> None:
        self._workspace_id = workspace_id or "workspace"
        self._registry = registry
        self._blocks: Dict[str, AbstractBaseBlock] = {}
        self.events = EventBus()

    @property
    def workspace_id(self) -> str:
        return self._workspace_id

    @property
    def registry(self) -> BlockRegistry:
        return self._registry or BlockRegistry.shared()

    @property
    def block_ids(self) -> List[str]:
        return list(self._blocks)

    def add_block(self, block: AbstractBaseBlock) -> AbstractBaseBlock:
        if block.block_id in self._blocks:
            raise ValueError(f"Block already exists: {block.block_id}")
        if block.workspace is not None and block.workspace is not self:
            raise ValueError(f"Block {block.block_id!r} belongs to another workspace")
        block.workspace = self
        self._blocks[block.block_id] = block
        return block

    def new_block(
        self,
        block_type: str,
        block_id: Optional[str] = None,
        *,
        kind: AttachmentKind = AttachmentKind.REAL,
        **config: Any,
    ) -> AbstractBaseBlock:
        """Build a block from the registry and add it. Returns the block."""
        bid = block_id or _default_block_id(block_type, self._blocks)
        block = self.registry.build(block_type, bid, kind=kind, **config)
        return self.add_block(block)

    def remove_block(self, block_id: str) -> None:
        """Unplug and forget a block (used for insertion markers once a drag moves on)."""
        block = self._blocks.pop(block_id, None)
        if block is None:
            raise KeyError(f"Block not found: {block_id}")
        block.unplug()
        block.workspace = None

    def get_block(self, block_id: str) -> Optional[AbstractBaseBlock]:
        return self._blocks.get(block_id)

    def blocks(self) -> List[AbstractBaseBlock]:
        return list(self._blocks.values())

    def __contains__(self, block_id: str) -> bool:
        return block_id in self._blocks
