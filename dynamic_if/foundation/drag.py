"""
Drag dispatcher: one drag of one block across a workspace.

Blocks that want to reshape during a drag implement two hooks:
    on_pending_connection(connection)  -- a hover over one of their connections
    finalize_connections()             -- the drag that touched them has ended
The session shows an insertion marker (a PREVIEW block of the dragged kind) on
the hovered connection while the pointer stays there.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from dynamic_if.foundation.block import AbstractBaseBlock, AttachmentKind
from dynamic_if.foundation.connection import Connection
from dynamic_if.foundation.workspace import Workspace

logger = logging.getLogger(__name__)


def matching_connection(block: AbstractBaseBlock, target: Connection) -> Optional[Connection]:
    """The connection of `block` that can plug into `target`, if any."""
    for conn in (block.output, block.previous, block.next):
        if conn is not None and conn.can_connect_with(target):
            return conn
    return None


class DragSession:
    """
    Lifecycle: DragSession(ws, block) -> hover(...)* -> drop() | cancel().
    The dragged block is unplugged from its parent when the session starts.
    """

    def __init__(self, workspace: Workspace, dragged: AbstractBaseBlock) -> None:
        if dragged.block_id not in workspace:
            raise ValueError(f"Dragged block {dragged.block_id!r} is not in workspace {workspace.workspace_id!r}")
        self._workspace = workspace
        self._dragged = dragged
        self._candidate: Optional[Connection] = None
        self._marker: Optional[AbstractBaseBlock] = None
        self._pending: List[AbstractBaseBlock] = []
        self._ended = False

        parent_conn = _parent_connection(dragged)
        if parent_conn is not None:
            self._mark_pending(parent_conn.source_block)
        dragged.unplug()

    @property
    def dragged(self) -> AbstractBaseBlock:
        return self._dragged

    @property
    def candidate(self) -> Optional[Connection]:
        return self._candidate

    @property
    def marker(self) -> Optional[AbstractBaseBlock]:
        return self._marker

    @property
    def ended(self) -> bool:
        return self._ended

    def hover(self, connection: Connection) -> None:
        """Pointer is over `connection`. May be called again for the same connection."""
        self._require_active()
        if connection is not self._candidate:
            self._withdraw_marker()
            self._candidate = connection

        if matching_connection(self._dragged, connection) is None:
            return

        owner = connection.source_block
        hook = getattr(owner, "on_pending_connection", None)
        if hook is not None:
            hook(connection)
            self._mark_pending(owner)

        if self._marker is None and not connection.is_connected:
            self._show_marker(connection)

    def leave(self) -> None:
        """Pointer left every candidate connection."""
        self._require_active()
        self._withdraw_marker()
        self._candidate = None

    def drop(self) -> Optional[Connection]:
        """Commit the dragged block to the current candidate. Returns the target (or None)."""
        self._require_active()
        target = self._candidate
        self._withdraw_marker()
        try:
            if target is not None:
                conn = matching_connection(self._dragged, target)
                if conn is None:
                    raise ValueError(
                        f"Block {self._dragged.block_id!r} cannot connect to {target!r}"
                    )
                conn.connect(target)
        finally:
            self._end()
        return target

    def cancel(self) -> None:
        """Abandon the drag; the dragged block stays unplugged."""
        self._require_active()
        self._withdraw_marker()
        self._candidate = None
        self._end()

    def _show_marker(self, connection: Connection) -> None:
        marker = self._workspace.new_block(
            self._dragged.block_type,
            f"{self._dragged.block_id}__marker",
            kind=AttachmentKind.PREVIEW,
            **{k: v for k, v in self._dragged.config.items() if k not in ("block_type", "type")},
        )
        conn = matching_connection(marker, connection)
        if conn is None:
            self._workspace.remove_block(marker.block_id)
            return
        conn.connect(connection)
        self._marker = marker

    def _withdraw_marker(self) -> None:
        if self._marker is not None:
            self._workspace.remove_block(self._marker.block_id)
            self._marker = None

    def _mark_pending(self, block: AbstractBaseBlock) -> None:
        if hasattr(block, "finalize_connections") and block not in self._pending:
            self._pending.append(block)

    def _end(self) -> None:
        self._ended = True
        for block in self._pending:
            logger.debug(f"Drag of {self._dragged.block_id} ended, finalizing {block.block_id}")
            block.finalize_connections()

    def _require_active(self) -> None:
        if self._ended:
            raise RuntimeError("Drag session already ended")


def _parent_connection(block: AbstractBaseBlock) -> Optional[Connection]:
    for conn in (block.output, block.previous):
        if conn is not None and conn.target_connection is not None:
            return conn.target_connection
    return None
