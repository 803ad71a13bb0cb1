"""
Change notifications for block structure and connections.

Hosts listen on a workspace's EventBus. Structural rebuilds disable the bus for
their duration so that intermediate remove/re-add steps are never observed.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockEvent:
    block_id: str


@dataclass(frozen=True)
class SlotAdded(BlockEvent):
    slot_name: str
    index: int


@dataclass(frozen=True)
class SlotRemoved(BlockEvent):
    slot_name: str
    index: int


@dataclass(frozen=True)
class SlotMoved(BlockEvent):
    slot_name: str
    old_index: int
    new_index: int


@dataclass(frozen=True)
class ConnectionChanged(BlockEvent):
    slot_name: Optional[str]
    target_block_id: Optional[str]


@dataclass(frozen=True)
class ShapeChanged(BlockEvent):
    """Single logical event emitted once a block finished reshaping."""

    old_mutation: Optional[str]
    new_mutation: Optional[str]


Listener = Callable[[BlockEvent], None]


class EventBus:
    """
    Fan-out of BlockEvents to listeners with nestable suppression.

    disable()/enable() keep a counter, events fired while it is non-zero are dropped.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._disabled = 0

    def listen(self, fn: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        self._listeners.append(fn)

        def _unlisten() -> None:
            if fn in self._listeners:
                self._listeners.remove(fn)
        return _unlisten

    @property
    def is_enabled(self) -> bool:
        return self._disabled == 0

    def disable(self) -> None:
        self._disabled += 1

    def enable(self) -> None:
        if self._disabled == 0:
            logger.warning("EventBus.enable() called without matching disable()")
            return
        self._disabled -= 1

    @contextmanager
    def suppressed(self) -> Iterator[EventBus]:
        self.disable()
        try:
            yield self
        finally:
            self.enable()

    def fire(self, event: BlockEvent) -> None:
        if not self.is_enabled:
            return
        for fn in list(self._listeners):
            fn(event)
