"""
Connections: the handles that join a block to the sub-blocks plugged into it.

- Type (value input/output, statement next/previous), optional type check.
- A connection holds at most one target; connecting unplugs whatever was there.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from dynamic_if.foundation.block import AbstractBaseBlock


class ConnectionType(str, Enum):
    INPUT_VALUE = "input_value"
    OUTPUT_VALUE = "output_value"
    NEXT_STATEMENT = "next_statement"  # statement inputs and a block's own "next"
    PREVIOUS_STATEMENT = "previous_statement"


_OPPOSITE = {
    ConnectionType.INPUT_VALUE: ConnectionType.OUTPUT_VALUE,
    ConnectionType.OUTPUT_VALUE: ConnectionType.INPUT_VALUE,
    ConnectionType.NEXT_STATEMENT: ConnectionType.PREVIOUS_STATEMENT,
    ConnectionType.PREVIOUS_STATEMENT: ConnectionType.NEXT_STATEMENT,
}


class Connection:
    """
    One end of a link between two blocks.

    The connection never owns the block on the other side: disconnecting only
    drops the reference, the host decides what happens to the unplugged block.
    """

    __slots__ = ("_source_block", "_type", "_check", "target_connection")

    def __init__(
        self,
        source_block: AbstractBaseBlock,
        conn_type: ConnectionType,
        check: Optional[Sequence[str]] = None,
    ) -> None:
        self._source_block = source_block
        self._type = ConnectionType(conn_type)
        self._check: Optional[List[str]] = list(check) if check else None
        self.target_connection: Optional[Connection] = None

    @property
    def source_block(self) -> AbstractBaseBlock:
        return self._source_block

    @property
    def type(self) -> ConnectionType:
        return self._type

    @property
    def check(self) -> Optional[List[str]]:
        return list(self._check) if self._check is not None else None

    def set_check(self, check: Optional[Sequence[str]]) -> Connection:
        self._check = list(check) if check else None
        return self

    @property
    def is_connected(self) -> bool:
        return self.target_connection is not None

    @property
    def target_block(self) -> Optional[AbstractBaseBlock]:
        if self.target_connection is None:
            return None
        return self.target_connection.source_block

    def can_connect_with(self, other: Connection) -> bool:
        """True if the types pair up and the checks (when both declared) intersect."""
        if other is self or other.source_block is self.source_block:
            return False
        if _OPPOSITE[self._type] != other.type:
            return False
        if self._check is None or other._check is None:
            return True
        return bool(set(self._check) & set(other._check))

    def connect(self, other: Connection) -> None:
        """Link both sides. Anything previously attached to either side is unplugged."""
        if self.target_connection is other:
            return
        if not self.can_connect_with(other):
            raise ValueError(
                f"Connections incompatible: {self._type.value} on {self.source_block.block_id!r} "
                f"-> {other.type.value} on {other.source_block.block_id!r}"
            )
        self.disconnect()
        other.disconnect()
        self.target_connection = other
        other.target_connection = self
        self.source_block._notify_connection(self)
        other.source_block._notify_connection(other)

    def disconnect(self) -> None:
        other = self.target_connection
        if other is None:
            return
        self.target_connection = None
        if other.target_connection is self:
            other.target_connection = None
        self.source_block._notify_connection(self)
        other.source_block._notify_connection(other)

    def __repr__(self) -> str:
        target = self.target_block.block_id if self.target_block is not None else None
        return (
            f"Connection(type={self._type.value!r}, source={self.source_block.block_id!r}, "
            f"target={target!r})"
        )
