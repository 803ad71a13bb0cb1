"""Named input slots of a block and the role each plays in a case."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dynamic_if.foundation.connection import Connection


class SlotRole(str, Enum):
    CONDITION = "IF"
    BRANCH = "DO"
    ELSE = "ELSE"


@dataclass
class Slot:
    """Named attachment point on a block (Lego socket) holding one connection."""
    name: str
    role: SlotRole
    connection: Connection
    label: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Slot name must be non-empty")

    @property
    def discriminator(self) -> str:
        """Case discriminator: the name without its role prefix ("" for ELSE)."""
        if self.role == SlotRole.ELSE:
            return ""
        return self.name[len(self.role.value):]

    @property
    def target(self) -> Optional[Connection]:
        """Connection of the sub-block plugged into this slot, if any."""
        return self.connection.target_connection

    @property
    def is_empty(self) -> bool:
        return self.connection.target_connection is None
