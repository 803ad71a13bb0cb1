"""
Concrete plain blocks that get plugged into slots: a value block and a statement block.

block_type matches the registered name so Workspace.new_block / DragSession can
build insertion markers of the same kind.
"""

from __future__ import annotations

from dynamic_if.foundation.block import AbstractBaseBlock
from dynamic_if.foundation.registry import register_block


@register_block("value")
class ValueBlock(AbstractBaseBlock):
    """Expression block: a single output connection (config "check" narrows its type)."""

    @property
    def block_type(self) -> str:
        return "value"

    def init(self) -> None:
        check = self._config.get("check")
        if isinstance(check, str):
            check = [check]
        self.set_output(True, check)


@register_block("statement")
class StatementBlock(AbstractBaseBlock):
    """Statement block: previous + next connections, no slots."""

    @property
    def block_type(self) -> str:
        return "statement"

    def init(self) -> None:
        self.set_previous_statement(True)
        self.set_next_statement(True)
