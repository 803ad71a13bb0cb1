"""Shared fixtures: a fresh workspace and a dynamic if block living in it."""

import pytest

from dynamic_if.blocks.dynamic_if import DynamicIfBlock
from dynamic_if.foundation.workspace import Workspace


@pytest.fixture
def ws() -> Workspace:
    return Workspace("test")


@pytest.fixture
def block(ws: Workspace) -> DynamicIfBlock:
    b = ws.new_block("dynamic_if", "if1")
    assert isinstance(b, DynamicIfBlock)
    return b


@pytest.fixture
def events(ws: Workspace) -> list:
    """Every event fired on the workspace bus from the moment it is requested."""
    seen: list = []
    ws.events.listen(seen.append)
    return seen
