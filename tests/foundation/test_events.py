"""Tests for foundation.EventBus."""

from dynamic_if.foundation.events import EventBus, ShapeChanged, SlotAdded


def test_fire_reaches_listeners() -> None:
    bus = EventBus()
    seen = []
    bus.listen(seen.append)
    bus.fire(SlotAdded("b", "IF1", 2))
    assert seen == [SlotAdded("b", "IF1", 2)]


def test_unlisten() -> None:
    bus = EventBus()
    seen = []
    off = bus.listen(seen.append)
    off()
    bus.fire(SlotAdded("b", "IF1", 2))
    assert seen == []


def test_disable_is_nested() -> None:
    bus = EventBus()
    seen = []
    bus.listen(seen.append)
    bus.disable()
    bus.disable()
    bus.enable()
    bus.fire(ShapeChanged("b", None, None))
    assert seen == [] and bus.is_enabled is False
    bus.enable()
    bus.fire(ShapeChanged("b", None, None))
    assert len(seen) == 1


def test_suppressed_reenables_on_error() -> None:
    bus = EventBus()
    try:
        with bus.suppressed():
            assert bus.is_enabled is False
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert bus.is_enabled is True


def test_unbalanced_enable_is_ignored() -> None:
    bus = EventBus()
    bus.enable()
    assert bus.is_enabled is True
