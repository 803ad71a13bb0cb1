"""Concrete editor blocks."""

from dynamic_if.blocks.dynamic_if import DynamicIfBlock, ValidationResult

__all__ = ["DynamicIfBlock", "ValidationResult"]
