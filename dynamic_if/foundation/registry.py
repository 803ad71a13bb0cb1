"""Block types by name. Workspaces build their blocks through a registry."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from dynamic_if.foundation.block import AbstractBaseBlock, AttachmentKind


class BlockRegistry:
    """block_type -> block class. One shared instance backs @register_block."""

    _shared: Optional[BlockRegistry] = None

    def __init__(self) -> None:
        self._classes: Dict[str, Type[AbstractBaseBlock]] = {}

    @classmethod
    def shared(cls) -> BlockRegistry:
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    @property
    def block_types(self) -> List[str]:
        return sorted(self._classes)

    def register(self, block_type: str, block_class: Type[AbstractBaseBlock]) -> None:
        name = block_type.strip()
        if not name:
            raise ValueError("block_type must be non-empty")
        self._classes[name] = block_class

    def build(
        self,
        block_type: str,
        block_id: Optional[str] = None,
        *,
        kind: AttachmentKind = AttachmentKind.REAL,
        **config: Any,
    ) -> AbstractBaseBlock:
        """Instantiate `block_type`; keyword arguments become the block config."""
        block_class = self._classes.get(block_type)
        if block_class is None:
            raise KeyError(f"Unknown block_type: {block_type!r}. Registered: {', '.join(self.block_types)}")
        return block_class(block_id=block_id, config=config, kind=AttachmentKind(kind))

    def __contains__(self, block_type: str) -> bool:
        return block_type in self._classes


def register_block(block_type: str, registry: Optional[BlockRegistry] = None):
    """Class decorator adding the class to `registry` (the shared one by default)."""

    def decorator(cls: Type[AbstractBaseBlock]) -> Type[AbstractBaseBlock]:
        (registry or BlockRegistry.shared()).register(block_type, cls)
        return cls

    return decorator
