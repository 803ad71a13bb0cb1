"""
Block configuration: labels, style and type checks for the dynamic if block.

Defaults live in an OmegaConf DictConfig; a YAML file and/or overrides are merged
on top. Blocks receive a plain dict (OmegaConf.to_container) as their config.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

from omegaconf import DictConfig, OmegaConf

DEFAULT_CONFIG: Dict[str, Any] = {
    "block_type": "dynamic_if",
    "style": "logic_blocks",
    "help_url": "https://github.com/google/blockly/wiki/IfElse",
    "tooltip": "If a value is true, then do some statements.",
    "condition_check": "Boolean",
    "messages": {
        "if": "if",
        "elseif": "else if",
        "then": "do",
        "else": "else",
    },
}


def default_config() -> DictConfig:
    return OmegaConf.create(DEFAULT_CONFIG)


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Union[Dict[str, Any], DictConfig]] = None,
) -> DictConfig:
    """
    Defaults <- YAML file (if given) <- overrides.
    Unknown keys are kept so hosts can carry their own settings alongside.
    """
    cfg = default_config()
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(str(path)))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.create(overrides) if isinstance(overrides, dict) else overrides)
    return cfg


def resolve_block_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Plain dict for a block: defaults merged with the block's own config."""
    cfg = load_config(overrides=dict(config or {}))
    return OmegaConf.to_container(cfg, resolve=True)
