"""Dynamic if CLI -- inspect and canonicalize persisted block shapes.

Usage:
    dynamic-if describe '<mutation elseif="2" else="1"/>'
    dynamic-if describe '<mutation inputs="0,3,7" else="true"/>'
    dynamic-if canonicalize '<mutation inputs="0,3,7" else="true"/>'
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from lxml import etree
from omegaconf import OmegaConf

from dynamic_if import __version__
from dynamic_if.blocks.dynamic_if import DynamicIfBlock
from dynamic_if.config import load_config
from dynamic_if.mutation import load_mutation, shape_to_string


def _build_block(mutation: Optional[str], config_path: Optional[str]) -> DynamicIfBlock:
    config = OmegaConf.to_container(load_config(config_path), resolve=True) if config_path else None
    block = DynamicIfBlock(block_id="cli", config=config)
    load_mutation(block, mutation)
    return block


def describe(mutation: Optional[str], config_path: Optional[str] = None) -> None:
    """Print the slot layout a mutation decodes to."""
    block = _build_block(mutation, config_path)
    print(f"cases: {block.case_count}  else: {'yes' if block.has_else else 'no'}")
    for slot in block.input_list:
        print(f"  {slot.name:12s} {slot.role.name:10s} {slot.label}")


def canonicalize(mutation: Optional[str], config_path: Optional[str] = None) -> None:
    """Print the canonical mutation (nothing for the default shape)."""
    block = _build_block(mutation, config_path)
    text = shape_to_string(block)
    if text is not None:
        print(text)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dynamic-if",
        description="Inspect persisted shapes of the dynamic if block",
    )
    parser.add_argument("--version", action="version", version=f"dynamic-if {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log decoding details.")
    parser.add_argument("--config", default=None, help="YAML file with block labels and checks.")
    sub = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("describe", "Show the slots a mutation decodes to."),
        ("canonicalize", "Re-encode a mutation (legacy or canonical) in canonical form."),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("mutation", nargs="?", default=None, help="<mutation .../> XML; omit for the default shape.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "describe":
            describe(args.mutation, args.config)
        else:
            canonicalize(args.mutation, args.config)
    except (ValueError, etree.XMLSyntaxError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
