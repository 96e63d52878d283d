"""Dropping headings that introduce no content."""

from __future__ import annotations

from .document import Block, BlockKind


def suppress_empty_headings(blocks: list[Block]) -> list[Block]:
    """
    Remove headings not directly followed by a non-heading block.

    Adjacency is judged on the input sequence, so in a run of headings only
    the last one can survive, and only if content follows it.
    """
    kept = []
    for i, block in enumerate(blocks):
        if block.kind is BlockKind.HEADING:
            is_last = i + 1 == len(blocks)
            if is_last or blocks[i + 1].kind is BlockKind.HEADING:
                continue
        kept.append(block)
    return kept
