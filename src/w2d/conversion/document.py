"""Loading a Wikipedia page and selecting the blocks of its article body."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..errors import UnparsableInputError
from ..models.config import ParserConfig

logger = logging.getLogger(__name__)


class BlockKind(str, Enum):
    """Classification of a direct child of the article container."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"


@dataclass(frozen=True)
class Block:
    """
    A top-level element of the article body.

    Attributes:
        element: The element inside the parsed tree (a view, not a copy)
        kind: Heading, paragraph or list
        index: Position among the container's element children
    """

    element: Tag
    kind: BlockKind
    index: int


def load_document(data: bytes) -> BeautifulSoup:
    """
    Parse raw article bytes into a document tree.

    Malformed markup is tolerated by the parser; only bytes that are not
    valid UTF-8 are rejected.

    Raises:
        UnparsableInputError: If the bytes cannot be decoded
    """
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise UnparsableInputError(f"input is not valid UTF-8: {e}") from e
    return BeautifulSoup(text, "html.parser")


def extract_title(tree: BeautifulSoup, config: ParserConfig) -> str:
    """Return the text of the first title heading, or an empty string."""
    title = tree.find("h1", id=config.title_id)
    if not isinstance(title, Tag):
        logger.debug("No h1#%s found, output will have no title", config.title_id)
        return ""
    return title.get_text().strip()


def classify_block(element: Tag, config: ParserConfig) -> Optional[BlockKind]:
    """Map a container child to its block kind, or None if it is not a block."""
    if element.name == "h2":
        return BlockKind.HEADING
    if element.name == "div" and config.heading_wrapper_class in element.get_attribute_list("class"):
        return BlockKind.HEADING
    if element.name == "p":
        return BlockKind.PARAGRAPH
    if element.name in ("ul", "ol"):
        return BlockKind.LIST
    return None


def select_blocks(tree: BeautifulSoup, config: ParserConfig) -> list[Block]:
    """
    Return the heading, paragraph and list children of the article container.

    Only direct children are selected; deeper elements are rendered as part
    of their enclosing block. A page without a container yields no blocks.
    """
    container = tree.find(class_=config.container_class)
    if not isinstance(container, Tag):
        logger.debug("No element with class %r found, article body is empty", config.container_class)
        return []

    blocks = []
    children = [child for child in container.children if isinstance(child, Tag)]
    for index, child in enumerate(children):
        kind = classify_block(child, config)
        if kind is not None:
            blocks.append(Block(element=child, kind=kind, index=index))

    logger.debug("Selected %d of %d container children", len(blocks), len(children))
    return blocks
