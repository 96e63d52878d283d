"""Wikipedia article to Markdown conversion."""

from __future__ import annotations

import logging
from contextlib import closing
from typing import BinaryIO, Optional

from ..models.config import ParserConfig
from .document import extract_title, load_document, select_blocks
from .filters import suppress_empty_headings
from .renderer import BlockRenderer
from .rules import RuleSet, default_rules
from .whitespace import normalize_block

logger = logging.getLogger(__name__)


class ArticleParser:
    """
    Converts the HTML of a Wikipedia article into Markdown.

    The output is the title as a level-1 heading followed by the paragraphs,
    lists and section headings of the article body. Links are reduced to
    their text, edit links and footnote markers are dropped.

    The parser holds no per-call state; one instance can serve any number of
    (concurrent) conversions.

    Example:
        parser = ArticleParser()
        with open("article.html", "rb") as f:
            markdown = parser.parse(f)
    """

    def __init__(self, config: Optional[ParserConfig] = None, rules: Optional[RuleSet] = None):
        """
        Initialize the parser.

        Args:
            config: Markers used to find the title and article body
            rules: Rule set to render blocks with (default: default_rules(config))
        """
        self._config = config or ParserConfig()
        self._renderer = BlockRenderer(rules or default_rules(self._config), self._config)

    def parse(self, stream: BinaryIO) -> str:
        """
        Read an article from a byte stream and convert it.

        The stream is closed before returning, whether or not conversion
        succeeds.

        Raises:
            UnparsableInputError: If the stream does not hold UTF-8 text
            RuleApplicationError: If a rule fails on any element
        """
        with closing(stream):
            data = stream.read()
        return self.convert(data)

    def convert(self, html: bytes) -> str:
        """Convert article HTML bytes to Markdown."""
        tree = load_document(html)

        title = extract_title(tree, self._config)
        blocks = suppress_empty_headings(select_blocks(tree, self._config))

        parts = ["# " + title + "\n\n"] if title else []
        for block in blocks:
            parts.append(normalize_block(self._renderer.render(block.element)))

        markdown = "".join(parts)
        logger.debug("Converted article %r: %d blocks, %d characters", title, len(blocks), len(markdown))
        return markdown
