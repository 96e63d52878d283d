"""Wikipedia HTML to Markdown conversion."""

from .document import Block, BlockKind, extract_title, load_document, select_blocks
from .filters import suppress_empty_headings
from .parser import ArticleParser
from .renderer import BlockRenderer
from .rules import ElementKind, Rule, RuleSet, classify, default_rules
from .whitespace import normalize_block

__all__ = [
    "ArticleParser",
    # Loading and selection
    "Block",
    "BlockKind",
    "extract_title",
    "load_document",
    "select_blocks",
    # Rendering
    "BlockRenderer",
    "ElementKind",
    "Rule",
    "RuleSet",
    "classify",
    "default_rules",
    # Post-processing
    "normalize_block",
    "suppress_empty_headings",
]
