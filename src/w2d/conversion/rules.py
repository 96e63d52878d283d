"""Rewrite rules applied while rendering article blocks to Markdown.

Every node of the tree is classified into exactly one ``ElementKind`` and
rendered by the rule registered for that kind. Rules receive the node, the
already rendered text of its children and the node's depth below the block
being rendered (the block itself is depth 0).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from ..models.config import ParserConfig

Rule = Callable[[PageElement, str, int], str]


class ElementKind(str, Enum):
    """Closed set of node kinds the renderer distinguishes."""

    TEXT = "text"
    IGNORED = "ignored"
    ANCHOR = "anchor"
    SPAN = "span"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    LIST_ITEM = "list_item"
    LINE_BREAK = "line_break"
    SCRIPT = "script"
    OTHER = "other"


_TAG_KINDS = {
    "a": ElementKind.ANCHOR,
    "span": ElementKind.SPAN,
    "h1": ElementKind.HEADING,
    "h2": ElementKind.HEADING,
    "h3": ElementKind.HEADING,
    "h4": ElementKind.HEADING,
    "h5": ElementKind.HEADING,
    "h6": ElementKind.HEADING,
    "p": ElementKind.PARAGRAPH,
    "ul": ElementKind.LIST,
    "ol": ElementKind.LIST,
    "li": ElementKind.LIST_ITEM,
    "br": ElementKind.LINE_BREAK,
    "script": ElementKind.SCRIPT,
    "style": ElementKind.SCRIPT,
    "noscript": ElementKind.SCRIPT,
}


def classify(node: PageElement, config: ParserConfig) -> ElementKind:
    """Return the kind of a tree node."""
    # Comments, doctypes, CDATA and processing instructions
    if isinstance(node, PreformattedString):
        return ElementKind.IGNORED
    if isinstance(node, NavigableString):
        return ElementKind.TEXT
    if not isinstance(node, Tag):
        return ElementKind.IGNORED
    if node.name == "div" and config.heading_wrapper_class in node.get_attribute_list("class"):
        return ElementKind.HEADING
    return _TAG_KINDS.get(node.name, ElementKind.OTHER)


def _has_class(element: PageElement, class_name: str) -> bool:
    return isinstance(element, Tag) and class_name in element.get_attribute_list("class")


# Marks lines produced by a nested list until the enclosing item indents them
_NESTED = "\x1f"


def _single_line(content: str) -> str:
    return content.replace("\n", "").replace(_NESTED, "").strip()


def _text(node: PageElement, content: str, depth: int) -> str:
    return str(node).replace(_NESTED, "")


def _space(node: PageElement, content: str, depth: int) -> str:
    return " "


def _empty(node: PageElement, content: str, depth: int) -> str:
    return ""


def _pass_through(node: PageElement, content: str, depth: int) -> str:
    return content


def _heading(node: PageElement, content: str, depth: int) -> str:
    if depth > 0:
        return content
    return "## " + _single_line(content) + "\n\n"


def _paragraph(node: PageElement, content: str, depth: int) -> str:
    if depth > 0:
        return content
    return _single_line(content) + "\n\n"


def _list(node: PageElement, content: str, depth: int) -> str:
    if depth > 0:
        lines = [line for line in content.split("\n") if line.strip()]
        return "\n" + "".join(_NESTED + line + "\n" for line in lines)
    items = [line.replace(_NESTED, "  ") for line in content.split("\n") if line.strip()]
    return "\n".join(items) + "\n\n"


def _list_item_marker(node: PageElement) -> str:
    parent = node.parent
    if not isinstance(parent, Tag) or parent.name != "ol":
        return "- "

    start = parent.get("start", "1")
    try:
        first = int(start)
    except (TypeError, ValueError) as e:
        raise ValueError(f"ordered list has a non-numeric start attribute {start!r}") from e
    return f"{first + len(node.find_previous_siblings('li'))}. "


def _list_item(node: PageElement, content: str, depth: int) -> str:
    text, nested = [], []
    for line in content.split("\n"):
        if line.startswith(_NESTED):
            nested.append("  " + line[len(_NESTED) :] + "\n")
        elif line.strip():
            text.append(line.strip())
    if not text and not nested:
        return ""

    marker = _list_item_marker(node)
    head = marker + " ".join(text) if text else marker.rstrip()
    return head + "\n" + "".join(nested)


def _make_anchor_rule(config: ParserConfig) -> Rule:
    def anchor(node: PageElement, content: str, depth: int) -> str:
        href = node.get("href") if isinstance(node, Tag) else None
        if isinstance(href, str) and href.startswith("#"):
            return ""
        if _has_class(node, config.visual_editor_class):
            return ""
        return node.get_text().replace(_NESTED, "")

    return anchor


def _make_span_rule(config: ParserConfig) -> Rule:
    def span(node: PageElement, content: str, depth: int) -> str:
        if _has_class(node, config.edit_section_class):
            return ""
        return content

    return span


@dataclass(frozen=True)
class RuleSet:
    """
    Immutable mapping from element kind to rule.

    A rule set must cover every ``ElementKind``; construction fails otherwise.
    """

    rules: Mapping[ElementKind, Rule]

    def __post_init__(self) -> None:
        missing = [kind.value for kind in ElementKind if kind not in self.rules]
        if missing:
            raise ValueError(f"rule set has no rule for: {', '.join(missing)}")
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))

    def rule_for(self, kind: ElementKind) -> Rule:
        return self.rules[kind]


def default_rules(config: Optional[ParserConfig] = None) -> RuleSet:
    """Build the rule set used for Wikipedia articles."""
    config = config or ParserConfig()
    return RuleSet(
        rules={
            ElementKind.TEXT: _text,
            ElementKind.IGNORED: _empty,
            ElementKind.ANCHOR: _make_anchor_rule(config),
            ElementKind.SPAN: _make_span_rule(config),
            ElementKind.HEADING: _heading,
            ElementKind.PARAGRAPH: _paragraph,
            ElementKind.LIST: _list,
            ElementKind.LIST_ITEM: _list_item,
            ElementKind.LINE_BREAK: _space,
            ElementKind.SCRIPT: _empty,
            ElementKind.OTHER: _pass_through,
        }
    )
