"""Bottom-up rendering of a block's subtree with a rule set."""

from __future__ import annotations

from bs4.element import PageElement, Tag

from ..errors import RuleApplicationError, W2DError
from ..models.config import ParserConfig
from .rules import RuleSet, classify


class BlockRenderer:
    """
    Renders one block element to text.

    Children are rendered first and their concatenated output is handed to
    the rule of the parent, so rules never see markup. The walk keeps its own
    stack, so nesting depth is bounded by memory rather than the interpreter's
    recursion limit.

    Example:
        renderer = BlockRenderer(default_rules(config), config)
        text = renderer.render(block.element)
    """

    def __init__(self, rules: RuleSet, config: ParserConfig):
        self._rules = rules
        self._config = config

    def render(self, element: Tag) -> str:
        """
        Render a block element.

        Raises:
            RuleApplicationError: If any rule in the subtree fails
        """
        # Each frame: node, depth, pending children, rendered children
        stack = [(element, 0, iter(element.children), [])]
        while True:
            node, depth, children, parts = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                text = self._apply(node, "".join(parts), depth)
                if not stack:
                    return text
                stack[-1][3].append(text)
            elif isinstance(child, Tag):
                stack.append((child, depth + 1, iter(child.children), []))
            else:
                parts.append(self._apply(child, "", depth + 1))

    def _apply(self, node: PageElement, content: str, depth: int) -> str:
        kind = classify(node, self._config)
        rule = self._rules.rule_for(kind)
        try:
            return rule(node, content, depth)
        except W2DError:
            raise
        except Exception as e:
            tag = node.name if isinstance(node, Tag) else kind.value
            raise RuleApplicationError(tag, str(e)) from e
