"""Tests for element classification, rule sets and block rendering."""

import pytest
from bs4 import BeautifulSoup, Comment
from w2d.conversion import BlockRenderer, ElementKind, RuleSet, classify, default_rules
from w2d.errors import RuleApplicationError
from w2d.models.config import ParserConfig


def first_element(html: str):
    """Parse html and return its first top-level node."""
    return next(iter(BeautifulSoup(html, "html.parser").contents))


@pytest.fixture
def config():
    return ParserConfig()


@pytest.fixture
def renderer(config):
    return BlockRenderer(default_rules(config), config)


def render(renderer, html: str) -> str:
    return renderer.render(first_element(html))


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "html,kind",
        [
            ("plain text", ElementKind.TEXT),
            ("<!-- note -->", ElementKind.IGNORED),
            ('<a href="/wiki/X">x</a>', ElementKind.ANCHOR),
            ("<span>x</span>", ElementKind.SPAN),
            ("<h2>x</h2>", ElementKind.HEADING),
            ("<h3>x</h3>", ElementKind.HEADING),
            ('<div class="mw-heading mw-heading2"><h2>x</h2></div>', ElementKind.HEADING),
            ("<p>x</p>", ElementKind.PARAGRAPH),
            ("<ul><li>x</li></ul>", ElementKind.LIST),
            ("<ol><li>x</li></ol>", ElementKind.LIST),
            ("<li>x</li>", ElementKind.LIST_ITEM),
            ("<br>", ElementKind.LINE_BREAK),
            ("<style>.x{}</style>", ElementKind.SCRIPT),
            ("<script>x()</script>", ElementKind.SCRIPT),
            ("<div>x</div>", ElementKind.OTHER),
            ("<b>x</b>", ElementKind.OTHER),
        ],
    )
    def test_kinds(self, config, html, kind):
        """Test that nodes map to their kind."""
        assert classify(first_element(html), config) is kind

    def test_comment_is_ignored(self, config):
        """Test that comment nodes are ignored rather than treated as text."""
        assert classify(Comment("x"), config) is ElementKind.IGNORED


class TestRuleSet:
    """Tests for RuleSet."""

    def test_default_rules_cover_every_kind(self):
        """Test that the default rule set has a rule for each kind."""
        rules = default_rules()
        for kind in ElementKind:
            assert callable(rules.rule_for(kind))

    def test_incomplete_rule_set_rejected(self):
        """Test that a rule set missing a kind cannot be built."""
        with pytest.raises(ValueError, match="anchor"):
            RuleSet(rules={kind: (lambda n, c, d: c) for kind in ElementKind if kind is not ElementKind.ANCHOR})

    def test_rules_are_read_only(self):
        """Test that the rule mapping cannot be changed after construction."""
        rules = default_rules()
        with pytest.raises(TypeError):
            rules.rules[ElementKind.ANCHOR] = lambda n, c, d: c

    def test_custom_rule_is_used(self, config):
        """Test that the renderer applies the injected rules."""
        mapping = dict(default_rules(config).rules)
        mapping[ElementKind.OTHER] = lambda node, content, depth: content.upper()
        renderer = BlockRenderer(RuleSet(rules=mapping), config)

        assert renderer.render(first_element("<p>a <b>bold</b> word</p>")) == "a BOLD word\n\n"


class TestAnchorRule:
    """Tests for the anchor rule."""

    def test_keeps_link_text_only(self, renderer):
        """Test that link markup and destination are stripped."""
        result = render(renderer, '<p>see <a href="https://example.com/x">the page</a></p>')
        assert result == "see the page\n\n"
        assert "example.com" not in result

    def test_drops_fragment_links(self, renderer):
        """Test that in-page links contribute no text."""
        result = render(renderer, '<p>Fact<sup class="reference"><a href="#cite_note-1">[1]</a></sup>.</p>')
        assert result == "Fact.\n\n"

    def test_drops_visual_editor_link(self, renderer):
        """Test that the visual editor link is removed."""
        result = render(renderer, '<p>a<a class="mw-editsection-visualeditor" href="/w/x">edit</a>b</p>')
        assert result == "ab\n\n"

    def test_anchor_without_href(self, renderer):
        """Test that an anchor without target keeps its text."""
        assert render(renderer, "<p><a>plain</a></p>") == "plain\n\n"

    def test_anchor_uses_plain_text(self, renderer):
        """Test that an anchor contributes its plain text, markup included."""
        result = render(renderer, '<p>see <a href="/wiki/X">X<span class="mw-editsection">[edit]</span></a></p>')
        assert result == "see X[edit]\n\n"


class TestSpanRule:
    """Tests for the span rule."""

    def test_drops_edit_section(self, renderer):
        """Test that edit section spans are removed with their content."""
        result = render(
            renderer,
            '<h2><span class="mw-headline" id="History">History</span>'
            '<span class="mw-editsection"><span class="mw-editsection-bracket">[</span>'
            '<a href="/w/index.php?action=edit">edit</a>'
            '<span class="mw-editsection-bracket">]</span></span></h2>',
        )
        assert result == "## History\n\n"

    def test_other_spans_pass_through(self, renderer):
        """Test that ordinary spans keep their content."""
        assert render(renderer, '<p><span class="nowrap">kept</span></p>') == "kept\n\n"


class TestBlockFormatting:
    """Tests for heading, paragraph and list formatting."""

    def test_paragraph(self, renderer):
        """Test paragraph output ends in a blank line."""
        assert render(renderer, "<p>paragraph</p>") == "paragraph\n\n"

    def test_paragraph_newlines_removed(self, renderer):
        """Test that newlines inside a paragraph are stripped."""
        assert render(renderer, "<p>\nsome text\n</p>") == "some text\n\n"

    def test_heading(self, renderer):
        """Test heading output is a level-2 heading."""
        assert render(renderer, "<h2>Subheading</h2>") == "## Subheading\n\n"

    def test_heading_wrapper(self, renderer):
        """Test that the wrapped heading renders once, without its edit link."""
        result = render(
            renderer,
            '<div class="mw-heading mw-heading2"><h2 id="Uses">Uses</h2>'
            '<span class="mw-editsection">[<a href="/w/edit">edit</a>]</span></div>',
        )
        assert result == "## Uses\n\n"

    def test_nested_paragraph_passes_through(self, renderer):
        """Test that formatting applies only to the block itself."""
        assert render(renderer, "<ul><li><p>inner</p></li></ul>") == "- inner\n\n"

    def test_unordered_list(self, renderer):
        """Test unordered list items."""
        assert render(renderer, "<ul>\n<li>one</li>\n<li>two</li>\n</ul>") == "- one\n- two\n\n"

    def test_ordered_list(self, renderer):
        """Test ordered list numbering."""
        assert render(renderer, "<ol><li>one</li><li>two</li></ol>") == "1. one\n2. two\n\n"

    def test_ordered_list_start(self, renderer):
        """Test that numbering honours the start attribute."""
        assert render(renderer, '<ol start="3"><li>c</li><li>d</li></ol>') == "3. c\n4. d\n\n"

    def test_nested_list(self, renderer):
        """Test that nested lists are indented below their item."""
        result = render(renderer, "<ul><li>a<ul><li>b</li><li>c</li></ul></li><li>d</li></ul>")
        assert result == "- a\n  - b\n  - c\n- d\n\n"

    def test_item_holding_only_nested_list(self, renderer):
        """Test that an item without text keeps its nested list indented."""
        assert render(renderer, "<ul><li><ul><li>x</li></ul></li></ul>") == "-\n  - x\n\n"

    def test_doubly_nested_list(self, renderer):
        """Test that each nesting level adds one indent."""
        result = render(renderer, "<ul><li>a<ul><li>b<ul><li>c</li></ul></li></ul></li></ul>")
        assert result == "- a\n  - b\n    - c\n\n"

    def test_list_item_text_spanning_lines(self, renderer):
        """Test that item text across source lines stays on the item line."""
        assert render(renderer, "<ul><li>foo\nbar</li></ul>") == "- foo bar\n\n"

    def test_line_break_becomes_space(self, renderer):
        """Test that a line break separates the words around it."""
        assert render(renderer, "<p>a<br>b</p>") == "a b\n\n"
        assert render(renderer, "<p>a<br/>b</p>") == "a b\n\n"

    def test_deeply_nested_markup(self, renderer):
        """Test that nesting beyond the recursion limit still renders."""
        html = "<p>" + "<b>" * 1500 + "x" + "</b>" * 1500 + "</p>"
        assert render(renderer, html) == "x\n\n"

    def test_empty_list_item_dropped(self, renderer):
        """Test that items without text produce no line."""
        assert render(renderer, "<ul><li> </li><li>x</li></ul>") == "- x\n\n"

    def test_styles_and_comments_dropped(self, renderer):
        """Test that inline styles and comments contribute no text."""
        result = render(renderer, "<p>a<style>.mw-parser-output .x{}</style><!-- c -->b</p>")
        assert result == "ab\n\n"


class TestRuleFailures:
    """Tests for rule failures."""

    def test_malformed_start_attribute(self, renderer):
        """Test that a non-numeric list start raises RuleApplicationError."""
        with pytest.raises(RuleApplicationError) as exc_info:
            render(renderer, '<ol start="x"><li>a</li></ol>')

        assert exc_info.value.tag == "li"
        assert "start" in str(exc_info.value)

    def test_failing_rule_is_wrapped(self, config):
        """Test that exceptions from rules surface as RuleApplicationError."""

        def broken(node, content, depth):
            raise KeyError("missing")

        mapping = dict(default_rules(config).rules)
        mapping[ElementKind.SPAN] = broken
        renderer = BlockRenderer(RuleSet(rules=mapping), config)

        with pytest.raises(RuleApplicationError, match="<span>"):
            renderer.render(first_element("<p>a<span>b</span></p>"))

    def test_unexpected_exception_is_wrapped(self, config):
        """Test that any exception type from a rule surfaces as RuleApplicationError."""

        def broken(node, content, depth):
            raise IndexError("out of range")

        mapping = dict(default_rules(config).rules)
        mapping[ElementKind.PARAGRAPH] = broken
        renderer = BlockRenderer(RuleSet(rules=mapping), config)

        with pytest.raises(RuleApplicationError) as exc_info:
            renderer.render(first_element("<p>a</p>"))

        assert exc_info.value.tag == "p"
        assert isinstance(exc_info.value.__cause__, IndexError)

    def test_w2d_errors_propagate_unchanged(self, config):
        """Test that errors already in the w2d hierarchy are not rewrapped."""

        def broken(node, content, depth):
            raise RuleApplicationError("x", "inner")

        mapping = dict(default_rules(config).rules)
        mapping[ElementKind.TEXT] = broken
        renderer = BlockRenderer(RuleSet(rules=mapping), config)

        with pytest.raises(RuleApplicationError) as exc_info:
            renderer.render(first_element("<p>a</p>"))

        assert exc_info.value.tag == "x"
