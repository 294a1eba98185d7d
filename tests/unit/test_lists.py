#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for bullet, numbered and task lists."""

import pytest

from markweave.ast import (
    BlockQuote,
    Checkbox,
    CodeBlock,
    HorizontalRule,
    ListParagraph,
    OrderedList,
    OrderedListItem,
    Paragraph,
    Text,
    UnorderedList,
    UnorderedListItem,
)
from markweave.block_syntaxes import UnorderedListSyntax
from markweave.parser import parse_markdown


def _item_texts(list_node):
    return [item.text_content for item in list_node.children]


@pytest.mark.unit
class TestUnorderedLists:
    """Test bullet lists."""

    def test_simple_list(self):
        """Test a two-item list with list paragraphs."""
        doc = parse_markdown("- a\n- b")

        assert doc.children == [
            UnorderedList(
                children=[
                    UnorderedListItem(children=[ListParagraph(children=[Text("a")])]),
                    UnorderedListItem(children=[ListParagraph(children=[Text("b")])]),
                ]
            )
        ]

    @pytest.mark.parametrize("bullet", ["-", "*", "+"])
    def test_bullet_characters(self, bullet):
        """Test each bullet character."""
        doc = parse_markdown(f"{bullet} one\n{bullet} two")
        assert _item_texts(doc.children[0]) == ["one", "two"]

    def test_changing_bullet_starts_new_list(self):
        """Test that a different bullet character starts another list."""
        doc = parse_markdown("- a\n* b")
        assert [type(node) for node in doc.children] == [UnorderedList, UnorderedList]

    def test_nested_list(self):
        """Test a list nested by indentation."""
        doc = parse_markdown("- outer\n  - inner\n- next")
        outer = doc.children[0]
        first = outer.children[0]

        assert len(outer.children) == 2
        assert isinstance(first.children[0], ListParagraph)
        assert isinstance(first.children[1], UnorderedList)
        assert _item_texts(first.children[1]) == ["inner"]

    def test_lazy_continuation(self):
        """Test that an unindented line continues the item's paragraph."""
        doc = parse_markdown("- first line\nsecond line")
        assert doc.children[0].children[0].children == [ListParagraph(children=[Text("first line\nsecond line")])]

    def test_loose_list_stays_one_list(self):
        """Test that blank lines between items keep a single list."""
        doc = parse_markdown("- a\n\n- b")

        assert len(doc.children) == 1
        assert _item_texts(doc.children[0]) == ["a", "b"]

    def test_multiple_paragraphs_in_item(self):
        """Test an item with an indented second paragraph."""
        doc = parse_markdown("- a\n\n  b\n\nafter")
        item = doc.children[0].children[0]

        assert [child.text_content for child in item.children] == ["a", "b"]
        assert all(isinstance(child, ListParagraph) for child in item.children)
        assert isinstance(doc.children[1], Paragraph)

    def test_code_block_in_item(self):
        """Test an indented code block inside an item."""
        doc = parse_markdown("- item\n\n      code")
        item = doc.children[0].children[0]
        assert item.children[1] == CodeBlock(content="code")

    def test_rule_is_not_a_list(self):
        """Test that '- - -' and '* * *' are horizontal rules."""
        doc = parse_markdown("- - -\n\n* * *")
        assert [type(node) for node in doc.children] == [HorizontalRule, HorizontalRule]

    def test_list_in_blockquote(self):
        """Test a list inside a block quote."""
        doc = parse_markdown("> - a\n> - b")
        quote = doc.children[0]

        assert isinstance(quote, BlockQuote)
        assert _item_texts(quote.children[0]) == ["a", "b"]


@pytest.mark.unit
class TestOrderedLists:
    """Test numbered lists."""

    def test_start_number(self):
        """Test that the first number becomes the start."""
        doc = parse_markdown("3. three\n4. four")
        ordered = doc.children[0]

        assert isinstance(ordered, OrderedList)
        assert ordered.start == 3
        assert all(isinstance(item, OrderedListItem) for item in ordered.children)

    def test_parenthesis_delimiter(self):
        """Test '1)' markers and a delimiter change starting a new list."""
        doc = parse_markdown("1) a\n2) b\n3. c")

        assert [type(node) for node in doc.children] == [OrderedList, OrderedList]
        assert _item_texts(doc.children[0]) == ["a", "b"]
        assert doc.children[1].start == 3

    def test_list_starting_at_one_interrupts_paragraph(self):
        """Test that '1.' ends an open paragraph."""
        doc = parse_markdown("Steps:\n1. first")
        assert [type(node) for node in doc.children] == [Paragraph, OrderedList]

    def test_other_start_does_not_interrupt_paragraph(self):
        """Test that a number at the start of a wrapped line stays text."""
        doc = parse_markdown("It happened in\n1999. It was good.")

        assert len(doc.children) == 1
        assert isinstance(doc.children[0], Paragraph)


@pytest.mark.unit
class TestTaskLists:
    """Test task-list checkboxes."""

    def test_checkboxes_with_gfm(self):
        """Test checked and unchecked boxes."""
        doc = parse_markdown("- [ ] todo\n- [x] done\n- plain")
        items = doc.children[0].children

        assert [item.checkbox for item in items] == [Checkbox(checked=False), Checkbox(checked=True), None]
        assert _item_texts(doc.children[0]) == ["todo", "done", "plain"]

    def test_checkbox_in_ordered_list(self):
        """Test that numbered items can carry a box too."""
        doc = parse_markdown("1. [X] shipped")
        item = doc.children[0].children[0]

        assert item.checkbox == Checkbox(checked=True)
        assert item.text_content == "shipped"

    def test_checkboxes_ignored_without_gfm(self, commonmark_parser):
        """Test that boxes stay text without the gfm extensions."""
        doc = commonmark_parser.parse("- [ ] todo")
        item = doc.children[0].children[0]

        assert item.checkbox is None
        assert item.text_content == "[ ] todo"

    def test_custom_rule_overrides_extension(self):
        """Test that a custom list rule replaces the gfm task-list rule."""
        doc = parse_markdown("- [x] done", block_syntaxes=[UnorderedListSyntax(checkboxes=False)])
        assert doc.children[0].children[0].checkbox is None
