#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Property-based tests for the parser.

Hypothesis generates Markdown-like documents and checks properties that must
hold for any input: parsing never fails under the default policy, gives the
same tree every time, leaves no placeholders behind and always produces
well-formed tables and headers.
"""

import time
from unittest.mock import patch

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from markweave.ast import Header, Paragraph, Table, Text, UnparsedContent, find_nodes, validate_tree
from markweave.inline_syntaxes.emphasis import EmphasisSyntax
from markweave.inline_syntaxes.links import match_brackets
from markweave.parser import parse_inline, parse_markdown

MARKDOWN_ALPHABET = st.sampled_from(list("abc XYZ 123 #>-*+_~`|:![]()<>\\.\"'\t\n"))

markdown_lines = st.lists(st.text(alphabet=MARKDOWN_ALPHABET, max_size=30), max_size=15).map("\n".join)

header_text = st.text(alphabet=st.sampled_from(list("abc12")), min_size=1, max_size=8)

cell_text = st.text(alphabet=st.sampled_from(list("abc 12*_`\\|")), max_size=8)


@st.composite
def tables(draw):
    """Generate a pipe table whose body rows have random widths."""
    columns = draw(st.integers(min_value=1, max_value=5))
    header = "| " + " | ".join(draw(st.lists(header_text, min_size=columns, max_size=columns))) + " |"
    separator = "|" + "|".join(draw(st.sampled_from(["---", ":--", "--:", ":-:"])) for _ in range(columns)) + "|"
    rows = [
        "| " + " | ".join(draw(st.lists(cell_text, min_size=1, max_size=7))) + " |"
        for _ in range(draw(st.integers(min_value=1, max_value=4)))
    ]
    return columns, "\n".join([header, separator, *rows])


@pytest.mark.unit
@pytest.mark.fuzzing
class TestParserProperties:
    """Properties that hold for every input."""

    @given(markdown_lines)
    @settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
    def test_parse_never_fails(self, text):
        """Test that malformed markup never raises and gives a valid tree."""
        doc = parse_markdown(text)
        assert validate_tree(doc, strict=True) == []

    @given(markdown_lines)
    @settings(deadline=None)
    def test_parse_is_deterministic(self, text):
        """Test that the same input always gives the same tree."""
        assert parse_markdown(text) == parse_markdown(text)

    @given(markdown_lines)
    @settings(deadline=None)
    def test_no_placeholders_remain(self, text):
        """Test that every UnparsedContent is resolved."""
        assert find_nodes(parse_markdown(text), UnparsedContent) == []

    @given(markdown_lines)
    @settings(deadline=None)
    def test_header_levels_in_range(self, text):
        """Test that header levels stay within 1-6."""
        for header in find_nodes(parse_markdown(text), Header):
            assert 1 <= header.level <= 6

    @given(tables())
    @settings(deadline=None)
    def test_table_rows_are_rectangular(self, generated):
        """Test that every row has exactly column_count cells."""
        columns, text = generated
        (table,) = find_nodes(parse_markdown(text), Table)

        assert table.column_count == columns
        for row in table.children:
            assert len(row.children) == columns
            assert [cell.column_index for cell in row.children] == list(range(columns))

    @given(st.text(max_size=200))
    @settings(deadline=None)
    def test_inline_parse_accepts_any_text(self, text):
        """Test that inline parsing handles arbitrary unicode."""
        nodes = parse_inline(text)
        assert all(not isinstance(node, UnparsedContent) for node in nodes)


UNCLOSED_UNITS = ["[", "![", "*a ", "_a ", "**a ", "~~a ", "`` `a "]


@pytest.mark.unit
class TestAdversarialInput:
    """Long runs of markup that never closes must still parse in linear time."""

    @pytest.mark.parametrize("unit", UNCLOSED_UNITS)
    def test_long_unclosed_markup_parses_quickly(self, unit):
        """Test a 20,000-unit paragraph of unclosed markup against a time budget."""
        text = unit * 20000

        start_time = time.time()
        doc = parse_markdown(text)
        processing_time = time.time() - start_time

        assert processing_time < 5.0, f"Parsing took too long: {processing_time:.2f} seconds"
        assert isinstance(doc.children[0], Paragraph)

    @pytest.mark.parametrize("unit", ["[", "*a ", "_a ", "~~a "])
    def test_unclosed_markup_stays_text(self, unit):
        """Test that unclosed markup comes back as a single text node."""
        text = unit * 2000
        assert parse_inline(text) == [Text(text)]

    @pytest.mark.parametrize("unit", ["*a ", "_a ", "~~a "])
    def test_closing_delimiter_searched_once(self, unit):
        """Test that a delimiter with no closer is not searched for again."""
        with patch.object(EmphasisSyntax, "_find_closing", wraps=EmphasisSyntax._find_closing) as find_closing:
            parse_inline(unit * 2000)

        assert find_closing.call_count == 1

    def test_brackets_paired_in_one_scan(self):
        """Test that unclosed brackets are paired by a single scan."""
        with patch("markweave.inline_parser.match_brackets", wraps=match_brackets) as pair:
            parse_inline("[" * 2000)

        assert pair.call_count == 1

    def test_escaped_text_merges_linearly(self):
        """Test that many escapes collapse into one text node."""
        text = "\\*" * 20000

        start_time = time.time()
        nodes = parse_inline(text)
        processing_time = time.time() - start_time

        assert nodes == [Text("*" * 20000)]
        assert processing_time < 5.0, f"Parsing took too long: {processing_time:.2f} seconds"
