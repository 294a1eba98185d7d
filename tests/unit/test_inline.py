#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for inline markup: emphasis, code spans, escapes, links and images."""

import re

import pytest

from markweave.ast import Bold, Code, Image, Italic, Link, Strikethrough, Text
from markweave.exceptions import StructuralError
from markweave.inline_parser import InlineParser
from markweave.inline_syntaxes import InlineSyntax
from markweave.inline_syntaxes.links import (
    LinkSyntax,
    _BracketSyntax,
    find_closing_bracket,
    match_brackets,
    parse_inline_destination,
    unescape,
)
from markweave.options import ParserOptions
from markweave.parser import MarkdownParser, parse_inline
from markweave.session import ParseSession


class MentionSyntax(InlineSyntax):
    """Turns ``@name`` into a link to a profile page."""

    pattern = re.compile(r"@(\w+)")
    trigger_characters = "@"

    def parse(self, parser, match):
        return [Link(children=[Text(match.group(0))], url=f"/users/{match.group(1)}")], match.end()


class EmptyMatchSyntax(InlineSyntax):
    """Reports success without consuming any text."""

    pattern = re.compile(r"(?=%)")
    trigger_characters = "%"

    def parse(self, parser, match):
        return [], match.start()


@pytest.mark.unit
class TestEmphasis:
    """Test bold, italic and strikethrough."""

    @pytest.mark.parametrize("text", ["**bold**", "__bold__"])
    def test_bold(self, text):
        """Test both bold delimiters."""
        assert parse_inline(text) == [Bold(children=[Text("bold")])]

    @pytest.mark.parametrize("text", ["*it*", "_it_"])
    def test_italic(self, text):
        """Test both italic delimiters."""
        assert parse_inline(text) == [Italic(children=[Text("it")])]

    def test_emphasis_within_text(self):
        """Test emphasis surrounded by plain text."""
        assert parse_inline("a *b* c") == [Text("a "), Italic(children=[Text("b")]), Text(" c")]

    def test_bold_containing_italic(self):
        """Test nested emphasis."""
        assert parse_inline("**a *b* c**") == [
            Bold(children=[Text("a "), Italic(children=[Text("b")]), Text(" c")])
        ]

    def test_triple_delimiters(self):
        """Test bold and italic from one run of three asterisks."""
        assert parse_inline("***x***") == [Bold(children=[Italic(children=[Text("x")])])]

    def test_intraword_underscores_stay_text(self):
        """Test that snake_case identifiers are not emphasis."""
        assert parse_inline("snake_case_name") == [Text("snake_case_name")]

    def test_intraword_asterisks_are_emphasis(self):
        """Test that asterisks work inside words."""
        assert parse_inline("un*frigging*believable") == [
            Text("un"),
            Italic(children=[Text("frigging")]),
            Text("believable"),
        ]

    def test_delimiter_followed_by_space_is_text(self):
        """Test that spaced asterisks are literal."""
        assert parse_inline("2 * 3 * 4") == [Text("2 * 3 * 4")]

    def test_unclosed_delimiter_is_text(self):
        """Test that an opener without a closer is literal."""
        assert parse_inline("**open") == [Text("**open")]

    def test_strikethrough_with_gfm(self):
        """Test ~~deleted~~ with the gfm extensions."""
        assert parse_inline("~~gone~~") == [Strikethrough(children=[Text("gone")])]

    def test_strikethrough_without_gfm(self, commonmark_parser):
        """Test that tildes are literal without gfm."""
        assert commonmark_parser.parse_inline("~~gone~~") == [Text("~~gone~~")]


@pytest.mark.unit
class TestCodeAndEscapes:
    """Test code spans and backslash escapes."""

    def test_code_span(self):
        """Test a simple code span."""
        assert parse_inline("use `ls`") == [Text("use "), Code("ls")]

    def test_double_backtick_span(self):
        """Test a span containing a backtick."""
        assert parse_inline("``a`b``") == [Code("a`b")]

    def test_single_surrounding_space_stripped(self):
        """Test that one space on each side is removed."""
        assert parse_inline("` a `") == [Code("a")]

    def test_markup_inside_code_is_literal(self):
        """Test that code spans are opaque to other rules."""
        assert parse_inline("`*not emphasis*`") == [Code("*not emphasis*")]

    def test_unclosed_backticks_are_text(self):
        """Test a backtick run without a closer."""
        assert parse_inline("`unclosed") == [Text("`unclosed")]

    def test_escaped_punctuation(self):
        """Test that escapes produce literal characters."""
        assert parse_inline(r"\*not emphasis\*") == [Text("*not emphasis*")]

    def test_backslash_before_letter_is_literal(self):
        """Test that only punctuation is escapable."""
        assert parse_inline(r"C:\path") == [Text(r"C:\path")]

    def test_unescape_helper(self):
        """Test the unescape helper used for destinations."""
        assert unescape(r"a\_b\(c\)") == "a_b(c)"


@pytest.mark.unit
class TestInlineLinks:
    """Test inline links and images."""

    def test_inline_link(self):
        """Test a link with destination only."""
        assert parse_inline("[text](http://example.com)") == [
            Link(children=[Text("text")], url="http://example.com")
        ]

    @pytest.mark.parametrize(
        "source,url,title",
        [
            ('[a](/u "Title")', "/u", "Title"),
            ("[a](/u 'Title')", "/u", "Title"),
            ("[a](/u (Title))", "/u", "Title"),
            ("[a](<my url>)", "my url", None),
            ("[a](/p(1))", "/p(1)", None),
            ("[a]( /spaced )", "/spaced", None),
            ("[a]()", "", None),
        ],
    )
    def test_destination_and_title_forms(self, source, url, title):
        """Test the accepted destination and title spellings."""
        (link,) = parse_inline(source)
        assert link.url == url
        assert link.title == title

    def test_markup_in_link_text(self):
        """Test that link text is parsed as inline markup."""
        assert parse_inline("[**b**](/u)") == [Link(children=[Bold(children=[Text("b")])], url="/u")]

    def test_space_before_destination_is_not_link(self):
        """Test that '[a] (b)' is plain text."""
        assert parse_inline("[a] (b)") == [Text("[a] (b)")]

    def test_nested_brackets_in_text(self):
        """Test balanced brackets inside link text."""
        (link,) = parse_inline("[a [b] c](/u)")
        assert link.text_content == "a [b] c"

    def test_image(self):
        """Test an image with flattened alt text."""
        assert parse_inline('![alt *x*](i.png "T")') == [Image(destination="i.png", alt="alt x", title="T")]

    def test_link_wrapping_image(self):
        """Test an image used as link text."""
        (link,) = parse_inline("[![logo](l.png)](/home)")
        assert link.url == "/home"
        assert link.children == [Image(destination="l.png", alt="logo")]

    def test_find_closing_bracket(self):
        """Test bracket matching with escapes and code spans."""
        assert find_closing_bracket("[a[b]c]", 0) == 6
        assert find_closing_bracket(r"[a\]b]", 0) == 5
        assert find_closing_bracket("[`]`]", 0) == 4
        assert find_closing_bracket("[open", 0) is None

    def test_match_brackets_pairs_every_opener(self):
        """Test that one scan pairs nested and unclosed brackets."""
        assert match_brackets("[a[b]] [c") == {0: 5, 2: 4, 7: None}
        assert match_brackets("] [x]") == {2: 4}
        assert match_brackets("[`[` [x]", 0) == {0: None, 5: 7}
        assert match_brackets("[a] [b]", 4) == {4: 6}

    def test_unclosed_backtick_runs_are_not_opaque(self):
        """Test that a backtick run without a partner leaves brackets visible."""
        assert match_brackets("`` [a] ` `") == {3: 5}

    def test_bracket_rules_must_define_resolver_and_builder(self):
        """Test that the shared bracket rule is abstract."""
        with pytest.raises(TypeError):
            _BracketSyntax()

        class LinkWithoutBuilder(_BracketSyntax):
            pattern = LinkSyntax.pattern

            def _resolver(self, parser):
                return None

        with pytest.raises(TypeError):
            LinkWithoutBuilder()

    def test_parse_inline_destination(self):
        """Test the destination parser on valid and invalid input."""
        assert parse_inline_destination('(/u "t") rest', 0) == ("/u", "t", 8)
        assert parse_inline_destination("(/u", 0) is None
        assert parse_inline_destination('(/u "t" x)', 0) is None
        assert parse_inline_destination('(/u"t")', 0) == ('/u"t"', None, 7)


@pytest.mark.unit
class TestAutolinks:
    """Test angle-bracket and bare URL autolinks."""

    def test_uri_autolink(self):
        """Test <scheme:...> autolinks."""
        assert parse_inline("<https://example.com/a>") == [
            Link(children=[Text("https://example.com/a")], url="https://example.com/a")
        ]

    def test_email_autolink(self):
        """Test <user@host> autolinks."""
        assert parse_inline("<me@example.com>") == [Link(children=[Text("me@example.com")], url="mailto:me@example.com")]

    def test_angle_text_not_autolink(self):
        """Test that arbitrary angle brackets stay text."""
        assert parse_inline("<not a link>") == [Text("<not a link>")]

    def test_bare_www_link(self):
        """Test a www. link with trailing punctuation removed."""
        assert parse_inline("see www.example.com.") == [
            Text("see "),
            Link(children=[Text("www.example.com")], url="http://www.example.com"),
            Text("."),
        ]

    def test_bare_url_in_parentheses(self):
        """Test that an unbalanced closing parenthesis is not part of the URL."""
        assert parse_inline("(see https://a.org/x)") == [
            Text("(see "),
            Link(children=[Text("https://a.org/x")], url="https://a.org/x"),
            Text(")"),
        ]

    def test_bare_url_inside_word_ignored(self):
        """Test that a URL glued to a word is not linked."""
        assert parse_inline("xhttp://a.org") == [Text("xhttp://a.org")]

    def test_bare_url_needs_gfm(self, commonmark_parser):
        """Test that bare URLs are plain text without gfm."""
        assert commonmark_parser.parse_inline("https://a.org") == [Text("https://a.org")]


@pytest.mark.unit
class TestCustomInlineRules:
    """Test plugging custom rules into the inline phase."""

    def test_custom_rule_runs_first(self):
        """Test a mention rule added through the options."""
        nodes = parse_inline("hi @ada!", inline_syntaxes=[MentionSyntax()])
        assert nodes == [Text("hi "), Link(children=[Text("@ada")], url="/users/ada"), Text("!")]

    def test_custom_rule_in_block_text(self):
        """Test that custom inline rules apply inside block text."""
        parser = MarkdownParser(ParserOptions(inline_syntaxes=(MentionSyntax(),)))
        doc = parser.parse("# Hello @bob")
        assert doc.children[0].children[1].url == "/users/bob"

    def test_rule_consuming_nothing_raises(self):
        """Test that a rule without progress is a structural error."""
        with pytest.raises(StructuralError) as exc_info:
            parse_inline("50% off", inline_syntaxes=[EmptyMatchSyntax()])
        assert exc_info.value.rule == "EmptyMatchSyntax"

    def test_inline_error_reports_source_line(self):
        """Test that failures during resolution carry the block's line."""
        with pytest.raises(StructuralError) as exc_info:
            MarkdownParser(ParserOptions(inline_syntaxes=(EmptyMatchSyntax(),))).parse("intro\n\n50% off")
        assert exc_info.value.line == 3

    def test_no_inline_rules(self):
        """Test that disabling all inline rules leaves plain text."""
        nodes = parse_inline("**a** [b](/c)", extension_set="none", with_default_inline_syntaxes=False)
        assert nodes == [Text("**a** [b](/c)")]


@pytest.mark.unit
class TestInlineParserState:
    """Test the per-fragment lookups shared by inline rules."""

    def test_closing_bracket_lookup(self):
        """Test bracket lookups for nested, unclosed and unaligned openers."""
        parser = InlineParser("[a [b] [c", ParseSession())

        assert parser.closing_bracket(0) is None
        assert parser.closing_bracket(3) == 5
        assert parser.closing_bracket(7) is None
        assert parser.closing_bracket(4) is None

    def test_failed_search_applies_to_later_offsets(self):
        """Test that a recorded failure covers later offsets only."""
        parser = InlineParser("text", ParseSession())
        parser.record_failed_search("*", 5)

        assert parser.search_failed("*", 5)
        assert parser.search_failed("*", 9)
        assert not parser.search_failed("*", 4)
        assert not parser.search_failed("_", 9)

    def test_earliest_failure_is_kept(self):
        """Test that recording a later failure keeps the earlier offset."""
        parser = InlineParser("text", ParseSession())
        parser.record_failed_search("~~", 3)
        parser.record_failed_search("~~", 8)

        assert parser.search_failed("~~", 3)
