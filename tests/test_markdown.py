"""Tests for the lightweight markdown renderer."""

from appstore_compliance.analysis.markdown import (
    LineKind,
    classify_line,
    parse_lines,
    split_bold,
    to_rich_markup,
)


class TestClassifyLine:
    def test_headings(self):
        assert classify_line("# Title").level == 1
        assert classify_line("## Sub").level == 2
        h3 = classify_line("### Deep")
        assert (h3.kind, h3.text, h3.level) == (LineKind.heading, "Deep", 3)

    def test_lists(self):
        assert classify_line("- item").kind == LineKind.bullet
        assert classify_line("* item").text == "item"
        numbered = classify_line("12. step")
        assert (numbered.kind, numbered.text) == (LineKind.numbered, "step")

    def test_blank_and_paragraph(self):
        assert classify_line("   ").kind == LineKind.blank
        assert classify_line("plain").kind == LineKind.paragraph

    def test_hash_without_space_is_paragraph(self):
        assert classify_line("#hashtag").kind == LineKind.paragraph

    def test_parse_empty(self):
        assert parse_lines("") == []


class TestSplitBold:
    def test_pairs(self):
        spans = split_bold("a **b** c")
        assert [(s.text, s.bold) for s in spans] == [("a ", False), ("b", True), (" c", False)]

    def test_unpaired_stays_literal(self):
        spans = split_bold("a ** b")
        assert [(s.text, s.bold) for s in spans] == [("a ** b", False)]


class TestToRichMarkup:
    def test_renders_bold_and_lists(self):
        markup = to_rich_markup("## Summary\n- **Fix** this\n1. one\n2. two")
        lines = markup.split("\n")
        assert lines[0] == "[bold]Summary[/]"
        assert lines[1] == "  • [b]Fix[/b] this"
        assert lines[2:] == ["  1. one", "  2. two"]

    def test_escapes_brackets(self):
        assert to_rich_markup("see [link]") == "see \\[link]"
