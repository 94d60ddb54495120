"""Tests for building tooltip content from documentation lines."""

import re

import pytest

from tooltip_generator.csharp_patterns import summary_extractor
from tooltip_generator.documentation import (
    build_tooltip_content,
    escape_newline,
    join_documentation,
)
from tooltip_generator.errors import DocumentationParseError


class TestEscapeNewline:
    def test_lf(self):
        assert escape_newline("\n") == "\\n"

    def test_crlf(self):
        assert escape_newline("\r\n") == "\\r\\n"


class TestJoin:
    def test_joins_with_escaped_marker(self):
        assert join_documentation(["A", "B", "C"]) == "A\\nB\\nC"

    def test_single_line_has_no_separator(self):
        assert join_documentation(["only"]) == "only"

    def test_empty(self):
        assert join_documentation([]) == ""


class TestWithoutExtractor:
    def test_joined_text_is_content(self):
        assert build_tooltip_content(["A", "B", "C"]) == "A\\nB\\nC"

    def test_content_is_sanitized(self):
        assert build_tooltip_content(['Use "fast" mode', "C:\\dir"]) == "Use 'fast' mode\\nC:/dir"


class TestSummaryExtractor:
    def test_multi_line_summary(self):
        lines = ["<summary>", "Current health.", "</summary>"]
        assert build_tooltip_content(lines, summary_extractor("\n")) == "Current health."

    def test_summary_body_spanning_lines(self):
        lines = ["<summary>", "First line", "Second line", "</summary>"]
        content = build_tooltip_content(lines, summary_extractor("\n"))
        assert content == "First line\\nSecond line"

    def test_single_line_summary(self):
        lines = ["<summary>Speed</summary>"]
        assert build_tooltip_content(lines, summary_extractor("\n")) == "Speed"

    def test_ignores_other_tags(self):
        lines = ["<summary>", "Radius", "</summary>", "<remarks>Not shown</remarks>"]
        assert build_tooltip_content(lines, summary_extractor("\n")) == "Radius"

    def test_crlf_marker(self):
        lines = ["<summary>", "One", "Two", "</summary>"]
        content = build_tooltip_content(lines, summary_extractor("\r\n"), escape_newline("\r\n"))
        assert content == "One\\r\\nTwo"

    def test_no_summary_gives_empty_content(self):
        assert build_tooltip_content(["plain text"], summary_extractor("\n")) == ""

    def test_no_summary_strict_raises(self):
        with pytest.raises(DocumentationParseError) as exc_info:
            build_tooltip_content(["plain text"], summary_extractor("\n"), strict=True)
        assert exc_info.value.documentation == "plain text"

    def test_custom_extractor(self):
        extractor = re.compile(r"^(?P<comment>[^.]*)\.")
        assert build_tooltip_content(["Short. Long details"], extractor) == "Short"
