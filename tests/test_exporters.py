"""
Tests for bkmerge/exporters.py

Tests Netscape HTML rendering of grouped bookmarks and writing to disk.
"""
import pytest
from pathlib import Path

from bkmerge.exporters import render_html, export_file
from bkmerge.extractor import extract


class TestRenderHtml:
    """Test rendering of the grouped mapping."""

    def test_preamble(self):
        lines = render_html({}).splitlines()

        assert lines == [
            '<!DOCTYPE NETSCAPE-Bookmark-file-1>',
            '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">',
            '<TITLE>Bookmarks</TITLE>',
            '<H1>Merged Bookmarks</H1>',
            '<DL><p>',
            '</DL><p>',
        ]

    def test_one_block_per_label(self):
        document = render_html({
            "Docs": ["https://a.com"],
            "News": ["https://n.com", "https://m.com"],
        })

        assert document.count("<H3>") == 2
        assert document.count("<A HREF=") == 3
        assert '<DT><A HREF="https://m.com">News</A>' in document

    def test_escapes_by_default(self):
        document = render_html({"a<b": ['https://x.com/?q="1"']})

        assert "<H3>a&lt;b</H3>" in document
        assert 'HREF="https://x.com/?q=&quot;1&quot;"' in document

    def test_heading_is_escaped(self):
        document = render_html({}, heading="Tom & Jerry")
        assert "<H1>Tom &amp; Jerry</H1>" in document

    def test_verbatim_can_break_structure(self):
        """Without escaping, a closing tag in a label cuts the link text short."""
        document = render_html({"a</A>b": ["https://x.com"]}, escape=False)
        entries = extract(document)

        assert entries[0].label == "a"

    def test_ends_with_newline(self):
        assert render_html({"A": ["https://a.com"]}).endswith("</DL><p>\n")


class TestExportFile:
    """Test writing documents to disk."""

    def test_writes_document(self, tmp_path):
        path = export_file("<DL><p>\n</DL><p>\n", tmp_path / "out.html")

        assert path == tmp_path / "out.html"
        assert path.read_text(encoding="utf-8") == "<DL><p>\n</DL><p>\n"

    def test_creates_parent_directories(self, tmp_path):
        path = export_file("x", tmp_path / "a" / "b" / "out.html")
        assert path.exists()

    def test_accepts_str_path(self, tmp_path):
        path = export_file("x", str(tmp_path / "out.html"))
        assert isinstance(path, Path)

    def test_non_ascii_content(self, tmp_path):
        document = render_html({"Café ☕": ["https://café.example/"]})
        path = export_file(document, tmp_path / "out.html")

        entries = extract(path.read_text(encoding="utf-8"))
        assert entries[0].label == "Café ☕"
