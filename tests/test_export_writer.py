# tests/test_export_writer.py
"""
Tests for exporter.writer.

Covers:
- pretty printing
- unescaped non-ASCII / HTML-sensitive characters
- explicit nulls
- parent directory creation
"""

from __future__ import annotations

import json
from pathlib import Path

from exporter.writer import render_document, write_document


def test_document_is_pretty_printed():
    text = render_document({"blocks": [{"name": "mod:stone"}]})

    assert text.splitlines() == [
        "{",
        '  "blocks": [',
        "    {",
        '      "name": "mod:stone"',
        "    }",
        "  ]",
        "}",
    ]


def test_html_and_unicode_are_not_escaped():
    text = render_document({"name": "<tag> & 'quote' – é"})

    assert "<tag> & 'quote' – é" in text
    assert "\\u" not in text


def test_nulls_are_kept():
    text = render_document({"properties": [None, "lit"]})

    assert json.loads(text) == {"properties": [None, "lit"]}
    assert "null" in text


def test_write_document_creates_parent_dirs(tmp_path: Path):
    path = tmp_path / "build" / "out" / "export.json"

    written = write_document({"packets": {}}, path, indent=4)

    assert written == path
    assert json.loads(path.read_text(encoding="utf-8")) == {"packets": {}}
    assert '    "packets"' in path.read_text(encoding="utf-8")
