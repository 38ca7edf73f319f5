# src/exporter/writer.py
"""
Single-shot JSON writer for the export document.

- Pretty-printed (indent 2 by default)
- Non-ASCII and HTML-sensitive characters written as-is (<, >, &, ')
- None values written as null
- Parent directories created on demand

The document is serialized fully before the file is opened, so a
serialization failure never leaves a half-written file behind. OSError
from the write itself propagates to the caller.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping


def render_document(document: Mapping[str, Any], indent: int = 2) -> str:
    return json.dumps(document, indent=indent, ensure_ascii=False)


def write_document(document: Mapping[str, Any], path: Path, indent: int = 2) -> Path:
    """Serialize `document` and write it to `path` in one operation."""
    text = render_document(document, indent=indent)
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
