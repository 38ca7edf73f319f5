# exporter package
# src/exporter/__init__.py

"""
Export pipeline surface:

- CatalogExporter -> builds the document from a host
- write_document  -> writes it as pretty JSON
- load_export_config / ExportConfig -> config/export.yaml
- configure_logging -> stdout logging for the CLI
"""

from .config import ExportConfig, load_export_config
from .logging_config import configure_logging
from .pipeline import CatalogExporter
from .writer import render_document, write_document

__all__ = [
    "CatalogExporter",
    "ExportConfig",
    "configure_logging",
    "load_export_config",
    "render_document",
    "write_document",
]
