# src/cli/export_catalog.py

"""
Export a host's content registries to a single JSON catalog.

Usage (from project root):

    (.venv) registry-export
    (.venv) registry-export --host config/content/example_pack.yaml --output build/export.json
    (.venv) registry-export --host my_mod.export_host:bootstrap --log-level DEBUG

Exits 0 after writing the document, 1 on any export failure (nothing is
written in that case).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from catalog.errors import ExportError
from exporter.config import ExportConfig, load_export_config
from exporter.logging_config import configure_logging
from exporter.pipeline import CatalogExporter
from exporter.writer import write_document
from host.bootstrap import bootstrap_host


log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export block/item/entity/packet definitions to a JSON catalog."
    )
    parser.add_argument("--config", default=None, help="Path to export.yaml (default: config/export.yaml)")
    parser.add_argument("--host", default=None, help="Content pack path or module:callable host factory")
    parser.add_argument("--output", default=None, help="Output JSON path (default: export.json)")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--quiet", action="store_true", help="Do not print the summary table")
    return parser


def render_summary(counts: dict, output_path: Path) -> Table:
    table = Table(title=f"Exported {output_path}", show_header=True, header_style="bold magenta")
    table.add_column("Section")
    table.add_column("Entries", justify="right")
    for section, count in counts.items():
        table.add_row(section, str(count))
    return table


def run_export(cfg: ExportConfig) -> CatalogExporter:
    """Bootstrap the host, build the document and write it."""
    host = bootstrap_host(cfg.host)
    exporter = CatalogExporter(host, include_entity_types=cfg.include_entity_types)
    document = exporter.run()
    write_document(document, cfg.output_path, indent=cfg.indent)
    log.info("wrote %s", cfg.output_path)
    return exporter


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_export_config(Path(args.config) if args.config else None)
        cfg = cfg.with_overrides(host=args.host, output_path=args.output, log_level=args.log_level)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    configure_logging(cfg.log_level)

    try:
        exporter = run_export(cfg)
    except (ExportError, OSError, ValueError) as exc:
        log.error("Export failed: %s", exc)
        return 1

    if not args.quiet:
        Console().print(render_summary(exporter.counts, cfg.output_path))
    return 0


if __name__ == "__main__":
    sys.exit(main())
