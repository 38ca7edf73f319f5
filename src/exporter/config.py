# src/exporter/config.py
"""
Export configuration loader.

Reads config/export.yaml:

    export:
      host: config/content/example_pack.yaml
      output_path: export.json
      indent: 2
      include_entity_types: true
    logging:
      level: INFO

A missing file means defaults. Command-line flags override file values
(see cli.export_catalog).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


# Default config directory; tests monkeypatch this to point at a temp dir.
CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"

CONFIG_NAME = "export.yaml"

DEFAULT_HOST = str(CONFIG_DIR / "content" / "example_pack.yaml")
DEFAULT_OUTPUT_PATH = "export.json"


@dataclass(frozen=True)
class ExportConfig:
    host: str = DEFAULT_HOST
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    indent: int = 2
    include_entity_types: bool = True
    log_level: int = logging.INFO

    def with_overrides(
        self,
        host: Optional[str] = None,
        output_path: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "ExportConfig":
        """Return a copy with any non-None overrides applied."""
        cfg = self
        if host is not None:
            cfg = replace(cfg, host=host)
        if output_path is not None:
            cfg = replace(cfg, output_path=Path(output_path))
        if log_level is not None:
            cfg = replace(cfg, log_level=parse_log_level(log_level))
        return cfg


def parse_log_level(value: Any) -> int:
    """Accept "DEBUG" / "info" / 10 style levels."""
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config {path} is not valid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML config {path} must be a mapping at top level.")
    return data


def load_export_config(path: Optional[Path] = None) -> ExportConfig:
    """
    Load ExportConfig from `path` (default CONFIG_DIR / export.yaml).

    Relative host paths in the file are resolved against the file's
    directory's parent (the project root); the output path is left relative
    to the working directory.
    """
    path = Path(path) if path is not None else CONFIG_DIR / CONFIG_NAME
    if not path.exists():
        return ExportConfig()

    raw = _load_yaml(path)
    export_cfg = raw.get("export") or {}
    logging_cfg = raw.get("logging") or {}
    if not isinstance(export_cfg, dict) or not isinstance(logging_cfg, dict):
        raise ValueError(f"'export' and 'logging' in {path} must be mappings.")

    defaults = ExportConfig()
    host = export_cfg.get("host", defaults.host)
    host_path = Path(host)
    if not host_path.is_absolute() and host_path.suffix.lower() in (".yaml", ".yml"):
        host = str(path.resolve().parent.parent / host_path)

    return ExportConfig(
        host=host,
        output_path=Path(export_cfg.get("output_path", DEFAULT_OUTPUT_PATH)),
        indent=int(export_cfg.get("indent", defaults.indent)),
        include_entity_types=bool(export_cfg.get("include_entity_types", defaults.include_entity_types)),
        log_level=parse_log_level(logging_cfg.get("level", "INFO")),
    )
