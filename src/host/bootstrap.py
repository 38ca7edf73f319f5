# src/host/bootstrap.py
"""
Host bootstrap.

A host target is either:
  - a path to a YAML content pack ("config/content/example_pack.yaml"), or
  - a "module:callable" factory returning a HostRuntime
    ("my_mod.export_host:bootstrap").

Anything that goes wrong here is reported as HostBootstrapError so the CLI
can fail with one clear diagnostic.
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Union

import yaml

from catalog.errors import HostBootstrapError
from .loader import load_content_pack


log = logging.getLogger(__name__)

_PACK_SUFFIXES = (".yaml", ".yml")


def _is_factory_reference(target: str) -> bool:
    module, sep, attr = target.partition(":")
    if not sep or not module or not attr:
        return False
    # "C:\packs\x.yaml" is a path, not a module reference.
    return all(part.isidentifier() for part in module.split(".")) and attr.isidentifier()


def _bootstrap_from_factory(target: str) -> Any:
    module_name, _, attr = target.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise HostBootstrapError(
            code="host_import_failed",
            details={"target": target, "error": repr(exc)},
        ) from exc

    factory = getattr(module, attr, None)
    if factory is None or not callable(factory):
        raise HostBootstrapError(
            code="host_factory_missing",
            details={"target": target},
        )

    try:
        return factory()
    except Exception as exc:
        raise HostBootstrapError(
            code="host_factory_failed",
            details={"target": target, "error": repr(exc)},
        ) from exc


def _bootstrap_from_pack(path: Path) -> Any:
    if not path.exists():
        raise HostBootstrapError(code="content_pack_missing", details={"path": str(path)})
    try:
        return load_content_pack(path)
    except (ValueError, yaml.YAMLError) as exc:
        raise HostBootstrapError(
            code="content_pack_invalid",
            details={"path": str(path), "error": str(exc)},
        ) from exc


def bootstrap_host(target: Union[str, Path]) -> Any:
    """Resolve a host target and return the bootstrapped HostRuntime."""
    if isinstance(target, str) and _is_factory_reference(target):
        log.info("Bootstrapping host from factory %s", target)
        return _bootstrap_from_factory(target)

    path = Path(target)
    if path.suffix.lower() not in _PACK_SUFFIXES:
        raise HostBootstrapError(
            code="unsupported_host_target",
            details={"target": str(target)},
        )
    log.info("Bootstrapping host from content pack %s", path)
    return _bootstrap_from_pack(path)
