# tests/test_host_bootstrap.py
"""
Tests for host.bootstrap target resolution.
"""

from __future__ import annotations

import sys
import types

import pytest

from catalog.errors import HostBootstrapError
from host.bootstrap import bootstrap_host
from host.model import GameHost


def test_bootstrap_from_content_pack(tmp_path):
    path = tmp_path / "pack.yaml"
    path.write_text("namespace: mod\nblocks:\n  stone: {}\n", encoding="utf-8")

    host = bootstrap_host(str(path))

    assert host.blocks.keys() == ["mod:stone"]


def test_bootstrap_from_factory(monkeypatch):
    module = types.ModuleType("fake_host_plugin")
    expected = GameHost()
    module.bootstrap = lambda: expected
    monkeypatch.setitem(sys.modules, "fake_host_plugin", module)

    assert bootstrap_host("fake_host_plugin:bootstrap") is expected


def test_bootstrap_reports_missing_pack(tmp_path):
    with pytest.raises(HostBootstrapError) as info:
        bootstrap_host(str(tmp_path / "missing.yaml"))

    assert info.value.code == "content_pack_missing"


def test_bootstrap_reports_invalid_pack(tmp_path):
    path = tmp_path / "pack.yaml"
    path.write_text("blocks:\n  stone: {class: Nope}\n", encoding="utf-8")

    with pytest.raises(HostBootstrapError) as info:
        bootstrap_host(path)

    assert info.value.code == "content_pack_invalid"


def test_bootstrap_reports_unimportable_factory():
    with pytest.raises(HostBootstrapError) as info:
        bootstrap_host("definitely_not_a_module_xyz:bootstrap")

    assert info.value.code == "host_import_failed"


def test_bootstrap_reports_failing_factory(monkeypatch):
    module = types.ModuleType("failing_host_plugin")

    def bootstrap():
        raise RuntimeError("registries frozen")

    module.bootstrap = bootstrap
    monkeypatch.setitem(sys.modules, "failing_host_plugin", module)

    with pytest.raises(HostBootstrapError) as info:
        bootstrap_host("failing_host_plugin:bootstrap")

    assert info.value.code == "host_factory_failed"
    assert "registries frozen" in info.value.details["error"]


def test_bootstrap_rejects_unknown_target_kind(tmp_path):
    with pytest.raises(HostBootstrapError) as info:
        bootstrap_host(str(tmp_path / "pack.json"))

    assert info.value.code == "unsupported_host_target"
