"""Tests for reading the manifest and selecting modules."""
from __future__ import annotations

from pathlib import Path

import pytest

from apps.frm.src.config.settings import DEFAULT_MANIFEST_PATH
from apps.frm.src.domain.errors import ForeignResourceError
from apps.frm.src.manifest import load_manifest, select_modules


def test_load_manifest_reads_file(tmp_path: Path) -> None:
    manifest_path = tmp_path / "foreign-resources.yaml"
    manifest_path.write_text("lib:\n  type: file\n  src: https://example.org/lib.js\n", encoding="utf-8")

    assert load_manifest(manifest_path) == {
        "lib": {"type": "file", "src": "https://example.org/lib.js"}
    }


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ForeignResourceError, match="Manifest not found"):
        load_manifest(tmp_path / "absent.yaml")


def test_shipped_manifest_declares_types() -> None:
    manifest = load_manifest(DEFAULT_MANIFEST_PATH)

    assert manifest
    for entry in manifest.values():
        assert isinstance(entry, dict)
        assert entry["type"] in {"file", "multi-file", "tar"}


def test_select_modules_all_keeps_manifest_order() -> None:
    manifest = {"b": {"type": "file"}, "a": {"type": "tar"}}

    assert [name for name, _ in select_modules(manifest)] == ["b", "a"]


def test_select_modules_single() -> None:
    manifest = {"b": {"type": "file"}, "a": {"type": "tar"}}

    assert list(select_modules(manifest, "a")) == [("a", {"type": "tar"})]


def test_select_modules_unknown_name_selects_nothing() -> None:
    assert list(select_modules({"a": {"type": "tar"}}, "zzz")) == []
