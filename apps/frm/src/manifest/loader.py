"""Helpers for reading the manifest file and selecting modules from it."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from loguru import logger

from apps.frm.src.domain.errors import ForeignResourceError

from .parser import ManifestValue, parse_manifest_text

ALL_MODULES = "all"


def load_manifest(path: Path) -> dict[str, ManifestValue]:
    """Read and parse the manifest stored at ``path``."""

    if not path.is_file():
        raise ForeignResourceError(f"Manifest not found at {path}")

    logger.bind(event="foreign_resources.manifest", stage="load", path=str(path)).debug(
        "Loading foreign resources manifest"
    )
    return parse_manifest_text(path.read_text(encoding="utf-8"))


def select_modules(
    manifest: Mapping[str, Any],
    module_filter: str = ALL_MODULES,
) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, entry)`` pairs in manifest order.

    A filter naming no declared module selects nothing.
    """

    if module_filter != ALL_MODULES and module_filter not in manifest:
        logger.bind(event="foreign_resources.manifest", stage="select").warning(
            f"No module named '{module_filter}' in the manifest."
        )

    for name, entry in manifest.items():
        if module_filter != ALL_MODULES and name != module_filter:
            continue
        yield name, entry
