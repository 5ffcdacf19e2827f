"""Manifest parsing and module selection."""

from .loader import ALL_MODULES, load_manifest, select_modules
from .parser import ManifestValue, parse_manifest_text

__all__ = [
    "ALL_MODULES",
    "ManifestValue",
    "load_manifest",
    "parse_manifest_text",
    "select_modules",
]
