"""Domain types shared by the foreign resource manager."""

from .errors import (
    FetchError,
    ForeignResourceError,
    IntegrityMismatchError,
    ManifestEntryError,
    ManifestParseError,
)

__all__ = [
    "FetchError",
    "ForeignResourceError",
    "IntegrityMismatchError",
    "ManifestEntryError",
    "ManifestParseError",
]
