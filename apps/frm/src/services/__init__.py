"""Service layer helpers for the foreign resource manager."""

from .archive import expand_braces, expand_glob, extract_tarball
from .integrity import compute_integrity, content_hash, file_content_hash
from .synchronizer import (
    ForeignResourceSynchronizer,
    SyncAction,
    SyncContext,
    SyncReport,
)
from .workspace import ScratchWorkspace

__all__ = [
    "ForeignResourceSynchronizer",
    "ScratchWorkspace",
    "SyncAction",
    "SyncContext",
    "SyncReport",
    "compute_integrity",
    "content_hash",
    "expand_braces",
    "expand_glob",
    "extract_tarball",
    "file_content_hash",
]
