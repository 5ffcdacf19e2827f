"""Subresource integrity strings and content hashes."""
from __future__ import annotations

import base64
import hashlib
from pathlib import Path

from apps.frm.src.domain.errors import ForeignResourceError

_CHUNK_SIZE = 131072


def algorithm_of(integrity: str | None, default: str) -> str:
    """Return the hash algorithm encoded as the prefix of ``integrity``."""

    if not integrity:
        return default
    return integrity.split("-", 1)[0]


def compute_integrity(algorithm: str, data: bytes) -> str:
    """Return ``<algorithm>-<base64 digest>`` for ``data``."""

    try:
        hasher = hashlib.new(algorithm, data)
    except ValueError as exc:
        raise ForeignResourceError(f"Unsupported integrity algorithm '{algorithm}'") from exc
    # Variable-length digests (shake_*) have no fixed size to encode.
    if hasher.digest_size == 0:
        raise ForeignResourceError(f"Unsupported integrity algorithm '{algorithm}'")
    return f"{algorithm}-{base64.b64encode(hasher.digest()).decode('ascii')}"


def content_hash(data: bytes) -> str:
    """Return the fast comparison hash for in-memory content."""

    return hashlib.sha1(data).hexdigest()


def file_content_hash(path: Path) -> str | None:
    """Return the comparison hash of ``path`` or ``None`` if it is not a file."""

    if not path.is_file():
        return None
    digest = hashlib.sha1()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()
