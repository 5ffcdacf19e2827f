"""Tarball extraction and glob expansion over extracted trees."""
from __future__ import annotations

import glob
import tarfile
from pathlib import Path

from loguru import logger

from apps.frm.src.domain.errors import ForeignResourceError


def extract_tarball(archive_path: Path, target: Path) -> Path:
    """Extract ``archive_path`` into ``target`` and return ``target``.

    Compression is detected from the archive itself. Members that would land
    outside ``target`` are rejected by the ``data`` filter.
    """

    target.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(archive_path, mode="r:*") as archive:
            archive.extractall(target, filter="data")
    except (tarfile.TarError, OSError) as exc:
        raise ForeignResourceError(f"Unable to extract {archive_path}: {exc}") from exc

    logger.bind(event="foreign_resources.archive", stage="extracted").debug(
        f"... extracted {archive_path} to {target}"
    )
    return target


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternations, including nested ones, left to right.

    A pattern whose first ``{`` is never closed is returned unchanged.
    """

    open_index = pattern.find("{")
    if open_index == -1:
        return [pattern]

    depth = 0
    alternatives: list[str] = []
    current_start = open_index + 1
    for index in range(open_index, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "," and depth == 1:
            alternatives.append(pattern[current_start:index])
            current_start = index + 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                alternatives.append(pattern[current_start:index])
                prefix = pattern[:open_index]
                suffix = pattern[index + 1 :]
                return [
                    expanded
                    for alternative in alternatives
                    for expanded in expand_braces(prefix + alternative + suffix)
                ]
    return [pattern]


def expand_glob(root: Path, pattern: str) -> list[Path]:
    """Return paths under ``root`` matching ``pattern``.

    Supports brace alternation plus the ``*``, ``?``, ``[...]`` and recursive
    ``**`` wildcards. Matches are ordered by alternative, then by name.
    """

    matches: list[Path] = []
    seen: set[Path] = set()
    for alternative in expand_braces(pattern):
        for relative in sorted(glob.glob(alternative, root_dir=root, recursive=True)):
            path = root / relative
            if path not in seen:
                seen.add(path)
                matches.append(path)
    return matches
