"""Synchronise foreign resources declared in the manifest into resources/lib."""
from __future__ import annotations

import shutil
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlsplit

from loguru import logger

from apps.frm.src.config import Settings, get_settings
from apps.frm.src.domain.errors import (
    ForeignResourceError,
    IntegrityMismatchError,
    ManifestEntryError,
)
from apps.frm.src.integrations.http import ResourceFetcher
from apps.frm.src.manifest import ALL_MODULES, select_modules
from apps.frm.src.observability import resource_context

from .archive import expand_glob, extract_tarball
from .integrity import algorithm_of, compute_integrity, content_hash, file_content_hash
from .workspace import ScratchWorkspace

OutputCallback = Callable[[str], None]
"""Receives the human-readable report lines of a run."""


class SyncAction(StrEnum):
    """Actions supported by the synchroniser."""

    UPDATE = "update"
    VERIFY = "verify"
    MAKE_SRI = "make-sri"


_ANNOUNCEMENTS = {
    SyncAction.UPDATE: "updating",
    SyncAction.VERIFY: "verifying",
    SyncAction.MAKE_SRI: "checking",
}


@dataclass(slots=True)
class SyncContext:
    """State threaded through a single run."""

    action: SyncAction
    scratch_dir: Path
    fetcher: ResourceFetcher
    output: OutputCallback
    mismatches: list[str] = field(default_factory=list)

    def record_mismatch(self, message: str) -> None:
        """Remember a verification failure without aborting the run."""

        logger.bind(event="foreign_resources.verify", stage="mismatch").error(message)
        self.mismatches.append(message)


@dataclass(slots=True)
class SyncReport:
    """Outcome of a run that was not aborted."""

    action: SyncAction
    modules: list[str]
    mismatches: list[str]

    @property
    def failed(self) -> bool:
        return bool(self.mismatches)


_Handler = Callable[[SyncContext, str, Path, Mapping[str, Any]], None]


def _require_str(entry: Mapping[str, Any], key: str, message: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ManifestEntryError(message)
    return value


def _url_basename(url: str) -> str:
    return PurePosixPath(urlsplit(url).path).name


class ForeignResourceSynchronizer:
    """Fetch, verify and install the modules listed in a manifest."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        fetcher: ResourceFetcher | None = None,
        output: OutputCallback = print,
    ) -> None:
        self._settings = settings or get_settings()
        self._fetcher = fetcher
        self._output = output
        self._handlers: dict[str, _Handler] = {
            "tar": self._handle_tar,
            "file": self._handle_file,
            "multi-file": self._handle_multi_file,
        }

    def run(
        self,
        action: SyncAction | str,
        manifest: Mapping[str, Any],
        module_filter: str = ALL_MODULES,
    ) -> SyncReport:
        """Process every selected module in manifest order.

        Verification mismatches are collected in the returned report. Any
        other problem raises :class:`ForeignResourceError` and stops the run
        after the scratch directory has been removed.
        """

        action = SyncAction(action)
        fetcher = self._fetcher or ResourceFetcher(timeout=self._settings.request_timeout_s)
        context = SyncContext(
            action=action,
            scratch_dir=self._settings.tmp_dir,
            fetcher=fetcher,
            output=self._output,
        )
        processed: list[str] = []
        try:
            for name, entry in select_modules(manifest, module_filter):
                with resource_context(name):
                    self._sync_module(context, name, entry)
                processed.append(name)
        finally:
            if self._fetcher is None:
                fetcher.close()

        self._output("\nDone!")
        return SyncReport(action=action, modules=processed, mismatches=list(context.mismatches))

    def _sync_module(self, context: SyncContext, name: str, entry: Any) -> None:
        log = logger.bind(event="foreign_resources.module", module=name)
        log.debug(f"\n### {name}\n")
        dest_dir = self._settings.lib_dir / name
        self._output(f"... {_ANNOUNCEMENTS[context.action]} '{name}'")

        with ScratchWorkspace(context.scratch_dir):
            if not isinstance(entry, Mapping) or entry.get("type") is None:
                raise ManifestEntryError(f"Module '{name}' must have a 'type' key.")
            entry_type = entry["type"]
            handler = self._handlers.get(entry_type) if isinstance(entry_type, str) else None
            if handler is None:
                raise ManifestEntryError(f"Unknown type '{entry_type}' for '{name}'")

            if context.action is SyncAction.UPDATE:
                log.debug(f"... emptying {dest_dir}")
                shutil.rmtree(dest_dir, ignore_errors=True)

            handler(context, name, dest_dir, entry)

    def fetch(self, context: SyncContext, url: str, integrity: str | None) -> bytes:
        """Download ``url`` and check it against ``integrity``.

        Under ``make-sri`` a missing or wrong integrity is printed instead of
        failing, so the output can be pasted into the manifest.
        """

        data = context.fetcher.get(url)
        algorithm = algorithm_of(integrity, self._settings.default_integrity_algorithm)
        actual = compute_integrity(algorithm, data)
        if integrity == actual:
            logger.bind(event="foreign_resources.integrity", stage="passed").debug(
                f"... passed integrity check for {url}"
            )
            return data

        if context.action is SyncAction.MAKE_SRI:
            context.output(f"Integrity for {url}\n\tintegrity: {actual}")
            return data
        if not integrity:
            return data
        raise IntegrityMismatchError(url, integrity, actual)

    def _apply_file(self, context: SyncContext, path: Path, data: bytes, mismatch: str) -> None:
        if context.action is SyncAction.VERIFY:
            if file_content_hash(path) != content_hash(data):
                context.record_mismatch(mismatch)
        elif context.action is SyncAction.UPDATE:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(data)
            except OSError as exc:
                raise ForeignResourceError(f"Could not write {path}.") from exc

    def _handle_file(
        self, context: SyncContext, name: str, dest_dir: Path, entry: Mapping[str, Any]
    ) -> None:
        src = _require_str(entry, "src", f"Module '{name}' must have a 'src' key.")
        data = self.fetch(context, src, entry.get("integrity"))
        dest = entry.get("dest") or _url_basename(src)
        if not isinstance(dest, str) or not dest:
            raise ManifestEntryError(f"Module '{name}' must have a 'dest' key.")
        self._apply_file(context, dest_dir / dest, data, f"File for '{name}' is different.")

    def _handle_multi_file(
        self, context: SyncContext, name: str, dest_dir: Path, entry: Mapping[str, Any]
    ) -> None:
        files = entry.get("files")
        if not isinstance(files, Mapping):
            raise ManifestEntryError(f"Module '{name}' must have a 'files' key.")

        for dest, file_info in files.items():
            if not isinstance(file_info, Mapping):
                file_info = {}
            src = _require_str(
                file_info, "src", f"Module '{name}' file '{dest}' must have a 'src' key."
            )
            data = self.fetch(context, src, file_info.get("integrity"))
            self._apply_file(
                context, dest_dir / dest, data, f"File '{dest}' for '{name}' is different."
            )

    def _handle_tar(
        self, context: SyncContext, name: str, dest_dir: Path, entry: Mapping[str, Any]
    ) -> None:
        src = _require_str(entry, "src", f"Module '{name}' must have a 'src' key.")
        data = self.fetch(context, src, entry.get("integrity"))

        archive_path = context.scratch_dir / f"{name}.tar"
        logger.bind(event="foreign_resources.archive", stage="write").debug(
            f"... writing '{name}' src to {archive_path}"
        )
        try:
            archive_path.write_bytes(data)
        except OSError as exc:
            raise ForeignResourceError(f"Could not write {archive_path}.") from exc
        del data
        extracted = extract_tarball(archive_path, context.scratch_dir / name)

        to_copy = self._plan_tar_copies(name, dest_dir, extracted, entry.get("dest"))
        for source, target in to_copy.items():
            if context.action is SyncAction.VERIFY:
                logger.debug(f"... verifying {target}")
                self._verify_path(context, source, target)
            elif context.action is SyncAction.UPDATE:
                logger.debug(f"... moving {source} to {target}")
                try:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    source.rename(target)
                except OSError as exc:
                    raise ForeignResourceError(f"Could not move {source} to {target}.") from exc

    def _plan_tar_copies(
        self, name: str, dest_dir: Path, extracted: Path, dest: Any
    ) -> dict[Path, Path]:
        if dest is None:
            return {extracted: dest_dir}
        if not isinstance(dest, Mapping):
            raise ManifestEntryError(f"Module '{name}' has an invalid 'dest' key.")

        to_copy: dict[Path, Path] = {}
        for pattern, sub_path in dest.items():
            if sub_path is not None and not isinstance(sub_path, str):
                raise ManifestEntryError(
                    f"Module '{name}' has an invalid target for '{pattern}'."
                )
            matches = expand_glob(extracted, pattern)
            if not matches:
                raise ForeignResourceError(f"Path '{pattern}' of '{name}' not found.")
            for match in matches:
                base = dest_dir if sub_path is None else dest_dir / sub_path
                to_copy[match] = base / match.name
        return to_copy

    def _verify_path(self, context: SyncContext, source: Path, target: Path) -> None:
        if source.is_dir():
            for remote in sorted(path for path in source.rglob("*") if path.is_file()):
                local = target / remote.relative_to(source)
                if file_content_hash(remote) != file_content_hash(local):
                    context.record_mismatch(f"File '{local}' is different.")
        elif file_content_hash(source) != file_content_hash(target):
            context.record_mismatch(f"File '{target}' is different.")
