"""Scratch directory used while a single module is synchronised."""
from __future__ import annotations

import shutil
from pathlib import Path
from types import TracebackType

from loguru import logger

from apps.frm.src.domain.errors import ForeignResourceError


class ScratchWorkspace:
    """Recreate ``path`` on entry and remove it on every exit path."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def __enter__(self) -> Path:
        logger.bind(event="foreign_resources.workspace", stage="prepare").debug(
            f"... preparing {self.path}"
        )
        shutil.rmtree(self.path, ignore_errors=True)
        try:
            self.path.mkdir(parents=True)
        except OSError as exc:
            raise ForeignResourceError(f"Unable to create {self.path}") from exc
        return self.path

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        shutil.rmtree(self.path, ignore_errors=True)
