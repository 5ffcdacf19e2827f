# filename: tests/conftest.py
from collections.abc import Iterator
from pathlib import Path

import pytest

from apps.frm.src.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def configure_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point the resources root at a temporary directory for every test."""

    monkeypatch.setenv("FRM_RESOURCES_DIR", str(tmp_path / "resources"))
    monkeypatch.delenv("FRM_MANIFEST_PATH", raising=False)
    monkeypatch.delenv("FRM_DEFAULT_INTEGRITY_ALGORITHM", raising=False)
    monkeypatch.delenv("LOG_JSON", raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return get_settings()
