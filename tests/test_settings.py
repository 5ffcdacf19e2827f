"""Tests for settings defaults and derived paths."""
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from apps.frm.src.config.settings import DEFAULT_MANIFEST_PATH, Settings


def test_derived_paths(tmp_path: Path) -> None:
    settings = Settings(FRM_RESOURCES_DIR=str(tmp_path / "resources"))

    assert settings.lib_dir == tmp_path / "resources" / "lib"
    assert settings.tmp_dir == tmp_path / "resources" / "tmp"
    assert settings.manifest_file == DEFAULT_MANIFEST_PATH
    assert settings.default_integrity_algorithm == "sha384"


def test_manifest_override(tmp_path: Path) -> None:
    settings = Settings(FRM_MANIFEST_PATH=str(tmp_path / "custom.yaml"))

    assert settings.manifest_file == tmp_path / "custom.yaml"


def test_algorithm_is_normalised() -> None:
    assert Settings(FRM_DEFAULT_INTEGRITY_ALGORITHM=" SHA512 ").default_integrity_algorithm == "sha512"


def test_unknown_algorithm_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(FRM_DEFAULT_INTEGRITY_ALGORITHM="crc32")


@pytest.mark.parametrize("algorithm", ("shake_128", "SHAKE_256"))
def test_variable_length_algorithm_rejected(algorithm: str) -> None:
    with pytest.raises(ValidationError, match="Unsupported integrity algorithm"):
        Settings(FRM_DEFAULT_INTEGRITY_ALGORITHM=algorithm)
