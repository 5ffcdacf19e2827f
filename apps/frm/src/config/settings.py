"""Application settings loaded from environment and .env files."""
from __future__ import annotations

import hashlib
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MANIFEST_PATH = Path(__file__).resolve().parents[1] / "foreign-resources.yaml"


class Settings(BaseSettings):
    """Strongly-typed configuration for the foreign resource manager."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    resources_dir: str = Field(default="resources", alias="FRM_RESOURCES_DIR")
    manifest_path: str | None = Field(default=None, alias="FRM_MANIFEST_PATH")
    default_integrity_algorithm: str = Field(
        default="sha384",
        alias="FRM_DEFAULT_INTEGRITY_ALGORITHM",
    )
    request_timeout_s: float = Field(default=30.0, alias="REQUEST_TIMEOUT_S", gt=0)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    @field_validator("default_integrity_algorithm")
    @classmethod
    def validate_algorithm(cls, value: str) -> str:
        """Reject hash algorithms without a fixed-size ``hashlib`` digest."""

        normalized = value.strip().lower()
        if normalized not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported integrity algorithm: {value}")
        if hashlib.new(normalized).digest_size == 0:
            raise ValueError(f"Unsupported integrity algorithm: {value}")
        return normalized

    @property
    def lib_dir(self) -> Path:
        """Return the directory holding one subdirectory per module."""

        return Path(self.resources_dir) / "lib"

    @property
    def tmp_dir(self) -> Path:
        """Return the scratch directory.

        It lives under the resources root so that moving extracted files into
        ``lib/`` is a rename on the same filesystem.
        """

        return Path(self.resources_dir) / "tmp"

    @property
    def manifest_file(self) -> Path:
        if self.manifest_path:
            return Path(self.manifest_path)
        return DEFAULT_MANIFEST_PATH


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
