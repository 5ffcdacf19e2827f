"""Error types raised while managing foreign resources."""
from __future__ import annotations


class ForeignResourceError(RuntimeError):
    """Raised for any condition that must abort the whole run."""


class ManifestEntryError(ForeignResourceError):
    """Raised when a manifest entry lacks a required key or has an unknown type."""


class FetchError(ForeignResourceError):
    """Raised when a remote artifact cannot be downloaded."""

    def __init__(self, url: str, detail: str | None = None) -> None:
        self.url = url
        self.detail = detail
        message = f"Failed to download resource at {url}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class IntegrityMismatchError(ForeignResourceError):
    """Raised when downloaded bytes do not match the declared integrity."""

    def __init__(self, url: str, expected: str | None, actual: str) -> None:
        self.url = url
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Integrity check failed for {url}\n"
            f"\tExpected: {expected}\n"
            f"\tActual: {actual}"
        )


class ManifestParseError(ValueError):
    """Raised when the manifest text does not follow the supported format."""

    def __init__(self, line: int, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"{reason.capitalize()} on line {line}.")


__all__ = [
    "FetchError",
    "ForeignResourceError",
    "IntegrityMismatchError",
    "ManifestEntryError",
    "ManifestParseError",
]
