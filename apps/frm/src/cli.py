"""Command line entry point for managing foreign resources.

Usage:
    manage-foreign-resources ACTION [MODULE] [--verbose]

ACTION is one of ``update``, ``verify`` or ``make-sri``. MODULE names a single
manifest entry and defaults to ``all``.

For sources that don't publish an integrity hash, omit "integrity" (or leave
it empty) and run the ``make-sri`` action to compute the missing hashes. Only
the ``update`` action changes, removes or adds files under resources/lib/.
"""
from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from loguru import logger
from pydantic import ValidationError

from apps.frm.src.config import get_settings
from apps.frm.src.domain.errors import ForeignResourceError, ManifestParseError
from apps.frm.src.manifest import ALL_MODULES, load_manifest
from apps.frm.src.observability import configure_logging
from apps.frm.src.services.synchronizer import ForeignResourceSynchronizer, SyncAction


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manage-foreign-resources",
        description="Download, verify and update local copies of upstream libraries.",
    )
    parser.add_argument(
        "action",
        choices=[action.value for action in SyncAction],
        help='One of "update", "verify" or "make-sri".',
    )
    parser.add_argument(
        "module",
        nargs="?",
        default=ALL_MODULES,
        help="Name of a single module (default: all).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be verbose.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        # Logging depends on settings, so report straight to stderr.
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    configure_logging(verbose=args.verbose, settings=settings)

    try:
        manifest = load_manifest(settings.manifest_file)
        report = ForeignResourceSynchronizer(settings).run(args.action, manifest, args.module)
    except ManifestParseError as exc:
        logger.bind(event="foreign_resources.manifest", stage="failure", line=exc.line).error(
            f"Unable to parse {settings.manifest_file}: {exc}"
        )
        return 1
    except ForeignResourceError as exc:
        logger.bind(event="foreign_resources.run", stage="failure").error(str(exc))
        return 1

    if report.failed:
        # Verification checks every module first and fails afterwards.
        logger.bind(event="foreign_resources.run", stage="failure").error(
            f"Verification failed for {len(report.mismatches)} file(s)."
        )
        return 1
    return 0


def run() -> None:
    """Console script wrapper around :func:`main`."""

    sys.exit(main())


if __name__ == "__main__":
    run()
