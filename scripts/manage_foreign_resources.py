#!/usr/bin/env python3
"""Manage foreign resources listed in apps/frm/src/foreign-resources.yaml.

Usage:
    python scripts/manage_foreign_resources.py verify
    python scripts/manage_foreign_resources.py update jquery --verbose
    python scripts/manage_foreign_resources.py make-sri

Environment variables (a `.env` file in the working directory is honoured):
    FRM_RESOURCES_DIR   Root holding lib/ and the tmp/ scratch directory (default: resources)
    FRM_MANIFEST_PATH   Alternative manifest location
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from apps.frm.src.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
