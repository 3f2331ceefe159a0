#!/usr/bin/env python3
"""
ADMONFENCE LOCATOR
------------------
Recursively discovers the Markdown documents under a workspace. Unreadable
directories are logged and skipped; the walk itself never raises.

Author: AdmonFence Team
Date: 2026-10-18
"""

import logging
import os
from pathlib import Path
from typing import List, Union

logger = logging.getLogger("admonfence.locator")


def list_documents(root: Union[str, Path], extension: str = ".md") -> List[Path]:
    """
    Returns every regular file under `root` whose name ends with `extension`.
    Symlinks are neither followed nor collected, which keeps cyclic links safe.
    """
    suffix = extension.lower()
    found = []

    def _report(error: OSError):
        logger.error(f"[ERROR] Could not read directory: {error.filename} ({error.strerror})")

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_report, followlinks=False):
        for name in filenames:
            candidate = Path(dirpath) / name
            if name.lower().endswith(suffix) and candidate.is_file() and not candidate.is_symlink():
                found.append(candidate)

    return sorted(found)
