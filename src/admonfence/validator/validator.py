#!/usr/bin/env python3
"""
ADMONFENCE VALIDATOR - The Judge
--------------------------------
The Validator is the final safety gate in the AdmonFence pipeline.
It replays a converted document with a stack of fence lengths and confirms
that every container it opens is closed, in order, by a fence of the same
length, before the Engine allows the document to be written to disk.

Author: AdmonFence Team
Date: 2026-10-18
"""

import logging
import re
from typing import List, Tuple

# Standardized logging for audit trails
logger = logging.getLogger("admonfence.validator")


class FenceValidator:
    """
    Enforces container balance on converted documents.
    Provides the 'Self-Abort' signal if a conversion would leave a
    container unclosed or closed by the wrong fence.
    """

    OPEN_FENCE = re.compile(r'^\s*(:{3,})[\w-]+(?:\[.*\])?\s*$')
    CLOSE_FENCE = re.compile(r'^\s*(:{3,})\s*$')

    def validate(self, text: str) -> Tuple[bool, str]:
        """
        The primary integrity check. Returns (passed, reason).
        """
        open_fences: List[Tuple[int, int]] = []  # (fence length, line number)

        for line_no, line in enumerate(text.split("\n"), 1):
            opener = self.OPEN_FENCE.match(line)
            if opener:
                open_fences.append((len(opener.group(1)), line_no))
                continue

            closer = self.CLOSE_FENCE.match(line)
            if not closer:
                continue

            length = len(closer.group(1))
            if not open_fences:
                return self._reject(f"Validation Failed: L{line_no} closes a container that was never opened.")

            expected, opened_at = open_fences.pop()
            if length != expected:
                return self._reject(
                    f"Validation Failed: L{line_no} closes the container opened at L{opened_at} "
                    f"with {length} colons, expected {expected}."
                )

        if open_fences:
            _, opened_at = open_fences[-1]
            return self._reject(f"Validation Failed: container opened at L{opened_at} is never closed.")

        return True, ""

    def _reject(self, reason: str) -> Tuple[bool, str]:
        logger.debug(reason)
        return False, reason
