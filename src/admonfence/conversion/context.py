#!/usr/bin/env python3
"""
ADMONFENCE CONVERSION CONTEXT
-----------------------------
A state-management object that records a single document's trip through the
ConversionPipeline: the raw text, the emitted lines and the statistics the
Engine reports back to the user.

Author: AdmonFence Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from typing import List

from admonfence.core.models import MarkerLine


@dataclass
class ConvertContext:
    """
    Maintains the state of one document conversion.

    Initialized by the ConversionPipeline and enriched line by line.
    """
    raw_text: str                                              # The initial raw input
    lines: List[MarkerLine] = field(default_factory=list)      # Classified input lines
    output_lines: List[str] = field(default_factory=list)      # Emitted output lines
    blocks_converted: int = 0                                  # Admonitions opened
    max_depth: int = 0                                         # Deepest nesting seen (0 = top level)
    fallback_types: List[str] = field(default_factory=list)    # Tokens resolved via the default type

    @property
    def converted_text(self) -> str:
        return "\n".join(self.output_lines)

    @property
    def is_modified(self) -> bool:
        return self.converted_text != self.raw_text
