#!/usr/bin/env python3
"""
ADMONFENCE LEXER - Marker Classifier (Phase 1.1)
------------------------------------------------
Splits raw Markdown into lines and decomposes each line into a MarkerLine.
Every line is opaque except for the admonition opener and its indentation.

Author: AdmonFence Team
Date: 2026-10-18
"""

import re
from typing import List

from admonfence.core.models import LineKind, MarkerLine


class MarkerLexer:
    """
    Orchestrates the transition from raw text to classified lines.
    Holds no state between calls, so one instance can serve a whole batch.
    """

    # Group 1: Indent, Group 2: Type token, Group 3: Optional quoted title
    OPEN_PATTERN = re.compile(r'^(\s*)!!!\s+([A-Za-z0-9_]+)(?:\s+"(.*?)")?')
    INDENT_PATTERN = re.compile(r'^\s*')
    LINE_BREAK = re.compile(r'\r?\n')

    def _clean_artifacts(self, text: str) -> str:
        """Removes an invisible UTF-8 BOM marker."""
        return text[1:] if text.startswith('\ufeff') else text

    def split_lines(self, text: str) -> List[str]:
        """
        Splits on LF and CRLF boundaries. A trailing newline produces a
        trailing empty line, which later passes through as a blank.
        """
        return self.LINE_BREAK.split(self._clean_artifacts(text))

    def indent_of(self, line: str) -> int:
        return len(self.INDENT_PATTERN.match(line).group(0))

    def classify(self, line: str) -> MarkerLine:
        """
        Classifies a line as OPEN, BLANK or CONTENT, in that priority order.
        """
        match = self.OPEN_PATTERN.match(line)
        if match:
            indent_str, raw_type, title = match.groups()
            return MarkerLine(
                kind=LineKind.OPEN,
                indent=len(indent_str),
                indent_str=indent_str,
                raw_type=raw_type,
                title=title,
                raw_line=line,
            )

        if not line.strip():
            return MarkerLine(kind=LineKind.BLANK, indent=len(line), indent_str=line, raw_line=line)

        indent = self.indent_of(line)
        return MarkerLine(
            kind=LineKind.CONTENT,
            indent=indent,
            indent_str=line[:indent],
            raw_line=line,
        )

    def tokenize(self, text: str) -> List[MarkerLine]:
        """Primary interface for the ConversionPipeline."""
        return [self.classify(line) for line in self.split_lines(text)]
