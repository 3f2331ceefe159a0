#!/usr/bin/env python3
"""
ADMONFENCE CORE MODELS
----------------------
Defines the fundamental data structures used across the AdmonFence engine.
These models represent the lowest level of document abstraction: a single
classified line, an open block on the stack, and the type-remap table.

Author: AdmonFence Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

# MkDocs/Material admonition types mapped to the Docusaurus container types
DEFAULT_TYPE_MAPPING: Dict[str, str] = {
    # Direct Docusaurus equivalents
    "note": "note",
    "tip": "tip",
    "info": "info",
    "warning": "warning",
    "danger": "danger",
    # Material extras
    "abstract": "note",
    "success": "tip",
    "question": "info",
    "failure": "danger",
    "bug": "danger",
    "example": "note",
    "quote": "note",
    # Common custom types
    "hint": "tip",
    "important": "info",
    "caution": "warning",
    "tldr": "note",
}

DEFAULT_FALLBACK_TYPE = "note"


class LineKind(Enum):
    OPEN = "open"
    CONTENT = "content"
    BLANK = "blank"


@dataclass(frozen=True)
class MarkerLine:
    """
    The atomic unit of a Markdown document.

    A MarkerLine represents one physical line after classification by the
    Lexer. Only OPEN lines carry a type token and title.
    """
    kind: LineKind
    indent: int                      # Leading whitespace length
    indent_str: str = ""             # The literal leading whitespace
    raw_type: Optional[str] = None   # Type token as written (e.g. 'Bug')
    title: Optional[str] = None      # Explicit quoted title, if any
    raw_line: str = ""               # The original unmutated line

    @property
    def is_open(self) -> bool:
        return self.kind is LineKind.OPEN

    @property
    def is_blank(self) -> bool:
        return self.kind is LineKind.BLANK


@dataclass(frozen=True)
class BlockFrame:
    """
    One currently-open admonition.

    base_indent decides sibling/ancestor closure; content_indent decides
    whether a later non-blank line still belongs to this block.
    """
    base_indent: int
    depth: int = 0          # Frames below this one at push time
    block_type: str = ""    # Resolved destination type

    @property
    def content_indent(self) -> int:
        return self.base_indent + 1


@dataclass
class TypeMap:
    """
    Lowercase source type -> destination container type.
    Misses resolve to `default` and are reported as unrecognized.
    """
    mapping: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TYPE_MAPPING))
    default: str = DEFAULT_FALLBACK_TYPE

    def __post_init__(self):
        self.mapping = {str(k).lower(): str(v) for k, v in self.mapping.items()}

    def resolve(self, type_token: str) -> Tuple[str, bool]:
        """Returns (destination_type, recognized)."""
        key = type_token.lower()
        if key in self.mapping:
            return self.mapping[key], True
        return self.default, False

    def __contains__(self, type_token: str) -> bool:
        return type_token.lower() in self.mapping

    def __len__(self) -> int:
        return len(self.mapping)
