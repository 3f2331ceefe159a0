#!/usr/bin/env python3
"""
ADMONFENCE BLOCK STACK
----------------------
Last-in-first-out record of the admonitions currently open, outermost at the
bottom. The fence length of a container is derived from the stack size, so
every push and pop site below reads the size at exactly one point.

Author: AdmonFence Team
Date: 2026-10-18
"""

from typing import List, Optional

from admonfence.core.models import BlockFrame

FENCE_CHAR = ":"
MIN_FENCE = 3


def fence_for_depth(depth: int) -> str:
    """Top-level containers use ':::', each nesting level adds one colon."""
    return FENCE_CHAR * (MIN_FENCE + depth)


class BlockStack:
    """
    Explicit LIFO container of BlockFrames.
    Frames strictly increase in base_indent from bottom to top.
    """

    def __init__(self):
        self._frames: List[BlockFrame] = []

    def push(self, base_indent: int, block_type: str = "") -> BlockFrame:
        """Opens a frame at the current depth and returns it."""
        frame = BlockFrame(base_indent=base_indent, depth=len(self._frames), block_type=block_type)
        self._frames.append(frame)
        return frame

    def peek(self) -> Optional[BlockFrame]:
        return self._frames[-1] if self._frames else None

    def pop(self) -> BlockFrame:
        if not self._frames:
            raise IndexError("pop from an empty BlockStack")
        return self._frames.pop()

    def close_marker(self, frame: BlockFrame) -> str:
        """
        Closing line for a frame that was just popped. The post-pop size equals
        the pre-push size, so the closer repeats the opener's fence length.
        """
        return " " * frame.base_indent + fence_for_depth(len(self._frames))

    def open_fence(self) -> str:
        return fence_for_depth(len(self._frames))

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)
