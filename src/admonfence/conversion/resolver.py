#!/usr/bin/env python3
"""
ADMONFENCE RESOLVER - Type & Title Policy
-----------------------------------------
Maps a source admonition type onto a destination container type and decides
which title, if any, the container carries.

1. An explicit quoted title is always kept verbatim.
2. With no title, a remapped type keeps its label as a synthesized title
   (e.g. '!!! bug' -> ':::danger[Bug]').
3. With no title and an unchanged type, the container's own label applies.

Author: AdmonFence Team
Date: 2026-10-18
"""

from typing import Optional, Tuple

from admonfence.core.models import TypeMap


def capitalize_first(token: str) -> str:
    """Upper-cases only the first character; str.capitalize() would lower the rest."""
    return token[:1].upper() + token[1:]


class TitleResolver:
    def __init__(self, type_map: Optional[TypeMap] = None):
        self.type_map = type_map or TypeMap()

    def resolve(self, raw_type: str, title: Optional[str] = None) -> Tuple[str, Optional[str], bool]:
        """
        Returns (destination_type, final_title, recognized).
        An empty explicit title counts as absent.
        """
        source_type = raw_type.lower()
        destination, recognized = self.type_map.resolve(source_type)

        final_title = title or None
        if not final_title and destination != source_type:
            final_title = capitalize_first(raw_type)

        return destination, final_title, recognized
