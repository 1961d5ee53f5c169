"""Recognition of bare hexadecimal color literals."""

from __future__ import annotations

import re

HEX_LENGTHS = frozenset({3, 6})
HEX_PATTERN = re.compile(r"^(?:[0-9a-f]{3}){1,2}$", re.IGNORECASE)


def is_hex(text: str) -> bool:
    """True for one or two groups of three hex digits and nothing else."""

    return HEX_PATTERN.fullmatch(text) is not None
