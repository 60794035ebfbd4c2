"""Common helpers shared by renderer implementations."""
from __future__ import annotations

from typing import Mapping, Optional

TEXT_ALIGNMENTS = frozenset({"left", "center", "right", "justify"})
HEADING_LEVELS = (1, 2, 3)


def alignment_class(attrs: Mapping[str, object]) -> Optional[str]:
    """Map the editor's ``textAlign`` attribute onto a CSS class."""
    align = attrs.get("textAlign")
    if isinstance(align, str) and align in TEXT_ALIGNMENTS:
        return f"text-{align}"
    return None


def heading_level(attrs: Mapping[str, object]) -> int:
    """Clamp ``attrs.level`` into the supported heading range."""
    level = attrs.get("level")
    if isinstance(level, bool) or not isinstance(level, (int, float, str)):
        return HEADING_LEVELS[0]
    try:
        level = int(level)
    except (ValueError, OverflowError):
        return HEADING_LEVELS[0]
    return min(max(level, HEADING_LEVELS[0]), HEADING_LEVELS[-1])


def positive_int(value: object) -> Optional[int]:
    """Return ``value`` as an int when it is a whole number greater than zero."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int) and value > 0:
        return value
    if isinstance(value, str) and value.isdecimal() and int(value) > 0:
        return int(value)
    return None


def child_key(parent_key: str, index: int) -> str:
    """Stable identity for the ``index``-th child of the node at ``parent_key``."""
    return f"{parent_key}-{index}" if parent_key else str(index)
