"""Utility functions for seatplan package."""

import re
import uuid

_NUMBER_RE = re.compile(r"(\d+)")


def new_id(prefix: str = "seat") -> str:
    """Generate a unique object id.

    Args:
        prefix: Id prefix (e.g. "seat", "shape", "person")

    Returns:
        Id string such as ``seat-3f2a9c1e0b7d4f21``
    """
    return f"{prefix}-{uuid.uuid4().hex[:16]}"


def natural_sort_key(label: str) -> tuple:
    """Sort key that orders embedded numbers numerically.

    ``"S-2"`` sorts before ``"S-10"`` and ``"9"`` before ``"10"``.
    """
    parts = _NUMBER_RE.split(label.strip())
    return tuple((0, int(part)) if part.isdigit() else (1, part.lower()) for part in parts if part)
