"""Split identifier labels."""

from __future__ import annotations

from typing import List


def names0(count: int, prefix: str) -> List[str]:
    """Zero-padded 1-based labels, padded to the width of count.

    names0(10, "Fold") -> ["Fold01", ..., "Fold10"]
    names0(5, "Slice") -> ["Slice1", ..., "Slice5"]
    """
    width = len(str(count))
    return [f"{prefix}{i:0{width}d}" for i in range(1, count + 1)]
