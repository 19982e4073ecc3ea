from __future__ import annotations

import math
from typing import Sequence


def similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity over the common prefix of ``a`` and ``b``.

    Vectors of different length are compared on their first
    ``min(len(a), len(b))`` components. A zero norm clamps the denominator
    to 1, so degenerate vectors score 0 instead of NaN. The result is not
    clamped to [-1, 1].
    """
    n = min(len(a), len(b))
    dot = 0.0
    na = 0.0
    nb = 0.0
    for i in range(n):
        x = a[i]
        y = b[i]
        dot += x * y
        na += x * x
        nb += y * y
    denom = math.sqrt(na) * math.sqrt(nb) or 1.0
    return dot / denom
