from __future__ import annotations

import os
from typing import Optional


def http_timeout_seconds(default: float = 15.0) -> float:
    try:
        value = float(os.getenv("RAG_HTTP_TIMEOUT", str(default)))
    except Exception:
        return default
    return value if value > 0 else default


def resolve_timeout(explicit: Optional[float]) -> float:
    """Caller-supplied timeout wins; otherwise the configured default."""
    if explicit is not None and explicit > 0:
        return float(explicit)
    return http_timeout_seconds()
