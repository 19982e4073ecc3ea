from __future__ import annotations

import logging
import os

_ROOT = "rag_index"
_FORMAT = "%(levelname)s | %(name)s | %(message)s"


def _configure_root() -> None:
    root = logging.getLogger(_ROOT)
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    level = os.getenv("RAG_LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``rag_index`` hierarchy; level from RAG_LOG_LEVEL (default INFO)."""
    _configure_root()
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
