from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..domain.models import TextChunk
from ..infrastructure.config import chunk_overlap, chunk_size


def chunk_text(text: str, size: Optional[int] = None, overlap: Optional[int] = None) -> List[TextChunk]:
    """Split text into overlapping character windows with ids c0, c1, ...

    ``size < 1`` is treated as 1 and ``overlap`` is clamped to ``[0, size - 1]``
    so every window advances by at least one character.
    """
    size = max(1, chunk_size() if size is None else int(size))
    overlap = chunk_overlap() if overlap is None else int(overlap)
    overlap = min(max(0, overlap), size - 1)
    parts: List[TextChunk] = []
    start = 0
    while start < len(text):
        end = min(len(text), start + size)
        parts.append(TextChunk(id=f"c{len(parts)}", text=text[start:end]))
        if end == len(text):
            break
        start = end - overlap
    return parts


def load_text_chunks(path: Path, size: Optional[int] = None, overlap: Optional[int] = None) -> List[TextChunk]:
    """Read a UTF-8 text file and chunk it.

    Undecodable bytes become U+FFFD rather than vanishing, so chunk offsets
    still line up with the source.
    """
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return chunk_text(text, size, overlap)
