from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
from ..domain.models import TextChunk


@dataclass(frozen=True)
class BuildIndexRequest:
    source_locator: str
    chunks: List[TextChunk]
    timeout: Optional[float] = None


@dataclass(frozen=True)
class AnswerRequest:
    query: str
    k: int = 5
    timeout: Optional[float] = None
