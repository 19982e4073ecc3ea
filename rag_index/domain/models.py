from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple, Union

Vector = Tuple[float, ...]


@dataclass(frozen=True)
class TextChunk:
    """A piece of source text waiting to be embedded.

    Fields:
        id: Identifier, unique within the index being built.
        text: Raw content (may exceed the provider limit; adapters truncate).
    """
    id: str
    text: str


@dataclass(frozen=True)
class Record:
    """An embedded chunk stored in a SimilarityIndex.

    Fields:
        id: Identifier, unique within one index.
        text: Source content.
        vector: Embedding of ``text``.
    """
    id: str
    text: str
    vector: Vector


@dataclass(frozen=True)
class ScoredRecord:
    """Query match with its cosine similarity score (higher is better)."""
    record: Record
    score: float


class FailureKind(str, enum.Enum):
    UNAVAILABLE = "unavailable"
    BATCH_FAILURE = "batch_failure"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class EmbeddingSuccess:
    """Provider answer: one vector per submitted text, same order.

    Fields:
        model: Model identifier reported by the provider.
        created_at: Provider timestamp (or wall clock when it reports none).
        vectors: Positionally aligned with the request batch.
    """
    model: str
    created_at: datetime
    vectors: Tuple[Vector, ...]


@dataclass(frozen=True)
class EmbeddingFailure:
    """Whole-batch failure; partial results are never reported."""
    kind: FailureKind
    message: str


EmbeddingResult = Union[EmbeddingSuccess, EmbeddingFailure]
