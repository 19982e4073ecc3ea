from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator, Sequence, Set, Tuple

from .models import Record, ScoredRecord
from .vector_math import similarity


@dataclass(frozen=True)
class SimilarityIndex:
    """Read-only collection of embedded records answering top-K queries.

    Records keep insertion order. Vector dimensionality is not validated;
    mixed lengths are compared on their common prefix. Instances are never
    mutated, so one index can serve concurrent queries without locking.

    Fields:
        source_locator: Where the indexed content came from (URL, CID, path).
        embedding_model: Model that produced the vectors.
        created_at: Build timestamp.
        records: Embedded chunks in insertion order.
    """
    source_locator: str
    embedding_model: str
    created_at: datetime
    records: Tuple[Record, ...] = ()

    @classmethod
    def build(
        cls,
        source_locator: str,
        embedding_model: str,
        created_at: datetime,
        records: Iterable[Record],
    ) -> "SimilarityIndex":
        return cls(source_locator, embedding_model, created_at, tuple(records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def dimensions(self) -> Set[int]:
        """Distinct vector lengths present; more than one means truncated comparisons."""
        return {len(r.vector) for r in self.records}

    def query_scored(self, query_vector: Sequence[float], k: int) -> Tuple[ScoredRecord, ...]:
        """Score every record and return the best ``k``, highest first.

        Python's sort is stable, so equal scores keep insertion order.
        ``k <= 0`` yields an empty result.
        """
        if k <= 0:
            return ()
        scored = [ScoredRecord(record=r, score=similarity(query_vector, r.vector)) for r in self.records]
        scored.sort(key=lambda s: s.score, reverse=True)
        return tuple(scored[:k])

    def query(self, query_vector: Sequence[float], k: int) -> Tuple[Record, ...]:
        """Return the ``k`` records most similar to ``query_vector`` (fewer if the index is smaller)."""
        return tuple(s.record for s in self.query_scored(query_vector, k))
