from __future__ import annotations

from datetime import datetime, timezone
from typing import Tuple

from ..dto import BuildIndexRequest
from ...domain.errors import EmbeddingError, ProviderBatchFailure, ProviderTimeout, ProviderUnavailable
from ...domain.index import SimilarityIndex
from ...domain.interfaces import EmbeddingService
from ...domain.models import EmbeddingFailure, EmbeddingResult, EmbeddingSuccess, FailureKind, Record


_FAILURES = {
    FailureKind.UNAVAILABLE: ProviderUnavailable,
    FailureKind.BATCH_FAILURE: ProviderBatchFailure,
    FailureKind.TIMEOUT: ProviderTimeout,
}


def unwrap_embeddings(result: EmbeddingResult, expected: int) -> EmbeddingSuccess:
    """Return the success value or raise the typed error for the failure kind.

    A success whose vector count differs from ``expected`` is a batch failure:
    callers zip vectors back onto inputs by position.
    """
    if isinstance(result, EmbeddingFailure):
        raise _FAILURES.get(result.kind, EmbeddingError)(result.message)
    if len(result.vectors) != expected:
        raise ProviderBatchFailure(f"Provider returned {len(result.vectors)} vectors for {expected} texts")
    return result


class BuildIndexUseCase:
    """Use-case: embed all chunks in one batch and assemble a SimilarityIndex."""

    def __init__(self, embeddings: EmbeddingService) -> None:
        self._emb = embeddings

    def execute(self, req: BuildIndexRequest) -> SimilarityIndex:
        chunks = list(req.chunks or [])
        if not chunks:
            return SimilarityIndex.build(req.source_locator, "", datetime.now(timezone.utc), [])
        result = unwrap_embeddings(self._emb.embed([c.text for c in chunks], req.timeout), len(chunks))
        records: Tuple[Record, ...] = tuple(
            Record(id=c.id, text=c.text, vector=tuple(v))
            for c, v in zip(chunks, result.vectors)
        )
        return SimilarityIndex.build(req.source_locator, result.model, result.created_at, records)
