from __future__ import annotations

from typing import Tuple

from ..dto import AnswerRequest
from .build_index import unwrap_embeddings
from ...domain.index import SimilarityIndex
from ...domain.interfaces import EmbeddingService
from ...domain.models import ScoredRecord


class AnswerQueryUseCase:
    """Use-case: embed query string and rank the index against it."""

    def __init__(self, embeddings: EmbeddingService) -> None:
        self._emb = embeddings

    def execute(self, index: SimilarityIndex, req: AnswerRequest) -> Tuple[ScoredRecord, ...]:
        result = unwrap_embeddings(self._emb.embed([req.query], req.timeout), 1)
        return index.query_scored(result.vectors[0], req.k)
