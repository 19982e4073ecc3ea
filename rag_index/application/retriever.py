"""
Retriever.

Single entry point for downstream chat code: build an index from chunks,
load a published one, and fetch the K passages most relevant to a question.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from .dto import AnswerRequest, BuildIndexRequest
from .use_cases.answer_query import AnswerQueryUseCase
from .use_cases.build_index import BuildIndexUseCase
from ..domain.index import SimilarityIndex
from ..domain.interfaces import EmbeddingService
from ..domain.models import Record, ScoredRecord, TextChunk
from ..infrastructure.ipfs.loader import IndexLoader
from ..infrastructure.logging import get_logger

logger = get_logger("rag_index.application.retriever")


class Retriever:
    """Orchestrates an EmbeddingService and SimilarityIndex queries.

    Provider failures surface as ProviderUnavailable / ProviderBatchFailure /
    ProviderTimeout; load failures as IndexLoadError subclasses.
    """

    def __init__(self, embeddings: EmbeddingService, loader: Optional[IndexLoader] = None) -> None:
        self._build = BuildIndexUseCase(embeddings)
        self._answer = AnswerQueryUseCase(embeddings)
        self._loader = loader

    def build_index(
        self,
        source_locator: str,
        chunks: List[TextChunk],
        timeout: Optional[float] = None,
    ) -> SimilarityIndex:
        index = self._build.execute(BuildIndexRequest(source_locator=source_locator, chunks=chunks, timeout=timeout))
        logger.info("built index for %s: %d records, model=%s", source_locator, len(index), index.embedding_model)
        return index

    def load_index(self, locator: str, timeout: Optional[float] = None) -> SimilarityIndex:
        if self._loader is None:
            self._loader = IndexLoader()
        return self._loader.load(locator, timeout)

    def answer_scored(
        self,
        index: SimilarityIndex,
        query_text: str,
        k: int,
        timeout: Optional[float] = None,
    ) -> Tuple[ScoredRecord, ...]:
        matches = self._answer.execute(index, AnswerRequest(query=query_text, k=k, timeout=timeout))
        logger.info("answered query against %s: %d of %d records", index.source_locator, len(matches), len(index))
        return matches

    def answer(
        self,
        index: SimilarityIndex,
        query_text: str,
        k: int,
        timeout: Optional[float] = None,
    ) -> Tuple[Record, ...]:
        """Return the ``k`` stored records most relevant to ``query_text``, best first."""
        return tuple(m.record for m in self.answer_scored(index, query_text, k, timeout))
