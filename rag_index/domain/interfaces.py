from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional
from .models import EmbeddingResult


class EmbeddingService(ABC):
    """Port for embedding provider (e.g., OpenAI, Ollama)."""

    @abstractmethod
    def embed(self, texts: List[str], timeout: Optional[float] = None) -> EmbeddingResult:
        """Embed a batch of texts into vectors.

        Returns EmbeddingSuccess with exactly one vector per text in input order,
        or EmbeddingFailure for the whole batch. Adapters must not raise for
        provider/network failures.
        """
        raise NotImplementedError


class BlobFetcher(ABC):
    """Port for reading raw bytes from a content-addressed store gateway."""

    @abstractmethod
    def fetch(self, url: str, timeout: Optional[float] = None) -> bytes:
        """Fetch the payload at ``url``.

        Raises:
            IndexFetchError: Store unreachable, timed out or refused the request.
        """
        raise NotImplementedError
