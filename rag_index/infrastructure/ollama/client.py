from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple

import requests

from ...domain.interfaces import EmbeddingService
from ...domain.models import EmbeddingFailure, EmbeddingResult, EmbeddingSuccess, FailureKind, Vector
from ..config import ollama_url, embed_model
from ..embeddings import failure_from_exception, truncate_texts
from ..logging import get_logger
from ..timeouts import resolve_timeout

logger = get_logger("rag_index.infrastructure.ollama")


class OllamaEmbeddingService(EmbeddingService):
    """Embedding adapter for Ollama /api/embeddings.

    Ollama embeds one prompt per request; any failing request fails the batch.
    """

    def __init__(self, base_url: Optional[str] = None, model: Optional[str] = None) -> None:
        self._base = (base_url or ollama_url()).rstrip("/")
        self._model = model or embed_model("mxbai-embed-large")

    def embed(self, texts: List[str], timeout: Optional[float] = None) -> EmbeddingResult:
        created_at = datetime.now(timezone.utc)
        if not texts:
            return EmbeddingSuccess(model=self._model, created_at=created_at, vectors=())
        url = f"{self._base}/api/embeddings"
        timeout = resolve_timeout(timeout)
        out: List[Vector] = []
        try:
            for t in truncate_texts(texts):
                r = requests.post(url, json={"model": self._model, "prompt": t}, timeout=timeout)
                r.raise_for_status()
                data = r.json()
                out.append(self._vector(data))
        except (requests.RequestException, ValueError) as ex:
            failure = failure_from_exception(ex, "ollama")
            logger.warning("embedding batch failed after %d of %d texts: %s", len(out), len(texts), failure.message)
            return failure
        except (KeyError, TypeError) as ex:
            return EmbeddingFailure(FailureKind.BATCH_FAILURE, f"ollama: malformed embedding ({ex})")
        return EmbeddingSuccess(model=self._model, created_at=created_at, vectors=tuple(out))

    @staticmethod
    def _vector(data: dict) -> Tuple[float, ...]:
        return tuple(float(x) for x in data["embedding"])
