from __future__ import annotations

from typing import List, Optional

import requests

from ..domain.interfaces import EmbeddingService
from ..domain.models import EmbeddingFailure, FailureKind
from .config import embed_provider, embed_text_max


def truncate_texts(texts: List[str], limit: Optional[int] = None) -> List[str]:
    """Cap every text at ``limit`` characters (RAG_EMBED_TEXT_MAX by default); None becomes ''."""
    cap = embed_text_max() if limit is None else limit
    return [(t or "")[:cap] for t in texts]


def failure_from_exception(ex: Exception, provider: str) -> EmbeddingFailure:
    """Map a requests exception raised during a batch onto a whole-batch failure."""
    if isinstance(ex, requests.Timeout):
        return EmbeddingFailure(FailureKind.TIMEOUT, f"{provider}: request timed out")
    if isinstance(ex, requests.ConnectionError):
        return EmbeddingFailure(FailureKind.UNAVAILABLE, f"{provider}: unreachable ({ex})")
    if isinstance(ex, requests.HTTPError) and ex.response is not None:
        return EmbeddingFailure(
            FailureKind.BATCH_FAILURE,
            f"{provider}: HTTP {ex.response.status_code}",
        )
    return EmbeddingFailure(FailureKind.BATCH_FAILURE, f"{provider}: {type(ex).__name__}: {ex}")


def get_embedding_service(provider: Optional[str] = None) -> EmbeddingService:
    """Build the adapter named by ``provider`` or RAG_EMBED_PROVIDER (openai, ollama)."""
    name = (provider or embed_provider()).lower()
    if name == "ollama":
        from .ollama.client import OllamaEmbeddingService

        return OllamaEmbeddingService()
    if name == "openai":
        from .openai.client import OpenAIEmbeddingService

        return OpenAIEmbeddingService()
    raise ValueError(f"Unknown embedding provider: {name!r} (expected 'openai' or 'ollama')")
