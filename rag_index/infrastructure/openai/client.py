from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

import requests

from ...domain.interfaces import EmbeddingService
from ...domain.models import EmbeddingFailure, EmbeddingResult, EmbeddingSuccess, FailureKind
from ..config import embed_model, openai_api_key, openai_base_url
from ..embeddings import failure_from_exception, truncate_texts
from ..logging import get_logger
from ..timeouts import resolve_timeout

logger = get_logger("rag_index.infrastructure.openai")


class OpenAIEmbeddingService(EmbeddingService):
    """Embedding adapter for the OpenAI /embeddings endpoint (one request per batch)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else openai_api_key()
        self._model = model or embed_model()
        self._base = (base_url or openai_base_url()).rstrip("/")

    def embed(self, texts: List[str], timeout: Optional[float] = None) -> EmbeddingResult:
        if not self._api_key:
            return EmbeddingFailure(FailureKind.UNAVAILABLE, "openai-not-configured")
        if not texts:
            return EmbeddingSuccess(model=self._model, created_at=datetime.now(timezone.utc), vectors=())
        inputs = truncate_texts(texts)
        timeout = resolve_timeout(timeout)
        logger.debug("embedding %d texts with %s", len(inputs), self._model)
        try:
            r = requests.post(
                f"{self._base}/embeddings",
                json={"model": self._model, "input": inputs},
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=timeout,
            )
            r.raise_for_status()
            data = r.json() or {}
        except (requests.RequestException, ValueError) as ex:
            failure = failure_from_exception(ex, "openai")
            logger.warning("embedding batch failed: %s", failure.message)
            return failure
        if not isinstance(data, dict):
            return EmbeddingFailure(FailureKind.BATCH_FAILURE, "openai: response is not an object")
        return self._parse(data, len(inputs))

    def _parse(self, data: dict, expected: int) -> EmbeddingResult:
        items = data.get("data")
        if not isinstance(items, list) or len(items) != expected:
            got = len(items) if isinstance(items, list) else 0
            return EmbeddingFailure(
                FailureKind.BATCH_FAILURE,
                f"openai: expected {expected} embeddings, got {got}",
            )
        try:
            # Items carry their batch position; list order is not guaranteed.
            positions = [int(it.get("index", pos)) for pos, it in enumerate(items)]
            if sorted(positions) != list(range(expected)):
                return EmbeddingFailure(
                    FailureKind.BATCH_FAILURE,
                    f"openai: item indices {sorted(positions)} do not cover 0..{expected - 1}",
                )
            ordered = [it for _, it in sorted(zip(positions, items), key=lambda p: p[0])]
            vectors = tuple(tuple(float(x) for x in it["embedding"]) for it in ordered)
        except (AttributeError, KeyError, TypeError, ValueError) as ex:
            return EmbeddingFailure(FailureKind.BATCH_FAILURE, f"openai: malformed embedding ({ex})")
        return EmbeddingSuccess(
            model=str(data.get("model") or self._model),
            created_at=self._created_at(data.get("created")),
            vectors=vectors,
        )

    @staticmethod
    def _created_at(created: object) -> datetime:
        """Provider timestamp when usable, else the wall clock."""
        if isinstance(created, (int, float)) and not isinstance(created, bool):
            try:
                return datetime.fromtimestamp(created, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                logger.debug("ignoring out-of-range created=%r", created)
        return datetime.now(timezone.utc)
