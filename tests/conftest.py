"""
Pytest configuration and fixtures for rag_index tests.

Provides fake providers and sample indexes so no test touches the network.
"""

import os
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
import pytest

from rag_index.domain.index import SimilarityIndex
from rag_index.domain.interfaces import BlobFetcher, EmbeddingService
from rag_index.domain.models import EmbeddingFailure, EmbeddingSuccess, FailureKind, Record


CREATED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

# Cooking texts point the same way; finance is orthogonal.
KITCHEN_VECTORS: Dict[str, Sequence[float]] = {
    "apple pie recipe": (0.9, 0.3, 0.0),
    "stock market news": (0.0, 0.1, 1.0),
    "baking a cake": (0.8, 0.5, 0.05),
    "how do I bake a cake?": (0.78, 0.52, 0.05),
}


class FakeEmbeddingService(EmbeddingService):
    """Looks texts up in a table; records every batch it was asked to embed."""

    def __init__(self, table: Dict[str, Sequence[float]], model: str = "fake-embed", failure: Optional[EmbeddingFailure] = None):
        self.table = table
        self.model = model
        self.failure = failure
        self.calls: List[List[str]] = []
        self.timeouts: List[Optional[float]] = []

    def embed(self, texts, timeout=None):
        self.calls.append(list(texts))
        self.timeouts.append(timeout)
        if self.failure is not None:
            return self.failure
        return EmbeddingSuccess(
            model=self.model,
            created_at=CREATED,
            vectors=tuple(tuple(self.table[t]) for t in texts),
        )


class FakeBlobFetcher(BlobFetcher):
    def __init__(self, payload: bytes = b"", error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.urls: List[str] = []

    def fetch(self, url, timeout=None):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def fake_embeddings():
    """Fake embedding service backed by the kitchen vector table."""
    return FakeEmbeddingService(dict(KITCHEN_VECTORS))


@pytest.fixture
def failing_embeddings():
    """Factory for services that fail every batch with the given kind."""
    def _make(kind: FailureKind, message: str = "boom") -> FakeEmbeddingService:
        return FakeEmbeddingService({}, failure=EmbeddingFailure(kind, message))
    return _make


@pytest.fixture
def kitchen_index():
    """Three-record index in insertion order apple, stock, cake."""
    records = [
        Record(id="r1", text="apple pie recipe", vector=tuple(KITCHEN_VECTORS["apple pie recipe"])),
        Record(id="r2", text="stock market news", vector=tuple(KITCHEN_VECTORS["stock market news"])),
        Record(id="r3", text="baking a cake", vector=tuple(KITCHEN_VECTORS["baking a cake"])),
    ]
    return SimilarityIndex.build("ipfs://QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG", "fake-embed", CREATED, records)


@pytest.fixture
def clean_environment():
    """Clean environment variables for testing."""
    env_vars_to_clean = [
        'RAG_EMBED_PROVIDER',
        'OPENAI_API_KEY',
        'OPENAI_BASE_URL',
        'EMBED_MODEL',
        'OLLAMA_URL',
        'RAG_IPFS_GATEWAY',
        'RAG_EMBED_TEXT_MAX',
        'RAG_CHUNK_SIZE',
        'RAG_CHUNK_OVERLAP',
        'RAG_HTTP_TIMEOUT',
    ]

    original_env = {}
    for var in env_vars_to_clean:
        if var in os.environ:
            original_env[var] = os.environ[var]
            del os.environ[var]

    yield

    for var in env_vars_to_clean:
        os.environ.pop(var, None)
    for var, value in original_env.items():
        os.environ[var] = value


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as end-to-end test with fake providers"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as CLI command test"
    )
