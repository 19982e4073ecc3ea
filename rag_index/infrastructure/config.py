from __future__ import annotations

import os
from typing import Optional


def env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    try:
        return int(env_str(name, str(default)))
    except Exception:
        return default


def embed_provider() -> str:
    return env_str("RAG_EMBED_PROVIDER", "openai").lower()


def openai_api_key() -> Optional[str]:
    key = os.getenv("OPENAI_API_KEY", "").strip()
    return key or None


def openai_base_url() -> str:
    return env_str("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")


def ollama_url() -> str:
    return env_str("OLLAMA_URL", "http://localhost:11434").rstrip("/")


def embed_model(default: str = "text-embedding-3-small") -> str:
    return env_str("EMBED_MODEL", default)


def ipfs_gateway() -> str:
    return env_str("RAG_IPFS_GATEWAY", "https://ipfs.io").rstrip("/")


def embed_text_max() -> int:
    """
    Per-text character cap applied before texts are sent to the embedding provider.
    Defaults to 4000 when RAG_EMBED_TEXT_MAX is not set or invalid.
    """
    return _env_int("RAG_EMBED_TEXT_MAX", 4000)


def chunk_size() -> int:
    return _env_int("RAG_CHUNK_SIZE", 1200)


def chunk_overlap() -> int:
    return _env_int("RAG_CHUNK_OVERLAP", 200)
