from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from ..application.retriever import Retriever
from ..domain.errors import ContractError, EmbeddingError, IndexLoadError
from ..domain.index import SimilarityIndex
from ..domain.models import ScoredRecord
from ..infrastructure.embeddings import get_embedding_service
from ..infrastructure.index_codec import dumps_index
from ..infrastructure.ipfs.loader import IndexLoader
from ..infrastructure.ipfs.locator import resolve_locator
from ..infrastructure.logging import get_logger
from ..ingestion.chunker import load_text_chunks
from .parsers import build_parser

logger = get_logger("rag_index.cli")


def _serialize_match(match: ScoredRecord) -> Dict[str, Any]:
    return {"id": match.record.id, "score": float(match.score), "text": match.record.text}


def _load_index(locator: str, loader: IndexLoader, timeout: Optional[float]) -> SimilarityIndex:
    """Local file when the path exists, otherwise resolve through the content-addressed store."""
    path = Path(locator).expanduser()
    if path.is_file():
        return loader.load_file(path)
    return loader.load(locator, timeout)


def build_command(ns, retriever: Retriever) -> int:
    """
    Chunks the input file, embeds every chunk in one batch and writes the serialized index.

    Args:
        ns: Namespace with file, source, out, chunk_size, overlap, timeout.
        retriever: Retriever wired to an embedding service.

    Returns:
        int: 0 on success, 2 when the input file is missing.
    """
    src = Path(ns.file).expanduser()
    if not src.is_file():
        print(json.dumps({"status": "error", "error": f"File not found: {ns.file}"}))
        return 2
    chunks = load_text_chunks(src, ns.chunk_size, ns.overlap)
    index = retriever.build_index(ns.source or str(src), chunks, getattr(ns, "timeout", None))
    payload = dumps_index(index, indent=2)
    if ns.out:
        Path(ns.out).expanduser().write_text(payload, encoding="utf-8")
        print(json.dumps({"status": "ok", "out": ns.out, "records": len(index), "model": index.embedding_model}))
    else:
        print(payload)
    return 0


def query_command(ns, retriever: Retriever, loader: IndexLoader) -> int:
    timeout = getattr(ns, "timeout", None)
    index = _load_index(ns.index, loader, timeout)
    matches = retriever.answer_scored(index, ns.q, ns.k, timeout)
    print(json.dumps({
        "status": "ok",
        "source": index.source_locator,
        "model": index.embedding_model,
        "results": [_serialize_match(m) for m in matches],
    }, indent=2))
    return 0


def resolve_command(ns) -> int:
    print(json.dumps({"status": "ok", "url": resolve_locator(ns.locator, ns.gateway)}))
    return 0


def dispatch_commands(ns, retriever: Retriever, loader: IndexLoader) -> int:
    if ns.cmd == "build":
        return build_command(ns, retriever)
    if ns.cmd == "query":
        return query_command(ns, retriever, loader)
    if ns.cmd == "resolve":
        return resolve_command(ns)
    print(json.dumps({"status": "error", "error": f"Unknown command: {ns.cmd}"}))
    return 2


def run(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))

    try:
        loader = IndexLoader()
        retriever = Retriever(get_embedding_service(ns.provider), loader)
        return dispatch_commands(ns, retriever, loader)
    except (EmbeddingError, IndexLoadError) as ex:
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}", "retryable": ex.retryable}))
        return 3
    except (ContractError, ValueError) as ex:
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 2
    except Exception as ex:  # keep CLI concise and user-friendly
        logger.debug("command failed", exc_info=True)
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 3


def main() -> int:
    import sys

    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
