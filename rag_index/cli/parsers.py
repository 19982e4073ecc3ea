from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="RAG similarity index (embed, load, top-K query)")
    ap.add_argument("--provider", default=None, help="Embedding provider: openai or ollama; defaults to $RAG_EMBED_PROVIDER")
    ap.add_argument("--timeout", type=float, default=None, help="Network timeout in seconds; defaults to $RAG_HTTP_TIMEOUT")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # Chunk a text file, embed the chunks and emit the serialized index
    b = sub.add_parser("build")
    b.add_argument("--file", required=True, help="UTF-8 text file to index")
    b.add_argument("--source", default=None, help="Source locator recorded in the index; defaults to the file path")
    b.add_argument("--out", default=None, help="Write the index JSON here instead of stdout")
    b.add_argument("--chunk-size", type=int, default=None, help="Defaults to $RAG_CHUNK_SIZE or 1200")
    b.add_argument("--overlap", type=int, default=None, help="Defaults to $RAG_CHUNK_OVERLAP or 200")

    # Rank stored passages against a question
    q = sub.add_parser("query")
    q.add_argument("--index", required=True, help="Local index file, CID, ipfs:// URI or gateway URL")
    q.add_argument("--q", required=True)
    q.add_argument("--k", type=int, default=5)

    r = sub.add_parser("resolve")
    r.add_argument("--locator", required=True)
    r.add_argument("--gateway", default=None, help="Defaults to $RAG_IPFS_GATEWAY or https://ipfs.io")

    return ap
