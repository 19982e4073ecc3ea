from __future__ import annotations

from pathlib import Path
from typing import Optional

import requests

from ...domain.errors import IndexFetchError, IndexLoadError
from ...domain.index import SimilarityIndex
from ...domain.interfaces import BlobFetcher
from ..index_codec import loads_index
from ..logging import get_logger
from ..timeouts import resolve_timeout
from .locator import resolve_locator

logger = get_logger("rag_index.infrastructure.ipfs")


class GatewayBlobFetcher(BlobFetcher):
    """Fetch raw bytes over HTTP(S) from an IPFS gateway. No caching, no retries."""

    def fetch(self, url: str, timeout: Optional[float] = None) -> bytes:
        timeout = resolve_timeout(timeout)
        try:
            r = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
            r.raise_for_status()
            return r.content
        except requests.Timeout as ex:
            raise IndexFetchError(f"Timed out fetching {url}", retryable=True) from ex
        except requests.HTTPError as ex:
            status = ex.response.status_code if ex.response is not None else 0
            raise IndexFetchError(f"HTTP {status} fetching {url}", retryable=status >= 500) from ex
        except requests.RequestException as ex:
            raise IndexFetchError(f"Failed to fetch {url}: {ex}", retryable=True) from ex


class IndexLoader:
    """Resolve a locator, fetch the serialized index and parse it."""

    def __init__(self, fetcher: Optional[BlobFetcher] = None, gateway: Optional[str] = None) -> None:
        self._fetcher = fetcher or GatewayBlobFetcher()
        self._gateway = gateway

    def load(self, locator: str, timeout: Optional[float] = None) -> SimilarityIndex:
        """
        Load a SimilarityIndex from a CID, ``ipfs://`` URI or gateway URL.

        Args:
            locator: Content identifier or fully-qualified URL.
            timeout: Seconds allowed for the fetch; RAG_HTTP_TIMEOUT when omitted.

        Returns:
            SimilarityIndex: The parsed index, records in stored order.

        Raises:
            ContractError: Locator cannot be resolved.
            IndexFetchError: Store failed or timed out (``retryable`` set accordingly).
            MalformedIndexPayload: Bytes do not match the serialized index shape.
        """
        url = resolve_locator(locator, self._gateway)
        logger.info("loading index from %s", url)
        raw = self._fetcher.fetch(url, timeout)
        index = loads_index(raw)
        logger.info("loaded %d records (model=%s)", len(index), index.embedding_model)
        return index

    def load_file(self, path: Path) -> SimilarityIndex:
        """Parse a serialized index from a local JSON file."""
        try:
            raw = Path(path).read_bytes()
        except OSError as ex:
            raise IndexLoadError(f"Cannot read index file {path}: {ex}") from ex
        return loads_index(raw)
