from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlparse

from ...domain.errors import ContractError
from ..config import ipfs_gateway

_CID_V0 = re.compile(r"^Qm[1-9A-HJ-NP-Za-km-z]{44}$")
_CID_V1 = re.compile(r"^b[a-z2-7]{58,}$")
_IPFS_PREFIX = re.compile(r"^(?:ipfs://|/?ipfs/)", re.IGNORECASE)


def is_valid_cid(value: str) -> bool:
    """True for CIDv0 (base58 ``Qm...``) or base32 CIDv1 (``b...``); ``ipfs://`` prefix allowed."""
    if not value or not isinstance(value, str):
        return False
    clean = _IPFS_PREFIX.sub("", value.strip())
    return bool(_CID_V0.match(clean) or _CID_V1.match(clean))


def resolve_locator(locator: str, gateway: Optional[str] = None) -> str:
    """Turn a CID, ``ipfs://`` URI or gateway URL into a fetchable https address.

    http(s) URLs pass through unchanged. ``ipfs://<cid>/path``, ``/ipfs/<cid>``
    and bare CIDs are rewritten against ``gateway`` (RAG_IPFS_GATEWAY by default).

    Raises:
        ContractError: Blank locator or one that is neither a URL nor a CID path.
    """
    value = (locator or "").strip()
    if not value:
        raise ContractError("Index locator must not be empty")
    parsed = urlparse(value)
    if parsed.scheme in ("http", "https"):
        if not parsed.netloc:
            raise ContractError(f"Invalid index URL: {locator!r}")
        return value
    if parsed.scheme and parsed.scheme != "ipfs":
        raise ContractError(f"Unsupported locator scheme {parsed.scheme!r} in {locator!r}")

    path = _IPFS_PREFIX.sub("", value).strip("/")
    cid = path.split("/", 1)[0]
    if not cid or not is_valid_cid(cid):
        raise ContractError(f"Locator {locator!r} is not a URL or IPFS content identifier")
    base = (gateway or ipfs_gateway()).rstrip("/")
    return f"{base}/ipfs/{path}"
