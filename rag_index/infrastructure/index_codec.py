"""
Serialized index codec.

Wire shape::

    {"source": str, "model": str, "createdAt": number,
     "vectors": [{"id": str, "text": str, "embedding": [number, ...]}, ...]}

Older payloads carry ``created`` instead of ``createdAt``; both are read.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from ..domain.errors import MalformedIndexPayload
from ..domain.index import SimilarityIndex
from ..domain.models import Record

# Epoch values above this are milliseconds (1e11 s is year ~5138).
_MS_THRESHOLD = 1e11


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def epoch_to_datetime(value: float) -> datetime:
    seconds = value / 1000.0 if abs(value) > _MS_THRESHOLD else float(value)
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def datetime_to_epoch_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(round(value.timestamp() * 1000))


def index_to_payload(index: SimilarityIndex) -> Dict[str, Any]:
    return {
        "source": index.source_locator,
        "model": index.embedding_model,
        "createdAt": datetime_to_epoch_ms(index.created_at),
        "vectors": [
            {"id": r.id, "text": r.text, "embedding": list(r.vector)}
            for r in index.records
        ],
    }


def dumps_index(index: SimilarityIndex, indent: int | None = None) -> str:
    return json.dumps(index_to_payload(index), indent=indent)


def _parse_record(position: int, item: object) -> Record:
    if not isinstance(item, dict):
        raise MalformedIndexPayload(f"vectors[{position}] is not an object")
    rid, text, emb = item.get("id"), item.get("text"), item.get("embedding")
    if not isinstance(rid, str):
        raise MalformedIndexPayload(f"vectors[{position}].id must be a string")
    if not isinstance(text, str):
        raise MalformedIndexPayload(f"vectors[{position}].text must be a string")
    if not isinstance(emb, list) or not all(_is_number(x) for x in emb):
        raise MalformedIndexPayload(f"vectors[{position}].embedding must be an array of numbers")
    return Record(id=rid, text=text, vector=tuple(float(x) for x in emb))


def payload_to_index(data: object) -> SimilarityIndex:
    """Validate a decoded JSON document and build the index; never returns a partial index."""
    if not isinstance(data, dict):
        raise MalformedIndexPayload("index payload must be a JSON object")
    source, model = data.get("source"), data.get("model")
    if not isinstance(source, str):
        raise MalformedIndexPayload("'source' must be a string")
    if not isinstance(model, str):
        raise MalformedIndexPayload("'model' must be a string")
    created = data.get("createdAt", data.get("created"))
    if not _is_number(created):
        raise MalformedIndexPayload("'createdAt' must be a number")
    vectors = data.get("vectors")
    if not isinstance(vectors, list):
        raise MalformedIndexPayload("'vectors' must be an array")
    records: List[Record] = [_parse_record(i, it) for i, it in enumerate(vectors)]
    try:
        created_at = epoch_to_datetime(created)
    except (OverflowError, OSError, ValueError) as ex:
        raise MalformedIndexPayload(f"'createdAt' out of range: {created}") from ex
    return SimilarityIndex.build(source, model, created_at, records)


def loads_index(raw: Union[bytes, str]) -> SimilarityIndex:
    """Decode JSON bytes/text into a SimilarityIndex.

    Raises:
        MalformedIndexPayload: Not JSON, or not the serialized index shape.
    """
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as ex:
        raise MalformedIndexPayload(f"index payload is not valid JSON: {ex}") from ex
    return payload_to_index(data)
