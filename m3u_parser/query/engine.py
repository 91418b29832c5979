"""Filtering and sorting of stream records by a textual key path.

A key is either a top-level field (``"title"``) or, with ``nested_key``, a
``<field><key_splitter><subfield>`` path such as ``"tvg-id"`` or
``"country-name"``. Only the pairs listed in :data:`KEY_ACCESSORS` are valid.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from ..models import StreamRecord

KeyPair = Tuple[str, str]

VALID_KEYS = ("title", "logo", "url", "category", "tvg", "country", "language", "status")
VALID_SUBKEYS = ("", "id", "name", "url", "code")

KEY_ACCESSORS: Dict[KeyPair, Callable[[StreamRecord], str]] = {
    ("title", ""): lambda record: record.title,
    ("logo", ""): lambda record: record.logo,
    ("url", ""): lambda record: record.url,
    ("category", ""): lambda record: record.category,
    ("status", ""): lambda record: record.status.value,
    ("tvg", "id"): lambda record: record.tvg.id,
    ("tvg", "name"): lambda record: record.tvg.name,
    ("tvg", "url"): lambda record: record.tvg.url,
    ("country", "code"): lambda record: record.country.code,
    ("country", "name"): lambda record: record.country.name,
    ("language", "code"): lambda record: record.language.code,
    ("language", "name"): lambda record: record.language.name,
}


class QueryError(ValueError):
    """Raised for invalid keys, missing filters or unparsable patterns."""


def resolve_key(key: str, key_splitter: str = "-", nested_key: bool = False) -> KeyPair:
    if nested_key:
        parts = key.split(key_splitter) if key_splitter else [key]
        if len(parts) != 2:
            raise QueryError("Nested key must be in the format <key><key_splitter><nested_key>")
        key_0, key_1 = parts
    else:
        key_0, key_1 = key, ""

    if key_0 not in VALID_KEYS or key_1 not in VALID_SUBKEYS:
        raise QueryError(f"{key} key is not present.")
    if (key_0, key_1) not in KEY_ACCESSORS:
        raise QueryError(f"{key} is not a valid combination of key and nested key.")
    return key_0, key_1


def get_key_value(record: StreamRecord, key_0: str, key_1: str = "") -> str:
    return KEY_ACCESSORS[(key_0, key_1)](record)


def compile_filters(filters: Iterable[str]) -> List[re.Pattern]:
    if isinstance(filters, str):
        filters = [filters] if filters else []
    filters = list(filters or [])
    if not filters:
        raise QueryError("Filter word/s missing!!!")
    compiled = []
    for pattern in filters:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise QueryError(f"Invalid filter pattern {pattern!r}: {exc}") from exc
    return compiled


def filter_streams(
    records: Sequence[StreamRecord],
    key: str,
    filters: Iterable[str],
    key_splitter: str = "-",
    retrieve: bool = True,
    nested_key: bool = False,
) -> List[StreamRecord]:
    """Keeps records matching any filter (``retrieve``) or matching none."""

    key_0, key_1 = resolve_key(key, key_splitter, nested_key)
    patterns = compile_filters(filters)

    def matches(record: StreamRecord) -> bool:
        value = get_key_value(record, key_0, key_1)
        return any(pattern.search(value) for pattern in patterns)

    if retrieve:
        return [record for record in records if matches(record)]
    return [record for record in records if not matches(record)]


def sort_streams(
    records: Sequence[StreamRecord],
    key: str,
    key_splitter: str = "-",
    asc: bool = True,
    nested_key: bool = False,
) -> List[StreamRecord]:
    """Stable sort on the resolved key; ties keep their previous order."""

    key_0, key_1 = resolve_key(key, key_splitter, nested_key)
    return sorted(records, key=lambda record: get_key_value(record, key_0, key_1), reverse=not asc)
