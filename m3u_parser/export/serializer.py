"""Rendering stream records as M3U playlists or JSON documents."""

from __future__ import annotations

import json
from typing import Callable, Dict, List, Sequence, Tuple

from ..models import StreamRecord

M3U_HEADER = "#EXTM3U"
EXTINF_PREFIX = "#EXTINF:-1"

ATTRIBUTE_ORDER: List[Tuple[str, Callable[[StreamRecord], str]]] = [
    ("tvg-id", lambda record: record.tvg.id),
    ("tvg-name", lambda record: record.tvg.name),
    ("tvg-url", lambda record: record.tvg.url),
    ("tvg-logo", lambda record: record.logo),
    ("tvg-country", lambda record: record.country.code),
    ("tvg-language", lambda record: record.language.name),
    ("group-title", lambda record: record.category),
]


class ExportError(ValueError):
    """Raised when an export format is not supported."""


def build_extinf(record: StreamRecord) -> str:
    line = EXTINF_PREFIX
    for name, accessor in ATTRIBUTE_ORDER:
        value = accessor(record)
        if value:
            line += f' {name}="{value}"'
    if record.title:
        line += f",{record.title}"
    return line


def to_m3u(records: Sequence[StreamRecord]) -> str:
    """Returns the playlist text, or ``""`` when there is nothing to write."""

    if not records:
        return ""
    content = [M3U_HEADER]
    for record in records:
        content.append(build_extinf(record))
        content.append(record.url)
    return "\n".join(content)


def to_json(records: Sequence[StreamRecord], pretty: bool = False) -> str:
    payload = [record.model_dump(mode="json") for record in records]
    if pretty:
        return json.dumps(payload, ensure_ascii=False, indent=4)
    return json.dumps(payload, ensure_ascii=False)


SERIALIZERS: Dict[str, Callable[[Sequence[StreamRecord]], str]] = {
    "json": lambda records: to_json(records, pretty=True),
    "m3u": to_m3u,
    "m3u8": to_m3u,
}


def render(records: Sequence[StreamRecord], export_format: str) -> str:
    serializer = SERIALIZERS.get(export_format.lower())
    if serializer is None:
        raise ExportError(f"Unrecognised format: {export_format}")
    return serializer(records)
