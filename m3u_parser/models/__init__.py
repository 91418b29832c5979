"""Data models for playlist entries."""

from .stream_models import Country, Language, StreamRecord, StreamStatus, Tvg

__all__ = [
    "StreamRecord",
    "StreamStatus",
    "Tvg",
    "Country",
    "Language",
]
