"""Playlist loading, entry extraction and liveness probing."""

from .entry_extractor import EntryExtractor
from .liveness import LivenessProber
from .m3u_parser import M3uParser
from .source import SourceError, is_valid_url, load_lines, normalize_lines

__all__ = [
    "M3uParser",
    "EntryExtractor",
    "LivenessProber",
    "SourceError",
    "is_valid_url",
    "load_lines",
    "normalize_lines",
]
