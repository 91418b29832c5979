"""Parse, probe, query and export M3U/M3U8 playlists."""

from .models import Country, Language, StreamRecord, StreamStatus, Tvg
from .parser import M3uParser

__all__ = ["M3uParser", "StreamRecord", "StreamStatus", "Tvg", "Country", "Language"]
