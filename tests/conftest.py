from __future__ import annotations

import pytest

SAMPLE_PLAYLIST = """#EXTM3U

#EXTINF:-1 tvg-id="bbc" tvg-name="BBC One" tvg-country="GB" tvg-language="English" tvg-logo="https://logos.example.com/bbc.png" group-title="News",BBC One
https://example.com/bbc.m3u8
#EXTINF:-1 tvg-id="ace" group-title="Sports",Ace Sports
acestream://abc123def
#EXTINF:-1 tvg-id="local" group-title="Movies",Local Movie
/media/movies/film.mkv
#EXTINF:-1 tvg-id="cnn" tvg-country="US" tvg-language="english" group-title="News",CNN
#EXTVLCOPT:http-user-agent=VLC
http://example.com/cnn.ts
#EXTINF:-1 tvg-id="orphan" group-title="Broken",No Reference
not a reference
#EXTINF:-1 tvg-id="arte" tvg-country="FR" tvg-language="French" group-title="Culture",Arte
https://example.com/arte.mp4
"""


@pytest.fixture
def playlist_text() -> str:
    return SAMPLE_PLAYLIST


@pytest.fixture
def playlist_file(tmp_path):
    path = tmp_path / "playlist.m3u"
    path.write_text(SAMPLE_PLAYLIST, encoding="utf-8")
    return path
