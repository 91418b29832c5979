from __future__ import annotations

import asyncio
import json
import logging

import pytest

from m3u_parser import M3uParser, StreamStatus
from m3u_parser.parser.entry_extractor import EntryExtractor
from m3u_parser.utils.http_client import HttpClient


@pytest.fixture
def parser(playlist_file) -> M3uParser:
    m3u = M3uParser(timeout=1)
    m3u.parse_m3u(str(playlist_file), check_live=False)
    return m3u


def titles(m3u: M3uParser) -> list[str]:
    return [stream.title for stream in m3u.streams_info]


def test_parse_local_file(parser) -> None:
    assert titles(parser) == ["BBC One", "Ace Sports", "Local Movie", "CNN", "Arte"]
    assert all(stream.url for stream in parser.streams_info)

    bbc, ace, local, cnn, arte = parser.streams_info
    assert bbc.country.name == "United Kingdom of Great Britain and Northern Ireland"
    assert bbc.language.code == "EN"
    assert cnn.url == "http://example.com/cnn.ts"
    assert cnn.language.name == "english"
    assert arte.language.code == "FR"
    assert [s.status for s in parser.streams_info] == [
        StreamStatus.BAD,
        StreamStatus.GOOD,
        StreamStatus.GOOD,
        StreamStatus.BAD,
        StreamStatus.BAD,
    ]


def test_parse_url(requests_mock, playlist_text) -> None:
    requests_mock.get("https://lists.example.com/index.m3u", text=playlist_text)
    m3u = M3uParser()
    m3u.parse_m3u("https://lists.example.com/index.m3u", check_live=False)
    assert len(m3u) == 5


def test_parse_failure_leaves_no_streams(parser, tmp_path, caplog) -> None:
    parser.parse_m3u(str(tmp_path / "missing.m3u"), check_live=False)
    assert len(parser) == 0
    parser.reset_operations()
    assert len(parser) == 0
    assert "Unable to read playlist" in caplog.text


def test_parse_http_error(requests_mock, caplog) -> None:
    requests_mock.get("https://lists.example.com/gone.m3u", status_code=500)
    m3u = M3uParser()
    m3u.parse_m3u("https://lists.example.com/gone.m3u", check_live=False)
    assert len(m3u) == 0
    assert "Unable to download playlist" in caplog.text


def test_check_live_disabled_never_probes(playlist_file, monkeypatch) -> None:
    calls = []

    async def fake_probe(self, session, url):
        calls.append(url)
        return True

    monkeypatch.setattr(HttpClient, "probe", fake_probe)
    m3u = M3uParser()
    m3u.parse_m3u(str(playlist_file), check_live=False)

    assert calls == []
    assert m3u.streams_info[0].status is StreamStatus.BAD


def test_check_live_promotes_reachable_streams(playlist_file, monkeypatch) -> None:
    calls = []

    async def fake_probe(self, session, url):
        calls.append(url)
        return url != "http://example.com/cnn.ts"

    monkeypatch.setattr(HttpClient, "probe", fake_probe)
    m3u = M3uParser()
    m3u.parse_m3u(str(playlist_file), check_live=True)

    statuses = {s.title: s.status for s in m3u.streams_info}
    assert statuses == {
        "BBC One": StreamStatus.GOOD,
        "Ace Sports": StreamStatus.GOOD,
        "Local Movie": StreamStatus.GOOD,
        "CNN": StreamStatus.BAD,
        "Arte": StreamStatus.GOOD,
    }
    assert sorted(calls) == [
        "http://example.com/cnn.ts",
        "https://example.com/arte.mp4",
        "https://example.com/bbc.m3u8",
    ]


def test_results_keep_document_order(playlist_file, monkeypatch) -> None:
    delays = {
        "https://example.com/bbc.m3u8": 0.2,
        "http://example.com/cnn.ts": 0.1,
        "https://example.com/arte.mp4": 0.0,
    }

    async def fake_probe(self, session, url):
        await asyncio.sleep(delays[url])
        return True

    monkeypatch.setattr(HttpClient, "probe", fake_probe)
    m3u = M3uParser()
    m3u.parse_m3u(str(playlist_file), check_live=True)
    assert titles(m3u) == ["BBC One", "Ace Sports", "Local Movie", "CNN", "Arte"]


def test_failing_entry_does_not_abort_batch(playlist_file, monkeypatch, caplog) -> None:
    original = EntryExtractor.extract

    def flaky(self, lines, index):
        if "CNN" in lines[index]:
            raise RuntimeError("boom")
        return original(self, lines, index)

    monkeypatch.setattr(EntryExtractor, "extract", flaky)
    m3u = M3uParser()
    m3u.parse_m3u(str(playlist_file), check_live=False)

    assert titles(m3u) == ["BBC One", "Ace Sports", "Local Movie", "Arte"]
    assert "boom" in caplog.text


def test_filter_and_reset(parser) -> None:
    snapshot = parser.get_list()

    parser.filter_by("title", ["CNN"], retrieve=False)
    assert "CNN" not in titles(parser)
    parser.filter_by("category", ["News"], retrieve=True)
    assert titles(parser) == ["BBC One"]
    parser.filter_by("title", ["CNN"], retrieve=True)
    assert titles(parser) == []

    parser.reset_operations()
    assert parser.get_list() == snapshot


def test_reset_is_not_affected_by_mutating_live_records(parser) -> None:
    parser.streams_info[0].title = "Changed"
    parser.reset_operations()
    assert parser.streams_info[0].title == "BBC One"


def test_nested_filter(parser) -> None:
    parser.filter_by("country-code", ["US", "FR"], nested_key=True)
    assert titles(parser) == ["CNN", "Arte"]


def test_invalid_query_is_a_no_op(parser, caplog) -> None:
    before = titles(parser)
    parser.filter_by("channel", ["x"])
    parser.filter_by("tvg-id-x", ["x"], nested_key=True)
    parser.filter_by("title", [])
    parser.sort_by("nothing")
    assert titles(parser) == before
    assert caplog.text.count("ERROR") == 4


def test_sort_by(parser) -> None:
    parser.sort_by("title")
    ascending = titles(parser)
    parser.sort_by("title", asc=False)
    assert titles(parser) == list(reversed(ascending))
    assert ascending == sorted(ascending)


def test_sort_by_status_is_stable(parser) -> None:
    parser.sort_by("status")
    assert titles(parser) == ["BBC One", "CNN", "Arte", "Ace Sports", "Local Movie"]


def test_extension_and_category_helpers(parser) -> None:
    parser.retrieve_by_extension(["m3u8", "mp4"])
    assert titles(parser) == ["BBC One", "Arte"]
    parser.reset_operations()
    parser.remove_by_extension(["ts$"])
    assert "CNN" not in titles(parser)
    parser.reset_operations()
    parser.retrieve_by_category(["Movies"])
    assert titles(parser) == ["Local Movie"]
    parser.reset_operations()
    parser.remove_by_category(["News", "Sports"])
    assert titles(parser) == ["Local Movie", "Arte"]


def test_get_json(parser) -> None:
    payload = json.loads(parser.get_json(pretty=True))
    assert len(payload) == 5
    assert payload[0]["tvg"]["id"] == "bbc"
    assert payload[1]["status"] == "GOOD"


def test_random_stream(parser) -> None:
    before = titles(parser)
    stream = parser.get_random_stream(random_shuffle=False)
    assert stream in parser.streams_info
    assert titles(parser) == before

    parser.get_random_stream(random_shuffle=True)
    assert sorted(titles(parser)) == sorted(before)


def test_random_stream_on_empty_set(caplog) -> None:
    assert M3uParser().get_random_stream() is None
    assert "No streams information" in caplog.text


def test_to_file_json(parser, tmp_path) -> None:
    target = tmp_path / "streams"
    parser.to_file(str(target), "json")
    payload = json.loads((tmp_path / "streams.json").read_text(encoding="utf-8"))
    assert [item["title"] for item in payload] == titles(parser)


def test_to_file_extension_wins(parser, tmp_path) -> None:
    target = tmp_path / "streams.m3u"
    target.write_text("old", encoding="utf-8")
    parser.to_file(str(target), "json")
    assert target.read_text(encoding="utf-8").startswith("#EXTM3U")
    assert not (tmp_path / "streams.m3u.json").exists()


def test_to_file_unknown_format_and_empty(parser, tmp_path, caplog) -> None:
    parser.to_file(str(tmp_path / "streams.xml"))
    assert not (tmp_path / "streams.xml").exists()
    assert "Unrecognised format" in caplog.text

    M3uParser().to_file(str(tmp_path / "empty.json"))
    assert not (tmp_path / "empty.json").exists()


def test_to_file_write_failure_raises(parser, tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(OSError):
        parser.to_file(str(blocker / "streams.json"))


def test_m3u_round_trip(parser, tmp_path) -> None:
    target = tmp_path / "round.m3u"
    parser.to_file(str(target))

    reparsed = M3uParser()
    reparsed.parse_m3u(str(target), check_live=False)

    def fields(m3u: M3uParser) -> list[tuple]:
        return [
            (
                s.title,
                s.category,
                s.tvg.id,
                s.tvg.name,
                s.tvg.url,
                s.logo,
                s.country.code,
                s.country.name,
                s.language.name,
                s.language.code,
                s.url,
            )
            for s in m3u.streams_info
        ]

    assert fields(reparsed) == fields(parser)


def test_info_logging(parser, playlist_file, caplog) -> None:
    caplog.set_level(logging.INFO)
    parser.parse_m3u(str(playlist_file), check_live=False)
    assert "Parsing completed" in caplog.text


def test_filter_by_accepts_a_single_pattern_string(parser) -> None:
    parser.filter_by("title", "Arte")
    assert titles(parser) == ["Arte"]
