"""Playlist session: parse once, then query, sample and export the streams."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Iterable, List, Optional, Tuple

import aiohttp

from ..export.serializer import ExportError, render, to_json
from ..models import StreamRecord
from ..query.engine import QueryError, filter_streams, sort_streams
from ..utils.file_utils import resolve_export_target, save_file
from ..utils.http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, HttpClient
from .entry_extractor import EXTINF_MARKER, EntryExtractor
from .liveness import LivenessProber
from .source import SourceError, load_lines


class M3uParser:
    """Parses M3U playlists into :class:`StreamRecord` objects.

    The streams produced by the last successful parse are kept twice: a live
    list that :meth:`filter_by` and :meth:`sort_by` rewrite, and a snapshot
    that :meth:`reset_operations` copies back.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        useragent: str = DEFAULT_USER_AGENT,
        workers: Optional[int] = None,
        http_client: Optional[HttpClient] = None,
    ) -> None:
        self._http_client = http_client or HttpClient(timeout=timeout, user_agent=useragent)
        self._extractor = EntryExtractor()
        self._prober = LivenessProber(self._http_client, workers=workers)
        self._streams: List[StreamRecord] = []
        self._streams_backup: Tuple[StreamRecord, ...] = ()
        self._lines: List[str] = []
        self.check_live = False

    @property
    def streams_info(self) -> List[StreamRecord]:
        return self._streams

    def __len__(self) -> int:
        return len(self._streams)

    def parse_m3u(self, path: str, check_live: bool = True) -> None:
        """Parses the playlist at ``path`` (a URL or a local file).

        With ``check_live`` every stream whose URL could not be recognised
        statically is requested once and marked ``GOOD`` on a 2xx answer.
        """

        asyncio.run(self.parse_m3u_async(path, check_live=check_live))

    async def parse_m3u_async(self, path: str, check_live: bool = True) -> None:
        self.check_live = check_live
        self._streams = []
        self._streams_backup = ()
        self._lines = []

        try:
            self._lines = await asyncio.to_thread(load_lines, path, self._http_client)
        except SourceError as exc:
            logging.error("%s", exc)
            return

        streams = await self._parse_lines(self._lines)
        self._streams = streams
        self._streams_backup = tuple(stream.model_copy(deep=True) for stream in streams)
        logging.info("Parsing completed !!! Found %s streams.", len(streams))

    async def _parse_lines(self, lines: List[str]) -> List[StreamRecord]:
        indices = [index for index, line in enumerate(lines) if EXTINF_MARKER in line]
        if not indices:
            logging.warning("No #EXTINF entries found in playlist.")
            return []

        if self.check_live:
            async with self._prober.open_session() as session:
                results = await asyncio.gather(*(self._parse_line(lines, index, session) for index in indices))
        else:
            results = await asyncio.gather(*(self._parse_line(lines, index, None) for index in indices))
        return [stream for stream in results if stream is not None]

    async def _parse_line(
        self,
        lines: List[str],
        index: int,
        session: Optional[aiohttp.ClientSession],
    ) -> Optional[StreamRecord]:
        try:
            stream = self._extractor.extract(lines, index)
            if stream is None:
                logging.debug("No media reference for line %s: %s", index, lines[index])
                return None
            if session is not None:
                stream = await self._prober.probe(session, stream)
            return stream
        except Exception as exc:
            logging.warning("Skipping entry at line %s: %s", index, exc)
            return None

    def reset_operations(self) -> None:
        """Restores the streams exactly as they were right after parsing."""

        self._streams = [stream.model_copy(deep=True) for stream in self._streams_backup]

    def filter_by(
        self,
        key: str,
        filters: Iterable[str],
        key_splitter: str = "-",
        retrieve: bool = True,
        nested_key: bool = False,
    ) -> None:
        """Keeps (``retrieve=True``) or drops the streams whose ``key`` matches.

        ``filters`` are regular expressions; a stream matches when any of
        them is found in the value of ``key``. Nested keys such as
        ``"tvg-id"`` need ``nested_key=True`` and the matching splitter.
        """

        try:
            self._streams = filter_streams(self._streams, key, filters, key_splitter, retrieve, nested_key)
        except QueryError as exc:
            logging.error("%s", exc)

    def sort_by(self, key: str, key_splitter: str = "-", asc: bool = True, nested_key: bool = False) -> None:
        try:
            self._streams = sort_streams(self._streams, key, key_splitter, asc, nested_key)
        except QueryError as exc:
            logging.error("%s", exc)

    def remove_by_extension(self, extensions: Iterable[str]) -> None:
        self.filter_by("url", extensions, retrieve=False)

    def retrieve_by_extension(self, extensions: Iterable[str]) -> None:
        self.filter_by("url", extensions, retrieve=True)

    def remove_by_category(self, categories: Iterable[str]) -> None:
        self.filter_by("category", categories, retrieve=False)

    def retrieve_by_category(self, categories: Iterable[str]) -> None:
        self.filter_by("category", categories, retrieve=True)

    def get_json(self, pretty: bool = False) -> str:
        return to_json(self._streams, pretty=pretty)

    def get_list(self) -> List[StreamRecord]:
        return [stream.model_copy(deep=True) for stream in self._streams]

    def get_random_stream(self, random_shuffle: bool = True) -> Optional[StreamRecord]:
        """Returns a uniformly chosen stream, or ``None`` when there are none."""

        if not self._streams:
            logging.warning("No streams information so could not get any random stream.")
            return None
        if random_shuffle:
            random.shuffle(self._streams)
        return random.choice(self._streams)

    def to_file(self, filename: str, format: str = "json") -> None:
        """Saves the streams as ``json`` or ``m3u``, overwriting ``filename``.

        An extension already present in ``filename`` takes precedence over
        ``format``; otherwise ``format`` is appended as the extension.
        """

        filename, export_format = resolve_export_target(filename, format)

        if not self._streams:
            logging.error("Either parsing is not done or no stream info was found after parsing !!!")
            return

        try:
            content = render(self._streams, export_format)
        except ExportError as exc:
            logging.error("%s", exc)
            return

        logging.info("Saving to file: %s", filename)
        try:
            save_file(filename, content)
        except OSError as exc:
            logging.error("Failed to save %s: %s", filename, exc)
            raise

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> "M3uParser":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
