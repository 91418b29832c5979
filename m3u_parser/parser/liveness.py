"""Concurrent reachability checks for extracted streams."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from ..models import StreamRecord, StreamStatus
from ..utils.http_client import HttpClient


class LivenessProber:
    """Promotes ``BAD`` records to ``GOOD`` when their URL answers with 2xx.

    Each eligible record gets exactly one request. ``workers`` optionally caps
    how many probes are in flight at once; ``None`` issues them all together.
    """

    def __init__(self, http_client: HttpClient, workers: Optional[int] = None) -> None:
        self._http_client = http_client
        self.workers = workers
        self._sem: Optional[asyncio.Semaphore] = None

    def open_session(self) -> aiohttp.ClientSession:
        if self.workers:
            self._sem = asyncio.Semaphore(self.workers)
        else:
            self._sem = None
        return self._http_client.open_probe_session(limit=self.workers)

    async def probe(self, session: aiohttp.ClientSession, record: StreamRecord) -> StreamRecord:
        if record.status is StreamStatus.GOOD:
            return record

        if self._sem is None:
            reachable = await self._http_client.probe(session, record.url)
        else:
            async with self._sem:
                reachable = await self._http_client.probe(session, record.url)

        if reachable:
            record.status = StreamStatus.GOOD
            logging.debug("Stream %s is reachable", record.url)
        return record
