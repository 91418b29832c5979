"""Loading playlist documents from URLs or local files."""

from __future__ import annotations

import logging
from typing import List
from urllib.parse import urlparse

import requests

from ..utils.file_utils import read_text
from ..utils.http_client import HttpClient

HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


class SourceError(Exception):
    """Raised when a playlist source cannot be read or holds no content."""


def is_valid_url(value: str) -> bool:
    """True for absolute URLs such as ``http://host/path`` or ``file:///a.mp4``.

    Single-letter schemes are rejected so ``C:\\videos\\a.mp4`` stays a path.
    Web schemes need a host; no scheme allows whitespace in its authority.
    """

    try:
        parsed = urlparse(value)
        if len(parsed.scheme) < 2:
            return False
        if any(char.isspace() for char in parsed.netloc):
            return False
        if parsed.scheme in HOST_SCHEMES and not parsed.hostname:
            return False
        if parsed.netloc:
            parsed.port  # raises ValueError for a malformed port
    except ValueError:
        return False
    return bool(parsed.netloc or parsed.path)


def normalize_lines(text: str) -> List[str]:
    """Trims every line and drops the blank ones, keeping document order."""

    return [line.strip() for line in text.splitlines() if line.strip()]


def load_lines(path: str, http_client: HttpClient) -> List[str]:
    """Reads ``path`` (URL first, then filesystem) into normalized lines."""

    if is_valid_url(path):
        try:
            content = http_client.fetch_text(path)
        except requests.RequestException as exc:
            raise SourceError(f"Unable to download playlist {path}: {exc}") from exc
    else:
        try:
            content = read_text(path)
        except OSError as exc:
            raise SourceError(f"Unable to read playlist {path}: {exc}") from exc

    lines = normalize_lines(content)
    if not lines:
        raise SourceError("No content to parse!!!")
    logging.debug("Loaded %s non-empty lines from %s", len(lines), path)
    return lines
