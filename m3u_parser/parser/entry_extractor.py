"""Turns ``#EXTINF`` lines and their media references into stream records."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ..models import Country, Language, StreamRecord, StreamStatus, Tvg
from ..utils.codes import country_name, language_code
from .source import is_valid_url

EXTINF_MARKER = "#EXTINF"
REFERENCE_OFFSETS = (1, 2)

STREAMS_RE = re.compile(r"acestream://[a-zA-Z0-9]+")
FILE_RE = re.compile(r"^[a-zA-Z]:\\((?:.*?\\)*).*\.[\d\w]{3,5}$|^(/[^/]*)+/?.[\d\w]{3,5}$")

TVG_ID_RE = re.compile(r'tvg-id="(.*?)"')
TVG_NAME_RE = re.compile(r'tvg-name="(.*?)"')
TVG_URL_RE = re.compile(r'tvg-url="(.*?)"')
LOGO_RE = re.compile(r'tvg-logo="(.*?)"')
CATEGORY_RE = re.compile(r'group-title="(.*?)"')
COUNTRY_RE = re.compile(r'tvg-country="(.*?)"')
LANGUAGE_RE = re.compile(r'tvg-language="(.*?)"')
TITLE_RE = re.compile(r',([^",]+)$')

Reference = Tuple[str, StreamStatus]


def get_by_regex(pattern: re.Pattern, content: str) -> str:
    match = pattern.search(content)
    return match.group(1).strip() if match else ""


class EntryExtractor:
    """Classifies media references and parses ``#EXTINF`` attributes."""

    @staticmethod
    def classify_reference(line: str) -> Optional[Reference]:
        """Returns the accepted reference and its initial status, if any.

        Streaming protocol URIs and local files are immediately ``GOOD``;
        network URLs start ``BAD`` until a liveness probe says otherwise.
        """

        if not line:
            return None
        is_stream = bool(STREAMS_RE.search(line))
        if is_stream or is_valid_url(line):
            return line, StreamStatus.GOOD if is_stream else StreamStatus.BAD
        if FILE_RE.match(line):
            return line, StreamStatus.GOOD
        return None

    def find_reference(self, lines: List[str], index: int) -> Optional[Reference]:
        for offset in REFERENCE_OFFSETS:
            position = index + offset
            if position >= len(lines):
                break
            reference = self.classify_reference(lines[position])
            if reference:
                return reference
        return None

    def extract(self, lines: List[str], index: int) -> Optional[StreamRecord]:
        line_info = lines[index]
        if not line_info:
            return None
        reference = self.find_reference(lines, index)
        if not reference:
            return None
        stream_link, status = reference

        record = StreamRecord(
            title=get_by_regex(TITLE_RE, line_info),
            logo=get_by_regex(LOGO_RE, line_info),
            url=stream_link,
            category=get_by_regex(CATEGORY_RE, line_info),
            tvg=Tvg(
                id=get_by_regex(TVG_ID_RE, line_info),
                name=get_by_regex(TVG_NAME_RE, line_info),
                url=get_by_regex(TVG_URL_RE, line_info),
            ),
            status=status,
        )

        country = get_by_regex(COUNTRY_RE, line_info)
        if country:
            record.country = Country(code=country, name=country_name(country))

        language = get_by_regex(LANGUAGE_RE, line_info)
        if language:
            record.language = Language(code=language_code(language), name=language)
        return record
