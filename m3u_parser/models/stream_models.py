"""Pydantic models that describe playlist entries and their metadata."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class StreamStatus(str, Enum):
    """Reachability of a stream's media reference."""

    GOOD = "GOOD"
    BAD = "BAD"


class Tvg(BaseModel):
    """Auxiliary EPG identifiers carried by an ``#EXTINF`` line."""

    id: str = ""
    name: str = ""
    url: str = ""


class Country(BaseModel):
    """Raw ``tvg-country`` code plus its resolved long name."""

    code: str = ""
    name: str = ""


class Language(BaseModel):
    """Raw ``tvg-language`` name plus its resolved two-letter code."""

    code: str = ""
    name: str = ""


class StreamRecord(BaseModel):
    """One playlist entry."""

    title: str = ""
    logo: str = ""
    url: str
    category: str = ""
    tvg: Tvg = Field(default_factory=Tvg)
    country: Country = Field(default_factory=Country)
    language: Language = Field(default_factory=Language)
    status: StreamStatus = StreamStatus.BAD
