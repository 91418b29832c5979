"""Utility helpers for HTTP, filesystem operations and code lookups."""

from .codes import LANGUAGE_CODES, country_name, language_code
from .file_utils import ensure_directory, read_text, resolve_export_target, save_file
from .http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, HttpClient

__all__ = [
    "HttpClient",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "LANGUAGE_CODES",
    "country_name",
    "language_code",
    "ensure_directory",
    "read_text",
    "resolve_export_target",
    "save_file",
]
