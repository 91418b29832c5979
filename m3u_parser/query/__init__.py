"""Key-path filtering and sorting over stream records."""

from .engine import QueryError, filter_streams, get_key_value, resolve_key, sort_streams

__all__ = ["QueryError", "filter_streams", "sort_streams", "resolve_key", "get_key_value"]
