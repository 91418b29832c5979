"""Serializers for writing stream records back out."""

from .serializer import ExportError, render, to_json, to_m3u

__all__ = ["ExportError", "render", "to_json", "to_m3u"]
