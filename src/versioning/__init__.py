"""Dependency specifier model and version helpers."""

from .models import Specifier
from .parser import parse_specifier, format_specifier
from .compare import latest_version, sort_versions

__all__ = [
    "Specifier",
    "parse_specifier",
    "format_specifier",
    "latest_version",
    "sort_versions",
]
