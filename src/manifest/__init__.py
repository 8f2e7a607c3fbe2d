"""Project manifest (pyproject.toml) access."""

from .pyproject import ManifestError, PyProject, loads, read, render, write

__all__ = ["ManifestError", "PyProject", "loads", "read", "render", "write"]
