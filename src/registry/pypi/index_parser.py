"""Version extraction from package index responses.

Two response shapes are understood:

- listing documents, where versions are scraped from source distribution
  filenames (``<name>-<version>.tar.gz``): the PEP 503 HTML page (one anchor
  per file) and its PEP 691 JSON equivalent (a ``files`` array);
- a direct record exposing the current version, either ``info.version``
  (PyPI JSON API) or a top-level ``version`` field.

Listing versions are kept only when they consist of digits and dots, which
also drops pre-releases, dev and post releases. A record version is dropped
when ``packaging`` considers it a pre-release.
"""
from __future__ import annotations

import json
import re
import urllib.parse
from html.parser import HTMLParser
from typing import Any, Iterable, List, Optional

from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion, Version

SDIST_SUFFIX = ".tar.gz"

_PLAIN_VERSION_RE = re.compile(r"\d[\d.]*")


class IndexResponseError(ValueError):
    """The index answered with something that is not a usable document."""


class _AnchorCollector(HTMLParser):
    """Collects ``href`` values of every ``<a>`` element."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.hrefs: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag != "a":
            return
        for key, value in attrs:
            if key == "href" and value:
                self.hrefs.append(value)


def _sdist_pattern(name: str) -> re.Pattern:
    """Filename pattern for ``name`` with PEP 503 separator/case folding."""
    parts = canonicalize_name(name).split("-")
    name_re = r"[-_.]+".join(re.escape(p) for p in parts)
    return re.compile(rf"^{name_re}-(?P<version>.+?){re.escape(SDIST_SUFFIX)}$", re.IGNORECASE)


def _filename_from_href(href: str) -> str:
    path = urllib.parse.urlsplit(href).path
    return urllib.parse.unquote(path.rsplit("/", 1)[-1])


def versions_from_filenames(name: str, filenames: Iterable[str]) -> List[str]:
    """Scrape plain numeric versions out of sdist filenames for ``name``."""
    pattern = _sdist_pattern(name)
    versions = []
    for filename in filenames:
        m = pattern.match(filename)
        if not m:
            continue
        version = m.group("version")
        if _PLAIN_VERSION_RE.fullmatch(version):
            versions.append(version)
    return versions


def parse_html_listing(name: str, html: str) -> List[str]:
    """Versions listed on a PEP 503 project page."""
    collector = _AnchorCollector()
    collector.feed(html)
    collector.close()
    return versions_from_filenames(name, (_filename_from_href(h) for h in collector.hrefs))


def _is_stable(version: str) -> bool:
    try:
        return not Version(version).is_prerelease
    except InvalidVersion:
        return False


def parse_json_document(name: str, data: Any) -> List[str]:
    """Versions from a PEP 691 listing or a direct version record."""
    if not isinstance(data, dict):
        raise IndexResponseError("JSON document is not an object")

    files = data.get("files")
    if isinstance(files, list):
        filenames = [
            f.get("filename") for f in files
            if isinstance(f, dict) and isinstance(f.get("filename"), str)
        ]
        return versions_from_filenames(name, filenames)

    current: Optional[str] = None
    info = data.get("info")
    if isinstance(info, dict) and isinstance(info.get("version"), str):
        current = info["version"]
    elif isinstance(data.get("version"), str):
        current = data["version"]

    if current and _is_stable(current):
        return [current]
    return []


def parse_index_response(name: str, body: str, content_type: str = "") -> List[str]:
    """Dispatch on the response shape and return every usable version.

    Raises:
        IndexResponseError: when a JSON response cannot be decoded.
    """
    looks_json = "json" in (content_type or "").lower() or body.lstrip().startswith("{")
    if looks_json:
        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise IndexResponseError(f"Couldn't decode JSON: {exc}") from exc
        return parse_json_document(name, data)
    return parse_html_listing(name, body)
