"""Parsing and formatting of dependency specifier strings."""

import re
from typing import Optional

from .models import Specifier

# name, [extras], operator + version, ; marker
_SPECIFIER_RE = re.compile(
    r"^([A-Za-z0-9\-_.]+)"
    r"(?:\[(.*?)\])?"
    r"(?:\s*(===|[~=<>!]={1,2}|[<>]|\^)\s*([\w\-.]+))?"
    r"\s*(?:;\s*(.+))?"
)


def parse_specifier(text: str) -> Optional[Specifier]:
    """Parse a dependency declaration.

    The match is permissive: anything after the recognised parts is ignored
    and the version grammar is not validated.

    Args:
        text: Declaration such as ``"Django[mysql]~=3.2; python_version > '3'"``

    Returns:
        Specifier, or None when ``text`` does not start with a package name.
    """
    m = _SPECIFIER_RE.match(text)
    if m is None:
        return None

    name, raw_extras, operator, version, markers = m.groups()
    extras = frozenset()
    if raw_extras is not None:
        extras = frozenset(e.strip() for e in raw_extras.split(","))

    version_spec = None
    if operator is not None and version is not None:
        version_spec = (operator, version)

    if markers is not None:
        markers = markers.strip()

    return Specifier(
        name=name,
        extras=extras,
        version_spec=version_spec,
        markers=markers,
    )


def format_specifier(spec: Specifier) -> str:
    """Serialize ``spec`` back into declaration form; the inverse of ``parse_specifier``."""
    return str(spec)
