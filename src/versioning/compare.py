"""Latest-version selection over plain version strings.

This is a heuristic comparator, not PEP 440 ordering: versions are split on
``.`` and compared segment by segment as integers. It is only ever fed
strings that already passed the index parser's filters.
"""

from functools import cmp_to_key
from typing import Iterable, Optional


def _cmp_newest_first(a: str, b: str) -> int:
    """Ordering that sorts the newer of two versions first."""
    for a_part, b_part in zip(a.split("."), b.split(".")):
        try:
            a_num, b_num = int(a_part), int(b_part)
        except ValueError:
            # Non-numeric segment: compare the whole strings instead.
            return (a < b) - (a > b)
        if a_num != b_num:
            return -1 if a_num > b_num else 1
    # Shared prefix ties; the longer (more specific) string wins.
    return len(b) - len(a)


def sort_versions(versions: Iterable[str]) -> list:
    """Return ``versions`` ordered newest first."""
    return sorted(versions, key=cmp_to_key(_cmp_newest_first))


def latest_version(versions: Iterable[str]) -> Optional[str]:
    """Pick the newest version, e.g. ``["1.2.0", "1.10.0", "1.9.5"] -> "1.10.0"``.

    Returns None for an empty input.
    """
    ordered = sort_versions(versions)
    return ordered[0] if ordered else None
