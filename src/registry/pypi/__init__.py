"""Package index support.

- index_parser.py: version extraction from simple-repository pages and JSON records
- resolver.py: ordered multi-index resolution of detected dependencies
"""

from .index_parser import IndexResponseError, parse_index_response
from .resolver import IndexLookupError, IndexResolver, PackageIndexResolver

__all__ = [
    "IndexResponseError",
    "parse_index_response",
    "IndexLookupError",
    "IndexResolver",
    "PackageIndexResolver",
]
