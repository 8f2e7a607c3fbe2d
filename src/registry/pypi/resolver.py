"""Resolve detected packages to their latest version on configured indexes."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from packaging.utils import canonicalize_name

from constants import Constants
from common.http_client import robust_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from versioning.compare import latest_version
from versioning.models import Specifier

from .index_parser import IndexResponseError, parse_index_response

logger = logging.getLogger(__name__)


class IndexLookupError(Exception):
    """One index could not answer for one package."""


class IndexResolver(ABC):
    """Turns an unconstrained specifier into a version-constrained one."""

    @abstractmethod
    def resolve(self, spec: Specifier) -> Specifier:
        """Return ``spec`` constrained to a resolved version, or ``spec`` unchanged."""


class PackageIndexResolver(IndexResolver):
    """Queries indexes in order and pins the first version found.

    Order: preferred index (if any), the default public index, then extra
    indexes in the order given. The first index that yields a version wins;
    later indexes are not consulted.
    """

    def __init__(
        self,
        extra_indexes: Iterable[str] = (),
        preferred_index: Optional[str] = None,
        default_index: str = Constants.DEFAULT_INDEX_URL,
    ):
        ordered = [preferred_index] if preferred_index else []
        ordered.append(default_index)
        ordered.extend(extra_indexes)
        self._indexes: Tuple[str, ...] = tuple(i.rstrip("/") for i in ordered)

    @property
    def indexes(self) -> Tuple[str, ...]:
        """Index base URLs in query order."""
        return self._indexes

    @staticmethod
    def project_url(index: str, name: str) -> str:
        """URL of ``name``'s page on ``index``.

        A ``.../pypi`` base is treated as the PyPI JSON API root; anything else
        is a simple repository.
        """
        project = canonicalize_name(name)
        if index.endswith("/pypi"):
            return f"{index}/{project}/json"
        return f"{index}/{project}/"

    def fetch_candidates(self, spec: Specifier, index: str) -> List[str]:
        """Fetch the versions ``index`` publishes for ``spec``.

        Raises:
            IndexLookupError: on transport errors, non-200 answers or bodies
                that cannot be parsed.
        """
        url = self.project_url(index, spec.name)
        status_code, headers, text = robust_get(
            url, headers={"Accept": Constants.INDEX_ACCEPT_HEADER}
        )
        if status_code == 0:
            raise IndexLookupError(text)
        if status_code != 200:
            raise IndexLookupError(f"HTTP {status_code} from {safe_url(url)}")

        content_type = {k.lower(): v for k, v in headers.items()}.get("content-type", "")
        try:
            return parse_index_response(spec.name, text, content_type)
        except IndexResponseError as exc:
            raise IndexLookupError(str(exc)) from exc

    def pick(self, candidates: List[str]) -> Optional[str]:
        """Select the newest of ``candidates``."""
        return latest_version(candidates)

    def resolve_on_index(self, spec: Specifier, index: str) -> Optional[Specifier]:
        """Resolve ``spec`` against a single index, or None if it has no answer."""
        try:
            candidates = self.fetch_candidates(spec, index)
        except IndexLookupError as exc:
            logger.warning("Problem resolving package %s on index %s.", spec.name, index)
            logger.debug("Error %s", exc)
            return None

        version = self.pick(candidates)
        if version is None:
            logger.warning("Could not resolve package %s on index: %s", spec.name, index)
            return None

        if is_debug_enabled(logger):
            logger.debug(
                "Found version: %s for %s",
                version,
                spec.name,
                extra=extra_context(
                    event="resolve",
                    component="resolver",
                    outcome="success",
                    package=spec.name,
                    index=safe_url(index),
                    count=len(candidates),
                )
            )
        return spec.with_version(Constants.COMPATIBLE_RELEASE_OPERATOR, version)

    def resolve(self, spec: Specifier) -> Specifier:
        for index in self._indexes:
            resolved = self.resolve_on_index(spec, index)
            if resolved is not None:
                return resolved
        return spec
