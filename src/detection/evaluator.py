"""Candidate evaluation: reduce raw import names to new external dependencies."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import AbstractSet, Iterable, Mapping, Optional, Set

from versioning.models import Specifier
from versioning.parser import parse_specifier

from .irregulars import remap_table
from .stdlib import STDLIB_MODULES

logger = logging.getLogger(__name__)


class CandidateEvaluator(ABC):
    """Filters and remaps candidate module names."""

    @abstractmethod
    def evaluate(
        self,
        candidates: Iterable[str],
        existing: AbstractSet[Specifier],
        local_packages: AbstractSet[str],
    ) -> Set[Specifier]:
        """Return unconstrained specifiers for candidates that are new external deps."""


class DependencyEvaluator(CandidateEvaluator):
    """Default evaluator over the stdlib set and the irregulars remap table.

    The order of the filters is fixed:

    1. drop stdlib module names
    2. drop locally defined packages
    3. remap import names to distribution names (overrides win)
    4. drop names already declared in the manifest

    The declared-dependency filter must come after remapping: ``rest_framework``
    only matches a declared ``djangorestframework`` once it has been remapped.
    """

    def __init__(
        self,
        extra_remaps: Optional[Mapping[str, str]] = None,
        stdlib_modules: AbstractSet[str] = STDLIB_MODULES,
    ):
        self.stdlib_modules = stdlib_modules
        self.irregulars_to_remap = remap_table(extra_remaps)

    def evaluate(
        self,
        candidates: Iterable[str],
        existing: AbstractSet[Specifier],
        local_packages: AbstractSet[str],
    ) -> Set[Specifier]:
        deps: Set[Specifier] = set()
        for candidate in candidates:
            if candidate in self.stdlib_modules:
                continue
            if candidate in local_packages:
                continue
            name = self.irregulars_to_remap.get(candidate, candidate)
            spec = parse_specifier(name)
            if spec is None:
                logger.warning("Skipping candidate with unusable name: %r", name)
                continue
            if spec in existing:
                continue
            deps.add(spec)
        return deps
