"""Dependency detection pipeline.

finder -> import extractor -> top-level names -> evaluator -> resolver.
Scanning and parsing are sequential and fail fast; resolution runs one task
per candidate and tolerates individual failures.
"""
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from common.logging_utils import extra_context, is_debug_enabled
from manifest.pyproject import PyProject
from registry.pypi.resolver import IndexResolver, PackageIndexResolver
from versioning.models import Specifier

from .errors import FileReadingError, ParsingError
from .evaluator import CandidateEvaluator, DependencyEvaluator
from .finder import SourceFileFinder
from .imports import AstImportExtractor, ImportExtractor, top_level_name

logger = logging.getLogger(__name__)


@dataclass
class EngineOptions:
    """Run-time knobs for ``DetectEngine``."""
    exclude_dirs: List[str] = field(default_factory=list)
    extra_indexes: List[str] = field(default_factory=list)
    preferred_index: Optional[str] = None
    extras_to_remap: Dict[str, str] = field(default_factory=dict)


class DetectEngine:
    """Detects undeclared third-party dependencies of a source tree.

    Stages are injectable so tests can swap any of them for a double.
    """

    def __init__(
        self,
        pyproject: PyProject,
        options: Optional[EngineOptions] = None,
        *,
        extractor: Optional[ImportExtractor] = None,
        evaluator: Optional[CandidateEvaluator] = None,
        resolver: Optional[IndexResolver] = None,
        max_workers: Optional[int] = None,
    ):
        options = options or EngineOptions()
        self.pyproject = pyproject
        self.finder = SourceFileFinder(options.exclude_dirs)
        self.extractor = extractor or AstImportExtractor()
        self.evaluator = evaluator or DependencyEvaluator(options.extras_to_remap)
        self.resolver = resolver or PackageIndexResolver(
            options.extra_indexes, options.preferred_index
        )
        self.max_workers = max_workers

    def collect_candidates(self, path: os.PathLike | str) -> Set[str]:
        """Top-level module names imported anywhere under ``path``.

        Raises:
            FileFindingError, FileReadingError, ParsingError
        """
        candidates: Set[str] = set()
        for file in self.finder.find_files(path):
            # Raw bytes: the parser applies the BOM or coding declaration itself.
            try:
                with open(file, "rb") as fh:
                    contents = fh.read()
            except OSError as exc:
                raise FileReadingError(f"Problem opening file {file}: {exc}") from exc

            try:
                imports = self.extractor.extract(contents)
            except ParsingError as exc:
                raise ParsingError(f"Problem extracting deps for {file}: {exc}") from exc

            candidates.update(top_level_name(i) for i in imports)
        return candidates

    def resolve_all(self, deps: Set[Specifier]) -> Set[Specifier]:
        """Resolve every dependency concurrently; failed tasks are dropped."""
        if not deps:
            return set()
        resolved: Set[Specifier] = set()
        ordered = sorted(deps, key=lambda d: d.key)
        with ThreadPoolExecutor(max_workers=self.max_workers or len(ordered)) as pool:
            futures = {dep: pool.submit(self.resolver.resolve, dep) for dep in ordered}
            for dep, future in futures.items():
                try:
                    resolved.add(future.result())
                except Exception as exc:  # pylint: disable=broad-exception-caught
                    logger.error("Resolving %s failed, leaving it out: %s", dep.name, exc)
        return resolved

    def detect_dependencies(self, path: os.PathLike | str) -> Set[Specifier]:
        """Detect new dependencies of the tree at ``path``.

        Raises:
            DetectionError: any scan or parse failure; no partial result.
        """
        logger.info("Reading your code...")
        logger.info("Parsing imports...")
        candidates = self.collect_candidates(path)
        logger.debug("Candidates: %s", ",".join(sorted(candidates)))

        local_packages = self.finder.local_package_names(path)

        logger.info("Evaluating candidates...")
        deps = self.evaluator.evaluate(candidates, self.pyproject.all_deps(), local_packages)

        logger.info("Resolving packages...")
        resolved = self.resolve_all(deps)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved deps: %s",
                ",".join(sorted(str(d) for d in resolved)),
                extra=extra_context(
                    event="function_exit",
                    component="engine",
                    action="detect_dependencies",
                    count=len(resolved),
                )
            )
        return resolved
