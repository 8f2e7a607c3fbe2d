"""Source tree discovery: Python files and locally defined package names."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Set

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .errors import FileFindingError

logger = logging.getLogger(__name__)


class SourceFileFinder:
    """Walks a source tree while pruning excluded directories.

    The default exclusions are always applied; ``exclude_dirs`` extends them.
    """

    def __init__(self, exclude_dirs: Iterable[str] = ()):
        self.excluded_dirs = frozenset(Constants.DEFAULT_EXCLUDE_DIRS) | frozenset(exclude_dirs)

    def _walk(self, root: Path) -> Iterator[Path]:
        """Yield every directory and file below ``root`` (root excluded)."""

        def _raise(err: OSError) -> None:
            raise err

        for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=_raise):
            # Prune in place so os.walk never descends into excluded dirs.
            dirnames[:] = sorted(d for d in dirnames if d not in self.excluded_dirs)
            base = Path(dirpath)
            for d in dirnames:
                yield base / d
            for f in sorted(filenames):
                yield base / f

    def _canonical_root(self, start_path: os.PathLike | str) -> Path:
        try:
            root = Path(start_path).resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise FileFindingError(f"Cannot resolve source root {start_path}: {exc}") from exc
        if not root.is_dir():
            raise FileFindingError(f"Source root is not a directory: {root}")
        return root

    def find_files(self, start_path: os.PathLike | str) -> List[Path]:
        """Return every ``.py`` file below ``start_path``.

        Raises:
            FileFindingError: when the root cannot be resolved or traversal fails.
        """
        root = self._canonical_root(start_path)
        try:
            files = [
                p for p in self._walk(root)
                if p.suffix == Constants.SOURCE_FILE_SUFFIX and p.is_file()
            ]
        except OSError as exc:
            raise FileFindingError(f"Problem walking {root}: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "Discovered source files",
                extra=extra_context(
                    event="discover",
                    component="finder",
                    action="find_files",
                    target=str(root),
                    count=len(files),
                )
            )
        return files

    def find_local_packages(self, start_path: os.PathLike | str) -> List[Path]:
        """Return the canonical root plus every directory and file below it.

        A local package can be announced by a directory (``pkg/__init__.py``)
        or by a bare module file, so both are reported.
        """
        root = self._canonical_root(start_path)
        try:
            return [root, *self._walk(root)]
        except OSError as exc:
            raise FileFindingError(f"Problem walking {root}: {exc}") from exc

    def local_package_names(self, start_path: os.PathLike | str) -> Set[str]:
        """File stems of everything ``find_local_packages`` reports."""
        names = {p.stem for p in self.find_local_packages(start_path) if p.stem}
        if is_debug_enabled(logger):
            logger.debug("Found local packages: %s", ",".join(sorted(names)))
        return names
