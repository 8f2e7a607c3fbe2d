"""pyproject.toml reader and writer.

Reads the declared dependencies (``[project].dependencies``,
``[project.optional-dependencies]`` and ``[dependency-groups]``) and writes
newly detected specifiers into ``[project].dependencies`` while leaving the
rest of the document, comments included, untouched.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Set

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import Array
from tomlkit.toml_document import TOMLDocument

from versioning.models import Specifier
from versioning.parser import parse_specifier

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """pyproject.toml could not be read, parsed or written."""


@dataclass
class PyProject:
    """Declared dependencies plus the parsed document they came from."""
    deps: List[Specifier] = field(default_factory=list)
    optional_deps: Set[Specifier] = field(default_factory=set)
    document: TOMLDocument = field(default_factory=tomlkit.document)

    def all_deps(self) -> Set[Specifier]:
        """Required and optional/grouped dependencies, deduplicated by name."""
        return set(self.deps) | self.optional_deps


def _parse_entries(values: Any, source: str) -> List[Specifier]:
    specs: List[Specifier] = []
    if not isinstance(values, list):
        return specs
    for value in values:
        # dependency-groups may also hold {include-group = "..."} tables
        if not isinstance(value, str):
            continue
        spec = parse_specifier(str(value))
        if spec is None:
            logger.warning("Ignoring unparsable dependency %r in %s", str(value), source)
            continue
        specs.append(spec)
    return specs


def _table(container: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = container.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(f"'{key}' must be a table, got {type(value).__name__}")
    return value


def loads(content: str) -> PyProject:
    """Parse pyproject.toml text.

    Raises:
        ManifestError: when ``content`` is not valid TOML.
    """
    try:
        doc = tomlkit.parse(content)
    except TOMLKitError as exc:
        raise ManifestError(f"Invalid TOML: {exc}") from exc

    project = _table(doc, "project")
    deps = _parse_entries(project.get("dependencies"), "project.dependencies")

    optional: Set[Specifier] = set()
    for group, values in _table(project, "optional-dependencies").items():
        optional.update(_parse_entries(values, f"project.optional-dependencies.{group}"))
    for group, values in _table(doc, "dependency-groups").items():
        optional.update(_parse_entries(values, f"dependency-groups.{group}"))

    logger.debug("Found existing deps: %s", ",".join(str(d) for d in deps))
    return PyProject(deps=deps, optional_deps=optional, document=doc)


def read(path: os.PathLike | str) -> PyProject:
    """Read and parse the pyproject.toml at ``path``.

    Raises:
        ManifestError: when the file is missing, unreadable or invalid.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            content = fh.read()
    except OSError as exc:
        raise ManifestError(f"Cannot read {path}: {exc}") from exc
    return loads(content)


def render(pyproject: PyProject, new_deps: Iterable[Specifier]) -> str:
    """Return the document text with ``new_deps`` merged into ``[project].dependencies``.

    New entries come first, sorted by name. Existing entries follow exactly as
    written, comments included.
    """
    doc = pyproject.document
    if "project" not in doc:
        doc["project"] = tomlkit.table()
    project = doc["project"]

    existing = project.get("dependencies")
    if isinstance(existing, Array) and len(existing) > 0:
        arr = existing
    else:
        arr = tomlkit.array()
        arr.multiline(True)
        project["dependencies"] = arr

    for pos, dep in enumerate(sorted(new_deps, key=lambda d: d.key)):
        logger.info("Adding: %s", dep)
        arr.insert(pos, str(dep))
    return tomlkit.dumps(doc)


def write(path: os.PathLike | str, pyproject: PyProject, new_deps: Iterable[Specifier]) -> None:
    """Write ``new_deps`` into the pyproject.toml at ``path``.

    Raises:
        ManifestError: when the file cannot be written.
    """
    content = render(pyproject, new_deps)
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(content)
    except OSError as exc:
        raise ManifestError(f"Cannot write {path}: {exc}") from exc
