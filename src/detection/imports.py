"""Import statement extraction from Python source."""
from __future__ import annotations

import ast
from abc import ABC, abstractmethod
from typing import List, Union

from .errors import ParsingError


class ImportExtractor(ABC):
    """Turns the text of one source file into the module names it imports."""

    @abstractmethod
    def extract(self, source_text: Union[str, bytes]) -> List[str]:
        """Return imported module names in document order.

        ``source_text`` may be raw file bytes, in which case a UTF-8 BOM or a
        PEP 263 coding declaration decides the encoding.

        Raises:
            ParsingError: when ``source_text`` cannot be decoded or is not valid syntax.
        """


class _ImportCollector(ast.NodeVisitor):
    def __init__(self) -> None:
        self.names: List[str] = []

    def visit_Import(self, node: ast.Import) -> None:  # noqa: N802
        self.names.extend(alias.name for alias in node.names)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:  # noqa: N802
        # Relative imports always point at local code.
        if node.level == 0 and node.module:
            self.names.append(node.module)


class AstImportExtractor(ImportExtractor):
    """Extractor backed by the standard library ``ast`` parser.

    Visits every ``import`` and ``from ... import`` in the module, including
    ones nested in conditionals, functions and classes.
    """

    def extract(self, source_text: Union[str, bytes]) -> List[str]:
        try:
            tree = ast.parse(source_text, mode="exec")
        except (SyntaxError, ValueError) as exc:
            raise ParsingError(f"Invalid Python source: {exc}") from exc
        collector = _ImportCollector()
        collector.visit(tree)
        return collector.names


def extract_imports(source_text: Union[str, bytes]) -> List[str]:
    """Module-level convenience wrapper around ``AstImportExtractor``."""
    return AstImportExtractor().extract(source_text)


def top_level_name(module_name: str) -> str:
    """``"pkg.sub.mod"`` -> ``"pkg"``; only distribution roots matter."""
    return module_name.split(".", 1)[0]
