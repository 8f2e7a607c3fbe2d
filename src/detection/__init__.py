"""Source scanning, import extraction and candidate evaluation."""

from .errors import (
    DetectionError,
    FileFindingError,
    FileReadingError,
    ParsingError,
    EvaluationError,
    ResolverError,
)
from .finder import SourceFileFinder
from .imports import ImportExtractor, AstImportExtractor, extract_imports, top_level_name
from .evaluator import CandidateEvaluator, DependencyEvaluator
from .engine import DetectEngine, EngineOptions

__all__ = [
    "DetectionError",
    "FileFindingError",
    "FileReadingError",
    "ParsingError",
    "EvaluationError",
    "ResolverError",
    "SourceFileFinder",
    "ImportExtractor",
    "AstImportExtractor",
    "extract_imports",
    "top_level_name",
    "CandidateEvaluator",
    "DependencyEvaluator",
    "DetectEngine",
    "EngineOptions",
]
