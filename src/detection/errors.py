"""Errors raised by the detection pipeline.

Scan and parse failures abort a run; resolver failures never reach callers.
"""


class DetectionError(Exception):
    """Base class for every error returned by ``detect_dependencies``."""


class FileFindingError(DetectionError):
    """The source tree could not be canonicalized or traversed."""


class FileReadingError(DetectionError):
    """A discovered source file could not be read."""


class ParsingError(DetectionError):
    """A source file is not valid Python syntax."""


class EvaluationError(DetectionError):
    """Reserved for candidate evaluation failures."""


class ResolverError(DetectionError):
    """Reserved; individual index failures are logged, not raised."""
