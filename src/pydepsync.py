"""pydepsync - detect imported third-party packages and add them to pyproject.toml

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import ConfigError, load_config, merge_args_and_config
from detection.engine import DetectEngine
from detection.errors import DetectionError
from manifest import pyproject


def run(args) -> int:
    """Run one detection pass and return the exit code."""
    logger = logging.getLogger(__name__)

    try:
        config = load_config(getattr(args, "CONFIG", None))
    except ConfigError as e:
        logging.error("%s", e)
        return ExitCodes.FILE_ERROR.value
    options = merge_args_and_config(args, config)

    if is_debug_enabled(logger):
        logger.debug(
            "Options merged",
            extra=extra_context(event="decision", component="cli", action="merge_args_and_config")
        )

    pyproject_path = args.PYPROJECT or os.path.join(args.path, Constants.PYPROJECT_TOML_FILE)
    try:
        project = pyproject.read(pyproject_path)
    except pyproject.ManifestError as e:
        logging.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    engine = DetectEngine(project, options)
    try:
        deps = engine.detect_dependencies(args.path)
    except DetectionError as e:
        logging.error("Dependency detection failed: %s", e)
        return ExitCodes.FILE_ERROR.value

    if not deps:
        logging.info("No new dependencies detected, nothing to do")
        return ExitCodes.SUCCESS.value

    if args.DRY_RUN:
        for dep in sorted(deps, key=lambda d: d.key):
            print(dep)
        return ExitCodes.SUCCESS.value

    try:
        pyproject.write(pyproject_path, project, deps)
    except pyproject.ManifestError as e:
        logging.error("Failed to write deps to %s: %s", pyproject_path, e)
        return ExitCodes.FILE_ERROR.value
    logging.info("Updated %s", pyproject_path)
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(getattr(args, "LOG_FILE", None))

    sys.exit(run(args))


if __name__ == "__main__":
    main()
