"""
Logging setup for the inkwell CLI.

Library code logs through loguru's ``logger`` directly; only the CLI calls
setup_logging(). Both sinks keep inkwell's own records and drop those of
other packages, so a DEBUG level shows journal activity rather than
driver chatter.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <7}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {name}:{line} | {message}"
LOG_FILENAME = "inkwell.log"


def _from_inkwell(record) -> bool:
    return record["name"].split(".", 1)[0] == "inkwell"


def setup_logging(
    level: str = "WARNING",
    log_file: str | Path | None = None,
    rotation: str = "5 MB",
    retention: int = 3,
) -> Path | None:
    """
    Route inkwell's log records to stderr and, optionally, a rotating file.

    Args:
        level: Minimum level for both sinks (DEBUG, INFO, WARNING, ERROR).
        log_file: A file path, or a directory to hold ``inkwell.log``.
        rotation: Size at which the log file rotates.
        retention: Number of rotated files to keep.

    Returns:
        The log file path, or None when logging to stderr only.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, filter=_from_inkwell)

    if not log_file:
        return None

    path = Path(log_file).expanduser()
    if path.is_dir():
        path = path / LOG_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(path),
        level=level,
        format=FILE_FORMAT,
        filter=_from_inkwell,
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
    )
    return path
