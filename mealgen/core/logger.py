"""Logger configuration for mealgen.

Pipeline modules log through loguru with keyword context
(``logger.info("stage: Message", key=value)``); the sinks configured here
render that context via ``{extra}``.
"""

import sys
from pathlib import Path

from loguru import logger

from mealgen.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> {extra}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} {extra}"


def setup_logger(
    level: str | None = None,
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool | None = None,
) -> None:
    """Replace loguru's default handler with mealgen's console and file sinks.

    Args:
        level: Logging level; defaults to settings.log_level
        log_file: Optional log file path; defaults to settings.log_file.
            Empty means console only.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
        serialize: Write the file sink as JSON lines, one record per line;
            defaults to settings.log_serialize
    """
    level = level or settings.log_level
    log_file = settings.log_file if log_file is None else log_file
    serialize = settings.log_serialize if serialize is None else serialize

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=serialize,
            encoding="utf-8",
            diagnose=False,
        )

    logger.debug("logger: Sinks configured", level=level, log_file=log_file or None, serialize=serialize)
