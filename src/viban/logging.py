"""Logging configuration for viban."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "viban"


def setup_logging(verbose: int = 0, log_file: Path | None = None, mode: str = "web") -> None:
    """Configure logging based on verbosity level and optional file output.

    Log records always go to stderr, never stdout: in MCP mode stdout
    carries the protocol stream.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
        mode: Adapter being started, included in the startup banner
    """
    if verbose == 0 and log_file is None:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Drop handlers from an earlier call (tests, repeated startup)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if verbose > 0:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("=" * 60)
    logger.info(
        "viban starting | %s | mode=%s | level=%s",
        timestamp,
        mode,
        logging.getLevelName(level),
    )
    logger.info("=" * 60)
