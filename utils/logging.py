"""U6 driver logging utilities."""

import logging
import sys
from typing import Optional, Union


# Module-level logger
_logger: Optional[logging.Logger] = None


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for the U6 driver.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to
        log_format: Optional custom log format string

    Returns:
        Configured logger instance
    """
    global _logger

    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logger = logging.getLogger("u6hal")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Get the U6 driver logger.

    Returns:
        Logger instance (creates default if not initialized)
    """
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger


def log_request(
    io_type: int,
    channel: int,
    value: Union[int, float] = 0,
    direction: str = "TX",
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a single driver request or result.

    Args:
        io_type: IO kind code (IOType or raw int)
        channel: Channel number or special channel code
        value: Value sent or received
        direction: "TX" for requests, "RX" for results
        logger: Optional logger instance (uses default if not provided)
    """
    if logger is None:
        logger = get_logger()

    name = getattr(io_type, "name", str(int(io_type)))
    logger.debug(f"{direction}: io={name} ch={int(channel)} value={value!r}")
