"""
Logger Module
Centralized logging using Loguru
"""

import sys
from pathlib import Path
from loguru import logger as _logger
from typing import Optional


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{function}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {module}:{function} | {message}"


def setup_logger(
    level: str = "INFO",
    log_file: Optional[str] = "./logs/app.log",
    max_size: int = 10,
    backup_count: int = 5,
    console: bool = True,
    colorize: bool = True
) -> None:
    """Setup logger with console handler and an optional rotating file handler"""

    # Remove default handler
    _logger.remove()

    if console:
        _logger.add(sys.stdout, level=level, format=CONSOLE_FORMAT, colorize=colorize)

    if not log_file:
        return

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    _logger.add(
        log_file,
        level=level,
        format=FILE_FORMAT,
        rotation=f"{max_size} MB",
        retention=backup_count,
        encoding="utf-8"
    )


# Export logger instance
logger = _logger
