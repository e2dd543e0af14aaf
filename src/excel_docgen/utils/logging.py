"""Logging configuration for the Excel documentation toolkit."""

import logging
import sys
from pathlib import Path
from typing import Optional
from loguru import logger
from .config import get_config


class InterceptHandler(logging.Handler):
    """Intercepts standard logging records and redirects to loguru."""

    def emit(self, record):
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging():
    """Setup logging configuration."""
    config = get_config()

    # Remove default loguru handler
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
               "<level>{message}</level>",
        level=config.log_level.upper(),
        colorize=True,
    )

    # Add file handler for persistent logging
    logger.add(
        str(Path(config.temp_dir) / "excel_docgen.log"),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} | {message}",
        level="DEBUG",
        rotation="10 MB",
        retention="10 days",
    )

    # Records logged without bind() still need a name for the formats above
    logger.configure(extra={"name": "excel_docgen"})

    # Intercept standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: Optional[str] = None):
    """Get a logger instance."""
    if name:
        return logger.bind(name=name)
    return logger


# Setup logging on import
setup_logging()
