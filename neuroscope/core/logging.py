"""
Logging configuration for NeuroScope service.
"""
import logging
import sys
from typing import Optional

from neuroscope.core.config import settings


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Setup application logging."""

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logger = logging.getLogger("neuroscope")
    logger.setLevel(getattr(logging, level.upper()))

    return logger


# Global logger instance
logger = setup_logging(settings.log_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance."""
    if name:
        return logging.getLogger(f"neuroscope.{name}")
    return logger
