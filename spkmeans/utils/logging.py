"""Logging configuration."""

import logging
import sys
from typing import Optional

# Level for loggers created without an explicit one
_default_level = 'INFO'


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get configured logger.
    
    Args:
        name: Logger name
        level: Log level (the level set by set_level when None)
        
    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        # Already emitted here; the root handler would print it again
        logger.propagate = False
    
    logger.setLevel(getattr(logging, (level or _default_level).upper()))
    return logger


def set_level(level: str) -> None:
    """Apply a log level to existing and future spkmeans loggers."""
    global _default_level
    _default_level = level
    
    numeric = getattr(logging, level.upper())
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if name.startswith('spkmeans') and isinstance(logger, logging.Logger):
            logger.setLevel(numeric)
