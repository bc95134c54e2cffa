import logging
import sys
from typing import Dict, Optional

from src.const import LOG_DATE_FORMAT, LOG_FORMAT, LIBRARY_LOG_LEVELS


class LoggingManager:
    """Manager for logging setup and logger retrieval."""

    _handler: Optional[logging.Handler] = None

    @classmethod
    def setup_logging(
        cls,
        level: str = "INFO",
        library_log_levels: Optional[Dict[str, str]] = None
    ) -> None:
        """Setup logging for the service.

        Calling it again replaces the handler installed by the previous call.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            library_log_levels: Per-library level overrides for noisy loggers
        """
        numeric_level = getattr(logging, level.upper(), logging.INFO)

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(numeric_level)

        root_logger = logging.getLogger()
        root_logger.setLevel(numeric_level)
        if cls._handler is not None:
            root_logger.removeHandler(cls._handler)
        root_logger.addHandler(console_handler)
        cls._handler = console_handler

        levels = library_log_levels if library_log_levels is not None else LIBRARY_LOG_LEVELS
        for logger_name, library_level in levels.items():
            logging.getLogger(logger_name).setLevel(
                getattr(logging, library_level.upper(), logging.WARNING)
            )

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name, typically __name__

        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)
