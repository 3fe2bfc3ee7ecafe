"""
Logging setup for condfmt
The library only creates module loggers; handlers are attached by the host
application through setup_logging().
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from condfmt.config import Config

LOG_FORMAT = '[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class CondfmtLogger:
    """Centralized logger for condfmt"""

    _instance = None
    _loggers = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, 'initialized'):
            self.initialized = False
            self.log_dir = None
            self.log_level = logging.WARNING
            self.handlers = []

    def setup(self, log_level: Optional[str] = None, log_dir: Optional[str] = None):
        """
        Attach handlers to the 'condfmt' logger

        Args:
            log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL),
                defaults to Config.LOG_LEVEL
            log_dir: Optional directory for a rotating log file
        """
        if self.initialized:
            return

        self.log_dir = log_dir
        self.log_level = getattr(logging, (log_level or Config.LOG_LEVEL).upper(), logging.WARNING)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(formatter)
        self.handlers.append(console_handler)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, 'condfmt.log'),
                maxBytes=5 * 1024 * 1024,  # 5MB
                backupCount=3
            )
            file_handler.setLevel(logging.DEBUG)  # Always log DEBUG to file
            file_handler.setFormatter(formatter)
            self.handlers.append(file_handler)

        package_logger = logging.getLogger('condfmt')
        package_logger.setLevel(logging.DEBUG if log_dir else self.log_level)
        for handler in self.handlers:
            package_logger.addHandler(handler)

        self.initialized = True

    def reset(self):
        """Detach handlers added by setup()"""
        package_logger = logging.getLogger('condfmt')
        for handler in self.handlers:
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.setLevel(logging.NOTSET)
        self.handlers = []
        self._loggers.clear()
        self.initialized = False

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get or create a logger for a specific module

        Args:
            name: Logger name (usually __name__ of the module)

        Returns:
            Logger instance
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)

        return self._loggers[name]


# Global instance
_logger_instance = CondfmtLogger()


def setup_logging(log_level: Optional[str] = None, log_dir: Optional[str] = None):
    """
    Setup logging for condfmt

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Optional directory for a rotating log file
    """
    _logger_instance.setup(log_level, log_dir)


def reset_logging():
    """Remove handlers installed by setup_logging()"""
    _logger_instance.reset()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance

    Example:
        logger = get_logger(__name__)
        logger.debug("Compiled template")
    """
    return _logger_instance.get_logger(name)
