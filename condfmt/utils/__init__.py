"""Utility modules for condfmt"""

from .logger import get_logger, reset_logging, setup_logging

__all__ = [
    'setup_logging',
    'reset_logging',
    'get_logger',
]
