"""
Utility modules for the command console.
"""

from .logger import LoggerMixin, get_logger, set_default_level, setup_logging
from .validation import ValidationUtils, ValidationResult
from .monitoring import Monitoring
from .error_handler import ErrorHandler

__all__ = [
    "LoggerMixin",
    "get_logger",
    "set_default_level",
    "setup_logging",
    "ValidationUtils",
    "ValidationResult",
    "Monitoring",
    "ErrorHandler",
]
