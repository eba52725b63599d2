"""Shared configuration, logging and error types."""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .errors import (
    MorphError,
    TooShortSequence,
    InvalidOrder,
    OrderingViolation,
    ParameterMismatch,
    UndefinedParameter,
    IndexOutOfRange,
)
from .logging import JsonFormatter, get_logger, setup_logging

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Logging
    "JsonFormatter",
    "get_logger",
    "setup_logging",
    # Errors
    "MorphError",
    "TooShortSequence",
    "InvalidOrder",
    "OrderingViolation",
    "ParameterMismatch",
    "UndefinedParameter",
    "IndexOutOfRange",
]
