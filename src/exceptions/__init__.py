"""
Custom exceptions for the snapshot ETL framework.

This module provides domain-specific exception classes for error handling
and debugging throughout the system.
"""

from .custom_exceptions import (
    ETLBaseException,
    ETLConfigurationError,
    ETLValidationError,
    ETLProcessingError,
)

__all__ = [
    "ETLBaseException",
    "ETLConfigurationError",
    "ETLValidationError",
    "ETLProcessingError",
]
