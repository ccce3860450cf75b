"""
Custom exception classes for the snapshot ETL framework.

This module defines the root of the exception hierarchy. Every error carries a
human-readable message plus an optional context dictionary (file path, line
number, key, ...) so that a failed run can be diagnosed from the log alone.
"""

from typing import Optional, Dict, Any


class ETLBaseException(Exception):
    """Base exception class for all ETL system exceptions."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
    
    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ETLConfigurationError(ETLBaseException):
    """
    Exception raised when configuration loading or validation fails.
    
    This exception is raised when:
    - Configuration files are missing or invalid
    - Environment configuration is malformed
    - Required configuration values are missing
    """
    pass


class ETLValidationError(ETLBaseException):
    """
    Exception raised when data validation fails.
    
    This exception is raised when:
    - Input file headers do not match the expected schema
    - Input rows are malformed
    - Configuration values fail type validation
    """
    pass


class ETLProcessingError(ETLBaseException):
    """
    Exception raised when a processing stage fails.
    
    This exception is raised when:
    - Required input snapshots cannot be resolved
    - Referential integrity checks fail during enrichment
    - Output files cannot be written
    """
    pass
